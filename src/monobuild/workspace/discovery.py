"""Locate package directories inside a monorepo."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

log = logging.getLogger(__name__)

DEFAULT_CONTAINERS: tuple[str, ...] = ("packages",)

_IGNORED = frozenset({"node_modules"})


def find_package_dirs(
    root: Path | str,
    containers: Iterable[str] = DEFAULT_CONTAINERS,
) -> list[str]:
    """Return the package identifiers found under *root*.

    Each immediate, non-hidden sub-directory of every container is a
    package.  Identifiers are POSIX paths relative to *root*, e.g.
    ``packages/core``, sorted.  Directories without a ``package.json``
    are included on purpose: the build step warns about them and moves
    on, but they still take part in the graph.
    """
    root = Path(root)
    found: set[str] = set()
    for container in containers:
        base = root / container
        if not base.is_dir():
            log.warning("Package container %s does not exist, skipping", base)
            continue
        for entry in base.iterdir():
            if not entry.is_dir():
                continue
            if entry.name.startswith(".") or entry.name in _IGNORED:
                continue
            found.add(entry.relative_to(root).as_posix())
    log.debug("Discovered %d package director(ies)", len(found))
    return sorted(found)
