"""Reading ``package.json`` manifests.

Only the handful of fields the build cares about are extracted: the
package name, its scripts, and the names it depends on.  Versions and
ranges are ignored; resolving them is the package manager's job.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path

from monobuild.errors import MonobuildError

MANIFEST_NAME = "package.json"

DEFAULT_DEPENDENCY_FIELDS: tuple[str, ...] = (
    "dependencies",
    "devDependencies",
    "peerDependencies",
    "optionalDependencies",
)


class ManifestError(MonobuildError):
    """Raised when a package manifest is missing or cannot be parsed."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


@dataclass(slots=True)
class PackageManifest:
    """The build-relevant subset of one ``package.json``."""
    directory: Path
    name: str
    scripts: dict[str, str] = field(default_factory=dict)
    dependencies: frozenset[str] = frozenset()

    @property
    def has_build_script(self) -> bool:
        return bool(self.scripts.get("build"))


def read_manifest(
    directory: Path | str,
    dependency_fields: tuple[str, ...] = DEFAULT_DEPENDENCY_FIELDS,
) -> PackageManifest:
    """Load ``<directory>/package.json``.

    Raises ManifestError if the file is missing, unreadable, not UTF-8,
    not JSON, or not a JSON object.  A manifest without ``name`` is named after
    its directory.  Malformed ``scripts`` or dependency sections are
    treated as empty.
    """
    directory = Path(directory)
    path = directory / MANIFEST_NAME
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ManifestError(path, exc.strerror or str(exc)) from exc
    except UnicodeDecodeError as exc:
        raise ManifestError(path, f"not valid UTF-8 (byte {exc.start})") from exc
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ManifestError(path, f"invalid JSON ({exc.msg} at line {exc.lineno})") from exc
    if not isinstance(data, dict):
        raise ManifestError(path, "top-level value is not an object")

    name = data.get("name")
    if not isinstance(name, str) or not name:
        name = directory.name

    raw_scripts = data.get("scripts")
    scripts: dict[str, str] = {}
    if isinstance(raw_scripts, dict):
        scripts = {k: v for k, v in raw_scripts.items() if isinstance(v, str)}

    deps: set[str] = set()
    for section in dependency_fields:
        entries = data.get(section)
        if isinstance(entries, dict):
            deps.update(k for k in entries if isinstance(k, str))

    return PackageManifest(
        directory=directory,
        name=name,
        scripts=scripts,
        dependencies=frozenset(deps),
    )
