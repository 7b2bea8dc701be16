"""Extract raw dependency declarations for every package directory.

Manifests name their dependencies by npm package name, while the graph
is keyed by directory.  This module bridges the two: a dependency that
names a workspace package is rewritten to that package's directory,
anything else is passed through untouched for the graph builder to
drop as external.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from monobuild.workspace.manifest import (
    DEFAULT_DEPENDENCY_FIELDS,
    ManifestError,
    PackageManifest,
    read_manifest,
)

log = logging.getLogger(__name__)


def calculate_dependencies(
    root: Path | str,
    package_dirs: Iterable[str],
    dependency_fields: tuple[str, ...] = DEFAULT_DEPENDENCY_FIELDS,
) -> dict[str, list[str]]:
    """Map each package directory to its declared dependencies.

    A package whose manifest cannot be read gets an empty list and a
    warning; it stays in the result so it still appears in the build
    order.
    """
    root = Path(root)
    manifests: dict[str, PackageManifest | None] = {}
    dir_by_name: dict[str, str] = {}

    for pkg_dir in sorted(package_dirs):
        try:
            manifest = read_manifest(root / pkg_dir, dependency_fields)
        except ManifestError as exc:
            log.warning("Cannot read dependencies of %s: %s", pkg_dir, exc.reason)
            manifests[pkg_dir] = None
            continue
        manifests[pkg_dir] = manifest
        if manifest.name in dir_by_name:
            log.warning(
                "Package name %r is declared by both %s and %s; using %s",
                manifest.name, dir_by_name[manifest.name], pkg_dir,
                dir_by_name[manifest.name],
            )
            continue
        dir_by_name[manifest.name] = pkg_dir

    result: dict[str, list[str]] = {}
    for pkg_dir, manifest in manifests.items():
        if manifest is None:
            result[pkg_dir] = []
            continue
        result[pkg_dir] = sorted(
            dir_by_name.get(dep, dep) for dep in manifest.dependencies
        )
    return result
