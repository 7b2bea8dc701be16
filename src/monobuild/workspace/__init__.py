"""Monorepo I/O: package discovery, manifests and build execution."""

from monobuild.workspace.dependencies import calculate_dependencies
from monobuild.workspace.discovery import find_package_dirs
from monobuild.workspace.manifest import ManifestError, PackageManifest, read_manifest
from monobuild.workspace.runner import (
    BuildReport,
    build_command,
    build_packages,
    detect_runtime,
)

__all__ = [
    "BuildReport",
    "ManifestError",
    "PackageManifest",
    "build_command",
    "build_packages",
    "calculate_dependencies",
    "detect_runtime",
    "find_package_dirs",
    "read_manifest",
]
