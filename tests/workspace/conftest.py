"""Shared fixtures for workspace (discovery, manifests, builds) tests."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Callable

import pytest

MakePackage = Callable[..., Path]


@pytest.fixture
def make_package(tmp_path: Path) -> MakePackage:
    """Factory writing ``<tmp_path>/<rel>/package.json``."""

    def _make(
        rel: str,
        name: str | None = None,
        dependencies: dict[str, str] | None = None,
        dev_dependencies: dict[str, str] | None = None,
        scripts: dict[str, str] | None = None,
    ) -> Path:
        pkg_dir = tmp_path / rel
        pkg_dir.mkdir(parents=True, exist_ok=True)
        data: dict = {"version": "1.0.0"}
        if name is not None:
            data["name"] = name
        if dependencies:
            data["dependencies"] = dependencies
        if dev_dependencies:
            data["devDependencies"] = dev_dependencies
        if scripts:
            data["scripts"] = scripts
        (pkg_dir / "package.json").write_text(json.dumps(data), encoding="utf-8")
        return pkg_dir

    return _make


@pytest.fixture
def monorepo(tmp_path: Path, make_package: MakePackage) -> Path:
    """
    packages/core   no deps, build script
    packages/utils  -> core, build script
    packages/cli    -> core, utils (dev), chalk (external), build script
    packages/docs   no build script
    """
    build = {"build": "tsc -b"}
    make_package("packages/core", "@acme/core", scripts=build)
    make_package(
        "packages/utils", "@acme/utils",
        dependencies={"@acme/core": "workspace:*", "lodash": "^4.17.0"},
        scripts=build,
    )
    make_package(
        "packages/cli", "@acme/cli",
        dependencies={"@acme/core": "workspace:*", "chalk": "^5.0.0"},
        dev_dependencies={"@acme/utils": "workspace:*"},
        scripts=build,
    )
    make_package("packages/docs", "@acme/docs", scripts={"lint": "eslint ."})
    return tmp_path
