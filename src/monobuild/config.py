"""Run settings, resolved from defaults, environment and CLI flags.

Environment variables (all optional):

    MONOBUILD_ROOT                repository root (default: cwd)
    MONOBUILD_PACKAGES            comma-separated container dirs
    MONOBUILD_DEPENDENCY_FIELDS   comma-separated package.json sections
    MONOBUILD_RUNTIME             auto | bun | npm
    MONOBUILD_DRY_RUN             true | false
    MONOBUILD_FAIL_FAST           true | false
    MONOBUILD_LOG_LEVEL           DEBUG | INFO | WARNING | ERROR
"""
from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

from monobuild.workspace.discovery import DEFAULT_CONTAINERS
from monobuild.workspace.manifest import DEFAULT_DEPENDENCY_FIELDS

ENV_PREFIX = "MONOBUILD_"


_TRUE = frozenset({"1", "true", "yes", "on"})
_FALSE = frozenset({"0", "false", "no", "off", ""})


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(ENV_PREFIX + name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"{ENV_PREFIX}{name} must be a boolean, got {raw!r}")


def _env_list(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    raw = os.getenv(ENV_PREFIX + name)
    if not raw:
        return default
    return tuple(item.strip() for item in raw.split(",") if item.strip())


@dataclass(frozen=True, slots=True)
class BuildSettings:
    root: Path = Path(".")
    containers: tuple[str, ...] = DEFAULT_CONTAINERS
    dependency_fields: tuple[str, ...] = DEFAULT_DEPENDENCY_FIELDS
    runtime: str = "auto"
    dry_run: bool = False
    fail_fast: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, **overrides: Any) -> BuildSettings:
        """Build settings from MONOBUILD_* variables.

        Keyword arguments whose value is not None win over the
        environment; unknown keywords raise TypeError.  A boolean
        variable that is not one of 1/0, true/false, yes/no, on/off
        raises ValueError.
        """
        settings = cls(
            root=Path(os.getenv(ENV_PREFIX + "ROOT", ".")),
            containers=_env_list("PACKAGES", DEFAULT_CONTAINERS),
            dependency_fields=_env_list("DEPENDENCY_FIELDS", DEFAULT_DEPENDENCY_FIELDS),
            runtime=os.getenv(ENV_PREFIX + "RUNTIME", "auto").strip().lower(),
            dry_run=_env_bool("DRY_RUN", False),
            fail_fast=_env_bool("FAIL_FAST", False),
            log_level=os.getenv(ENV_PREFIX + "LOG_LEVEL", "INFO").strip().upper(),
        )
        known = {f.name for f in fields(cls)}
        unknown = set(overrides) - known
        if unknown:
            raise TypeError(f"Unknown setting(s): {', '.join(sorted(unknown))}")
        given = {k: v for k, v in overrides.items() if v is not None}
        if "root" in given:
            given["root"] = Path(given["root"])
        if "containers" in given:
            given["containers"] = tuple(given["containers"])
        return replace(settings, **given)
