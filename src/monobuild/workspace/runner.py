"""Run each package's ``build`` script in a precomputed order.

Builds are strictly sequential: a package only starts once everything
before it in the order has finished.  Per-package problems (unreadable
manifest, no build script, failing command) are logged and collected
in a BuildReport rather than raised, so one broken package does not
hide the state of the rest.
"""
from __future__ import annotations

import logging
import shutil
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Sequence

from monobuild.workspace.manifest import ManifestError, read_manifest

log = logging.getLogger(__name__)

RUNTIMES = ("auto", "bun", "npm")


@dataclass(slots=True)
class BuildReport:
    """Outcome of one build run."""
    order: list[str]
    built: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    failed: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failed


def detect_runtime(preferred: str = "auto") -> str:
    """Pick the executable used to run package scripts.

    ``auto`` means bun when a ``bun`` binary is on PATH, npm otherwise.
    """
    if preferred not in RUNTIMES:
        raise ValueError(f"Unknown runtime {preferred!r}, expected one of {RUNTIMES}")
    if preferred != "auto":
        return preferred
    return "bun" if shutil.which("bun") else "npm"


def build_command(runtime: str) -> list[str]:
    return [runtime, "run", "build"]


def build_packages(
    root: Path | str,
    order: Sequence[str],
    runtime: str = "auto",
    dry_run: bool = False,
    fail_fast: bool = False,
) -> BuildReport:
    """Build every package in *order*, returning what happened to each.

    With *dry_run* the build command is logged but not executed.  With
    *fail_fast* the first failing build stops the run; packages after
    it are neither built nor reported.
    """
    root = Path(root)
    report = BuildReport(order=list(order))
    cmd = build_command(detect_runtime(runtime))

    log.info("Building packages in this order: %s", ", ".join(order))

    for pkg in order:
        pkg_dir = root / pkg
        log.info("Building %s...", pkg)
        try:
            manifest = read_manifest(pkg_dir)
        except ManifestError as exc:
            log.warning(
                "Skipping %s (unable to read or parse package.json): %s",
                pkg, exc.reason,
            )
            report.skipped.append(pkg)
            continue

        if not manifest.has_build_script:
            log.info("Skipping %s (no build script).", pkg)
            report.skipped.append(pkg)
            continue

        if dry_run:
            log.info("[dry-run] would run %r in %s", " ".join(cmd), pkg_dir)
            report.built.append(pkg)
            continue

        try:
            subprocess.run(cmd, cwd=pkg_dir, check=True)
        except subprocess.CalledProcessError as exc:
            reason = f"build exited with status {exc.returncode}"
        except OSError as exc:
            reason = f"could not run {cmd[0]}: {exc}"
        else:
            report.built.append(pkg)
            continue

        log.error("Build of %s failed: %s", pkg, reason)
        report.failed[pkg] = reason
        if fail_fast:
            log.error("Stopping after first failure (fail-fast)")
            break

    log.info("Done building packages.")
    return report
