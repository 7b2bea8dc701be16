"""monobuild CLI entry point.

Usage: monobuild [--root DIR] [--packages DIR ...] <command>

Commands:
    order   print the build order, one package per line
    check   verify the dependency graph has no cycles
    graph   print the dependency graph as Graphviz DOT
    build   build every package in dependency order
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from monobuild.config import BuildSettings
from monobuild.errors import MonobuildError
from monobuild.graph import Graph, build_graph, detect_cycle, sequence
from monobuild.logging_setup import setup_logging
from monobuild.workspace import build_packages, calculate_dependencies, find_package_dirs
from monobuild.workspace.runner import RUNTIMES

log = logging.getLogger(__name__)


def _make_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="monobuild",
        description="Build the packages of a monorepo in dependency order.",
    )
    parser.add_argument(
        "--root", type=Path, default=None,
        help="Repository root (default: $MONOBUILD_ROOT or the current directory)",
    )
    parser.add_argument(
        "--packages", nargs="+", metavar="DIR", default=None,
        help="Directories, relative to the root, that contain packages "
             "(default: packages)",
    )
    parser.add_argument(
        "--log-level", default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="Logging verbosity (default: INFO)",
    )
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("order", help="Print the build order.")
    subparsers.add_parser("check", help="Check the dependency graph for cycles.")
    subparsers.add_parser("graph", help="Print the dependency graph in DOT format.")

    b = subparsers.add_parser("build", help="Build all packages in order.")
    b.add_argument(
        "--runtime", choices=RUNTIMES, default=None,
        help="Script runner: bun, npm, or auto-detect (default: auto)",
    )
    b.add_argument(
        "--dry-run", action="store_true", default=None,
        help="Log the build commands without running them.",
    )
    b.add_argument(
        "--fail-fast", action="store_true", default=None,
        help="Stop at the first failing build.",
    )
    return parser


def load_graph(settings: BuildSettings) -> Graph[str]:
    """Discover packages under the configured root and build their graph."""
    package_dirs = find_package_dirs(settings.root, settings.containers)
    raw = calculate_dependencies(settings.root, package_dirs, settings.dependency_fields)
    return build_graph(package_dirs, raw)


def _dot_id(name: str) -> str:
    escaped = name.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def format_dot(graph: Graph[str]) -> str:
    lines = ["digraph dependencies {"]
    for pkg in sorted(graph.nodes()):
        deps = sorted(graph.dependencies(pkg))
        if not deps and graph.out_degree(pkg) == 0:
            lines.append(f"  {_dot_id(pkg)};")
        for dep in deps:
            lines.append(f"  {_dot_id(dep)} -> {_dot_id(pkg)};")
    lines.append("}")
    return "\n".join(lines)


def _run_order(settings: BuildSettings) -> int:
    for pkg in sequence(load_graph(settings)):
        print(pkg)
    return 0


def _run_check(settings: BuildSettings) -> int:
    graph = load_graph(settings)
    result = detect_cycle(graph)
    if result.has_cycle:
        print(f"Cycle: {' -> '.join(result.cycle_path or [])}")
        return 1
    print(f"OK: {graph.node_count} package(s)")
    return 0


def _run_graph(settings: BuildSettings) -> int:
    print(format_dot(load_graph(settings)))
    return 0


def _run_build(settings: BuildSettings) -> int:
    order = sequence(load_graph(settings))
    report = build_packages(
        settings.root,
        order,
        runtime=settings.runtime,
        dry_run=settings.dry_run,
        fail_fast=settings.fail_fast,
    )
    log.info(
        "%d built, %d skipped, %d failed",
        len(report.built), len(report.skipped), len(report.failed),
    )
    return 0 if report.ok else 1


_COMMANDS = {
    "order": _run_order,
    "check": _run_check,
    "graph": _run_graph,
    "build": _run_build,
}


def main(argv: list[str] | None = None) -> int:
    parser = _make_parser()
    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        return 0

    load_dotenv(Path.cwd() / ".env")
    try:
        settings = BuildSettings.from_env(
            root=args.root,
            containers=args.packages,
            log_level=args.log_level,
            runtime=getattr(args, "runtime", None),
            dry_run=getattr(args, "dry_run", None),
            fail_fast=getattr(args, "fail_fast", None),
        )
        setup_logging(settings.log_level)
        return _COMMANDS[args.command](settings)
    except (MonobuildError, ValueError) as exc:
        log.error("%s", exc)
        return 1


if __name__ == "__main__":
    sys.exit(main())
