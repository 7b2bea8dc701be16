"""Turn raw per-package dependency declarations into a clean Graph.

Manifests routinely declare dependencies that are not part of the
build: third-party packages from the registry, the occasional
self-reference left over from a rename, the same workspace package
listed under both ``dependencies`` and ``devDependencies``.  None of
those are errors.  The builder keeps only edges between members of the
package set and collapses the rest away.
"""
from __future__ import annotations

from typing import Iterable, Mapping

from monobuild.graph.adjacency import Graph


def build_graph(
    packages: Iterable[str],
    raw_dependencies: Mapping[str, Iterable[str]],
) -> Graph[str]:
    """Build the dependency graph for *packages*.

    *raw_dependencies* maps a package identifier to whatever it declares.
    A package missing from the mapping has no dependencies; mapping keys
    that are not in *packages* are ignored.

    For every kept declaration ``pkg -> dep`` the graph gets the edge
    ``dep -> pkg`` (the dependency is built first).  Every package is a
    node, even when it has no edges.  This function never raises on
    unknown, duplicate or self-referencing entries.
    """
    graph: Graph[str] = Graph()
    for pkg in packages:
        graph.add_node(pkg)

    for pkg in list(graph.nodes()):
        for dep in raw_dependencies.get(pkg, ()):
            if dep == pkg or dep not in graph:
                continue
            graph.add_edge(dep, pkg)

    return graph
