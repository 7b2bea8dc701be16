"""Dependency graph construction and build ordering."""

from monobuild.graph.adjacency import Graph
from monobuild.graph.builder import build_graph
from monobuild.graph.cycle_detector import CycleResult, detect_cycle
from monobuild.graph.topological import CyclicDependencyError, sequence

__all__ = [
    "CycleResult",
    "CyclicDependencyError",
    "Graph",
    "build_graph",
    "detect_cycle",
    "sequence",
]
