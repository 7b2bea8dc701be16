"""Shared fixtures for dependency graph tests."""
from __future__ import annotations

import pytest

from monobuild.graph.adjacency import Graph


@pytest.fixture
def empty_graph() -> Graph[str]:
    return Graph()


@pytest.fixture
def linear_graph() -> Graph[str]:
    """A -> B -> C -> D"""
    g: Graph[str] = Graph()
    for src, dst in [("A", "B"), ("B", "C"), ("C", "D")]:
        g.add_edge(src, dst)
    return g


@pytest.fixture
def diamond_graph() -> Graph[str]:
    """
    A -> B -> D
    A -> C -> D
    """
    g: Graph[str] = Graph()
    for src, dst in [("A", "B"), ("A", "C"), ("B", "D"), ("C", "D")]:
        g.add_edge(src, dst)
    return g


@pytest.fixture
def wide_dag() -> Graph[str]:
    """Root with 10 children, each with 2 grandchildren (all leaves)."""
    g: Graph[str] = Graph()
    for i in range(10):
        child = f"L1_{i}"
        g.add_edge("root", child)
        for j in range(2):
            g.add_edge(child, f"L2_{i}_{j}")
    return g


@pytest.fixture
def monorepo_deps() -> dict[str, list[str]]:
    """Raw declarations as a small JS monorepo would produce them."""
    return {
        "packages/cli": ["packages/core", "packages/utils", "chalk", "packages/cli"],
        "packages/utils": ["packages/core", "lodash", "packages/core"],
        "packages/core": [],
        "packages/docs": ["typedoc"],
    }
