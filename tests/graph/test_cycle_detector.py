"""Tests for DFS-based cycle detection."""
from __future__ import annotations

import random

from monobuild.graph.adjacency import Graph
from monobuild.graph.cycle_detector import detect_cycle


class TestCycleDetector:
    def test_no_cycle_empty(self, empty_graph: Graph[str]) -> None:
        result = detect_cycle(empty_graph)
        assert not result.has_cycle
        assert result.cycle_path is None

    def test_no_cycle_diamond(self, diamond_graph: Graph[str]) -> None:
        assert not detect_cycle(diamond_graph).has_cycle

    def test_simple_cycle(self) -> None:
        g: Graph[str] = Graph()
        g.add_edge("A", "B")
        g.add_edge("B", "A")
        result = detect_cycle(g)
        assert result.has_cycle
        assert result.cycle_path == ["A", "B", "A"]

    def test_deep_cycle(self) -> None:
        """A -> B -> C -> D -> B (cycle of length 3)."""
        g: Graph[str] = Graph()
        g.add_edge("A", "B")
        g.add_edge("B", "C")
        g.add_edge("C", "D")
        g.add_edge("D", "B")
        result = detect_cycle(g)
        assert result.cycle_path == ["B", "C", "D", "B"]

    def test_self_loop(self) -> None:
        g: Graph[str] = Graph()
        g.add_edge("X", "X")
        result = detect_cycle(g)
        assert result.has_cycle
        assert result.cycle_path == ["X", "X"]

    def test_deterministic_across_insertion_order(self) -> None:
        edges = [("a", "b"), ("b", "c"), ("c", "a"), ("d", "e"), ("e", "d")]
        paths = set()
        for shift in range(len(edges)):
            g: Graph[str] = Graph()
            for s, d in edges[shift:] + edges[:shift]:
                g.add_edge(s, d)
            paths.add(tuple(detect_cycle(g).cycle_path or ()))
        assert paths == {("a", "b", "c", "a")}

    def test_long_chain_does_not_recurse(self) -> None:
        g: Graph[int] = Graph()
        for i in range(5000):
            g.add_edge(i, i + 1)
        assert not detect_cycle(g).has_cycle
        g.add_edge(5000, 0)
        assert detect_cycle(g).has_cycle

    def test_no_false_positives_random_dags(self) -> None:
        rng = random.Random(42)
        for _ in range(50):
            n = rng.randint(2, 30)
            g: Graph[int] = Graph()
            for node in range(n):
                g.add_node(node)
            for i in range(n):
                for j in range(i + 1, n):
                    if rng.random() < 0.3:
                        g.add_edge(i, j)
            assert not detect_cycle(g).has_cycle

    def test_no_false_negatives_random_cycles(self) -> None:
        """A chain 0->1->...->n-1 plus one back edge always closes a cycle."""
        rng = random.Random(43)
        for _ in range(50):
            n = rng.randint(3, 20)
            g: Graph[int] = Graph()
            for i in range(n - 1):
                g.add_edge(i, i + 1)
            src = rng.randint(1, n - 1)
            dst = rng.randint(0, src - 1)
            g.add_edge(src, dst)
            result = detect_cycle(g)
            assert result.has_cycle
            path = result.cycle_path or []
            for i in range(len(path) - 1):
                assert g.has_edge(path[i], path[i + 1])
