"""Cycle detection in directed graphs using DFS three-color marking.

The three colors:
  WHITE  -- node not yet visited
  GRAY   -- node is on the current DFS path (ancestors of current node)
  BLACK  -- node fully explored (all descendants visited)

A back edge (an edge to a GRAY node) means the graph has a cycle.
When we find one, we reconstruct the cycle path from the parent links
so we can report exactly which packages form the loop.

Roots and successors are visited in sorted order, so the same graph
always yields the same reported cycle.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Hashable, TypeVar

from monobuild.graph.adjacency import Graph

T = TypeVar("T", bound=Hashable)

WHITE, GRAY, BLACK = 0, 1, 2


@dataclass(slots=True)
class CycleResult(Generic[T]):
    """Result of cycle detection."""
    has_cycle: bool
    cycle_path: list[T] | None = None


def detect_cycle(graph: Graph[T]) -> CycleResult[T]:
    """Detect whether *graph* contains a directed cycle.

    Returns a CycleResult with has_cycle=True and the cycle path if one
    exists.  The cycle path is a list [v0, v1, ..., vk, v0] where each
    consecutive pair is a directed edge.

    The walk is iterative so deep dependency chains do not hit the
    recursion limit.
    """
    color: dict[T, int] = {n: WHITE for n in graph.nodes()}
    parent: dict[T, T | None] = {n: None for n in graph.nodes()}

    for root in sorted(graph.nodes()):  # type: ignore[type-var]
        if color[root] != WHITE:
            continue
        color[root] = GRAY
        stack: list[tuple[T, list[T]]] = [
            (root, sorted(graph.successors(root), reverse=True))  # type: ignore[type-var]
        ]
        while stack:
            node, pending = stack[-1]
            if not pending:
                color[node] = BLACK
                stack.pop()
                continue
            succ = pending.pop()
            if color[succ] == GRAY:
                # back edge: walk parents from node up to succ
                path = [node]
                cur = node
                while cur != succ:
                    cur = parent[cur]  # type: ignore[assignment]
                    path.append(cur)
                path.reverse()
                path.append(succ)
                return CycleResult(has_cycle=True, cycle_path=path)
            if color[succ] == WHITE:
                parent[succ] = node
                color[succ] = GRAY
                stack.append(
                    (succ, sorted(graph.successors(succ), reverse=True))  # type: ignore[type-var]
                )

    return CycleResult(has_cycle=False, cycle_path=None)
