"""Build ordering via Kahn's algorithm with a deterministic tie-break.

Kahn's algorithm fits build ordering well: packages with no workspace
dependencies come first, then packages whose only dependencies are
those, and so on.  The plain algorithm leaves the order among "ready"
packages up to queue insertion order, which in turn depends on how the
package directories were enumerated.  Builds are shelled out in this
order, so we pin it down: the ready set is a min-heap keyed on the
package identifier and the smallest ready identifier always goes next.

The algorithm:
  1.  Compute in-degree for every node.
  2.  Seed a heap with all nodes whose in-degree is 0.
  3.  Pop the smallest node, append it to the result, decrement the
      in-degree of its successors.  Any successor whose in-degree drops
      to 0 is pushed onto the heap.
  4.  If the result contains all nodes, the graph is a DAG.
      Otherwise every node left over sits on a cycle or depends on one.
"""
from __future__ import annotations

import heapq
from typing import Hashable, Iterable, TypeVar

from monobuild.errors import MonobuildError
from monobuild.graph.adjacency import Graph
from monobuild.graph.cycle_detector import detect_cycle

T = TypeVar("T", bound=Hashable)


class CyclicDependencyError(MonobuildError):
    """Raised when the dependency graph cannot be linearised.

    Attributes:
        remaining_nodes: every node that could not be placed, sorted.
        involved: the same nodes as a frozenset.
        cycle_path: one concrete cycle among them, ``[v0, ..., v0]``.
    """

    def __init__(self, remaining_nodes: Iterable, cycle_path: list | None = None) -> None:
        self.remaining_nodes = sorted(remaining_nodes)
        self.involved = frozenset(self.remaining_nodes)
        self.cycle_path = cycle_path
        msg = (
            f"Cycle detected: {len(self.remaining_nodes)} package(s) cannot be "
            f"ordered: {', '.join(map(str, self.remaining_nodes))}"
        )
        if cycle_path:
            msg += f" (cycle: {' -> '.join(map(str, cycle_path))})"
        super().__init__(msg)


def sequence(graph: Graph[T]) -> list[T]:
    """Return every node in build order (prerequisites first).

    Ties between nodes with no ordering constraint are broken by the
    natural ordering of the nodes, so identical graphs always give
    identical output regardless of insertion order.  Nodes must
    therefore be mutually comparable (package identifiers are strings).

    Raises CyclicDependencyError if the graph contains a cycle.
    """
    in_deg: dict[T, int] = {}
    for node in graph.nodes():
        in_deg[node] = graph.in_degree(node)

    ready: list[T] = [node for node, deg in in_deg.items() if deg == 0]
    heapq.heapify(ready)

    result: list[T] = []
    while ready:
        node = heapq.heappop(ready)
        result.append(node)
        for succ in graph.successors(node):
            in_deg[succ] -= 1
            if in_deg[succ] == 0:
                heapq.heappush(ready, succ)

    if len(result) != graph.node_count:
        placed = set(result)
        remaining = [n for n in graph.nodes() if n not in placed]
        cycle = detect_cycle(graph.subgraph(remaining))
        raise CyclicDependencyError(remaining, cycle.cycle_path)

    return result
