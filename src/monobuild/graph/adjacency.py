"""Generic directed graph using adjacency lists.

The graph stores nodes of any hashable type T and directed edges
between them.  Internally it is a dict[T, list[T]] where keys are
source nodes and values are lists of successor nodes.  A separate
reverse map tracks predecessors so in-degree queries are O(1) instead
of requiring a full scan.

monobuild uses this as the dependency graph of a monorepo: nodes are
package identifiers, and an edge A -> B means "A must be built before
B" (B depends on A).
"""
from __future__ import annotations

from typing import Generic, Hashable, Iterable, Iterator, TypeVar

T = TypeVar("T", bound=Hashable)


class Graph(Generic[T]):
    """Directed graph backed by adjacency lists.

    Maintains both forward (successors) and reverse (predecessors)
    adjacency maps so that in_degree lookups are constant time.
    Parallel edges are collapsed: adding an edge twice is a no-op.
    """

    __slots__ = ("_fwd", "_rev")

    def __init__(self) -> None:
        self._fwd: dict[T, list[T]] = {}
        self._rev: dict[T, list[T]] = {}

    # ---- mutation --------------------------------------------------------

    def add_node(self, node: T) -> None:
        """Add *node* if it does not already exist."""
        if node not in self._fwd:
            self._fwd[node] = []
            self._rev[node] = []

    def add_edge(self, src: T, dst: T) -> None:
        """Add a directed edge src -> dst.

        Creates both nodes if they are missing.  An edge that already
        exists is not added again.
        """
        self.add_node(src)
        self.add_node(dst)
        if dst in self._fwd[src]:
            return
        self._fwd[src].append(dst)
        self._rev[dst].append(src)

    # ---- queries ---------------------------------------------------------

    def has_node(self, node: T) -> bool:
        return node in self._fwd

    def has_edge(self, src: T, dst: T) -> bool:
        return src in self._fwd and dst in self._fwd[src]

    def successors(self, node: T) -> list[T]:
        """Direct successors (packages that depend on *node*)."""
        return list(self._fwd.get(node, []))

    def predecessors(self, node: T) -> list[T]:
        """Direct predecessors (packages *node* depends on)."""
        return list(self._rev.get(node, []))

    def dependencies(self, node: T) -> frozenset[T]:
        return frozenset(self._rev.get(node, []))

    def in_degree(self, node: T) -> int:
        return len(self._rev.get(node, []))

    def out_degree(self, node: T) -> int:
        return len(self._fwd.get(node, []))

    def nodes(self) -> Iterator[T]:
        return iter(self._fwd)

    def edges(self) -> Iterator[tuple[T, T]]:
        for src, dsts in self._fwd.items():
            for dst in dsts:
                yield src, dst

    @property
    def node_count(self) -> int:
        return len(self._fwd)

    @property
    def edge_count(self) -> int:
        return sum(len(dsts) for dsts in self._fwd.values())

    # ---- derived views ---------------------------------------------------

    def to_dependency_map(self) -> dict[T, frozenset[T]]:
        """Map every node to the set of nodes it depends on.

        Nodes without dependencies map to an empty frozenset, so the
        key set is always exactly the node set.
        """
        return {node: frozenset(preds) for node, preds in self._rev.items()}

    def subgraph(self, nodes: Iterable[T]) -> Graph[T]:
        """Induced subgraph on *nodes* (unknown nodes are ignored)."""
        keep = [n for n in nodes if n in self._fwd]
        members = set(keep)
        sub: Graph[T] = Graph()
        for node in keep:
            sub.add_node(node)
        for node in keep:
            for dst in self._fwd[node]:
                if dst in members:
                    sub.add_edge(node, dst)
        return sub

    # ---- dunder ----------------------------------------------------------

    def __contains__(self, node: T) -> bool:  # type: ignore[override]
        return self.has_node(node)

    def __len__(self) -> int:
        return self.node_count

    def __repr__(self) -> str:
        return f"Graph(nodes={self.node_count}, edges={self.edge_count})"
