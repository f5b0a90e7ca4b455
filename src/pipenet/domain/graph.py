# pipenet/domain/graph.py
from collections.abc import Iterable

from pipenet.domain.entities.geometry import Coordinate, Edge


class Graph:
    """
    Undirected weighted graph of interned coordinates.

    Vertices get an integer id in insertion order; edges are unique unordered
    pairs, kept in insertion order. Both orders drive every deterministic
    tie-break downstream (Dijkstra, components, decomposition).
    """

    def __init__(self, vertices: Iterable[Coordinate] = (), edges: Iterable[Edge] = ()):
        self._ids: dict[Coordinate, int] = {}
        self._vertices: list[Coordinate] = []
        self._edges: dict[Edge, Edge] = {}
        self._adj: dict[int, list[tuple[int, Edge]]] = {}
        for v in vertices:
            self.add_vertex(v)
        for e in edges:
            self.add_edge(e)

    # ------------- building -------------

    def add_vertex(self, c: Coordinate) -> Coordinate:
        """Intern ``c``; returns the canonical instance already stored for it."""
        vid = self._ids.get(c)
        if vid is not None:
            return self._vertices[vid]
        self._ids[c] = len(self._vertices)
        self._vertices.append(c)
        self._adj[self._ids[c]] = []
        return c

    def add_edge(self, e: Edge) -> bool:
        if e in self._edges:
            return False
        a, b = self.add_vertex(e.a), self.add_vertex(e.b)
        e = Edge(a, b)
        self._edges[e] = e
        ia, ib = self._ids[a], self._ids[b]
        self._adj[ia].append((ib, e))
        self._adj[ib].append((ia, e))
        return True

    # ------------- queries -------------

    @property
    def vertices(self) -> list[Coordinate]:
        return list(self._vertices)

    @property
    def edges(self) -> list[Edge]:
        return list(self._edges)

    @property
    def vertex_count(self) -> int:
        return len(self._vertices)

    @property
    def edge_count(self) -> int:
        return len(self._edges)

    def __contains__(self, c) -> bool:
        return c in self._ids

    def vertex_id(self, c: Coordinate) -> int:
        return self._ids[c]

    def vertex(self, vid: int) -> Coordinate:
        return self._vertices[vid]

    def canonical(self, c: Coordinate) -> Coordinate | None:
        vid = self._ids.get(c)
        return None if vid is None else self._vertices[vid]

    def neighbors(self, c: Coordinate) -> list[tuple[Coordinate, Edge]]:
        return [(self._vertices[j], e) for j, e in self._adj[self._ids[c]]]

    def degree(self, c: Coordinate) -> int:
        return len(self._adj[self._ids[c]])

    # ------------- derived graphs -------------

    def copy(self) -> "Graph":
        return Graph(self._vertices, self._edges)

    def without_edges(self, removed: Iterable[Edge]) -> "Graph":
        """New graph with the same vertices (ids preserved) minus ``removed`` edges."""
        drop = set(removed)
        return Graph(self._vertices, (e for e in self._edges if e not in drop))

    def total_length(self) -> float:
        return sum(e.weight for e in self._edges)

    def __repr__(self) -> str:
        return f"Graph(vertices={self.vertex_count}, edges={self.edge_count})"
