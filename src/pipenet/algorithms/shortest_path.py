# algorithms/shortest_path.py

import heapq
from dataclasses import dataclass, field

from pipenet.domain.entities.geometry import Coordinate, Edge, Path
from pipenet.domain.graph import Graph


@dataclass
class ShortestPathTree:
    """Settled distances and predecessor edges from one root."""

    graph: Graph
    root: Coordinate
    dist: dict[Coordinate, float] = field(default_factory=dict)
    pred: dict[Coordinate, Edge] = field(default_factory=dict)  # oriented toward the vertex

    def reaches(self, v: Coordinate) -> bool:
        return v in self.dist

    def path_to(self, target: Coordinate) -> Path | None:
        if target not in self.dist or target == self.root:
            return None
        edges = [self.pred[v] for v in self.walk_back(target)]
        edges.reverse()
        return Path(tuple(edges), self.dist[target])

    def destinations(self) -> list[Coordinate]:
        # vertex insertion order, root excluded
        return sorted(
            (v for v in self.dist if v != self.root), key=self.graph.vertex_id
        )

    def farthest_first(self) -> list[Coordinate]:
        """Destinations by distance descending, then vertex insertion order."""
        return sorted(
            (v for v in self.dist if v != self.root),
            key=lambda v: (-self.dist[v], self.graph.vertex_id(v)),
        )

    def walk_back(self, target: Coordinate):
        """Yield the vertices from ``target`` toward the root, root excluded."""
        v = target
        while v != self.root:
            yield v
            v = self.pred[v].a


def dijkstra(graph: Graph, root: Coordinate, target: Coordinate | None = None) -> ShortestPathTree:
    """
    Single-source Dijkstra with Euclidean edge weights.

    Ties are broken deterministically: the heap orders by (distance, vertex id),
    neighbours are relaxed in edge insertion order and a predecessor is only
    replaced by a strictly shorter distance. When ``target`` is given the search
    stops as soon as it is settled.
    """
    tree = ShortestPathTree(graph, root)
    if root not in graph:
        return tree
    root = graph.canonical(root)
    tree.root = root
    best: dict[Coordinate, float] = {root: 0.0}
    q: list[tuple[float, int]] = [(0.0, graph.vertex_id(root))]
    while q:
        d, vid = heapq.heappop(q)
        u = graph.vertex(vid)
        if u in tree.dist:
            continue
        tree.dist[u] = d
        if target is not None and u == target:
            break
        for v, e in graph.neighbors(u):
            if v in tree.dist:
                continue
            nd = d + e.weight
            if nd < best.get(v, float("inf")):
                best[v] = nd
                tree.pred[v] = e if e.b == v else e.reversed()
                heapq.heappush(q, (nd, graph.vertex_id(v)))
    return tree


def shortest_path(graph: Graph, root: Coordinate, target: Coordinate) -> Path | None:
    if root not in graph or target not in graph:
        return None
    return dijkstra(graph, root, target).path_to(target)


def all_shortest_paths(graph: Graph, root: Coordinate) -> dict[Coordinate, Path]:
    """Best path to every other vertex of root's component (insertion ordered)."""
    tree = dijkstra(graph, root)
    return {v: tree.path_to(v) for v in tree.destinations()}
