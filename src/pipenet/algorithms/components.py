# algorithms/components.py
from collections import deque
from collections.abc import Iterable

from pipenet.domain.entities.geometry import Coordinate, Edge
from pipenet.domain.graph import Graph


def connected_components(graph: Graph) -> list[list[Coordinate]]:
    """Vertex groups of ``graph``, labelled by BFS in vertex insertion order."""
    seen: set[Coordinate] = set()
    groups: list[list[Coordinate]] = []
    for v in graph.vertices:
        if v in seen:
            continue
        seen.add(v)
        group, q = [], deque([v])
        while q:
            u = q.popleft()
            group.append(u)
            for w, _ in graph.neighbors(u):
                if w not in seen:
                    seen.add(w)
                    q.append(w)
        groups.append(sorted(group, key=graph.vertex_id))
    return groups


def component_subgraphs(graph: Graph) -> list[Graph]:
    """One induced subgraph per component; a connected graph is returned as-is."""
    groups = connected_components(graph)
    if len(groups) == 1:
        return [graph]
    label = {v: i for i, grp in enumerate(groups) for v in grp}
    buckets: list[list[Edge]] = [[] for _ in groups]
    for e in graph.edges:
        buckets[label[e.a]].append(e)
    return [Graph(grp, es) for grp, es in zip(groups, buckets)]


def subgraph_for(vertices: Iterable[Coordinate], graph: Graph) -> Graph:
    """
    Induced subgraph on ``vertices``: every edge with both ends in the set.
    A lone vertex gives a one-vertex graph with no edges.
    """
    keep = {graph.canonical(v) for v in vertices if v in graph}
    ordered = sorted(keep, key=graph.vertex_id)
    edges = [e for e in graph.edges if e.a in keep and e.b in keep]
    return Graph(ordered, edges)


def flood_fill_from(
    graph: Graph, start: Coordinate, excluded_edges: Iterable[Edge] = ()
) -> Graph:
    """BFS from ``start`` that never crosses ``excluded_edges``; returns what it reached."""
    if start not in graph:
        return Graph()
    banned = set(excluded_edges)
    start = graph.canonical(start)
    reached = {start}
    q = deque([start])
    while q:
        u = q.popleft()
        for w, e in graph.neighbors(u):
            if e in banned or w in reached:
                continue
            reached.add(w)
            q.append(w)
    ordered = sorted(reached, key=graph.vertex_id)
    edges = [
        e for e in graph.edges if e not in banned and e.a in reached and e.b in reached
    ]
    return Graph(ordered, edges)


# ---------------- spanning tree ----------------


class _DisjointSet:
    def __init__(self, n: int):
        self.parent = list(range(n))
        self.rank = [0] * n

    def find(self, i: int) -> int:
        while self.parent[i] != i:
            self.parent[i] = self.parent[self.parent[i]]
            i = self.parent[i]
        return i

    def union(self, i: int, j: int) -> bool:
        ri, rj = self.find(i), self.find(j)
        if ri == rj:
            return False
        if self.rank[ri] < self.rank[rj]:
            ri, rj = rj, ri
        self.parent[rj] = ri
        if self.rank[ri] == self.rank[rj]:
            self.rank[ri] += 1
        return True


def minimum_spanning_tree(graph: Graph) -> list[Edge]:
    """Kruskal over Euclidean weights; a spanning forest when the graph is disconnected."""
    ds = _DisjointSet(graph.vertex_count)
    order = sorted(enumerate(graph.edges), key=lambda ie: (ie[1].weight, ie[0]))
    tree = []
    for _, e in order:
        if ds.union(graph.vertex_id(e.a), graph.vertex_id(e.b)):
            tree.append(e)
    return tree
