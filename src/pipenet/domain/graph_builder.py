# pipenet/domain/graph_builder.py
import logging
from collections import Counter
from collections.abc import Iterable

from pipenet.algorithms.shortest_path import shortest_path
from pipenet.analysis.hooks import AnalysisHooks, NoopHooks
from pipenet.domain.entities.geometry import Coordinate, Edge, Path
from pipenet.domain.graph import Graph
from pipenet.domain.precision import PrecisionModel
from pipenet.errors import ChainingError, DegenerateInputError

log = logging.getLogger("pipenet.builder")


class GraphBuilder:
    """
    Turns polylines into a deduplicated, undirected graph and answers
    point-to-point route queries on it.

    Usage::

        gb = GraphBuilder(PrecisionModel.fixed(1000))
        gb.add(line_a, line_b)
        gb.initialize()
        path = gb.perform((0, 0), (20, 0))   # None if no route

    ``add`` may be called any number of times before ``initialize``; the graph
    is frozen afterwards.
    """

    def __init__(self, precision: PrecisionModel | None = None, hooks: AnalysisHooks | None = None):
        self.precision = precision or PrecisionModel.floating()
        self._hooks = hooks or NoopHooks()
        self._lines: list[tuple[Coordinate, ...]] = []
        self._seen: set[tuple[tuple[float, float], ...]] = set()
        self._graph: Graph | None = None

    # ------------------ building ------------------

    def add(self, *polylines: Iterable) -> bool:
        """Queue polylines; False if any of them was already added."""
        if self._graph is not None:
            raise RuntimeError("graph already initialized; create a new builder to add lines")
        snapped = [tuple(self.precision.snap_polyline(line)) for line in polylines]
        for i, coords in enumerate(snapped):
            if len(coords) < 2:
                raise DegenerateInputError(
                    f"polyline {i} needs at least 2 coordinates, got {len(coords)}"
                )
        all_new = True
        for coords in snapped:
            sig = tuple((c.x, c.y) for c in coords)
            if sig in self._seen:
                all_new = False
                continue
            self._seen.add(sig)
            self._lines.append(coords)
        return all_new

    def initialize(self) -> Graph:
        if self._graph is not None:
            return self._graph
        g = Graph()
        skipped = 0
        for coords in self._lines:
            for a, b in zip(coords, coords[1:]):
                if a == b:
                    skipped += 1  # collapsed by the precision model
                    continue
                g.add_edge(Edge(a, b))
        if g.vertex_count < 2:
            raise DegenerateInputError(
                f"network needs at least 2 distinct vertices, got {g.vertex_count}"
            )
        if skipped:
            log.debug("skipped %d zero-length segment(s)", skipped)
        self._graph = g
        return g

    @property
    def graph(self) -> Graph:
        if self._graph is None:
            raise RuntimeError("GraphBuilder.initialize() has not been called")
        return self._graph

    @property
    def line_count(self) -> int:
        return len(self._lines)

    # ------------------ queries ------------------

    def locate(self, point) -> Coordinate | None:
        return self.graph.canonical(self.precision.snap(point))

    def perform(self, root, target) -> Path | None:
        """
        Shortest path from ``root`` to ``target``.

        Returns None when either point is not a vertex of the network or when
        the two lie in different components. Raises DegenerateInputError when
        they are the same point.
        """
        g = self.graph
        r, t = self.precision.snap(root), self.precision.snap(target)
        if r == t:
            raise DegenerateInputError(f"root and target are the same point {r.as_tuple()}")
        if r not in g or t not in g:
            self._hooks.route_missing(root=r, target=t, reason="not_found")
            return None
        path = shortest_path(g, r, t)
        if path is None:
            self._hooks.route_missing(root=r, target=t, reason="unreachable")
            return None
        self._hooks.route_found(path, root=r, target=t)
        return path

    # ------------------ chaining ------------------

    def build_string(self, edges: Iterable[Edge]) -> list[Coordinate]:
        return build_string(edges)

    def split_branches(self, edges: Iterable[Edge]) -> list[list[Edge]]:
        return split_branches(edges)


def _unique(edges: Iterable[Edge]) -> list[Edge]:
    return list(dict.fromkeys(edges))


def build_string(edges: Iterable[Edge]) -> list[Coordinate]:
    """
    Re-link an unordered edge list into one ordered coordinate sequence.

    The chain starts at the free end of the first listed edge that has one,
    so an already ordered path comes back in the same order.
    """
    edges = _unique(edges)
    if not edges:
        raise ChainingError("no edges to chain")
    degree = Counter(v for e in edges for v in (e.a, e.b))
    branching = [v for v, d in degree.items() if d > 2]
    if branching:
        raise ChainingError(
            f"edge set branches at {len(branching)} vertex(es), first {branching[0].as_tuple()}"
        )
    start = None
    for e in edges:
        for v in (e.a, e.b):
            if degree[v] == 1:
                start = v
                break
        if start is not None:
            break
    if start is None:
        raise ChainingError("edge set is a closed ring")

    incident: dict[Coordinate, list[Edge]] = {}
    for e in edges:
        incident.setdefault(e.a, []).append(e)
        incident.setdefault(e.b, []).append(e)

    out, used, cur = [start], set(), start
    while True:
        nxt = next((e for e in incident[cur] if e not in used), None)
        if nxt is None:
            break
        used.add(nxt)
        cur = nxt.other(cur)
        out.append(cur)
    if len(used) != len(edges):
        raise ChainingError(
            f"edge set is not connected: chained {len(used)} of {len(edges)} edges"
        )
    return out


def split_branches(edges: Iterable[Edge]) -> list[list[Edge]]:
    """
    Break a branching fragment into maximal simple chains. Chains end at
    vertices whose degree is not 2; isolated rings come back as one chain each
    (still closed, so build_string will refuse them).
    """
    edges = _unique(edges)
    incident: dict[Coordinate, list[Edge]] = {}
    for e in edges:
        incident.setdefault(e.a, []).append(e)
        incident.setdefault(e.b, []).append(e)

    used: set[Edge] = set()
    chains: list[list[Edge]] = []

    def walk(v: Coordinate, e: Edge | None) -> list[Edge]:
        chain = []
        while e is not None:
            used.add(e)
            w = e.other(v)
            chain.append(e if e.a == v else e.reversed())
            if len(incident[w]) != 2:
                break
            v = w
            e = next((f for f in incident[w] if f not in used), None)
        return chain

    for v0, inc in incident.items():
        if len(inc) == 2:
            continue
        for f in inc:
            if f not in used:
                chains.append(walk(v0, f))
    # whatever is left is made of closed rings
    for e in edges:
        if e not in used:
            chains.append(walk(e.a, e))
    return chains
