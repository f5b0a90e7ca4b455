# algorithms/hierarchy.py

import time
from dataclasses import dataclass, field

from pipenet.algorithms.components import component_subgraphs
from pipenet.algorithms.shortest_path import ShortestPathTree, dijkstra
from pipenet.analysis.hooks import AnalysisHooks, NoopHooks
from pipenet.domain.entities.geometry import Coordinate, Edge, Path
from pipenet.domain.graph import Graph
from pipenet.policy.orphans import DropOrphans, OrphanPolicy


@dataclass(frozen=True)
class HierarchyLevel:
    level: int
    paths: tuple[Path, ...]
    roots: tuple[Coordinate, ...]

    @property
    def edges(self) -> list[Edge]:
        return list(dict.fromkeys(e for p in self.paths for e in p.edges))

    def vertices(self) -> set[Coordinate]:
        return {v for p in self.paths for v in p.coordinates}


@dataclass(frozen=True)
class OrphanComponent:
    level: int  # the level it would have been attached to
    vertices: tuple[Coordinate, ...]
    edges: tuple[Edge, ...]


@dataclass
class Decomposition:
    root: Coordinate
    levels: list[HierarchyLevel] = field(default_factory=list)
    orphans: list[OrphanComponent] = field(default_factory=list)

    @property
    def depth(self) -> int:
        return len(self.levels)

    def pairs(self) -> list[tuple[list[Edge], int]]:
        """One (edges, level) entry per accepted path, shallow levels first."""
        return [(list(p.edges), lv.level) for lv in self.levels for p in lv.paths]

    def level_edge_sets(self) -> list[tuple[list[Edge], int]]:
        return [(lv.edges, lv.level) for lv in self.levels]

    def edges(self) -> list[Edge]:
        return [e for lv in self.levels for e in lv.edges]

    def level_of(self, e: Edge) -> int | None:
        for lv in self.levels:
            if e in lv.edges:
                return lv.level
        return None


# ----------------- states -----------------


@dataclass(frozen=True)
class Leveling:
    level: int
    active: Graph
    frontier: tuple[Coordinate, ...]
    levels: tuple[HierarchyLevel, ...] = ()
    orphans: tuple[OrphanComponent, ...] = ()


@dataclass(frozen=True)
class Done:
    result: Decomposition


class HierarchyDecomposer:
    """
    Splits a rooted network into a main route (level 0) and nested branches.

    Each level runs all-destinations Dijkstra from every frontier root, accepts
    the longest candidates greedily while they stay vertex-disjoint (roots
    excepted), removes the accepted edges from the working graph and turns every
    remaining component that touches the level just built into a frontier root
    of the next one. Components that touch nothing are handed to the orphan
    policy.
    """

    def __init__(
        self,
        graph: Graph,
        *,
        orphan_policy: OrphanPolicy | None = None,
        hooks: AnalysisHooks | None = None,
    ):
        self.graph = graph
        self.orphan_policy = orphan_policy or DropOrphans()
        self._hooks = hooks or NoopHooks()

    def start(self, root: Coordinate) -> Leveling | Done:
        if root not in self.graph or self.graph.degree(root) == 0:
            self._hooks.route_missing(root=root, target=None, reason="not_found")
            return Done(Decomposition(root))
        root = self.graph.canonical(root)
        return Leveling(level=0, active=self.graph.copy(), frontier=(root,))

    def run(self, root: Coordinate) -> Decomposition:
        t0 = time.perf_counter()
        self._hooks.run_start(
            root=root, vertices=self.graph.vertex_count, edges=self.graph.edge_count
        )
        state = self.start(root)
        while isinstance(state, Leveling):
            state = self.step(state)
        result = state.result
        self._hooks.run_end(
            levels=result.depth,
            orphans=len(result.orphans),
            wall_ms=(time.perf_counter() - t0) * 1000,
        )
        return result

    def step(self, st: Leveling) -> Leveling | Done:
        self._hooks.level_start(level=st.level, roots=st.frontier, edges=st.active.edge_count)
        accepted: list[Path] = []
        accepted_edges: dict[Edge, None] = {}
        visited: set[Coordinate] = set()

        for root in st.frontier:
            tree = dijkstra(st.active, root)
            blocked: set[Coordinate] = set()  # tree vertices whose way back hits ``visited``
            for target in tree.farthest_first():
                walked = _free_walk(tree, target, visited, blocked)
                if walked is None:
                    self._hooks.path_rejected(
                        level=st.level, root=root, target=target, length=tree.dist[target]
                    )
                    continue
                visited.update(walked)
                path = tree.path_to(target)
                accepted.append(path)
                accepted_edges.update(dict.fromkeys(path.edges))
                self._hooks.path_accepted(path, level=st.level, root=root)

        if not accepted:
            raise RuntimeError(
                f"no path accepted at level {st.level} with {st.active.edge_count} edges left"
            )

        built = HierarchyLevel(st.level, tuple(accepted), st.frontier)
        levels = (*st.levels, built)
        active = st.active.without_edges(accepted_edges)
        self._hooks.level_end(
            level=st.level, paths=len(accepted), edges=len(accepted_edges), remaining=active.edge_count
        )
        if active.edge_count == 0:
            return Done(Decomposition(levels[0].roots[0], list(levels), list(st.orphans)))

        parent_vertices = built.vertices()
        branches = [g for g in component_subgraphs(active) if g.edge_count > 0]
        branches.sort(key=lambda g: -g.edge_count)

        frontier: list[Coordinate] = []
        orphans = list(st.orphans)
        dropped: list[Edge] = []
        for comp in branches:
            link = next((v for v in comp.vertices if v in parent_vertices), None)
            if link is None:
                link = self.orphan_policy.resolve(comp, parent_vertices, level=st.level + 1)
            if link is None:
                orphans.append(
                    OrphanComponent(st.level + 1, tuple(comp.vertices), tuple(comp.edges))
                )
                dropped.extend(comp.edges)
                self._hooks.orphan(
                    level=st.level + 1,
                    vertices=comp.vertex_count,
                    edges=comp.edge_count,
                    reason=self.orphan_policy.name,
                )
                continue
            frontier.append(link)

        if not frontier:
            return Done(Decomposition(levels[0].roots[0], list(levels), orphans))
        if dropped:
            active = active.without_edges(dropped)
        return Leveling(st.level + 1, active, tuple(frontier), levels, tuple(orphans))


def decompose(
    graph: Graph,
    root: Coordinate,
    *,
    orphan_policy: OrphanPolicy | None = None,
    hooks: AnalysisHooks | None = None,
) -> Decomposition:
    return HierarchyDecomposer(graph, orphan_policy=orphan_policy, hooks=hooks).run(root)


def _free_walk(
    tree: ShortestPathTree,
    target: Coordinate,
    visited: set[Coordinate],
    blocked: set[Coordinate],
) -> list[Coordinate] | None:
    """
    Vertices on the tree path to ``target`` (root excluded) when none of them is
    in ``visited``, else None. Everything walked on a failed attempt joins
    ``blocked``, so each vertex is walked at most once per tree.
    """
    walked = []
    for v in tree.walk_back(target):
        if v in visited or v in blocked:
            blocked.update(walked)
            return None
        walked.append(v)
    return walked
