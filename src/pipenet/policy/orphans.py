# pipenet/policy/orphans.py
from typing import Protocol, runtime_checkable

from pipenet.domain.entities.geometry import Coordinate
from pipenet.domain.graph import Graph
from pipenet.errors import OrphanComponentError


@runtime_checkable
class OrphanPolicy(Protocol):
    """
    Decides what happens to a branch component that shares no vertex with the
    previous hierarchy level.

    Return a vertex of ``component`` to use as its root, or None to drop it.
    """

    name: str

    def resolve(
        self, component: Graph, parent_vertices: set[Coordinate], *, level: int
    ) -> Coordinate | None: ...


class DropOrphans(OrphanPolicy):
    name = "drop"

    def resolve(self, component, parent_vertices, *, level):
        return None


class RaiseOnOrphan(OrphanPolicy):
    name = "raise"

    def resolve(self, component, parent_vertices, *, level):
        raise OrphanComponentError(level, component.vertices, component.edge_count)


class SnapOrphans(OrphanPolicy):
    """Attach through the component vertex nearest to the previous level."""

    name = "snap"

    def __init__(self, tolerance: float | None = None):
        self.tolerance = tolerance

    def resolve(self, component, parent_vertices, *, level):
        if not parent_vertices:
            return None
        parents = sorted(parent_vertices, key=lambda c: (c.x, c.y))
        best, best_d = None, float("inf")
        for v in component.vertices:
            d = min(v.distance(p) for p in parents)
            if d < best_d:
                best, best_d = v, d
        if best is None or (self.tolerance is not None and best_d > self.tolerance):
            return None
        return best
