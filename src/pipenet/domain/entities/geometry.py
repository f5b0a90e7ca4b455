import math
from dataclasses import dataclass, field


# Core geometry types used by the graph and the algorithms
@dataclass(frozen=True)
class Coordinate:
    x: float  # drawing units, already snapped by the precision model
    y: float
    z: float | None = field(default=None, compare=False)  # carried, never compared or weighted

    def distance(self, other: "Coordinate") -> float:
        return math.hypot(other.x - self.x, other.y - self.y)

    def as_tuple(self) -> tuple[float, ...]:
        return (self.x, self.y) if self.z is None else (self.x, self.y, self.z)


@dataclass(frozen=True, eq=False)
class Edge:
    """
    Undirected edge. Equality and hashing ignore orientation; ``a``/``b`` keep
    the direction in which the edge was walked.
    """

    a: Coordinate
    b: Coordinate

    def __post_init__(self):
        if self.a == self.b:
            raise ValueError(f"self-loop edge at {self.a}")

    @property
    def weight(self) -> float:
        return self.a.distance(self.b)

    def key(self) -> frozenset:
        return frozenset((self.a, self.b))

    def other(self, c: Coordinate) -> Coordinate:
        if c == self.a:
            return self.b
        if c == self.b:
            return self.a
        raise ValueError(f"{c} is not an endpoint of {self}")

    def reversed(self) -> "Edge":
        return Edge(self.b, self.a)

    def __eq__(self, other):
        if not isinstance(other, Edge):
            return NotImplemented
        return (self.a == other.a and self.b == other.b) or (
            self.a == other.b and self.b == other.a
        )

    def __hash__(self):
        return hash(self.key())


@dataclass(frozen=True)
class Path:
    edges: tuple[Edge, ...]
    length: float

    @classmethod
    def from_edges(cls, edges) -> "Path":
        edges = tuple(edges)
        return cls(edges, sum(e.weight for e in edges))

    @property
    def source(self) -> Coordinate:
        return self.edges[0].a

    @property
    def target(self) -> Coordinate:
        return self.edges[-1].b

    @property
    def coordinates(self) -> list[Coordinate]:
        if not self.edges:
            return []
        return [self.edges[0].a, *(e.b for e in self.edges)]

    def vertices(self) -> set[Coordinate]:
        return set(self.coordinates)

    def __len__(self) -> int:
        return len(self.edges)
