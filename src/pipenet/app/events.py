# app/events.py
from dataclasses import dataclass
from typing import Literal

MissReason = Literal["not_found", "unreachable"]

XY = tuple[float, float]


@dataclass(frozen=True)
class RouteFound:
    run_id: str
    root: XY
    target: XY
    length: float
    edges: int


@dataclass(frozen=True)
class RouteMissing:
    run_id: str
    root: XY
    target: XY | None
    reason: MissReason


@dataclass(frozen=True)
class LevelCompleted:
    run_id: str
    level: int
    paths: int
    edges: int
    remaining: int  # edges still unassigned after this level


@dataclass(frozen=True)
class OrphanDropped:
    run_id: str
    level: int
    vertices: int
    edges: int
    policy: str


@dataclass(frozen=True)
class DecompositionCompleted:
    run_id: str
    levels: int
    orphans: int
    wall_ms: float
