from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from pipenet.domain.entities.geometry import Coordinate


@dataclass(frozen=True)
class RenderedPath:
    """A route ready for the host: ordered coordinates plus drawing attributes."""

    coordinates: tuple[Coordinate, ...]
    level: int | None
    length: float
    color: int
    width: float


# ------------- Host integration --------------------
@runtime_checkable
class PathRenderer(Protocol):
    """
    Responsibilities:
      • Persist one rendered path (entity creation, colour, width).
      • Batch writes inside whatever transaction the host needs.
    """

    def draw(self, path: RenderedPath) -> None: ...


@runtime_checkable
class LevelStyle(Protocol):
    """Maps a hierarchy level (None for a plain route) to colour index and stroke width."""

    def color(self, level: int | None) -> int: ...
    def width(self, level: int | None) -> float: ...


class ListRenderer(PathRenderer):
    def __init__(self):
        self.paths: list[RenderedPath] = []

    def draw(self, path: RenderedPath) -> None:
        self.paths.append(path)


class CyclingLevelStyle(LevelStyle):
    def __init__(self, colors: Sequence[int], route_color: int = 1, base_width=0.0, width_step=0.0):
        self.colors, self.route_color = list(colors), route_color
        self.base_width, self.width_step = base_width, width_step

    def color(self, level):
        if level is None:
            return self.route_color
        return self.colors[level % len(self.colors)]

    def width(self, level):
        if level is None:
            return self.base_width
        # main route widest, each branch level one step thinner
        return max(0.0, self.base_width - level * self.width_step)
