# pipenet/domain/precision.py
from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

import numpy as np

from pipenet.domain.entities.geometry import Coordinate


@dataclass(frozen=True)
class PrecisionModel:
    """
    Snapping rule applied to every ordinate before it becomes a graph key.

    kind:
      • "floating"        values kept as given (float64)
      • "floating_single" values rounded to IEEE single precision
      • "fixed"           values rounded to a grid of 1/scale
    """

    kind: str = "floating"
    scale: float = 1.0

    def __post_init__(self):
        if self.kind not in ("floating", "floating_single", "fixed"):
            raise ValueError(f"Unknown precision kind {self.kind!r}")
        if self.kind == "fixed" and not self.scale > 0:
            raise ValueError("fixed precision needs scale > 0")

    @classmethod
    def floating(cls) -> PrecisionModel:
        return cls("floating")

    @classmethod
    def floating_single(cls) -> PrecisionModel:
        return cls("floating_single")

    @classmethod
    def fixed(cls, scale: float) -> PrecisionModel:
        return cls("fixed", float(scale))

    def make_precise_array(self, values) -> np.ndarray:
        arr = np.asarray(values, dtype=np.float64)
        if self.kind == "fixed":
            return np.round(arr * self.scale) / self.scale
        if self.kind == "floating_single":
            return arr.astype(np.float32).astype(np.float64)
        return arr

    def snap(self, point) -> Coordinate:
        xs = _ordinates(point)
        snapped = self.make_precise_array(xs[:2])
        z = xs[2] if len(xs) > 2 else None
        return Coordinate(float(snapped[0]), float(snapped[1]), z)

    def snap_polyline(self, points: Iterable) -> list[Coordinate]:
        rows = [_ordinates(p) for p in points]
        if not rows:
            return []
        xy = self.make_precise_array([r[:2] for r in rows])
        return [
            Coordinate(float(x), float(y), r[2] if len(r) > 2 else None)
            for (x, y), r in zip(xy, rows)
        ]


def _ordinates(point) -> Sequence[float]:
    if isinstance(point, Coordinate):
        return point.as_tuple()
    xs = tuple(float(v) for v in point)
    if len(xs) < 2:
        raise ValueError(f"coordinate needs at least x and y, got {point!r}")
    return xs
