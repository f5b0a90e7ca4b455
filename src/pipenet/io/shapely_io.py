# io/shapely_io.py
from collections.abc import Iterable, Sequence

from shapely.geometry import GeometryCollection, LineString, MultiLineString
from shapely.geometry.base import BaseGeometry

from pipenet.domain.entities.geometry import Coordinate


def read_polylines(geometries: Iterable[BaseGeometry]) -> list[list[tuple[float, ...]]]:
    """
    Flatten shapely geometries into polylines. Only linear parts are kept;
    points and polygons are skipped, empty lines too.
    """
    out: list[list[tuple[float, ...]]] = []
    for g in geometries:
        if g is None or g.is_empty:
            continue
        if isinstance(g, LineString):
            out.append([tuple(c) for c in g.coords])
        elif isinstance(g, (MultiLineString, GeometryCollection)):
            out.extend(read_polylines(g.geoms))
    return out


def to_linestring(coords: Sequence[Coordinate]) -> LineString:
    if len(coords) < 2:
        raise ValueError(f"a line string needs at least 2 coordinates, got {len(coords)}")
    rows = [c.as_tuple() if isinstance(c, Coordinate) else tuple(c) for c in coords]
    if any(len(r) != len(rows[0]) for r in rows):
        rows = [r[:2] for r in rows]  # mixed 2D/3D input is written flat
    return LineString(rows)
