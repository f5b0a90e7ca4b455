import math

import numpy as np
import pytest

from pipenet.domain.entities.geometry import Coordinate, Edge, Path
from pipenet.domain.graph import Graph
from pipenet.domain.precision import PrecisionModel


# ---------- precision model


def test_fixed_precision_rounds_to_grid():
    pm = PrecisionModel.fixed(1000)
    c = pm.snap((0.0004, 1.0006))
    assert (c.x, c.y) == (0.0, 1.001)


def test_fixed_precision_collapses_near_coincident_endpoints():
    pm = PrecisionModel.fixed(100)
    assert pm.snap((10.001, 5.0)) == pm.snap((9.999, 5.0))


def test_floating_single_matches_float32():
    c = PrecisionModel.floating_single().snap((0.1, 0.2))
    assert c.x == float(np.float32(0.1))
    assert c.y == float(np.float32(0.2))


def test_floating_keeps_values_and_z():
    c = PrecisionModel.floating().snap((1.25, -3.5, 7.0))
    assert c.as_tuple() == (1.25, -3.5, 7.0)


def test_snap_polyline_vectorized_keeps_order():
    pm = PrecisionModel.fixed(10)
    coords = pm.snap_polyline([(0.04, 0.0), (1.06, 2.0, 9.0), Coordinate(3.0, 4.0)])
    assert [c.as_tuple() for c in coords] == [(0.0, 0.0), (1.1, 2.0, 9.0), (3.0, 4.0)]


def test_invalid_precision_models():
    with pytest.raises(ValueError):
        PrecisionModel.fixed(0)
    with pytest.raises(ValueError):
        PrecisionModel("double")
    with pytest.raises(ValueError):
        PrecisionModel.floating().snap((1.0,))


# ---------- coordinates, edges, paths


def test_coordinate_equality_ignores_z():
    a, b = Coordinate(1.0, 2.0, 3.0), Coordinate(1.0, 2.0)
    assert a == b and hash(a) == hash(b)
    assert len({a, b}) == 1


def test_edge_is_unordered_and_weighted():
    a, b = Coordinate(0.0, 0.0), Coordinate(3.0, 4.0)
    assert Edge(a, b) == Edge(b, a)
    assert hash(Edge(a, b)) == hash(Edge(b, a))
    assert Edge(a, b).weight == 5.0
    assert Edge(a, b).other(a) == b
    with pytest.raises(ValueError):
        Edge(a, Coordinate(0.0, 0.0, 1.0))


def test_path_coordinates_and_length():
    a, b, c = Coordinate(0.0, 0.0), Coordinate(1.0, 0.0), Coordinate(1.0, 1.0)
    p = Path.from_edges([Edge(a, b), Edge(b, c)])
    assert p.coordinates == [a, b, c]
    assert p.source == a and p.target == c
    assert p.length == 2.0
    assert len(p) == 2


# ---------- graph


def test_graph_interns_vertices_and_collapses_duplicate_edges():
    a, b, c = Coordinate(0.0, 0.0), Coordinate(1.0, 0.0), Coordinate(2.0, 0.0)
    g = Graph()
    assert g.add_edge(Edge(a, b))
    assert not g.add_edge(Edge(b, a))
    assert g.add_edge(Edge(b, c))
    assert g.vertices == [a, b, c]
    assert [g.vertex_id(v) for v in (a, b, c)] == [0, 1, 2]
    assert g.edge_count == 2
    assert g.degree(b) == 2
    assert g.canonical(Coordinate(1.0, 0.0, 5.0)) == b
    assert g.canonical(Coordinate(9.0, 9.0)) is None
    assert g.total_length() == 2.0


def test_without_edges_is_a_new_graph_keeping_vertices():
    a, b, c = Coordinate(0.0, 0.0), Coordinate(1.0, 0.0), Coordinate(1.0, 1.0)
    g = Graph(edges=[Edge(a, b), Edge(b, c)])
    h = g.without_edges([Edge(c, b)])
    assert h is not g
    assert g.edge_count == 2
    assert h.edges == [Edge(a, b)]
    assert h.vertices == g.vertices
    assert h.degree(c) == 0
    assert math.isclose(h.total_length(), 1.0)
