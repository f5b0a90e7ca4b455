import math

import pytest

from pipenet.algorithms.shortest_path import all_shortest_paths, dijkstra, shortest_path
from pipenet.domain.entities.geometry import Coordinate, Edge
from pipenet.domain.graph import Graph
from pipenet.domain.graph_builder import GraphBuilder


def graph_of(*lines) -> Graph:
    gb = GraphBuilder()
    gb.add(*lines)
    return gb.initialize()


def brute_force_length(g: Graph, a: Coordinate, b: Coordinate) -> float:
    """Minimum over every simple a->b walk; fine for a handful of vertices."""
    best = math.inf

    def dfs(u, seen, dist):
        nonlocal best
        if dist >= best:
            return
        if u == b:
            best = dist
            return
        for w, e in g.neighbors(u):
            if w not in seen:
                dfs(w, seen | {w}, dist + e.weight)

    dfs(a, {a}, 0.0)
    return best


@pytest.fixture
def mesh() -> Graph:
    # 3x3 grid with two diagonals and a long detour
    return graph_of(
        [(0, 0), (1, 0), (2, 0)],
        [(0, 1), (1, 1), (2, 1)],
        [(0, 2), (1, 2), (2, 2)],
        [(0, 0), (0, 1), (0, 2)],
        [(1, 0), (1, 1), (1, 2)],
        [(2, 0), (2, 1), (2, 2)],
        [(0, 0), (1, 1)],
        [(1, 1), (2, 2)],
        [(2, 0), (5, 5), (0, 2)],
    )


def test_matches_brute_force_on_small_mesh(mesh: Graph):
    for root in mesh.vertices:
        tree = dijkstra(mesh, root)
        for target in mesh.vertices:
            if target == root:
                continue
            p = tree.path_to(target)
            assert p is not None
            assert math.isclose(p.length, brute_force_length(mesh, root, target))
            assert math.isclose(p.length, sum(e.weight for e in p.edges))
            assert p.source == root and p.target == target


def test_path_is_a_connected_walk(mesh: Graph):
    p = shortest_path(mesh, Coordinate(0.0, 0.0), Coordinate(2.0, 2.0))
    for e1, e2 in zip(p.edges, p.edges[1:]):
        assert e1.b == e2.a
    assert [(c.x, c.y) for c in p.coordinates] == [(0, 0), (1, 1), (2, 2)]


def test_equal_length_routes_prefer_lower_vertex_ids():
    g = graph_of([(0, 0), (1, 0), (1, 1)], [(0, 0), (0, 1), (1, 1)])
    p = shortest_path(g, Coordinate(0.0, 0.0), Coordinate(1.0, 1.0))
    assert [(c.x, c.y) for c in p.coordinates] == [(0, 0), (1, 0), (1, 1)]


def test_all_destinations_excludes_root_and_other_components():
    g = graph_of([(0, 0), (1, 0), (2, 0)], [(5, 5), (6, 5)])
    paths = all_shortest_paths(g, Coordinate(0.0, 0.0))
    assert [(v.x, v.y) for v in paths] == [(1, 0), (2, 0)]
    assert paths[Coordinate(2.0, 0.0)].length == 2.0


def test_unknown_root_or_target_gives_none():
    g = graph_of([(0, 0), (1, 0)])
    assert shortest_path(g, Coordinate(9.0, 9.0), Coordinate(1.0, 0.0)) is None
    assert shortest_path(g, Coordinate(0.0, 0.0), Coordinate(9.0, 9.0)) is None
    assert all_shortest_paths(g, Coordinate(9.0, 9.0)) == {}


def test_target_search_stops_early():
    a, b, c = Coordinate(0.0, 0.0), Coordinate(1.0, 0.0), Coordinate(10.0, 0.0)
    g = Graph(edges=[Edge(a, b), Edge(b, c)])
    tree = dijkstra(g, a, target=b)
    assert tree.reaches(b)
    assert not tree.reaches(c)
