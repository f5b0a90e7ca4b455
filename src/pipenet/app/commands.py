# app/commands.py
from collections.abc import Iterable, Sequence

from pipenet.algorithms.components import minimum_spanning_tree
from pipenet.algorithms.hierarchy import Decomposition
from pipenet.app.build import App
from pipenet.app.protocols import RenderedPath
from pipenet.domain.entities.geometry import Path
from pipenet.domain.graph_builder import GraphBuilder


def _prepare(app: App, polylines: Iterable[Sequence]) -> GraphBuilder:
    gb = app.new_builder()
    gb.add(*polylines)
    gb.initialize()
    return gb


def _render(app: App, coords, level: int | None, length: float) -> RenderedPath:
    rp = RenderedPath(
        coordinates=tuple(coords),
        level=level,
        length=length,
        color=app.style.color(level),
        width=app.style.width(level),
    )
    if app.renderer is not None:
        app.renderer.draw(rp)
    return rp


def shortest_path(app: App, polylines: Iterable[Sequence], root, target) -> RenderedPath | None:
    """Route between two picked points; None when there is no route."""
    gb = _prepare(app, polylines)
    path = gb.perform(root, target)
    if path is None:
        return None
    return _render(app, gb.build_string(path.edges), None, path.length)


def decompose(app: App, polylines: Iterable[Sequence], root) -> Decomposition:
    gb = _prepare(app, polylines)
    r = gb.precision.snap(root)
    return app.decomposer(gb.graph).run(r)


def main_and_branch(app: App, polylines: Iterable[Sequence], root) -> list[RenderedPath]:
    """
    Main route and nested branches from ``root``; one rendered path per accepted
    route, main level first. Empty when root is not on the network.
    """
    result = decompose(app, polylines, root)
    out = []
    for lv in result.levels:
        for p in lv.paths:
            out.append(_render(app, p.coordinates, lv.level, p.length))
    return out


def spanning_tree(app: App, polylines: Iterable[Sequence]) -> list[RenderedPath]:
    """Minimum spanning forest, drawn as one polyline per simple chain."""
    gb = _prepare(app, polylines)
    tree = minimum_spanning_tree(gb.graph)
    out = []
    for chain in gb.split_branches(tree):
        p = Path.from_edges(chain)
        out.append(_render(app, p.coordinates, None, p.length))
    return out
