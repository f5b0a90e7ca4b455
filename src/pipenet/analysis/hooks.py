# analysis/hooks.py
from typing import Protocol


class AnalysisHooks(Protocol):
    def run_start(self, *, root, vertices, edges): ...
    def run_end(self, *, levels, orphans, wall_ms): ...
    def level_start(self, *, level, roots, edges): ...
    def level_end(self, *, level, paths, edges, remaining): ...
    def path_accepted(self, path, *, level, root): ...
    def path_rejected(self, *, level, root, target, length): ...
    def orphan(self, *, level, vertices, edges, reason: str): ...
    def route_found(self, path, *, root, target): ...
    def route_missing(self, *, root, target, reason: str): ...


class NoopHooks:
    def run_start(self, **_):
        pass

    def run_end(self, **_):
        pass

    def level_start(self, **_):
        pass

    def level_end(self, **_):
        pass

    def path_accepted(self, *_, **__):
        pass

    def path_rejected(self, **_):
        pass

    def orphan(self, **_):
        pass

    def route_found(self, *_, **__):
        pass

    def route_missing(self, **_):
        pass
