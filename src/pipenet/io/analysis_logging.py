# io/analysis_logging.py
import json
import logging
import sys

from pipenet.analysis.hooks import NoopHooks
from pipenet.app.events import (
    DecompositionCompleted,
    LevelCompleted,
    OrphanDropped,
    RouteFound,
    RouteMissing,
)
from pipenet.io.recorder import Recorder


def _default_json_logger(name="pipenet", level="INFO"):
    logger = logging.getLogger(name)
    if not logger.handlers:
        h = logging.StreamHandler(sys.stdout)

        class _JsonFormatter(logging.Formatter):
            def format(self, record: logging.LogRecord) -> str:
                payload = {
                    "level": record.levelname,
                    "msg": record.getMessage(),
                    "logger": record.name,
                }
                extra = getattr(record, "extra", None)
                if isinstance(extra, dict):
                    payload.update(extra)
                return json.dumps(payload, default=str)

        h.setFormatter(_JsonFormatter())
        logger.addHandler(h)
    logger.setLevel(level)
    return logger


def _xy(c):
    return None if c is None else (c.x, c.y)


class AnalysisLogging(NoopHooks):
    """
    One place to shape and emit structured logs and result events for route
    queries and hierarchy decompositions.
    """

    def __init__(
        self,
        run_id: str = "local",
        level: str = "INFO",
        debug: bool = False,
        sample_every: int = 1,
        logger: logging.Logger | None = None,
        recorder: Recorder | None = None,
    ):
        self.run_id, self.debug, self.sample_every = run_id, debug, max(1, sample_every)
        self.recorder = recorder
        self.log = logger or _default_json_logger(level=level)
        self._examined = 0

    # --------------- Helpers -----------------------------

    def _emit(self, severity: str, msg: str, /, **extra):
        self.log.log(getattr(logging, severity), msg, extra={"extra": {"run_id": self.run_id, **extra}})

    def _record(self, ev):
        if self.recorder:
            self.recorder.emit(ev)

    def _sampled(self) -> bool:
        self._examined += 1
        return self.debug and (self._examined % self.sample_every) == 0

    # ---------------- decomposition -----------------------

    def run_start(self, *, root, vertices, edges):
        self._examined = 0
        self._emit("INFO", "run_start", root=_xy(root), vertices=vertices, edges=edges)

    def run_end(self, *, levels, orphans, wall_ms):
        self._emit("INFO", "run_end", levels=levels, orphans=orphans, wall_ms=round(wall_ms, 3))
        self._record(DecompositionCompleted(self.run_id, levels, orphans, wall_ms))

    def level_start(self, *, level, roots, edges):
        if self.debug:
            self._emit("DEBUG", "level_start", level=level, roots=[_xy(r) for r in roots], edges=edges)

    def level_end(self, *, level, paths, edges, remaining):
        self._emit("INFO", "level_end", level=level, paths=paths, edges=edges, remaining=remaining)
        self._record(LevelCompleted(self.run_id, level, paths, edges, remaining))

    def path_accepted(self, path, *, level, root):
        if self._sampled():
            self._emit("DEBUG", "path_accepted", level=level, root=_xy(root),
                       target=_xy(path.target), length=path.length)

    def path_rejected(self, *, level, root, target, length):
        if self._sampled():
            self._emit("DEBUG", "path_rejected", level=level, root=_xy(root),
                       target=_xy(target), length=length)

    def orphan(self, *, level, vertices, edges, reason):
        self._emit("WARNING", "orphan_component", level=level, vertices=vertices, edges=edges,
                   policy=reason)
        self._record(OrphanDropped(self.run_id, level, vertices, edges, reason))

    # ---------------- point to point -----------------------

    def route_found(self, path, *, root, target):
        self._emit("INFO", "route_found", root=_xy(root), target=_xy(target),
                   length=path.length, edges=len(path))
        self._record(RouteFound(self.run_id, _xy(root), _xy(target), path.length, len(path)))

    def route_missing(self, *, root, target, reason):
        self._emit("INFO", "route_missing", root=_xy(root), target=_xy(target), reason=reason)
        self._record(RouteMissing(self.run_id, _xy(root), _xy(target), reason))
