# pipenet/app/build.py
from collections.abc import Mapping
from dataclasses import dataclass

from pipenet.algorithms.hierarchy import HierarchyDecomposer
from pipenet.analysis.hooks import AnalysisHooks, NoopHooks
from pipenet.app.protocols import CyclingLevelStyle, LevelStyle, PathRenderer
from pipenet.config.models import AnalysisModel
from pipenet.domain.graph import Graph
from pipenet.domain.graph_builder import GraphBuilder
from pipenet.domain.precision import PrecisionModel
from pipenet.io.analysis_logging import AnalysisLogging  # JSON logs
from pipenet.io.recorder import JsonlSink, Recorder
from pipenet.policy.orphans import OrphanPolicy
from pipenet.runtime.registries import make_orphan_policy, make_precision


@dataclass
class App:
    config: AnalysisModel
    precision: PrecisionModel
    orphan_policy: OrphanPolicy
    hooks: AnalysisHooks
    style: LevelStyle
    renderer: PathRenderer | None = None

    def new_builder(self) -> GraphBuilder:
        # graphs are built fresh per analysis, never shared between calls
        return GraphBuilder(self.precision, hooks=self.hooks)

    def decomposer(self, graph: Graph) -> HierarchyDecomposer:
        return HierarchyDecomposer(graph, orphan_policy=self.orphan_policy, hooks=self.hooks)


def build(
    cfg: AnalysisModel | Mapping | None = None,
    *,
    use_logging: bool = True,
    recorder: Recorder | None = None,
    renderer: PathRenderer | None = None,
) -> App:
    # 0) Validate config
    if cfg is None:
        model = AnalysisModel()
    else:
        model = cfg if isinstance(cfg, AnalysisModel) else AnalysisModel.model_validate(cfg)

    # 1) Precision & policies
    precision = make_precision(model.precision)
    orphan_policy = make_orphan_policy(model.orphans)

    # 2) Hooks (structured logs + result events)
    hooks = (
        AnalysisLogging(
            run_id=model.run_id,
            recorder=recorder or Recorder(JsonlSink()),
            level=model.log.level,
            debug=model.log.debug,
            sample_every=model.log.sample_every,
        )
        if use_logging
        else NoopHooks()
    )

    # 3) Rendering hints
    style = CyclingLevelStyle(
        model.style.colors,
        route_color=model.style.route_color,
        base_width=model.style.base_width,
        width_step=model.style.width_step,
    )

    return App(model, precision, orphan_policy, hooks, style, renderer)
