# runtime/registries.py
from collections.abc import Callable

from pipenet.config.models import (
    OrphanDropModel,
    OrphanPolicyUnion,
    OrphanRaiseModel,
    OrphanSnapModel,
    PrecisionFixedModel,
    PrecisionFloatingModel,
    PrecisionFloatingSingleModel,
    PrecisionUnion,
)
from pipenet.domain.precision import PrecisionModel
from pipenet.policy.orphans import DropOrphans, OrphanPolicy, RaiseOnOrphan, SnapOrphans

PrecisionFactory = Callable[[PrecisionUnion], PrecisionModel]
OrphanPolicyFactory = Callable[[OrphanPolicyUnion], OrphanPolicy]

_precision_registry: dict[str, PrecisionFactory] = {}
_orphan_registry: dict[str, OrphanPolicyFactory] = {}


# ------------------- Precision models ---------------------------


def register_precision(kind: str):
    def deco(fn: PrecisionFactory):
        _precision_registry[kind] = fn
        return fn

    return deco


def make_precision(cfg: PrecisionUnion) -> PrecisionModel:
    try:
        return _precision_registry[cfg.kind](cfg)
    except KeyError:
        raise ValueError(f"Unknown precision kind {cfg.kind!r}")


@register_precision("floating")
def _make_floating(cfg: PrecisionFloatingModel):
    return PrecisionModel.floating()


@register_precision("floating_single")
def _make_floating_single(cfg: PrecisionFloatingSingleModel):
    return PrecisionModel.floating_single()


@register_precision("fixed")
def _make_fixed(cfg: PrecisionFixedModel):
    return PrecisionModel.fixed(cfg.scale)


# ------------------- Orphan policies ---------------------------


def register_orphan_policy(kind: str):
    def deco(fn: OrphanPolicyFactory):
        _orphan_registry[kind] = fn
        return fn

    return deco


def make_orphan_policy(cfg: OrphanPolicyUnion) -> OrphanPolicy:
    try:
        return _orphan_registry[cfg.kind](cfg)
    except KeyError:
        raise ValueError(f"Unknown orphan policy {cfg.kind!r}")


@register_orphan_policy("drop")
def _make_drop(cfg: OrphanDropModel):
    return DropOrphans()


@register_orphan_policy("raise")
def _make_raise(cfg: OrphanRaiseModel):
    return RaiseOnOrphan()


@register_orphan_policy("snap")
def _make_snap(cfg: OrphanSnapModel):
    return SnapOrphans(tolerance=cfg.snap_tolerance)
