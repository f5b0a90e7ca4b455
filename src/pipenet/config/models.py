from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


class LogModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    debug: bool = False  # per-path accept/reject records
    sample_every: int = Field(default=1, ge=1)


# ----------------- PRECISION ---------------------


class PrecisionFloatingModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["floating"] = "floating"


class PrecisionFloatingSingleModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["floating_single"] = "floating_single"


class PrecisionFixedModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["fixed"] = "fixed"
    scale: float = 1000.0  # grid of 1/scale drawing units

    @field_validator("scale")
    @classmethod
    def _positive(cls, v: float) -> float:
        if not v > 0:
            raise ValueError("scale must be > 0")
        return v


PrecisionUnion = Annotated[
    PrecisionFloatingModel | PrecisionFloatingSingleModel | PrecisionFixedModel,
    Field(discriminator="kind"),
]

# ----------------- ORPHAN POLICIES ---------------------


class OrphanDropModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["drop"] = "drop"


class OrphanRaiseModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["raise"] = "raise"


class OrphanSnapModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["snap"] = "snap"
    snap_tolerance: float | None = None  # None => nearest vertex at any distance

    @field_validator("snap_tolerance")
    def _nonneg(cls, v: float | None, info: ValidationInfo) -> float | None:
        if v is not None and v < 0:
            raise ValueError(f"{info.field_name} must be >= 0")
        return v


OrphanPolicyUnion = Annotated[
    OrphanDropModel | OrphanRaiseModel | OrphanSnapModel,
    Field(discriminator="kind"),
]

# ----------------- RENDERING HINTS ---------------------


class StyleModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    # ACI colour per level, cycled for deeper levels; 1=red, 2=yellow, 3=green ...
    colors: list[int] = Field(default_factory=lambda: [1, 2, 3, 4, 5, 6])
    route_color: int = 1
    base_width: float = 0.0
    width_step: float = 0.0

    @field_validator("colors")
    @classmethod
    def _non_empty(cls, v: list[int]) -> list[int]:
        if not v:
            raise ValueError("colors must not be empty")
        return v


# ------------------------------------------------------------------


class AnalysisModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str = "network"
    run_id: str = "local"
    precision: PrecisionUnion = Field(default_factory=PrecisionFloatingModel)
    orphans: OrphanPolicyUnion = Field(default_factory=OrphanDropModel)
    log: LogModel = LogModel()
    style: StyleModel = StyleModel()
