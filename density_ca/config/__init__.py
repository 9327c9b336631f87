"""Configuration layer: constants, enum vocabularies, and typed config dataclasses."""

from density_ca.config.constants import (
    CHUNK_SIZE,
    CYCLE_WINDOW,
    MAX_COUNTEREXAMPLES,
    MAX_LEN,
    MAX_SUPPORTED_LEN,
    MAX_SWEEP_CONFIGURATIONS,
    MIN_LEN,
    STEP_BUDGET_FACTOR,
    STEP_BUDGET_OFFSET,
    TRACE_MAX_STEPS,
)
from density_ca.config.types import (
    Boundary,
    CheckStatus,
    DensityVerdict,
    RunOutcome,
    SimulationConfig,
    SweepConfig,
    UpdateMode,
)

__all__ = [
    "Boundary",
    "CHUNK_SIZE",
    "CYCLE_WINDOW",
    "CheckStatus",
    "DensityVerdict",
    "MAX_COUNTEREXAMPLES",
    "MAX_LEN",
    "MAX_SUPPORTED_LEN",
    "MAX_SWEEP_CONFIGURATIONS",
    "MIN_LEN",
    "RunOutcome",
    "STEP_BUDGET_FACTOR",
    "STEP_BUDGET_OFFSET",
    "SimulationConfig",
    "SweepConfig",
    "TRACE_MAX_STEPS",
    "UpdateMode",
]
