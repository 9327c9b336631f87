"""Configuration dataclasses and result enums for verification sweeps.

All frozen dataclasses that parameterise a single simulation or a full
exhaustive sweep live here, together with the enum vocabularies shared by the
domain, simulation, and experiment layers.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

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
)

__all__ = [
    "MAX_SWEEP_CONFIGURATIONS",
    "Boundary",
    "CheckStatus",
    "DensityVerdict",
    "RunOutcome",
    "SimulationConfig",
    "SweepConfig",
    "UpdateMode",
]

# ---------------------------------------------------------------------------
# Vocabularies
# ---------------------------------------------------------------------------


class DensityVerdict(str, Enum):
    """Correct classification of a configuration by direct majority count."""

    ALL_ZERO = "all_zero"
    ALL_ONE = "all_one"
    UNDEFINED = "undefined"


class RunOutcome(str, Enum):
    """How one simulation run ended."""

    CONVERGED_TO_ZERO = "converged_to_zero"
    CONVERGED_TO_ONE = "converged_to_one"
    CYCLE_DETECTED = "cycle_detected"
    STEP_BUDGET_EXCEEDED = "step_budget_exceeded"

    @property
    def converged(self) -> bool:
        return self in (RunOutcome.CONVERGED_TO_ZERO, RunOutcome.CONVERGED_TO_ONE)


class CheckStatus(str, Enum):
    """Comparator classification of one (verdict, outcome) pair."""

    PASS = "pass"
    FAIL_MISMATCH = "fail_mismatch"
    FAIL_NO_CONVERGENCE = "fail_no_convergence"


class UpdateMode(Enum):
    """Cell update semantics for one simulation step."""

    SEQUENTIAL = "sequential"
    SYNCHRONOUS = "synchronous"


class Boundary(Enum):
    """What edge cells see in place of the missing neighbor."""

    PERIODIC = "periodic"
    FIXED = "fixed"


# ---------------------------------------------------------------------------
# Config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SimulationConfig:
    """Per-run simulator knobs: step budget and cycle-detection window."""

    step_budget_factor: int = STEP_BUDGET_FACTOR
    step_budget_offset: int = STEP_BUDGET_OFFSET
    cycle_window: int = CYCLE_WINDOW
    use_batch_kernel: bool = True

    def __post_init__(self) -> None:
        if self.step_budget_factor < 1:
            raise ValueError("step_budget_factor must be >= 1")
        if self.step_budget_offset < 0:
            raise ValueError("step_budget_offset must be >= 0")
        if self.cycle_window < 2:
            raise ValueError("cycle_window must be >= 2")

    def step_budget_for(self, length: int) -> int:
        """Maximum number of steps allowed for a configuration of ``length``."""
        return self.step_budget_factor * length + self.step_budget_offset


@dataclass(frozen=True)
class SweepConfig:
    """Exhaustive sweep parameters including the simulator settings."""

    max_len: int = MAX_LEN
    min_len: int = MIN_LEN
    workers: int = 1
    chunk_size: int = CHUNK_SIZE
    max_counterexamples: int | None = MAX_COUNTEREXAMPLES
    out_dir: Path | None = None
    step_budget_factor: int = STEP_BUDGET_FACTOR
    step_budget_offset: int = STEP_BUDGET_OFFSET
    cycle_window: int = CYCLE_WINDOW
    use_batch_kernel: bool = True

    def __post_init__(self) -> None:
        if self.min_len < MIN_LEN:
            raise ValueError(f"min_len must be >= {MIN_LEN}")
        if self.max_len < self.min_len:
            raise ValueError("max_len must be >= min_len")
        if self.max_len > MAX_SUPPORTED_LEN:
            raise ValueError(f"max_len must be <= {MAX_SUPPORTED_LEN}")
        if self.workers < 1:
            raise ValueError("workers must be >= 1")
        if self.chunk_size < 1:
            raise ValueError("chunk_size must be >= 1")
        if self.max_counterexamples is not None and self.max_counterexamples < 0:
            raise ValueError("max_counterexamples must be >= 0 or None")
        SimulationConfig(
            step_budget_factor=self.step_budget_factor,
            step_budget_offset=self.step_budget_offset,
            cycle_window=self.cycle_window,
            use_batch_kernel=self.use_batch_kernel,
        )

    @classmethod
    def from_components(
        cls,
        simulation: SimulationConfig | None = None,
        **sweep_fields: object,
    ) -> SweepConfig:
        """Compose SweepConfig from a reusable SimulationConfig plus sweep fields."""
        simulation = simulation or SimulationConfig()
        return cls(
            step_budget_factor=simulation.step_budget_factor,
            step_budget_offset=simulation.step_budget_offset,
            cycle_window=simulation.cycle_window,
            use_batch_kernel=simulation.use_batch_kernel,
            **sweep_fields,  # type: ignore[arg-type]
        )

    def to_components(self) -> SimulationConfig:
        """Extract the simulator settings shared by every run of the sweep."""
        return SimulationConfig(
            step_budget_factor=self.step_budget_factor,
            step_budget_offset=self.step_budget_offset,
            cycle_window=self.cycle_window,
            use_batch_kernel=self.use_batch_kernel,
        )

    def total_configurations(self) -> int:
        """Number of bit-patterns enumerated (ties included) across all lengths."""
        return sum(1 << length for length in range(self.min_len, self.max_len + 1))

    def check_workload(self) -> None:
        """Refuse sweeps whose enumeration would exceed the safety cap."""
        total = self.total_configurations()
        if total > MAX_SWEEP_CONFIGURATIONS:
            raise ValueError(
                f"sweep workload of {total} configurations exceeds safety threshold "
                f"of {MAX_SWEEP_CONFIGURATIONS}; reduce max_len"
            )
