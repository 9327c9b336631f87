"""Experiments layer: verdict comparison, sweep orchestration, and the sweep CLI."""

from density_ca.experiments.comparator import CheckResult, LengthStats, SweepReport, classify
from density_ca.experiments.sweep import (
    ChunkJob,
    iter_jobs,
    run_sweep,
    verify_chunk,
    verify_configuration,
)

__all__ = [
    "CheckResult",
    "ChunkJob",
    "LengthStats",
    "SweepReport",
    "classify",
    "iter_jobs",
    "run_sweep",
    "verify_chunk",
    "verify_configuration",
]
