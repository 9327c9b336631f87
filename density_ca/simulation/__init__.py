"""Simulation layer: reference per-configuration simulator and detectors."""

from density_ca.simulation.detectors import CycleDetector, HomogeneityDetector
from density_ca.simulation.engine import RunResult, encode, simulate, step, trace

__all__ = [
    "CycleDetector",
    "HomogeneityDetector",
    "RunResult",
    "encode",
    "simulate",
    "step",
    "trace",
]
