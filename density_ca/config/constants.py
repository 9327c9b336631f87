"""Centralized constants for density-classification sweeps.

All magic numbers that appear across multiple modules are defined here.
Consuming modules should import from this module rather than defining
their own inline literals.
"""

from __future__ import annotations

MAX_LEN = 30
"""Default maximum configuration length covered by a sweep."""

MIN_LEN = 1
"""Shortest configuration length; length 0 is out of scope."""

MAX_SUPPORTED_LEN = 62
"""Hard upper bound on configuration length (codes must fit in int64 arrays)."""

STEP_BUDGET_FACTOR = 2
"""Step budget slope: the rule claims roughly length / 2 steps."""

STEP_BUDGET_OFFSET = 2
"""Constant added to the step budget so tiny lengths still get headroom."""

CYCLE_WINDOW = 256
"""Number of past CA states compared against when looking for a cycle."""

CHUNK_SIZE = 65_536
"""Number of codes verified per work unit (one worker task)."""

MAX_COUNTEREXAMPLES = 1_000
"""Default cap on counterexamples retained in a report."""

MAX_SWEEP_CONFIGURATIONS = 2**32
"""Safety cap on total enumerated configurations across all lengths."""

TRACE_MAX_STEPS = 200
"""Default number of steps recorded when tracing a single run."""
