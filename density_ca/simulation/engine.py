"""Reference simulator: run one configuration under a transition rule.

The simulator follows the rule's declared radius, update mode, and boundary.
It stops at the first of: homogeneous settled state, repeated state (cycle),
or exhausted step budget. It is a pure function of its inputs.
"""

from __future__ import annotations

from dataclasses import dataclass

from density_ca.config.constants import TRACE_MAX_STEPS
from density_ca.config.types import Boundary, RunOutcome, SimulationConfig, UpdateMode
from density_ca.domain.cells import CAState, CellState
from density_ca.domain.configuration import Configuration
from density_ca.domain.enumerator import is_tie
from density_ca.domain.errors import InvariantViolation
from density_ca.domain.rules import TransitionRule
from density_ca.simulation.detectors import CycleDetector, HomogeneityDetector


@dataclass(frozen=True)
class RunResult:
    """Outcome of one simulation run."""

    outcome: RunOutcome
    steps: int
    period: int | None = None


def encode(configuration: Configuration, rule: TransitionRule) -> CAState:
    """Step-0 CA state: each input bit mapped to the rule's base symbol."""
    return tuple(rule.encode(bit) for bit in configuration.bits())


def _window(
    cells: list[CellState] | CAState, index: int, rule: TransitionRule
) -> tuple[CellState, ...]:
    size = len(cells)
    window: list[CellState] = []
    for offset in range(-rule.radius, rule.radius + 1):
        neighbor = index + offset
        if 0 <= neighbor < size:
            window.append(cells[neighbor])
        elif rule.boundary == Boundary.PERIODIC:
            window.append(cells[neighbor % size])
        else:
            window.append(rule.boundary_state)
    return tuple(window)


def step(state: CAState, rule: TransitionRule) -> CAState:
    """Advance ``state`` by one step.

    Synchronous rules read only the previous state. Sequential rules update
    cells left to right in place, so cell ``k`` sees the new value of cell
    ``k - 1`` and the old values of every cell to its right (including the
    wrapped-around last cell when cell 0 is updated on a ring).
    """
    if rule.update_mode == UpdateMode.SYNCHRONOUS:
        return tuple(rule.apply(_window(state, index, rule)) for index in range(len(state)))

    cells = list(state)
    for index in range(len(cells)):
        cells[index] = rule.apply(_window(cells, index, rule))
    return tuple(cells)


def simulate(
    configuration: Configuration,
    rule: TransitionRule,
    config: SimulationConfig | None = None,
) -> RunResult:
    """Run ``configuration`` to a fixed point, a cycle, or the step budget."""
    if configuration.length < 1:
        raise InvariantViolation("empty configuration reached the simulator")
    if is_tie(configuration.code, configuration.length):
        raise InvariantViolation(f"undefined-density configuration {configuration} was simulated")
    config = config or SimulationConfig()
    step_budget = config.step_budget_for(configuration.length)

    homogeneity = HomogeneityDetector(rule.settled_value)
    cycles = CycleDetector(window=config.cycle_window)

    state = encode(configuration, rule)
    steps = 0
    if homogeneity.observe(state):
        return RunResult(outcome=_converged(homogeneity.value), steps=steps)
    cycles.observe(state)

    while True:
        state = step(state, rule)
        steps += 1
        if homogeneity.observe(state):
            return RunResult(outcome=_converged(homogeneity.value), steps=steps)
        if cycles.observe(state):
            return RunResult(outcome=RunOutcome.CYCLE_DETECTED, steps=steps, period=cycles.period)
        if steps >= step_budget:
            return RunResult(outcome=RunOutcome.STEP_BUDGET_EXCEEDED, steps=steps)


def _converged(value: int | None) -> RunOutcome:
    return RunOutcome.CONVERGED_TO_ONE if value == 1 else RunOutcome.CONVERGED_TO_ZERO


def trace(
    configuration: Configuration,
    rule: TransitionRule,
    max_steps: int = TRACE_MAX_STEPS,
) -> list[CAState]:
    """Return the CA states from step 0 until convergence or ``max_steps`` steps."""
    if configuration.length < 1:
        raise ValueError("cannot trace an empty configuration")
    if max_steps < 0:
        raise ValueError("max_steps must be >= 0")
    homogeneity = HomogeneityDetector(rule.settled_value)
    state = encode(configuration, rule)
    states = [state]
    while not homogeneity.observe(state) and len(states) <= max_steps:
        state = step(state, rule)
        states.append(state)
    return states
