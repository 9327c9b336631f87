"""Tests for simulation/engine.py and simulation/detectors.py."""

from __future__ import annotations

from dataclasses import dataclass, field

import pytest

from density_ca.config.types import Boundary, RunOutcome, SimulationConfig, UpdateMode
from density_ca.domain.cells import SETTLED_0, SETTLED_1, CellState
from density_ca.domain.configuration import Configuration
from density_ca.domain.errors import InvariantViolation
from density_ca.domain.rules import IntermediateAlphabetRule, LocalMajorityRule
from density_ca.simulation.detectors import CycleDetector, HomogeneityDetector
from density_ca.simulation.engine import encode, simulate, step, trace

RULE = IntermediateAlphabetRule()


@dataclass(frozen=True)
class ShiftRule:
    """Synchronous right shift: every cell copies its left neighbour."""

    name: str = "shift"
    radius: int = 1
    update_mode: UpdateMode = UpdateMode.SYNCHRONOUS
    boundary: Boundary = Boundary.PERIODIC
    boundary_state: CellState = field(default=SETTLED_0)

    def encode(self, bit: int) -> CellState:
        return SETTLED_1 if bit else SETTLED_0

    def apply(self, window: tuple[CellState, ...]) -> CellState:
        return window[0]

    def settled_value(self, cell: CellState) -> int | None:
        return int(cell.value)

    def render(self, cell: CellState) -> tuple[str, str, str]:
        return ("1" if cell.value else "0", " ", " ")


def _pattern(state: tuple[CellState, ...]) -> str:
    return "".join("1" if cell.value else "0" for cell in state)


class TestStep:
    def test_periodic_shift_wraps_last_cell(self) -> None:
        state = encode(Configuration.from_string("1001"), ShiftRule())
        assert _pattern(step(state, ShiftRule())) == "1100"

    def test_fixed_boundary_feeds_boundary_state(self) -> None:
        rule = ShiftRule(boundary=Boundary.FIXED)
        state = encode(Configuration.from_string("1001"), rule)
        assert _pattern(step(state, rule)) == "0100"

    def test_sequential_update_reads_new_left_value(self) -> None:
        state = step(encode(Configuration.from_string("110"), RULE), RULE)
        assert [RULE.render(cell) for cell in state] == [
            ("X", "B", ","),
            ("1", "B", ","),
            ("X", "B", ";"),
        ]

    def test_synchronous_update_reads_old_state(self) -> None:
        rule = ShiftRule()
        state = encode(Configuration.from_string("100"), rule)
        assert _pattern(step(state, rule)) == "010"


class TestSimulate:
    @pytest.mark.parametrize(
        ("pattern", "outcome"),
        [
            ("0", RunOutcome.CONVERGED_TO_ZERO),
            ("1", RunOutcome.CONVERGED_TO_ONE),
            ("00", RunOutcome.CONVERGED_TO_ZERO),
            ("11", RunOutcome.CONVERGED_TO_ONE),
        ],
    )
    def test_homogeneous_input_converges_at_step_zero(
        self, pattern: str, outcome: RunOutcome
    ) -> None:
        result = simulate(Configuration.from_string(pattern), RULE)
        assert result.outcome == outcome
        assert result.steps == 0

    @pytest.mark.parametrize(
        ("pattern", "outcome"),
        [
            ("110", RunOutcome.CONVERGED_TO_ONE),
            ("100", RunOutcome.CONVERGED_TO_ZERO),
            ("11100", RunOutcome.CONVERGED_TO_ONE),
        ],
    )
    def test_small_configurations_converge_to_majority(
        self, pattern: str, outcome: RunOutcome
    ) -> None:
        result = simulate(Configuration.from_string(pattern), RULE)
        assert result.outcome == outcome
        assert result.period is None

    def test_reports_step_count(self) -> None:
        assert simulate(Configuration.from_string("110"), RULE).steps == 3
        assert simulate(Configuration.from_string("11100"), RULE).steps == 4

    def test_frozen_mixed_state_is_a_cycle(self) -> None:
        result = simulate(Configuration.from_string("11000"), LocalMajorityRule())
        assert result.outcome == RunOutcome.CYCLE_DETECTED
        assert result.steps == 1
        assert result.period == 1

    def test_shift_cycles_with_full_period(self) -> None:
        result = simulate(Configuration.from_string("10000"), ShiftRule())
        assert result.outcome == RunOutcome.CYCLE_DETECTED
        assert result.period == 5

    def test_short_window_exhausts_budget(self) -> None:
        config = SimulationConfig(step_budget_factor=1, step_budget_offset=0, cycle_window=2)
        result = simulate(Configuration.from_string("10000"), ShiftRule(), config)
        assert result.outcome == RunOutcome.STEP_BUDGET_EXCEEDED
        assert result.steps == 5

    def test_budget_of_one_step_per_cell_suffices_for_small_runs(self) -> None:
        config = SimulationConfig(step_budget_factor=1, step_budget_offset=0)
        result = simulate(Configuration.from_string("11100"), RULE, config)
        assert result.outcome == RunOutcome.CONVERGED_TO_ONE
        result = simulate(Configuration.from_string("110"), RULE, config)
        assert result.outcome == RunOutcome.CONVERGED_TO_ONE

    def test_is_deterministic(self) -> None:
        configuration = Configuration.from_string("1101001")
        assert simulate(configuration, RULE) == simulate(configuration, RULE)

    def test_tie_is_an_invariant_violation(self) -> None:
        with pytest.raises(InvariantViolation):
            simulate(Configuration.from_string("1010"), RULE)

    def test_empty_is_an_invariant_violation(self) -> None:
        with pytest.raises(InvariantViolation):
            simulate(Configuration(length=0, code=0), RULE)


class TestTrace:
    def test_trace_stops_at_convergence(self) -> None:
        states = trace(Configuration.from_string("110"), RULE)
        assert len(states) == 4
        assert _pattern(states[-1]) == "111"

    def test_trace_respects_max_steps(self) -> None:
        states = trace(Configuration.from_string("10000"), ShiftRule(), max_steps=3)
        assert len(states) == 4

    def test_trace_rejects_invalid_arguments(self) -> None:
        with pytest.raises(ValueError, match="empty"):
            trace(Configuration(length=0, code=0), RULE)
        with pytest.raises(ValueError, match="max_steps"):
            trace(Configuration.from_string("1"), RULE, max_steps=-1)


class TestCycleDetector:
    def test_detects_repeat_and_period(self) -> None:
        detector = CycleDetector(window=4)
        assert [detector.observe(s) for s in "abc"] == [False, False, False]
        assert detector.observe("a")
        assert detector.period == 3

    def test_forgets_states_outside_window(self) -> None:
        detector = CycleDetector(window=2)
        assert not any(detector.observe(s) for s in "abcd")
        assert not detector.observe("a")
        assert detector.period is None

    def test_rejects_tiny_window(self) -> None:
        with pytest.raises(ValueError, match="window"):
            CycleDetector(window=1)


class TestHomogeneityDetector:
    def test_uniform_settled_cells(self) -> None:
        detector = HomogeneityDetector(RULE.settled_value)
        assert detector.observe((SETTLED_1, SETTLED_1))
        assert detector.value == 1

    def test_mixed_or_intermediate_cells(self) -> None:
        detector = HomogeneityDetector(RULE.settled_value)
        assert not detector.observe((SETTLED_0, SETTLED_1))
        assert not detector.observe((CellState(value=False, intermediate=True), SETTLED_0))
        assert not detector.observe(())
        assert detector.value is None
