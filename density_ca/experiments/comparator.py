"""Verdict comparison and report aggregation.

:func:`classify` turns an oracle verdict and a simulator outcome into a
:class:`CheckStatus`. :class:`SweepReport` folds classified results into
per-length counters plus a bounded, ordered list of counterexamples. Reports
built from disjoint slices merge associatively, so a sweep split across
workers yields the same report as a serial one.
"""

from __future__ import annotations

from bisect import insort
from dataclasses import dataclass, field

from density_ca.config.types import CheckStatus, DensityVerdict, RunOutcome
from density_ca.domain.configuration import Configuration
from density_ca.domain.errors import InvariantViolation

_EXPECTED_OUTCOME = {
    DensityVerdict.ALL_ZERO: RunOutcome.CONVERGED_TO_ZERO,
    DensityVerdict.ALL_ONE: RunOutcome.CONVERGED_TO_ONE,
}


def _order(result: CheckResult) -> tuple[int, int]:
    return (result.configuration.length, result.configuration.code)


def classify(verdict: DensityVerdict, outcome: RunOutcome) -> CheckStatus:
    """PASS on a matching fixed point, otherwise the failure class."""
    if verdict == DensityVerdict.UNDEFINED:
        raise InvariantViolation("undefined-density configuration reached the comparator")
    if not outcome.converged:
        return CheckStatus.FAIL_NO_CONVERGENCE
    if outcome == _EXPECTED_OUTCOME[verdict]:
        return CheckStatus.PASS
    return CheckStatus.FAIL_MISMATCH


@dataclass(frozen=True)
class CheckResult:
    """One verified configuration: expected verdict, observed outcome, status."""

    configuration: Configuration
    verdict: DensityVerdict
    outcome: RunOutcome
    status: CheckStatus
    steps: int
    period: int | None = None

    def to_row(self) -> dict[str, int | str | None]:
        return {
            "length": self.configuration.length,
            "code": self.configuration.code,
            "pattern": str(self.configuration),
            "expected": self.verdict.value,
            "outcome": self.outcome.value,
            "status": self.status.value,
            "steps": self.steps,
            "period": self.period,
        }


@dataclass
class LengthStats:
    """Running counters for one configuration length."""

    length: int
    skipped: int = 0
    passed: int = 0
    fail_mismatch: int = 0
    fail_cycle: int = 0
    fail_budget: int = 0
    max_steps: int = 0

    @property
    def fail_no_convergence(self) -> int:
        return self.fail_cycle + self.fail_budget

    @property
    def failed(self) -> int:
        return self.fail_mismatch + self.fail_no_convergence

    @property
    def tested(self) -> int:
        return self.passed + self.failed

    @property
    def enumerated(self) -> int:
        return self.tested + self.skipped

    def merge(self, other: LengthStats) -> None:
        if other.length != self.length:
            raise ValueError("cannot merge stats of different lengths")
        self.skipped += other.skipped
        self.passed += other.passed
        self.fail_mismatch += other.fail_mismatch
        self.fail_cycle += other.fail_cycle
        self.fail_budget += other.fail_budget
        self.max_steps = max(self.max_steps, other.max_steps)

    def to_row(self) -> dict[str, int]:
        return {
            "length": self.length,
            "enumerated": self.enumerated,
            "skipped": self.skipped,
            "tested": self.tested,
            "passed": self.passed,
            "fail_mismatch": self.fail_mismatch,
            "fail_cycle": self.fail_cycle,
            "fail_budget": self.fail_budget,
            "max_steps": self.max_steps,
        }


@dataclass
class SweepReport:
    """Aggregated sweep outcome: per-length counters and counterexamples.

    ``max_counterexamples=None`` keeps every failure. Otherwise only the
    first failures in ``(length, code)`` order are kept and the rest are
    counted in ``dropped_counterexamples``.
    """

    rule_name: str = ""
    max_counterexamples: int | None = None
    lengths: dict[int, LengthStats] = field(default_factory=dict)
    counterexamples: list[CheckResult] = field(default_factory=list)
    dropped_counterexamples: int = 0

    def _stats(self, length: int) -> LengthStats:
        stats = self.lengths.get(length)
        if stats is None:
            stats = self.lengths[length] = LengthStats(length=length)
        return stats

    def record_skip(self, length: int, count: int = 1) -> None:
        self._stats(length).skipped += count

    def record_passes(self, length: int, count: int, max_steps: int) -> None:
        """Count ``count`` passing configurations at once (batch fast path)."""
        stats = self._stats(length)
        stats.passed += count
        stats.max_steps = max(stats.max_steps, max_steps)

    def record(self, result: CheckResult) -> None:
        stats = self._stats(result.configuration.length)
        stats.max_steps = max(stats.max_steps, result.steps)
        if result.status == CheckStatus.PASS:
            stats.passed += 1
            return
        if result.status == CheckStatus.FAIL_MISMATCH:
            stats.fail_mismatch += 1
        elif result.outcome == RunOutcome.CYCLE_DETECTED:
            stats.fail_cycle += 1
        else:
            stats.fail_budget += 1
        self._keep_counterexample(result)

    def _keep_counterexample(self, result: CheckResult) -> None:
        bound = self.max_counterexamples
        if bound is not None and len(self.counterexamples) >= bound:
            if bound == 0 or _order(result) > _order(self.counterexamples[-1]):
                self.dropped_counterexamples += 1
                return
        insort(self.counterexamples, result, key=_order)
        if bound is not None and len(self.counterexamples) > bound:
            self.counterexamples.pop()
            self.dropped_counterexamples += 1

    def _keep_counterexamples(self, results: list[CheckResult]) -> None:
        merged = sorted(self.counterexamples + results, key=_order)
        if self.max_counterexamples is not None and len(merged) > self.max_counterexamples:
            self.dropped_counterexamples += len(merged) - self.max_counterexamples
            merged = merged[: self.max_counterexamples]
        self.counterexamples = merged

    def merge(self, other: SweepReport) -> None:
        """Fold ``other`` (a disjoint slice of the same sweep) into this report."""
        for length, stats in other.lengths.items():
            self._stats(length).merge(stats)
        self.dropped_counterexamples += other.dropped_counterexamples
        self._keep_counterexamples(other.counterexamples)

    @property
    def total_skipped(self) -> int:
        return sum(stats.skipped for stats in self.lengths.values())

    @property
    def total_tested(self) -> int:
        return sum(stats.tested for stats in self.lengths.values())

    @property
    def total_passed(self) -> int:
        return sum(stats.passed for stats in self.lengths.values())

    @property
    def total_failed(self) -> int:
        return sum(stats.failed for stats in self.lengths.values())

    @property
    def failures_by_status(self) -> dict[CheckStatus, int]:
        return {
            CheckStatus.FAIL_MISMATCH: sum(s.fail_mismatch for s in self.lengths.values()),
            CheckStatus.FAIL_NO_CONVERGENCE: sum(
                s.fail_no_convergence for s in self.lengths.values()
            ),
        }

    @property
    def failures_by_outcome(self) -> dict[RunOutcome, int]:
        """Non-convergence failures split into cycling and budget exhaustion."""
        return {
            RunOutcome.CYCLE_DETECTED: sum(s.fail_cycle for s in self.lengths.values()),
            RunOutcome.STEP_BUDGET_EXCEEDED: sum(s.fail_budget for s in self.lengths.values()),
        }

    @property
    def passed_all(self) -> bool:
        return self.total_failed == 0

    def length_rows(self) -> list[dict[str, int]]:
        return [self.lengths[length].to_row() for length in sorted(self.lengths)]

    def to_summary(self) -> dict[str, object]:
        """JSON-ready summary of the whole sweep."""
        return {
            "rule": self.rule_name,
            "passed_all": self.passed_all,
            "total_tested": self.total_tested,
            "total_skipped": self.total_skipped,
            "total_passed": self.total_passed,
            "total_failed": self.total_failed,
            "failures": {
                status.value: count for status, count in self.failures_by_status.items()
            },
            "non_convergence": {
                outcome.value: count for outcome, count in self.failures_by_outcome.items()
            },
            "lengths": self.length_rows(),
            "counterexamples": [result.to_row() for result in self.counterexamples],
            "dropped_counterexamples": self.dropped_counterexamples,
        }
