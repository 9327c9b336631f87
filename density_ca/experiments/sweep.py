"""Exhaustive verification sweep over every configuration up to ``max_len``.

Each length is split into disjoint code ranges (work units). A work unit is
verified independently into a partial :class:`SweepReport`; partials are
merged in code order, so serial and parallel sweeps produce identical
reports. Rules that provide ``simulate_batch`` are evaluated with the
vectorised kernel first; every configuration the kernel does not confirm as a
pass is re-run through the reference simulator for an exact outcome.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from concurrent.futures import Executor, ProcessPoolExecutor
from dataclasses import dataclass

import numpy as np

from density_ca.config.types import DensityVerdict, SimulationConfig, SweepConfig
from density_ca.domain.configuration import Configuration
from density_ca.domain.enumerator import configurations_of_length, partition_length
from density_ca.domain.errors import InvariantViolation
from density_ca.domain.oracle import density_verdict
from density_ca.domain.rules import IntermediateAlphabetRule, TransitionRule
from density_ca.experiments.comparator import CheckResult, SweepReport, classify
from density_ca.io.report import write_report
from density_ca.simulation.engine import simulate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChunkJob:
    """One work unit: the codes ``[start, stop)`` of a single length."""

    length: int
    start: int
    stop: int
    rule: TransitionRule
    simulation: SimulationConfig
    max_counterexamples: int | None


def verify_configuration(
    configuration: Configuration,
    rule: TransitionRule,
    simulation: SimulationConfig | None = None,
) -> CheckResult:
    """Run oracle and simulator on one configuration and classify the pair."""
    verdict = density_verdict(configuration)
    if verdict == DensityVerdict.UNDEFINED:
        raise InvariantViolation(
            f"undefined-density configuration {configuration} escaped the enumerator"
        )
    run = simulate(configuration, rule, simulation)
    return CheckResult(
        configuration=configuration,
        verdict=verdict,
        outcome=run.outcome,
        status=classify(verdict, run.outcome),
        steps=run.steps,
        period=run.period,
    )


def _popcount(codes: np.ndarray, length: int) -> np.ndarray:
    ones = np.zeros_like(codes)
    for bit in range(length):
        ones += (codes >> bit) & 1
    return ones


def _verify_reference(job: ChunkJob, report: SweepReport) -> None:
    yielded = 0
    for configuration in configurations_of_length(job.length, job.start, job.stop):
        yielded += 1
        report.record(verify_configuration(configuration, job.rule, job.simulation))
    report.record_skip(job.length, (job.stop - job.start) - yielded)


def _verify_batch(job: ChunkJob, report: SweepReport) -> None:
    length = job.length
    codes = np.arange(job.start, job.stop, dtype=np.int64)
    ones = _popcount(codes, length)
    tie = 2 * ones == length
    report.record_skip(length, int(tie.sum()))

    live = codes[~tie]
    expected = (2 * ones[~tie] > length).astype(np.int8)
    values, steps = job.rule.simulate_batch(  # type: ignore[attr-defined]
        live, length, job.simulation.step_budget_for(length)
    )
    confirmed = values == expected
    if confirmed.any():
        report.record_passes(length, int(confirmed.sum()), int(steps[confirmed].max()))
    for code in live[~confirmed]:
        configuration = Configuration(length=length, code=int(code))
        report.record(verify_configuration(configuration, job.rule, job.simulation))


def verify_chunk(job: ChunkJob) -> SweepReport:
    """Verify one work unit into a partial report (module level for pickling)."""
    report = SweepReport(rule_name=job.rule.name, max_counterexamples=job.max_counterexamples)
    if job.simulation.use_batch_kernel and hasattr(job.rule, "simulate_batch"):
        _verify_batch(job, report)
    else:
        _verify_reference(job, report)
    return report


def iter_jobs(config: SweepConfig, rule: TransitionRule, length: int) -> Iterator[ChunkJob]:
    """Work units covering every code of ``length``."""
    simulation = config.to_components()
    for start, stop in partition_length(length, config.chunk_size):
        yield ChunkJob(
            length=length,
            start=start,
            stop=stop,
            rule=rule,
            simulation=simulation,
            max_counterexamples=config.max_counterexamples,
        )


def _verify_length(
    config: SweepConfig, rule: TransitionRule, length: int, executor: Executor | None
) -> SweepReport:
    report = SweepReport(rule_name=rule.name, max_counterexamples=config.max_counterexamples)
    jobs = iter_jobs(config, rule, length)
    partials = map(verify_chunk, jobs) if executor is None else executor.map(verify_chunk, jobs)
    for partial in partials:
        report.merge(partial)
    return report


def run_sweep(config: SweepConfig, rule: TransitionRule | None = None) -> SweepReport:
    """Verify ``rule`` on every configuration of length ``min_len..max_len``.

    Findings (mismatches, cycles, exhausted budgets) are accumulated in the
    returned report. :class:`InvariantViolation` and resource errors abort
    the sweep.
    """
    config.check_workload()
    rule = rule or IntermediateAlphabetRule()
    report = SweepReport(rule_name=rule.name, max_counterexamples=config.max_counterexamples)

    executor: ProcessPoolExecutor | None = None
    if config.workers > 1:
        executor = ProcessPoolExecutor(max_workers=config.workers)
    try:
        for length in range(config.min_len, config.max_len + 1):
            logger.debug("verifying length %d with rule %s", length, rule.name)
            length_report = _verify_length(config, rule, length, executor)
            stats = length_report.lengths[length]
            if stats.failed:
                logger.warning(
                    "length %d: %d failures (%d mismatch, %d cycle, %d budget)",
                    length,
                    stats.failed,
                    stats.fail_mismatch,
                    stats.fail_cycle,
                    stats.fail_budget,
                )
            else:
                logger.info(
                    "length %d clean: %d tested, %d skipped, max %d steps",
                    length,
                    stats.tested,
                    stats.skipped,
                    stats.max_steps,
                )
            report.merge(length_report)
    finally:
        if executor is not None:
            executor.shutdown()

    if config.out_dir is not None:
        write_report(report, config.out_dir, config)
    return report
