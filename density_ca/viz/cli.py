"""CLI for inspecting a single run: text trace and optional space-time figure."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from random import Random

from density_ca.config.constants import TRACE_MAX_STEPS
from density_ca.config.types import DensityVerdict
from density_ca.domain.configuration import Configuration, random_configuration
from density_ca.domain.oracle import density_verdict
from density_ca.domain.rules import RULES, IntermediateAlphabetRule, get_rule
from density_ca.simulation.engine import simulate, trace
from density_ca.viz.render import render_spacetime, render_trace

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Show the execution of one configuration")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--pattern", type=str, help="0/1 string, cell 0 first")
    source.add_argument("--random", type=int, metavar="LENGTH", help="random configuration")
    parser.add_argument("--seed", type=int, default=None, help="seed for --random")
    parser.add_argument(
        "--rule", type=str, choices=sorted(RULES), default=IntermediateAlphabetRule.name
    )
    parser.add_argument("--max-steps", type=int, default=TRACE_MAX_STEPS)
    parser.add_argument("--output", type=Path, default=None, help="space-time figure path")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Print the trace of one run; returns 0, or 2 on invalid input."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    try:
        if args.pattern is not None:
            configuration = Configuration.from_string(args.pattern)
        else:
            configuration = random_configuration(args.random, Random(args.seed))
        if configuration.length < 1:
            raise ValueError("configuration must not be empty")
        if args.max_steps < 0:
            raise ValueError("max-steps must be >= 0")
    except ValueError as exc:
        parser.error(str(exc))

    rule = get_rule(args.rule)
    states = trace(configuration, rule, max_steps=args.max_steps)
    print(render_trace(states, rule))

    verdict = density_verdict(configuration)
    if verdict == DensityVerdict.UNDEFINED:
        print(f"{configuration}: density undefined (tie), not classified")
    else:
        run = simulate(configuration, rule)
        print(
            f"{configuration}: expected {verdict.value}, "
            f"observed {run.outcome.value} after {run.steps} steps"
        )

    if args.output is not None:
        written = render_spacetime(states, args.output, title=f"{rule.name}: {configuration}")
        logger.info("wrote %s", written)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
