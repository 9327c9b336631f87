"""CLI entrypoint for the exhaustive verification sweep.

This module owns CLI argument parsing and the final summary. All domain
logic lives in the extracted modules:

- ``density_ca.config``               – sweep / simulation configuration
- ``density_ca.experiments.sweep``    – ``run_sweep`` orchestration
- ``density_ca.io.report``            – Parquet and JSON persistence
- ``density_ca.viz.render``           – text trace of a counterexample
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from density_ca.config.constants import (
    CHUNK_SIZE,
    CYCLE_WINDOW,
    MAX_COUNTEREXAMPLES,
    MAX_LEN,
    MIN_LEN,
    STEP_BUDGET_FACTOR,
    STEP_BUDGET_OFFSET,
)
from density_ca.config.types import SweepConfig
from density_ca.domain.rules import RULES, IntermediateAlphabetRule, TransitionRule, get_rule
from density_ca.experiments.comparator import SweepReport
from density_ca.experiments.sweep import run_sweep
from density_ca.simulation.engine import trace
from density_ca.viz.render import render_trace

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
"""Log levels accepted by ``--log-level`` and the ``log_level`` config key."""

# ---------------------------------------------------------------------------
# CLI parsing helpers
# ---------------------------------------------------------------------------


def _coerce_bool(raw: object, key: str) -> bool:
    """Coerce raw value to bool with strict string-check."""
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, str):
        normalized = raw.strip().lower()
        if normalized in {"1", "true", "yes", "on"}:
            return True
        if normalized in {"0", "false", "no", "off"}:
            return False
    raise ValueError(f"{key} must be a boolean value")


def _coerce_int(raw: object, key: str) -> int:
    """Coerce raw value to int; rejects booleans and non-integer floats."""
    if isinstance(raw, bool):
        raise ValueError(f"{key} must be an integer value")
    if isinstance(raw, float):
        if raw != int(raw):
            raise ValueError(f"{key} must be an integer value, got {raw!r}")
        return int(raw)
    if isinstance(raw, (int, str)):
        return int(raw)
    raise ValueError(f"{key} must be an integer value")


def _coerce_str(raw: object, key: str) -> str:
    """Coerce raw value to str; rejects booleans."""
    if isinstance(raw, bool):
        raise ValueError(f"{key} must be a string-coercible value")
    if isinstance(raw, (str, Path, int, float)):
        return str(raw)
    raise ValueError(f"{key} must be a string-coercible value")


def _get_val(cli_val: object, key: str, file_cfg: dict[str, object], default: object) -> object:
    """CLI > file > default resolution."""
    if cli_val is not None:
        return cli_val
    return file_cfg.get(key, default)


def _get_bool(cli_val: bool | None, key: str, file_cfg: dict[str, object], default: bool) -> bool:
    return _coerce_bool(_get_val(cli_val, key, file_cfg, default), key)


def _get_int(cli_val: int | None, key: str, file_cfg: dict[str, object], default: int) -> int:
    return _coerce_int(_get_val(cli_val, key, file_cfg, default), key)


def _get_optional_int(
    cli_val: int | None, key: str, file_cfg: dict[str, object], default: int | None
) -> int | None:
    """Like :func:`_get_int`, but JSON ``null`` or a negative value means unbounded."""
    raw = _get_val(cli_val, key, file_cfg, default)
    if raw is None:
        return None
    value = _coerce_int(raw, key)
    return None if value < 0 else value


def _get_str(cli_val: str | None, key: str, file_cfg: dict[str, object], default: str) -> str:
    return _coerce_str(_get_val(cli_val, key, file_cfg, default), key)


def _build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        description="Exhaustively verify a density-classification rule"
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="JSON config file (CLI args override file values)",
    )
    parser.add_argument("--max-len", type=int, default=None)
    parser.add_argument("--min-len", type=int, default=None)
    parser.add_argument("--workers", type=int, default=None)
    parser.add_argument("--chunk-size", type=int, default=None)
    parser.add_argument(
        "--max-counterexamples",
        type=int,
        default=None,
        help="counterexamples kept in the report; negative keeps all",
    )
    parser.add_argument("--step-budget-factor", type=int, default=None)
    parser.add_argument("--step-budget-offset", type=int, default=None)
    parser.add_argument("--cycle-window", type=int, default=None)
    parser.add_argument("--batch-kernel", action=argparse.BooleanOptionalAction, default=None)
    parser.add_argument("--rule", type=str, choices=sorted(RULES), default=None)
    parser.add_argument("--out-dir", type=Path, default=None)
    parser.add_argument(
        "--log-level",
        type=str,
        choices=LOG_LEVELS,
        default=None,
    )
    parser.add_argument(
        "--show-first-counterexample",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="print the text trace of the smallest counterexample",
    )
    return parser


def _print_first_counterexample(report: SweepReport, rule: TransitionRule) -> None:
    if not report.counterexamples:
        return
    first = report.counterexamples[0]
    print(
        f"first counterexample {first.configuration}: expected {first.verdict.value}, "
        f"observed {first.outcome.value} after {first.steps} steps"
    )
    print(render_trace(trace(first.configuration, rule), rule))


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint for the exhaustive sweep.

    Supports ``--config path/to/config.json`` for reproducible runs. CLI
    arguments override config-file values; config-file values override
    built-in defaults. Returns 0 when every configuration passed, else 1.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    # Load config file defaults (CLI overrides file, file overrides built-in)
    file_cfg: dict[str, object] = {}
    if args.config is not None:
        try:
            file_cfg = json.loads(Path(args.config).read_text())
        except FileNotFoundError:
            parser.error(f"Config file not found: {args.config}")
        except json.JSONDecodeError as exc:
            parser.error(f"Config file is not valid JSON: {args.config}: {exc}")
        if not isinstance(file_cfg, dict):
            parser.error(f"Config file must hold a JSON object: {args.config}")

    try:
        log_level = _get_str(args.log_level, "log_level", file_cfg, "INFO").upper()
        if log_level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        rule_name = _get_str(args.rule, "rule", file_cfg, IntermediateAlphabetRule.name)
        rule = get_rule(rule_name)
        out_dir_raw = _get_val(args.out_dir, "out_dir", file_cfg, None)
        show_first = _get_bool(
            args.show_first_counterexample, "show_first_counterexample", file_cfg, False
        )
        config = SweepConfig(
            max_len=_get_int(args.max_len, "max_len", file_cfg, MAX_LEN),
            min_len=_get_int(args.min_len, "min_len", file_cfg, MIN_LEN),
            workers=_get_int(args.workers, "workers", file_cfg, 1),
            chunk_size=_get_int(args.chunk_size, "chunk_size", file_cfg, CHUNK_SIZE),
            max_counterexamples=_get_optional_int(
                args.max_counterexamples, "max_counterexamples", file_cfg, MAX_COUNTEREXAMPLES
            ),
            out_dir=None if out_dir_raw is None else Path(_coerce_str(out_dir_raw, "out_dir")),
            step_budget_factor=_get_int(
                args.step_budget_factor, "step_budget_factor", file_cfg, STEP_BUDGET_FACTOR
            ),
            step_budget_offset=_get_int(
                args.step_budget_offset, "step_budget_offset", file_cfg, STEP_BUDGET_OFFSET
            ),
            cycle_window=_get_int(args.cycle_window, "cycle_window", file_cfg, CYCLE_WINDOW),
            use_batch_kernel=_get_bool(args.batch_kernel, "use_batch_kernel", file_cfg, True),
        )
        config.check_workload()
    except ValueError as exc:
        parser.error(str(exc))

    logging.basicConfig(
        level=getattr(logging, log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    report = run_sweep(config, rule)
    summary = {
        "mode": "sweep",
        "min_len": config.min_len,
        "max_len": config.max_len,
        **report.to_summary(),
    }
    print(json.dumps(summary, ensure_ascii=False, indent=2))
    if show_first:
        _print_first_counterexample(report, rule)
    return 0 if report.passed_all else 1


if __name__ == "__main__":
    raise SystemExit(main())
