"""Persist sweep reports as Parquet tables plus a JSON summary."""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING

import pyarrow as pa
import pyarrow.parquet as pq

from density_ca.io.paths import (
    counterexamples_path,
    length_summary_path,
    logs_dir,
    sweep_summary_path,
)
from density_ca.io.schemas import (
    COUNTEREXAMPLE_SCHEMA,
    LENGTH_SUMMARY_SCHEMA,
    REPORT_SCHEMA_VERSION,
)

if TYPE_CHECKING:
    from density_ca.config.types import SweepConfig
    from density_ca.experiments.comparator import SweepReport


def _config_metadata(config: SweepConfig) -> dict[str, object]:
    return {
        "max_len": config.max_len,
        "min_len": config.min_len,
        "workers": config.workers,
        "chunk_size": config.chunk_size,
        "max_counterexamples": config.max_counterexamples,
        "step_budget_factor": config.step_budget_factor,
        "step_budget_offset": config.step_budget_offset,
        "cycle_window": config.cycle_window,
        "use_batch_kernel": config.use_batch_kernel,
    }


def write_report(
    report: SweepReport, out_dir: Path, config: SweepConfig | None = None
) -> dict[str, Path]:
    """Write length summary, counterexamples, and JSON summary under ``out_dir``."""
    out_dir = Path(out_dir)
    logs_dir(out_dir).mkdir(parents=True, exist_ok=True)

    summary_table = pa.Table.from_pylist(report.length_rows(), schema=LENGTH_SUMMARY_SCHEMA)
    pq.write_table(summary_table, length_summary_path(out_dir))

    counterexample_table = pa.Table.from_pylist(
        [result.to_row() for result in report.counterexamples],
        schema=COUNTEREXAMPLE_SCHEMA,
    )
    pq.write_table(counterexample_table, counterexamples_path(out_dir))

    payload: dict[str, object] = {"schema_version": REPORT_SCHEMA_VERSION}
    if config is not None:
        payload["config"] = _config_metadata(config)
    payload.update(report.to_summary())
    sweep_summary_path(out_dir).write_text(json.dumps(payload, ensure_ascii=False, indent=2))

    return {
        "length_summary": length_summary_path(out_dir),
        "counterexamples": counterexamples_path(out_dir),
        "sweep_summary": sweep_summary_path(out_dir),
    }


def load_length_summary(path: Path) -> list[dict[str, object]]:
    """Read a per-length summary Parquet file back as row dicts."""
    return pq.read_table(path).to_pylist()


def load_counterexamples(path: Path) -> list[dict[str, object]]:
    """Read a counterexamples Parquet file back as row dicts ordered by length, code."""
    rows = pq.read_table(path).to_pylist()
    return sorted(rows, key=lambda row: (row["length"], row["code"]))
