"""Path construction helpers for sweep output directories."""

from __future__ import annotations

from pathlib import Path


def logs_dir(out_dir: Path) -> Path:
    """Return path to the logs subdirectory within an output directory."""
    return out_dir / "logs"


def length_summary_path(out_dir: Path) -> Path:
    """Return path to the per-length summary Parquet file."""
    return logs_dir(out_dir) / "length_summary.parquet"


def counterexamples_path(out_dir: Path) -> Path:
    """Return path to the counterexamples Parquet file."""
    return logs_dir(out_dir) / "counterexamples.parquet"


def sweep_summary_path(out_dir: Path) -> Path:
    """Return path to the JSON sweep summary."""
    return out_dir / "sweep_summary.json"
