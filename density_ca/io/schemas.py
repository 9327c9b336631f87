"""Parquet schema definitions for sweep report artifacts.

All Arrow schemas used for persisting per-length summaries and
counterexamples are centralised here so writers and readers share the same
column contracts.
"""

from __future__ import annotations

import pyarrow as pa

REPORT_SCHEMA_VERSION = 1

LENGTH_SUMMARY_SCHEMA = pa.schema(
    [
        ("length", pa.int64()),
        ("enumerated", pa.int64()),
        ("skipped", pa.int64()),
        ("tested", pa.int64()),
        ("passed", pa.int64()),
        ("fail_mismatch", pa.int64()),
        ("fail_cycle", pa.int64()),
        ("fail_budget", pa.int64()),
        ("max_steps", pa.int64()),
    ]
)

COUNTEREXAMPLE_SCHEMA = pa.schema(
    [
        ("length", pa.int64()),
        ("code", pa.int64()),
        ("pattern", pa.string()),
        ("expected", pa.string()),
        ("outcome", pa.string()),
        ("status", pa.string()),
        ("steps", pa.int64()),
        ("period", pa.int64()),
    ]
)
