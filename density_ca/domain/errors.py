"""Exceptions for internal contract breaches."""

from __future__ import annotations


class InvariantViolation(RuntimeError):
    """An internal guarantee was broken; the sweep must abort.

    Raised when an empty configuration or an unfiltered even-length tie
    reaches the oracle, simulator, or comparator. Rule mismatches and
    non-convergence are findings, not errors, and never raise.
    """
