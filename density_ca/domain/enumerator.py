"""Exhaustive, duplicate-free enumeration of binary configurations.

Enumeration is length-major with codes ascending inside a length. Even-length
configurations with exactly ``length / 2`` ones have an undefined density and
are omitted; callers that need to count them use :func:`tie_count`.
"""

from __future__ import annotations

from collections.abc import Iterator
from math import comb

from density_ca.config.constants import MAX_SUPPORTED_LEN, MIN_LEN
from density_ca.domain.configuration import Configuration


def _check_length(length: int) -> None:
    if length < MIN_LEN:
        raise ValueError(f"length must be >= {MIN_LEN}")
    if length > MAX_SUPPORTED_LEN:
        raise ValueError(f"length must be <= {MAX_SUPPORTED_LEN}")


def is_tie(code: int, length: int) -> bool:
    """Return True when an even-length code has exactly as many ones as zeros."""
    return length % 2 == 0 and 2 * bin(code).count("1") == length


def tie_count(length: int) -> int:
    """Number of undefined (tied) configurations of ``length``: C(L, L/2) or 0."""
    _check_length(length)
    if length % 2:
        return 0
    return comb(length, length // 2)


def simulated_count(length: int) -> int:
    """Number of configurations of ``length`` that reach the simulator."""
    return (1 << length) - tie_count(length)


def partition_length(length: int, chunk_size: int) -> list[tuple[int, int]]:
    """Split ``[0, 2**length)`` into disjoint ``(start, stop)`` code ranges."""
    _check_length(length)
    if chunk_size < 1:
        raise ValueError("chunk_size must be >= 1")
    total = 1 << length
    return [(start, min(start + chunk_size, total)) for start in range(0, total, chunk_size)]


def configurations_of_length(
    length: int, start: int = 0, stop: int | None = None
) -> Iterator[Configuration]:
    """Yield non-tied configurations of ``length`` with ``start <= code < stop``."""
    _check_length(length)
    total = 1 << length
    stop = total if stop is None else stop
    if not 0 <= start <= stop <= total:
        raise ValueError(f"code range [{start}, {stop}) must lie within [0, {total})")
    for code in range(start, stop):
        if is_tie(code, length):
            continue
        yield Configuration(length=length, code=code)


def enumerate_configurations(max_len: int, min_len: int = MIN_LEN) -> Iterator[Configuration]:
    """Yield every non-tied configuration with length in ``[min_len, max_len]``.

    Each call returns a fresh generator, so the sequence is restartable.
    """
    _check_length(min_len)
    _check_length(max_len)
    if max_len < min_len:
        raise ValueError("max_len must be >= min_len")
    for length in range(min_len, max_len + 1):
        yield from configurations_of_length(length)
