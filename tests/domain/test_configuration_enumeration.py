"""Tests for domain/configuration.py, domain/enumerator.py, and domain/oracle.py."""

from __future__ import annotations

from math import comb
from random import Random

import pytest

from density_ca.config.types import DensityVerdict
from density_ca.domain.configuration import Configuration, random_configuration
from density_ca.domain.enumerator import (
    configurations_of_length,
    enumerate_configurations,
    is_tie,
    partition_length,
    simulated_count,
    tie_count,
)
from density_ca.domain.errors import InvariantViolation
from density_ca.domain.oracle import density_verdict


class TestConfiguration:
    def test_from_string_puts_cell_zero_in_low_bit(self) -> None:
        configuration = Configuration.from_string("110")
        assert configuration.length == 3
        assert configuration.code == 0b011
        assert configuration.bits() == (1, 1, 0)
        assert str(configuration) == "110"

    def test_from_bits_matches_from_string(self) -> None:
        assert Configuration.from_bits([0, 1, 1, 0]) == Configuration.from_string("0110")

    def test_counts(self) -> None:
        configuration = Configuration.from_string("10110")
        assert configuration.ones() == 3
        assert configuration.zeros() == 2

    def test_rejects_bits_beyond_length(self) -> None:
        with pytest.raises(ValueError, match="beyond length"):
            Configuration(length=2, code=0b100)

    def test_rejects_unsupported_length(self) -> None:
        with pytest.raises(ValueError, match="length"):
            Configuration(length=63, code=0)

    def test_rejects_non_binary_pattern(self) -> None:
        with pytest.raises(ValueError, match="only 0 and 1"):
            Configuration.from_string("012")

    def test_random_configuration_is_reproducible(self) -> None:
        first = random_configuration(20, Random(7))
        second = random_configuration(20, Random(7))
        assert first == second
        assert first.length == 20

    def test_random_configuration_rejects_empty(self) -> None:
        with pytest.raises(ValueError, match="length"):
            random_configuration(0, Random(0))


class TestDensityVerdict:
    @pytest.mark.parametrize(
        ("pattern", "expected"),
        [
            ("0", DensityVerdict.ALL_ZERO),
            ("1", DensityVerdict.ALL_ONE),
            ("00", DensityVerdict.ALL_ZERO),
            ("11", DensityVerdict.ALL_ONE),
            ("01", DensityVerdict.UNDEFINED),
            ("10", DensityVerdict.UNDEFINED),
            ("010", DensityVerdict.ALL_ZERO),
            ("110", DensityVerdict.ALL_ONE),
            ("101", DensityVerdict.ALL_ONE),
            ("100", DensityVerdict.ALL_ZERO),
        ],
    )
    def test_small_configurations(self, pattern: str, expected: DensityVerdict) -> None:
        assert density_verdict(Configuration.from_string(pattern)) == expected

    def test_odd_lengths_are_never_undefined(self) -> None:
        for configuration in enumerate_configurations(7, min_len=7):
            assert density_verdict(configuration) != DensityVerdict.UNDEFINED

    def test_empty_configuration_is_an_invariant_violation(self) -> None:
        with pytest.raises(InvariantViolation):
            density_verdict(Configuration(length=0, code=0))


class TestEnumerator:
    @pytest.mark.parametrize("length", [2, 4, 6, 8, 10])
    def test_tie_count_matches_binomial(self, length: int) -> None:
        assert tie_count(length) == comb(length, length // 2)
        ties = sum(1 for code in range(1 << length) if is_tie(code, length))
        assert ties == tie_count(length)

    @pytest.mark.parametrize("length", [1, 3, 5, 7])
    def test_odd_lengths_have_no_ties(self, length: int) -> None:
        assert tie_count(length) == 0
        assert simulated_count(length) == 1 << length

    @pytest.mark.parametrize("length", range(1, 11))
    def test_length_is_exhaustive_without_ties(self, length: int) -> None:
        codes = [configuration.code for configuration in configurations_of_length(length)]
        assert codes == sorted(set(codes))
        assert len(codes) == simulated_count(length)
        assert all(not is_tie(code, length) for code in codes)

    def test_enumeration_is_length_major_and_restartable(self) -> None:
        first = list(enumerate_configurations(4))
        second = list(enumerate_configurations(4))
        assert first == second
        assert [c.length for c in first] == sorted(c.length for c in first)
        assert len(first) == sum(simulated_count(length) for length in range(1, 5))
        assert len(set(first)) == len(first)

    def test_code_range_slices(self) -> None:
        length = 6
        pieces = partition_length(length, chunk_size=10)
        assert pieces[0] == (0, 10)
        assert pieces[-1][1] == 1 << length
        sliced = [
            configuration
            for start, stop in pieces
            for configuration in configurations_of_length(length, start, stop)
        ]
        assert sliced == list(configurations_of_length(length))

    def test_invalid_lengths_raise(self) -> None:
        with pytest.raises(ValueError, match="length"):
            list(configurations_of_length(0))
        with pytest.raises(ValueError, match="length"):
            tie_count(63)

    def test_invalid_code_range_raises(self) -> None:
        with pytest.raises(ValueError, match="code range"):
            list(configurations_of_length(3, start=4, stop=2))

    def test_max_len_below_min_len_raises(self) -> None:
        with pytest.raises(ValueError, match="max_len"):
            list(enumerate_configurations(2, min_len=3))
