"""Ground-truth majority classification by direct counting."""

from __future__ import annotations

from density_ca.config.types import DensityVerdict
from density_ca.domain.configuration import Configuration
from density_ca.domain.errors import InvariantViolation


def density_verdict(configuration: Configuration) -> DensityVerdict:
    """Classify ``configuration`` by comparing its ones against half its length."""
    if configuration.length < 1:
        raise InvariantViolation("empty configuration reached the density oracle")
    doubled_ones = 2 * configuration.ones()
    if doubled_ones > configuration.length:
        return DensityVerdict.ALL_ONE
    if doubled_ones < configuration.length:
        return DensityVerdict.ALL_ZERO
    return DensityVerdict.UNDEFINED
