"""Domain layer: configurations, enumeration, oracle, cell symbols, and rules."""

from density_ca.domain.cells import SETTLED_0, SETTLED_1, CAState, CellState
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
from density_ca.domain.rules import (
    RULES,
    IntermediateAlphabetRule,
    LocalMajorityRule,
    TransitionRule,
    get_rule,
)

__all__ = [
    "CAState",
    "CellState",
    "Configuration",
    "IntermediateAlphabetRule",
    "InvariantViolation",
    "LocalMajorityRule",
    "RULES",
    "SETTLED_0",
    "SETTLED_1",
    "TransitionRule",
    "configurations_of_length",
    "density_verdict",
    "enumerate_configurations",
    "get_rule",
    "is_tie",
    "partition_length",
    "random_configuration",
    "simulated_count",
    "tie_count",
]
