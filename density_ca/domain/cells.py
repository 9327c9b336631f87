"""Cell symbols of the intermediate alphabet."""

from __future__ import annotations

from dataclasses import dataclass

CAState = tuple["CellState", ...]


@dataclass(frozen=True)
class CellState:
    """One cell symbol: a binary value plus signal flags.

    ``intermediate`` selects between a plain binary symbol and a symbol of the
    intermediate alphabet. The remaining flags keep their last value while a
    cell is binary and take part in equality, so two states compare equal
    only when the automaton would evolve them identically.
    """

    value: bool
    intermediate: bool = False
    taken: bool = False
    color: bool = False
    mem_0: bool = False
    mem_1: bool = False


SETTLED_0 = CellState(value=False)
"""Base symbol for a binary 0 with no signal attached."""

SETTLED_1 = CellState(value=True)
"""Base symbol for a binary 1 with no signal attached."""

MEMORY_GLYPHS: dict[tuple[bool, bool], str] = {
    (False, False): "_",
    (True, False): ".",
    (False, True): ",",
    (True, True): ";",
}
"""Text glyph for the memory subset, keyed by ``(mem_0, mem_1)``."""
