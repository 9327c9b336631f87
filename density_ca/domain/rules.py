"""Transition rules: the published intermediate-alphabet rule and a baseline.

A rule owns its neighbourhood radius, update semantics, and boundary
convention; the simulator only follows what the rule declares. Rules are
immutable and picklable so worker processes can share them.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Protocol, runtime_checkable

import numpy as np

from density_ca.config.types import Boundary, UpdateMode
from density_ca.domain.cells import MEMORY_GLYPHS, SETTLED_0, SETTLED_1, CellState
from density_ca.domain.kernels import run_batch


@runtime_checkable
class TransitionRule(Protocol):
    """Local function plus the conventions needed to run it on a finite string."""

    name: str
    radius: int
    update_mode: UpdateMode
    boundary: Boundary
    boundary_state: CellState

    def encode(self, bit: int) -> CellState:
        """Map an input bit to its step-0 symbol."""
        ...

    def apply(self, window: tuple[CellState, ...]) -> CellState:
        """Next symbol of the centre cell of a ``2 * radius + 1`` window."""
        ...

    def settled_value(self, cell: CellState) -> int | None:
        """0 or 1 when ``cell`` is a settled symbol, otherwise None."""
        ...

    def render(self, cell: CellState) -> tuple[str, str, str]:
        """Three display glyphs: value, counter colour, memory."""
        ...


@dataclass(frozen=True)
class IntermediateAlphabetRule:
    """Sequential density-classification rule with counter colour and memory.

    Cells are updated left to right on a ring, each reading the already
    updated left neighbour (cell 0 reads the pre-step value of the last cell).
    A disagreement between a cell and its left neighbour starts a scan: the
    cell turns intermediate, records its value in memory and is crossed out.
    Scans carry the colour and memory rightwards, crossing out at most one 0
    and one 1 per round. When a scan returns to a cell of the same colour
    holding a full memory {0, 1}, that cell flips colour and starts a new
    round; otherwise it reverts to binary with the surviving value (0 when
    memory is empty) and the binary value propagates around the ring.
    """

    name: str = "intermediate_alphabet"
    radius: int = 1
    update_mode: UpdateMode = UpdateMode.SEQUENTIAL
    boundary: Boundary = Boundary.PERIODIC
    boundary_state: CellState = field(default=SETTLED_0)

    def encode(self, bit: int) -> CellState:
        return SETTLED_1 if bit else SETTLED_0

    def apply(self, window: tuple[CellState, ...]) -> CellState:
        left, cell = window[0], window[1]

        if not left.intermediate:
            if not cell.intermediate:
                if left.value == cell.value:
                    return cell
                # kick start: remember our own value and cross it out
                return replace(
                    cell,
                    intermediate=True,
                    taken=True,
                    mem_0=cell.mem_0 or not cell.value,
                    mem_1=cell.mem_1 or cell.value,
                )
            return replace(cell, intermediate=False, value=left.value)

        if not cell.intermediate or cell.color != left.color:
            # scanning: copy colour and memory, then take our value if it is new
            mem_0, mem_1, taken = left.mem_0, left.mem_1, cell.taken
            already_seen = mem_1 if cell.value else mem_0
            if not taken and not already_seen:
                taken = True
                if cell.value:
                    mem_1 = True
                else:
                    mem_0 = True
            return replace(
                cell,
                intermediate=True,
                color=left.color,
                mem_0=mem_0,
                mem_1=mem_1,
                taken=taken,
            )

        if left.mem_0 and left.mem_1:
            return replace(cell, color=not cell.color, mem_0=False, mem_1=False)

        # 0 also covers the empty-memory failure case
        return replace(cell, intermediate=False, value=left.mem_1)

    def settled_value(self, cell: CellState) -> int | None:
        if cell.intermediate:
            return None
        return int(cell.value)

    def render(self, cell: CellState) -> tuple[str, str, str]:
        if not cell.intermediate:
            return ("1" if cell.value else "0", " ", " ")
        value_glyph = "X" if cell.taken else ("1" if cell.value else "0")
        color_glyph = "R" if cell.color else "B"
        return (value_glyph, color_glyph, MEMORY_GLYPHS[(cell.mem_0, cell.mem_1)])

    def simulate_batch(
        self, codes: np.ndarray, length: int, step_budget: int
    ) -> tuple[np.ndarray, np.ndarray]:
        """Vectorised fast path; see :func:`density_ca.domain.kernels.run_batch`."""
        return run_batch(codes, length, step_budget)


@dataclass(frozen=True)
class LocalMajorityRule:
    """Synchronous radius-``r`` local majority vote on binary cells.

    A classic non-solution of the density task: it freezes into mixed blocks,
    which the simulator reports as period-1 cycles. Useful as a control.
    """

    name: str = "local_majority"
    radius: int = 1
    update_mode: UpdateMode = UpdateMode.SYNCHRONOUS
    boundary: Boundary = Boundary.PERIODIC
    boundary_state: CellState = field(default=SETTLED_0)

    def __post_init__(self) -> None:
        if self.radius < 1:
            raise ValueError("radius must be >= 1")

    def encode(self, bit: int) -> CellState:
        return SETTLED_1 if bit else SETTLED_0

    def apply(self, window: tuple[CellState, ...]) -> CellState:
        ones = sum(1 for cell in window if cell.value)
        return SETTLED_1 if 2 * ones > len(window) else SETTLED_0

    def settled_value(self, cell: CellState) -> int | None:
        return int(cell.value)

    def render(self, cell: CellState) -> tuple[str, str, str]:
        return ("1" if cell.value else "0", " ", " ")


RULES: dict[str, type] = {
    IntermediateAlphabetRule.name: IntermediateAlphabetRule,
    LocalMajorityRule.name: LocalMajorityRule,
}
"""Rule registry keyed by rule name, used by the CLIs."""


def get_rule(name: str) -> TransitionRule:
    """Instantiate a registered rule by name."""
    try:
        return RULES[name]()
    except KeyError as exc:
        valid = ", ".join(sorted(RULES))
        raise ValueError(f"rule must be one of {valid}") from exc
