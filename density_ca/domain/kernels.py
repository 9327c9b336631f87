"""Vectorised bit-plane kernel for the intermediate-alphabet rule.

Every cell flag is stored as a boolean plane of shape ``(length, n)``: row
``k`` holds the flag of cell ``k`` for all ``n`` configurations of a batch.
One step is a left-to-right sweep over the rows (the rule is sequential), and
each row update is vectorised across the batch.
"""

from __future__ import annotations

import numpy as np

_PLANES = ("value", "intermediate", "taken", "color", "mem_0", "mem_1")


def initial_planes(codes: np.ndarray, length: int) -> dict[str, np.ndarray]:
    """Build step-0 planes: binary base symbols with every signal flag cleared."""
    shifts = np.arange(length, dtype=np.int64)[:, None]
    value = ((codes[None, :] >> shifts) & 1).astype(bool)
    planes = {name: np.zeros_like(value) for name in _PLANES if name != "value"}
    planes["value"] = value
    return planes


def _apply_row(planes: dict[str, np.ndarray], left: int, index: int) -> None:
    """Update row ``index`` in place from row ``left`` and its own flags."""
    value = planes["value"]
    intermediate = planes["intermediate"]
    taken = planes["taken"]
    color = planes["color"]
    mem_0 = planes["mem_0"]
    mem_1 = planes["mem_1"]

    l_int, c_int = intermediate[left], intermediate[index]
    l_val, c_val = value[left], value[index]
    l_col, c_col = color[left], color[index]
    l_m0, l_m1 = mem_0[left], mem_1[left]
    c_m0, c_m1 = mem_0[index], mem_1[index]
    c_taken = taken[index]

    kick = ~l_int & ~c_int & (l_val != c_val)
    propagate = ~l_int & c_int
    scan = l_int & (~c_int | (l_col != c_col))
    brain = l_int & c_int & (l_col == c_col)
    flip = brain & l_m0 & l_m1
    revert = brain & ~flip
    take = scan & ~c_taken & np.where(c_val, ~l_m1, ~l_m0)

    new_intermediate = (c_int & ~propagate & ~revert) | kick | scan
    new_value = np.where(propagate, l_val, np.where(revert, l_m1, c_val))
    new_color = np.where(scan, l_col, c_col ^ flip)
    new_m0 = np.where(scan, l_m0 | (take & ~c_val), (c_m0 | (kick & ~c_val)) & ~flip)
    new_m1 = np.where(scan, l_m1 | (take & c_val), (c_m1 | (kick & c_val)) & ~flip)
    new_taken = c_taken | kick | take

    intermediate[index] = new_intermediate
    value[index] = new_value
    color[index] = new_color
    mem_0[index] = new_m0
    mem_1[index] = new_m1
    taken[index] = new_taken


def sweep(planes: dict[str, np.ndarray], length: int) -> None:
    """Apply one sequential step: cell 0 reads cell ``length - 1``, then left to right."""
    for index in range(length):
        _apply_row(planes, length - 1 if index == 0 else index - 1, index)


def settled_values(planes: dict[str, np.ndarray]) -> np.ndarray:
    """Return 0/1 for rows that are homogeneous binary rings, -1 otherwise."""
    value = planes["value"]
    binary = ~planes["intermediate"].any(axis=0)
    all_one = value.all(axis=0)
    all_zero = ~value.any(axis=0)
    return np.where(binary & all_one, 1, np.where(binary & all_zero, 0, -1)).astype(np.int8)


def run_batch(codes: np.ndarray, length: int, step_budget: int) -> tuple[np.ndarray, np.ndarray]:
    """Run a batch of configurations of one length until convergence or budget.

    Returns ``(values, steps)``: ``values[i]`` is the converged value of
    ``codes[i]`` (0 or 1) or -1 when it is still unresolved after
    ``step_budget`` steps; ``steps[i]`` is the step at which it converged
    (-1 when unresolved). Unresolved rows need the reference simulator to tell
    a cycle apart from an exhausted budget.
    """
    codes = np.asarray(codes, dtype=np.int64)
    n = codes.shape[0]
    values = np.full(n, -1, dtype=np.int8)
    steps = np.full(n, -1, dtype=np.int64)
    if n == 0:
        return values, steps

    planes = initial_planes(codes, length)
    active = np.arange(n)
    for step in range(step_budget + 1):
        if step > 0:
            sweep(planes, length)
        current = settled_values(planes)
        done = current >= 0
        if done.any():
            values[active[done]] = current[done]
            steps[active[done]] = step
            keep = ~done
            active = active[keep]
            planes = {name: plane[:, keep] for name, plane in planes.items()}
        if active.size == 0:
            break
    return values, steps
