"""Text and matplotlib renderings of single simulation runs."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402
from matplotlib.colors import BoundaryNorm, ListedColormap  # noqa: E402
from matplotlib.patches import Patch  # noqa: E402

from density_ca.domain.cells import CAState, CellState  # noqa: E402
from density_ca.domain.rules import TransitionRule  # noqa: E402


@dataclass(frozen=True)
class Theme:
    """Colours for the four displayed symbol classes."""

    zero_color: str = "#F0F0F0"
    one_color: str = "#1A1A1A"
    blue_color: str = "#2196F3"
    red_color: str = "#FF5722"
    taken_edge_color: str = "#FFC107"


DEFAULT_THEME = Theme()

SYMBOL_LABELS = ("0", "1", "intermediate (B)", "intermediate (R)")


def render_state(state: CAState, rule: TransitionRule) -> list[str]:
    """Three text lines: values (X when crossed out), counter colour, memory."""
    glyphs = [rule.render(cell) for cell in state]
    return ["".join(glyph[row] for glyph in glyphs) for row in range(3)]


def render_trace(states: Sequence[CAState], rule: TransitionRule) -> str:
    """Render every state of a run, one three-line block per step."""
    lines: list[str] = []
    for state in states:
        lines.extend(render_state(state, rule))
    return "\n".join(lines)


def symbol_class(cell: CellState) -> int:
    """0/1 for binary cells, 2/3 for intermediate cells by counter colour."""
    if not cell.intermediate:
        return int(cell.value)
    return 3 if cell.color else 2


def spacetime_array(states: Sequence[CAState]) -> np.ndarray:
    """Array of shape ``(steps, length)`` holding :func:`symbol_class` values."""
    if not states:
        raise ValueError("states must not be empty")
    return np.array([[symbol_class(cell) for cell in state] for state in states], dtype=np.int8)


def render_spacetime(
    states: Sequence[CAState],
    output_path: Path,
    title: str | None = None,
    theme: Theme = DEFAULT_THEME,
) -> Path:
    """Write a space-time diagram (time downwards) of a run to ``output_path``."""
    grid = spacetime_array(states)
    steps, length = grid.shape
    cmap = ListedColormap([theme.zero_color, theme.one_color, theme.blue_color, theme.red_color])
    norm = BoundaryNorm([-0.5, 0.5, 1.5, 2.5, 3.5], cmap.N)

    fig, ax = plt.subplots(figsize=(max(3.0, 0.25 * length), max(2.0, 0.25 * steps)))
    ax.imshow(grid, cmap=cmap, norm=norm, interpolation="nearest", aspect="equal")
    for t, state in enumerate(states):
        for x, cell in enumerate(state):
            if cell.intermediate and cell.taken:
                ax.add_patch(
                    plt.Rectangle(
                        (x - 0.5, t - 0.5),
                        1,
                        1,
                        fill=False,
                        edgecolor=theme.taken_edge_color,
                        linewidth=0.8,
                    )
                )
    ax.set_xlabel("cell")
    ax.set_ylabel("step")
    if title:
        ax.set_title(title, fontsize=10)
    handles = [
        Patch(facecolor=color, edgecolor="gray", label=label)
        for color, label in zip(
            (theme.zero_color, theme.one_color, theme.blue_color, theme.red_color),
            SYMBOL_LABELS,
            strict=True,
        )
    ]
    ax.legend(handles=handles, loc="upper left", bbox_to_anchor=(1.02, 1.0), fontsize=8)

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, bbox_inches="tight", dpi=150)
    plt.close(fig)
    return output_path
