"""Visualization layer: text traces and space-time diagrams of single runs."""

from density_ca.viz.render import (
    DEFAULT_THEME,
    Theme,
    render_spacetime,
    render_state,
    render_trace,
    spacetime_array,
    symbol_class,
)

__all__ = [
    "DEFAULT_THEME",
    "Theme",
    "render_spacetime",
    "render_state",
    "render_trace",
    "spacetime_array",
    "symbol_class",
]
