"""Tests for viz/render.py and the single-run CLI in viz/cli.py."""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest

from density_ca.domain.configuration import Configuration
from density_ca.domain.rules import IntermediateAlphabetRule
from density_ca.simulation.engine import trace
from density_ca.viz.cli import main
from density_ca.viz.render import render_spacetime, render_state, render_trace, spacetime_array

RULE = IntermediateAlphabetRule()


def _states() -> list:
    return trace(Configuration.from_string("110"), RULE)


class TestTextRendering:
    def test_render_state_has_three_lines(self) -> None:
        lines = render_state(_states()[1], RULE)
        assert lines == ["X1X", "BBB", ",,;"]

    def test_binary_state_has_blank_signal_lines(self) -> None:
        assert render_state(_states()[0], RULE) == ["110", "   ", "   "]

    def test_render_trace_stacks_blocks(self) -> None:
        text = render_trace(_states(), RULE)
        lines = text.split("\n")
        assert len(lines) == 3 * 4
        assert lines[-3] == "111"


class TestSpacetime:
    def test_symbol_classes(self) -> None:
        grid = spacetime_array(_states())
        assert grid.shape == (4, 3)
        assert grid[0].tolist() == [1, 1, 0]
        assert grid[1].tolist() == [2, 2, 2]
        assert grid[2].tolist() == [3, 3, 3]
        assert np.all(grid[3] == 1)

    def test_empty_states_raise(self) -> None:
        with pytest.raises(ValueError, match="empty"):
            spacetime_array([])

    def test_render_spacetime_writes_png(self, tmp_path: Path) -> None:
        out = render_spacetime(_states(), tmp_path / "figs" / "run.png", title="110")
        assert out.exists()
        assert out.stat().st_size > 0


class TestShowCli:
    def test_prints_trace_and_verdict(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["--pattern", "110"]) == 0
        out = capsys.readouterr().out
        assert "X1X" in out
        assert "expected all_one, observed converged_to_one after 3 steps" in out

    def test_tie_is_reported_not_classified(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["--pattern", "10", "--max-steps", "2"]) == 0
        assert "density undefined" in capsys.readouterr().out

    def test_random_configuration_with_figure(self, tmp_path: Path) -> None:
        output = tmp_path / "random.png"
        assert main(["--random", "9", "--seed", "3", "--output", str(output)]) == 0
        assert output.exists()

    @pytest.mark.parametrize(
        "argv",
        [
            ["--pattern", ""],
            ["--pattern", "102"],
            ["--random", "0"],
            ["--pattern", "1", "--max-steps", "-1"],
        ],
    )
    def test_invalid_input_exits_with_usage_error(self, argv: list[str]) -> None:
        with pytest.raises(SystemExit) as excinfo:
            main(argv)
        assert excinfo.value.code == 2
