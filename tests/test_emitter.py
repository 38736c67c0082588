"""Unit tests for svg2tvgt.tvg.emitter.

Coverage: exact text layout, number formatting, style lines, subpath
blocks and rejection of unknown command types.
"""

from __future__ import annotations

import pytest

from conftest import RED_RECT_TVGT, rect_data
from svg2tvgt.scene import ClosePath, Color, CurveTo, LineTo, MoveTo
from svg2tvgt.tvg import (
    Document,
    DrawLinePath,
    FillPath,
    FlatStyle,
    LinearGradientStyle,
    OutlineFillPath,
    RadialGradientStyle,
    to_tvgt,
)
from svg2tvgt.tvg.emitter import fmt_f32, fmt_f64


class TestNumberFormatting:
    """Tests for coordinate and width formatting."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(10.0, "10"), (0.5, "0.5"), (-3.25, "-3.25"), (0.1, "0.1"), (1e20, "100000000000000000000")],
    )
    def test_fmt_f64(self, value: float, expected: str) -> None:
        """Doubles print in shortest positional form."""
        assert fmt_f64(value) == expected

    @pytest.mark.parametrize(("value", "expected"), [(2.0, "2"), (0.1, "0.1"), (1.5, "1.5")])
    def test_fmt_f32(self, value: float, expected: str) -> None:
        """Single-precision values print their shortest float32 form."""
        assert fmt_f32(value) == expected


class TestToTvgt:
    """Tests for to_tvgt."""

    def test_red_rect_document(self) -> None:
        """A single filled rectangle renders the full expected text."""
        doc = Document(
            width=100,
            height=100,
            colors=[Color(255, 0, 0, 255)],
            commands=[FillPath(fill=FlatStyle(0), path=rect_data(10, 10, 80, 80))],
        )
        assert to_tvgt(doc) == RED_RECT_TVGT

    def test_empty_document(self) -> None:
        """An empty document still has palette and command blocks."""
        text = to_tvgt(Document(width=5, height=7))
        assert text == "(tvg 1\n  (5 7 1/1 u8888 default)\n  (\n  )\n  (\n  )\n)\n"

    def test_color_channels_use_three_decimals(self) -> None:
        """Channels are normalized to 0..1 with three decimals."""
        doc = Document(width=1, height=1, colors=[Color(0, 128, 255, 64)])
        assert "    (0.000 0.502 1.000 0.251)" in to_tvgt(doc).splitlines()

    def test_draw_line_path_layout(self) -> None:
        """Stroke commands list the style then the line width."""
        doc = Document(
            width=10,
            height=10,
            commands=[
                DrawLinePath(stroke=FlatStyle(1), line_width=2.0, path=[MoveTo(0, 0), LineTo(5, 0)])
            ],
        )
        lines = to_tvgt(doc).splitlines()
        start = lines.index("      draw_line_path")
        assert lines[start + 1 : start + 3] == ["      (flat 1)", "      2"]

    def test_outline_fill_path_lists_fill_before_stroke(self) -> None:
        """outline_fill_path writes the fill style, the stroke style, then the width."""
        doc = Document(
            width=10,
            height=10,
            commands=[
                OutlineFillPath(
                    stroke=FlatStyle(1),
                    fill=FlatStyle(0),
                    line_width=0.5,
                    path=rect_data(0, 0, 1, 1),
                )
            ],
        )
        lines = to_tvgt(doc).splitlines()
        start = lines.index("      outline_fill_path")
        assert lines[start + 1 : start + 4] == ["      (flat 0)", "      (flat 1)", "      0.5"]

    def test_gradient_style_lines(self) -> None:
        """Gradient styles print both points and both color indices."""
        doc = Document(
            width=10,
            height=10,
            commands=[
                FillPath(fill=LinearGradientStyle(10, 20, 110, 20, 0, 1), path=rect_data(0, 0, 1, 1)),
                FillPath(fill=RadialGradientStyle(60, 45, 60, 70, 2, 3), path=rect_data(0, 0, 1, 1)),
            ],
        )
        lines = to_tvgt(doc).splitlines()
        assert "      (linear (10 20) (110 20) 0 1)" in lines
        assert "      (radial (60 45) (60 70) 2 3)" in lines

    def test_curve_segment_layout(self) -> None:
        """Cubic segments print both control points and the end point."""
        doc = Document(
            width=10,
            height=10,
            commands=[FillPath(fill=FlatStyle(0), path=[MoveTo(0, 0), CurveTo(0, 10, 10, 10, 10, 0)])],
        )
        assert "          (bezier - (0 10) (10 10) (10 0))" in to_tvgt(doc).splitlines()

    def test_each_move_opens_a_subpath_block(self) -> None:
        """A second MoveTo closes the running block and opens another."""
        path = [MoveTo(0, 0), LineTo(1, 0), ClosePath(), MoveTo(5, 5), LineTo(6, 5)]
        doc = Document(width=10, height=10, commands=[FillPath(fill=FlatStyle(0), path=path)])
        lines = to_tvgt(doc).splitlines()
        start = lines.index("      fill_path") + 2
        assert lines[start : start + 11] == [
            "      (",
            "        (0 0)",
            "        (",
            "          (line - 1 0)",
            "          (close -)",
            "        )",
            "        (5 5)",
            "        (",
            "          (line - 6 5)",
            "        )",
            "      )",
        ]

    def test_output_ends_with_newline(self) -> None:
        """The text always ends with a single trailing newline."""
        text = to_tvgt(Document(width=1, height=1))
        assert text.endswith(")\n")
        assert not text.endswith("\n\n")

    def test_unknown_command_raises(self) -> None:
        """Commands outside the three known kinds are rejected."""
        doc = Document(width=1, height=1, commands=["bogus"])  # type: ignore[list-item]
        with pytest.raises(TypeError):
            to_tvgt(doc)
