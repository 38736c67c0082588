"""Serialize a `Document` into TinyVG text (``.tvgt``).

The output is the nested-parenthesis form understood by ``tvg-text``::

    (tvg 1
      (<width> <height> 1/1 u8888 default)
      (
        (<r> <g> <b> <a>)
      )
      (
        (
          fill_path
          (flat 0)
          (
            (<x> <y>)
            (
              (line - <x> <y>)
            )
          )
        )
      )
    )
"""

from __future__ import annotations

import numpy as np

from svg2tvgt.scene.geometry import ClosePath, CurveTo, LineTo, MoveTo, PathSegment
from svg2tvgt.scene.model import Color
from svg2tvgt.tvg.document import (
    Document,
    DrawLinePath,
    FillPath,
    FlatStyle,
    LinearGradientStyle,
    OutlineFillPath,
    RadialGradientStyle,
    Style,
)


def fmt_f64(value: float) -> str:
    """Shortest round-trip decimal for a double, never in exponent form."""
    return np.format_float_positional(np.float64(value), trim="-")


def fmt_f32(value: float) -> str:
    """Shortest round-trip decimal for a single-precision value."""
    return np.format_float_positional(np.float32(value), trim="-")


def _fmt_channel(value: int) -> str:
    return f"{value / 255.0:.3f}"


def _color_line(color: Color) -> str:
    channels = (color.red, color.green, color.blue, color.alpha)
    return "    ({})".format(" ".join(_fmt_channel(c) for c in channels))


def _style_line(style: Style) -> str:
    if isinstance(style, FlatStyle):
        return f"      (flat {style.color})"
    if isinstance(style, LinearGradientStyle):
        kind = "linear"
    elif isinstance(style, RadialGradientStyle):
        kind = "radial"
    else:
        raise TypeError(f"unknown style: {style!r}")
    return (
        f"      ({kind} ({fmt_f32(style.x1)} {fmt_f32(style.y1)}) "
        f"({fmt_f32(style.x2)} {fmt_f32(style.y2)}) {style.color1} {style.color2})"
    )


def _path_lines(path: list[PathSegment]) -> list[str]:
    lines = ["      ("]
    is_open = False
    for seg in path:
        if isinstance(seg, MoveTo):
            if is_open:
                lines.append("        )")
            lines.append(f"        ({fmt_f64(seg.x)} {fmt_f64(seg.y)})")
            lines.append("        (")
            is_open = True
        elif isinstance(seg, LineTo):
            lines.append(f"          (line - {fmt_f64(seg.x)} {fmt_f64(seg.y)})")
        elif isinstance(seg, CurveTo):
            lines.append(
                f"          (bezier - ({fmt_f64(seg.x1)} {fmt_f64(seg.y1)}) "
                f"({fmt_f64(seg.x2)} {fmt_f64(seg.y2)}) "
                f"({fmt_f64(seg.x)} {fmt_f64(seg.y)}))"
            )
        elif isinstance(seg, ClosePath):
            lines.append("          (close -)")
        else:
            raise TypeError(f"unknown path segment: {seg!r}")
    if is_open:
        lines.append("        )")
    lines.append("      )")
    return lines


def to_tvgt(doc: Document) -> str:
    """Render ``doc`` as TinyVG text."""
    lines = [
        "(tvg 1",
        f"  ({doc.width} {doc.height} {doc.scale}/1 "
        f"{doc.color_encoding.value} {doc.coordinate_range.value})",
        "  (",
    ]
    lines.extend(_color_line(color) for color in doc.colors)
    lines.append("  )")

    lines.append("  (")
    for cmd in doc.commands:
        lines.append("    (")
        if isinstance(cmd, DrawLinePath):
            lines.append("      draw_line_path")
            lines.append(_style_line(cmd.stroke))
            lines.append(f"      {fmt_f32(cmd.line_width)}")
        elif isinstance(cmd, FillPath):
            lines.append("      fill_path")
            lines.append(_style_line(cmd.fill))
        elif isinstance(cmd, OutlineFillPath):
            lines.append("      outline_fill_path")
            lines.append(_style_line(cmd.fill))
            lines.append(_style_line(cmd.stroke))
            lines.append(f"      {fmt_f32(cmd.line_width)}")
        else:
            raise TypeError(f"unknown command: {cmd!r}")
        lines.extend(_path_lines(cmd.path))
        lines.append("    )")
    lines.append("  )")
    lines.append(")")

    return "\n".join(lines) + "\n"
