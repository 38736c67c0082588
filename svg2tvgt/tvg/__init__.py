"""TinyVG conversion core.

This subpackage provides:
- The document model and deduplicating color table
- Paint resolution for flat colors and two-stop gradients
- The scene walker that builds documents from scene trees
- The TinyVG text emitter
"""

from svg2tvgt.tvg.document import (
    ColorEncoding,
    ColorTable,
    Command,
    CoordinateRange,
    Document,
    DrawLinePath,
    FillPath,
    FlatStyle,
    LinearGradientStyle,
    OutlineFillPath,
    RadialGradientStyle,
    Style,
)
from svg2tvgt.tvg.emitter import to_tvgt
from svg2tvgt.tvg.paint import PaintResolver, gradient_transform, multiply_a8
from svg2tvgt.tvg.walker import convert

__all__ = [
    "ColorEncoding",
    "ColorTable",
    "Command",
    "CoordinateRange",
    "Document",
    "DrawLinePath",
    "FillPath",
    "FlatStyle",
    "LinearGradientStyle",
    "OutlineFillPath",
    "RadialGradientStyle",
    "Style",
    "to_tvgt",
    "PaintResolver",
    "gradient_transform",
    "multiply_a8",
    "convert",
]
