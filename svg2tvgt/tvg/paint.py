"""Resolve scene paints into TinyVG styles.

A flat color always resolves. A paint server link resolves only when it
names a linear or radial gradient and, for bounding-box units, the shape has
a non-zero area. Gradients are reduced to their first and last stop; stop
offsets are ignored.
"""

from __future__ import annotations

import logging

import numpy as np

from svg2tvgt.scene.geometry import PathBbox, Transform
from svg2tvgt.scene.model import (
    Color,
    LinearGradient,
    Paint,
    PaintLink,
    RadialGradient,
    Stop,
    Tree,
    Units,
    opacity_to_u8,
)
from svg2tvgt.tvg.document import (
    ColorTable,
    FlatStyle,
    LinearGradientStyle,
    RadialGradientStyle,
    Style,
)

logger = logging.getLogger(__name__)


def multiply_a8(c: int, a: int) -> int:
    """Return ``c * a / 255`` for 8-bit values, rounding to nearest."""
    prod = c * a + 128
    return (prod + (prod >> 8)) >> 8


def to_f32(value: float) -> float:
    """Round a coordinate to single precision."""
    return float(np.float32(value))


def gradient_transform(
    units: Units, transform: Transform, bbox: PathBbox, warn: bool = True
) -> Transform | None:
    """Build the gradient-to-canvas transform for a shape's bounding box.

    Returns None for bounding-box units on a shape without area.
    """
    if units is not Units.OBJECT_BOUNDING_BOX:
        return transform

    rect = bbox.to_rect()
    if rect is None:
        if warn:
            logger.warning("Gradient on zero-sized shapes is not allowed.")
        return None

    ts = Transform(rect.width, 0.0, 0.0, rect.height, rect.x, rect.y)
    return ts.append(transform)


class PaintResolver:
    """Turns paints into styles, registering every color it touches.

    Args:
        tree: Scene whose definitions resolve paint links.
        colors: Palette shared by one conversion.
        warn: Log a warning when a gradient lands on a zero-area shape.
    """

    def __init__(self, tree: Tree, colors: ColorTable, warn: bool = True) -> None:
        self.tree = tree
        self.colors = colors
        self.warn = warn

    def resolve(self, paint: Paint, bbox: PathBbox) -> Style | None:
        if isinstance(paint, Color):
            return FlatStyle(self.colors.push(paint))

        if not isinstance(paint, PaintLink):
            return None

        server = self.tree.defs_by_id(paint.id)
        if server is None:
            logger.debug("Paint server '%s' not found", paint.id)
            return None

        if isinstance(server, LinearGradient):
            ts = gradient_transform(server.units, server.transform, bbox, self.warn)
            if ts is None or not server.stops:
                return None
            x1, y1 = ts.apply(server.x1, server.y1)
            x2, y2 = ts.apply(server.x2, server.y2)
            color1, color2 = self._gradient_colors(server.stops)
            return LinearGradientStyle(
                to_f32(x1), to_f32(y1), to_f32(x2), to_f32(y2), color1, color2
            )

        if isinstance(server, RadialGradient):
            ts = gradient_transform(server.units, server.transform, bbox, self.warn)
            if ts is None or not server.stops:
                return None
            x1, y1 = ts.apply(server.cx, server.cy)
            x2, y2 = ts.apply(server.cx, server.cy + server.r)
            color1, color2 = self._gradient_colors(server.stops)
            return RadialGradientStyle(
                to_f32(x1), to_f32(y1), to_f32(x2), to_f32(y2), color1, color2
            )

        logger.debug("Paint server '%s' is not a gradient", paint.id)
        return None

    def _gradient_colors(self, stops: list[Stop]) -> tuple[int, int]:
        # A single stop serves as both ends.
        first, last = stops[0], stops[-1]
        return (self.colors.push(_stop_color(first)), self.colors.push(_stop_color(last)))


def _stop_color(stop: Stop) -> Color:
    return stop.color.with_alpha(multiply_a8(stop.color.alpha, opacity_to_u8(stop.opacity)))
