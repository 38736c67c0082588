"""Affine transforms, path segments and bounding boxes for the scene graph.

All geometry handed to the converter is expressed as four segment kinds
(move, line, cubic curve, close). Quadratic curves and arcs are turned into
cubics by the SVG front end before they reach this layer.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Transform:
    """2D affine matrix ``[a c e; b d f; 0 0 1]``."""

    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    d: float = 1.0
    e: float = 0.0
    f: float = 0.0

    @classmethod
    def from_translate(cls, tx: float, ty: float) -> Transform:
        return cls(1.0, 0.0, 0.0, 1.0, tx, ty)

    @classmethod
    def from_scale(cls, sx: float, sy: float) -> Transform:
        return cls(sx, 0.0, 0.0, sy, 0.0, 0.0)

    @classmethod
    def from_rotate(cls, angle: float) -> Transform:
        """Rotation by ``angle`` degrees."""
        rad = math.radians(angle)
        cos, sin = math.cos(rad), math.sin(rad)
        return cls(cos, sin, -sin, cos, 0.0, 0.0)

    @classmethod
    def from_skew(cls, ax: float, ay: float) -> Transform:
        """Skew by ``ax`` degrees along X and ``ay`` degrees along Y."""
        return cls(1.0, math.tan(math.radians(ay)), math.tan(math.radians(ax)), 1.0, 0.0, 0.0)

    def append(self, other: Transform) -> Transform:
        """Return ``self x other``: ``other`` is applied first, in local space."""
        a1, b1, c1, d1, e1, f1 = self.as_tuple()
        a2, b2, c2, d2, e2, f2 = other.as_tuple()
        return Transform(
            a1 * a2 + c1 * b2,
            b1 * a2 + d1 * b2,
            a1 * c2 + c1 * d2,
            b1 * c2 + d1 * d2,
            a1 * e2 + c1 * f2 + e1,
            b1 * e2 + d1 * f2 + f1,
        )

    def prepend(self, other: Transform) -> Transform:
        """Return ``other x self``: ``self`` is applied first."""
        return other.append(self)

    def translate(self, tx: float, ty: float) -> Transform:
        return self.append(Transform.from_translate(tx, ty))

    def scale(self, sx: float, sy: float) -> Transform:
        return self.append(Transform.from_scale(sx, sy))

    def rotate(self, angle: float) -> Transform:
        return self.append(Transform.from_rotate(angle))

    def skew(self, ax: float, ay: float) -> Transform:
        return self.append(Transform.from_skew(ax, ay))

    def apply(self, x: float, y: float) -> tuple[float, float]:
        return (self.a * x + self.c * y + self.e, self.b * x + self.d * y + self.f)

    def is_default(self) -> bool:
        return self == Transform()

    def as_tuple(self) -> tuple[float, float, float, float, float, float]:
        return (self.a, self.b, self.c, self.d, self.e, self.f)


@dataclass(frozen=True)
class MoveTo:
    x: float
    y: float


@dataclass(frozen=True)
class LineTo:
    x: float
    y: float


@dataclass(frozen=True)
class CurveTo:
    x1: float
    y1: float
    x2: float
    y2: float
    x: float
    y: float


@dataclass(frozen=True)
class ClosePath:
    pass


PathSegment = Union[MoveTo, LineTo, CurveTo, ClosePath]


@dataclass(frozen=True)
class Rect:
    """Rectangle with strictly positive width and height."""

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height


@dataclass(frozen=True)
class PathBbox:
    """Path bounding box. One of width/height may be zero, never both."""

    x: float
    y: float
    width: float
    height: float

    def to_rect(self) -> Rect | None:
        """Return the box as a `Rect`, or None if it has no area."""
        if self.width > 0.0 and self.height > 0.0:
            return Rect(self.x, self.y, self.width, self.height)
        return None


def transform_path(segments: list[PathSegment], ts: Transform) -> list[PathSegment]:
    """Return a transformed copy of ``segments``."""
    out: list[PathSegment] = []
    for seg in segments:
        if isinstance(seg, MoveTo):
            out.append(MoveTo(*ts.apply(seg.x, seg.y)))
        elif isinstance(seg, LineTo):
            out.append(LineTo(*ts.apply(seg.x, seg.y)))
        elif isinstance(seg, CurveTo):
            x1, y1 = ts.apply(seg.x1, seg.y1)
            x2, y2 = ts.apply(seg.x2, seg.y2)
            x, y = ts.apply(seg.x, seg.y)
            out.append(CurveTo(x1, y1, x2, y2, x, y))
        else:
            out.append(seg)
    return out


def _cubic_extrema(p0: float, p1: float, p2: float, p3: float) -> list[float]:
    """Return the curve parameters in (0, 1) where one axis peaks."""
    # derivative / 3 == a*t^2 + b*t + c
    a = -p0 + 3.0 * p1 - 3.0 * p2 + p3
    b = 2.0 * (p0 - 2.0 * p1 + p2)
    c = p1 - p0

    roots: list[float] = []
    if abs(a) < 1e-12:
        if abs(b) > 1e-12:
            roots.append(-c / b)
    else:
        disc = b * b - 4.0 * a * c
        if disc >= 0.0:
            sq = math.sqrt(disc)
            roots.append((-b + sq) / (2.0 * a))
            roots.append((-b - sq) / (2.0 * a))
    return [t for t in roots if 0.0 < t < 1.0]


def _cubic_at(p0: float, p1: float, p2: float, p3: float, t: float) -> float:
    mt = 1.0 - t
    return mt * mt * mt * p0 + 3.0 * mt * mt * t * p1 + 3.0 * mt * t * t * p2 + t * t * t * p3


def path_bbox(segments: list[PathSegment]) -> PathBbox | None:
    """Compute the exact bounding box of a path, including curve extrema.

    Returns None for an empty path, a path whose points all coincide, or a
    path holding non-finite coordinates.
    """
    xs: list[float] = []
    ys: list[float] = []
    prev_x = prev_y = 0.0

    for seg in segments:
        if isinstance(seg, (MoveTo, LineTo)):
            xs.append(seg.x)
            ys.append(seg.y)
            prev_x, prev_y = seg.x, seg.y
        elif isinstance(seg, CurveTo):
            xs.append(seg.x)
            ys.append(seg.y)
            for t in _cubic_extrema(prev_x, seg.x1, seg.x2, seg.x):
                xs.append(_cubic_at(prev_x, seg.x1, seg.x2, seg.x, t))
            for t in _cubic_extrema(prev_y, seg.y1, seg.y2, seg.y):
                ys.append(_cubic_at(prev_y, seg.y1, seg.y2, seg.y, t))
            prev_x, prev_y = seg.x, seg.y

    if not xs:
        return None

    min_x, max_x = min(xs), max(xs)
    min_y, max_y = min(ys), max(ys)
    width, height = max_x - min_x, max_y - min_y

    if not all(math.isfinite(v) for v in (min_x, min_y, width, height)):
        return None
    if width <= 0.0 and height <= 0.0:
        return None
    return PathBbox(min_x, min_y, width, height)


@dataclass(frozen=True)
class AspectRatio:
    """Parsed ``preserveAspectRatio``: ``align`` is "none" or e.g. "xMidYMid"."""

    align: str = "xMidYMid"
    slice: bool = False


def view_box_to_transform(view_box: Rect, aspect: AspectRatio, size: tuple[float, float]) -> Transform:
    """Map a view box onto a viewport of ``size`` honoring preserveAspectRatio."""
    width, height = size
    sx = width / view_box.width
    sy = height / view_box.height

    if aspect.align != "none":
        s = max(sx, sy) if aspect.slice else min(sx, sy)
        sx = sy = s

    x = -view_box.x * sx
    y = -view_box.y * sy
    w = width - view_box.width * sx
    h = height - view_box.height * sy

    tx, ty = _aligned_pos(aspect.align, x, y, w, h)
    return Transform(sx, 0.0, 0.0, sy, tx, ty)


def _aligned_pos(align: str, x: float, y: float, w: float, h: float) -> tuple[float, float]:
    if align == "none":
        return (x, y)

    x_part, y_part = align[:4], align[4:]
    if x_part == "xMid":
        x += w / 2.0
    elif x_part == "xMax":
        x += w
    if y_part == "YMid":
        y += h / 2.0
    elif y_part == "YMax":
        y += h
    return (x, y)

