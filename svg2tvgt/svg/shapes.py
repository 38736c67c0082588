"""Turn SVG shape elements into move/line/cubic/close segment lists."""

from __future__ import annotations

import logging
import math

from svg.path import Arc, Close, CubicBezier, Line, Move, QuadraticBezier, parse_path

from svg2tvgt.scene.geometry import ClosePath, CurveTo, LineTo, MoveTo, PathSegment

logger = logging.getLogger(__name__)

# Control point distance for a quarter circle of radius 1.
KAPPA = 0.5522847498307936


def _angle_between(ux: float, uy: float, vx: float, vy: float) -> float:
    return math.atan2(ux * vy - uy * vx, ux * vx + uy * vy)


def arc_to_cubics(
    x0: float,
    y0: float,
    rx: float,
    ry: float,
    x_axis_rotation: float,
    large_arc: bool,
    sweep: bool,
    x: float,
    y: float,
) -> list[PathSegment]:
    """Approximate an SVG elliptical arc with cubic curves.

    The arc is converted to center parameterization and split into pieces of
    at most 90 degrees. Degenerate arcs become a line, or nothing when both
    endpoints coincide.
    """
    if x0 == x and y0 == y:
        return []
    rx, ry = abs(rx), abs(ry)
    if rx == 0.0 or ry == 0.0:
        return [LineTo(x, y)]

    phi = math.radians(x_axis_rotation)
    cos_phi, sin_phi = math.cos(phi), math.sin(phi)

    dx, dy = (x0 - x) / 2.0, (y0 - y) / 2.0
    x1 = cos_phi * dx + sin_phi * dy
    y1 = -sin_phi * dx + cos_phi * dy

    s = (x1 / rx) ** 2 + (y1 / ry) ** 2
    if s > 1.0:
        s = math.sqrt(s)
        rx *= s
        ry *= s

    num = (rx * ry) ** 2 - (rx * y1) ** 2 - (ry * x1) ** 2
    den = (rx * y1) ** 2 + (ry * x1) ** 2
    sq = math.sqrt(max(0.0, num / den)) if den else 0.0
    if large_arc == sweep:
        sq = -sq
    cxp = sq * rx * y1 / ry
    cyp = -sq * ry * x1 / rx

    cx = cos_phi * cxp - sin_phi * cyp + (x0 + x) / 2.0
    cy = sin_phi * cxp + cos_phi * cyp + (y0 + y) / 2.0

    eta = _angle_between(1.0, 0.0, (x1 - cxp) / rx, (y1 - cyp) / ry)
    delta = math.fmod(
        _angle_between((x1 - cxp) / rx, (y1 - cyp) / ry, (-x1 - cxp) / rx, (-y1 - cyp) / ry),
        2.0 * math.pi,
    )
    if not sweep and delta > 0:
        delta -= 2.0 * math.pi
    elif sweep and delta < 0:
        delta += 2.0 * math.pi

    def point(angle: float) -> tuple[float, float]:
        ex, ey = rx * math.cos(angle), ry * math.sin(angle)
        return (cos_phi * ex - sin_phi * ey + cx, sin_phi * ex + cos_phi * ey + cy)

    def deriv(angle: float) -> tuple[float, float]:
        ex, ey = -rx * math.sin(angle), ry * math.cos(angle)
        return (cos_phi * ex - sin_phi * ey, sin_phi * ex + cos_phi * ey)

    count = max(int(math.ceil(abs(delta) / (math.pi / 2.0) - 1e-9)), 1)
    step = delta / count
    alpha = math.sin(step) * (math.sqrt(4.0 + 3.0 * math.tan(step / 2.0) ** 2) - 1.0) / 3.0

    segments: list[PathSegment] = []
    start = eta
    for i in range(count):
        end = eta + step * (i + 1)
        p0x, p0y = point(start)
        d0x, d0y = deriv(start)
        d1x, d1y = deriv(end)
        if i == count - 1:
            p3x, p3y = x, y
        else:
            p3x, p3y = point(end)
        segments.append(
            CurveTo(
                p0x + alpha * d0x,
                p0y + alpha * d0y,
                p3x - alpha * d1x,
                p3y - alpha * d1y,
                p3x,
                p3y,
            )
        )
        start = end
    return segments


def _pt(value: complex) -> tuple[float, float]:
    return (value.real, value.imag)


def path_from_d(d: str) -> list[PathSegment]:
    """Parse path data with svg.path and normalize it to cubic segments."""
    try:
        parsed = parse_path(d)
    except (ValueError, IndexError) as e:
        logger.warning("Invalid path data skipped: %s", e)
        return []

    segments: list[PathSegment] = []
    for seg in parsed:
        if isinstance(seg, Move):
            segments.append(MoveTo(*_pt(seg.end)))
        elif isinstance(seg, Close):
            segments.append(ClosePath())
        elif isinstance(seg, Line):
            segments.append(LineTo(*_pt(seg.end)))
        elif isinstance(seg, CubicBezier):
            segments.append(CurveTo(*_pt(seg.control1), *_pt(seg.control2), *_pt(seg.end)))
        elif isinstance(seg, QuadraticBezier):
            (sx, sy), (qx, qy), (ex, ey) = _pt(seg.start), _pt(seg.control), _pt(seg.end)
            segments.append(
                CurveTo(
                    sx + 2.0 / 3.0 * (qx - sx),
                    sy + 2.0 / 3.0 * (qy - sy),
                    ex + 2.0 / 3.0 * (qx - ex),
                    ey + 2.0 / 3.0 * (qy - ey),
                    ex,
                    ey,
                )
            )
        elif isinstance(seg, Arc):
            segments.extend(
                arc_to_cubics(
                    *_pt(seg.start),
                    seg.radius.real,
                    seg.radius.imag,
                    seg.rotation,
                    bool(seg.arc),
                    bool(seg.sweep),
                    *_pt(seg.end),
                )
            )
    return segments


def rect_path(x: float, y: float, width: float, height: float, rx: float = 0.0, ry: float = 0.0) -> list[PathSegment]:
    """Rectangle outline, with elliptical corners when ``rx``/``ry`` are set."""
    rx = min(rx, width / 2.0)
    ry = min(ry, height / 2.0)
    if rx <= 0.0 or ry <= 0.0:
        return [
            MoveTo(x, y),
            LineTo(x + width, y),
            LineTo(x + width, y + height),
            LineTo(x, y + height),
            ClosePath(),
        ]

    kx, ky = rx * KAPPA, ry * KAPPA
    right, bottom = x + width, y + height
    return [
        MoveTo(x + rx, y),
        LineTo(right - rx, y),
        CurveTo(right - rx + kx, y, right, y + ry - ky, right, y + ry),
        LineTo(right, bottom - ry),
        CurveTo(right, bottom - ry + ky, right - rx + kx, bottom, right - rx, bottom),
        LineTo(x + rx, bottom),
        CurveTo(x + rx - kx, bottom, x, bottom - ry + ky, x, bottom - ry),
        LineTo(x, y + ry),
        CurveTo(x, y + ry - ky, x + rx - kx, y, x + rx, y),
        ClosePath(),
    ]


def ellipse_path(cx: float, cy: float, rx: float, ry: float) -> list[PathSegment]:
    kx, ky = rx * KAPPA, ry * KAPPA
    return [
        MoveTo(cx + rx, cy),
        CurveTo(cx + rx, cy + ky, cx + kx, cy + ry, cx, cy + ry),
        CurveTo(cx - kx, cy + ry, cx - rx, cy + ky, cx - rx, cy),
        CurveTo(cx - rx, cy - ky, cx - kx, cy - ry, cx, cy - ry),
        CurveTo(cx + kx, cy - ry, cx + rx, cy - ky, cx + rx, cy),
        ClosePath(),
    ]


def polyline_path(points: list[float], close: bool = False) -> list[PathSegment]:
    """Path through ``points`` (flat x, y list). Needs at least two points."""
    pairs = list(zip(points[0::2], points[1::2]))
    if len(pairs) < 2:
        return []
    segments: list[PathSegment] = [MoveTo(*pairs[0])]
    segments.extend(LineTo(px, py) for px, py in pairs[1:])
    if close:
        segments.append(ClosePath())
    return segments
