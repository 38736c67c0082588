"""Parsers for SVG attribute values: lengths, transforms, view boxes, styles."""

from __future__ import annotations

import re

from svg2tvgt.scene.geometry import AspectRatio, Rect, Transform

NUMBER_RE = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")
LENGTH_RE = re.compile(r"^\s*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)\s*([a-zA-Z%]*)\s*$")
TRANSFORM_RE = re.compile(r"(matrix|translate|scale|rotate|skewX|skewY)\s*\(([^)]*)\)")
URL_RE = re.compile(r"^\s*url\(\s*['\"]?#([^)'\"]+)['\"]?\s*\)\s*(.*)$")

ALIGN_VALUES = {
    "none",
    "xMinYMin",
    "xMidYMin",
    "xMaxYMin",
    "xMinYMid",
    "xMidYMid",
    "xMaxYMid",
    "xMinYMax",
    "xMidYMax",
    "xMaxYMax",
}

DEFAULT_FONT_SIZE = 12.0


def parse_length(value: str | None, dpi: float = 96.0, reference: float = 1.0) -> float | None:
    """Parse an SVG length into user units.

    Args:
        value: Length such as ``"10"``, ``"2.5mm"`` or ``"50%"``.
        dpi: Resolution used for absolute units.
        reference: Length that ``100%`` maps to.

    Returns:
        The length in user units, or None if ``value`` is missing or invalid.
    """
    if value is None:
        return None
    match = LENGTH_RE.match(value)
    if match is None:
        return None

    number = float(match.group(1))
    unit = match.group(2).lower()
    factors = {
        "": 1.0,
        "px": 1.0,
        "in": dpi,
        "cm": dpi / 2.54,
        "mm": dpi / 25.4,
        "pt": dpi / 72.0,
        "pc": dpi / 6.0,
        "em": DEFAULT_FONT_SIZE,
        "ex": DEFAULT_FONT_SIZE / 2.0,
    }
    if unit == "%":
        return number * reference / 100.0
    factor = factors.get(unit)
    if factor is None:
        return None
    return number * factor


def parse_number(value: str | None, default: float = 0.0) -> float:
    """Parse a plain number or percentage (as a fraction)."""
    if value is None:
        return default
    value = value.strip()
    try:
        if value.endswith("%"):
            return float(value[:-1]) / 100.0
        return float(value)
    except ValueError:
        return default


def parse_number_list(value: str | None) -> list[float]:
    if not value:
        return []
    return [float(n) for n in NUMBER_RE.findall(value)]


def parse_style(style: str | None) -> dict[str, str]:
    """Parse an inline ``style`` attribute into a property dict."""
    result: dict[str, str] = {}
    if not style:
        return result
    for item in style.split(";"):
        if ":" not in item:
            continue
        key, value = item.split(":", 1)
        key, value = key.strip(), value.strip()
        if key:
            result[key] = value
    return result


def parse_transform(value: str | None) -> Transform:
    """Parse an SVG transform list, composing entries left to right.

    Unknown or malformed entries are ignored.
    """
    ts = Transform()
    if not value:
        return ts

    for part in TRANSFORM_RE.finditer(value):
        kind = part.group(1)
        nums = parse_number_list(part.group(2))
        if kind == "matrix" and len(nums) == 6:
            ts = ts.append(Transform(*nums))
        elif kind == "translate" and len(nums) in (1, 2):
            ts = ts.translate(nums[0], nums[1] if len(nums) == 2 else 0.0)
        elif kind == "scale" and len(nums) in (1, 2):
            ts = ts.scale(nums[0], nums[1] if len(nums) == 2 else nums[0])
        elif kind == "rotate" and len(nums) == 1:
            ts = ts.rotate(nums[0])
        elif kind == "rotate" and len(nums) == 3:
            angle, cx, cy = nums
            ts = ts.translate(cx, cy).rotate(angle).translate(-cx, -cy)
        elif kind == "skewX" and len(nums) == 1:
            ts = ts.skew(nums[0], 0.0)
        elif kind == "skewY" and len(nums) == 1:
            ts = ts.skew(0.0, nums[0])
    return ts


def parse_view_box(value: str | None) -> Rect | None:
    nums = parse_number_list(value)
    if len(nums) != 4 or nums[2] <= 0 or nums[3] <= 0:
        return None
    return Rect(*nums)


def parse_aspect_ratio(value: str | None) -> AspectRatio:
    if not value:
        return AspectRatio()
    parts = value.split()
    if parts and parts[0] == "defer":
        parts = parts[1:]
    if not parts or parts[0] not in ALIGN_VALUES:
        return AspectRatio()
    return AspectRatio(align=parts[0], slice=len(parts) > 1 and parts[1] == "slice")


def parse_url(value: str) -> tuple[str, str] | None:
    """Split ``url(#id) fallback`` into ``(id, fallback)``."""
    match = URL_RE.match(value)
    if match is None:
        return None
    return match.group(1), match.group(2).strip()
