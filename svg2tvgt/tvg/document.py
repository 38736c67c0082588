"""In-memory TinyVG document: header, palette and drawing commands."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from svg2tvgt.scene.geometry import PathSegment
from svg2tvgt.scene.model import Color


class ColorEncoding(Enum):
    RGBA8888 = "u8888"
    RGB565 = "u565"
    RGBA_F32 = "r32g32b32a32"
    CUSTOM = "custom"


class CoordinateRange(Enum):
    DEFAULT = "default"  # 16 bit per unit
    REDUCED = "reduced"  # 8 bit per unit
    ENHANCED = "enhanced"  # 32 bit per unit


class ColorTable:
    """Append-only palette that hands out stable indices.

    Lookup is a linear scan; palettes stay small and the order of `push`
    calls alone decides every index.
    """

    def __init__(self, colors: list[Color] | None = None) -> None:
        self.colors: list[Color] = colors if colors is not None else []

    def push(self, color: Color) -> int:
        """Return the index of ``color``, appending it if not yet present."""
        for idx, existing in enumerate(self.colors):
            if existing == color:
                return idx
        self.colors.append(color)
        return len(self.colors) - 1

    def __len__(self) -> int:
        return len(self.colors)


@dataclass(frozen=True)
class FlatStyle:
    color: int


@dataclass(frozen=True)
class LinearGradientStyle:
    x1: float
    y1: float
    x2: float
    y2: float
    color1: int
    color2: int


@dataclass(frozen=True)
class RadialGradientStyle:
    """Radial gradient reduced to its center and a point on the radius."""

    x1: float
    y1: float
    x2: float
    y2: float
    color1: int
    color2: int


Style = Union[FlatStyle, LinearGradientStyle, RadialGradientStyle]


@dataclass(frozen=True)
class DrawLinePath:
    stroke: Style
    line_width: float
    path: list[PathSegment]


@dataclass(frozen=True)
class FillPath:
    fill: Style
    path: list[PathSegment]


@dataclass(frozen=True)
class OutlineFillPath:
    stroke: Style
    fill: Style
    line_width: float
    path: list[PathSegment]


Command = Union[DrawLinePath, FillPath, OutlineFillPath]


@dataclass
class Document:
    width: int
    height: int
    scale: int = 1
    color_encoding: ColorEncoding = ColorEncoding.RGBA8888
    coordinate_range: CoordinateRange = CoordinateRange.DEFAULT
    colors: list[Color] = field(default_factory=list)
    commands: list[Command] = field(default_factory=list)
