"""Scene graph handed to the converter.

The tree is already normalized: styles are resolved onto each path, all
geometry is made of move/line/cubic/close segments in user units, and
gradients live in a flat definitions map keyed by id.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from svg2tvgt.scene.geometry import AspectRatio, PathSegment, Rect, Transform


@dataclass(frozen=True)
class Color:
    """8-bit RGBA color, compared channel by channel."""

    red: int
    green: int
    blue: int
    alpha: int = 255

    @classmethod
    def black(cls) -> Color:
        return cls(0, 0, 0, 255)

    def with_alpha(self, alpha: int) -> Color:
        return Color(self.red, self.green, self.blue, alpha)


@dataclass(frozen=True)
class PaintLink:
    """Reference to a paint server (gradient) by element id."""

    id: str


Paint = Union[Color, PaintLink]


def opacity_to_u8(opacity: float) -> int:
    """Convert an opacity in [0, 1] to 0..255, rounding half away from zero."""
    opacity = min(max(opacity, 0.0), 1.0)
    return int(opacity * 255.0 + 0.5)


@dataclass(frozen=True)
class Fill:
    paint: Paint


@dataclass(frozen=True)
class Stroke:
    paint: Paint
    width: float = 1.0


class Units(Enum):
    """Gradient coordinate system."""

    OBJECT_BOUNDING_BOX = "objectBoundingBox"
    USER_SPACE_ON_USE = "userSpaceOnUse"


@dataclass(frozen=True)
class Stop:
    offset: float
    color: Color
    opacity: float = 1.0


@dataclass
class LinearGradient:
    id: str
    x1: float = 0.0
    y1: float = 0.0
    x2: float = 1.0
    y2: float = 0.0
    units: Units = Units.OBJECT_BOUNDING_BOX
    transform: Transform = field(default_factory=Transform)
    stops: list[Stop] = field(default_factory=list)


@dataclass
class RadialGradient:
    id: str
    cx: float = 0.5
    cy: float = 0.5
    r: float = 0.5
    units: Units = Units.OBJECT_BOUNDING_BOX
    transform: Transform = field(default_factory=Transform)
    stops: list[Stop] = field(default_factory=list)


@dataclass
class Group:
    """Structural node; never drawn itself."""

    id: str = ""
    transform: Transform = field(default_factory=Transform)
    children: list[Node] = field(default_factory=list)


@dataclass
class Path:
    id: str = ""
    data: list[PathSegment] = field(default_factory=list)
    fill: Fill | None = None
    stroke: Stroke | None = None


@dataclass
class Image:
    """Raster image reference. Carried through the tree but not converted."""

    id: str = ""
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0
    href: str = ""


Node = Union[Group, Path, Image]
PaintServer = Union[LinearGradient, RadialGradient]


@dataclass
class Tree:
    """A whole scene: canvas size, view box mapping, node tree and defs."""

    size: tuple[float, float]
    view_box: Rect
    aspect: AspectRatio = field(default_factory=AspectRatio)
    root: Group = field(default_factory=Group)
    defs: dict[str, PaintServer] = field(default_factory=dict)

    def defs_by_id(self, id: str) -> PaintServer | None:
        return self.defs.get(id)
