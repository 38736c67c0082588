"""Scene graph consumed by the TinyVG converter.

This subpackage provides:
- Affine transforms and path segments
- Exact path bounding boxes and view box mapping
- Node, paint and gradient types
"""

from svg2tvgt.scene.geometry import (
    AspectRatio,
    ClosePath,
    CurveTo,
    LineTo,
    MoveTo,
    PathBbox,
    PathSegment,
    Rect,
    Transform,
    path_bbox,
    transform_path,
    view_box_to_transform,
)
from svg2tvgt.scene.model import (
    Color,
    Fill,
    Group,
    Image,
    LinearGradient,
    Paint,
    PaintLink,
    Path,
    RadialGradient,
    Stop,
    Stroke,
    Tree,
    Units,
    opacity_to_u8,
)

__all__ = [
    "AspectRatio",
    "ClosePath",
    "CurveTo",
    "LineTo",
    "MoveTo",
    "PathBbox",
    "PathSegment",
    "Rect",
    "Transform",
    "path_bbox",
    "transform_path",
    "view_box_to_transform",
    "Color",
    "Fill",
    "Group",
    "Image",
    "LinearGradient",
    "Paint",
    "PaintLink",
    "Path",
    "RadialGradient",
    "Stop",
    "Stroke",
    "Tree",
    "Units",
    "opacity_to_u8",
]
