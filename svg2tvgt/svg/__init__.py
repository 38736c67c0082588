"""SVG front end for svg2tvgt.

This subpackage provides:
- Safe SVG parsing with XXE protection (defusedxml)
- Color, length and transform attribute parsing
- Shape and path data normalization to cubic segments
- Scene tree construction with style cascade and gradient definitions
"""

from svg2tvgt.svg.builder import SceneBuilder, build_tree
from svg2tvgt.svg.colors import parse_color
from svg2tvgt.svg.parser import parse_svg, parse_svg_bytes, parse_svg_string

__all__ = [
    "SceneBuilder",
    "build_tree",
    "parse_color",
    "parse_svg",
    "parse_svg_bytes",
    "parse_svg_string",
]
