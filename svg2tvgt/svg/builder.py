"""Build a normalized scene `Tree` from a parsed SVG element tree.

Only the subset of SVG that a TinyVG document can express is honored:
groups, basic shapes, paths, solid colors and linear/radial gradients.
Text, filters, clipping, masking and markers are skipped.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from svg2tvgt.exceptions import SVGParseError
from svg2tvgt.scene.geometry import PathSegment, Rect, Transform, view_box_to_transform
from svg2tvgt.scene.model import (
    Color,
    Fill,
    Group,
    Image,
    LinearGradient,
    Node,
    Paint,
    PaintLink,
    PaintServer,
    Path,
    RadialGradient,
    Stop,
    Stroke,
    Tree,
    Units,
    opacity_to_u8,
)
from svg2tvgt.svg.attributes import (
    parse_aspect_ratio,
    parse_length,
    parse_number,
    parse_number_list,
    parse_style,
    parse_transform,
    parse_url,
    parse_view_box,
)
from svg2tvgt.svg.colors import parse_color
from svg2tvgt.svg.parser import XLINK_NS, local_name
from svg2tvgt.svg.shapes import ellipse_path, path_from_d, polyline_path, rect_path
from svg2tvgt.tvg.paint import multiply_a8

if TYPE_CHECKING:
    from collections.abc import Sequence
    from xml.etree.ElementTree import Element

logger = logging.getLogger(__name__)

INHERITED_PROPERTIES = (
    "fill",
    "fill-opacity",
    "stroke",
    "stroke-opacity",
    "stroke-width",
    "color",
    "visibility",
)
LOCAL_PROPERTIES = ("display", "opacity")

INITIAL_STYLE = {
    "fill": "black",
    "fill-opacity": "1",
    "stroke": "none",
    "stroke-opacity": "1",
    "stroke-width": "1",
    "color": "black",
    "visibility": "visible",
    "opacity": "1",
}

NON_RENDERING = {
    "defs",
    "clipPath",
    "mask",
    "marker",
    "pattern",
    "symbol",
    "linearGradient",
    "radialGradient",
    "style",
    "title",
    "desc",
    "metadata",
    "filter",
}
CONTAINERS = {"g", "a"}
SHAPES = {"path", "rect", "circle", "ellipse", "line", "polyline", "polygon"}

MAX_USE_DEPTH = 16
MAX_HREF_CHAIN = 16
DEFAULT_SIZE = 100.0
DEFAULT_LANGUAGES = ("en",)


def _href(el: Element) -> str | None:
    value = el.get(f"{{{XLINK_NS}}}href") or el.get("href")
    if value and value.startswith("#"):
        return value[1:]
    return None


def _opacity(value: str | None) -> float:
    return min(max(parse_number(value, 1.0), 0.0), 1.0)


class SceneBuilder:
    """Translate an SVG element tree into a scene `Tree`.

    Args:
        root: The root ``<svg>`` element.
        dpi: Resolution used for absolute length units.
        languages: Preferred languages for ``systemLanguage`` tests in
            ``<switch>``. Defaults to English.
    """

    def __init__(self, root: Element, dpi: float = 96.0, languages: Sequence[str] | None = None) -> None:
        self.root = root
        self.dpi = dpi
        self.languages = tuple(languages) if languages else DEFAULT_LANGUAGES
        self.elements_by_id: dict[str, Element] = {}
        self.parents: dict[Element, Element] = {child: parent for parent in root.iter() for child in parent}
        for el in root.iter():
            el_id = el.get("id")
            if el_id and el_id not in self.elements_by_id:
                self.elements_by_id[el_id] = el
        self.view_box = Rect(0.0, 0.0, DEFAULT_SIZE, DEFAULT_SIZE)
        self.defs: dict[str, PaintServer] = {}

    def build(self) -> Tree:
        size, self.view_box = self._canvas()
        self.defs = self._collect_gradients()

        root_group = Group(id=self.root.get("id", ""))
        style = self._cascade(self.root, INITIAL_STYLE)
        self._build_children(self.root, root_group, style, 0)

        return Tree(
            size=size,
            view_box=self.view_box,
            aspect=parse_aspect_ratio(self.root.get("preserveAspectRatio")),
            root=root_group,
            defs=self.defs,
        )

    # ------------------------------------------------------------------
    # Canvas
    # ------------------------------------------------------------------

    def _canvas(self) -> tuple[tuple[float, float], Rect]:
        view_box = parse_view_box(self.root.get("viewBox"))

        def dimension(attr: str, fallback: float) -> float:
            value = self.root.get(attr)
            if value is None or value.strip().endswith("%"):
                return fallback
            length = parse_length(value, self.dpi)
            if length is None:
                logger.warning("Invalid %s '%s', using %s", attr, value, fallback)
                return fallback
            return length

        width = dimension("width", view_box.width if view_box else DEFAULT_SIZE)
        height = dimension("height", view_box.height if view_box else DEFAULT_SIZE)
        if width <= 0 or height <= 0:
            raise SVGParseError(f"SVG has an invalid size: {width}x{height}")

        if view_box is None:
            view_box = Rect(0.0, 0.0, width, height)
        return (width, height), view_box

    # ------------------------------------------------------------------
    # Styles and paint
    # ------------------------------------------------------------------

    def _cascade(self, el: Element, inherited: dict[str, str]) -> dict[str, str]:
        props = {k: v for k, v in inherited.items() if k in INHERITED_PROPERTIES}
        declared = {}
        for name in INHERITED_PROPERTIES + LOCAL_PROPERTIES:
            value = el.get(name)
            if value is not None:
                declared[name] = value.strip()
        declared.update(parse_style(el.get("style")))

        for name, value in declared.items():
            if value == "inherit":
                continue
            if name in INHERITED_PROPERTIES or name in LOCAL_PROPERTIES:
                props[name] = value

        # group opacity is approximated by multiplying it down to the leaves
        own = declared.get("opacity")
        own_opacity = 1.0 if own is None or own == "inherit" else _opacity(own)
        props["opacity"] = str(_opacity(inherited.get("opacity")) * own_opacity)
        return props

    def _paint(self, value: str, opacity: float, props: dict[str, str]) -> Paint | None:
        value = value.strip()
        if value == "none":
            return None

        link = parse_url(value)
        if link is not None:
            link_id, fallback = link
            if link_id in self.defs or not fallback:
                return PaintLink(link_id)
            value = fallback
            if value == "none":
                return None

        if value == "currentColor":
            value = props.get("color", "black")

        color = parse_color(value)
        if color is None:
            logger.debug("Unsupported paint '%s' ignored", value)
            return None
        return color.with_alpha(multiply_a8(color.alpha, opacity_to_u8(opacity)))

    def _fill(self, props: dict[str, str]) -> Fill | None:
        opacity = _opacity(props.get("opacity")) * _opacity(props.get("fill-opacity"))
        paint = self._paint(props.get("fill", "black"), opacity, props)
        if paint is None:
            return None
        return Fill(paint=paint)

    def _stroke(self, props: dict[str, str]) -> Stroke | None:
        opacity = _opacity(props.get("opacity")) * _opacity(props.get("stroke-opacity"))
        paint = self._paint(props.get("stroke", "none"), opacity, props)
        if paint is None:
            return None
        width = parse_length(props.get("stroke-width", "1"), self.dpi, self._diagonal())
        if width is None or width <= 0:
            return None
        return Stroke(paint=paint, width=width)

    # ------------------------------------------------------------------
    # Gradients
    # ------------------------------------------------------------------

    def _href_chain(self, el: Element) -> list[Element]:
        chain = [el]
        seen = {id(el)}
        while len(chain) < MAX_HREF_CHAIN:
            ref = _href(chain[-1])
            target = self.elements_by_id.get(ref) if ref else None
            if target is None or id(target) in seen:
                break
            if local_name(target.tag) not in ("linearGradient", "radialGradient"):
                break
            chain.append(target)
            seen.add(id(target))
        return chain

    @staticmethod
    def _chain_attr(chain: list[Element], name: str, same_kind: bool = True) -> str | None:
        kind = local_name(chain[0].tag)
        for el in chain:
            if same_kind and local_name(el.tag) != kind:
                continue
            value = el.get(name)
            if value is not None:
                return value
        return None

    def _stops(self, chain: list[Element]) -> list[Stop]:
        for el in chain:
            stop_els = [child for child in el if local_name(child.tag) == "stop"]
            if stop_els:
                return [self._stop(child, self._cascade_to(child)) for child in stop_els]
        return []

    def _cascade_to(self, el: Element) -> dict[str, str]:
        """Cascade styles from the root down to ``el`` in document order."""
        ancestors = [el]
        while ancestors[-1] in self.parents:
            ancestors.append(self.parents[ancestors[-1]])
        props = INITIAL_STYLE
        for node in reversed(ancestors):
            props = self._cascade(node, props)
        return props

    def _stop(self, el: Element, inherited: dict[str, str]) -> Stop:
        props = {"stop-color": el.get("stop-color", "black"), "stop-opacity": el.get("stop-opacity", "1")}
        props.update({k: v for k, v in parse_style(el.get("style")).items() if k in props})

        color_value = props["stop-color"].strip()
        if color_value == "currentColor":
            color_value = inherited.get("color", "black")
        color = parse_color(color_value)
        if color is None:
            color = Color.black()
        offset = min(max(parse_number(el.get("offset"), 0.0), 0.0), 1.0)
        return Stop(offset=offset, color=color, opacity=_opacity(props["stop-opacity"]))

    def _gradient_coord(self, chain: list[Element], name: str, default: float, units: Units, axis: str) -> float:
        value = self._chain_attr(chain, name)
        if value is None:
            return default if units is Units.OBJECT_BOUNDING_BOX else default * self._reference(axis)
        if units is Units.OBJECT_BOUNDING_BOX:
            return parse_number(value, default)
        length = parse_length(value, self.dpi, self._reference(axis))
        return default if length is None else length

    def _collect_gradients(self) -> dict[str, PaintServer]:
        defs: dict[str, PaintServer] = {}
        for el in self.root.iter():
            tag = local_name(el.tag)
            if tag not in ("linearGradient", "radialGradient"):
                continue
            grad_id = el.get("id")
            if not grad_id:
                continue

            chain = self._href_chain(el)
            stops = self._stops(chain)
            if not stops:
                logger.debug("Gradient '%s' has no stops, skipped", grad_id)
                continue

            units_value = self._chain_attr(chain, "gradientUnits", same_kind=False)
            units = Units.USER_SPACE_ON_USE if units_value == "userSpaceOnUse" else Units.OBJECT_BOUNDING_BOX
            transform = parse_transform(self._chain_attr(chain, "gradientTransform", same_kind=False))

            if tag == "linearGradient":
                defs[grad_id] = LinearGradient(
                    id=grad_id,
                    x1=self._gradient_coord(chain, "x1", 0.0, units, "x"),
                    y1=self._gradient_coord(chain, "y1", 0.0, units, "y"),
                    x2=self._gradient_coord(chain, "x2", 1.0, units, "x"),
                    y2=self._gradient_coord(chain, "y2", 0.0, units, "y"),
                    units=units,
                    transform=transform,
                    stops=stops,
                )
            else:
                defs[grad_id] = RadialGradient(
                    id=grad_id,
                    cx=self._gradient_coord(chain, "cx", 0.5, units, "x"),
                    cy=self._gradient_coord(chain, "cy", 0.5, units, "y"),
                    r=self._gradient_coord(chain, "r", 0.5, units, "xy"),
                    units=units,
                    transform=transform,
                    stops=stops,
                )
        return defs

    # ------------------------------------------------------------------
    # Nodes
    # ------------------------------------------------------------------

    def _diagonal(self) -> float:
        return math.hypot(self.view_box.width, self.view_box.height) / math.sqrt(2.0)

    def _reference(self, axis: str) -> float:
        if axis == "x":
            return self.view_box.width
        if axis == "y":
            return self.view_box.height
        return self._diagonal()

    def _length(self, el: Element, name: str, axis: str, default: float = 0.0) -> float:
        value = parse_length(el.get(name), self.dpi, self._reference(axis))
        return default if value is None else value

    def _build_children(self, el: Element, group: Group, style: dict[str, str], depth: int) -> None:
        for child in el:
            node = self._build_element(child, style, depth)
            if node is not None:
                group.children.append(node)

    def _build_element(self, el: Element, style: dict[str, str], depth: int) -> Node | None:
        tag = local_name(el.tag)
        if not tag or tag in NON_RENDERING:
            return None

        props = self._cascade(el, style)
        if props.get("display") == "none":
            return None

        transform = parse_transform(el.get("transform"))

        if tag in CONTAINERS:
            group = Group(id=el.get("id", ""), transform=transform)
            self._build_children(el, group, props, depth)
            return group

        if tag == "svg":
            return self._build_nested_svg(el, props, transform, depth)

        if tag == "switch":
            group = Group(id=el.get("id", ""), transform=transform)
            for child in el:
                if not self._passes_conditions(child):
                    continue
                node = self._build_element(child, props, depth)
                if node is not None:
                    group.children.append(node)
                    break
            return group

        if tag == "use":
            return self._build_use(el, props, transform, depth)

        if tag in SHAPES:
            if props.get("visibility", "visible") != "visible":
                return None
            data = self._shape_data(el, tag)
            if not data:
                return None
            # a line has no interior to fill
            fill = None if tag == "line" else self._fill(props)
            path = Path(id=el.get("id", ""), data=data, fill=fill, stroke=self._stroke(props))
            if transform.is_default():
                return path
            return Group(transform=transform, children=[path])

        if tag == "image":
            image = Image(
                id=el.get("id", ""),
                x=self._length(el, "x", "x"),
                y=self._length(el, "y", "y"),
                width=self._length(el, "width", "x"),
                height=self._length(el, "height", "y"),
                href=el.get(f"{{{XLINK_NS}}}href") or el.get("href", ""),
            )
            if transform.is_default():
                return image
            return Group(transform=transform, children=[image])

        logger.debug("Skipping unsupported element <%s>", tag)
        return None

    def _passes_conditions(self, el: Element) -> bool:
        """Evaluate the conditional processing attributes of a switch child."""
        if el.get("requiredExtensions") is not None:
            return False

        value = el.get("systemLanguage")
        if value is None:
            return True
        for lang in value.split(","):
            lang = lang.strip()
            if not lang:
                continue
            if lang in self.languages:
                return True
            # 'en-US' also matches a plain 'en' preference
            if "-" in lang and lang.split("-", 1)[0] in self.languages:
                return True
        return False

    def _build_nested_svg(self, el: Element, props: dict[str, str], transform: Transform, depth: int) -> Node | None:
        width = self._length(el, "width", "x", self.view_box.width)
        height = self._length(el, "height", "y", self.view_box.height)
        if width <= 0 or height <= 0:
            return None

        offset = Transform.from_translate(self._length(el, "x", "x"), self._length(el, "y", "y"))
        transform = transform.append(offset)
        view_box = parse_view_box(el.get("viewBox"))
        if view_box is not None:
            aspect = parse_aspect_ratio(el.get("preserveAspectRatio"))
            transform = transform.append(view_box_to_transform(view_box, aspect, (width, height)))

        group = Group(id=el.get("id", ""), transform=transform)
        outer_view_box = self.view_box
        self.view_box = view_box or Rect(0.0, 0.0, width, height)
        try:
            self._build_children(el, group, props, depth)
        finally:
            self.view_box = outer_view_box
        return group

    def _build_use(self, el: Element, props: dict[str, str], transform: Transform, depth: int) -> Node | None:
        ref = _href(el)
        target = self.elements_by_id.get(ref) if ref else None
        if target is None:
            logger.debug("<use> references missing element '%s'", ref)
            return None
        if depth >= MAX_USE_DEPTH:
            logger.warning("<use> nesting too deep at '%s', skipped", ref)
            return None

        offset = Transform.from_translate(self._length(el, "x", "x"), self._length(el, "y", "y"))
        group = Group(id=el.get("id", ""), transform=transform.append(offset))

        if local_name(target.tag) == "symbol":
            self._build_children(target, group, self._cascade(target, props), depth + 1)
        else:
            node = self._build_element(target, props, depth + 1)
            if node is not None:
                group.children.append(node)
        return group

    def _shape_data(self, el: Element, tag: str) -> list[PathSegment]:
        if tag == "path":
            return path_from_d(el.get("d", ""))

        if tag == "rect":
            width = self._length(el, "width", "x")
            height = self._length(el, "height", "y")
            if width <= 0 or height <= 0:
                return []
            rx = parse_length(el.get("rx"), self.dpi, self.view_box.width)
            ry = parse_length(el.get("ry"), self.dpi, self.view_box.height)
            if rx is None:
                rx = ry
            if ry is None:
                ry = rx
            return rect_path(
                self._length(el, "x", "x"), self._length(el, "y", "y"), width, height, rx or 0.0, ry or 0.0
            )

        if tag == "circle":
            r = self._length(el, "r", "xy")
            if r <= 0:
                return []
            return ellipse_path(self._length(el, "cx", "x"), self._length(el, "cy", "y"), r, r)

        if tag == "ellipse":
            rx = self._length(el, "rx", "x")
            ry = self._length(el, "ry", "y")
            if rx <= 0 or ry <= 0:
                return []
            return ellipse_path(self._length(el, "cx", "x"), self._length(el, "cy", "y"), rx, ry)

        if tag == "line":
            return polyline_path(
                [
                    self._length(el, "x1", "x"),
                    self._length(el, "y1", "y"),
                    self._length(el, "x2", "x"),
                    self._length(el, "y2", "y"),
                ]
            )

        if tag in ("polyline", "polygon"):
            return polyline_path(parse_number_list(el.get("points")), close=tag == "polygon")

        return []


def build_tree(root: Element, dpi: float = 96.0, languages: Sequence[str] | None = None) -> Tree:
    """Build a scene tree from a root ``<svg>`` element."""
    return SceneBuilder(root, dpi=dpi, languages=languages).build()
