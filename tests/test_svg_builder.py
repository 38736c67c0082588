"""Unit tests for SVG parsing and scene tree construction.

Coverage: safe parsing and error reporting, canvas sizing, style cascade,
paint and group opacity folding, gradient collection with href inheritance,
use and symbol instancing, switch language tests, nested svg viewports and
skipped elements.
"""

from __future__ import annotations

import pytest

from svg2tvgt.exceptions import SVGParseError
from svg2tvgt.scene import (
    Color,
    Fill,
    Group,
    Image,
    LinearGradient,
    PaintLink,
    Path,
    RadialGradient,
    Rect,
    Transform,
    Units,
)
from svg2tvgt.svg import build_tree, parse_svg, parse_svg_string
from svg2tvgt.svg.shapes import rect_path

SVG_OPEN = '<svg xmlns="http://www.w3.org/2000/svg" xmlns:xlink="http://www.w3.org/1999/xlink" width="100" height="100">'


def build(body: str, open_tag: str = SVG_OPEN, dpi: float = 96.0, languages=None):
    return build_tree(parse_svg_string(f"{open_tag}{body}</svg>"), dpi=dpi, languages=languages)


def only_child(tree):
    assert len(tree.root.children) == 1
    return tree.root.children[0]


class TestParser:
    """Tests for parse_svg and friends."""

    def test_malformed_xml_raises(self, malformed_svg_content: str) -> None:
        """Broken XML raises SVGParseError."""
        with pytest.raises(SVGParseError, match="Failed to parse SVG"):
            parse_svg_string(malformed_svg_content)

    def test_non_svg_root_raises(self) -> None:
        """A well-formed document with another root is rejected."""
        with pytest.raises(SVGParseError, match="expected <svg>"):
            parse_svg_string("<html><body/></html>")

    def test_entity_declarations_are_refused(self) -> None:
        """Entity expansion is blocked by defusedxml."""
        bomb = (
            '<?xml version="1.0"?>'
            '<!DOCTYPE svg [<!ENTITY a "aaaaaaaa">]>'
            '<svg xmlns="http://www.w3.org/2000/svg">&a;</svg>'
        )
        with pytest.raises(SVGParseError):
            parse_svg_string(bomb)

    def test_parse_file(self, red_rect_file) -> None:
        """parse_svg reads from disk."""
        root = parse_svg(red_rect_file)
        assert root.tag.endswith("svg")


class TestCanvas:
    """Tests for canvas size and view box handling."""

    def test_size_and_view_box(self, red_rect_svg: str) -> None:
        """Width, height and viewBox are read from the root element."""
        tree = build_tree(parse_svg_string(red_rect_svg))
        assert tree.size == (100.0, 100.0)
        assert tree.view_box == Rect(0, 0, 100, 100)

    def test_size_falls_back_to_view_box(self) -> None:
        """A missing size uses the view box dimensions."""
        tree = build("", open_tag='<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 40 30">')
        assert tree.size == (40.0, 30.0)

    def test_missing_size_and_view_box_defaults(self) -> None:
        """Without size or view box the canvas is 100x100."""
        tree = build("", open_tag='<svg xmlns="http://www.w3.org/2000/svg">')
        assert tree.size == (100.0, 100.0)

    def test_absolute_units_follow_dpi(self) -> None:
        """Inch sizes convert through the configured resolution."""
        open_tag = '<svg xmlns="http://www.w3.org/2000/svg" width="2in" height="1in">'
        assert build("", open_tag=open_tag).size == (192.0, 96.0)
        assert build("", open_tag=open_tag, dpi=72).size == (144.0, 72.0)

    def test_zero_size_raises(self) -> None:
        """A zero-sized canvas is not a valid document."""
        with pytest.raises(SVGParseError, match="invalid size"):
            build("", open_tag='<svg xmlns="http://www.w3.org/2000/svg" width="0" height="10">')

    def test_aspect_ratio_is_read(self) -> None:
        """preserveAspectRatio lands on the tree."""
        open_tag = (
            '<svg xmlns="http://www.w3.org/2000/svg" width="100" height="100" '
            'viewBox="0 0 50 100" preserveAspectRatio="xMinYMin slice">'
        )
        tree = build("", open_tag=open_tag)
        assert (tree.aspect.align, tree.aspect.slice) == ("xMinYMin", True)


class TestStyles:
    """Tests for the presentation attribute cascade."""

    def test_red_rect(self, red_rect_svg: str) -> None:
        """A filled rect becomes a path with a flat fill and no stroke."""
        path = only_child(build_tree(parse_svg_string(red_rect_svg)))
        assert isinstance(path, Path)
        assert path.fill == Fill(Color(255, 0, 0, 255))
        assert path.stroke is None
        assert path.data == rect_path(10, 10, 80, 80)

    def test_default_fill_is_black(self) -> None:
        """Shapes without a fill attribute are filled black."""
        path = only_child(build('<rect width="10" height="10"/>'))
        assert path.fill.paint == Color(0, 0, 0, 255)

    def test_fill_inherits_from_group(self) -> None:
        """Fill and stroke cascade down from groups."""
        group = only_child(build('<g fill="blue" stroke="red" stroke-width="3"><rect width="10" height="10"/></g>'))
        path = group.children[0]
        assert path.fill.paint == Color(0, 0, 255, 255)
        assert path.stroke.paint == Color(255, 0, 0, 255)
        assert path.stroke.width == 3.0

    def test_style_attribute_overrides_presentation_attribute(self) -> None:
        """Inline style wins over the fill attribute."""
        path = only_child(build('<rect width="10" height="10" fill="red" style="fill: lime"/>'))
        assert path.fill.paint == Color(0, 255, 0, 255)

    def test_fill_opacity_is_folded_into_alpha(self) -> None:
        """Flat paint opacity multiplies the color alpha."""
        path = only_child(build('<rect width="10" height="10" fill="red" fill-opacity="0.5"/>'))
        assert path.fill == Fill(Color(255, 0, 0, 128))

    def test_opacity_is_folded_into_fill_alpha(self) -> None:
        """The opacity property multiplies the flat fill alpha."""
        path = only_child(build('<rect width="10" height="10" fill="red" opacity="0.5"/>'))
        assert path.fill.paint == Color(255, 0, 0, 128)

    def test_opacity_is_folded_into_stroke_alpha(self) -> None:
        """The opacity property multiplies the flat stroke alpha too."""
        path = only_child(build('<rect width="10" height="10" fill="none" stroke="blue" opacity="0.5"/>'))
        assert path.stroke.paint == Color(0, 0, 255, 128)

    def test_group_opacity_multiplies_down(self) -> None:
        """Group and shape opacities combine multiplicatively."""
        group = only_child(build('<g opacity="0.5"><rect width="10" height="10" fill="red" opacity="0.5"/></g>'))
        assert group.children[0].fill.paint == Color(255, 0, 0, 64)

    def test_opacity_combines_with_fill_opacity(self) -> None:
        """opacity and fill-opacity are multiplied before folding."""
        path = only_child(build('<rect width="10" height="10" fill="red" opacity="0.5" fill-opacity="0.5"/>'))
        assert path.fill.paint == Color(255, 0, 0, 64)

    def test_opacity_is_not_inherited_by_siblings(self) -> None:
        """A shape's own opacity does not leak to the next shape."""
        tree = build(
            '<rect width="10" height="10" fill="red" opacity="0.5"/>'
            '<rect width="10" height="10" fill="red"/>'
        )
        assert tree.root.children[1].fill.paint == Color(255, 0, 0, 255)

    def test_opacity_leaves_gradient_links_alone(self) -> None:
        """Opacity is only folded into flat colors."""
        tree = build(
            '<linearGradient id="g"><stop stop-color="red"/></linearGradient>'
            '<rect width="10" height="10" fill="url(#g)" opacity="0.5"/>'
        )
        assert only_child(tree).fill == Fill(PaintLink("g"))

    def test_fill_none_and_zero_stroke_width(self) -> None:
        """No fill and a zero stroke width leave nothing to paint."""
        path = only_child(build('<rect width="10" height="10" fill="none" stroke="red" stroke-width="0"/>'))
        assert path.fill is None
        assert path.stroke is None

    def test_current_color(self) -> None:
        """currentColor resolves through the color property."""
        group = only_child(build('<g color="blue"><rect width="10" height="10" fill="currentColor"/></g>'))
        assert group.children[0].fill.paint == Color(0, 0, 255, 255)

    def test_missing_gradient_uses_fallback(self) -> None:
        """An unknown url() reference falls back to the given color."""
        path = only_child(build('<rect width="10" height="10" fill="url(#nope) red"/>'))
        assert path.fill.paint == Color(255, 0, 0, 255)

    def test_display_none_is_skipped(self) -> None:
        """display:none removes the element."""
        tree = build('<rect width="10" height="10" display="none"/><g style="display:none"><rect/></g>')
        assert tree.root.children == []

    def test_hidden_shape_is_skipped(self) -> None:
        """visibility=hidden shapes are not drawn."""
        tree = build('<rect width="10" height="10" visibility="hidden"/>')
        assert tree.root.children == []


class TestElements:
    """Tests for structural and shape elements."""

    def test_shape_transform_wraps_in_group(self) -> None:
        """A transformed shape is placed under its own group."""
        group = only_child(build('<rect width="10" height="10" transform="translate(5 5)"/>'))
        assert isinstance(group, Group)
        assert group.transform == Transform.from_translate(5, 5)
        assert isinstance(group.children[0], Path)

    def test_shapes_without_area_are_dropped(self) -> None:
        """Rects and circles with non-positive size are skipped."""
        tree = build('<rect width="0" height="10"/><circle r="0"/><ellipse rx="5"/>')
        assert tree.root.children == []

    def test_line_polyline_polygon(self) -> None:
        """Line-based shapes all become paths."""
        tree = build(
            '<line x1="0" y1="0" x2="10" y2="10" stroke="red"/>'
            '<polyline points="0,0 10,0 10,10"/>'
            '<polygon points="0,0 10,0 10,10"/>'
        )
        assert [type(n) for n in tree.root.children] == [Path, Path, Path]

    def test_text_and_unknown_elements_are_skipped(self) -> None:
        """Unsupported elements such as text produce no node."""
        tree = build("<text>hello</text><foreignObject/>")
        assert tree.root.children == []

    def test_switch_keeps_first_renderable_child(self) -> None:
        """switch renders only its first usable child."""
        group = only_child(build('<switch><title>t</title><rect width="1" height="1"/><circle r="5"/></switch>'))
        assert len(group.children) == 1
        assert isinstance(group.children[0], Path)

    def test_switch_skips_other_languages(self) -> None:
        """A child for another language is passed over."""
        group = only_child(
            build('<switch><rect systemLanguage="ru" width="1" height="1" fill="red"/><rect width="1" height="1" fill="blue"/></switch>')
        )
        assert len(group.children) == 1
        assert group.children[0].fill.paint == Color(0, 0, 255, 255)

    def test_switch_matches_configured_language(self) -> None:
        """systemLanguage is tested against the configured languages."""
        group = only_child(
            build(
                '<switch><rect systemLanguage="ru" width="1" height="1" fill="red"/><rect width="1" height="1" fill="blue"/></switch>',
                languages=["de", "ru"],
            )
        )
        assert group.children[0].fill.paint == Color(255, 0, 0, 255)

    def test_switch_matches_primary_language_subtag(self) -> None:
        """'en-US' in the document matches an 'en' preference."""
        group = only_child(
            build('<switch><rect systemLanguage="fr, en-US" width="1" height="1" fill="red"/><rect width="1" height="1"/></switch>')
        )
        assert group.children[0].fill.paint == Color(255, 0, 0, 255)

    def test_switch_skips_required_extensions(self) -> None:
        """Children that require extensions never pass."""
        group = only_child(
            build(
                '<switch><rect requiredExtensions="http://example.org/ext" width="1" height="1" fill="red"/>'
                '<rect width="1" height="1" fill="blue"/></switch>'
            )
        )
        assert group.children[0].fill.paint == Color(0, 0, 255, 255)

    def test_switch_without_matching_child_is_empty(self) -> None:
        """A switch whose children all fail renders nothing."""
        group = only_child(build('<switch><rect systemLanguage="ru" width="1" height="1"/></switch>'))
        assert group.children == []

    def test_nested_svg_becomes_translated_group(self) -> None:
        """A nested svg is a group moved by its x and y."""
        group = only_child(build('<svg x="5" y="5"><rect width="5" height="5" fill="red"/></svg>'))
        assert isinstance(group, Group)
        assert group.transform == Transform.from_translate(5, 5)
        assert group.children[0].data == rect_path(0, 0, 5, 5)

    def test_nested_svg_view_box(self) -> None:
        """A nested viewBox scales its content and sets the percent reference."""
        group = only_child(
            build('<svg x="10" width="20" height="20" viewBox="0 0 10 10"><rect width="50%" height="10" fill="red"/></svg>')
        )
        assert group.transform == Transform(2.0, 0.0, 0.0, 2.0, 10.0, 0.0)
        assert group.children[0].data == rect_path(0, 0, 5, 10)

    def test_nested_svg_restores_outer_viewport(self) -> None:
        """Percent lengths after a nested svg use the outer viewport again."""
        tree = build('<svg width="20" height="20" viewBox="0 0 10 10"/><rect width="50%" height="10"/>')
        assert tree.root.children[1].data == rect_path(0, 0, 50, 10)

    def test_nested_svg_with_zero_size_is_dropped(self) -> None:
        """A nested svg without area renders nothing."""
        assert build('<svg width="0"><rect width="5" height="5"/></svg>').root.children == []

    def test_use_references_element_with_offset(self) -> None:
        """use instantiates its target translated by x and y."""
        tree = build('<defs><rect id="r" width="5" height="5"/></defs><use xlink:href="#r" x="10" y="20"/>')
        use = only_child(tree)
        assert use.transform == Transform.from_translate(10, 20)
        assert isinstance(use.children[0], Path)

    def test_use_of_symbol(self) -> None:
        """use of a symbol renders the symbol's children."""
        tree = build('<symbol id="s"><rect width="5" height="5"/><rect width="2" height="2"/></symbol><use href="#s"/>')
        use = only_child(tree)
        assert len(use.children) == 2

    def test_use_of_missing_element(self) -> None:
        """A dangling use reference is dropped."""
        assert build('<use href="#missing"/>').root.children == []

    def test_self_referencing_use_terminates(self) -> None:
        """Recursive use chains stop at the nesting limit."""
        tree = build('<g id="loop"><use href="#loop"/></g>')
        assert len(tree.root.children) == 1

    def test_image_node(self) -> None:
        """image elements become Image nodes."""
        image = only_child(build('<image x="1" y="2" width="3" height="4" href="pic.png"/>'))
        assert image == Image(x=1, y=2, width=3, height=4, href="pic.png")


class TestGradients:
    """Tests for gradient definitions."""

    def test_linear_gradient(self, gradient_svg: str) -> None:
        """A linear gradient is collected with all of its stops."""
        tree = build_tree(parse_svg_string(gradient_svg))
        grad = tree.defs["grad"]
        assert isinstance(grad, LinearGradient)
        assert grad.units is Units.OBJECT_BOUNDING_BOX
        assert (grad.x1, grad.y1, grad.x2, grad.y2) == (0.0, 0.0, 1.0, 0.0)
        assert [s.color for s in grad.stops] == [
            Color(255, 0, 0, 255),
            Color(0, 255, 0, 255),
            Color(0, 0, 255, 255),
        ]
        path = only_child(tree)
        assert path.fill.paint == PaintLink("grad")

    def test_radial_gradient_in_user_space(self) -> None:
        """userSpaceOnUse coordinates are read as lengths."""
        tree = build(
            '<radialGradient id="r" gradientUnits="userSpaceOnUse" cx="50" cy="40" r="10">'
            '<stop offset="0" stop-color="red"/><stop offset="1" stop-color="blue" stop-opacity="0.5"/>'
            "</radialGradient>"
        )
        grad = tree.defs["r"]
        assert isinstance(grad, RadialGradient)
        assert grad.units is Units.USER_SPACE_ON_USE
        assert (grad.cx, grad.cy, grad.r) == (50.0, 40.0, 10.0)
        assert grad.stops[1].opacity == 0.5

    def test_href_inherits_stops_and_attributes(self) -> None:
        """A referencing gradient takes stops and units from its base."""
        tree = build(
            '<linearGradient id="base" gradientUnits="userSpaceOnUse" x2="100">'
            '<stop offset="0" stop-color="red"/><stop offset="1" stop-color="blue"/>'
            "</linearGradient>"
            '<linearGradient id="derived" xlink:href="#base" gradientTransform="scale(2)"/>'
        )
        derived = tree.defs["derived"]
        assert derived.units is Units.USER_SPACE_ON_USE
        assert derived.x2 == 100.0
        assert derived.transform == Transform.from_scale(2, 2)
        assert len(derived.stops) == 2

    def test_gradient_without_stops_is_not_registered(self) -> None:
        """Gradients with no stops anywhere in the chain are left out."""
        tree = build('<linearGradient id="empty"/><rect width="10" height="10" fill="url(#empty)"/>')
        assert "empty" not in tree.defs

    def test_stop_style_and_offset_clamp(self) -> None:
        """Stop colors may come from style and offsets are clamped."""
        tree = build(
            '<linearGradient id="g">'
            '<stop offset="-1" style="stop-color: lime; stop-opacity: 0.25"/>'
            '<stop offset="150%" stop-color="bogus"/>'
            "</linearGradient>"
        )
        first, last = tree.defs["g"].stops
        assert (first.offset, first.color, first.opacity) == (0.0, Color(0, 255, 0, 255), 0.25)
        assert (last.offset, last.color) == (1.0, Color(0, 0, 0, 255))

    def test_stop_current_color_uses_cascaded_color(self) -> None:
        """currentColor on a stop takes the color inherited by the stop."""
        tree = build(
            '<defs color="blue"><linearGradient id="g">'
            '<stop stop-color="currentColor"/>'
            '<stop style="color: lime; stop-color: currentColor"/>'
            "</linearGradient></defs>"
        )
        first, last = tree.defs["g"].stops
        assert first.color == Color(0, 0, 255, 255)
        assert last.color == Color(0, 255, 0, 255)
