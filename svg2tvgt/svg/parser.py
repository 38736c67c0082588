"""Safe SVG parsing.

All parsing goes through defusedxml so that entity expansion and external
entity tricks in untrusted SVG files are rejected.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import defusedxml.ElementTree as ET
from defusedxml import DefusedXmlException

from svg2tvgt.exceptions import SVGParseError

if TYPE_CHECKING:
    from xml.etree.ElementTree import Element

SVG_NS = "http://www.w3.org/2000/svg"
XLINK_NS = "http://www.w3.org/1999/xlink"


def local_name(tag: str) -> str:
    """Strip the namespace from an element tag."""
    if not isinstance(tag, str):
        return ""
    return tag.split("}")[-1]


def _check_root(root: Element) -> Element:
    if local_name(root.tag) != "svg":
        raise SVGParseError(f"Root element is <{local_name(root.tag)}>, expected <svg>")
    return root


def parse_svg_bytes(data: bytes) -> Element:
    """Parse SVG document bytes and return the root ``<svg>`` element.

    Raises:
        SVGParseError: If the data is not well-formed or not an SVG document.
    """
    try:
        root = ET.fromstring(data)
    except ET.ParseError as e:
        raise SVGParseError(f"Failed to parse SVG: {e}") from e
    except DefusedXmlException as e:
        raise SVGParseError(f"Refusing unsafe SVG: {e}") from e
    return _check_root(root)


def parse_svg_string(text: str) -> Element:
    """Parse an SVG document held in a string."""
    return parse_svg_bytes(text.encode("utf-8"))


def parse_svg(path: str | Path) -> Element:
    """Parse an SVG file.

    Raises:
        SVGParseError: If the file is not well-formed or not an SVG document.
    """
    data = Path(path).read_bytes()
    return parse_svg_bytes(data)
