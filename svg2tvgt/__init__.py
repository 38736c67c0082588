"""svg2tvgt: Convert SVG documents to TinyVG text.

This library provides:
- A conversion core from normalized scene trees to TinyVG documents
- A deduplicating color palette and two-stop gradient reduction
- The TinyVG text (``.tvgt``) emitter
- A small SVG front end (shapes, paths, colors, gradients)

Example:
    >>> from svg2tvgt import Svg2TvgtConverter
    >>> converter = Svg2TvgtConverter()
    >>> converter.convert_file("input.svg", "output.tvgt")
"""

from svg2tvgt.api import ConversionResult, Svg2TvgtConverter
from svg2tvgt.config import Config
from svg2tvgt.exceptions import (
    ConfigError,
    ConversionError,
    SVGParseError,
    Svg2TvgtError,
)
from svg2tvgt.tvg import ColorTable, Document, convert, to_tvgt

__version__ = "0.1.0"

__all__ = [
    # Main API
    "Svg2TvgtConverter",
    "ConversionResult",
    "Config",
    # Conversion core
    "ColorTable",
    "Document",
    "convert",
    "to_tvgt",
    # Exceptions
    "Svg2TvgtError",
    "SVGParseError",
    "ConfigError",
    "ConversionError",
    # Metadata
    "__version__",
]
