"""Exception hierarchy for svg2tvgt.

The conversion core never raises for paint or geometry that cannot be
represented: it drops the paint or the path instead. Exceptions are reserved
for input that cannot be read at all, invalid configuration and I/O failures.
"""

from __future__ import annotations


class Svg2TvgtError(Exception):
    """Base class for all svg2tvgt errors."""


class SVGParseError(Svg2TvgtError):
    """Raised when the input is not well-formed XML or not an SVG document."""


class ConfigError(Svg2TvgtError):
    """Raised when a configuration file or override holds an invalid value."""


class ConversionError(Svg2TvgtError):
    """Raised when a file conversion fails outside of the conversion core.

    Attributes:
        path: The input path that failed, if known.
    """

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path
