"""High-level conversion API.

Example:
    >>> from svg2tvgt import Svg2TvgtConverter
    >>> converter = Svg2TvgtConverter()
    >>> result = converter.convert_file("icon.svg", "icon.tvgt")
    >>> result.success
    True
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from svg2tvgt.config import Config
from svg2tvgt.exceptions import ConversionError, Svg2TvgtError
from svg2tvgt.scene.model import Tree
from svg2tvgt.svg.builder import build_tree
from svg2tvgt.svg.parser import parse_svg_bytes
from svg2tvgt.tvg.document import Document
from svg2tvgt.tvg.emitter import to_tvgt
from svg2tvgt.tvg.walker import convert

logger = logging.getLogger(__name__)


@dataclass
class ConversionResult:
    """Outcome of converting one file."""

    input_path: Path
    output_path: Path | None = None
    success: bool = False
    tvgt: str = ""
    color_count: int = 0
    command_count: int = 0
    errors: list[str] = field(default_factory=list)


class Svg2TvgtConverter:
    """Convert SVG documents to TinyVG text.

    Every call builds a fresh document and palette, so one converter can be
    shared between threads.

    Args:
        config: Settings; loaded with `Config.load` when omitted.
        quiet: Suppress the zero-area gradient warning. Defaults to
            ``config.quiet``.
        dpi: Resolution for absolute units. Defaults to ``config.dpi``.
        languages: Languages for ``systemLanguage`` resolution. Defaults to
            ``config.languages``.
    """

    def __init__(
        self,
        config: Config | None = None,
        quiet: bool | None = None,
        dpi: int | None = None,
        languages: Sequence[str] | None = None,
    ) -> None:
        self.config = config or Config.load()
        self.quiet = self.config.quiet if quiet is None else quiet
        self.dpi = self.config.dpi if dpi is None else dpi
        self.languages = list(self.config.languages if languages is None else languages)

    def load_tree(self, data: bytes) -> Tree:
        """Parse SVG bytes into a scene tree."""
        return build_tree(parse_svg_bytes(data), dpi=float(self.dpi), languages=self.languages)

    def convert_tree(self, tree: Tree) -> Document:
        return convert(tree, warn=not self.quiet)

    def convert_bytes(self, data: bytes) -> str:
        """Convert SVG bytes to TinyVG text.

        Raises:
            SVGParseError: If the data is not a valid SVG document.
        """
        return to_tvgt(self.convert_tree(self.load_tree(data)))

    def convert_string(self, svg: str) -> str:
        return self.convert_bytes(svg.encode("utf-8"))

    def convert_file(self, input_path: str | Path, output_path: str | Path | None = None) -> ConversionResult:
        """Convert one SVG file, optionally writing the result.

        Failures are reported in the returned result instead of raised.
        """
        input_path = Path(input_path)
        output_path = Path(output_path) if output_path is not None else None
        result = ConversionResult(input_path=input_path, output_path=output_path)

        try:
            try:
                data = input_path.read_bytes()
            except OSError as e:
                raise ConversionError(f"Cannot read {input_path}: {e}", str(input_path)) from e

            doc = self.convert_tree(self.load_tree(data))
            result.tvgt = to_tvgt(doc)
            result.color_count = len(doc.colors)
            result.command_count = len(doc.commands)

            if output_path is not None:
                try:
                    output_path.write_text(result.tvgt, encoding="utf-8")
                except OSError as e:
                    raise ConversionError(f"Cannot write {output_path}: {e}", str(input_path)) from e
        except Svg2TvgtError as e:
            logger.error("%s: %s", input_path, e)
            result.errors.append(str(e))
            return result
        except Exception as e:
            logger.exception("Unexpected error converting %s", input_path)
            result.errors.append(f"Unexpected error: {e}")
            return result

        result.success = True
        logger.info(
            "Converted %s: %d colors, %d commands", input_path, result.color_count, result.command_count
        )
        return result
