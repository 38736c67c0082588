"""Walk a scene tree and collect TinyVG drawing commands."""

from __future__ import annotations

import logging

import numpy as np

from svg2tvgt.scene.geometry import Transform, path_bbox, transform_path, view_box_to_transform
from svg2tvgt.scene.model import Group, Path, Tree
from svg2tvgt.tvg.document import (
    ColorTable,
    Command,
    Document,
    DrawLinePath,
    FillPath,
    OutlineFillPath,
)
from svg2tvgt.tvg.paint import PaintResolver

logger = logging.getLogger(__name__)


def convert(tree: Tree, warn: bool = True) -> Document:
    """Convert a scene tree into a TinyVG document.

    Commands are emitted in depth-first pre-order, which is the paint order.
    Each call builds its own palette, so separate conversions share nothing.

    Args:
        tree: Normalized scene tree.
        warn: Log a warning for gradients on zero-area shapes.

    Returns:
        The populated document.
    """
    width, height = tree.size
    doc = Document(width=_round_size(width), height=_round_size(height))

    resolver = PaintResolver(tree, ColorTable(doc.colors), warn=warn)
    viewbox_ts = view_box_to_transform(tree.view_box, tree.aspect, tree.size)

    _convert_children(tree.root, viewbox_ts, resolver, doc)

    logger.debug(
        "Converted scene: %d colors, %d commands", len(doc.colors), len(doc.commands)
    )
    return doc


def _round_size(value: float) -> int:
    # half away from zero, clamped to the unsigned range
    return max(int(np.floor(value + 0.5)), 0)


def _convert_children(parent: Group, transform: Transform, resolver: PaintResolver, doc: Document) -> None:
    for child in parent.children:
        if isinstance(child, Group):
            _convert_children(child, transform.append(child.transform), resolver, doc)
        elif isinstance(child, Path):
            cmd = _convert_path(child, transform, resolver)
            if cmd is not None:
                doc.commands.append(cmd)
        else:
            logger.debug("Skipping unsupported node %s", type(child).__name__)


def _convert_path(path: Path, transform: Transform, resolver: PaintResolver) -> Command | None:
    data = transform_path(path.data, transform)

    bbox = path_bbox(data)
    if bbox is None:
        return None

    fill = resolver.resolve(path.fill.paint, bbox) if path.fill is not None else None
    stroke = resolver.resolve(path.stroke.paint, bbox) if path.stroke is not None else None

    if fill is not None and stroke is not None:
        return OutlineFillPath(
            stroke=stroke,
            fill=fill,
            line_width=float(np.float32(path.stroke.width)),
            path=data,
        )
    if fill is not None:
        return FillPath(fill=fill, path=data)
    if stroke is not None:
        return DrawLinePath(
            stroke=stroke,
            line_width=float(np.float32(path.stroke.width)),
            path=data,
        )
    return None
