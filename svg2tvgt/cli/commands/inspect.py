"""Inspect command - summarize the TinyVG document an SVG converts to."""

from __future__ import annotations

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from svg2tvgt.api import Svg2TvgtConverter
from svg2tvgt.config import Config
from svg2tvgt.exceptions import Svg2TvgtError
from svg2tvgt.scene.geometry import MoveTo
from svg2tvgt.tvg.document import (
    DrawLinePath,
    FillPath,
    FlatStyle,
    LinearGradientStyle,
    OutlineFillPath,
    Style,
)
from svg2tvgt.tvg.emitter import fmt_f32

console = Console()


def describe_style(style: Style) -> str:
    if isinstance(style, FlatStyle):
        return f"flat {style.color}"
    kind = "linear" if isinstance(style, LinearGradientStyle) else "radial"
    return f"{kind} {style.color1}->{style.color2}"


@click.command()
@click.argument("svg_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def inspect(ctx: click.Context, svg_file: Path) -> None:
    """Show the palette and drawing commands produced for an SVG file."""
    config = ctx.obj.get("config") or Config.load()
    converter = Svg2TvgtConverter(config=config)

    try:
        doc = converter.convert_tree(converter.load_tree(svg_file.read_bytes()))
    except Svg2TvgtError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1) from e

    console.print(f"[bold]Canvas:[/bold] {doc.width}x{doc.height}")

    palette = Table(title=f"Palette of {svg_file.name}")
    palette.add_column("Index", style="cyan", justify="right")
    palette.add_column("RGBA", style="green")
    for idx, color in enumerate(doc.colors):
        palette.add_row(str(idx), f"{color.red} {color.green} {color.blue} {color.alpha}")
    console.print(palette)

    commands = Table(title=f"Commands of {svg_file.name}")
    commands.add_column("#", style="cyan", justify="right")
    commands.add_column("Command", style="green")
    commands.add_column("Fill", style="yellow")
    commands.add_column("Stroke", style="yellow")
    commands.add_column("Width", style="dim")
    commands.add_column("Subpaths", style="dim", justify="right")
    commands.add_column("Segments", style="dim", justify="right")

    for idx, cmd in enumerate(doc.commands):
        if isinstance(cmd, FillPath):
            name, fill, stroke, width = "fill_path", describe_style(cmd.fill), "-", "-"
        elif isinstance(cmd, DrawLinePath):
            name, fill, stroke, width = "draw_line_path", "-", describe_style(cmd.stroke), fmt_f32(cmd.line_width)
        elif isinstance(cmd, OutlineFillPath):
            name = "outline_fill_path"
            fill, stroke, width = describe_style(cmd.fill), describe_style(cmd.stroke), fmt_f32(cmd.line_width)
        else:
            raise TypeError(f"unknown command: {cmd!r}")
        subpaths = sum(1 for seg in cmd.path if isinstance(seg, MoveTo))
        commands.add_row(str(idx), name, fill, stroke, width, str(subpaths), str(len(cmd.path)))

    console.print(commands)
    console.print(f"\n[bold]Total:[/bold] {len(doc.colors)} colors, {len(doc.commands)} commands")
