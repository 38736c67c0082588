"""Convert command - single SVG to TinyVG text."""

from __future__ import annotations

from pathlib import Path

import click
from rich.console import Console

from svg2tvgt.api import Svg2TvgtConverter
from svg2tvgt.config import DPI_RANGE, Config, parse_languages
from svg2tvgt.exceptions import Svg2TvgtError

err_console = Console(stderr=True)


def languages_option(ctx: click.Context, param: click.Parameter, value: str | None) -> list[str] | None:
    """Parse the --languages option into a list of language tags."""
    if value is None:
        return None
    languages = parse_languages(value)
    if not languages:
        raise click.BadParameter("languages list cannot be empty")
    return languages


@click.command()
@click.argument("input_svg", metavar="INPUT")
@click.argument("output_tvg", metavar="[OUTPUT]", required=False, type=click.Path(dir_okay=False, path_type=Path))
@click.option("-c", "to_stdout", is_flag=True, help="Print the output TinyVG to stdout")
@click.option("--dpi", type=click.IntRange(*DPI_RANGE), help="Resolution for absolute units [default: 96]")
@click.option("--languages", callback=languages_option, help="Comma-separated languages for systemLanguage [default: en]")
@click.pass_context
def convert(
    ctx: click.Context,
    input_svg: str,
    output_tvg: Path | None,
    to_stdout: bool,
    dpi: int | None,
    languages: list[str] | None,
) -> None:
    """Convert an SVG file to TinyVG text.

    INPUT: SVG file, or '-' to read from stdin.
    OUTPUT: TinyVG text file. Omit it (or pass -c) to print to stdout.
    """
    config = ctx.obj.get("config") or Config.load()
    converter = Svg2TvgtConverter(config=config, dpi=dpi, languages=languages)

    try:
        if input_svg == "-":
            data = click.get_binary_stream("stdin").read()
        else:
            data = Path(input_svg).read_bytes()
    except OSError as e:
        err_console.print(f"[red]Error:[/red] failed to read {input_svg}: {e.strerror or e}")
        raise SystemExit(1) from e

    try:
        text = converter.convert_bytes(data)
    except Svg2TvgtError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1) from e

    if to_stdout or output_tvg is None:
        click.echo(text, nl=False)
        return

    try:
        output_tvg.write_text(text, encoding="utf-8")
    except OSError as e:
        err_console.print(f"[red]Error:[/red] failed to write {output_tvg}: {e.strerror or e}")
        raise SystemExit(1) from e
