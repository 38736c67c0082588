"""Command-line entry point for svg2tvgt."""

from __future__ import annotations

import logging
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler

from svg2tvgt import __version__
from svg2tvgt.cli.commands import batch, convert, inspect
from svg2tvgt.config import LOG_LEVELS, Config
from svg2tvgt.exceptions import ConfigError

err_console = Console(stderr=True)


def setup_logging(level: int) -> None:
    """Route package logs to stderr through rich."""
    logger = logging.getLogger("svg2tvgt")
    logger.handlers.clear()
    handler = RichHandler(console=err_console, show_time=False, show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False


@click.group()
@click.version_option(__version__, "-V", "--version", prog_name="svg2tvgt")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML configuration file",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    help="Logging level [default: WARNING]",
)
@click.option("--quiet", is_flag=True, help="Disable warnings")
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None, log_level: str | None, quiet: bool) -> None:
    """svg2tvgt - an SVG to TinyVG text converter."""
    try:
        config = Config.load(config_path)
        if log_level:
            config.log_level = log_level.upper()
        if quiet:
            config.quiet = True
        config.validate()
    except ConfigError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1) from e

    setup_logging(config.level)

    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["log_level"] = config.log_level


cli.add_command(convert)
cli.add_command(batch)
cli.add_command(inspect)


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
