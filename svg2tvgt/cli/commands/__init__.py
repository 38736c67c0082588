"""CLI commands for svg2tvgt."""

from svg2tvgt.cli.commands.batch import batch
from svg2tvgt.cli.commands.convert import convert
from svg2tvgt.cli.commands.inspect import inspect

__all__ = ["convert", "batch", "inspect"]
