"""Command-line interface for svg2tvgt."""
