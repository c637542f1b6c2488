"""CLI commands for svg-context."""

from svg_context.cli.commands.fonts import fonts
from svg_context.cli.commands.render import render

__all__ = ["fonts", "render"]
