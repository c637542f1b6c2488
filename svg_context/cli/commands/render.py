"""Render command - replay a drawing script into an SVG file."""

from __future__ import annotations

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from svg_context.config import Config
from svg_context.context.renderer import SVGGraphicsContext
from svg_context.exceptions import SVGContextError
from svg_context.script import load_script, run_script
from svg_context.svg.parser import count_elements, parse_svg

console = Console()


@click.command()
@click.argument("script_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-o", "--output", type=click.Path(path_type=Path), help="Output SVG (default: SCRIPT.svg)")
@click.option("--width", type=float, help="Document width (overrides the script)")
@click.option("--height", type=float, help="Document height (overrides the script)")
@click.option("--title", help="Document title (overrides the script)")
@click.option("-p", "--precision", type=click.IntRange(0, 12), help="Decimal places for coordinates")
@click.option("--summary/--no-summary", default=True, help="Print an element summary")
@click.pass_context
def render(
    ctx: click.Context,
    script_file: Path,
    output: Path | None,
    width: float | None,
    height: float | None,
    title: str | None,
    precision: int | None,
    summary: bool,
) -> None:
    """Render SCRIPT_FILE (YAML or JSON operations) to SVG."""
    config: Config = (ctx.obj or {}).get("config") or Config.load()
    if precision is not None:
        config.precision = precision
    output = output or script_file.with_suffix(".svg")

    try:
        script = load_script(script_file)
        svg = SVGGraphicsContext(
            width if width is not None else script.width,
            height if height is not None else script.height,
            title=title if title is not None else script.title,
            config=config,
        )
        count = run_script(svg, script.operations, base_dir=script_file.parent)
    except SVGContextError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1) from e

    svg.write(output)
    console.print(f"[green]Rendered[/green] {count} operations -> {output}")

    if summary:
        counts = count_elements(parse_svg(output).getroot())
        table = Table(title=f"Elements in {output.name}")
        table.add_column("Element", style="cyan")
        table.add_column("Count", style="yellow", justify="right")
        for tag, n in sorted(counts.items()):
            table.add_row(tag, str(n))
        console.print(table)
