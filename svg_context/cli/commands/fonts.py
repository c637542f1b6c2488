"""Fonts command - inspect typefaces used for text layout and glyph outlines."""

from __future__ import annotations

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from svg_context.exceptions import FontLoadError
from svg_context.fonts import Font, FontCache, FontToolsTypeface

console = Console()


@click.group()
def fonts() -> None:
    """Font management commands."""
    pass


@fonts.command("list")
@click.option("--family", help="Filter by font family name")
@click.option("--style", help="Filter by style (regular, bold, italic)")
def list_fonts(family: str | None, style: str | None) -> None:
    """List fonts known to fontconfig."""
    cache = FontCache()

    with console.status("[bold green]Loading fonts..."):
        cache.prewarm()

    table = Table(title="Available Fonts")
    table.add_column("Family", style="cyan")
    table.add_column("Style", style="green")
    table.add_column("Path", style="dim")

    count = 0
    for entry in cache._fc_cache or []:
        font_family = entry.families[0] if entry.families else "unknown"
        font_style = entry.styles[0] if entry.styles else "regular"
        if family and family.lower() not in font_family:
            continue
        if style and style.lower() != font_style:
            continue
        font_path = str(entry.path)
        table.add_row(
            font_family,
            font_style,
            font_path[:50] + "..." if len(font_path) > 50 else font_path,
        )
        count += 1

    console.print(table)
    console.print(f"\n[bold]Total:[/bold] {count} fonts")


@fonts.command("find")
@click.argument("name")
@click.option("--style", default="Regular", help="Preferred style")
def find_font(name: str, style: str) -> None:
    """Find a specific font family through fontconfig."""
    cache = FontCache()

    with console.status(f"[bold green]Searching for '{name}'..."):
        entry = cache.find(name, style)
    if entry is None:
        console.print(f"[red]Not found:[/red] {name}")
        raise SystemExit(1)
    console.print(f"[green]Found:[/green] {entry.path}")
    console.print(f"[dim]Face index:[/dim] {entry.font_index}")


@fonts.command("inspect")
@click.argument("font_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--size", type=float, default=14.0, help="Font height used for measurements")
@click.option("--sample", default="The quick brown fox", help="Text to measure")
def inspect_font(font_file: Path, size: float, sample: str) -> None:
    """Show the metrics used when laying out text with FONT_FILE."""
    try:
        typeface = FontToolsTypeface(font_file)
    except FontLoadError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1) from e

    font = Font(typeface, size)
    table = Table(title=f"{typeface.name} {typeface.style}")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="yellow")
    table.add_row("Family", typeface.name)
    table.add_row("Style", typeface.style)
    table.add_row("Height", f"{size:g}")
    table.add_row("Sample", sample)
    table.add_row("Sample width", f"{font.get_string_width(sample):.2f}")
    table.add_row("Glyphs", " ".join(str(g) for g in typeface.get_glyph_ids(sample[:12])))
    console.print(table)
