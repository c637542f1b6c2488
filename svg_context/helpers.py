"""Drawing helpers that use vector extensions when a context offers them.

Grouping and tagging are no-ops on plain contexts; text is laid out here and
drawn glyph by glyph instead.
"""

from __future__ import annotations

from typing import Mapping

from svg_context.context.base import GraphicsContext
from svg_context.context.text_layout import (
    Justification,
    text_anchor,
    truncate_to_width,
    wrap_lines,
)
from svg_context.geometry.rectangles import Rectangle
from svg_context.geometry.transform import AffineTransform

ELLIPSIS = "…"


def push_group(ctx: GraphicsContext, name: str) -> None:
    ext = ctx.vector_extensions()
    if ext is not None:
        ext.push_group(name)


def pop_group(ctx: GraphicsContext) -> None:
    ext = ctx.vector_extensions()
    if ext is not None:
        ext.pop_group()


def set_tags(ctx: GraphicsContext, tags: Mapping[str, str]) -> None:
    ext = ctx.vector_extensions()
    if ext is not None:
        ext.set_tags(tags)


def clear_tags(ctx: GraphicsContext) -> None:
    ext = ctx.vector_extensions()
    if ext is not None:
        ext.clear_tags()


def draw_glyph_run(ctx: GraphicsContext, text: str, x: float, baseline_y: float) -> float:
    """Draw ``text`` as individual glyphs starting at ``x``; returns the end x."""
    font = ctx.get_font()
    for glyph in font.typeface.get_glyph_ids(text):
        ctx.draw_glyph(glyph, AffineTransform.translation(x, baseline_y))
        x += font.get_glyph_advance(glyph)
    return x


def _aligned_x(ctx: GraphicsContext, line: str, x: float, anchor: str) -> float:
    width = ctx.get_font().get_string_width(line)
    if anchor == "middle":
        return x - width / 2
    if anchor == "end":
        return x - width
    return x


def _box_baseline(area: Rectangle, justification: Justification, block_height: float) -> float:
    """Baseline of the first line of a block placed in ``area``."""
    if justification & Justification.VERTICALLY_CENTRED:
        return area.y + (area.height - block_height) / 2
    if justification & Justification.BOTTOM:
        return area.bottom - block_height
    return area.y


def _box_x(area: Rectangle, anchor: str) -> float:
    if anchor == "middle":
        return area.x + area.width / 2
    if anchor == "end":
        return area.right
    return area.x


def draw_single_line_text(
    ctx: GraphicsContext,
    text: str,
    x: float,
    baseline_y: float,
    justification: Justification = Justification.LEFT,
) -> None:
    ext = ctx.vector_extensions()
    if ext is not None:
        ext.draw_single_line_text(text, x, baseline_y, justification)
        return
    draw_glyph_run(ctx, text, _aligned_x(ctx, text, x, text_anchor(justification)), baseline_y)


def draw_multi_line_text(ctx: GraphicsContext, text: str, x: float, baseline_y: float, max_width: float) -> None:
    ext = ctx.vector_extensions()
    if ext is not None:
        ext.draw_multi_line_text(text, x, baseline_y, max_width)
        return
    font = ctx.get_font()
    for i, line in enumerate(wrap_lines(text, font, max_width)):
        draw_glyph_run(ctx, line, x, baseline_y + i * font.height)


def draw_text(
    ctx: GraphicsContext,
    text: str,
    area: Rectangle,
    justification: Justification,
    use_ellipses: bool = True,
) -> None:
    ext = ctx.vector_extensions()
    if ext is not None:
        ext.draw_text(text, area, justification, use_ellipses)
        return
    font = ctx.get_font()
    line = truncate_to_width(text, font, area.width, ELLIPSIS if use_ellipses else "")
    anchor = text_anchor(justification)
    baseline = _box_baseline(area, justification, font.height) + font.height
    draw_glyph_run(ctx, line, _aligned_x(ctx, line, _box_x(area, anchor), anchor), baseline)


def draw_fitted_text(
    ctx: GraphicsContext,
    text: str,
    area: Rectangle,
    justification: Justification,
    max_lines: int,
    minimum_horizontal_scale: float = 0.0,
) -> None:
    ext = ctx.vector_extensions()
    if ext is not None:
        ext.draw_fitted_text(text, area, justification, max_lines, minimum_horizontal_scale)
        return
    font = ctx.get_font()
    lines = wrap_lines(text, font, area.width, max(1, max_lines), ELLIPSIS)
    anchor = text_anchor(justification)
    top = _box_baseline(area, justification, len(lines) * font.height)
    for i, line in enumerate(lines):
        baseline = top + (i + 1) * font.height
        draw_glyph_run(ctx, line, _aligned_x(ctx, line, _box_x(area, anchor), anchor), baseline)
