"""Text layout fallback: line wrapping, truncation and box positioning.

SVG has no equivalent of bounded or wrapped text, so lines are measured with
the current font and broken here, one character at a time.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntFlag

from svg_context.fonts.font import Font
from svg_context.geometry.rectangles import Rectangle


class Justification(IntFlag):
    LEFT = 1
    RIGHT = 2
    HORIZONTALLY_CENTRED = 4
    TOP = 8
    BOTTOM = 16
    VERTICALLY_CENTRED = 32

    CENTRED = HORIZONTALLY_CENTRED | VERTICALLY_CENTRED
    CENTRED_LEFT = LEFT | VERTICALLY_CENTRED
    CENTRED_RIGHT = RIGHT | VERTICALLY_CENTRED
    CENTRED_TOP = HORIZONTALLY_CENTRED | TOP
    CENTRED_BOTTOM = HORIZONTALLY_CENTRED | BOTTOM
    TOP_LEFT = LEFT | TOP
    TOP_RIGHT = RIGHT | TOP
    BOTTOM_LEFT = LEFT | BOTTOM
    BOTTOM_RIGHT = RIGHT | BOTTOM


def text_anchor(justification: Justification) -> str:
    if justification & Justification.HORIZONTALLY_CENTRED:
        return "middle"
    if justification & Justification.RIGHT:
        return "end"
    return "start"


@dataclass(frozen=True)
class BoxPosition:
    """Anchor point of text placed in a box, with matching SVG attributes."""

    x: float
    y: float
    text_anchor: str
    dominant_baseline: str


def position_in_box(area: Rectangle, justification: Justification) -> BoxPosition:
    x, y = area.x, area.y
    anchor = text_anchor(justification)
    if anchor == "middle":
        x += area.width / 2
    elif anchor == "end":
        x += area.width

    if justification & Justification.VERTICALLY_CENTRED:
        baseline = "central"
        y += area.height / 2
    elif justification & Justification.BOTTOM:
        baseline = "ideographic"
        y += area.height
    else:
        baseline = "hanging"
    return BoxPosition(x, y, anchor, baseline)


def first_line_y(position: BoxPosition, line_count: int, line_height: float) -> float:
    """Reference y of the first of ``line_count`` lines stacked in a box."""
    span = (line_count - 1) * line_height
    if position.dominant_baseline == "central":
        return position.y - span / 2
    if position.dominant_baseline == "ideographic":
        return position.y - span
    return position.y


def truncate_to_width(text: str, font: Font, max_width: float, ellipsis: str = "") -> str:
    """Drop trailing characters until ``text + ellipsis`` fits ``max_width``.

    Text that already fits is returned unchanged. Takes at most ``len(text)``
    shrink steps; when even the bare ellipsis is too wide the result is empty.
    """
    if font.get_string_width(text) <= max_width:
        return text
    truncated = text
    while truncated and font.get_string_width(truncated + ellipsis) > max_width:
        truncated = truncated[:-1]
    if not truncated and font.get_string_width(ellipsis) > max_width:
        return ""
    return truncated + ellipsis


def split_first_line(text: str, font: Font, max_width: float) -> tuple[str, str]:
    """Longest prefix fitting ``max_width`` (at least one character) and the rest."""
    line = text
    while len(line) > 1 and font.get_string_width(line) > max_width:
        line = line[:-1]
    return line, text[len(line):]


def wrap_lines(
    text: str,
    font: Font,
    max_width: float,
    max_lines: int | None = None,
    ellipsis: str = "",
) -> list[str]:
    """Greedy character-level wrapping.

    Each produced line holds at least one character, so the loop always
    consumes input. With ``max_lines`` the last permitted line takes all the
    remaining text, truncated with ``ellipsis``.
    """
    lines: list[str] = []
    remaining = text
    while remaining:
        if max_lines is not None and len(lines) == max_lines - 1:
            lines.append(truncate_to_width(remaining, font, max_width, ellipsis))
            break
        line, remaining = split_first_line(remaining, font, max_width)
        lines.append(line)
    return lines


def squeeze_fits(text: str, font: Font, max_width: float, minimum_horizontal_scale: float) -> bool:
    """True when ``text`` fits once compressed by no less than the given scale."""
    if minimum_horizontal_scale <= 0:
        return False
    width = font.get_string_width(text)
    if width <= max_width:
        return True
    return max_width / width >= minimum_horizontal_scale
