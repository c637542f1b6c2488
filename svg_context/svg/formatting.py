"""Attribute value formatting for SVG output."""

from __future__ import annotations

from typing import Protocol


class _RGB(Protocol):
    red: int
    green: int
    blue: int


def format_number(value: float, precision: int = 2) -> str:
    """Format a number with fixed precision, trimming trailing zeros.

    >>> format_number(12.0)
    '12'
    >>> format_number(12.5)
    '12.5'
    >>> format_number(3.14159)
    '3.14'
    """
    text = f"{value:.{precision}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in ("-0", ""):
        text = "0"
    return text


def format_matrix(coefficients, precision: int = 6) -> str:
    """Format (a, b, c, d, e, f) as an SVG ``matrix()`` transform."""
    return "matrix({})".format(",".join(format_number(v, precision) for v in coefficients))


def format_rgb(colour: _RGB) -> str:
    return f"rgb({colour.red},{colour.green},{colour.blue})"


def format_url(ref: str) -> str:
    """Wrap a resource id as a ``url(#id)`` reference."""
    return f"url(#{ref})"
