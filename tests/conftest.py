"""Pytest configuration and shared fixtures for svg-context tests."""

from collections.abc import Callable
from pathlib import Path

import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen
from PIL import Image

from svg_context import Config, SVGGraphicsContext
from svg_context.fonts import ApproximateTypeface, Font
from svg_context.svg.parser import parse_svg_string, strip_namespaces


def _square_glyph(left: int, top: int, right: int):
    pen = TTGlyphPen(None)
    pen.moveTo((left, 0))
    pen.lineTo((left, top))
    pen.lineTo((right, top))
    pen.lineTo((right, 0))
    pen.closePath()
    return pen.glyph()


def build_test_font(path: Path) -> Path:
    """Write a tiny TrueType font: 'A' is a 400x500 square, ascent+descent is 1000 units."""
    fb = FontBuilder(1000, isTTF=True)
    fb.setupGlyphOrder([".notdef", "A", "space"])
    fb.setupCharacterMap({ord("A"): "A", ord(" "): "space"})
    fb.setupGlyf(
        {
            ".notdef": TTGlyphPen(None).glyph(),
            "A": _square_glyph(100, 500, 500),
            "space": TTGlyphPen(None).glyph(),
        }
    )
    fb.setupHorizontalMetrics({".notdef": (500, 0), "A": (600, 100), "space": (250, 0)})
    fb.setupHorizontalHeader(ascent=800, descent=-200)
    fb.setupNameTable({"familyName": "Test Sans", "styleName": "Regular"})
    fb.setupOS2(sTypoAscender=800, sTypoDescender=-200, usWinAscent=800, usWinDescent=200)
    fb.setupPost()
    fb.save(str(path))
    return path


@pytest.fixture
def ctx() -> SVGGraphicsContext:
    """A 200x100 context with default configuration."""
    return SVGGraphicsContext(200, 100)


@pytest.fixture
def lenient_ctx() -> SVGGraphicsContext:
    """A context that ignores unbalanced restore/pop calls."""
    return SVGGraphicsContext(200, 100, config=Config(strict=False))


@pytest.fixture
def mono_font() -> Font:
    """Approximate font at height 10: every character is 5 units wide."""
    return Font(ApproximateTypeface("Mono", "Regular"), 10.0)


@pytest.fixture
def test_font_file(tmp_path: Path) -> Path:
    """A generated TrueType font file."""
    return build_test_font(tmp_path / "TestSans.ttf")


@pytest.fixture
def rgba_image() -> Image.Image:
    """A 4x2 half-transparent red image."""
    return Image.new("RGBA", (4, 2), (255, 0, 0, 128))


@pytest.fixture
def render_tree() -> Callable:
    """Serialise a context and parse it back with namespaces stripped."""

    def _render(context: SVGGraphicsContext):
        return strip_namespaces(parse_svg_string(context.to_string()))

    return _render
