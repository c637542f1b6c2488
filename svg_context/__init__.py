"""svg-context: Translate 2D drawing calls into SVG documents.

This library provides a stateful graphics context with:
- Save/restore graphics state (origin, transform, clip, fill, font, tags)
- Clip, mask and named group nesting in the output tree
- Gradient deduplication across fills
- Text layout fallback (wrapping, ellipsis truncation, fitting)
- Glyph outlines from fontTools, raster embedding through Pillow

Example:
    >>> from svg_context import SVGGraphicsContext, Colour, FillType, Rectangle
    >>> ctx = SVGGraphicsContext(200, 100)
    >>> ctx.set_fill(FillType.solid(Colour(32, 96, 200)))
    >>> ctx.fill_rect(Rectangle(10, 10, 80, 40))
    >>> ctx.write("output.svg")
"""

__version__ = "0.1.0"

from svg_context.config import Config
from svg_context.context import (
    GraphicsContext,
    GraphicsState,
    Justification,
    SVGGraphicsContext,
    VectorExtensions,
)
from svg_context.exceptions import (
    ConfigError,
    FontLoadError,
    GroupUnderflowError,
    ScriptError,
    StateUnderflowError,
    SVGContextError,
    UnsupportedDocumentShapeError,
)
from svg_context.fills import Colour, ColourGradient, FillType
from svg_context.fonts import ApproximateTypeface, Font, FontCache, FontToolsTypeface
from svg_context.geometry import AffineTransform, Path, Rectangle, RectangleList
from svg_context.imaging import ResamplingQuality

__all__ = [
    # Main API
    "SVGGraphicsContext",
    "GraphicsContext",
    "VectorExtensions",
    "GraphicsState",
    "Justification",
    "Config",
    # Values
    "AffineTransform",
    "Path",
    "Rectangle",
    "RectangleList",
    "Colour",
    "ColourGradient",
    "FillType",
    "ResamplingQuality",
    # Fonts
    "Font",
    "FontCache",
    "FontToolsTypeface",
    "ApproximateTypeface",
    # Exceptions
    "SVGContextError",
    "StateUnderflowError",
    "GroupUnderflowError",
    "UnsupportedDocumentShapeError",
    "FontLoadError",
    "ScriptError",
    "ConfigError",
    # Metadata
    "__version__",
]
