"""Font handling for svg-context.

This subpackage provides:
- Typeface providers (fontTools-backed and metrics-only)
- Font values (typeface + height + horizontal scale)
- Family-name lookup through fontconfig
"""

from svg_context.fonts.cache import FontCache, FontEntry
from svg_context.fonts.font import DEFAULT_FONT_HEIGHT, Font
from svg_context.fonts.typeface import ApproximateTypeface, FontToolsTypeface, Typeface

__all__ = [
    "ApproximateTypeface",
    "DEFAULT_FONT_HEIGHT",
    "Font",
    "FontCache",
    "FontEntry",
    "FontToolsTypeface",
    "Typeface",
]
