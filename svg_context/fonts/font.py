"""Font: a typeface at a given height and horizontal scale."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from svg_context.fonts.typeface import ApproximateTypeface, Typeface

DEFAULT_FONT_HEIGHT = 14.0


@dataclass(frozen=True)
class Font:
    typeface: Typeface = field(default_factory=ApproximateTypeface)
    height: float = DEFAULT_FONT_HEIGHT
    horizontal_scale: float = 1.0

    @property
    def family(self) -> str:
        return self.typeface.name

    @property
    def style(self) -> str:
        return self.typeface.style

    def with_height(self, height: float) -> Font:
        return replace(self, height=height)

    def with_horizontal_scale(self, scale: float) -> Font:
        return replace(self, horizontal_scale=scale)

    def get_string_width(self, text: str) -> float:
        return self.typeface.get_string_width(text) * self.height * self.horizontal_scale

    def get_glyph_advance(self, glyph: int) -> float:
        return self.typeface.get_glyph_advance(glyph) * self.height * self.horizontal_scale
