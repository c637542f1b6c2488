"""Typeface providers: glyph outlines and advance widths.

All metrics are normalised to a font height of 1.0 (ascent + descent), with
outlines relative to the baseline and y growing downwards, so a ``Font``
only has to scale them by its height.
"""

from __future__ import annotations

import logging
from pathlib import Path as FilePath
from typing import Protocol, runtime_checkable

from fontTools.pens.recordingPen import RecordingPen
from fontTools.ttLib import TTFont, TTLibError

from svg_context.exceptions import FontLoadError
from svg_context.geometry.path import Path
from svg_context.geometry.transform import AffineTransform

logger = logging.getLogger(__name__)


@runtime_checkable
class Typeface(Protocol):
    name: str
    style: str

    def get_glyph_ids(self, text: str) -> list[int]: ...

    def get_glyph_advance(self, glyph: int) -> float: ...

    def get_string_width(self, text: str) -> float: ...

    def get_outline_for_glyph(self, glyph: int) -> Path: ...


class ApproximateTypeface:
    """Metrics-only typeface used when no font file is available.

    Every character advances by ``advance`` and has no outline; SVG viewers
    render ``<text>`` with their own font for the family name.
    """

    def __init__(self, name: str = "sans-serif", style: str = "Regular", advance: float = 0.5) -> None:
        self.name = name
        self.style = style
        self.advance = advance

    def __repr__(self) -> str:
        return f"ApproximateTypeface({self.name!r}, {self.style!r})"

    def get_glyph_ids(self, text: str) -> list[int]:
        return [ord(ch) for ch in text]

    def get_glyph_advance(self, glyph: int) -> float:
        return self.advance

    def get_string_width(self, text: str) -> float:
        return self.advance * len(text)

    def get_outline_for_glyph(self, glyph: int) -> Path:
        return Path()


class FontToolsTypeface:
    """Typeface backed by a TrueType/OpenType file loaded with fontTools."""

    def __init__(self, source: FilePath | str | TTFont, font_number: int = 0) -> None:
        if isinstance(source, TTFont):
            self._font = source
            self.source = "<TTFont>"
        else:
            self.source = str(source)
            try:
                self._font = TTFont(self.source, fontNumber=font_number)
            except (OSError, TTLibError) as e:
                raise FontLoadError(self.source, str(e)) from e

        name_table = self._font["name"]
        self.name = name_table.getBestFamilyName() or FilePath(self.source).stem
        self.style = name_table.getBestSubFamilyName() or "Regular"

        hhea = self._font["hhea"]
        height_units = hhea.ascent - hhea.descent
        if height_units <= 0:
            height_units = self._font["head"].unitsPerEm
        self._scale = 1.0 / height_units
        self._cmap = self._font.getBestCmap() or {}
        self._glyph_order = self._font.getGlyphOrder()
        self._glyph_set = self._font.getGlyphSet()
        self._outlines: dict[int, Path] = {}
        logger.debug("Loaded typeface %s %s from %s", self.name, self.style, self.source)

    def __repr__(self) -> str:
        return f"FontToolsTypeface({self.name!r}, {self.style!r})"

    def _glyph_name(self, glyph: int) -> str:
        if 0 <= glyph < len(self._glyph_order):
            return self._glyph_order[glyph]
        return self._glyph_order[0]

    def get_glyph_ids(self, text: str) -> list[int]:
        ids = []
        for ch in text:
            name = self._cmap.get(ord(ch))
            ids.append(self._font.getGlyphID(name) if name else 0)
        return ids

    def get_glyph_advance(self, glyph: int) -> float:
        advance, _lsb = self._font["hmtx"][self._glyph_name(glyph)]
        return advance * self._scale

    def get_string_width(self, text: str) -> float:
        return sum(self.get_glyph_advance(g) for g in self.get_glyph_ids(text))

    def get_outline_for_glyph(self, glyph: int) -> Path:
        if glyph not in self._outlines:
            pen = RecordingPen()
            name = self._glyph_name(glyph)
            try:
                self._glyph_set[name].draw(pen)
            except KeyError as e:
                raise FontLoadError(self.source, f"no outline for glyph {name}") from e
            flip = AffineTransform(self._scale, 0.0, 0.0, -self._scale, 0.0, 0.0)
            self._outlines[glyph] = Path.from_recording(pen.value).transformed(flip)
        return self._outlines[glyph].copy()
