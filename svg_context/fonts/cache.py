"""Family-name font lookup through fontconfig, with loaded typefaces cached."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path

from svg_context.fonts.typeface import ApproximateTypeface, FontToolsTypeface, Typeface

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FontEntry:
    path: Path
    font_index: int
    families: tuple[str, ...]
    styles: tuple[str, ...]


class FontCache:
    """Resolve family names to typefaces using ``fc-list``.

    The fontconfig listing is loaded once per process and shared by all
    instances; typefaces are cached per instance.
    """

    _fc_cache: list[FontEntry] | None = None

    def __init__(self) -> None:
        self._typefaces: dict[tuple[str, str], Typeface] = {}

    @classmethod
    def _load_fc_cache(cls) -> list[FontEntry]:
        if cls._fc_cache is not None:
            return cls._fc_cache
        entries: list[FontEntry] = []
        try:
            result = subprocess.run(
                ["fc-list", "--format=%{file}:%{index}:%{family}:%{style}\\n"],
                capture_output=True,
                text=True,
                timeout=8,
            )
        except (OSError, subprocess.SubprocessError) as e:
            logger.debug("fc-list unavailable: %s", e)
            cls._fc_cache = entries
            return entries

        if result.returncode != 0:
            logger.debug("fc-list exited with %d", result.returncode)
        for line in result.stdout.splitlines():
            parts = line.split(":")
            if len(parts) < 4:
                continue
            path = Path(parts[0].strip())
            if not path.exists():
                continue
            try:
                index = int(parts[1] or 0)
            except ValueError:
                index = 0
            families = tuple(f.strip().lower() for f in parts[2].split(",") if f.strip())
            styles = tuple(s.strip().lower() for s in parts[3].split(",") if s.strip())
            entries.append(FontEntry(path, index, families, styles))
        cls._fc_cache = entries
        return entries

    def prewarm(self) -> int:
        """Load the fontconfig listing; returns the number of indexed faces."""
        return len(self._load_fc_cache())

    def find(self, family: str, style: str = "Regular") -> FontEntry | None:
        """Best entry for ``family``, preferring an exact style match."""
        family_key = family.strip().strip("'\"").lower()
        style_key = style.strip().lower()
        candidates = [e for e in self._load_fc_cache() if family_key in e.families]
        for entry in candidates:
            if style_key in entry.styles:
                return entry
        for entry in candidates:
            if "regular" in entry.styles or "book" in entry.styles:
                return entry
        return candidates[0] if candidates else None

    def get_typeface(self, family: str, style: str = "Regular") -> Typeface:
        """Load a typeface, falling back to approximate metrics when not installed."""
        key = (family.lower(), style.lower())
        if key in self._typefaces:
            return self._typefaces[key]
        entry = self.find(family, style)
        if entry is None:
            logger.warning("Font %r (%s) not found; using approximate metrics", family, style)
            typeface: Typeface = ApproximateTypeface(family, style)
        else:
            typeface = FontToolsTypeface(entry.path, entry.font_index)
        self._typefaces[key] = typeface
        return typeface
