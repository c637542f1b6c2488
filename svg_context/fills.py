"""Colours, gradients and fill types."""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace


@dataclass(frozen=True)
class Colour:
    """An 8-bit RGB colour with a float alpha in [0, 1]."""

    red: int = 0
    green: int = 0
    blue: int = 0
    alpha: float = 1.0

    @classmethod
    def from_hex(cls, text: str) -> Colour:
        """Parse ``#rgb``, ``#rrggbb`` or ``#rrggbbaa``."""
        digits = text.strip().lstrip("#")
        if len(digits) == 3:
            digits = "".join(ch * 2 for ch in digits)
        if len(digits) not in (6, 8):
            raise ValueError(f"Invalid colour: {text!r}")
        alpha = int(digits[6:8], 16) / 255.0 if len(digits) == 8 else 1.0
        return cls(int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16), alpha)

    def with_alpha(self, alpha: float) -> Colour:
        return replace(self, alpha=alpha)


BLACK = Colour(0, 0, 0)


@dataclass(frozen=True)
class ColourGradient:
    """A linear or radial gradient between two control points.

    For radial gradients ``point1`` is the centre and ``point2`` lies on the
    outer edge.
    """

    point1: tuple[float, float]
    point2: tuple[float, float]
    stops: tuple[tuple[float, Colour], ...] = ()
    is_radial: bool = False

    @classmethod
    def linear(cls, x1: float, y1: float, x2: float, y2: float, stops) -> ColourGradient:
        return cls((x1, y1), (x2, y2), tuple((float(p), c) for p, c in stops), False)

    @classmethod
    def radial(cls, cx: float, cy: float, edge_x: float, edge_y: float, stops) -> ColourGradient:
        return cls((cx, cy), (edge_x, edge_y), tuple((float(p), c) for p, c in stops), True)

    @property
    def radius(self) -> float:
        return math.hypot(self.point2[0] - self.point1[0], self.point2[1] - self.point1[1])

    def same_stops(self, other: ColourGradient) -> bool:
        """Structural stop comparison; geometry and kind are ignored."""
        return self.stops == other.stops


@dataclass(frozen=True)
class FillType:
    """Either a solid colour or a gradient, with an opacity multiplier."""

    colour: Colour = field(default=BLACK)
    gradient: ColourGradient | None = None
    opacity: float = 1.0

    @classmethod
    def solid(cls, colour: Colour) -> FillType:
        return cls(colour=colour)

    @classmethod
    def from_gradient(cls, gradient: ColourGradient) -> FillType:
        return cls(gradient=gradient)

    def is_gradient(self) -> bool:
        return self.gradient is not None

    def with_opacity(self, opacity: float) -> FillType:
        return replace(self, opacity=opacity)

    def effective_opacity(self) -> float:
        """Opacity written to SVG; solid fills fold in the colour's alpha."""
        if self.is_gradient():
            return self.opacity
        return self.colour.alpha * self.opacity
