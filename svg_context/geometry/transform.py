"""2x3 affine transforms.

Coefficients follow the SVG ``matrix(a, b, c, d, e, f)`` convention::

    x' = a * x + c * y + e
    y' = b * x + d * y + f
"""

from __future__ import annotations

import math
from dataclasses import dataclass


def _mat_mul(m1, m2):
    """Multiply two (a,b,c,d,e,f) matrices; m2 is applied first."""
    a1, b1, c1, d1, e1, f1 = m1
    a2, b2, c2, d2, e2, f2 = m2
    return (
        a1 * a2 + c1 * b2,
        b1 * a2 + d1 * b2,
        a1 * c2 + c1 * d2,
        b1 * c2 + d1 * d2,
        a1 * e2 + c1 * f2 + e1,
        b1 * e2 + d1 * f2 + f1,
    )


@dataclass(frozen=True)
class AffineTransform:
    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    d: float = 1.0
    e: float = 0.0
    f: float = 0.0

    @classmethod
    def identity(cls) -> AffineTransform:
        return cls()

    @classmethod
    def translation(cls, dx: float, dy: float) -> AffineTransform:
        return cls(1.0, 0.0, 0.0, 1.0, dx, dy)

    @classmethod
    def scale(cls, sx: float, sy: float | None = None) -> AffineTransform:
        return cls(sx, 0.0, 0.0, sx if sy is None else sy, 0.0, 0.0)

    @classmethod
    def rotation(cls, radians: float, cx: float = 0.0, cy: float = 0.0) -> AffineTransform:
        cos, sin = math.cos(radians), math.sin(radians)
        rot = cls(cos, sin, -sin, cos, 0.0, 0.0)
        if cx or cy:
            return cls.translation(-cx, -cy).followed_by(rot).followed_by(cls.translation(cx, cy))
        return rot

    @property
    def coefficients(self) -> tuple[float, float, float, float, float, float]:
        return (self.a, self.b, self.c, self.d, self.e, self.f)

    def followed_by(self, other: AffineTransform) -> AffineTransform:
        """Return the transform that applies ``self`` and then ``other``."""
        return AffineTransform(*_mat_mul(other.coefficients, self.coefficients))

    def translated(self, dx: float, dy: float) -> AffineTransform:
        """Return ``self`` followed by a translation."""
        return AffineTransform(self.a, self.b, self.c, self.d, self.e + dx, self.f + dy)

    def apply(self, x: float, y: float) -> tuple[float, float]:
        return (self.a * x + self.c * y + self.e, self.b * x + self.d * y + self.f)

    def is_identity(self) -> bool:
        return self.coefficients == (1.0, 0.0, 0.0, 1.0, 0.0, 0.0)
