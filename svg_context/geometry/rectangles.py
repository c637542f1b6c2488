"""Rectangles and rectangle lists used for clip region arithmetic."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Iterator

if TYPE_CHECKING:
    from svg_context.geometry.path import Path
    from svg_context.geometry.transform import AffineTransform


@dataclass(frozen=True)
class Rectangle:
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    @classmethod
    def from_corners(cls, x1: float, y1: float, x2: float, y2: float) -> Rectangle:
        left, right = min(x1, x2), max(x1, x2)
        top, bottom = min(y1, y2), max(y1, y2)
        return cls(left, top, right - left, bottom - top)

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def translated(self, dx: float, dy: float) -> Rectangle:
        return Rectangle(self.x + dx, self.y + dy, self.width, self.height)

    def intersection(self, other: Rectangle) -> Rectangle:
        left = max(self.x, other.x)
        top = max(self.y, other.y)
        right = min(self.right, other.right)
        bottom = min(self.bottom, other.bottom)
        if right <= left or bottom <= top:
            return Rectangle(left, top, 0.0, 0.0)
        return Rectangle(left, top, right - left, bottom - top)

    def intersects(self, other: Rectangle) -> bool:
        return not self.intersection(other).is_empty()

    def union_bounds(self, other: Rectangle) -> Rectangle:
        if self.is_empty():
            return other
        if other.is_empty():
            return self
        return Rectangle.from_corners(
            min(self.x, other.x),
            min(self.y, other.y),
            max(self.right, other.right),
            max(self.bottom, other.bottom),
        )

    def subtracted(self, other: Rectangle) -> list[Rectangle]:
        """Return the parts of this rectangle not covered by ``other``."""
        overlap = self.intersection(other)
        if overlap.is_empty():
            return [self]
        pieces = [
            Rectangle(self.x, self.y, self.width, overlap.y - self.y),
            Rectangle(self.x, overlap.bottom, self.width, self.bottom - overlap.bottom),
            Rectangle(self.x, overlap.y, overlap.x - self.x, overlap.height),
            Rectangle(overlap.right, overlap.y, self.right - overlap.right, overlap.height),
        ]
        return [p for p in pieces if not p.is_empty()]

    def transformed_by(self, t: AffineTransform) -> Rectangle:
        """Bounding box of this rectangle after transformation."""
        corners = [
            t.apply(self.x, self.y),
            t.apply(self.right, self.y),
            t.apply(self.x, self.bottom),
            t.apply(self.right, self.bottom),
        ]
        xs = [p[0] for p in corners]
        ys = [p[1] for p in corners]
        return Rectangle.from_corners(min(xs), min(ys), max(xs), max(ys))

    def to_nearest_int(self) -> Rectangle:
        left = math.floor(self.x + 0.5)
        top = math.floor(self.y + 0.5)
        return Rectangle(left, top, math.floor(self.right + 0.5) - left, math.floor(self.bottom + 0.5) - top)


class RectangleList:
    """A set of non-empty rectangles treated as the union of its members."""

    def __init__(self, rects: Iterable[Rectangle] = ()) -> None:
        self._rects: list[Rectangle] = [r for r in rects if not r.is_empty()]

    def __iter__(self) -> Iterator[Rectangle]:
        return iter(self._rects)

    def __len__(self) -> int:
        return len(self._rects)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RectangleList):
            return NotImplemented
        return self._rects == other._rects

    def __repr__(self) -> str:
        return f"RectangleList({self._rects!r})"

    def copy(self) -> RectangleList:
        return RectangleList(self._rects)

    def is_empty(self) -> bool:
        return not self._rects

    def clip_to(self, other: Rectangle | RectangleList) -> None:
        clips = [other] if isinstance(other, Rectangle) else list(other)
        result: list[Rectangle] = []
        for rect in self._rects:
            for clip in clips:
                overlap = rect.intersection(clip)
                if not overlap.is_empty():
                    result.append(overlap)
        self._rects = result

    def subtract(self, rect: Rectangle) -> None:
        self._rects = [part for r in self._rects for part in r.subtracted(rect)]

    def translated(self, dx: float, dy: float) -> RectangleList:
        return RectangleList(r.translated(dx, dy) for r in self._rects)

    def transform_all(self, t: AffineTransform) -> None:
        self._rects = [r.transformed_by(t) for r in self._rects]

    def bounds(self) -> Rectangle:
        result = Rectangle()
        for r in self._rects:
            result = result.union_bounds(r)
        return result

    def intersects(self, rect: Rectangle) -> bool:
        return any(r.intersects(rect) for r in self._rects)

    def to_path(self) -> Path:
        from svg_context.geometry.path import Path

        path = Path()
        for r in self._rects:
            path.add_rectangle(r)
        return path
