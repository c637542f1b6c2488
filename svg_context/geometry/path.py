"""Vector paths made of move/line/quadratic/cubic/close segments."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterator, Sequence

from svg.path import Arc, Close, CubicBezier, Line, Move, QuadraticBezier, parse_path

from svg_context.geometry.rectangles import Rectangle
from svg_context.svg.formatting import format_number

if TYPE_CHECKING:
    from svg_context.geometry.transform import AffineTransform

MOVE = "M"
LINE = "L"
QUAD = "Q"
CUBIC = "C"
CLOSE = "Z"

# Line segments used to approximate one elliptical arc from SVG path data
ARC_STEPS = 16

Segment = tuple[str, tuple[tuple[float, float], ...]]


class Path:
    """An ordered list of segments; every point is absolute."""

    def __init__(self, segments: Sequence[Segment] = (), use_non_zero_winding: bool = True) -> None:
        self._segments: list[Segment] = list(segments)
        self.use_non_zero_winding = use_non_zero_winding

    def __iter__(self) -> Iterator[Segment]:
        return iter(self._segments)

    def __len__(self) -> int:
        return len(self._segments)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Path):
            return NotImplemented
        return (
            self._segments == other._segments
            and self.use_non_zero_winding == other.use_non_zero_winding
        )

    def __repr__(self) -> str:
        return f"Path({self.to_svg_data()!r})"

    def copy(self) -> Path:
        return Path(self._segments, self.use_non_zero_winding)

    # -- building ----------------------------------------------------------

    def start_new_sub_path(self, x: float, y: float) -> None:
        self._segments.append((MOVE, ((x, y),)))

    def line_to(self, x: float, y: float) -> None:
        self._segments.append((LINE, ((x, y),)))

    def quadratic_to(self, cx: float, cy: float, x: float, y: float) -> None:
        self._segments.append((QUAD, ((cx, cy), (x, y))))

    def cubic_to(self, c1x: float, c1y: float, c2x: float, c2y: float, x: float, y: float) -> None:
        self._segments.append((CUBIC, ((c1x, c1y), (c2x, c2y), (x, y))))

    def close_sub_path(self) -> None:
        if self._segments and self._segments[-1][0] != CLOSE:
            self._segments.append((CLOSE, ()))

    def add_rectangle(self, r: Rectangle) -> None:
        self.start_new_sub_path(r.x, r.y)
        self.line_to(r.right, r.y)
        self.line_to(r.right, r.bottom)
        self.line_to(r.x, r.bottom)
        self.close_sub_path()

    # -- queries -----------------------------------------------------------

    def is_empty(self) -> bool:
        """True when the path has nothing but (or no) move segments."""
        return all(op == MOVE for op, _ in self._segments)

    def bounds(self) -> Rectangle:
        points = [pt for _, pts in self._segments for pt in pts]
        if not points or self.is_empty():
            return Rectangle()
        xs = [p[0] for p in points]
        ys = [p[1] for p in points]
        return Rectangle.from_corners(min(xs), min(ys), max(xs), max(ys))

    def transformed(self, t: AffineTransform) -> Path:
        if t.is_identity():
            return self.copy()
        segments = [(op, tuple(t.apply(x, y) for x, y in pts)) for op, pts in self._segments]
        return Path(segments, self.use_non_zero_winding)

    def to_svg_data(self, precision: int = 2) -> str:
        """Serialise as an uppercase, absolute-coordinate SVG path string."""
        parts = []
        for op, pts in self._segments:
            coords = " ".join(
                f"{format_number(x, precision)} {format_number(y, precision)}" for x, y in pts
            )
            parts.append(f"{op} {coords}" if coords else op)
        return " ".join(parts)

    # -- conversions -------------------------------------------------------

    @classmethod
    def from_recording(cls, recording) -> Path:
        """Build a path from a fontTools ``RecordingPen.value`` list.

        TrueType ``qCurveTo`` runs can hold several off-curve points; the
        implied on-curve points halfway between them are materialised here.
        """
        path = cls()
        for op, args in recording:
            if op == "moveTo":
                path.start_new_sub_path(*args[0])
            elif op == "lineTo":
                path.line_to(*args[0])
            elif op == "qCurveTo":
                points = list(args)
                if points[-1] is None:
                    # Closed contour made only of off-curve points
                    points = points[:-1]
                    first, last = points[0], points[-1]
                    start = ((first[0] + last[0]) / 2, (first[1] + last[1]) / 2)
                    path.start_new_sub_path(*start)
                    points.append(start)
                for i in range(len(points) - 1):
                    x1, y1 = points[i]
                    if i == len(points) - 2:
                        x, y = points[i + 1]
                    else:
                        x2, y2 = points[i + 1]
                        x, y = (x1 + x2) / 2, (y1 + y2) / 2
                    path.quadratic_to(x1, y1, x, y)
            elif op == "curveTo":
                if len(args) >= 3:
                    (x1, y1), (x2, y2), (x, y) = args[0], args[1], args[2]
                    path.cubic_to(x1, y1, x2, y2, x, y)
            elif op in ("closePath", "endPath"):
                path.close_sub_path()
        return path

    @classmethod
    def from_svg_data(cls, d: str, use_non_zero_winding: bool = True) -> Path:
        """Parse SVG path data; elliptical arcs are flattened to lines."""
        path = cls(use_non_zero_winding=use_non_zero_winding)
        open_sub_path = False
        for seg in parse_path(d):
            if isinstance(seg, Move):
                path.start_new_sub_path(seg.end.real, seg.end.imag)
                open_sub_path = True
                continue
            if isinstance(seg, Close):
                path.close_sub_path()
                open_sub_path = False
                continue
            if not open_sub_path:
                path.start_new_sub_path(seg.start.real, seg.start.imag)
                open_sub_path = True
            if isinstance(seg, Line):
                path.line_to(seg.end.real, seg.end.imag)
            elif isinstance(seg, QuadraticBezier):
                path.quadratic_to(seg.control.real, seg.control.imag, seg.end.real, seg.end.imag)
            elif isinstance(seg, CubicBezier):
                path.cubic_to(
                    seg.control1.real, seg.control1.imag,
                    seg.control2.real, seg.control2.imag,
                    seg.end.real, seg.end.imag,
                )
            elif isinstance(seg, Arc):
                for step in range(1, ARC_STEPS + 1):
                    pt = seg.point(step / ARC_STEPS)
                    path.line_to(pt.real, pt.imag)
        return path
