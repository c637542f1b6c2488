"""Geometry value types for svg-context.

This subpackage provides:
- Affine transforms (SVG matrix convention)
- Rectangles and rectangle lists for clip arithmetic
- Paths with fontTools and SVG path-data conversion
"""

from svg_context.geometry.path import Path
from svg_context.geometry.rectangles import Rectangle, RectangleList
from svg_context.geometry.transform import AffineTransform

__all__ = ["AffineTransform", "Path", "Rectangle", "RectangleList"]
