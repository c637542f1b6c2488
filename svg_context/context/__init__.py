"""Draw-call translation for svg-context.

This subpackage provides:
- The graphics state stack (save/restore frames)
- Gradient/clip/mask resources and their deduplication
- Clip, mask and named group placement in the output tree
- Text layout fallback (wrapping, truncation, box positioning)
- The SVG graphics context and its capability interfaces
"""

from svg_context.context.base import GraphicsContext, VectorExtensions
from svg_context.context.renderer import SVGGraphicsContext
from svg_context.context.state import GraphicsState, StateStack
from svg_context.context.text_layout import Justification

__all__ = [
    "GraphicsContext",
    "GraphicsState",
    "Justification",
    "SVGGraphicsContext",
    "StateStack",
    "VectorExtensions",
]
