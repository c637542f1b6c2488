"""Capability interfaces for graphics contexts.

``GraphicsContext`` is the low-level drawing surface every renderer
implements. Renderers that can also group, tag and lay out text natively
implement ``VectorExtensions`` and return themselves from
``vector_extensions()``; plain renderers return None and callers fall back.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Mapping

from svg_context.context.text_layout import Justification

if TYPE_CHECKING:
    from PIL import Image

    from svg_context.fills import FillType
    from svg_context.fonts.font import Font
    from svg_context.geometry.path import Path
    from svg_context.geometry.rectangles import Rectangle, RectangleList
    from svg_context.geometry.transform import AffineTransform
    from svg_context.imaging import ResamplingQuality


class GraphicsContext(ABC):
    def is_vector_device(self) -> bool:
        return False

    def get_physical_pixel_scale_factor(self) -> float:
        return 1.0

    def vector_extensions(self) -> VectorExtensions | None:
        return None

    @abstractmethod
    def set_origin(self, dx: float, dy: float) -> None: ...

    @abstractmethod
    def add_transform(self, transform: AffineTransform) -> None: ...

    @abstractmethod
    def clip_to_rectangle(self, r: Rectangle) -> bool: ...

    @abstractmethod
    def clip_to_rectangle_list(self, rects: RectangleList) -> bool: ...

    @abstractmethod
    def exclude_clip_rectangle(self, r: Rectangle) -> None: ...

    @abstractmethod
    def clip_to_path(self, path: Path, transform: AffineTransform) -> None: ...

    @abstractmethod
    def clip_to_image_alpha(self, image: Image.Image, transform: AffineTransform) -> None: ...

    @abstractmethod
    def clip_region_intersects(self, r: Rectangle) -> bool: ...

    @abstractmethod
    def get_clip_bounds(self) -> Rectangle: ...

    @abstractmethod
    def is_clip_empty(self) -> bool: ...

    @abstractmethod
    def save_state(self) -> None: ...

    @abstractmethod
    def restore_state(self) -> None: ...

    @abstractmethod
    def begin_transparency_layer(self, opacity: float) -> None: ...

    @abstractmethod
    def end_transparency_layer(self) -> None: ...

    @abstractmethod
    def set_fill(self, fill: FillType) -> None: ...

    @abstractmethod
    def set_opacity(self, opacity: float) -> None: ...

    @abstractmethod
    def set_interpolation_quality(self, quality: ResamplingQuality) -> None: ...

    @abstractmethod
    def fill_rect(self, r: Rectangle, replace_existing_contents: bool = False) -> None: ...

    @abstractmethod
    def fill_rect_list(self, rects: RectangleList) -> None: ...

    @abstractmethod
    def fill_path(self, path: Path, transform: AffineTransform) -> None: ...

    @abstractmethod
    def draw_image(self, image: Image.Image, transform: AffineTransform) -> None: ...

    @abstractmethod
    def draw_line(self, x1: float, y1: float, x2: float, y2: float) -> None: ...

    @abstractmethod
    def set_font(self, font: Font) -> None: ...

    @abstractmethod
    def get_font(self) -> Font: ...

    @abstractmethod
    def draw_glyph(self, glyph: int, transform: AffineTransform) -> None: ...


class VectorExtensions(ABC):
    @abstractmethod
    def push_group(self, name: str) -> None: ...

    @abstractmethod
    def pop_group(self) -> None: ...

    @abstractmethod
    def set_tags(self, tags: Mapping[str, str]) -> None: ...

    @abstractmethod
    def clear_tags(self) -> None: ...

    @abstractmethod
    def draw_single_line_text(
        self, text: str, x: float, baseline_y: float, justification: Justification = Justification.LEFT
    ) -> None: ...

    @abstractmethod
    def draw_multi_line_text(self, text: str, x: float, baseline_y: float, max_width: float) -> None: ...

    @abstractmethod
    def draw_text(
        self, text: str, area: Rectangle, justification: Justification, use_ellipses: bool = True
    ) -> None: ...

    @abstractmethod
    def draw_fitted_text(
        self,
        text: str,
        area: Rectangle,
        justification: Justification,
        max_lines: int,
        minimum_horizontal_scale: float = 0.0,
    ) -> None: ...
