"""SVG graphics context: translates draw calls into an SVG element tree.

Example:
    >>> from svg_context import SVGGraphicsContext, Colour, FillType, Rectangle
    >>> ctx = SVGGraphicsContext(200, 100)
    >>> ctx.set_fill(FillType.solid(Colour(255, 0, 0)))
    >>> ctx.fill_rect(Rectangle(10, 10, 50, 20))
    >>> svg_text = ctx.to_string()
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from pathlib import Path as FilePath
from typing import Mapping

from PIL import Image

from svg_context.config import Config
from svg_context.context.base import GraphicsContext, VectorExtensions
from svg_context.context.clipping import ClipGroupManager
from svg_context.context.resources import ResourceWriter
from svg_context.context.state import GraphicsState, StateStack
from svg_context.context.text_layout import (
    Justification,
    first_line_y,
    position_in_box,
    squeeze_fits,
    text_anchor,
    truncate_to_width,
    wrap_lines,
)
from svg_context.exceptions import GroupUnderflowError, StateUnderflowError
from svg_context.fills import FillType
from svg_context.fonts.font import Font
from svg_context.geometry.path import Path
from svg_context.geometry.rectangles import Rectangle, RectangleList
from svg_context.geometry.transform import AffineTransform
from svg_context.imaging import ResamplingQuality, png_data_uri
from svg_context.svg.document import SVGDocument
from svg_context.svg.formatting import format_matrix, format_number, format_rgb, format_url

logger = logging.getLogger(__name__)


class SVGGraphicsContext(GraphicsContext, VectorExtensions):
    """Stateful translator from drawing operations to one SVG document.

    The context exclusively owns its document; resource ids are allocated
    from the document's counter. Not thread-safe.
    """

    def __init__(
        self,
        width: float,
        height: float,
        title: str | None = None,
        root: ET.Element | None = None,
        config: Config | None = None,
    ) -> None:
        self.config = config or Config()
        self.document = SVGDocument(width, height, title=title, root=root)
        self.resources = ResourceWriter(self.document, self.config)
        self.groups = ClipGroupManager(self.document, self.resources)
        self.resampling = self.config.resampling

        root_state = GraphicsState()
        root_state.clip_regions = RectangleList([Rectangle(0, 0, width, height)])
        root_state.clip_path = root_state.clip_regions.to_path()
        self._stack = StateStack(root_state)

    @property
    def state(self) -> GraphicsState:
        return self._stack.current

    @property
    def depth(self) -> int:
        """Number of frames on the state stack (1 when nothing is saved)."""
        return len(self._stack)

    def is_vector_device(self) -> bool:
        return True

    def vector_extensions(self) -> VectorExtensions:
        return self

    # -- formatting helpers ------------------------------------------------

    def _num(self, value: float) -> str:
        return format_number(value, self.config.precision)

    def _matrix(self, t: AffineTransform) -> str:
        return format_matrix(t.coefficients, self.config.matrix_precision)

    def _paint(self) -> str:
        state = self.state
        if state.fill.is_gradient() and state.gradient_ref:
            return format_url(state.gradient_ref)
        return format_rgb(state.fill.colour)

    def _new_element(self, tag: str) -> ET.Element:
        return self.document.add_element(self.state.active_group, tag)

    def _apply_paint(self, element: ET.Element, kind: str = "fill") -> None:
        element.set(kind, self._paint())
        element.set(f"{kind}-opacity", self._num(self.state.fill.effective_opacity()))

    def _apply_transform(self, element: ET.Element) -> None:
        if not self.state.transform.is_identity():
            element.set("transform", self._matrix(self.state.transform))

    def _apply_tags(self, element: ET.Element) -> None:
        for key, value in self.state.tags.items():
            element.set(key, value)

    def _image_placement(self, transform: AffineTransform) -> tuple[tuple[float, float], AffineTransform]:
        """Position and transform attribute for an image drawn with ``transform``."""
        state = self.state
        if transform.is_identity() and state.transform.is_identity():
            return state.origin_offset, AffineTransform()
        placement = transform.translated(state.x_offset, state.y_offset).followed_by(state.transform)
        return (0.0, 0.0), placement

    def _release_underflow(self, error: Exception) -> None:
        if self.config.strict:
            raise error
        logger.warning("Ignoring unbalanced call: %s", error)

    # -- transform & origin ------------------------------------------------

    def set_origin(self, dx: float, dy: float) -> None:
        state = self.state
        state.origin_offset = (state.x_offset + dx, state.y_offset + dy)
        self.groups.apply_clip(state, state.clip_path)

    def add_transform(self, transform: AffineTransform) -> None:
        state = self.state
        state.transform = state.transform.followed_by(transform)
        state.clip_regions.transform_all(transform)
        self.groups.apply_clip(state, state.clip_path.transformed(transform))

    # -- clipping ----------------------------------------------------------

    def clip_to_rectangle(self, r: Rectangle) -> bool:
        state = self.state
        state.clip_regions.clip_to(r.translated(state.x_offset, state.y_offset))
        self.groups.apply_clip(state, state.clip_regions.to_path())
        return not self.is_clip_empty()

    def clip_to_rectangle_list(self, rects: RectangleList) -> bool:
        state = self.state
        state.clip_regions.clip_to(rects.translated(state.x_offset, state.y_offset))
        self.groups.apply_clip(state, state.clip_regions.to_path())
        return not self.is_clip_empty()

    def exclude_clip_rectangle(self, r: Rectangle) -> None:
        state = self.state
        state.clip_regions.subtract(r.translated(state.x_offset, state.y_offset))
        self.groups.apply_clip(state, state.clip_regions.to_path())

    def clip_to_path(self, path: Path, transform: AffineTransform) -> None:
        """Clip to ``path``; the rectangle clip is replaced, not intersected."""
        state = self.state
        self.groups.apply_clip(state, path.transformed(transform.translated(state.x_offset, state.y_offset)))

    def clip_to_image_alpha(self, image: Image.Image, transform: AffineTransform) -> None:
        position, placement = self._image_placement(transform)
        self.groups.apply_mask(self.state, image, position, placement, self.resampling.image_rendering)

    def clip_region_intersects(self, r: Rectangle) -> bool:
        state = self.state
        return state.clip_path.bounds().intersects(r.translated(state.x_offset, state.y_offset))

    def get_clip_bounds(self) -> Rectangle:
        state = self.state
        if state.clip_path.is_empty():
            return Rectangle()
        return state.clip_path.bounds().translated(-state.x_offset, -state.y_offset).to_nearest_int()

    def is_clip_empty(self) -> bool:
        return self.state.clip_path.is_empty()

    # -- save / restore ----------------------------------------------------

    def save_state(self) -> None:
        self._stack.push()

    def restore_state(self) -> None:
        try:
            self._stack.pop()
        except StateUnderflowError as e:
            self._release_underflow(e)

    # -- fill --------------------------------------------------------------

    def set_fill(self, fill: FillType) -> None:
        state = self.state
        state.fill = fill
        if fill.gradient is not None:
            state.gradient_ref = self.resources.write_gradient(
                fill.gradient, state.origin_offset, state.transform
            )
        else:
            state.gradient_ref = None

    def set_opacity(self, opacity: float) -> None:
        self.state.fill = self.state.fill.with_opacity(opacity)

    def begin_transparency_layer(self, opacity: float) -> None:
        self.set_opacity(opacity)

    def end_transparency_layer(self) -> None:
        # Nested layers are not tracked; the opacity always returns to opaque
        self.set_opacity(1.0)

    def set_interpolation_quality(self, quality: ResamplingQuality) -> None:
        self.resampling = quality

    # -- drawables ---------------------------------------------------------

    def fill_rect(self, r: Rectangle, replace_existing_contents: bool = False) -> None:
        if r.is_empty():
            return
        state = self.state
        rect = self._new_element("rect")
        rect.set("x", self._num(r.x + state.x_offset))
        rect.set("y", self._num(r.y + state.y_offset))
        rect.set("width", self._num(r.width))
        rect.set("height", self._num(r.height))
        self._apply_paint(rect)
        self._apply_transform(rect)
        self._apply_tags(rect)

    def fill_rect_list(self, rects: RectangleList) -> None:
        self.fill_path(rects.to_path(), AffineTransform())

    def fill_path(self, path: Path, transform: AffineTransform) -> None:
        state = self.state
        placed = path.transformed(transform.translated(state.x_offset, state.y_offset))
        if placed.is_empty():
            return
        element = self._new_element("path")
        element.set("d", placed.to_svg_data(self.config.precision))
        self._apply_paint(element)
        if not path.use_non_zero_winding:
            element.set("fill-rule", "evenodd")
        self._apply_transform(element)
        self._apply_tags(element)

    def draw_image(self, image: Image.Image, transform: AffineTransform) -> None:
        position, placement = self._image_placement(transform)
        element = self._new_element("image")
        element.set("x", self._num(position[0]))
        element.set("y", self._num(position[1]))
        element.set("width", str(image.width))
        element.set("height", str(image.height))
        element.set("image-rendering", self.resampling.image_rendering)
        if not placement.is_identity():
            element.set("transform", self._matrix(placement))
        element.set("xlink:href", png_data_uri(image))
        self._apply_tags(element)

    def draw_line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        state = self.state
        line = self._new_element("line")
        line.set("x1", self._num(x1 + state.x_offset))
        line.set("y1", self._num(y1 + state.y_offset))
        line.set("x2", self._num(x2 + state.x_offset))
        line.set("y2", self._num(y2 + state.y_offset))
        self._apply_paint(line, "stroke")
        self._apply_transform(line)
        self._apply_tags(line)

    # -- fonts & glyphs ----------------------------------------------------

    def set_font(self, font: Font) -> None:
        self.state.font = font

    def get_font(self) -> Font:
        return self.state.font

    def draw_glyph(self, glyph: int, transform: AffineTransform) -> None:
        font = self.state.font
        outline = font.typeface.get_outline_for_glyph(glyph)
        glyph_transform = AffineTransform.scale(font.height * font.horizontal_scale, font.height).followed_by(
            transform
        )
        self.fill_path(outline.transformed(glyph_transform), AffineTransform())

    # -- text --------------------------------------------------------------

    def _new_text(self, x: float, y: float) -> ET.Element:
        font = self.state.font
        text = self._new_element("text")
        text.set("x", self._num(x))
        text.set("y", self._num(y))
        text.set("font-family", font.family)
        text.set("font-style", font.style)
        text.set("font-size", self._num(font.height))
        self._apply_paint(text)
        self._apply_transform(text)
        return text

    def _add_line(self, text: ET.Element, line: str, x: float, y: float) -> None:
        tspan = ET.SubElement(text, "tspan")
        tspan.set("x", self._num(x))
        tspan.set("y", self._num(y))
        tspan.text = line

    def draw_single_line_text(
        self, text: str, x: float, baseline_y: float, justification: Justification = Justification.LEFT
    ) -> None:
        state = self.state
        element = self._new_text(x + state.x_offset, baseline_y + state.y_offset)
        element.set("text-anchor", text_anchor(justification))
        element.text = text
        self._apply_tags(element)

    def draw_multi_line_text(self, text: str, x: float, baseline_y: float, max_width: float) -> None:
        state = self.state
        font = state.font
        x += state.x_offset
        baseline_y += state.y_offset
        element = self._new_text(x, baseline_y)
        for i, line in enumerate(wrap_lines(text, font, max_width)):
            self._add_line(element, line, x, baseline_y + i * font.height)
        self._apply_tags(element)

    def draw_text(
        self, text: str, area: Rectangle, justification: Justification, use_ellipses: bool = True
    ) -> None:
        state = self.state
        position = position_in_box(area.translated(state.x_offset, state.y_offset), justification)
        element = self._new_text(position.x, position.y)
        element.set("text-anchor", position.text_anchor)
        element.set("dominant-baseline", position.dominant_baseline)
        ellipsis = self.config.ellipsis if use_ellipses else ""
        element.text = truncate_to_width(text, state.font, area.width, ellipsis)
        self._apply_tags(element)

    def draw_fitted_text(
        self,
        text: str,
        area: Rectangle,
        justification: Justification,
        max_lines: int,
        minimum_horizontal_scale: float = 0.0,
    ) -> None:
        state = self.state
        font = state.font
        position = position_in_box(area.translated(state.x_offset, state.y_offset), justification)
        element = self._new_text(position.x, position.y)
        element.set("text-anchor", position.text_anchor)
        element.set("dominant-baseline", position.dominant_baseline)

        too_wide = font.get_string_width(text) > area.width
        if max_lines > 1 and too_wide:
            lines = wrap_lines(text, font, area.width, max_lines, self.config.ellipsis)
            y = first_line_y(position, len(lines), font.height)
            for i, line in enumerate(lines):
                self._add_line(element, line, position.x, y + i * font.height)
        elif too_wide and squeeze_fits(text, font, area.width, minimum_horizontal_scale):
            element.text = text
            element.set("textLength", self._num(area.width))
            element.set("lengthAdjust", "spacingAndGlyphs")
        else:
            element.text = truncate_to_width(text, font, area.width, self.config.ellipsis)
        self._apply_tags(element)

    # -- groups & tags -----------------------------------------------------

    def push_group(self, name: str) -> None:
        self.groups.push_group(self.state, name)

    def pop_group(self) -> None:
        state = self.state
        try:
            had_wrappers = self.groups.pop_group(state)
        except GroupUnderflowError as e:
            self._release_underflow(e)
            return
        if had_wrappers:
            self.groups.apply_clip(state, state.clip_path)

    def set_tags(self, tags: Mapping[str, str]) -> None:
        self.state.tags = {str(k): str(v) for k, v in tags.items()}

    def clear_tags(self) -> None:
        self.state.tags = {}

    # -- output ------------------------------------------------------------

    def to_string(self) -> str:
        return self.document.to_string(
            pretty=self.config.pretty, prune_empty_wrappers=self.config.prune_empty_wrappers
        )

    def write(self, path: FilePath | str) -> FilePath:
        return self.document.write(
            path, pretty=self.config.pretty, prune_empty_wrappers=self.config.prune_empty_wrappers
        )
