"""Document-level resources: gradients, clip paths and masks in ``<defs>``."""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET

from PIL import Image

from svg_context.config import Config
from svg_context.fills import ColourGradient
from svg_context.geometry.path import Path
from svg_context.geometry.transform import AffineTransform
from svg_context.imaging import alpha_mask, png_data_uri
from svg_context.svg.document import SVGDocument
from svg_context.svg.formatting import format_matrix, format_number, format_rgb

logger = logging.getLogger(__name__)


class GradientCache:
    """Registry of emitted stop lists, matched structurally by linear scan."""

    def __init__(self) -> None:
        self._entries: list[tuple[ColourGradient, str]] = []

    def __len__(self) -> int:
        return len(self._entries)

    def lookup(self, gradient: ColourGradient) -> str | None:
        for previous, ref in self._entries:
            if previous.same_stops(gradient):
                return ref
        return None

    def register(self, gradient: ColourGradient, ref: str) -> None:
        self._entries.append((gradient, ref))


class ResourceWriter:
    """Writes resource definitions into a document's ``<defs>``."""

    def __init__(self, document: SVGDocument, config: Config) -> None:
        self.document = document
        self.config = config
        self.gradients = GradientCache()

    def _num(self, value: float) -> str:
        return format_number(value, self.config.precision)

    def _matrix(self, t: AffineTransform) -> str:
        return format_matrix(t.coefficients, self.config.matrix_precision)

    def write_gradient(
        self,
        gradient: ColourGradient,
        offset: tuple[float, float],
        transform: AffineTransform,
    ) -> str:
        """Emit a gradient element and return its id.

        Geometry is always written; stops are written only for a stop list
        not seen before, otherwise the element links to the earlier one.
        """
        tag = "radialGradient" if gradient.is_radial else "linearGradient"
        element = self.document.add_definition(tag)
        ref = self.document.next_id("Gradient")
        element.set("id", ref)
        element.set("gradientUnits", "userSpaceOnUse")

        dx, dy = offset
        x1, y1 = gradient.point1[0] + dx, gradient.point1[1] + dy
        x2, y2 = gradient.point2[0] + dx, gradient.point2[1] + dy
        if gradient.is_radial:
            element.set("cx", self._num(x1))
            element.set("cy", self._num(y1))
            element.set("r", self._num(gradient.radius))
        else:
            element.set("x1", self._num(x1))
            element.set("y1", self._num(y1))
            element.set("x2", self._num(x2))
            element.set("y2", self._num(y2))

        if not transform.is_identity():
            element.set("gradientTransform", self._matrix(transform))

        previous = self.gradients.lookup(gradient)
        if previous is not None:
            element.set("xlink:href", f"#{previous}")
            logger.debug("Gradient %s reuses stops of %s", ref, previous)
        else:
            for position, colour in gradient.stops:
                stop = ET.SubElement(element, "stop")
                stop.set("offset", self._num(position))
                stop.set("stop-color", format_rgb(colour))
                stop.set("stop-opacity", self._num(colour.alpha))
            self.gradients.register(gradient, ref)
        return ref

    def write_clip_path(self, path: Path, transform: AffineTransform) -> str:
        element = self.document.add_definition("clipPath")
        ref = self.document.next_id("ClipPath")
        element.set("id", ref)
        clip = ET.SubElement(element, "path")
        clip.set("d", path.to_svg_data(self.config.precision))
        if not path.use_non_zero_winding:
            clip.set("clip-rule", "evenodd")
        if not transform.is_identity():
            clip.set("transform", self._matrix(transform))
        return ref

    def write_mask(
        self,
        image: Image.Image,
        position: tuple[float, float],
        transform: AffineTransform,
        image_rendering: str = "auto",
    ) -> str:
        element = self.document.add_definition("mask")
        ref = self.document.next_id("Mask")
        element.set("id", ref)
        mask_image = ET.SubElement(element, "image")
        mask_image.set("x", self._num(position[0]))
        mask_image.set("y", self._num(position[1]))
        mask_image.set("width", str(image.width))
        mask_image.set("height", str(image.height))
        mask_image.set("image-rendering", image_rendering)
        if not transform.is_identity():
            mask_image.set("transform", self._matrix(transform))
        mask_image.set("xlink:href", png_data_uri(alpha_mask(image)))
        return ref
