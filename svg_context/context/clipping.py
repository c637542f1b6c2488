"""Placement of clip/mask wrapper groups and named groups in the output tree."""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET

from PIL import Image

from svg_context.context.resources import ResourceWriter
from svg_context.context.state import GraphicsState
from svg_context.exceptions import GroupUnderflowError
from svg_context.geometry.path import Path
from svg_context.geometry.transform import AffineTransform
from svg_context.svg.document import SVGDocument, has_content
from svg_context.svg.formatting import format_url

logger = logging.getLogger(__name__)


class ClipGroupManager:
    """Decides where new drawables attach.

    Every clip or mask change materialises a new resource and a new wrapper
    ``g`` nested under the current active group. Named groups record their
    parent on the frame so that closing them needs no tree search.
    """

    def __init__(self, document: SVGDocument, resources: ResourceWriter) -> None:
        self.document = document
        self.resources = resources

    def parent_for(self, state: GraphicsState) -> ET.Element:
        return self.document.root if state.active_group is None else state.active_group

    def _open_wrapper(self, state: GraphicsState, attribute: str, ref: str) -> ET.Element:
        wrapper = self.document.add_element(state.active_group, "g")
        wrapper.set(attribute, format_url(ref))
        state.active_group = wrapper
        return wrapper

    def apply_clip(self, state: GraphicsState, path: Path) -> ET.Element:
        """Make ``path`` the frame's clip and open a wrapper that applies it."""
        state.clip_path = path
        ref = self.resources.write_clip_path(path, state.transform)
        logger.debug("Clip %s bounds=%s", ref, path.bounds())
        return self._open_wrapper(state, "clip-path", ref)

    def apply_mask(
        self,
        state: GraphicsState,
        image: Image.Image,
        position: tuple[float, float],
        placement: AffineTransform,
        image_rendering: str,
    ) -> ET.Element:
        """Open a wrapper masked by ``image`` drawn at ``position``/``placement``."""
        ref = self.resources.write_mask(image, position, placement, image_rendering)
        logger.debug("Mask %s (%dx%d)", ref, image.width, image.height)
        return self._open_wrapper(state, "mask", ref)

    def push_group(self, state: GraphicsState, name: str) -> ET.Element:
        parent = state.active_group
        group = self.document.add_element(parent, "g")
        group.set("id", name)
        state.open_groups.append((group, parent))
        state.active_group = group
        return group

    def pop_group(self, state: GraphicsState) -> bool:
        """Close the innermost named group opened in this frame.

        Returns True when clip or mask wrappers had been opened inside the
        group, meaning the caller must re-apply the current clip.
        """
        if not state.open_groups:
            raise GroupUnderflowError()
        group, parent = state.open_groups.pop()
        had_wrappers = state.active_group is not group
        state.active_group = parent
        if not has_content(group):
            (self.document.root if parent is None else parent).remove(group)
            logger.debug("Removed empty group %r", group.get("id"))
        return had_wrappers
