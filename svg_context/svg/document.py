"""In-memory SVG document owned by one graphics context."""

from __future__ import annotations

import copy
import logging
import xml.etree.ElementTree as ET
from pathlib import Path

from svg_context.exceptions import UnsupportedDocumentShapeError
from svg_context.svg.formatting import format_number

logger = logging.getLogger(__name__)

SVG_NS = "http://www.w3.org/2000/svg"
XLINK_NS = "http://www.w3.org/1999/xlink"


def local_name(tag: str) -> str:
    """Strip a ``{namespace}`` prefix from an element tag."""
    return tag.rsplit("}", 1)[-1]


class SVGDocument:
    """An ``<svg>`` root with its ``<defs>`` container and a resource id counter.

    The root must be empty when handed over; a fresh one is created when
    omitted. Resource ids are drawn from a single counter so that clip paths,
    gradients and masks never collide.
    """

    def __init__(
        self,
        width: float,
        height: float,
        title: str | None = None,
        root: ET.Element | None = None,
    ) -> None:
        if root is None:
            root = ET.Element("svg")
        elif local_name(root.tag).lower() != "svg" or len(root) > 0:
            raise UnsupportedDocumentShapeError(local_name(root.tag), len(root))

        root.tag = "svg"
        root.set("xmlns", SVG_NS)
        root.set("xmlns:xlink", XLINK_NS)
        root.set("width", format_number(width))
        root.set("height", format_number(height))

        self.root = root
        self.width = width
        self.height = height
        self.defs = ET.SubElement(root, "defs")
        if title:
            ET.SubElement(root, "title").text = title
        self._counter = 0

    def next_id(self, prefix: str) -> str:
        """Allocate the next document-unique resource id, e.g. ``ClipPath3``."""
        self._counter += 1
        resource_id = f"{prefix}{self._counter}"
        logger.debug("Allocated resource id %s", resource_id)
        return resource_id

    def add_element(self, parent: ET.Element | None, tag: str) -> ET.Element:
        """Append a new element under ``parent`` (the root when None)."""
        return ET.SubElement(self.root if parent is None else parent, tag)

    def add_definition(self, tag: str) -> ET.Element:
        return ET.SubElement(self.defs, tag)

    # -- serialisation -----------------------------------------------------

    def to_string(self, pretty: bool = True, prune_empty_wrappers: bool = True) -> str:
        """Serialise the document; the live tree is left untouched."""
        root = copy.deepcopy(self.root)
        if prune_empty_wrappers:
            removed = prune_empty_wrapper_groups(root)
            if removed:
                logger.debug("Pruned %d empty wrapper groups", removed)
        if pretty:
            ET.indent(root, space="  ")
        body = ET.tostring(root, encoding="unicode")
        return '<?xml version="1.0" encoding="UTF-8"?>\n' + body + "\n"

    def write(self, path: Path | str, pretty: bool = True, prune_empty_wrappers: bool = True) -> Path:
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.to_string(pretty, prune_empty_wrappers), encoding="utf-8")
        logger.info("Wrote %s", target)
        return target


def is_wrapper_group(element: ET.Element) -> bool:
    """Auto-created clip/mask wrappers are ``g`` elements without an id."""
    return local_name(element.tag) == "g" and element.get("id") is None


def has_content(element: ET.Element) -> bool:
    """True when something other than empty wrapper groups sits below ``element``."""
    return any(not is_wrapper_group(child) or has_content(child) for child in element)


def prune_empty_wrapper_groups(element: ET.Element) -> int:
    """Remove wrapper groups with no content below ``element``; returns the count."""
    removed = 0
    for child in list(element):
        removed += prune_empty_wrapper_groups(child)
        if is_wrapper_group(child) and len(child) == 0:
            element.remove(child)
            removed += 1
    return removed
