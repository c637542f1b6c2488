"""Safe SVG parsing (XXE protected through defusedxml)."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import defusedxml.ElementTree as ET

from svg_context.svg.document import local_name

if TYPE_CHECKING:
    from xml.etree.ElementTree import Element, ElementTree


def parse_svg(path: Path | str) -> ElementTree:
    """Parse an SVG file into an ElementTree."""
    return ET.parse(str(path))


def parse_svg_string(text: str) -> Element:
    """Parse SVG markup and return its root element."""
    return ET.fromstring(text)


def strip_namespaces(root: Element) -> Element:
    """Drop ``{namespace}`` prefixes from every tag below ``root`` in place."""
    for element in root.iter():
        element.tag = local_name(element.tag)
    return root


def count_elements(root: Element) -> dict[str, int]:
    """Count elements by local tag name."""
    counts: dict[str, int] = {}
    for element in root.iter():
        tag = local_name(element.tag)
        counts[tag] = counts.get(tag, 0) + 1
    return counts
