"""SVG output for svg-context.

This subpackage provides:
- The in-memory document with its resource id counter
- Attribute formatting (trimmed numbers, matrices, colours)
- Safe SVG parsing with XXE protection (defusedxml)
"""

from svg_context.svg.document import SVGDocument, prune_empty_wrapper_groups
from svg_context.svg.formatting import format_matrix, format_number, format_rgb, format_url
from svg_context.svg.parser import count_elements, parse_svg, parse_svg_string, strip_namespaces

__all__ = [
    "SVGDocument",
    "prune_empty_wrapper_groups",
    "format_matrix",
    "format_number",
    "format_rgb",
    "format_url",
    "count_elements",
    "parse_svg",
    "parse_svg_string",
    "strip_namespaces",
]
