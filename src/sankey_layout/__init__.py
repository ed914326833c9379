"""sankey-layout: layered layout for Sankey flow diagrams."""

from sankey_layout.config import LayoutConfig
from sankey_layout.errors import (
    CyclicGraphError,
    DegenerateScaleError,
    GraphParseError,
    LinkReferenceError,
    SankeyError,
)
from sankey_layout.ir.graph import ByIndex, ByReference, Link, LinkSpec, Node, SankeyGraph
from sankey_layout.layout import full_layout, layout_records
from sankey_layout.layout.sankey import PackingStrategy, RelaxationStrategy, SankeyLayout
from sankey_layout.layout.types import LayoutLink, LayoutNode, LayoutResult
from sankey_layout.parsers import parse
from sankey_layout.renderers.json_layout import JsonRenderer

__all__ = [
    "ByIndex",
    "ByReference",
    "CyclicGraphError",
    "DegenerateScaleError",
    "GraphParseError",
    "JsonRenderer",
    "LayoutConfig",
    "LayoutLink",
    "LayoutNode",
    "LayoutResult",
    "Link",
    "LinkReferenceError",
    "LinkSpec",
    "Node",
    "PackingStrategy",
    "RelaxationStrategy",
    "SankeyError",
    "SankeyGraph",
    "SankeyLayout",
    "full_layout",
    "layout_json",
    "layout_records",
    "parse",
]


def layout_json(src: str, config: LayoutConfig | None = None, paths: bool = False) -> str:
    """Parse a JSON node/link document, lay it out and return the layout as JSON.

    Args:
        src: JSON document with ``nodes`` and ``links``.
        config: Canvas and layout settings; defaults to ``LayoutConfig()``.
        paths: Include the SVG path of every link.

    Returns:
        The JSON-encoded layout.

    Raises:
        SankeyError: If the input is malformed, cyclic or cannot be scaled.
    """
    graph = parse(src)
    result = SankeyLayout(config).layout(graph)
    return JsonRenderer(paths=paths).render(result)
