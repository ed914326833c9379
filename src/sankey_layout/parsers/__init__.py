"""Parser registry — pick the parser for an input format."""

from __future__ import annotations

from sankey_layout.ir.graph import SankeyGraph
from sankey_layout.parsers.json_graph import JsonGraphParser

_PARSERS = {
    "json": JsonGraphParser,
}


def parse(src: str, fmt: str = "json") -> SankeyGraph:
    """Parse ``src`` in the given format into a SankeyGraph."""
    parser_cls = _PARSERS.get(fmt)
    if parser_cls is None:
        raise ValueError(f"Unsupported input format: {fmt}")
    return parser_cls().parse(src)


__all__ = ["JsonGraphParser", "parse"]
