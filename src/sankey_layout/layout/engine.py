"""Layout engine convenience functions."""

from __future__ import annotations

from collections.abc import Iterable

from sankey_layout.config import LayoutConfig
from sankey_layout.ir.graph import SankeyGraph
from sankey_layout.layout.sankey import PackingStrategy, RelaxationStrategy, SankeyLayout
from sankey_layout.layout.types import LayoutResult


def full_layout(graph: SankeyGraph, config: LayoutConfig | None = None) -> LayoutResult:
    """Run the layout pipeline selected by ``config.mode``."""
    return SankeyLayout(config).layout(graph)


def basic_layout(graph: SankeyGraph, config: LayoutConfig | None = None) -> LayoutResult:
    """Run the pipeline with a single packing pass per column."""
    return SankeyLayout(config, PackingStrategy()).layout(graph)


def optimized_layout(graph: SankeyGraph, config: LayoutConfig | None = None) -> LayoutResult:
    """Run the pipeline with iterative relaxation."""
    config = config if config is not None else LayoutConfig()
    return SankeyLayout(config, RelaxationStrategy(config.iterations)).layout(graph)


def layout_records(
    nodes: Iterable[object], links: Iterable[object], config: LayoutConfig | None = None
) -> LayoutResult:
    """Build a graph from plain records and lay it out."""
    return full_layout(SankeyGraph.from_records(nodes, links), config)
