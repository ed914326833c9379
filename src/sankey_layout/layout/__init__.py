"""Layout engine registry and public API."""

from __future__ import annotations

from sankey_layout.layout.engine import basic_layout, full_layout, layout_records, optimized_layout
from sankey_layout.layout.paths import DEFAULT_CURVATURE, band_endpoints, band_path, link_endpoints, link_path
from sankey_layout.layout.sankey import (
    ALPHA_DECAY,
    COLUMN_PADDING_FACTOR,
    DEFAULT_ITERATIONS,
    DepthStrategy,
    PackingStrategy,
    RelaxationStrategy,
    SankeyLayout,
    assign_breadths,
    compute_link_depths,
    compute_node_breadths,
    compute_node_depths,
    compute_node_values,
    compute_value_scale,
    group_by_breadth,
    move_sinks_right,
    pack_column,
    relax_left_to_right,
    relax_right_to_left,
    resolve_collisions,
    strategy_for,
)
from sankey_layout.layout.types import LayoutLink, LayoutNode, LayoutResult

__all__ = [
    "ALPHA_DECAY",
    "COLUMN_PADDING_FACTOR",
    "DEFAULT_CURVATURE",
    "DEFAULT_ITERATIONS",
    "DepthStrategy",
    "LayoutLink",
    "LayoutNode",
    "LayoutResult",
    "PackingStrategy",
    "RelaxationStrategy",
    "SankeyLayout",
    "assign_breadths",
    "band_endpoints",
    "band_path",
    "basic_layout",
    "compute_link_depths",
    "compute_node_breadths",
    "compute_node_depths",
    "compute_node_values",
    "compute_value_scale",
    "full_layout",
    "group_by_breadth",
    "layout_records",
    "link_endpoints",
    "link_path",
    "move_sinks_right",
    "optimized_layout",
    "pack_column",
    "relax_left_to_right",
    "relax_right_to_left",
    "resolve_collisions",
    "strategy_for",
]
