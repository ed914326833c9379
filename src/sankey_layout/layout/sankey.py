"""Sankey layered layout engine.

Phases:
  1. Topology (resolved by ``SankeyGraph``) and cycle check
  2. Node values
  3. Node breadths (frontier leveling, sinks right, scaling, columns)
  4. Node depths (shared value scale, initial heights)
  5. Vertical positioning (packing, or iterative relaxation)
  6. Link depths (endpoint ordering and stacking)
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Protocol

from sankey_layout.config import LayoutConfig
from sankey_layout.errors import CyclicGraphError, DegenerateScaleError
from sankey_layout.ir.graph import Link, Node, SankeyGraph, compute_node_links
from sankey_layout.layout.types import LayoutLink, LayoutNode, LayoutResult

logger = logging.getLogger(__name__)

# ─── Constants ───────────────────────────────────────────────────────────────

COLUMN_PADDING_FACTOR: float = 1.1
ALPHA_DECAY: float = 0.99
DEFAULT_ITERATIONS: int = 32


# ─── Node Values ─────────────────────────────────────────────────────────────


def compute_node_values(nodes: Sequence[Node]) -> None:
    """Set each node's value to the larger of its outgoing and incoming sums."""
    for node in nodes:
        node.value = max(
            sum(link.value for link in node.source_links),
            sum(link.value for link in node.target_links),
        )


# ─── Node Breadths ───────────────────────────────────────────────────────────


def assign_breadths(nodes: Sequence[Node], node_width: float) -> int:
    """Level nodes by frontier expansion. Returns the number of rounds.

    Every node starts in the first frontier; a node reached again from a later
    frontier is re-assigned, so it ends up at its longest-path distance.
    """
    frontier: list[Node] = list(nodes)
    breadth = 0
    while frontier:
        if breadth > len(nodes):
            # Longest path in a DAG visits each node at most once.
            raise CyclicGraphError([])
        reached: dict[Node, None] = {}
        for node in frontier:
            node.breadth = breadth
            node.width = node_width
            for link in node.source_links:
                reached.setdefault(link.target, None)
        frontier = list(reached)
        breadth += 1
    return breadth


def move_sinks_right(nodes: Sequence[Node], breadth_count: int) -> None:
    for node in nodes:
        if not node.source_links:
            node.breadth = breadth_count - 1


def scale_node_breadths(nodes: Sequence[Node], kx: float) -> None:
    for node in nodes:
        node.x = node.breadth * kx


def group_by_breadth(nodes: Sequence[Node]) -> list[list[Node]]:
    """Group nodes into columns ordered by ascending x, keeping input order within a column."""
    columns: dict[float, list[Node]] = {}
    for node in nodes:
        columns.setdefault(node.x, []).append(node)
    return [columns[x] for x in sorted(columns)]


def compute_node_breadths(nodes: Sequence[Node], width: float, node_width: float) -> list[list[Node]]:
    """Assign breadth indices and pixel positions; return the column buckets."""
    breadth_count = assign_breadths(nodes, node_width)
    move_sinks_right(nodes, breadth_count)
    # A single column has no horizontal extent to spread over.
    kx = (width - node_width) / (breadth_count - 1) if breadth_count > 1 else 0.0
    scale_node_breadths(nodes, kx)
    columns = group_by_breadth(nodes)
    logger.debug("assigned %d nodes to %d columns (kx=%s)", len(nodes), len(columns), kx)
    return columns


# ─── Node Depths ─────────────────────────────────────────────────────────────


def compute_value_scale(columns: Sequence[Sequence[Node]], height: float, padding: float) -> float:
    """Return the value-to-pixel scale bounded by the most crowded column.

    Columns whose values sum to zero impose no bound on the scale, but every
    column must still fit its padding. With no bounding column at all the
    scale is zero.

    Raises:
        DegenerateScaleError: If the canvas is too short for a column's padding.
    """
    ky: float | None = None
    for column in columns:
        free = height - (len(column) - 1) * COLUMN_PADDING_FACTOR * padding
        if free < 0:
            raise DegenerateScaleError(
                f"canvas height {height} cannot hold the padding of a {len(column)}-node column"
            )
        total = sum(node.value for node in column)
        if total <= 0:
            continue
        bound = free / total
        if ky is None or bound < ky:
            ky = bound
    return 0.0 if ky is None else ky


def initialize_node_depths(columns: Sequence[Sequence[Node]], links: Sequence[Link], ky: float) -> None:
    for column in columns:
        for i, node in enumerate(column):
            node.y = float(i)
            node.height = node.value * ky
    for link in links:
        link.thickness = link.value * ky


def compute_node_depths(
    columns: Sequence[Sequence[Node]], links: Sequence[Link], height: float, padding: float
) -> float:
    ky = compute_value_scale(columns, height, padding)
    initialize_node_depths(columns, links, ky)
    logger.debug("value scale ky=%s", ky)
    return ky


# ─── Packing and Collision Resolution ────────────────────────────────────────


def pack_column(column: list[Node], padding: float) -> float:
    """Sort a column by y and push overlapping nodes down. Returns the bottom edge."""
    column.sort(key=lambda node: node.y)
    y0 = 0.0
    for node in column:
        dy = y0 - node.y
        if dy > 0:
            node.y += dy
        y0 = node.y + node.height + padding
    return y0 - padding


def center_column(column: Sequence[Node], height: float, bottom: float) -> None:
    offset = (height - bottom) / 2
    for node in column:
        node.y += offset


def resolve_collisions(columns: Sequence[list[Node]], height: float, padding: float) -> None:
    """Pack every column, then push columns that overflow the canvas back up."""
    for column in columns:
        if not column:
            continue
        bottom = pack_column(column, padding)
        dy = bottom - height
        if dy <= 0:
            continue
        last = column[-1]
        last.y -= dy
        y0 = last.y
        for node in reversed(column[:-1]):
            dy = node.y + node.height + padding - y0
            if dy > 0:
                node.y -= dy
            y0 = node.y


# ─── Relaxation ──────────────────────────────────────────────────────────────


def _relax_toward(node: Node, links: Sequence[Link], neighbor_of: Callable[[Link], Node], alpha: float) -> None:
    total = sum(link.value for link in links)
    if total <= 0:
        return
    target = sum(neighbor_of(link).center * link.value for link in links) / total
    node.y += (target - node.center) * alpha


def relax_right_to_left(columns: Sequence[Sequence[Node]], alpha: float) -> None:
    """Move nodes toward the weighted centre of their targets, rightmost column first."""
    for column in reversed(columns):
        for node in column:
            if node.source_links:
                _relax_toward(node, node.source_links, lambda link: link.target, alpha)


def relax_left_to_right(columns: Sequence[Sequence[Node]], alpha: float) -> None:
    """Move nodes toward the weighted centre of their sources, leftmost column first."""
    for column in columns:
        for node in column:
            if node.target_links:
                _relax_toward(node, node.target_links, lambda link: link.source, alpha)


# ─── Link Depths ─────────────────────────────────────────────────────────────


def compute_link_depths(nodes: Sequence[Node]) -> None:
    """Order links at each endpoint by the other end's centre and stack them."""
    for node in nodes:
        node.source_links.sort(key=lambda link: link.target.center)
        node.target_links.sort(key=lambda link: link.source.center)
    for node in nodes:
        sy = 0.0
        for link in node.source_links:
            link.source_offset = sy
            sy += link.thickness
        ty = 0.0
        for link in node.target_links:
            link.target_offset = ty
            ty += link.thickness


# ─── Depth Strategies ────────────────────────────────────────────────────────


class DepthStrategy(Protocol):
    """Protocol for the vertical positioning step of the pipeline."""

    name: str

    def position(self, columns: Sequence[list[Node]], config: LayoutConfig) -> None:
        """Move nodes vertically within their columns."""
        ...


class PackingStrategy:
    """Single packing pass per column, then centre the column on the canvas."""

    name = "basic"

    def position(self, columns: Sequence[list[Node]], config: LayoutConfig) -> None:
        for column in columns:
            bottom = pack_column(column, config.node_padding)
            center_column(column, config.height, bottom)


class RelaxationStrategy:
    """Iterative barycenter relaxation interleaved with collision resolution."""

    name = "optimized"

    def __init__(self, iterations: int = DEFAULT_ITERATIONS) -> None:
        if iterations < 0:
            raise ValueError(f"iterations must be non-negative, got {iterations}")
        self.iterations = iterations

    def position(self, columns: Sequence[list[Node]], config: LayoutConfig) -> None:
        height, padding = config.height, config.node_padding
        resolve_collisions(columns, height, padding)
        alpha = 1.0
        for _ in range(self.iterations):
            alpha *= ALPHA_DECAY
            relax_right_to_left(columns, alpha)
            resolve_collisions(columns, height, padding)
            relax_left_to_right(columns, alpha)
            resolve_collisions(columns, height, padding)
        logger.debug("relaxed %d columns over %d iterations", len(columns), self.iterations)


def strategy_for(config: LayoutConfig) -> DepthStrategy:
    if config.mode == "optimized":
        return RelaxationStrategy(config.iterations)
    return PackingStrategy()


# ─── SankeyLayout Engine ─────────────────────────────────────────────────────


class SankeyLayout:
    """Sankey layout pipeline with a pluggable vertical positioning step.

    After ``layout`` the engine keeps the graph and its columns so that
    ``relayout`` and ``move_node`` can recompute link offsets cheaply.
    """

    def __init__(self, config: LayoutConfig | None = None, strategy: DepthStrategy | None = None) -> None:
        self.config = config if config is not None else LayoutConfig()
        self.strategy = strategy if strategy is not None else strategy_for(self.config)
        self.graph: SankeyGraph | None = None
        self.columns: list[list[Node]] = []
        self.scale: float = 0.0

    def layout(self, graph: SankeyGraph) -> LayoutResult:
        """Run the full pipeline on ``graph``.

        Raises:
            CyclicGraphError: If the links form a cycle.
            DegenerateScaleError: If the canvas cannot fit the columns.
        """
        config = self.config
        graph.validate_acyclic()
        # Rebuild adjacency in input order; a previous run may have re-sorted it.
        compute_node_links(graph.nodes, graph.links)
        compute_node_values(graph.nodes)
        columns = compute_node_breadths(graph.nodes, config.width, config.node_width)
        scale = compute_node_depths(columns, graph.links, config.height, config.node_padding)
        self.strategy.position(columns, config)
        compute_link_depths(graph.nodes)

        self.graph = graph
        self.columns = columns
        self.scale = scale
        logger.debug("%s layout finished for %d nodes", self.strategy.name, len(graph.nodes))
        return self.result()

    def relayout(self, positions: Mapping[str, float] | None = None) -> list[LayoutLink]:
        """Recompute link offsets after node y positions changed.

        ``positions`` optionally assigns new y values by node id first. No
        bounds or collision checks are applied.
        """
        graph = self._require_graph()
        for node_id, y in (positions or {}).items():
            graph.node(node_id).y = y
        compute_link_depths(graph.nodes)
        return [LayoutLink.from_link(link) for link in graph.links]

    def move_node(self, node_id: str, y: float) -> list[LayoutLink]:
        """Move one node to ``y`` clamped inside the canvas, then relayout."""
        graph = self._require_graph()
        node = graph.node(node_id)
        node.y = max(0.0, min(self.config.height - node.height, y))
        return self.relayout()

    def result(self) -> LayoutResult:
        graph = self._require_graph()
        return LayoutResult(
            nodes=[LayoutNode.from_node(node) for node in graph.nodes],
            links=[LayoutLink.from_link(link) for link in graph.links],
            size=self.config.size,
            columns=[[node.id for node in column] for column in self.columns],
        )

    def _require_graph(self) -> SankeyGraph:
        if self.graph is None:
            raise RuntimeError("layout() must run before the layout can be queried")
        return self.graph
