"""Layout types shared across layout engines and renderers."""

from __future__ import annotations

from dataclasses import dataclass, field

from sankey_layout.ir.graph import Link, Node


@dataclass
class LayoutNode:
    """A positioned node in the layout."""

    id: str
    name: str
    value: float
    breadth: int
    x: float
    y: float
    width: float
    height: float

    @classmethod
    def from_node(cls, node: Node) -> LayoutNode:
        return cls(
            id=node.id,
            name=node.name,
            value=node.value,
            breadth=node.breadth,
            x=node.x,
            y=node.y,
            width=node.width,
            height=node.height,
        )


@dataclass
class LayoutLink:
    """A link with its thickness and stacking offsets at both endpoints."""

    source: str
    target: str
    value: float
    thickness: float
    source_offset: float
    target_offset: float

    @classmethod
    def from_link(cls, link: Link) -> LayoutLink:
        return cls(
            source=link.source.id,
            target=link.target.id,
            value=link.value,
            thickness=link.thickness,
            source_offset=link.source_offset,
            target_offset=link.target_offset,
        )


@dataclass
class LayoutResult:
    """Self-contained layout output — everything renderers need."""

    nodes: list[LayoutNode]
    links: list[LayoutLink]
    size: tuple[float, float]
    columns: list[list[str]] = field(default_factory=list)

    def node(self, node_id: str) -> LayoutNode:
        for node in self.nodes:
            if node.id == node_id:
                return node
        raise KeyError(f"Unknown node id '{node_id}'")
