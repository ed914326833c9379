"""Intermediate representation: nodes, links and the resolved graph."""

from sankey_layout.ir.graph import (
    ByIndex,
    ByReference,
    Endpoint,
    Link,
    LinkSpec,
    Node,
    SankeyGraph,
    as_endpoint,
    compute_node_links,
)

__all__ = [
    "ByIndex",
    "ByReference",
    "Endpoint",
    "Link",
    "LinkSpec",
    "Node",
    "SankeyGraph",
    "as_endpoint",
    "compute_node_links",
]
