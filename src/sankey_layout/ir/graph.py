"""Graph IR: nodes, links and the topology builder.

This module owns the records every layout phase works on. Link endpoints
arrive either as an index into the node collection or as a node id; they are
resolved once into direct ``Node`` references and never re-checked later.
A networkx DiGraph view of the resolved topology is used for structural
queries such as cycle detection.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field

import networkx as nx

from sankey_layout.errors import CyclicGraphError, LinkReferenceError, SankeyError

logger = logging.getLogger(__name__)


# ─── Endpoints ───────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class ByIndex:
    """Endpoint given as a position in the node collection."""

    index: int


@dataclass(frozen=True)
class ByReference:
    """Endpoint given as a node id."""

    node_id: str


Endpoint = ByIndex | ByReference


def as_endpoint(raw: object) -> Endpoint:
    """Coerce an int, str, Node or Endpoint into an Endpoint."""
    if isinstance(raw, (ByIndex, ByReference)):
        return raw
    if isinstance(raw, Node):
        return ByReference(raw.id)
    # bool is an int subclass but never a sensible index
    if isinstance(raw, int) and not isinstance(raw, bool):
        return ByIndex(raw)
    if isinstance(raw, str):
        return ByReference(raw)
    raise LinkReferenceError(f"Unsupported link endpoint {raw!r}; expected an index or a node id")


# ─── Records ─────────────────────────────────────────────────────────────────


@dataclass(eq=False)
class Node:
    """A diagram node. Geometry fields are filled in by the layout phases."""

    id: str
    name: str = ""
    value: float = 0.0
    breadth: int = 0
    x: float = 0.0
    width: float = 0.0
    y: float = 0.0
    height: float = 0.0
    source_links: list[Link] = field(default_factory=list, repr=False)
    target_links: list[Link] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        if not self.name:
            self.name = self.id

    @property
    def center(self) -> float:
        return self.y + self.height / 2

    @property
    def bottom(self) -> float:
        return self.y + self.height


@dataclass(frozen=True)
class LinkSpec:
    """An unresolved input link."""

    source: Endpoint
    target: Endpoint
    value: float = 0.0


@dataclass(eq=False)
class Link:
    """A resolved link between two nodes of the same graph."""

    source: Node
    target: Node
    value: float
    thickness: float = 0.0
    source_offset: float = 0.0
    target_offset: float = 0.0

    def __repr__(self) -> str:
        return f"Link({self.source.id!r} -> {self.target.id!r}, value={self.value})"


# ─── Topology Builder ────────────────────────────────────────────────────────


def _resolve(endpoint: Endpoint, nodes: Sequence[Node], by_id: dict[str, Node], position: int) -> Node:
    if isinstance(endpoint, ByIndex):
        if 0 <= endpoint.index < len(nodes):
            return nodes[endpoint.index]
        raise LinkReferenceError(
            f"link {position}: node index {endpoint.index} is out of range for {len(nodes)} nodes"
        )
    node = by_id.get(endpoint.node_id)
    if node is None:
        raise LinkReferenceError(f"link {position}: unknown node id '{endpoint.node_id}'")
    return node


def compute_node_links(nodes: Sequence[Node], links: Sequence[Link | LinkSpec]) -> list[Link]:
    """Resolve link endpoints and populate each node's adjacency lists.

    Every endpoint is resolved before any node is touched, so a bad reference
    leaves the nodes unchanged. Links that are already resolved pass through,
    which makes a second run over the returned list a no-op.

    Raises:
        LinkReferenceError: If an endpoint is out of range or names an unknown node.
        SankeyError: If a link value is negative, NaN or infinite.
    """
    by_id: dict[str, Node] = {node.id: node for node in nodes}
    resolved: list[Link] = []

    for position, link in enumerate(links):
        if isinstance(link, Link):
            for end in (link.source, link.target):
                if by_id.get(end.id) is not end:
                    raise LinkReferenceError(f"link {position}: node '{end.id}' is not part of this graph")
            candidate = link
        else:
            source = _resolve(as_endpoint(link.source), nodes, by_id, position)
            target = _resolve(as_endpoint(link.target), nodes, by_id, position)
            candidate = Link(source=source, target=target, value=float(link.value))
        if not math.isfinite(candidate.value) or candidate.value < 0:
            raise SankeyError(f"link {position}: value must be a finite non-negative number, got {candidate.value}")
        resolved.append(candidate)

    for node in nodes:
        node.source_links = []
        node.target_links = []
    for link in resolved:
        link.source.source_links.append(link)
        link.target.target_links.append(link)

    return resolved


# ─── SankeyGraph ─────────────────────────────────────────────────────────────


def _node_from_record(record: object, position: int) -> Node:
    if isinstance(record, Node):
        return Node(id=record.id, name=record.name, value=record.value)
    if isinstance(record, str):
        return Node(id=record)
    if isinstance(record, Mapping):
        name = record.get("name")
        if "id" in record:
            node_id = record["id"]
        else:
            node_id = name if name is not None else str(position)
        # Integer endpoints always mean indices, so an integer id could never be referenced.
        if not isinstance(node_id, str):
            raise SankeyError(f"node {position}: node id must be a string, got {node_id!r}")
        return Node(
            id=node_id,
            name="" if name is None else str(name),
            value=float(record.get("value", 0.0)),
        )
    raise SankeyError(f"node {position}: unsupported node record {record!r}")


def _link_from_record(record: object, position: int) -> LinkSpec:
    if isinstance(record, LinkSpec):
        return record
    if isinstance(record, Link):
        return LinkSpec(ByReference(record.source.id), ByReference(record.target.id), record.value)
    if isinstance(record, Mapping):
        try:
            source, target = record["source"], record["target"]
        except KeyError as e:
            raise SankeyError(f"link {position}: missing field {e.args[0]!r}") from e
        return LinkSpec(as_endpoint(source), as_endpoint(target), float(record.get("value", 0.0)))
    if isinstance(record, tuple) and len(record) == 3:
        source, target, value = record
        return LinkSpec(as_endpoint(source), as_endpoint(target), float(value))
    raise SankeyError(f"link {position}: unsupported link record {record!r}")


class SankeyGraph:
    """The resolved node/link graph a layout runs on.

    The graph owns its Node and Link records: ``from_records`` copies the
    caller's input, so layout never mutates caller data.
    """

    def __init__(self, nodes: list[Node], links: Sequence[Link | LinkSpec]) -> None:
        seen: set[str] = set()
        for node in nodes:
            if node.id in seen:
                raise SankeyError(f"Duplicate node id '{node.id}'")
            seen.add(node.id)
        self.nodes = nodes
        self.links = compute_node_links(nodes, links)
        self._by_id: dict[str, Node] = {node.id: node for node in nodes}
        logger.debug("built graph with %d nodes and %d links", len(self.nodes), len(self.links))

    @classmethod
    def from_records(cls, nodes: Iterable[object], links: Iterable[object]) -> SankeyGraph:
        """Build a graph from node records and link records.

        Node records are ``Node`` objects, plain ids or mappings with optional
        ``id``, ``name`` and ``value`` keys. Ids, and names standing in for
        them, must be strings. Link records are ``LinkSpec`` objects,
        ``(source, target, value)`` tuples or mappings with ``source``,
        ``target`` and ``value`` keys; endpoints are indices or ids.
        """
        node_list = [_node_from_record(record, i) for i, record in enumerate(nodes)]
        link_list = [_link_from_record(record, i) for i, record in enumerate(links)]
        return cls(node_list, link_list)

    def node(self, node_id: str) -> Node:
        try:
            return self._by_id[node_id]
        except KeyError:
            raise KeyError(f"Unknown node id '{node_id}'") from None

    def node_count(self) -> int:
        return len(self.nodes)

    def link_count(self) -> int:
        return len(self.links)

    def in_degree(self, node_id: str) -> int:
        if node_id not in self._by_id:
            return 0
        return len(self._by_id[node_id].target_links)

    def out_degree(self, node_id: str) -> int:
        if node_id not in self._by_id:
            return 0
        return len(self._by_id[node_id].source_links)

    def to_digraph(self) -> nx.DiGraph:
        """Return a networkx view with parallel links merged into one weighted edge."""
        digraph: nx.DiGraph = nx.DiGraph()
        for node in self.nodes:
            digraph.add_node(node.id, data=node)
        for link in self.links:
            src, tgt = link.source.id, link.target.id
            if digraph.has_edge(src, tgt):
                digraph[src][tgt]["weight"] += link.value
            else:
                digraph.add_edge(src, tgt, weight=link.value)
        return digraph

    def is_dag(self) -> bool:
        return nx.is_directed_acyclic_graph(self.to_digraph())

    def find_cycle(self) -> list[tuple[str, str]] | None:
        if not self.links:
            return None
        try:
            return [(src, tgt) for src, tgt in nx.find_cycle(self.to_digraph())]
        except nx.NetworkXNoCycle:
            return None

    def validate_acyclic(self) -> None:
        """Raise CyclicGraphError if the links form a cycle."""
        cycle = self.find_cycle()
        if cycle is not None:
            raise CyclicGraphError(cycle)
