"""Tests for sankey_layout.ir.graph — endpoint resolution, adjacency lists and cycle detection."""

import pytest

from sankey_layout.errors import CyclicGraphError, LinkReferenceError, SankeyError
from sankey_layout.ir.graph import (
    ByIndex,
    ByReference,
    Link,
    LinkSpec,
    Node,
    SankeyGraph,
    as_endpoint,
    compute_node_links,
)


def _nodes(*ids: str) -> list[Node]:
    return [Node(id=node_id) for node_id in ids]


class TestEndpoints:
    def test_int_becomes_index(self):
        assert as_endpoint(3) == ByIndex(3)

    def test_str_becomes_reference(self):
        assert as_endpoint("a") == ByReference("a")

    def test_node_becomes_reference(self):
        assert as_endpoint(Node(id="x")) == ByReference("x")

    def test_endpoint_passes_through(self):
        endpoint = ByIndex(0)
        assert as_endpoint(endpoint) is endpoint

    def test_bool_rejected(self):
        with pytest.raises(LinkReferenceError):
            as_endpoint(True)

    def test_float_rejected(self):
        with pytest.raises(LinkReferenceError):
            as_endpoint(1.5)


class TestComputeNodeLinks:
    def test_index_endpoints_resolve_to_nodes(self):
        nodes = _nodes("a", "b")
        links = compute_node_links(nodes, [LinkSpec(ByIndex(0), ByIndex(1), 4)])
        assert links[0].source is nodes[0]
        assert links[0].target is nodes[1]
        assert links[0].value == 4.0

    def test_reference_endpoints_resolve_to_nodes(self):
        nodes = _nodes("a", "b")
        links = compute_node_links(nodes, [LinkSpec(ByReference("b"), ByReference("a"), 1)])
        assert links[0].source is nodes[1]
        assert links[0].target is nodes[0]

    def test_adjacency_preserves_input_order(self):
        """Links are appended to each node's lists in link-collection order."""
        a, b, c = _nodes("a", "b", "c")
        links = compute_node_links(
            [a, b, c],
            [LinkSpec(ByIndex(0), ByIndex(2), 1), LinkSpec(ByIndex(0), ByIndex(1), 2), LinkSpec(ByIndex(1), ByIndex(2), 3)],
        )
        assert a.source_links == [links[0], links[1]]
        assert c.target_links == [links[0], links[2]]
        assert b.source_links == [links[2]]
        assert b.target_links == [links[1]]
        assert a.target_links == []
        assert c.source_links == []

    def test_out_of_range_index(self):
        with pytest.raises(LinkReferenceError, match="out of range"):
            compute_node_links(_nodes("a"), [LinkSpec(ByIndex(0), ByIndex(5), 1)])

    def test_negative_index(self):
        with pytest.raises(LinkReferenceError):
            compute_node_links(_nodes("a", "b"), [LinkSpec(ByIndex(-1), ByIndex(0), 1)])

    def test_unknown_id(self):
        with pytest.raises(LinkReferenceError, match="unknown node id 'zz'"):
            compute_node_links(_nodes("a"), [LinkSpec(ByReference("a"), ByReference("zz"), 1)])

    def test_failure_leaves_nodes_untouched(self):
        """A bad reference aborts before any adjacency list is rebuilt."""
        nodes = _nodes("a", "b")
        links = compute_node_links(nodes, [LinkSpec(ByIndex(0), ByIndex(1), 1)])
        with pytest.raises(LinkReferenceError):
            compute_node_links(nodes, [LinkSpec(ByIndex(0), ByIndex(9), 1)])
        assert nodes[0].source_links == links

    def test_negative_value_rejected(self):
        with pytest.raises(SankeyError, match="non-negative"):
            compute_node_links(_nodes("a", "b"), [LinkSpec(ByIndex(0), ByIndex(1), -2)])

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_value_rejected(self, value):
        with pytest.raises(SankeyError, match="finite"):
            compute_node_links(_nodes("a", "b"), [LinkSpec(ByIndex(0), ByIndex(1), value)])

    def test_non_finite_value_rejected_on_resolved_link(self):
        a, b = _nodes("a", "b")
        with pytest.raises(SankeyError, match="finite"):
            compute_node_links([a, b], [Link(source=a, target=b, value=float("inf"))])

    def test_rerun_on_resolved_links_is_noop(self):
        nodes = _nodes("a", "b", "c")
        first = compute_node_links(nodes, [LinkSpec(ByIndex(0), ByIndex(1), 1), LinkSpec(ByIndex(1), ByIndex(2), 1)])
        second = compute_node_links(nodes, first)
        assert second == first
        assert all(x is y for x, y in zip(first, second))
        assert nodes[1].target_links == [first[0]]
        assert nodes[1].source_links == [first[1]]

    def test_resolved_link_from_foreign_graph_rejected(self):
        stranger = Node(id="a")
        link = Link(source=stranger, target=stranger, value=1)
        with pytest.raises(LinkReferenceError, match="not part of this graph"):
            compute_node_links(_nodes("a"), [link])


class TestSankeyGraphFromRecords:
    def test_mapping_records(self):
        graph = SankeyGraph.from_records(
            [{"name": "x"}, {"name": "y"}],
            [{"source": 0, "target": 1, "value": 10}],
        )
        assert graph.node_count() == 2
        assert graph.link_count() == 1
        assert graph.node("x").source_links[0].target is graph.node("y")

    def test_id_defaults_to_position(self):
        graph = SankeyGraph.from_records([{}, {}], [(0, 1, 1)])
        assert [n.id for n in graph.nodes] == ["0", "1"]

    def test_explicit_id_and_name(self):
        graph = SankeyGraph.from_records([{"id": "n1", "name": "Coal"}], [])
        assert graph.node("n1").name == "Coal"

    def test_string_records_and_tuple_links(self):
        graph = SankeyGraph.from_records(["a", "b"], [("a", "b", 2.5)])
        assert graph.links[0].value == 2.5

    def test_copies_caller_nodes(self):
        """The graph owns fresh records; caller Node objects are never mutated."""
        mine = Node(id="a")
        graph = SankeyGraph.from_records([mine, "b"], [("a", "b", 1)])
        assert graph.node("a") is not mine
        assert mine.source_links == []

    @pytest.mark.parametrize("node_id", [None, 10])
    def test_non_string_id_rejected(self, node_id):
        """Integer endpoints are indices, so an integer id could never be linked to."""
        with pytest.raises(SankeyError, match="node id must be a string"):
            SankeyGraph.from_records([{"id": node_id}, "b"], [])

    def test_non_string_name_cannot_stand_in_for_id(self):
        with pytest.raises(SankeyError, match="node id must be a string"):
            SankeyGraph.from_records([{"name": 7}], [])

    def test_infinite_tuple_link_rejected(self):
        with pytest.raises(SankeyError, match="finite"):
            SankeyGraph.from_records(["a", "b", "c", "d"], [("a", "b", float("inf")), ("c", "d", 1)])

    def test_duplicate_ids_rejected(self):
        with pytest.raises(SankeyError, match="Duplicate node id 'a'"):
            SankeyGraph.from_records(["a", "a"], [])

    def test_missing_link_field(self):
        with pytest.raises(SankeyError, match="missing field 'target'"):
            SankeyGraph.from_records(["a"], [{"source": 0}])

    def test_unknown_node_lookup(self):
        graph = SankeyGraph.from_records(["a"], [])
        with pytest.raises(KeyError):
            graph.node("b")

    def test_degrees(self):
        graph = SankeyGraph.from_records(["a", "b", "c"], [("a", "c", 1), ("b", "c", 1)])
        assert graph.in_degree("c") == 2
        assert graph.out_degree("a") == 1
        assert graph.out_degree("c") == 0
        assert graph.in_degree("missing") == 0


class TestDigraphView:
    def test_parallel_links_merge_weights(self):
        graph = SankeyGraph.from_records(["a", "b"], [("a", "b", 1), ("a", "b", 2)])
        digraph = graph.to_digraph()
        assert digraph.number_of_edges() == 1
        assert digraph["a"]["b"]["weight"] == 3

    def test_dag(self):
        graph = SankeyGraph.from_records(["a", "b", "c"], [("a", "b", 1), ("b", "c", 1)])
        assert graph.is_dag()
        assert graph.find_cycle() is None
        graph.validate_acyclic()

    def test_empty_graph_is_acyclic(self):
        graph = SankeyGraph.from_records([], [])
        assert graph.find_cycle() is None

    def test_two_cycle_detected(self):
        graph = SankeyGraph.from_records(["a", "b"], [("a", "b", 1), ("b", "a", 1)])
        assert not graph.is_dag()
        with pytest.raises(CyclicGraphError) as info:
            graph.validate_acyclic()
        assert len(info.value.cycle) == 2
        assert "cycle" in str(info.value)

    def test_self_loop_detected(self):
        graph = SankeyGraph.from_records(["a"], [("a", "a", 1)])
        with pytest.raises(CyclicGraphError):
            graph.validate_acyclic()
