"""Tests for sankey_layout.parsers — JSON documents into SankeyGraph."""

import pytest

from sankey_layout.errors import GraphParseError, LinkReferenceError
from sankey_layout.parsers import JsonGraphParser, parse


class TestJsonGraphParser:
    def test_index_links(self):
        graph = parse('{"nodes": [{"name": "a"}, {"name": "b"}], "links": [{"source": 0, "target": 1, "value": 3}]}')
        assert [n.id for n in graph.nodes] == ["a", "b"]
        assert graph.links[0].source is graph.node("a")
        assert graph.links[0].value == 3

    def test_id_links(self):
        graph = parse(
            '{"nodes": [{"id": "n1", "name": "Coal"}, "n2"], "links": [{"source": "n1", "target": "n2", "value": 1.5}]}'
        )
        assert graph.node("n1").name == "Coal"
        assert graph.node("n2").target_links[0].value == 1.5

    def test_nodes_without_id_or_name_use_position(self):
        graph = parse('{"nodes": [{}, {}], "links": [{"source": 0, "target": 1, "value": 1}]}')
        assert [n.id for n in graph.nodes] == ["0", "1"]

    def test_missing_sections_give_empty_graph(self):
        graph = parse("{}")
        assert graph.node_count() == 0
        assert graph.link_count() == 0

    def test_invalid_json(self):
        with pytest.raises(GraphParseError, match="invalid JSON"):
            parse("{nodes: []}")

    def test_document_must_be_object(self):
        with pytest.raises(GraphParseError, match="JSON object"):
            parse("[1, 2]")

    def test_nodes_must_be_list(self):
        with pytest.raises(GraphParseError, match="'nodes' must be a list"):
            parse('{"nodes": {}}')

    def test_link_missing_target(self):
        with pytest.raises(GraphParseError, match="missing 'target'"):
            parse('{"nodes": ["a"], "links": [{"source": 0, "value": 1}]}')

    def test_negative_value(self):
        with pytest.raises(GraphParseError, match="non-negative"):
            parse('{"nodes": ["a", "b"], "links": [{"source": 0, "target": 1, "value": -1}]}')

    def test_non_numeric_value(self):
        with pytest.raises(GraphParseError, match="must be a number"):
            parse('{"nodes": ["a", "b"], "links": [{"source": 0, "target": 1, "value": "5"}]}')

    @pytest.mark.parametrize("node", ['{"id": null}', '{"id": 10}', '{"name": 3}'])
    def test_non_string_node_id(self, node):
        with pytest.raises(GraphParseError, match="must be a string"):
            parse(f'{{"nodes": [{node}, "b"], "links": []}}')

    def test_bad_endpoint_type(self):
        with pytest.raises(GraphParseError, match="endpoint"):
            parse('{"nodes": ["a", "b"], "links": [{"source": 0.5, "target": 1, "value": 1}]}')

    def test_unresolved_reference(self):
        with pytest.raises(LinkReferenceError):
            parse('{"nodes": ["a"], "links": [{"source": 0, "target": 7, "value": 1}]}')

    def test_unknown_format(self):
        with pytest.raises(ValueError, match="Unsupported input format"):
            parse("{}", fmt="csv")

    def test_parse_document(self):
        graph = JsonGraphParser().parse_document({"nodes": ["a", "b"], "links": [{"source": "a", "target": "b"}]})
        assert graph.links[0].value == 0
