"""JSON graph parser.

Accepts the document shape d3-style sankey charts are fed with::

    {"nodes": [{"name": "a"}, ...],
     "links": [{"source": 0, "target": 1, "value": 5}, ...]}

Endpoints may be node indices or node ids. A node's id defaults to its
``name``, then to its position in the list.
"""

from __future__ import annotations

import json
import math
from collections.abc import Mapping

from sankey_layout.errors import GraphParseError, SankeyError
from sankey_layout.ir.graph import SankeyGraph


def _check_number(value: object, where: str) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise GraphParseError(f"{where}: value must be a number, got {value!r}")
    if not math.isfinite(value) or value < 0:
        raise GraphParseError(f"{where}: value must be a finite non-negative number, got {value!r}")


def _check_endpoint(value: object, where: str) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise GraphParseError(f"{where}: endpoint must be a node index or id, got {value!r}")


class JsonGraphParser:
    """Parse a JSON node/link document into a SankeyGraph."""

    def parse(self, src: str) -> SankeyGraph:
        try:
            doc = json.loads(src)
        except json.JSONDecodeError as e:
            raise GraphParseError(f"invalid JSON at line {e.lineno}, column {e.colno}: {e.msg}") from e
        return self.parse_document(doc)

    def parse_document(self, doc: object) -> SankeyGraph:
        if not isinstance(doc, Mapping):
            raise GraphParseError("graph document must be a JSON object")
        nodes = doc.get("nodes", [])
        links = doc.get("links", [])
        if not isinstance(nodes, list):
            raise GraphParseError("'nodes' must be a list")
        if not isinstance(links, list):
            raise GraphParseError("'links' must be a list")

        for i, node in enumerate(nodes):
            if isinstance(node, str):
                continue
            if not isinstance(node, Mapping):
                raise GraphParseError(f"node {i}: expected an object or a string, got {node!r}")
            for key in ("id", "name"):
                if key in node and not isinstance(node[key], str):
                    raise GraphParseError(f"node {i}: '{key}' must be a string, got {node[key]!r}")
            if "value" in node:
                _check_number(node["value"], f"node {i}")

        for i, link in enumerate(links):
            if not isinstance(link, Mapping):
                raise GraphParseError(f"link {i}: expected an object, got {link!r}")
            for key in ("source", "target"):
                if key not in link:
                    raise GraphParseError(f"link {i}: missing '{key}'")
                _check_endpoint(link[key], f"link {i} {key}")
            _check_number(link.get("value", 0), f"link {i}")

        try:
            return SankeyGraph.from_records(nodes, links)
        except SankeyError:
            raise
        except (TypeError, ValueError) as e:
            raise GraphParseError(str(e)) from e
