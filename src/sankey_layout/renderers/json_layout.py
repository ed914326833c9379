"""JSON layout renderer: serialises node and link geometry for a drawing layer."""

from __future__ import annotations

import json
from dataclasses import asdict

from sankey_layout.layout.paths import DEFAULT_CURVATURE, band_path
from sankey_layout.layout.types import LayoutResult


class JsonRenderer:
    """Render a LayoutResult as a JSON document.

    With ``paths`` enabled every link also carries the SVG path of its curve.
    """

    def __init__(self, paths: bool = False, curvature: float = DEFAULT_CURVATURE, indent: int | None = 2) -> None:
        self.paths = paths
        self.curvature = curvature
        self.indent = indent

    def to_dict(self, result: LayoutResult) -> dict:
        by_id = {node.id: node for node in result.nodes}
        links: list[dict] = []
        for link in result.links:
            entry = asdict(link)
            if self.paths:
                entry["path"] = band_path(by_id[link.source], by_id[link.target], link, self.curvature)
            links.append(entry)
        return {
            "size": list(result.size),
            "nodes": [asdict(node) for node in result.nodes],
            "links": links,
        }

    def render(self, result: LayoutResult) -> str:
        return json.dumps(self.to_dict(result), indent=self.indent) + "\n"
