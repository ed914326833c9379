"""Base renderer protocol."""

from __future__ import annotations

from typing import Protocol

from sankey_layout.layout.types import LayoutResult


class Renderer(Protocol):
    """Protocol that all renderers must implement."""

    def render(self, result: LayoutResult) -> str:
        """Render a computed layout to an output string."""
        ...
