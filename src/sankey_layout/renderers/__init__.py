"""Output renderers for computed layouts."""

from sankey_layout.renderers.base import Renderer
from sankey_layout.renderers.json_layout import JsonRenderer

__all__ = ["JsonRenderer", "Renderer"]
