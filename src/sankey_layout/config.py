"""Centralized configuration for sankey-layout."""

from __future__ import annotations

from dataclasses import dataclass

MODES: tuple[str, ...] = ("basic", "optimized")


@dataclass
class LayoutConfig:
    """Configuration for the layout pipeline."""

    width: float = 960
    height: float = 500
    node_width: float = 24
    node_padding: float = 8
    iterations: int = 32
    mode: str = "basic"

    def __post_init__(self) -> None:
        for name in ("width", "height", "node_width", "node_padding"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative, got {getattr(self, name)}")
        if self.width < self.node_width:
            raise ValueError(f"width {self.width} must be at least node_width {self.node_width}")
        if self.iterations < 0:
            raise ValueError(f"iterations must be non-negative, got {self.iterations}")
        if self.mode not in MODES:
            raise ValueError(f"Unknown layout mode '{self.mode}'; use {', '.join(MODES)}")

    @property
    def size(self) -> tuple[float, float]:
        return (self.width, self.height)
