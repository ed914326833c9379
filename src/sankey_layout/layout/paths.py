"""Link path geometry: the cubic curve a renderer draws for each link.

The helpers only read ``x``, ``y``, ``width`` from the endpoint nodes and
``thickness`` plus the two offsets from the link, so they work on both the
live ``Node``/``Link`` records and the ``LayoutNode``/``LayoutLink`` results.
"""

from __future__ import annotations

from typing import Protocol

from sankey_layout.ir.graph import Link

DEFAULT_CURVATURE: float = 0.5


class _Box(Protocol):
    x: float
    y: float
    width: float


class _Band(Protocol):
    thickness: float
    source_offset: float
    target_offset: float


def _interpolate(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def _fmt(value: float) -> str:
    # Integral floats print without a trailing ".0".
    return str(int(value)) if float(value).is_integer() else repr(float(value))


def band_endpoints(source: _Box, target: _Box, link: _Band) -> tuple[tuple[float, float], tuple[float, float]]:
    """Return the points where a link leaves its source and enters its target.

    The y coordinates sit at the middle of the link's band at each end.
    """
    x0 = source.x + source.width
    x1 = target.x
    y0 = source.y + link.source_offset + link.thickness / 2
    y1 = target.y + link.target_offset + link.thickness / 2
    return (x0, y0), (x1, y1)


def band_path(source: _Box, target: _Box, link: _Band, curvature: float = DEFAULT_CURVATURE) -> str:
    """Return an SVG path ``d`` string for a horizontal cubic Bezier band."""
    (x0, y0), (x1, y1) = band_endpoints(source, target, link)
    x2 = _interpolate(x0, x1, curvature)
    x3 = _interpolate(x0, x1, 1 - curvature)
    return f"M{_fmt(x0)},{_fmt(y0)}C{_fmt(x2)},{_fmt(y0)} {_fmt(x3)},{_fmt(y1)} {_fmt(x1)},{_fmt(y1)}"


def link_endpoints(link: Link) -> tuple[tuple[float, float], tuple[float, float]]:
    return band_endpoints(link.source, link.target, link)


def link_path(link: Link, curvature: float = DEFAULT_CURVATURE) -> str:
    return band_path(link.source, link.target, link, curvature)
