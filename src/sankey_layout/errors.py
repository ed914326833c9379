"""Exception hierarchy for sankey-layout.

All errors derive from ``ValueError`` so callers that only care about
"bad input" can catch that.
"""

from __future__ import annotations


class SankeyError(ValueError):
    """Base class for every error raised by sankey-layout."""


class LinkReferenceError(SankeyError):
    """A link endpoint does not resolve to a node of the graph."""


class DegenerateScaleError(SankeyError):
    """The value-to-pixel scale cannot be computed for the given canvas."""


class CyclicGraphError(SankeyError):
    """The link graph contains a cycle."""

    def __init__(self, cycle: list[tuple[str, str]]) -> None:
        self.cycle = cycle
        if not cycle:
            super().__init__("link graph contains a cycle")
            return
        path = " -> ".join([cycle[0][0], *(tgt for _, tgt in cycle)])
        super().__init__(f"link graph contains a cycle: {path}")


class GraphParseError(SankeyError):
    """The input document is not a valid graph description."""
