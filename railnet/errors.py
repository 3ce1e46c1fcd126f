"""
Exceptions for invariant violations.

Expected negative outcomes (no path, unreachable, no maintenance route) are
returned as values. Only broken graphs and internal inconsistencies raise.
"""


class RailNetworkError(Exception):
    """Base class for railnet errors."""


class GraphIntegrityError(RailNetworkError):
    """The graph violates a structural invariant (e.g. a missing mirror arc)."""


class EulerianRouteError(RailNetworkError):
    """A maintenance traversal left relevant lines unused after passing feasibility."""

    def __init__(self, strategy: str, unused_lines: int):
        self.strategy = strategy
        self.unused_lines = unused_lines
        super().__init__(
            f"{strategy} traversal finished with {unused_lines} unused line(s); "
            "the relevant subgraph is inconsistent with its feasibility analysis"
        )
