"""
Railway network analysis: shortest routes, train-type reachability,
network connectivity, and maintenance routes covering every line once.
"""

from .errors import EulerianRouteError, GraphIntegrityError, RailNetworkError
from .graph import (
    EulerianInfo,
    EulerianRouteBuilder,
    FeasibilityState,
    FleuryStrategy,
    GraphModel,
    HierholzerStrategy,
    Line,
    NetworkBuilder,
    PathResult,
    ReachabilityAnalyzer,
    RouteMetrics,
    ShortestPathEngine,
    Station,
    StationType,
    UnreachabilityReason,
    build_network_graph,
)

__version__ = "0.1.0"
