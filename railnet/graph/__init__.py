# Graph model, construction, and analysis modules
from .model import (
    GraphModel,
    Line,
    Station,
    StationType,
    canonical_edge_id,
)
from .builder import (
    NetworkBuilder,
    build_network_graph,
)
from .routing import (
    PathResult,
    RouteMetrics,
    ShortestPathEngine,
)
from .reachability import (
    ReachabilityAnalyzer,
    UnreachabilityReason,
)
from .eulerian import (
    EulerianInfo,
    EulerianRouteBuilder,
    FeasibilityState,
    FleuryStrategy,
    HierholzerStrategy,
    RelevantSubgraph,
)
