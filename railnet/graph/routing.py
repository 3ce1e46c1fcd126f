"""
Routing and Shortest Paths
==========================
Dijkstra shortest paths between stations, routes through ordered stops,
and per-route metrics.
"""

import heapq
import logging
import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from .model import GraphModel, Line

logger = logging.getLogger(__name__)


@dataclass
class PathResult:
    """Outcome of a shortest-path query. ``distance`` is -1 when not feasible."""
    path: List[str] = field(default_factory=list)
    distance: float = -1.0
    feasible: bool = False

    @classmethod
    def infeasible(cls) -> "PathResult":
        return cls(path=[], distance=-1.0, feasible=False)


@dataclass
class RouteMetrics:
    """Metrics for an evaluated route."""
    path: List[str]
    total_km: float
    electrified_km: float
    non_electrified_km: float
    num_segments: int


class ShortestPathEngine:
    """
    Shortest-path queries over a read-only GraphModel.

    Line lengths are the edge weights. Unknown stations and disconnected
    pairs produce an infeasible PathResult instead of an exception.
    """

    def __init__(self, graph: GraphModel):
        self.graph = graph

    def find_shortest_path(self, start: str, end: str) -> PathResult:
        """
        Dijkstra with lazy deletion between two named stations.

        Args:
            start: Name of the starting station
            end: Name of the destination station

        Returns:
            PathResult with the station names along the path and its length
        """
        start_id = self.graph.resolve(start)
        end_id = self.graph.resolve(end)
        if start_id is None or end_id is None:
            logger.debug("Unknown station in shortest path query: %r -> %r", start, end)
            return PathResult.infeasible()

        distances: Dict[int, float] = {sid: math.inf for sid in self.graph.station_ids()}
        predecessors: Dict[int, int] = {}
        distances[start_id] = 0.0
        queue = [(0.0, start_id)]

        while queue:
            dist_u, u = heapq.heappop(queue)

            # Stale entry, a shorter distance was recorded after it was pushed
            if dist_u > distances[u]:
                continue

            # Weights are non-negative, so the target is final once popped
            if u == end_id:
                break

            for line in self.graph.neighbors(u):
                candidate = dist_u + line.length
                if candidate < distances[line.to_id]:
                    distances[line.to_id] = candidate
                    predecessors[line.to_id] = u
                    heapq.heappush(queue, (candidate, line.to_id))

        if math.isinf(distances[end_id]):
            logger.debug("No path from %s to %s", start, end)
            return PathResult.infeasible()

        path: List[str] = []
        current: Optional[int] = end_id
        while current is not None:
            path.append(self.graph.name_of(current))
            current = predecessors.get(current)
        path.reverse()

        if not path or path[0] != start:
            logger.warning("Reconstructed path for %s -> %s does not start at %s", start, end, start)
            return PathResult.infeasible()

        return PathResult(path=path, distance=distances[end_id], feasible=True)

    def find_shortest_route_through_ordered_stations(self, stops: Sequence[str]) -> PathResult:
        """
        Shortest route visiting the stops in the given order.

        Each consecutive pair is solved independently and the segments are
        joined at their shared station. If any segment is infeasible the whole
        route is infeasible.

        Args:
            stops: At least two station names

        Returns:
            PathResult covering the whole route
        """
        if stops is None or len(stops) < 2:
            logger.debug("At least two stations are required to find a route")
            return PathResult.infeasible()

        total_path: List[str] = []
        total_distance = 0.0

        for i in range(len(stops) - 1):
            segment = self.find_shortest_path(stops[i], stops[i + 1])
            if not segment.feasible:
                logger.info("No path found from '%s' to '%s'", stops[i], stops[i + 1])
                return PathResult.infeasible()

            total_distance += segment.distance
            # Skip the junction station already added by the previous segment
            total_path.extend(segment.path if i == 0 else segment.path[1:])

        return PathResult(path=total_path, distance=total_distance, feasible=True)

    def calculate_route_metrics(self, path: Sequence[str]) -> RouteMetrics:
        """
        Calculate distance totals for a path of station names.

        Between parallel lines the shortest one is assumed, matching what
        the shortest-path search would take.

        Args:
            path: Station names in travel order

        Returns:
            RouteMetrics object

        Raises:
            ValueError: If a station is unknown or two consecutive stations
                are not directly connected
        """
        path = list(path)
        if len(path) < 2:
            return RouteMetrics(
                path=path,
                total_km=0.0,
                electrified_km=0.0,
                non_electrified_km=0.0,
                num_segments=0,
            )

        total = 0.0
        electrified = 0.0
        non_electrified = 0.0

        for a, b in zip(path, path[1:]):
            line = self._shortest_direct_line(a, b)
            total += line.length
            if line.electrified:
                electrified += line.length
            else:
                non_electrified += line.length

        return RouteMetrics(
            path=path,
            total_km=total,
            electrified_km=electrified,
            non_electrified_km=non_electrified,
            num_segments=len(path) - 1,
        )

    def _shortest_direct_line(self, a: str, b: str) -> Line:
        a_id = self.graph.resolve(a)
        b_id = self.graph.resolve(b)
        if a_id is None or b_id is None:
            raise ValueError(f"Unknown station in route: {a if a_id is None else b}")

        candidates = [line for line in self.graph.neighbors(a_id) if line.to_id == b_id]
        if not candidates:
            raise ValueError(f"No line between {a} and {b}")
        return min(candidates, key=lambda line: line.length)
