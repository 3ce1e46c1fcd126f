"""
Maintenance Routes (Eulerian Paths and Circuits)
================================================
Decides whether a single continuous maintenance pass can cover every
relevant line exactly once, lists the stations it may start from, and
builds the route.

Relevant lines are all lines, or only electrified ones. Two interchangeable
route builders are provided:

- ``FleuryStrategy``: bridge-avoiding walk, O(m^2) because every decision
  may run a bridge test per candidate line
- ``HierholzerStrategy``: stack-based walk, O(n + m)

Both accept the same RelevantSubgraph and validated start and must use every
relevant line exactly once.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple, Type, Union

from ..config import ANALYSIS
from ..errors import EulerianRouteError
from .model import GraphModel

logger = logging.getLogger(__name__)


# ============================================================================
# RELEVANT SUBGRAPH
# ============================================================================
@dataclass(frozen=True)
class RelevantLine:
    """One undirected line of the relevant subgraph."""
    edge_id: str
    u: int
    v: int
    length: float
    electrified: bool

    def other_end(self, node: int) -> int:
        return self.v if node == self.u else self.u


@dataclass
class RelevantSubgraph:
    """
    Lines passing the electrification filter, one entry per undirected line.

    ``incidence`` maps each node to indices into ``lines``; ``degrees`` holds
    the number of relevant line endpoints per node. Nodes without relevant
    lines are absent from both.
    """
    only_electrified: bool
    lines: List[RelevantLine] = field(default_factory=list)
    incidence: Dict[int, List[int]] = field(default_factory=dict)
    degrees: Dict[int, int] = field(default_factory=dict)

    @property
    def line_count(self) -> int:
        return len(self.lines)

    def nodes(self) -> List[int]:
        """Nodes with at least one relevant line, ascending."""
        return sorted(node for node, degree in self.degrees.items() if degree > 0)

    def degree(self, node: int) -> int:
        return self.degrees.get(node, 0)


def build_relevant_subgraph(graph: GraphModel, only_electrified: bool) -> RelevantSubgraph:
    """
    Filter the network down to the lines a maintenance pass must cover.

    Each physical line appears in the GraphModel as two arcs; only the first
    arc seen for a canonical edge id is kept so degrees are not doubled.
    Parallel lines between the same two stations collapse into one.
    """
    subgraph = RelevantSubgraph(only_electrified=only_electrified)
    seen = set()

    for line in graph.iter_arcs():
        if only_electrified and not line.electrified:
            continue
        if line.edge_id in seen:
            continue
        seen.add(line.edge_id)

        index = len(subgraph.lines)
        subgraph.lines.append(
            RelevantLine(line.edge_id, line.from_id, line.to_id, line.length, line.electrified)
        )
        for node in (line.from_id, line.to_id):
            subgraph.incidence.setdefault(node, []).append(index)
            subgraph.degrees[node] = subgraph.degrees.get(node, 0) + 1

    return subgraph


# ============================================================================
# FEASIBILITY
# ============================================================================
class FeasibilityState(str, Enum):
    NO_RELEVANT_EDGES = "no_relevant_edges"
    DISCONNECTED = "disconnected"
    TOO_MANY_ODD_NODES = "too_many_odd_nodes"
    CIRCUIT = "circuit"
    PATH = "path"


@dataclass(frozen=True)
class EulerianInfo:
    """Feasibility of a maintenance pass over a relevant subgraph."""
    state: FeasibilityState
    odd_degree_nodes: Tuple[int, ...]
    valid_starts: Tuple[int, ...]

    @property
    def is_circuit(self) -> bool:
        # With no relevant lines every degree is even, a trivial circuit
        return self.state in (FeasibilityState.CIRCUIT, FeasibilityState.NO_RELEVANT_EDGES)

    @property
    def is_path(self) -> bool:
        return self.state is FeasibilityState.PATH

    @property
    def feasible(self) -> bool:
        return self.is_circuit or self.is_path

    @property
    def connected(self) -> bool:
        return self.state is not FeasibilityState.DISCONNECTED


def is_relevant_subgraph_connected(subgraph: RelevantSubgraph) -> bool:
    """
    Whether every node with a relevant line is reachable from any other.

    Stations without relevant lines are ignored.
    """
    nodes = subgraph.nodes()
    if not nodes:
        return True

    visited = {nodes[0]}
    stack = [nodes[0]]
    while stack:
        u = stack.pop()
        for index in subgraph.incidence[u]:
            v = subgraph.lines[index].other_end(u)
            if v not in visited:
                visited.add(v)
                stack.append(v)

    return len(visited) == len(nodes)


def analyze_eulerian_conditions(subgraph: RelevantSubgraph) -> EulerianInfo:
    """Connectivity first, then degree parity."""
    nodes = subgraph.nodes()
    odd = tuple(node for node in nodes if subgraph.degree(node) % 2 != 0)

    if not nodes:
        state = FeasibilityState.NO_RELEVANT_EDGES
    elif not is_relevant_subgraph_connected(subgraph):
        state = FeasibilityState.DISCONNECTED
    elif not odd:
        state = FeasibilityState.CIRCUIT
    elif len(odd) == 2:
        state = FeasibilityState.PATH
    else:
        state = FeasibilityState.TOO_MANY_ODD_NODES

    if state is FeasibilityState.CIRCUIT:
        valid_starts = tuple(nodes)
    elif state is FeasibilityState.PATH:
        valid_starts = odd
    else:
        valid_starts = ()

    return EulerianInfo(state=state, odd_degree_nodes=odd, valid_starts=valid_starts)


# ============================================================================
# ROUTE STRATEGIES
# ============================================================================
class EulerianStrategy:
    """
    Builds an Eulerian route over a relevant subgraph.

    Subclasses receive a feasible subgraph and a validated start node and
    return the visited node ids. The subgraph itself is never modified; each
    call works on its own used-line flags.
    """
    name = "base"

    def build_route(self, subgraph: RelevantSubgraph, start: int) -> List[int]:
        used = [False] * subgraph.line_count
        route = self._walk(subgraph, start, used)

        unused = used.count(False)
        if unused:
            logger.error(
                "%s route from node %d left %d of %d lines unused",
                self.name, start, unused, subgraph.line_count,
            )
            raise EulerianRouteError(self.name, unused)
        return route

    def _walk(self, subgraph: RelevantSubgraph, start: int, used: List[bool]) -> List[int]:
        raise NotImplementedError


class FleuryStrategy(EulerianStrategy):
    """
    Fleury's algorithm: never cross a bridge while another line is available.

    The walk only moves forward: the route is the sequence of stations
    visited, and it ends at the first station without unused lines. The
    bridge test counts nodes reachable over unused lines before and after
    tentatively removing the candidate, so each decision costs a traversal.
    """
    name = "fleury"

    def _walk(self, subgraph: RelevantSubgraph, start: int, used: List[bool]) -> List[int]:
        route = [start]
        u = start

        while True:
            candidates = [i for i in subgraph.incidence.get(u, []) if not used[i]]
            if not candidates:
                return route

            chosen = candidates[0]
            if len(candidates) > 1:
                for index in candidates:
                    if not self._is_bridge(subgraph, u, index, used):
                        chosen = index
                        break

            used[chosen] = True
            u = subgraph.lines[chosen].other_end(u)
            route.append(u)

    def _is_bridge(self, subgraph: RelevantSubgraph, u: int, index: int, used: List[bool]) -> bool:
        before = self._count_reachable(subgraph, u, used)
        used[index] = True
        try:
            after = self._count_reachable(subgraph, u, used)
        finally:
            used[index] = False
        return after < before

    @staticmethod
    def _count_reachable(subgraph: RelevantSubgraph, start: int, used: List[bool]) -> int:
        visited = {start}
        stack = [start]
        while stack:
            node = stack.pop()
            for index in subgraph.incidence.get(node, []):
                if used[index]:
                    continue
                other = subgraph.lines[index].other_end(node)
                if other not in visited:
                    visited.add(other)
                    stack.append(other)
        return len(visited)


class HierholzerStrategy(EulerianStrategy):
    """
    Hierholzer's algorithm with an explicit stack.

    Follow unused lines until stuck, then unwind onto the route. A feasible
    subgraph cannot strand the walk, so no bridge tests are needed.
    """
    name = "hierholzer"

    def _walk(self, subgraph: RelevantSubgraph, start: int, used: List[bool]) -> List[int]:
        route: List[int] = []
        cursor: Dict[int, int] = {}  # next incidence position to inspect per node
        stack = [start]

        while stack:
            u = stack[-1]
            incident = subgraph.incidence.get(u, [])
            position = cursor.get(u, 0)
            while position < len(incident) and used[incident[position]]:
                position += 1
            cursor[u] = position

            if position == len(incident):
                route.append(stack.pop())
                continue

            index = incident[position]
            used[index] = True
            stack.append(subgraph.lines[index].other_end(u))

        route.reverse()
        return route


STRATEGIES: Dict[str, Type[EulerianStrategy]] = {
    FleuryStrategy.name: FleuryStrategy,
    HierholzerStrategy.name: HierholzerStrategy,
}


def get_strategy(strategy: Union[str, EulerianStrategy, None] = None) -> EulerianStrategy:
    """Resolve a strategy name (or instance) to a strategy; None uses the configured default."""
    if isinstance(strategy, EulerianStrategy):
        return strategy
    name = (strategy or ANALYSIS.default_eulerian_strategy).lower()
    if name not in STRATEGIES:
        raise ValueError(f"Unknown Eulerian strategy {name!r}, expected one of {sorted(STRATEGIES)}")
    return STRATEGIES[name]()


# ============================================================================
# PLANNER
# ============================================================================
class EulerianRouteBuilder:
    """
    Maintenance route planning over a read-only GraphModel.

    Every query builds its own RelevantSubgraph, so calls with different
    electrification filters do not interfere.
    """

    def __init__(self, graph: GraphModel, strategy: Union[str, EulerianStrategy, None] = None):
        self.graph = graph
        self.strategy = get_strategy(strategy)

    def build_relevant_subgraph(self, only_electrified: bool = False) -> RelevantSubgraph:
        return build_relevant_subgraph(self.graph, only_electrified)

    def analyze(self, only_electrified: bool = False) -> EulerianInfo:
        """Feasibility of a maintenance pass over the relevant lines."""
        return analyze_eulerian_conditions(self.build_relevant_subgraph(only_electrified))

    def get_potential_start_stations(self, only_electrified: bool = False) -> List[str]:
        """
        Station names a maintenance route may start from, sorted.

        Any station with relevant lines for a circuit, the two odd-degree
        stations for a path, nothing when no route exists.
        """
        info = self.analyze(only_electrified)
        if not info.feasible:
            logger.info(
                "No maintenance route over %s lines: %s",
                "electrified" if only_electrified else "all",
                info.state.value,
            )
        return sorted(self.graph.name_of(node) for node in info.valid_starts)

    def find_maintenance_route(
        self,
        start_station: str,
        only_electrified: bool = False,
        strategy: Union[str, EulerianStrategy, None] = None
    ) -> List[str]:
        """
        Build a route covering every relevant line exactly once.

        Args:
            start_station: Name of the station to start from
            only_electrified: Cover only electrified lines
            strategy: "fleury", "hierholzer", a strategy instance, or None for
                the builder's strategy

        Returns:
            Station names in travel order, empty if the start is not valid or
            no route exists

        Raises:
            EulerianRouteError: If the traversal leaves lines unused
        """
        start_id = self.graph.resolve(start_station)
        if start_id is None:
            logger.info("Unknown start station %r for maintenance route", start_station)
            return []

        subgraph = self.build_relevant_subgraph(only_electrified)
        info = analyze_eulerian_conditions(subgraph)

        if info.state is FeasibilityState.NO_RELEVANT_EDGES:
            return []
        if not info.feasible:
            logger.info("Maintenance route not possible: %s", info.state.value)
            return []
        if start_id not in info.valid_starts:
            logger.info(
                "Station %s cannot start a maintenance route (%s network)",
                start_station, info.state.value,
            )
            return []

        chosen = self.strategy if strategy is None else get_strategy(strategy)
        route = chosen.build_route(subgraph, start_id)
        logger.debug("%s route over %d lines from %s", chosen.name, subgraph.line_count, start_station)
        return [self.graph.name_of(node) for node in route]
