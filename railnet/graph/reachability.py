"""
Reachability and Connectivity Analysis
======================================
Train-type aware reachability between stations, diagnostics for failed
checks, and whole-network connectivity via transitive closure (Warshall).

Electric trains may only run on electrified lines. Every other train type
(steam, diesel, ...) may use any line.
"""

import logging
from enum import Enum
from typing import Callable, Dict, Iterable, List, Optional, Tuple

import numpy as np
import pandas as pd

from ..config import ELECTRIC_TRAIN_TYPE
from .model import GraphModel, Line, StationType

logger = logging.getLogger(__name__)

LineFilter = Callable[[Line], bool]


class UnreachabilityReason(str, Enum):
    """Why one station cannot be reached from another."""
    SOURCE_NOT_FOUND = "source_not_found"
    DESTINATION_NOT_FOUND = "destination_not_found"
    NO_TOPOLOGICAL_CONNECTION = "no_topological_connection"
    TRAIN_TYPE_OBSTRUCTION = "train_type_obstruction"

    def describe(self, train_type: str = "") -> str:
        """Human-readable message for this reason."""
        if self is UnreachabilityReason.SOURCE_NOT_FOUND:
            return "Source station does not exist."
        if self is UnreachabilityReason.DESTINATION_NOT_FOUND:
            return "Destination station does not exist."
        if self is UnreachabilityReason.NO_TOPOLOGICAL_CONNECTION:
            return "There is no topological connection between the stations."
        return f'There is no path accessible with train type "{train_type}".'


def line_filter_for(train_type: Optional[str]) -> LineFilter:
    """Predicate deciding which lines a train type may use."""
    if train_type is not None and train_type.lower() == ELECTRIC_TRAIN_TYPE:
        return lambda line: line.electrified
    return lambda line: True


class ReachabilityAnalyzer:
    """
    Reachability queries over a read-only GraphModel.

    All traversals use an explicit stack, so deep networks do not hit the
    interpreter recursion limit.
    """

    def __init__(self, graph: GraphModel):
        self.graph = graph

    # ============================================================================
    # PAIRWISE REACHABILITY
    # ============================================================================
    def is_reachable(self, from_station: str, to_station: str, train_type: str) -> bool:
        """
        Check whether a train type can travel between two stations.

        Args:
            from_station: Origin station name
            to_station: Destination station name
            train_type: "steam", "diesel", "electric", ...

        Returns:
            True if a usable path exists, False otherwise (including unknown names)
        """
        from_id = self.graph.resolve(from_station)
        to_id = self.graph.resolve(to_station)
        if from_id is None or to_id is None:
            return False
        return self._reaches(from_id, to_id, line_filter_for(train_type))

    def get_reason_for_unreachability(
        self,
        from_station: str,
        to_station: str,
        train_type: str
    ) -> Optional[UnreachabilityReason]:
        """
        Explain a failed ``is_reachable`` check.

        A second traversal ignoring electrification separates a structural
        disconnection from an obstruction caused only by the train type.

        Returns:
            The reason, or None if the stations are in fact reachable
        """
        from_id = self.graph.resolve(from_station)
        to_id = self.graph.resolve(to_station)
        if from_id is None:
            return UnreachabilityReason.SOURCE_NOT_FOUND
        if to_id is None:
            return UnreachabilityReason.DESTINATION_NOT_FOUND

        if not self._reaches(from_id, to_id, line_filter_for(None)):
            return UnreachabilityReason.NO_TOPOLOGICAL_CONNECTION
        if self._reaches(from_id, to_id, line_filter_for(train_type)):
            return None
        return UnreachabilityReason.TRAIN_TYPE_OBSTRUCTION

    def _reaches(self, start_id: int, target_id: int, usable: LineFilter) -> bool:
        if start_id == target_id:
            return True

        visited = {start_id}
        stack = [start_id]
        while stack:
            current = stack.pop()
            for line in self.graph.neighbors(current):
                if line.to_id in visited or not usable(line):
                    continue
                if line.to_id == target_id:
                    return True
                visited.add(line.to_id)
                stack.append(line.to_id)
        return False

    # ============================================================================
    # STATION SETS
    # ============================================================================
    def check_reachability_between(self, stations: Iterable[str], train_type: str) -> bool:
        """
        Check that every ordered pair in a station set is reachable.

        Stops at the first failing pair.
        """
        names = list(dict.fromkeys(stations))
        for a in names:
            for b in names:
                if a != b and not self.is_reachable(a, b, train_type):
                    logger.info('%s -> %s is not reachable with train type "%s"', a, b, train_type)
                    return False
        return True

    def find_unreachable_pairs(
        self,
        stations: Iterable[str],
        train_type: str
    ) -> List[Tuple[str, str]]:
        """Every ordered pair of the set that is not reachable, sorted by name."""
        names = sorted(set(stations))
        return [
            (a, b)
            for a in names
            for b in names
            if a != b and not self.is_reachable(a, b, train_type)
        ]

    def standard_connectivity_checks(self) -> Dict[str, Optional[bool]]:
        """
        The routine network audit.

        - every station pair by diesel train
        - Stations and Terminals by electric train
        - Terminals only by electric train

        A check whose station group is empty reports None.
        """
        types = self.graph.station_types()
        all_names = list(types)
        stations_and_terminals = [
            name for name, kind in types.items()
            if kind in (StationType.STATION.value, StationType.TERMINAL.value)
        ]
        terminals = [name for name, kind in types.items() if kind == StationType.TERMINAL.value]

        def run(names: List[str], train_type: str) -> Optional[bool]:
            if not names:
                return None
            return self.check_reachability_between(names, train_type)

        return {
            "diesel_all_stations": run(all_names, "diesel"),
            "electric_stations_and_terminals": run(stations_and_terminals, ELECTRIC_TRAIN_TYPE),
            "electric_terminals": run(terminals, ELECTRIC_TRAIN_TYPE),
        }

    # ============================================================================
    # TRANSITIVE CLOSURE
    # ============================================================================
    def _closure(self, train_type: Optional[str] = None) -> np.ndarray:
        """Boolean reachability matrix in station-id order (Warshall)."""
        ids = self.graph.station_ids()
        index = {station_id: i for i, station_id in enumerate(ids)}
        n = len(ids)
        usable = line_filter_for(train_type)

        reach = np.zeros((n, n), dtype=bool)
        for line in self.graph.iter_arcs():
            if usable(line):
                reach[index[line.from_id], index[line.to_id]] = True

        # reach[i][j] |= reach[i][k] & reach[k][j], one intermediate k at a time
        for k in range(n):
            reach |= np.outer(reach[:, k], reach[k, :])
        return reach

    def is_graph_connected_using_transitive_closure(self, train_type: Optional[str] = None) -> bool:
        """
        Whether every station can reach every other station.

        Args:
            train_type: Optional train type restriction; None uses every line

        Returns:
            True if all off-diagonal cells of the closure are set
        """
        reach = self._closure(train_type)
        if reach.size == 0:
            return True
        off_diagonal = ~np.eye(len(reach), dtype=bool)
        return bool(reach[off_diagonal].all())

    def transitive_closure_matrix(self, train_type: Optional[str] = None) -> pd.DataFrame:
        """The closure as a DataFrame indexed by station name (rows and columns)."""
        names = [self.graph.name_of(station_id) for station_id in self.graph.station_ids()]
        return pd.DataFrame(self._closure(train_type), index=names, columns=names)
