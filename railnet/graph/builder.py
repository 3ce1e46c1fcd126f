"""
Graph Builder for the Railway Network
=====================================
Populates a GraphModel from station names and line records.
"""

import logging
from typing import Dict, Iterable, Tuple

import networkx as nx

from ..errors import GraphIntegrityError
from .model import GraphModel, Line, Station, StationType

logger = logging.getLogger(__name__)

LineRecord = Tuple[str, str, float, bool]  # (from, to, length_km, electrified)


class NetworkBuilder:
    """
    Incremental builder for a GraphModel.

    Stations receive sequential ids (starting at 1) on first encounter, and
    their type is fixed at that moment from the naming convention.
    """

    def __init__(self) -> None:
        self._graph = nx.MultiDiGraph()
        self._stations: Dict[int, Station] = {}
        self._name_to_id: Dict[str, int] = {}
        self._next_id = 1

    def add_station(self, name: str) -> Station:
        """Get or create the station with this name."""
        name = name.strip()
        if not name:
            raise GraphIntegrityError("Station name must not be empty")

        station_id = self._name_to_id.get(name)
        if station_id is not None:
            return self._stations[station_id]

        station = Station(id=self._next_id, name=name, type=StationType.from_name(name))
        self._next_id += 1
        self._stations[station.id] = station
        self._name_to_id[name] = station.id
        self._graph.add_node(station.id)
        return station

    def add_line(
        self,
        from_name: str,
        to_name: str,
        length: float,
        electrified: bool = False
    ) -> Line:
        """
        Add a physical line, stored as two mirrored arcs.

        Args:
            from_name: First endpoint (created if unknown)
            to_name: Second endpoint (created if unknown)
            length: Line length in km, must be positive
            electrified: Whether electric trains may use the line

        Returns:
            The from->to arc
        """
        # Both checks run before any endpoint is registered; NaN fails the comparison
        if not length > 0:
            raise GraphIntegrityError(
                f"Line {from_name} - {to_name} must have a positive length, got {length}"
            )
        if from_name.strip() == to_name.strip():
            raise GraphIntegrityError(f"Line from {from_name} to itself is not allowed")

        u = self.add_station(from_name).id
        v = self.add_station(to_name).id

        line = Line(u, v, float(length), bool(electrified))
        self._graph.add_edge(u, v, line=line)
        self._graph.add_edge(v, u, line=line.reversed())
        return line

    def build(self) -> GraphModel:
        """Freeze the collected stations and lines into a validated GraphModel."""
        model = GraphModel(self._graph.copy(), self._stations)
        model.validate()
        logger.info(
            "Graph built: %d stations, %d lines",
            len(model),
            self._graph.number_of_edges() // 2,
        )
        return model


def build_network_graph(
    stations: Iterable[str] = (),
    lines: Iterable[LineRecord] = ()
) -> GraphModel:
    """
    Build a GraphModel in one call.

    Args:
        stations: Station names, registered first and in order
        lines: (from, to, length_km, electrified) records

    Returns:
        Validated GraphModel
    """
    builder = NetworkBuilder()
    for name in stations:
        builder.add_station(name)
    for from_name, to_name, length, electrified in lines:
        builder.add_line(from_name, to_name, length, electrified)
    return builder.build()
