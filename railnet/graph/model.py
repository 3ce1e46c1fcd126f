"""
Railway Network Graph Model
===========================
Read-only in-memory representation of stations and lines.

Every physical line is stored as two directed arcs (from->to and to->from)
with identical length and electrification, held in a NetworkX MultiDiGraph.
Both arcs share one canonical undirected identity, see ``canonical_edge_id``.
"""

from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, Iterator, List, Optional, Tuple

import networkx as nx

from ..config import STATION_TYPE_PREFIXES, UNKNOWN_STATION_TYPE
from ..errors import GraphIntegrityError


class StationType(str, Enum):
    """Station classification derived from the naming convention."""
    DEPOT = "Depot"
    STATION = "Station"
    TERMINAL = "Terminal"
    UNKNOWN = UNKNOWN_STATION_TYPE

    @classmethod
    def from_name(cls, name: str) -> "StationType":
        """Classify a station by the first character of its name."""
        if not name:
            return cls.UNKNOWN
        return cls(STATION_TYPE_PREFIXES.get(name[0], UNKNOWN_STATION_TYPE))


@dataclass(frozen=True)
class Station:
    """A station (graph node)."""
    id: int
    name: str
    type: StationType


def canonical_edge_id(u: int, v: int) -> str:
    """Undirected identity shared by the two arcs of one line."""
    return f"{min(u, v)}-{max(u, v)}"


@dataclass(frozen=True)
class Line:
    """One directed arc of a railway line."""
    from_id: int
    to_id: int
    length: float          # km, always positive
    electrified: bool

    @property
    def edge_id(self) -> str:
        return canonical_edge_id(self.from_id, self.to_id)

    def reversed(self) -> "Line":
        """The mirror arc."""
        return Line(self.to_id, self.from_id, self.length, self.electrified)


class GraphModel:
    """
    Stations plus paired-arc adjacency of a railway network.

    Built once (see ``railnet.graph.builder.NetworkBuilder``) and never
    mutated afterwards, so any number of queries may share one instance.
    Name resolution is O(1) and neighbor iteration O(degree).
    """

    def __init__(self, graph: nx.MultiDiGraph, stations: Dict[int, Station]):
        """
        Args:
            graph: Directed multigraph whose edges carry a ``line`` attribute
            stations: Station records keyed by id
        """
        self._graph = graph
        self._stations: Dict[int, Station] = dict(sorted(stations.items()))
        self._name_to_id: Dict[str, int] = {s.name: s.id for s in self._stations.values()}

        self._adjacency: Dict[int, Tuple[Line, ...]] = {}
        for station_id in self._stations:
            if station_id in graph:
                lines = tuple(data["line"] for _, _, data in graph.out_edges(station_id, data=True))
            else:
                lines = ()
            self._adjacency[station_id] = lines

    # ------------------------------------------------------------------ lookups
    def resolve(self, name: str) -> Optional[int]:
        """Station id for a name, or None if the name is unknown."""
        return self._name_to_id.get(name)

    def neighbors(self, station_id: int) -> Tuple[Line, ...]:
        """Outgoing arcs of a station, in insertion order."""
        return self._adjacency.get(station_id, ())

    def all_stations(self) -> FrozenSet[Station]:
        return frozenset(self._stations.values())

    def station(self, station_id: int) -> Station:
        return self._stations[station_id]

    def name_of(self, station_id: int) -> str:
        station = self._stations.get(station_id)
        return station.name if station else f"ID_{station_id}"

    def station_ids(self) -> List[int]:
        """Station ids in ascending (first-encounter) order."""
        return list(self._stations)

    def __len__(self) -> int:
        return len(self._stations)

    def __contains__(self, name: object) -> bool:
        return name in self._name_to_id

    def __repr__(self) -> str:
        return f"GraphModel(stations={len(self)}, lines={self._graph.number_of_edges() // 2})"

    # --------------------------------------------------------------- summaries
    def is_station_of_type(self, name: str, station_type: str) -> bool:
        """Whether a named station has the given type (case-insensitive)."""
        station_id = self.resolve(name)
        if station_id is None:
            return False
        return self._stations[station_id].type.value.lower() == str(station_type).lower()

    def station_types(self) -> Dict[str, str]:
        """Mapping of station name to type name, sorted by station name."""
        return {
            name: self._stations[station_id].type.value
            for name, station_id in sorted(self._name_to_id.items())
        }

    def iter_arcs(self) -> Iterator[Line]:
        for station_id in self._stations:
            yield from self._adjacency[station_id]

    def unique_lines(self) -> List[Line]:
        """
        One arc per canonical undirected identity.

        Parallel lines between the same pair collapse into one entry, an
        electrified instance winning over a non-electrified one.
        """
        by_id: Dict[str, Line] = {}
        for line in self.iter_arcs():
            existing = by_id.get(line.edge_id)
            if existing is None or (line.electrified and not existing.electrified):
                by_id[line.edge_id] = line
        return list(by_id.values())

    def to_networkx(self) -> nx.MultiGraph:
        """Undirected copy with one edge per physical line, for external consumers."""
        G = nx.MultiGraph()
        for station in self._stations.values():
            G.add_node(station.id, name=station.name, station_type=station.type.value)
        for u, v, line in self._graph.edges(data="line"):
            # Each physical line has exactly one arc with from_id < to_id
            if u < v:
                G.add_edge(
                    line.from_id,
                    line.to_id,
                    length=line.length,
                    electrified=line.electrified,
                )
        return G

    # --------------------------------------------------------------- integrity
    def validate(self) -> None:
        """
        Check the paired-arc invariant.

        Raises:
            GraphIntegrityError: On an arc to an unknown station, a
                non-positive length, or an arc without a matching mirror arc
        """
        arcs: Counter = Counter()
        for line in self.iter_arcs():
            if line.to_id not in self._stations:
                raise GraphIntegrityError(
                    f"Line {line.edge_id} points to unknown station id {line.to_id}"
                )
            if line.length <= 0:
                raise GraphIntegrityError(
                    f"Line {self.name_of(line.from_id)} -> {self.name_of(line.to_id)} "
                    f"has non-positive length {line.length}"
                )
            arcs[(line.from_id, line.to_id, line.length, line.electrified)] += 1

        for (u, v, length, electrified), count in arcs.items():
            if arcs[(v, u, length, electrified)] != count:
                raise GraphIntegrityError(
                    f"Arc {self.name_of(u)} -> {self.name_of(v)} ({length}km, "
                    f"electrified={electrified}) has no matching mirror arc"
                )
