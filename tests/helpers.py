"""Assertions shared by the route tests."""

from collections import Counter
from typing import List

from railnet.graph import GraphModel


def undirected_pairs(route: List[str]) -> Counter:
    """Multiset of the undirected station pairs a route walks over."""
    return Counter(frozenset(pair) for pair in zip(route, route[1:]))


def relevant_pairs(graph: GraphModel, only_electrified: bool = False) -> Counter:
    """Multiset with one entry per distinct relevant station pair."""
    pairs = {
        frozenset((graph.name_of(line.from_id), graph.name_of(line.to_id)))
        for line in graph.iter_arcs()
        if line.electrified or not only_electrified
    }
    return Counter(pairs)
