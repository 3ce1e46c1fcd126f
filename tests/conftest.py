"""Pytest configuration and shared network fixtures."""

import pytest

from railnet.graph import GraphModel, build_network_graph


@pytest.fixture
def abc_graph() -> GraphModel:
    """A-B (10km, electrified), B-C (5km, not electrified)."""
    return build_network_graph(
        lines=[
            ("A", "B", 10, True),
            ("B", "C", 5, False),
        ]
    )


@pytest.fixture
def cycle_graph() -> GraphModel:
    """Single cycle of five stations, every degree is 2."""
    names = ["S_1", "S_2", "S_3", "S_4", "S_5"]
    lines = [(names[i], names[(i + 1) % 5], 10 + i, i % 2 == 0) for i in range(5)]
    return build_network_graph(lines=lines)


@pytest.fixture
def two_triangles_graph() -> GraphModel:
    """Two disjoint triangles X1-X2-X3 and Y1-Y2-Y3."""
    return build_network_graph(
        lines=[
            ("X1", "X2", 1, True),
            ("X2", "X3", 1, True),
            ("X3", "X1", 1, True),
            ("Y1", "Y2", 2, False),
            ("Y2", "Y3", 2, False),
            ("Y3", "Y1", 2, False),
        ]
    )


@pytest.fixture
def path_graph() -> GraphModel:
    """P1-P2-P3-P4, two odd-degree ends."""
    return build_network_graph(
        lines=[
            ("P1", "P2", 3, True),
            ("P2", "P3", 4, True),
            ("P3", "P4", 5, True),
        ]
    )


@pytest.fixture
def k4_graph() -> GraphModel:
    """Complete graph on four stations, all four degrees odd."""
    names = ["K1", "K2", "K3", "K4"]
    lines = [(a, b, 1, True) for i, a in enumerate(names) for b in names[i + 1:]]
    return build_network_graph(lines=lines)


@pytest.fixture
def portugal_graph() -> GraphModel:
    """Small mixed network using the D_/S_/T_ naming convention."""
    return build_network_graph(
        stations=["S_Lisboa", "S_Porto", "S_Coimbra", "T_Faro", "T_Braga", "D_Entroncamento", "S_Evora"],
        lines=[
            ("S_Lisboa", "D_Entroncamento", 120, True),
            ("D_Entroncamento", "S_Coimbra", 90, True),
            ("S_Coimbra", "S_Porto", 120, True),
            ("S_Lisboa", "S_Porto", 320, True),
            ("S_Porto", "T_Braga", 50, True),
            ("S_Lisboa", "T_Faro", 280, False),
            ("S_Lisboa", "S_Evora", 130, False),
            ("S_Evora", "T_Faro", 230, False),
        ],
    )
