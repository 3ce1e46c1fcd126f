"""
Unit tests for the semicolon-separated station and line loaders.
"""

from pathlib import Path

import pytest

from railnet.data import load_lines, load_network, load_stations
from railnet.graph import ShortestPathEngine, StationType


@pytest.fixture
def stations_file(tmp_path: Path) -> Path:
    path = tmp_path / "stations.csv"
    path.write_text("S_Lisboa;S_Porto\nT_Faro\n\n S_Porto ; D_Entroncamento\n")
    return path


@pytest.fixture
def lines_file(tmp_path: Path) -> Path:
    path = tmp_path / "lines.csv"
    path.write_text(
        "S_Lisboa;S_Porto;1;300\n"
        "S_Lisboa;T_Faro;0;280\n"
        "incomplete;row;1\n"
        "S_Lisboa;T_Braga;1;400;extra\n"
        "S_Porto;T_Braga;1;50\n"
    )
    return path


class TestLoadStations:
    def test_names_in_first_seen_order(self, stations_file: Path) -> None:
        assert load_stations(stations_file) == ["S_Lisboa", "S_Porto", "T_Faro", "D_Entroncamento"]

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.csv"
        path.write_text("")

        assert load_stations(path) == []


class TestLoadLines:
    def test_rows_parsed(self, lines_file: Path) -> None:
        df = load_lines(lines_file)

        assert len(df) == 3
        assert list(df["from_station"]) == ["S_Lisboa", "S_Lisboa", "S_Porto"]
        assert list(df["electrified"]) == [True, False, True]
        assert list(df["length_km"]) == [300, 280, 50]

    def test_non_numeric_length_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "lines.csv"
        path.write_text("S_A;S_B;1;far\n")

        with pytest.raises(ValueError, match="Invalid line length"):
            load_lines(path)

    def test_rows_with_extra_fields_are_skipped(self, tmp_path: Path) -> None:
        path = tmp_path / "lines.csv"
        path.write_text("S_A;S_B;1;10;junk\nS_B;S_C;1;5\n")

        df = load_lines(path)

        assert list(df["from_station"]) == ["S_B"]
        assert list(df.columns) == ["from_station", "to_station", "electrified", "length_km"]


class TestLoadNetwork:
    def test_builds_graph(self, stations_file: Path, lines_file: Path) -> None:
        graph = load_network(stations_file, lines_file)

        assert len(graph) == 5
        assert graph.resolve("D_Entroncamento") == 4
        assert graph.resolve("T_Braga") == 5
        assert graph.station(5).type is StationType.TERMINAL
        assert graph.neighbors(graph.resolve("D_Entroncamento")) == ()

        result = ShortestPathEngine(graph).find_shortest_path("T_Faro", "T_Braga")
        assert result.path == ["T_Faro", "S_Lisboa", "S_Porto", "T_Braga"]
        assert result.distance == 630

    def test_stations_from_lines_only(self, lines_file: Path) -> None:
        graph = load_network(None, lines_file)

        assert graph.station_ids() == [1, 2, 3, 4]
        assert graph.resolve("S_Lisboa") == 1

