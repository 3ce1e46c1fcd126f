"""
Railway Network Analysis - Main Entry Point
===========================================
Loads a station file and a line file and answers one query per run.

Usage:
    python main.py --lines lines.csv stations
    python main.py --lines lines.csv route S_Lisboa S_Coimbra S_Porto
    python main.py --lines lines.csv reach S_Lisboa T_Faro --train-type electric
    python main.py --lines lines.csv reach-all S_Lisboa S_Porto T_Faro --train-type diesel
    python main.py --lines lines.csv checks
    python main.py --lines lines.csv connected --matrix
    python main.py --lines lines.csv maintenance --electrified --start S_Porto
"""

import argparse
import logging
import sys
from pathlib import Path

import pandas as pd

from railnet.config import (
    ANALYSIS, EULERIAN_STRATEGIES, LINES_PATH, LOG_FORMAT, STATIONS_PATH, TRAIN_TYPES,
)
from railnet.data.loaders import load_network
from railnet.graph import (
    EulerianRouteBuilder, GraphModel, ReachabilityAnalyzer, ShortestPathEngine,
)

logger = logging.getLogger("railnet")


def cmd_stations(graph: GraphModel, args) -> bool:
    for name, station_type in graph.station_types().items():
        print(f"  • {name} ({station_type})")
    return True


def cmd_lines(graph: GraphModel, args) -> bool:
    for line in graph.unique_lines():
        kind = "Electrified" if line.electrified else "Not electrified"
        print(f"- {graph.name_of(line.from_id)} -> {graph.name_of(line.to_id)} | {line.length:g}km | {kind}")
    return True


def cmd_route(graph: GraphModel, args) -> bool:
    engine = ShortestPathEngine(graph)
    result = engine.find_shortest_route_through_ordered_stations(args.stops)
    if not result.feasible:
        print(f"No route through {' -> '.join(args.stops)}")
        return False

    metrics = engine.calculate_route_metrics(result.path)
    print(f"Route: {' -> '.join(result.path)}")
    print(f"Distance: {result.distance:g} km "
          f"({metrics.electrified_km:g} km electrified, {metrics.non_electrified_km:g} km not)")
    return True


def cmd_reach(graph: GraphModel, args) -> bool:
    analyzer = ReachabilityAnalyzer(graph)
    if analyzer.is_reachable(args.origin, args.destination, args.train_type):
        print(f"✓ {args.destination} is reachable from {args.origin} by {args.train_type} train")
        return True

    reason = analyzer.get_reason_for_unreachability(args.origin, args.destination, args.train_type)
    print(f"✗ {args.destination} is not reachable from {args.origin}: {reason.describe(args.train_type)}")
    return False


def cmd_reach_all(graph: GraphModel, args) -> bool:
    analyzer = ReachabilityAnalyzer(graph)
    failures = analyzer.find_unreachable_pairs(args.names, args.train_type)
    for a, b in failures:
        print(f"✗ {a} -> {b} is not reachable with train type \"{args.train_type}\"")
    if not failures:
        print(f"✓ All stations are mutually reachable by {args.train_type} train")
    return not failures


def cmd_checks(graph: GraphModel, args) -> bool:
    results = ReachabilityAnalyzer(graph).standard_connectivity_checks()
    for check, passed in results.items():
        status = "skipped (no stations)" if passed is None else ("✓ passed" if passed else "✗ failed")
        print(f"  {check}: {status}")
    return all(passed is not False for passed in results.values())


def cmd_connected(graph: GraphModel, args) -> bool:
    analyzer = ReachabilityAnalyzer(graph)
    if args.matrix:
        matrix = analyzer.transitive_closure_matrix(args.train_type).astype(int)
        with pd.option_context("display.max_rows", None, "display.max_columns", None, "display.width", 0):
            print(matrix)

    connected = analyzer.is_graph_connected_using_transitive_closure(args.train_type)
    print("✓ The network is fully connected" if connected else "✗ The network is NOT fully connected")
    return connected


def cmd_maintenance(graph: GraphModel, args) -> bool:
    builder = EulerianRouteBuilder(graph, strategy=args.strategy)
    starts = builder.get_potential_start_stations(args.electrified)
    if not starts:
        info = builder.analyze(args.electrified)
        print(f"No maintenance route possible ({info.state.value})")
        return False

    print(f"Possible start stations: {', '.join(starts)}")
    start = args.start or starts[0]
    route = builder.find_maintenance_route(start, args.electrified)
    if not route:
        print(f"{start} cannot start a maintenance route")
        return False

    print(f"Maintenance route ({builder.strategy.name}): {' -> '.join(route)}")
    return True


COMMANDS = {
    "stations": cmd_stations,
    "lines": cmd_lines,
    "route": cmd_route,
    "reach": cmd_reach,
    "reach-all": cmd_reach_all,
    "checks": cmd_checks,
    "connected": cmd_connected,
    "maintenance": cmd_maintenance,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Railway Network Analysis",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__.split("Usage:")[1],
    )
    parser.add_argument('--stations', type=Path, default=None,
                        help=f'Stations file (default: {STATIONS_PATH} with the default lines file, '
                             'otherwise stations are taken from the lines file)')
    parser.add_argument('--lines', type=Path, default=LINES_PATH, help='Lines file')
    parser.add_argument('--log-level', default='WARNING', help='Logging level')
    parser.add_argument('--progress', action='store_true', help='Show progress while loading lines')

    sub = parser.add_subparsers(dest='command', required=True)
    sub.add_parser('stations', help='List stations and their types')
    sub.add_parser('lines', help='List railway lines')

    route = sub.add_parser('route', help='Shortest route through ordered stops')
    route.add_argument('stops', nargs='+')

    reach = sub.add_parser('reach', help='Can a train type travel between two stations')
    reach.add_argument('origin')
    reach.add_argument('destination')
    reach.add_argument('--train-type', choices=TRAIN_TYPES, default='diesel')

    reach_all = sub.add_parser('reach-all', help='Are all listed stations mutually reachable')
    reach_all.add_argument('names', metavar='STATION', nargs='+')
    reach_all.add_argument('--train-type', choices=TRAIN_TYPES, default='diesel')

    sub.add_parser('checks', help='Standard connectivity checks')

    connected = sub.add_parser('connected', help='Full connectivity via transitive closure')
    connected.add_argument('--matrix', action='store_true', help='Print the closure matrix')
    connected.add_argument('--train-type', choices=TRAIN_TYPES, default=None)

    maintenance = sub.add_parser('maintenance', help='Route covering every line exactly once')
    maintenance.add_argument('--electrified', action='store_true', help='Only electrified lines')
    maintenance.add_argument('--start', default=None, help='Start station (default: first valid)')
    maintenance.add_argument('--strategy', choices=EULERIAN_STRATEGIES,
                             default=ANALYSIS.default_eulerian_strategy)
    return parser


def main(argv=None) -> int:
    """Main entry point with CLI support."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(level=args.log_level.upper(), format=LOG_FORMAT)
    ANALYSIS.show_progress = args.progress

    # The bundled stations file only belongs with the bundled lines file
    stations_path = args.stations
    if stations_path is None and args.lines == LINES_PATH and STATIONS_PATH.exists():
        stations_path = STATIONS_PATH

    graph = load_network(stations_path, args.lines)
    logger.info("Loaded %r", graph)

    ok = COMMANDS[args.command](graph, args)
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
