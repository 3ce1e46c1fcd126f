"""
Railway Network Analysis - Configuration
========================================
Central configuration for paths, naming conventions, and analysis parameters.
"""

from pathlib import Path
from dataclasses import dataclass
from typing import Dict, Tuple

# ============================================================================
# PROJECT PATHS
# ============================================================================
PROJECT_ROOT = Path(__file__).parent.parent
DATA_DIR = PROJECT_ROOT / "data"

STATIONS_PATH = DATA_DIR / "stations.csv"
LINES_PATH = DATA_DIR / "lines.csv"

# ============================================================================
# STATION NAMING CONVENTION
# ============================================================================
# First character of a station name decides its type
STATION_TYPE_PREFIXES: Dict[str, str] = {
    "D": "Depot",
    "S": "Station",
    "T": "Terminal",
}
UNKNOWN_STATION_TYPE = "Unknown"

# ============================================================================
# TRAIN TYPES
# ============================================================================
TRAIN_TYPES: Tuple[str, ...] = ("steam", "diesel", "electric")
ELECTRIC_TRAIN_TYPE = "electric"  # Only train type restricted to electrified lines

# ============================================================================
# CSV LAYOUT (semicolon separated files)
# ============================================================================
CSV_DELIMITER = ";"
LINE_COLUMNS = ["from_station", "to_station", "electrified", "length_km"]
ELECTRIFIED_FLAG = "1"

# ============================================================================
# ANALYSIS PARAMETERS
# ============================================================================
EULERIAN_STRATEGIES: Tuple[str, ...] = ("fleury", "hierholzer")


@dataclass
class AnalysisConfig:
    """Defaults for network queries."""
    default_eulerian_strategy: str = "hierholzer"  # Linear time, no bridge tests
    show_progress: bool = False                     # tqdm bars while loading lines


ANALYSIS = AnalysisConfig()

# ============================================================================
# LOGGING
# ============================================================================
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
