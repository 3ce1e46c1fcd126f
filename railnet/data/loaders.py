"""
Data Loaders for Railway Networks
=================================
Read the semicolon-separated station and line files and build a GraphModel.

Stations file: each row lists one or more station names separated by ``;``.
Lines file: each row is ``from;to;electrified;length`` where electrified is
``1`` for an electrified line.
"""

import csv
import logging
from pathlib import Path
from typing import List, Optional, Union

import pandas as pd
from tqdm import tqdm

from ..config import (
    ANALYSIS, CSV_DELIMITER, ELECTRIFIED_FLAG, LINE_COLUMNS,
    LINES_PATH, STATIONS_PATH,
)
from ..graph.builder import NetworkBuilder
from ..graph.model import GraphModel

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

# Filled only by rows with more than the four line fields
OVERFLOW_COLUMN = "_overflow"


def load_stations(path: PathLike = STATIONS_PATH) -> List[str]:
    """
    Load station names in first-seen order.

    Args:
        path: Stations file

    Returns:
        Unique, trimmed station names
    """
    try:
        raw = pd.read_csv(
            path,
            header=None,
            names=["raw"],
            sep="\t",
            dtype=str,
            quoting=csv.QUOTE_NONE,
            skip_blank_lines=True,
        )
    except pd.errors.EmptyDataError:
        logger.warning("Stations file %s is empty", path)
        return []

    names = raw["raw"].dropna().str.split(CSV_DELIMITER).explode().str.strip()
    names = names[names != ""]

    stations = list(dict.fromkeys(names))
    logger.info("Loaded %d stations from %s", len(stations), path)
    return stations


def load_lines(path: PathLike = LINES_PATH) -> pd.DataFrame:
    """
    Load railway lines.

    Rows that do not have exactly four fields are skipped.

    Args:
        path: Lines file

    Returns:
        DataFrame with from_station, to_station, electrified (bool) and
        length_km (float) columns

    Raises:
        ValueError: If a length is not numeric
    """
    try:
        df = pd.read_csv(
            path,
            sep=CSV_DELIMITER,
            header=None,
            names=LINE_COLUMNS + [OVERFLOW_COLUMN],
            dtype=str,
            index_col=False,
            on_bad_lines="skip",
            skip_blank_lines=True,
        )
    except pd.errors.EmptyDataError:
        logger.warning("Lines file %s is empty", path)
        return pd.DataFrame(columns=LINE_COLUMNS)
    df = df[df[OVERFLOW_COLUMN].isna()].drop(columns=OVERFLOW_COLUMN)
    df = df.dropna().copy()

    for column in ("from_station", "to_station", "electrified", "length_km"):
        df[column] = df[column].str.strip()

    try:
        df["length_km"] = pd.to_numeric(df["length_km"], errors="raise")
    except ValueError as exc:
        raise ValueError(f"Invalid line length in {path}: {exc}") from exc

    df["electrified"] = df["electrified"] == ELECTRIFIED_FLAG
    df = df.reset_index(drop=True)

    logger.info("Loaded %d lines from %s", len(df), path)
    return df


def load_network(
    stations_path: Optional[PathLike] = STATIONS_PATH,
    lines_path: PathLike = LINES_PATH
) -> GraphModel:
    """
    Build a GraphModel from a stations file and a lines file.

    Stations listed in the stations file get the lowest ids; stations that
    only appear in the lines file are added as they are encountered.

    Args:
        stations_path: Stations file, or None to take stations from lines only
        lines_path: Lines file

    Returns:
        Validated GraphModel
    """
    builder = NetworkBuilder()

    if stations_path is not None:
        for name in load_stations(stations_path):
            builder.add_station(name)

    lines = load_lines(lines_path)
    for row in tqdm(
        lines.itertuples(index=False),
        total=len(lines),
        desc="  Lines",
        disable=not ANALYSIS.show_progress,
    ):
        builder.add_line(row.from_station, row.to_station, row.length_km, row.electrified)

    return builder.build()
