# Station and line file loaders
from .loaders import (
    load_stations,
    load_lines,
    load_network,
)
