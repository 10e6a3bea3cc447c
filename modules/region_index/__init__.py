"""
Region Index

Chromosomal regions (topologically associating domains) and the spatial
index used to find the regions containing a variant.
"""

from modules.region_index.regions import (
    CHROMOSOME_NUMBERS,
    InvalidRegionError,
    Region,
    parse_chromosome,
)
from modules.region_index.index import RegionIndex

__all__ = [
    "CHROMOSOME_NUMBERS",
    "InvalidRegionError",
    "Region",
    "RegionIndex",
    "parse_chromosome",
]
