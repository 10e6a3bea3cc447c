"""
Region Loader

Loads topologically associating domains from BED-like tab-separated files:

    #chrom  start   end     genes
    chr10   100     200     FGFR2,ATE1
    10      150     400     .

Supports uncompressed and gzip compressed (.gz) files. Lines starting with
'#' and blank lines are ignored. The genes column is optional.
"""

from pathlib import Path
from typing import List, Union
import gzip
import logging

from modules.region_index import InvalidRegionError, Region, RegionIndex

logger = logging.getLogger(__name__)


class RegionLoader:
    """Loader for TAD / chromosomal region files."""

    def __init__(self, gene_separator: str = ","):
        """
        Args:
            gene_separator: Separator between gene symbols in the genes column
        """
        self.gene_separator = gene_separator

    def load(self, region_path: Union[str, Path]) -> List[Region]:
        """
        Load regions from a file.

        Args:
            region_path: Path to region file (.tsv, .bed or .gz)

        Returns:
            Regions in file order

        Raises:
            FileNotFoundError: If the file does not exist
            InvalidRegionError: On a malformed line, reported with its line number
        """
        path = Path(region_path)
        if not path.exists():
            raise FileNotFoundError(f"Region file not found: {region_path}")

        open_func = gzip.open if str(path).endswith(".gz") else open
        mode = "rt" if str(path).endswith(".gz") else "r"

        regions = []
        with open_func(path, mode) as f:
            for line_number, line in enumerate(f, start=1):
                line = line.rstrip("\n")
                if not line.strip() or line.startswith("#"):
                    continue
                try:
                    regions.append(self._parse_line(line))
                except InvalidRegionError as e:
                    raise InvalidRegionError(f"{path}:{line_number}: {e}") from e

        logger.info(f"Loaded {len(regions)} regions from {path}")
        return regions

    def load_index(self, region_path: Union[str, Path]) -> RegionIndex:
        """Load regions from a file and build an index over them."""
        return RegionIndex.build(self.load(region_path))

    def _parse_line(self, line: str) -> Region:
        fields = line.split("\t")
        if len(fields) < 3:
            raise InvalidRegionError(f"Expected at least 3 columns, found {len(fields)}")

        try:
            start = int(fields[1])
            end = int(fields[2])
        except ValueError:
            raise InvalidRegionError(
                f"Non-integer coordinates: {fields[1]!r}, {fields[2]!r}"
            )

        genes = []
        if len(fields) > 3 and fields[3].strip() not in ("", "."):
            genes = [
                g.strip() for g in fields[3].split(self.gene_separator) if g.strip()
            ]

        region = Region.of(fields[0], start, end, genes)
        region.validate()
        return region
