"""
Chromosomal Regions

Topologically associating domains (TADs) and other chromosomal intervals,
plus the chromosome naming rules used to validate them.
"""

from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, Union
import logging

logger = logging.getLogger(__name__)


class InvalidRegionError(ValueError):
    """Raised when a region definition is malformed."""


# Chromosome token -> numeric chromosome (1-22, X=23, Y=24, MT=25)
CHROMOSOME_NUMBERS = {
    **{str(i): i for i in range(1, 23)},
    "X": 23,
    "Y": 24,
    "M": 25,
    "MT": 25,
}
VALID_CHROMOSOMES = frozenset(CHROMOSOME_NUMBERS.values())


def parse_chromosome(token: Union[int, str]) -> int:
    """
    Convert a chromosome token to its numeric form.

    Args:
        token: Integer chromosome, or a name such as "10", "chr10", "X", "chrM"

    Returns:
        Chromosome number in 1-25

    Raises:
        InvalidRegionError: If the token is not a known chromosome
    """
    if isinstance(token, bool):
        raise InvalidRegionError(f"Unknown chromosome: {token!r}")

    if isinstance(token, int):
        if token in VALID_CHROMOSOMES:
            return token
        raise InvalidRegionError(f"Unknown chromosome: {token}")

    name = str(token).strip().upper()
    if name.startswith("CHR"):
        name = name[3:]
    if name not in CHROMOSOME_NUMBERS:
        raise InvalidRegionError(f"Unknown chromosome: {token!r}")
    return CHROMOSOME_NUMBERS[name]


@dataclass(frozen=True)
class Region:
    """
    A closed chromosomal interval [start, end] with its member genes.

    Attributes:
        chromosome: Numeric chromosome (1-25)
        start: First base of the region (1-based, inclusive)
        end: Last base of the region (inclusive)
        genes: Symbols of the genes lying in the region
    """

    chromosome: int
    start: int
    end: int
    genes: FrozenSet[str] = field(default_factory=frozenset)

    @classmethod
    def of(
        cls,
        chromosome: Union[int, str],
        start: int,
        end: int,
        genes: Iterable[str] = (),
    ) -> "Region":
        """Create a region from a chromosome token and any iterable of genes."""
        return cls(
            chromosome=parse_chromosome(chromosome),
            start=int(start),
            end=int(end),
            genes=frozenset(genes),
        )

    @property
    def length(self) -> int:
        return self.end - self.start + 1

    def contains(self, chromosome: int, position: int) -> bool:
        """Check if the position lies inside this region."""
        return (
            self.chromosome == chromosome
            and self.start <= position <= self.end
        )

    def validate(self) -> None:
        """
        Check the region is well formed.

        Raises:
            InvalidRegionError: On an unknown chromosome or start > end
        """
        if self.chromosome not in VALID_CHROMOSOMES:
            raise InvalidRegionError(f"Unknown chromosome: {self.chromosome!r}")
        if self.start > self.end:
            raise InvalidRegionError(
                f"Region start {self.start} is after end {self.end} "
                f"on chromosome {self.chromosome}"
            )
