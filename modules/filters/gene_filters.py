"""
Gene Filters

Filters over candidate genes, run after variants have been reassigned and
grouped by gene.
"""

from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, List, Optional

from modules.filters.base import GeneFilter
from modules.variant_model import FilterResult, FilterType, Gene, PriorityType


@dataclass(frozen=True, repr=False)
class PriorityScoreFilter(GeneFilter):
    """Fails genes whose prioritiser score is below the threshold."""

    priority_type: PriorityType
    min_score: float
    filter_type: FilterType = field(default=FilterType.PRIORITY_SCORE_FILTER, init=False)

    def run(self, entity: Gene) -> FilterResult:
        return FilterResult.of(entity.priority_score(self.priority_type) >= self.min_score)


@dataclass(frozen=True, repr=False)
class KnownGeneFilter(GeneFilter):
    """Passes only genes on an allow-list of symbols."""

    gene_symbols: FrozenSet[str]
    filter_type: FilterType = field(default=FilterType.KNOWN_GENE_FILTER, init=False)

    @classmethod
    def of(cls, gene_symbols: Iterable[str]) -> "KnownGeneFilter":
        return cls(frozenset(gene_symbols))

    def run(self, entity: Gene) -> FilterResult:
        return FilterResult.of(entity.symbol in self.gene_symbols)


@dataclass(frozen=True, repr=False)
class VariantsPassedGeneFilter(GeneFilter):
    """Fails genes none of whose assigned variants passed the variant filters."""

    filter_type: FilterType = field(default=FilterType.VARIANTS_PASSED_FILTER, init=False)

    def run(self, entity: Gene) -> FilterResult:
        return FilterResult.of(
            any(variant.passed_filters for variant in entity.variant_evaluations)
        )


def make_gene_filters(
    priority_type: Optional[PriorityType] = None,
    min_priority_score: Optional[float] = None,
    known_genes: Optional[Iterable[str]] = None,
    require_passed_variants: bool = True,
) -> List[GeneFilter]:
    """Build the ordered list of gene filters for a configuration."""
    filters: List[GeneFilter] = []
    if known_genes:
        filters.append(KnownGeneFilter.of(known_genes))
    if require_passed_variants:
        filters.append(VariantsPassedGeneFilter())
    if min_priority_score is not None and priority_type is not None:
        filters.append(PriorityScoreFilter(priority_type, min_priority_score))
    return filters
