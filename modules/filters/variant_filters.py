"""
Variant Filters

Filters over the pre-computed quality, frequency, pathogenicity, effect and
location of each variant. Scores are treated as opaque inputs.
"""

from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, List, Optional, Union

from modules.filters.base import VariantFilter
from modules.region_index import parse_chromosome
from modules.variant_model import (
    EffectKind,
    FilterResult,
    FilterType,
    VariantEvaluation,
)

# Effects removed by default by the VariantEffectFilter
DEFAULT_OFF_TARGET_EFFECTS: FrozenSet[EffectKind] = frozenset({
    EffectKind.FIVE_PRIME_UTR_EXON_VARIANT,
    EffectKind.FIVE_PRIME_UTR_INTRON_VARIANT,
    EffectKind.THREE_PRIME_UTR_EXON_VARIANT,
    EffectKind.THREE_PRIME_UTR_INTRON_VARIANT,
    EffectKind.NON_CODING_TRANSCRIPT_EXON_VARIANT,
    EffectKind.NON_CODING_TRANSCRIPT_INTRON_VARIANT,
    EffectKind.CODING_TRANSCRIPT_INTRON_VARIANT,
    EffectKind.SYNONYMOUS_VARIANT,
    EffectKind.UPSTREAM_GENE_VARIANT,
    EffectKind.DOWNSTREAM_GENE_VARIANT,
    EffectKind.INTERGENIC_VARIANT,
})


@dataclass(frozen=True, repr=False)
class QualityFilter(VariantFilter):
    """Fails variants with a call quality below the threshold."""

    min_quality: float
    filter_type: FilterType = field(default=FilterType.QUALITY_FILTER, init=False)

    def run(self, entity: VariantEvaluation) -> FilterResult:
        return FilterResult.of(entity.quality >= self.min_quality)


@dataclass(frozen=True, repr=False)
class FrequencyFilter(VariantFilter):
    """
    Fails common variants.

    Frequencies are maximum population allele frequencies in percent.
    Variants never seen in a population database pass.
    """

    max_frequency: float
    filter_type: FilterType = field(default=FilterType.FREQUENCY_FILTER, init=False)

    def run(self, entity: VariantEvaluation) -> FilterResult:
        if entity.frequency is None:
            return FilterResult.PASS
        return FilterResult.of(entity.frequency <= self.max_frequency)


@dataclass(frozen=True, repr=False)
class PathogenicityFilter(VariantFilter):
    """Fails variants predicted less pathogenic than the threshold."""

    min_score: float = 0.5
    keep_missing: bool = True
    filter_type: FilterType = field(default=FilterType.PATHOGENICITY_FILTER, init=False)

    def run(self, entity: VariantEvaluation) -> FilterResult:
        if entity.pathogenicity is None:
            return FilterResult.of(self.keep_missing)
        return FilterResult.of(entity.pathogenicity >= self.min_score)


@dataclass(frozen=True, repr=False)
class VariantEffectFilter(VariantFilter):
    """Fails variants whose effect is in the off-target set."""

    off_target_effects: FrozenSet[EffectKind] = DEFAULT_OFF_TARGET_EFFECTS
    filter_type: FilterType = field(default=FilterType.VARIANT_EFFECT_FILTER, init=False)

    def run(self, entity: VariantEvaluation) -> FilterResult:
        return FilterResult.of(entity.effect not in self.off_target_effects)


@dataclass(frozen=True, repr=False)
class RegulatoryFeatureFilter(VariantFilter):
    """
    Fails intergenic and upstream variants.

    Variants overlapping a known regulatory feature are expected to have
    been flagged REGULATORY_REGION_VARIANT upstream and therefore pass.
    """

    filter_type: FilterType = field(default=FilterType.REGULATORY_FEATURE_FILTER, init=False)

    def run(self, entity: VariantEvaluation) -> FilterResult:
        return FilterResult.of(entity.effect not in (
            EffectKind.INTERGENIC_VARIANT,
            EffectKind.UPSTREAM_GENE_VARIANT,
        ))


@dataclass(frozen=True, repr=False)
class IntervalFilter(VariantFilter):
    """Passes only variants inside a chromosomal interval (inclusive)."""

    chromosome: int
    start: int
    end: int
    filter_type: FilterType = field(default=FilterType.INTERVAL_FILTER, init=False)

    @classmethod
    def parse(cls, interval: str) -> "IntervalFilter":
        """
        Create from an interval string such as "chr10:123256200-123256300".

        Raises:
            ValueError: If the string is not a valid interval
        """
        try:
            chrom, span = interval.strip().split(":")
            start, end = span.replace(",", "").split("-")
            return cls.of(chrom, int(start), int(end))
        except ValueError as e:
            raise ValueError(f"Invalid interval '{interval}': {e}") from e

    @classmethod
    def of(cls, chromosome: Union[int, str], start: int, end: int) -> "IntervalFilter":
        if start > end:
            raise ValueError(f"Interval start {start} is after end {end}")
        return cls(parse_chromosome(chromosome), start, end)

    def run(self, entity: VariantEvaluation) -> FilterResult:
        return FilterResult.of(
            entity.chromosome == self.chromosome
            and self.start <= entity.position <= self.end
        )


@dataclass(frozen=True, repr=False)
class GeneSymbolFilter(VariantFilter):
    """Passes only variants assigned to one of the given genes."""

    gene_symbols: FrozenSet[str]
    filter_type: FilterType = field(default=FilterType.GENE_SYMBOL_FILTER, init=False)

    @classmethod
    def of(cls, gene_symbols: Iterable[str]) -> "GeneSymbolFilter":
        return cls(frozenset(gene_symbols))

    def run(self, entity: VariantEvaluation) -> FilterResult:
        return FilterResult.of(entity.gene_symbol in self.gene_symbols)


def make_variant_filters(
    min_quality: Optional[float] = None,
    max_frequency: Optional[float] = None,
    min_pathogenicity: Optional[float] = None,
    remove_off_target: bool = False,
    regulatory_filter: bool = False,
    interval: Optional[str] = None,
    gene_symbols: Optional[Iterable[str]] = None,
    off_target_effects: Optional[Iterable[EffectKind]] = None,
) -> List[VariantFilter]:
    """
    Build the ordered list of variant filters for a configuration.

    Filters are ordered cheapest and most selective first; omitted settings
    produce no filter.
    """
    filters: List[VariantFilter] = []
    if interval:
        filters.append(IntervalFilter.parse(interval))
    if gene_symbols:
        filters.append(GeneSymbolFilter.of(gene_symbols))
    if min_quality is not None:
        filters.append(QualityFilter(min_quality))
    if remove_off_target:
        if off_target_effects is None:
            filters.append(VariantEffectFilter())
        else:
            filters.append(VariantEffectFilter(frozenset(off_target_effects)))
    if regulatory_filter:
        filters.append(RegulatoryFeatureFilter())
    if max_frequency is not None:
        filters.append(FrequencyFilter(max_frequency))
    if min_pathogenicity is not None:
        filters.append(PathogenicityFilter(min_pathogenicity))
    return filters
