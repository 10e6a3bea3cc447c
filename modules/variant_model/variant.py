"""
Variant Evaluation

Pre-annotated variants as they flow through filtering and gene reassignment.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
import logging

from modules.variant_model.effects import EffectKind
from modules.variant_model.filter_status import FilterResult, FilterType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Annotation:
    """
    A transcript-level annotation of a variant.

    Attributes:
        gene_symbol: Symbol of the annotated gene; may be a hyphen-joined
            fusion symbol such as "GENE1-GENE2"
        most_pathogenic_effect: Most severe effect on this transcript
        payload: Opaque upstream data (transcript accession, HGVS, ...)
    """

    gene_symbol: str
    most_pathogenic_effect: EffectKind = EffectKind.SEQUENCE_VARIANT
    payload: Any = None


@dataclass
class VariantEvaluation:
    """
    A single variant with its current gene assignment and filter outcomes.

    The gene assignment (gene_symbol, entrez_gene_id), effect and
    annotations may be rewritten by gene reassignment. Filter outcomes are
    accumulated by the filter runners.
    """

    chromosome: int
    position: int
    ref: str
    alt: str
    effect: EffectKind = EffectKind.SEQUENCE_VARIANT
    gene_symbol: str = "."
    entrez_gene_id: int = -1
    annotations: List[Annotation] = field(default_factory=list)
    filter_results: Dict[FilterType, FilterResult] = field(default_factory=dict)

    # Pre-computed inputs consumed by the filters
    quality: float = 0.0
    frequency: Optional[float] = None  # max population AF, percent
    pathogenicity: Optional[float] = None  # 0 (benign) - 1 (pathogenic)
    genotypes: List[str] = field(default_factory=list)  # one per sample

    @property
    def passed_filters(self) -> bool:
        """True unless at least one filter failed this variant."""
        return FilterResult.FAIL not in self.filter_results.values()

    @property
    def failed_filter_types(self) -> List[FilterType]:
        return [
            filter_type for filter_type, result in self.filter_results.items()
            if result == FilterResult.FAIL
        ]

    @property
    def number_of_individuals(self) -> int:
        """Number of genotyped samples; a variant without genotypes counts as one."""
        return len(self.genotypes) or 1

    @property
    def has_annotations(self) -> bool:
        return bool(self.annotations)

    def add_filter_result(self, filter_type: FilterType, result: FilterResult) -> None:
        """Record the outcome of a filter on this variant."""
        self.filter_results[filter_type] = result

    def is_carried_by(self, sample_index: int) -> bool:
        """
        Check if a sample carries the alternate allele.

        Args:
            sample_index: Index into genotypes

        Returns:
            True if the genotype contains a non-reference allele. A variant
            without genotypes is carried by its single (implicit) sample.
        """
        if not self.genotypes:
            return sample_index == 0
        if sample_index >= len(self.genotypes):
            return False
        alleles = self.genotypes[sample_index].replace("|", "/").split("/")
        return any(allele not in ("0", ".", "") for allele in alleles)

    def to_string(self) -> str:
        return (
            f"{self.chromosome}:{self.position}{self.ref}>{self.alt} "
            f"{self.effect.value} {self.gene_symbol}"
        )
