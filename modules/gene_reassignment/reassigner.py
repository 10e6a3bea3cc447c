"""
Gene Reassignment

Moves regulatory and non-coding variants from their nominally annotated gene
to the gene with the best phenotype score that shares the variant's
topologically associating domain (TAD) or one of its transcript annotations.

High-order chromosome structure brings enhancers into physical contact with
their target genes, so for variants outside coding sequence the nearest gene
is often not the gene they regulate (doi:10.1038/nature11082,
doi:10.1038/nature12753).
"""

from dataclasses import dataclass
from typing import List, Optional
import logging

from modules.region_index import RegionIndex
from modules.variant_model import (
    Annotation,
    EffectKind,
    Gene,
    GeneRegistry,
    PriorityType,
    VariantEvaluation,
    is_reassignment_eligible,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Candidate:
    """A gene a variant could be assigned to, taken from its annotations."""

    gene_symbol: str
    effect: EffectKind
    annotation: Optional[Annotation]


class GeneReassigner:
    """
    Reassigns variants to the most phenotypically similar candidate gene.

    Both operations read the gene registry and write only the variant's gene
    assignment, effect and annotations; registry entries are never created,
    removed or rescored. A variant is moved only when a candidate scores
    strictly higher than the gene it is currently assigned to, so ties keep
    the current assignment and regulatory variants are not funnelled into a
    single best-scoring gene.

    The two operations mutate overlapping fields and must run sequentially
    for any one variant; different variants can be processed in parallel.
    """

    def __init__(
        self,
        priority_type: PriorityType,
        registry: GeneRegistry,
        region_index: RegionIndex,
    ):
        """
        Args:
            priority_type: Prioritiser whose gene scores are compared
            registry: Shared gene registry, fully scored before reassignment
            region_index: Index of topologically associating domains
        """
        self.priority_type = priority_type
        self.registry = registry
        self.region_index = region_index
        logger.info(f"Made new GeneReassigner for {priority_type.name}")

    def prioritiser_score(self, gene: Optional[Gene]) -> float:
        """Score of the gene for the configured priority type, 0.0 if absent."""
        if gene is None:
            return 0.0
        return gene.priority_score(self.priority_type)

    def _scored_gene(self, gene_symbol: str) -> Optional[Gene]:
        """Registry gene with a score for the priority type, else None."""
        gene = self.registry.get(gene_symbol)
        if gene is None or not gene.has_priority_score(self.priority_type):
            return None
        return gene

    def reassign_to_best_in_domain(self, variant: VariantEvaluation) -> bool:
        """
        Move a regulatory/non-coding variant to the best-scoring gene in its TADs.

        Variants with any other effect are left untouched. When the variant
        is moved its annotations are cleared: they describe transcripts of
        the old gene and are meaningless at domain granularity.

        Args:
            variant: Variant to check

        Returns:
            True if the variant was reassigned
        """
        if not is_reassignment_eligible(variant.effect):
            return False

        logger.debug(
            f"Checking gene assignment for {variant.effect.value} "
            f"chr={variant.chromosome} pos={variant.position}"
        )

        current_gene = self.registry.get(variant.gene_symbol)
        baseline = self.prioritiser_score(current_gene)
        best_score = baseline
        best_gene: Optional[Gene] = None

        for gene_symbol in self._genes_in_domains(variant):
            gene = self._scored_gene(gene_symbol)
            if gene is None:
                continue
            score = self.prioritiser_score(gene)
            logger.debug(f"Gene {gene_symbol} in TAD has score {score}")
            if score > best_score:
                best_score = score
                best_gene = gene

        if best_gene is None or best_score <= baseline:
            return False

        self._assign_to_gene(variant, best_gene)
        variant.annotations = []
        return True

    def _genes_in_domains(self, variant: VariantEvaluation) -> List[str]:
        """Union of the member genes of every region containing the variant."""
        seen = set()
        symbols = []
        for region in self.region_index.regions_containing(
            variant.chromosome, variant.position
        ):
            for symbol in sorted(region.genes):
                if symbol not in seen:
                    seen.add(symbol)
                    symbols.append(symbol)
        return symbols

    def reassign_to_best_annotated_gene(self, variant: VariantEvaluation) -> bool:
        """
        Move a variant to the best-scoring gene among its own annotations.

        Hyphen-joined fusion symbols ("GENE1-GENE2") additionally offer each
        component gene as a candidate, with an unknown (CUSTOM) effect and no
        annotation. When the variant is moved only the winning annotation
        is kept (none if a fusion component won). An effect already flagged
        as REGULATORY_REGION_VARIANT is never overwritten so that a
        preceding domain reassignment and the regulatory feature filter
        keep working.

        Args:
            variant: Variant to check

        Returns:
            True if the variant was reassigned
        """
        current_gene = self.registry.get(variant.gene_symbol)
        if current_gene is None:
            # e.g. a single annotation with no gene, symbol "."
            return False

        baseline = self.prioritiser_score(current_gene)
        best_score = baseline
        best: Optional[_Candidate] = None
        best_gene: Optional[Gene] = None

        for candidate in self._annotation_candidates(variant.annotations):
            gene = self._scored_gene(candidate.gene_symbol)
            if gene is None:
                continue
            score = self.prioritiser_score(gene)
            if score > best_score:
                best_score = score
                best = candidate
                best_gene = gene

        if best is None or best_gene is None or best_score <= baseline:
            return False

        variant.annotations = [best.annotation] if best.annotation is not None else []
        if variant.effect != EffectKind.REGULATORY_REGION_VARIANT:
            variant.effect = best.effect
        self._assign_to_gene(variant, best_gene)
        return True

    @staticmethod
    def _annotation_candidates(annotations: List[Annotation]) -> List[_Candidate]:
        candidates = []
        for annotation in annotations:
            symbol = annotation.gene_symbol or ""
            candidates.append(
                _Candidate(symbol, annotation.most_pathogenic_effect, annotation)
            )
            if "-" in symbol:
                for component in symbol.split("-"):
                    candidates.append(_Candidate(component, EffectKind.CUSTOM, None))
        return candidates

    def _assign_to_gene(self, variant: VariantEvaluation, gene: Gene) -> None:
        logger.debug(
            f"Reassigning {variant.effect.value} {variant.chromosome}:{variant.position} "
            f"{variant.ref}->{variant.alt} from {variant.gene_symbol} to {gene.symbol}"
        )
        variant.entrez_gene_id = gene.entrez_id
        variant.gene_symbol = gene.symbol

    def reassign(
        self,
        variant: VariantEvaluation,
        in_domain: bool = True,
        by_annotation: bool = True,
    ) -> bool:
        """
        Run the domain-based and then the annotation-based reassignment.

        Returns:
            True if either operation moved the variant
        """
        moved = False
        if in_domain:
            moved = self.reassign_to_best_in_domain(variant)
        if by_annotation:
            moved = self.reassign_to_best_annotated_gene(variant) or moved
        return moved
