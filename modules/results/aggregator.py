"""
Result Aggregation

Post-pipeline reducers: per-sample variant counts by effect type and the
pruned list of genes to report.
"""

from typing import Dict, List, Sequence, Tuple
import logging

from modules.variant_model import EffectKind, Gene, VariantEvaluation

logger = logging.getLogger(__name__)


# Effect kinds shown in the variant effect table, in display order
REPORTABLE_EFFECTS: Tuple[EffectKind, ...] = (
    EffectKind.FRAMESHIFT_ELONGATION,
    EffectKind.FRAMESHIFT_TRUNCATION,
    EffectKind.FRAMESHIFT_VARIANT,
    EffectKind.INTERNAL_FEATURE_ELONGATION,
    EffectKind.FEATURE_TRUNCATION,
    EffectKind.MNV,
    EffectKind.STOP_GAINED,
    EffectKind.STOP_LOST,
    EffectKind.START_LOST,
    EffectKind.SPLICE_ACCEPTOR_VARIANT,
    EffectKind.SPLICE_DONOR_VARIANT,
    EffectKind.MISSENSE_VARIANT,
    EffectKind.INFRAME_INSERTION,
    EffectKind.DISRUPTIVE_INFRAME_INSERTION,
    EffectKind.INFRAME_DELETION,
    EffectKind.DISRUPTIVE_INFRAME_DELETION,
    EffectKind.SPLICE_REGION_VARIANT,
    EffectKind.STOP_RETAINED_VARIANT,
    EffectKind.INITIATOR_CODON_VARIANT,
    EffectKind.SYNONYMOUS_VARIANT,
    EffectKind.FIVE_PRIME_UTR_TRUNCATION,
    EffectKind.FIVE_PRIME_UTR_INTRON_VARIANT,
    EffectKind.THREE_PRIME_UTR_TRUNCATION,
    EffectKind.THREE_PRIME_UTR_INTRON_VARIANT,
    EffectKind.THREE_PRIME_UTR_EXON_VARIANT,
    EffectKind.CODING_TRANSCRIPT_INTRON_VARIANT,
    EffectKind.NON_CODING_TRANSCRIPT_EXON_VARIANT,
    EffectKind.NON_CODING_TRANSCRIPT_INTRON_VARIANT,
    EffectKind.UPSTREAM_GENE_VARIANT,
    EffectKind.DOWNSTREAM_GENE_VARIANT,
    EffectKind.INTERGENIC_VARIANT,
)


def count_by_effect(
    variants: Sequence[VariantEvaluation],
) -> Dict[EffectKind, List[int]]:
    """
    Count variants of each reportable effect kind per sample.

    The number of samples is taken from the first variant's genotypes. A
    sample is counted for a variant when it carries the alternate allele.
    Effects outside REPORTABLE_EFFECTS are not counted.

    Args:
        variants: Final variant list

    Returns:
        Mapping of every reportable effect kind to one count per sample.
        With no variants every kind maps to a single zero, so a complete
        effect table can still be rendered.
    """
    n_samples = variants[0].number_of_individuals if variants else 1
    counts: Dict[EffectKind, List[int]] = {
        effect: [0] * n_samples for effect in REPORTABLE_EFFECTS
    }

    for variant in variants:
        sample_counts = counts.get(variant.effect)
        if sample_counts is None:
            continue
        for sample_idx in range(n_samples):
            if variant.is_carried_by(sample_idx):
                sample_counts[sample_idx] += 1

    return counts


def prune(genes: Sequence[Gene], max_genes: int) -> List[Gene]:
    """
    Keep the genes that passed filtering, limited to the first max_genes.

    Args:
        genes: Genes in ranked order
        max_genes: Maximum number of genes to return; 0 means no limit

    Returns:
        Passed genes in their original order

    Raises:
        ValueError: If max_genes is negative
    """
    if max_genes < 0:
        raise ValueError(f"max_genes must be >= 0, got {max_genes}")

    passed = [gene for gene in genes if gene.passed_filters]
    logger.info(f"{len(passed)} of {len(genes)} genes passed filters")

    if max_genes == 0:
        logger.info(
            f"Maximum gene limit set to {max_genes} - Returning all {len(passed)} "
            f"genes which have passed filtering."
        )
        return passed

    logger.info(
        f"Maximum gene limit set to {max_genes} - Returning first "
        f"{min(max_genes, len(passed))} of {len(passed)} genes which have passed filtering."
    )
    return passed[:max_genes]


def rank_genes(genes: Sequence[Gene], priority_type) -> List[Gene]:
    """Sort genes by descending prioritiser score, then by symbol."""
    return sorted(genes, key=lambda g: (-g.priority_score(priority_type), g.symbol))
