"""
Variant Effects

Sequence Ontology consequence terms for annotated variants and the
classification of which of them may be moved to another gene.
"""

from enum import Enum
from typing import Dict, FrozenSet, Optional
import logging

logger = logging.getLogger(__name__)


class EffectKind(Enum):
    """Variant consequence categories (Sequence Ontology terms)."""

    # Protein truncating / frameshifting
    FRAMESHIFT_ELONGATION = "frameshift_elongation"
    FRAMESHIFT_TRUNCATION = "frameshift_truncation"
    FRAMESHIFT_VARIANT = "frameshift_variant"
    INTERNAL_FEATURE_ELONGATION = "internal_feature_elongation"
    FEATURE_TRUNCATION = "feature_truncation"
    STOP_GAINED = "stop_gained"
    STOP_LOST = "stop_lost"
    START_LOST = "start_lost"
    SPLICE_ACCEPTOR_VARIANT = "splice_acceptor_variant"
    SPLICE_DONOR_VARIANT = "splice_donor_variant"

    # Protein altering
    MNV = "mnv"
    MISSENSE_VARIANT = "missense_variant"
    INFRAME_INSERTION = "inframe_insertion"
    DISRUPTIVE_INFRAME_INSERTION = "disruptive_inframe_insertion"
    INFRAME_DELETION = "inframe_deletion"
    DISRUPTIVE_INFRAME_DELETION = "disruptive_inframe_deletion"

    # Low impact
    SPLICE_REGION_VARIANT = "splice_region_variant"
    STOP_RETAINED_VARIANT = "stop_retained_variant"
    INITIATOR_CODON_VARIANT = "initiator_codon_variant"
    SYNONYMOUS_VARIANT = "synonymous_variant"

    # UTR and non-coding transcript
    FIVE_PRIME_UTR_TRUNCATION = "5_prime_utr_truncation"
    FIVE_PRIME_UTR_EXON_VARIANT = "5_prime_UTR_exon_variant"
    FIVE_PRIME_UTR_INTRON_VARIANT = "5_prime_UTR_intron_variant"
    THREE_PRIME_UTR_TRUNCATION = "3_prime_utr_truncation"
    THREE_PRIME_UTR_EXON_VARIANT = "3_prime_UTR_exon_variant"
    THREE_PRIME_UTR_INTRON_VARIANT = "3_prime_UTR_intron_variant"
    NON_CODING_TRANSCRIPT_EXON_VARIANT = "non_coding_transcript_exon_variant"
    NON_CODING_TRANSCRIPT_INTRON_VARIANT = "non_coding_transcript_intron_variant"

    # Intronic, intergenic and regulatory
    CODING_TRANSCRIPT_INTRON_VARIANT = "coding_transcript_intron_variant"
    CONSERVED_INTRON_VARIANT = "conserved_intron_variant"
    INTRON_VARIANT = "intron_variant"
    INTRAGENIC_VARIANT = "intragenic_variant"
    UPSTREAM_GENE_VARIANT = "upstream_gene_variant"
    DOWNSTREAM_GENE_VARIANT = "downstream_gene_variant"
    CONSERVED_INTERGENIC_VARIANT = "conserved_intergenic_variant"
    INTERGENIC_REGION = "intergenic_region"
    INTERGENIC_VARIANT = "intergenic_variant"
    REGULATORY_REGION_VARIANT = "regulatory_region_variant"
    TF_BINDING_SITE_VARIANT = "TF_binding_site_variant"

    SEQUENCE_VARIANT = "sequence_variant"
    # Placeholder for effects that could not be determined
    CUSTOM = "custom"

    @classmethod
    def from_term(cls, term: Optional[str]) -> "EffectKind":
        """
        Map a consequence string to an EffectKind.

        Accepts Sequence Ontology terms in any case plus the short aliases
        used by ANNOVAR-style annotations. Unrecognised or empty terms map to
        CUSTOM.

        Args:
            term: Consequence term, e.g. "upstream_gene_variant" or "intronic"

        Returns:
            Matching EffectKind
        """
        if not term:
            return cls.CUSTOM

        key = term.strip().lower()
        effect = _TERM_LOOKUP.get(key)
        if effect is None:
            logger.debug(f"Unrecognised effect term '{term}', using CUSTOM")
            return cls.CUSTOM
        return effect


# Effects whose nearest-gene assignment is unreliable and may be moved to a
# better-scoring gene in the same topological domain.
REASSIGNMENT_ELIGIBLE_EFFECTS: FrozenSet[EffectKind] = frozenset({
    EffectKind.CODING_TRANSCRIPT_INTRON_VARIANT,
    EffectKind.CONSERVED_INTERGENIC_VARIANT,
    EffectKind.CONSERVED_INTRON_VARIANT,
    EffectKind.DOWNSTREAM_GENE_VARIANT,
    EffectKind.INTERGENIC_REGION,
    EffectKind.INTERGENIC_VARIANT,
    EffectKind.INTRAGENIC_VARIANT,
    EffectKind.INTRON_VARIANT,
    EffectKind.NON_CODING_TRANSCRIPT_INTRON_VARIANT,
    EffectKind.REGULATORY_REGION_VARIANT,
    EffectKind.TF_BINDING_SITE_VARIANT,
    EffectKind.UPSTREAM_GENE_VARIANT,
})


def is_reassignment_eligible(effect: EffectKind) -> bool:
    """Check whether a variant with this effect may be reassigned to another gene."""
    return effect in REASSIGNMENT_ELIGIBLE_EFFECTS


_ALIASES: Dict[str, EffectKind] = {
    "frameshift": EffectKind.FRAMESHIFT_VARIANT,
    "nonsense": EffectKind.STOP_GAINED,
    "stopgain": EffectKind.STOP_GAINED,
    "stoploss": EffectKind.STOP_LOST,
    "splicing": EffectKind.SPLICE_DONOR_VARIANT,
    "missense": EffectKind.MISSENSE_VARIANT,
    "nonsynonymous": EffectKind.MISSENSE_VARIANT,
    "synonymous": EffectKind.SYNONYMOUS_VARIANT,
    "intronic": EffectKind.INTRON_VARIANT,
    "utr5": EffectKind.FIVE_PRIME_UTR_EXON_VARIANT,
    "utr3": EffectKind.THREE_PRIME_UTR_EXON_VARIANT,
    "upstream": EffectKind.UPSTREAM_GENE_VARIANT,
    "downstream": EffectKind.DOWNSTREAM_GENE_VARIANT,
    "intergenic": EffectKind.INTERGENIC_VARIANT,
    "regulatory": EffectKind.REGULATORY_REGION_VARIANT,
}

_TERM_LOOKUP: Dict[str, EffectKind] = {
    **{effect.value.lower(): effect for effect in EffectKind},
    **{effect.name.lower(): effect for effect in EffectKind},
    **_ALIASES,
}
