"""
Variant Model

Core data model shared by every module: effect kinds, variants with their
annotations, genes with prioritiser scores and the gene registry.
"""

from modules.variant_model.effects import (
    EffectKind,
    REASSIGNMENT_ELIGIBLE_EFFECTS,
    is_reassignment_eligible,
)
from modules.variant_model.filter_status import FilterResult, FilterType
from modules.variant_model.variant import Annotation, VariantEvaluation
from modules.variant_model.gene import Gene, GeneRegistry, PriorityType

__all__ = [
    # Effects
    "EffectKind",
    "REASSIGNMENT_ELIGIBLE_EFFECTS",
    "is_reassignment_eligible",
    # Filter status
    "FilterResult",
    "FilterType",
    # Variants
    "Annotation",
    "VariantEvaluation",
    # Genes
    "Gene",
    "GeneRegistry",
    "PriorityType",
]
