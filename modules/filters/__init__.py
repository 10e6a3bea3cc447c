"""
Filters

Variant- and gene-level filters, the runners that apply them and the
reports summarising their outcomes.
"""

from modules.filters.base import Filter, GeneFilter, VariantFilter
from modules.filters.variant_filters import (
    DEFAULT_OFF_TARGET_EFFECTS,
    FrequencyFilter,
    GeneSymbolFilter,
    IntervalFilter,
    PathogenicityFilter,
    QualityFilter,
    RegulatoryFeatureFilter,
    VariantEffectFilter,
    make_variant_filters,
)
from modules.filters.gene_filters import (
    KnownGeneFilter,
    PriorityScoreFilter,
    VariantsPassedGeneFilter,
    make_gene_filters,
)
from modules.filters.report import FilterReport
from modules.filters.runner import (
    RUNNER_MODES,
    FilterRunner,
    SimpleFilterRunner,
    SparseFilterRunner,
    is_associated_with_known_gene,
    make_filter_runner,
)

__all__ = [
    # Interfaces
    "Filter",
    "GeneFilter",
    "VariantFilter",
    # Variant filters
    "DEFAULT_OFF_TARGET_EFFECTS",
    "FrequencyFilter",
    "GeneSymbolFilter",
    "IntervalFilter",
    "PathogenicityFilter",
    "QualityFilter",
    "RegulatoryFeatureFilter",
    "VariantEffectFilter",
    "make_variant_filters",
    # Gene filters
    "KnownGeneFilter",
    "PriorityScoreFilter",
    "VariantsPassedGeneFilter",
    "make_gene_filters",
    # Runners and reports
    "FilterReport",
    "RUNNER_MODES",
    "FilterRunner",
    "SimpleFilterRunner",
    "SparseFilterRunner",
    "is_associated_with_known_gene",
    "make_filter_runner",
]
