"""
Filter Status

Identifiers for the filters that can be applied to variants and genes and
the outcome recorded for each of them.
"""

from enum import Enum


class FilterType(Enum):
    """Kinds of variant- and gene-level filters."""

    QUALITY_FILTER = "quality"
    FREQUENCY_FILTER = "frequency"
    PATHOGENICITY_FILTER = "pathogenicity"
    VARIANT_EFFECT_FILTER = "variant-effect"
    REGULATORY_FEATURE_FILTER = "regulatory-feature"
    INTERVAL_FILTER = "interval"
    GENE_SYMBOL_FILTER = "gene-symbol"
    KNOWN_GENE_FILTER = "known-gene"
    PRIORITY_SCORE_FILTER = "priority-score"
    VARIANTS_PASSED_FILTER = "variants-passed"

    def __str__(self) -> str:
        return self.name


class FilterResult(Enum):
    """Outcome of running one filter over one entity."""

    PASS = "PASS"
    FAIL = "FAIL"
    NOT_RUN = "NOT_RUN"

    @classmethod
    def of(cls, passed: bool) -> "FilterResult":
        return cls.PASS if passed else cls.FAIL
