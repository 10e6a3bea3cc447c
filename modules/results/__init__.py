"""
Results

Aggregation of a finished run: effect-type counts, gene pruning and the
results container handed to reporting.
"""

from modules.results.aggregator import (
    REPORTABLE_EFFECTS,
    count_by_effect,
    prune,
    rank_genes,
)
from modules.results.analysis_results import AnalysisResults

__all__ = [
    "REPORTABLE_EFFECTS",
    "AnalysisResults",
    "count_by_effect",
    "prune",
    "rank_genes",
]
