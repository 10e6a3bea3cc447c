"""
Genes and Gene Registry

Gene records carrying prioritiser scores and gene-level filter outcomes, and
the shared symbol-keyed registry through which pipeline stages look them up.
"""

from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Optional
import logging
import threading

from modules.variant_model.filter_status import FilterResult, FilterType
from modules.variant_model.variant import VariantEvaluation

logger = logging.getLogger(__name__)


class PriorityType(Enum):
    """Phenotype / pathogenicity prioritisers whose gene scores can be compared."""

    HIPHIVE_PRIORITY = "hiphive"
    PHIVE_PRIORITY = "phive"
    PHENIX_PRIORITY = "phenix"
    OMIM_PRIORITY = "omim"
    EXOMEWALKER_PRIORITY = "exomewalker"
    NONE = "none"

    @classmethod
    def parse(cls, value: str) -> "PriorityType":
        """Parse a priority type from its name or short value."""
        key = value.strip()
        for priority_type in cls:
            if key.upper() == priority_type.name or key.lower() == priority_type.value:
                return priority_type
        raise ValueError(f"Unknown priority type: {value}")


@dataclass
class Gene:
    """
    A candidate gene.

    Attributes:
        symbol: HGNC gene symbol
        entrez_id: NCBI Entrez gene identifier
        priority_scores: Prioritiser scores keyed by priority type
        filter_results: Gene-level filter outcomes
        variant_evaluations: Variants currently assigned to this gene
    """

    symbol: str
    entrez_id: int
    priority_scores: Dict[PriorityType, float] = field(default_factory=dict)
    filter_results: Dict[FilterType, FilterResult] = field(default_factory=dict)
    variant_evaluations: List[VariantEvaluation] = field(default_factory=list)

    @property
    def passed_filters(self) -> bool:
        """Logical AND of all gene-level filter outcomes."""
        return FilterResult.FAIL not in self.filter_results.values()

    def has_priority_score(self, priority_type: PriorityType) -> bool:
        return priority_type in self.priority_scores

    def priority_score(self, priority_type: PriorityType) -> float:
        """Score for the priority type, or 0.0 when it was not scored."""
        return self.priority_scores.get(priority_type, 0.0)

    def add_priority_score(self, priority_type: PriorityType, score: float) -> None:
        self.priority_scores[priority_type] = float(score)

    def add_filter_result(self, filter_type: FilterType, result: FilterResult) -> None:
        self.filter_results[filter_type] = result

    def add_variant_evaluation(self, variant: VariantEvaluation) -> None:
        self.variant_evaluations.append(variant)

    @property
    def passed_variant_evaluations(self) -> List[VariantEvaluation]:
        return [v for v in self.variant_evaluations if v.passed_filters]

    def __repr__(self) -> str:
        scores = {k.name: v for k, v in self.priority_scores.items()}
        return (
            f"Gene(symbol={self.symbol!r}, entrez_id={self.entrez_id}, "
            f"scores={scores}, "
            f"passed_filters={self.passed_filters}, "
            f"n_variants={len(self.variant_evaluations)})"
        )


class GeneRegistry:
    """
    Mapping from gene symbol to Gene, shared by all pipeline stages.

    The registry is populated (and scored) before the pipeline starts.
    Reads are lock-free; read-modify-write sequences against one gene must
    be wrapped in ``lock(symbol)``, which serialises access per symbol so
    that different genes can be updated in parallel.
    """

    def __init__(self, genes: Optional[Iterable[Gene]] = None):
        self._genes: Dict[str, Gene] = {}
        self._locks: Dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()

        for gene in genes or []:
            self.add(gene)

    def __len__(self) -> int:
        return len(self._genes)

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._genes

    def __iter__(self) -> Iterator[Gene]:
        return iter(list(self._genes.values()))

    def add(self, gene: Gene) -> None:
        """
        Register a gene.

        Raises:
            ValueError: If a gene with the same symbol is already registered
        """
        if gene.symbol in self._genes:
            raise ValueError(f"Gene already registered: {gene.symbol}")
        self._genes[gene.symbol] = gene

    def get(self, symbol: Optional[str]) -> Optional[Gene]:
        """Look up a gene by symbol; returns None on a miss."""
        if symbol is None:
            return None
        return self._genes.get(symbol)

    @property
    def symbols(self) -> List[str]:
        return list(self._genes.keys())

    @property
    def genes(self) -> List[Gene]:
        return list(self._genes.values())

    @contextmanager
    def lock(self, symbol: str) -> Iterator[Optional[Gene]]:
        """
        Hold the per-symbol lock and yield the gene (None on a miss).

        Example:
            with registry.lock("FGFR2") as gene:
                if gene is not None:
                    gene.add_filter_result(...)
        """
        with self._locks_guard:
            symbol_lock = self._locks.get(symbol)
            if symbol_lock is None:
                symbol_lock = threading.Lock()
                self._locks[symbol] = symbol_lock

        with symbol_lock:
            yield self._genes.get(symbol)

    def record_filter_result(
        self, symbol: str, filter_type: FilterType, result: FilterResult
    ) -> None:
        """Record a gene-level filter outcome under the gene's lock."""
        with self.lock(symbol) as gene:
            if gene is not None:
                gene.add_filter_result(filter_type, result)

    def assign_variant(self, variant: VariantEvaluation) -> bool:
        """
        Attach a variant to the gene it is currently assigned to.

        Returns:
            True if the variant's gene is known and the variant was attached
        """
        with self.lock(variant.gene_symbol) as gene:
            if gene is None:
                return False
            gene.add_variant_evaluation(variant)
            return True
