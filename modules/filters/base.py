"""
Filter Interfaces

Variant- and gene-level filters share one capability: ``run(entity)`` returns
a pass/fail outcome without modifying the entity. Recording the outcome is
the job of the filter runners.
"""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from modules.variant_model import FilterResult, FilterType, Gene, VariantEvaluation

T = TypeVar("T")


class Filter(ABC, Generic[T]):
    """A side-effect-free predicate over a variant or a gene."""

    filter_type: FilterType

    @abstractmethod
    def run(self, entity: T) -> FilterResult:
        """Evaluate the entity and return PASS or FAIL."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.filter_type.name})"


class VariantFilter(Filter[VariantEvaluation]):
    """Filter applied to each variant."""


class GeneFilter(Filter[Gene]):
    """Filter applied to each candidate gene."""
