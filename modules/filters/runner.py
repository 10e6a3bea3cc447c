"""
Filter Runners

Apply an ordered list of filters to variants or genes, record the outcome of
each filter on the entity and tally pass/fail counts per filter type.

Two evaluation policies are available:
- SimpleFilterRunner runs every filter, even after one has failed, so that
  every outcome is known for reporting.
- SparseFilterRunner stops at the first failure and records the remaining
  filters as NOT_RUN.
"""

from collections import OrderedDict
from typing import Dict, Iterable, List, Optional, Sequence, TypeVar
import logging
import threading

from modules.filters.base import Filter
from modules.filters.report import FilterReport
from modules.variant_model import FilterResult, FilterType, Gene, GeneRegistry

logger = logging.getLogger(__name__)

T = TypeVar("T")


class FilterRunner:
    """
    Runs filters over entities and keeps per-filter pass/fail tallies.

    A runner may be shared by worker threads evaluating different entities;
    the tallies are updated under a lock. Outcomes on genes are written under
    the gene registry's per-symbol lock when a registry is given.
    """

    short_circuit = False

    def __init__(self, registry: Optional[GeneRegistry] = None):
        """
        Args:
            registry: Gene registry whose per-symbol locks guard writes to
                gene-level outcomes
        """
        self.registry = registry
        self._counts: Dict[FilterType, List[int]] = OrderedDict()
        self._lock = threading.Lock()

    @property
    def mode(self) -> str:
        return "sparse" if self.short_circuit else "simple"

    def run(self, filters: Sequence[Filter], entity) -> bool:
        """
        Run the filters over one entity in order.

        Args:
            filters: Ordered filters
            entity: Variant or gene

        Returns:
            True if every filter run in this call passed the entity
        """
        passed = True
        for i, entity_filter in enumerate(filters):
            result = entity_filter.run(entity)
            self._record(entity, entity_filter.filter_type, result)

            if result == FilterResult.FAIL:
                passed = False
                if self.short_circuit:
                    for skipped in filters[i + 1:]:
                        self._write(entity, skipped.filter_type, FilterResult.NOT_RUN)
                    break

        return passed

    def run_all(self, filters: Sequence[Filter], entities: Iterable[T]) -> List[T]:
        """
        Run the filters over each entity.

        Returns:
            Entities that passed every filter, in input order
        """
        entities = list(entities)
        passing = [entity for entity in entities if self.run(filters, entity)]

        logger.info(
            f"{self.mode.capitalize()} filtering: {len(entities)} -> {len(passing)} "
            f"({100 * len(passing) / max(len(entities), 1):.1f}% passed)"
        )
        return passing

    def _record(self, entity, filter_type: FilterType, result: FilterResult) -> None:
        self._write(entity, filter_type, result)
        with self._lock:
            counts = self._counts.setdefault(filter_type, [0, 0])
            if result == FilterResult.PASS:
                counts[0] += 1
            elif result == FilterResult.FAIL:
                counts[1] += 1

    def _write(self, entity, filter_type: FilterType, result: FilterResult) -> None:
        if self.registry is not None and isinstance(entity, Gene):
            with self.registry.lock(entity.symbol):
                entity.add_filter_result(filter_type, result)
        else:
            entity.add_filter_result(filter_type, result)

    def filter_reports(self) -> List[FilterReport]:
        """Reports for every filter run so far, in the order first run."""
        with self._lock:
            return [
                FilterReport(filter_type, passed, failed)
                for filter_type, (passed, failed) in self._counts.items()
            ]

    def reset(self) -> None:
        with self._lock:
            self._counts.clear()


class SimpleFilterRunner(FilterRunner):
    """Runs every filter on every entity."""

    short_circuit = False


class SparseFilterRunner(FilterRunner):
    """Stops evaluating an entity at its first failed filter."""

    short_circuit = True


RUNNER_MODES = {
    "simple": SimpleFilterRunner,
    "sparse": SparseFilterRunner,
}


def make_filter_runner(mode: str, registry: Optional[GeneRegistry] = None) -> FilterRunner:
    """
    Create a filter runner for a policy name.

    Raises:
        ValueError: If the mode is not "simple" or "sparse"
    """
    runner_class = RUNNER_MODES.get(mode.lower())
    if runner_class is None:
        raise ValueError(f"Unknown filter runner mode: {mode}")
    return runner_class(registry)


def is_associated_with_known_gene(registry: GeneRegistry):
    """Predicate: the variant's current gene symbol is in the registry."""
    return lambda variant: variant.gene_symbol in registry
