"""
Region Index

Spatial index over an immutable collection of chromosomal regions answering
"which regions contain this position" queries.

Each chromosome is held as a centred interval tree over numpy arrays. A node
stores the regions that span its centre twice, sorted by start and sorted by
descending end, so a query only touches regions it returns plus one node per
tree level.
"""

from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional, Tuple, Union
import logging

import numpy as np

from modules.region_index.regions import (
    InvalidRegionError,
    Region,
    parse_chromosome,
)

logger = logging.getLogger(__name__)


def _read_only(array: np.ndarray) -> np.ndarray:
    array.setflags(write=False)
    return array


@dataclass(frozen=True)
class _CentredNode:
    """
    One node of a centred interval tree.

    Every region in the node contains ``centre``. Regions lying wholly
    left or right of the centre live in the child subtrees.
    """

    centre: int
    by_start: np.ndarray
    starts: np.ndarray
    by_end: np.ndarray
    neg_ends: np.ndarray
    left: Optional["_CentredNode"]
    right: Optional["_CentredNode"]

    @classmethod
    def build(
        cls, ordinals: np.ndarray, starts: np.ndarray, ends: np.ndarray
    ) -> Optional["_CentredNode"]:
        if ordinals.size == 0:
            return None

        node_starts = starts[ordinals]
        node_ends = ends[ordinals]

        # Upper median of all endpoints: each child gets at most half the regions
        points = np.concatenate((node_starts, node_ends))
        middle = points.size // 2
        centre = int(np.partition(points, middle)[middle])

        go_left = node_ends < centre
        go_right = node_starts > centre
        here = ~(go_left | go_right)

        mid = ordinals[here]
        start_order = np.argsort(starts[mid], kind="stable")
        end_order = np.argsort(-ends[mid], kind="stable")
        by_start = mid[start_order]
        by_end = mid[end_order]

        return cls(
            centre=centre,
            by_start=_read_only(by_start),
            starts=_read_only(starts[by_start]),
            by_end=_read_only(by_end),
            neg_ends=_read_only(-ends[by_end]),
            left=cls.build(ordinals[go_left], starts, ends),
            right=cls.build(ordinals[go_right], starts, ends),
        )

    @property
    def depth(self) -> int:
        children = [c.depth for c in (self.left, self.right) if c is not None]
        return 1 + max(children, default=0)


class _ChromosomeTree:
    """
    Regions of one chromosome, numbered by (start, end, input order).

    Queries return those numbers, so sorting hits restores that order.
    """

    def __init__(self, regions: List[Region]):
        self.regions: Tuple[Region, ...] = tuple(
            sorted(regions, key=lambda r: (r.start, r.end))
        )
        n = len(self.regions)
        starts = np.fromiter((r.start for r in self.regions), dtype=np.int64, count=n)
        ends = np.fromiter((r.end for r in self.regions), dtype=np.int64, count=n)
        self.root = _CentredNode.build(np.arange(n, dtype=np.int64), starts, ends)
        self.depth = self.root.depth if self.root is not None else 0

    def _walk(self, position: int) -> Iterator[np.ndarray]:
        """Yield the ordinals of the hits found at each visited node."""
        node = self.root
        while node is not None:
            if position < node.centre:
                n = int(np.searchsorted(node.starts, position, side="right"))
                yield node.by_start[:n]
                node = node.left
            elif position > node.centre:
                n = int(np.searchsorted(node.neg_ends, -position, side="right"))
                yield node.by_end[:n]
                node = node.right
            else:
                yield node.by_start
                return

    def containing(self, position: int) -> List[Region]:
        hits = [chunk for chunk in self._walk(position) if chunk.size]
        if not hits:
            return []
        ordinals = np.sort(np.concatenate(hits))
        return [self.regions[int(i)] for i in ordinals]


class RegionIndex:
    """
    Read-only index of chromosomal regions.

    Built once with ``RegionIndex.build`` and never mutated afterwards, so a
    single instance can be queried concurrently from many worker threads
    without locking. A query visits O(log n) tree nodes and touches only the
    k regions it returns, which are then put in (start, end, input order).
    """

    def __init__(self, trees: Dict[int, _ChromosomeTree], n_regions: int):
        self._trees = dict(trees)
        self._n_regions = n_regions

    @classmethod
    def build(cls, regions: Iterable[Region]) -> "RegionIndex":
        """
        Build an index from a collection of regions.

        Args:
            regions: Regions to index; may overlap or nest

        Returns:
            RegionIndex over all regions

        Raises:
            InvalidRegionError: If any region has start > end or an unknown
                chromosome. No partial index is produced.
        """
        grouped: Dict[int, List[Region]] = defaultdict(list)
        n_regions = 0

        for i, region in enumerate(regions):
            try:
                region.validate()
            except InvalidRegionError as e:
                raise InvalidRegionError(f"Invalid region #{i}: {e}") from e
            grouped[region.chromosome].append(region)
            n_regions += 1

        trees = {
            chromosome: _ChromosomeTree(chrom_regions)
            for chromosome, chrom_regions in grouped.items()
        }

        logger.info(
            f"Built region index: {n_regions} regions on {len(trees)} chromosomes"
        )

        return cls(trees, n_regions)

    def __len__(self) -> int:
        return self._n_regions

    @property
    def chromosomes(self) -> List[int]:
        return sorted(self._trees.keys())

    def regions_containing(
        self, chromosome: Union[int, str], position: int
    ) -> List[Region]:
        """
        Get all regions whose [start, end] interval contains the position.

        Args:
            chromosome: Numeric chromosome or chromosome name ("chr10", "X")
            position: 1-based position

        Returns:
            Matching regions ordered by (start, end, input order). Empty for
            chromosomes without regions, including unknown chromosome names.
        """
        if not isinstance(chromosome, int):
            try:
                chromosome = parse_chromosome(chromosome)
            except InvalidRegionError:
                logger.debug(f"No regions for unknown chromosome {chromosome!r}")
                return []

        tree = self._trees.get(chromosome)
        if tree is None:
            return []
        return tree.containing(position)

    def regions_containing_variant(self, variant) -> List[Region]:
        """Regions containing a variant's position (anything with chromosome/position)."""
        return self.regions_containing(variant.chromosome, variant.position)
