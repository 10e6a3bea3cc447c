"""
Tests for chromosomal regions and the region index.
"""

import math
import random

import pytest

from modules.region_index import (
    InvalidRegionError,
    Region,
    RegionIndex,
    parse_chromosome,
)
from modules.variant_model import VariantEvaluation


class TestParseChromosome:
    """Tests for chromosome token parsing."""

    def test_numeric(self):
        """Test numeric tokens."""
        assert parse_chromosome(1) == 1
        assert parse_chromosome("22") == 22

    def test_prefixed_and_sex_chromosomes(self):
        """Test chr prefix and X/Y/M names."""
        assert parse_chromosome("chr10") == 10
        assert parse_chromosome("chrX") == 23
        assert parse_chromosome("y") == 24
        assert parse_chromosome("MT") == 25
        assert parse_chromosome("chrM") == 25

    @pytest.mark.parametrize("token", [0, 26, "chr0", "23a", "Un", True, ""])
    def test_unknown(self, token):
        """Test unknown tokens raise InvalidRegionError."""
        with pytest.raises(InvalidRegionError):
            parse_chromosome(token)


class TestRegion:
    """Tests for Region."""

    def test_of(self):
        """Test building from a token and a gene list."""
        region = Region.of("chr10", 100, 200, ["FGFR2", "ATE1"])
        assert region.chromosome == 10
        assert region.genes == frozenset({"FGFR2", "ATE1"})
        assert region.length == 101

    def test_contains_is_closed(self):
        """Test both boundaries are inside the region."""
        region = Region.of(10, 100, 200)
        assert region.contains(10, 100)
        assert region.contains(10, 200)
        assert not region.contains(10, 99)
        assert not region.contains(10, 201)
        assert not region.contains(11, 150)

    def test_validate(self):
        """Test start after end is invalid."""
        with pytest.raises(InvalidRegionError):
            Region(10, 200, 100).validate()
        with pytest.raises(InvalidRegionError):
            Region(30, 1, 2).validate()

    def test_error_is_value_error(self):
        """Test InvalidRegionError is a ValueError."""
        assert issubclass(InvalidRegionError, ValueError)


class TestRegionIndex:
    """Tests for RegionIndex."""

    @pytest.fixture
    def regions(self):
        """Create overlapping regions on two chromosomes."""
        return [
            Region.of(10, 100, 500, ["A"]),
            Region.of(10, 150, 200, ["B"]),
            Region.of(10, 100, 300, ["C"]),
            Region.of(10, 600, 700, ["D"]),
            Region.of("X", 1, 1000, ["E"]),
        ]

    @pytest.fixture
    def index(self, regions):
        """Build an index over the sample regions."""
        return RegionIndex.build(regions)

    def test_build(self, index):
        """Test index size and chromosomes."""
        assert len(index) == 5
        assert index.chromosomes == [10, 23]

    def test_containing_ordered_by_start_then_end(self, index):
        """Test hits are ordered by (start, end)."""
        hits = index.regions_containing(10, 175)
        assert [sorted(r.genes)[0] for r in hits] == ["C", "A", "B"]

    def test_boundaries(self, index):
        """Test positions on region boundaries."""
        assert [r.start for r in index.regions_containing(10, 100)] == [100, 100]
        assert len(index.regions_containing(10, 500)) == 1
        assert index.regions_containing(10, 501) == []
        assert len(index.regions_containing(10, 700)) == 1

    def test_no_hits(self, index):
        """Test positions outside every region."""
        assert index.regions_containing(10, 50) == []
        assert index.regions_containing(10, 550) == []
        assert index.regions_containing(10, 10_000) == []

    def test_chromosome_tokens(self, index):
        """Test chromosome names, absent and unknown chromosomes."""
        assert len(index.regions_containing("chr10", 175)) == 3
        assert len(index.regions_containing("chrX", 5)) == 1
        assert index.regions_containing(2, 175) == []
        assert index.regions_containing("chrUn", 175) == []

    def test_regions_containing_variant(self, index):
        """Test querying with a variant."""
        variant = VariantEvaluation(10, 650, "A", "G")
        hits = index.regions_containing_variant(variant)
        assert len(hits) == 1
        assert hits[0].genes == frozenset({"D"})

    def test_identical_regions_keep_input_order(self):
        """Test duplicates are returned in input order."""
        first = Region.of(1, 10, 20, ["FIRST"])
        second = Region.of(1, 10, 20, ["SECOND"])
        index = RegionIndex.build([first, second])
        assert index.regions_containing(1, 15) == [first, second]

    def test_repeated_queries_are_stable(self, index):
        """Test identical queries return identical results."""
        assert index.regions_containing(10, 175) == index.regions_containing(10, 175)

    def test_invalid_region_fails_build(self, regions):
        """Test a malformed region aborts the build."""
        regions.append(Region(10, 900, 800))
        with pytest.raises(InvalidRegionError, match="#5"):
            RegionIndex.build(regions)

    def test_empty_index(self):
        """Test an index without regions."""
        index = RegionIndex.build([])
        assert len(index) == 0
        assert index.regions_containing(1, 1) == []

    def test_arrays_are_read_only(self, index):
        """Test index arrays cannot be modified."""
        root = index._trees[10].root
        with pytest.raises(ValueError):
            root.starts[0] = 0
        with pytest.raises(ValueError):
            root.by_end[0] = 0

    def test_matches_linear_scan(self):
        """Test random queries against a brute-force scan."""
        rng = random.Random(7)
        regions = []
        for _ in range(300):
            start = rng.randint(1, 10_000)
            regions.append(Region.of(1, start, start + rng.randint(0, 2_000)))
        index = RegionIndex.build(regions)

        for _ in range(500):
            position = rng.randint(1, 13_000)
            expected = sorted(
                (r for r in regions if r.start <= position <= r.end),
                key=lambda r: (r.start, r.end),
            )
            assert index.regions_containing(1, position) == expected

    def test_nested_domains_match_linear_scan(self):
        """Test hierarchical domains against a brute-force scan."""
        rng = random.Random(11)
        regions = [Region.of(2, 1, 1_000_000, ["WHOLE"])]
        for level in (100_000, 10_000, 1_000):
            for start in range(1, 1_000_000, level):
                regions.append(Region.of(2, start, start + level - 1))
        index = RegionIndex.build(regions)

        for _ in range(200):
            position = rng.randint(1, 1_000_100)
            expected = sorted(
                (r for r in regions if r.start <= position <= r.end),
                key=lambda r: (r.start, r.end),
            )
            assert index.regions_containing(2, position) == expected


class TestRegionIndexQueryCost:
    """Tests that query work depends on the hits, not the index size."""

    @pytest.fixture(scope="class")
    def tree(self):
        """One chromosome-wide domain plus many small disjoint domains."""
        regions = [Region.of(1, 1, 1_000_000_000, ["WHOLE"])]
        regions.extend(
            Region.of(1, start, start + 99) for start in range(1, 5_000_000, 250)
        )
        index = RegionIndex.build(regions)
        return index._trees[1]

    def test_tree_is_balanced(self, tree):
        """Test the tree depth is logarithmic in the region count."""
        assert tree.depth <= math.log2(len(tree.regions)) + 1

    @pytest.mark.parametrize("position", [2_000_000, 2_000_010, 4_999_999, 7_000_000])
    def test_work_grows_with_hits(self, tree, position):
        """Test a query touches only the regions it returns."""
        chunks = list(tree._walk(position))
        hits = tree.containing(position)

        assert len(chunks) <= tree.depth
        assert sum(len(chunk) for chunk in chunks) == len(hits)
        assert hits[0].genes == frozenset({"WHOLE"})
        assert len(hits) <= 2
