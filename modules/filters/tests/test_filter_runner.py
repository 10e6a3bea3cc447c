"""
Tests for the filter runners and filter reports.
"""

from concurrent.futures import ThreadPoolExecutor

import pytest

from modules.filters import (
    FilterReport,
    FrequencyFilter,
    KnownGeneFilter,
    PriorityScoreFilter,
    QualityFilter,
    SimpleFilterRunner,
    SparseFilterRunner,
    is_associated_with_known_gene,
    make_filter_runner,
)
from modules.variant_model import (
    FilterResult,
    FilterType,
    Gene,
    GeneRegistry,
    PriorityType,
    VariantEvaluation,
)


def make_variant(quality, frequency, gene_symbol="FGFR2"):
    return VariantEvaluation(
        chromosome=10,
        position=100,
        ref="A",
        alt="G",
        gene_symbol=gene_symbol,
        quality=quality,
        frequency=frequency,
    )


@pytest.fixture
def filters():
    """Quality then frequency filter."""
    return [QualityFilter(30.0), FrequencyFilter(1.0)]


class TestSimpleFilterRunner:
    """Tests for exhaustive filtering."""

    def test_runs_every_filter(self, filters):
        """Test all filters run even after a failure."""
        runner = SimpleFilterRunner()
        variant = make_variant(quality=10.0, frequency=5.0)

        assert not runner.run(filters, variant)
        assert variant.filter_results == {
            FilterType.QUALITY_FILTER: FilterResult.FAIL,
            FilterType.FREQUENCY_FILTER: FilterResult.FAIL,
        }

    def test_passing_entity(self, filters):
        """Test a passing variant records PASS for every filter."""
        runner = SimpleFilterRunner()
        variant = make_variant(quality=50.0, frequency=0.1)

        assert runner.run(filters, variant)
        assert set(variant.filter_results.values()) == {FilterResult.PASS}

    def test_counts(self, filters):
        """Test per-filter tallies."""
        runner = SimpleFilterRunner()
        variants = [
            make_variant(50.0, 0.1),
            make_variant(10.0, 0.1),
            make_variant(10.0, 5.0),
        ]
        passing = runner.run_all(filters, variants)

        assert passing == [variants[0]]
        assert runner.filter_reports() == [
            FilterReport(FilterType.QUALITY_FILTER, 1, 2),
            FilterReport(FilterType.FREQUENCY_FILTER, 2, 1),
        ]

    def test_reset(self, filters):
        """Test tallies can be cleared."""
        runner = SimpleFilterRunner()
        runner.run(filters, make_variant(50.0, 0.1))
        runner.reset()
        assert runner.filter_reports() == []


class TestSparseFilterRunner:
    """Tests for short-circuit filtering."""

    def test_stops_at_first_failure(self, filters):
        """Test filters after a failure are recorded as NOT_RUN."""
        runner = SparseFilterRunner()
        variant = make_variant(quality=10.0, frequency=0.1)

        assert not runner.run(filters, variant)
        assert variant.filter_results == {
            FilterType.QUALITY_FILTER: FilterResult.FAIL,
            FilterType.FREQUENCY_FILTER: FilterResult.NOT_RUN,
        }

    def test_not_run_is_not_counted(self, filters):
        """Test skipped filters are absent from the tallies."""
        runner = SparseFilterRunner()
        runner.run_all(filters, [make_variant(10.0, 0.1), make_variant(50.0, 0.1)])

        assert runner.filter_reports() == [
            FilterReport(FilterType.QUALITY_FILTER, 1, 1),
            FilterReport(FilterType.FREQUENCY_FILTER, 1, 0),
        ]

    def test_same_pass_state_as_simple(self, filters):
        """Test both policies agree on which entities pass."""
        variants = [make_variant(q, f) for q in (10.0, 50.0) for f in (0.1, 5.0)]
        simple = SimpleFilterRunner().run_all(filters, [make_variant(v.quality, v.frequency) for v in variants])
        sparse = SparseFilterRunner().run_all(filters, variants)
        assert [(v.quality, v.frequency) for v in simple] == [
            (v.quality, v.frequency) for v in sparse
        ]


class TestGeneFiltering:
    """Tests for runners over genes."""

    def test_gene_outcomes_recorded(self):
        """Test gene filter outcomes land on the registry's genes."""
        registry = GeneRegistry([Gene("FGFR2", 2263), Gene("SHH", 6469)])
        registry.get("FGFR2").add_priority_score(PriorityType.HIPHIVE_PRIORITY, 0.9)
        runner = SimpleFilterRunner(registry)
        gene_filters = [
            KnownGeneFilter.of(["FGFR2", "SHH"]),
            PriorityScoreFilter(PriorityType.HIPHIVE_PRIORITY, 0.5),
        ]

        passing = runner.run_all(gene_filters, registry.genes)

        assert [g.symbol for g in passing] == ["FGFR2"]
        assert registry.get("FGFR2").passed_filters
        assert not registry.get("SHH").passed_filters

    def test_concurrent_runs(self, filters):
        """Test tallies are exact when a runner is shared across threads."""
        runner = SimpleFilterRunner()
        variants = [make_variant(50.0 if i % 2 else 10.0, 0.1) for i in range(400)]

        with ThreadPoolExecutor(max_workers=8) as executor:
            results = list(executor.map(lambda v: runner.run(filters, v), variants))

        assert sum(results) == 200
        report = runner.filter_reports()[0]
        assert (report.passed, report.failed) == (200, 200)


class TestRunnerFactory:
    """Tests for make_filter_runner."""

    def test_modes(self):
        """Test runner modes by name."""
        assert isinstance(make_filter_runner("simple"), SimpleFilterRunner)
        assert isinstance(make_filter_runner("SPARSE"), SparseFilterRunner)
        assert make_filter_runner("sparse").mode == "sparse"

    def test_unknown_mode(self):
        """Test unknown modes raise."""
        with pytest.raises(ValueError):
            make_filter_runner("passthrough")


class TestKnownGenePredicate:
    """Tests for is_associated_with_known_gene."""

    def test_membership(self):
        """Test variants are matched to registered symbols."""
        registry = GeneRegistry([Gene("FGFR2", 2263)])
        known = is_associated_with_known_gene(registry)
        assert known(make_variant(50.0, 0.1, gene_symbol="FGFR2"))
        assert not known(make_variant(50.0, 0.1, gene_symbol="."))


class TestFilterReport:
    """Tests for FilterReport."""

    def test_str(self):
        """Test text form."""
        report = FilterReport(FilterType.FREQUENCY_FILTER, 12, 345)
        assert str(report) == "FilterReport for FREQUENCY_FILTER: pass:12 fail:345 []"

    def test_messages(self):
        """Test adding messages."""
        report = FilterReport(FilterType.QUALITY_FILTER, 1, 2)
        assert not report.has_messages()
        assert report.add_message("min quality 30")
        assert report.has_messages()
        assert report.total == 3
        assert str(report) == "FilterReport for QUALITY_FILTER: pass:1 fail:2 ['min quality 30']"

    def test_equality_and_hash(self):
        """Test value equality and hashing over all fields."""
        a = FilterReport(FilterType.QUALITY_FILTER, 1, 2, ["x"])
        b = FilterReport(FilterType.QUALITY_FILTER, 1, 2, ["x"])
        c = FilterReport(FilterType.QUALITY_FILTER, 1, 2)

        assert a == b
        assert hash(a) == hash(b)
        assert a != c
        assert len({a, b, c}) == 2
