"""
Tests for pipeline configuration and logging setup.
"""

import logging

import pytest
import yaml

from candidate_gene_framework.config import FilterConfig, PipelineConfig
from candidate_gene_framework.logging_config import LOG_FORMAT, configure_logging
from modules.variant_model import EffectKind, PriorityType


class TestFilterConfig:
    """Tests for FilterConfig."""

    def test_defaults(self):
        """Test no filter is enabled by default except passed variants."""
        config = FilterConfig()
        assert config.min_quality is None
        assert not config.remove_off_target
        assert config.require_passed_variants
        assert config.off_target_effect_kinds() is None

    def test_off_target_effect_kinds(self):
        """Test SO terms are converted to effect kinds."""
        config = FilterConfig(off_target_effects=["intron_variant", "synonymous"])
        assert config.off_target_effect_kinds() == [
            EffectKind.INTRON_VARIANT,
            EffectKind.SYNONYMOUS_VARIANT,
        ]

    def test_unknown_key(self):
        """Test unknown filter options are rejected."""
        with pytest.raises(ValueError, match="min_depth"):
            FilterConfig.from_dict({"min_depth": 10})


class TestPipelineConfig:
    """Tests for PipelineConfig."""

    def test_defaults(self):
        """Test default configuration."""
        config = PipelineConfig()
        assert config.runner == "simple"
        assert config.max_genes == 0
        assert config.n_workers == 1
        assert config.priority == PriorityType.HIPHIVE_PRIORITY
        assert isinstance(config.filters, FilterConfig)

    @pytest.mark.parametrize("options", [
        {"runner": "lazy"},
        {"max_genes": -1},
        {"n_workers": 0},
        {"priority_type": "magic"},
        {"log_level": "LOUD"},
        {"filters": {"off_target_effects": ["not_an_effect"]}},
    ])
    def test_invalid_values(self, options):
        """Test invalid values raise ValueError."""
        with pytest.raises(ValueError):
            PipelineConfig.from_dict(options)

    def test_unknown_key(self):
        """Test unknown pipeline options are rejected."""
        with pytest.raises(ValueError, match="seed"):
            PipelineConfig.from_dict({"seed": 42})

    def test_from_dict_nested_filters(self):
        """Test nested filter options."""
        config = PipelineConfig.from_dict({
            "runner": "sparse",
            "filters": {"max_frequency": 0.5, "known_genes": ["FGFR2"]},
        })
        assert config.runner == "sparse"
        assert config.filters.max_frequency == 0.5
        assert config.filters.known_genes == ["FGFR2"]

    def test_round_trip(self):
        """Test to_dict output is accepted by from_dict."""
        config = PipelineConfig(max_genes=5, filters=FilterConfig(min_quality=20.0))
        assert PipelineConfig.from_dict(config.to_dict()) == config

    def test_from_yaml(self, tmp_path):
        """Test YAML loading resolves relative paths."""
        path = tmp_path / "config.yaml"
        path.write_text(yaml.safe_dump({
            "genes_path": "genes.tsv",
            "variants_path": "/abs/variants.tsv",
            "max_genes": 3,
            "filters": {"min_quality": 30},
        }))

        config = PipelineConfig.from_yaml(path)

        assert config.genes_path == str(tmp_path / "genes.tsv")
        assert config.variants_path == "/abs/variants.tsv"
        assert config.max_genes == 3
        assert config.filters.min_quality == 30

    def test_from_empty_yaml(self, tmp_path):
        """Test an empty file gives the defaults."""
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert PipelineConfig.from_yaml(path) == PipelineConfig()

    def test_from_yaml_not_mapping(self, tmp_path):
        """Test a YAML list is rejected."""
        path = tmp_path / "config.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ValueError):
            PipelineConfig.from_yaml(path)

    def test_from_yaml_missing(self, tmp_path):
        """Test a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            PipelineConfig.from_yaml(tmp_path / "missing.yaml")


class TestConfigureLogging:
    """Tests for configure_logging."""

    @pytest.fixture(autouse=True)
    def restore_root_handlers(self):
        root = logging.getLogger()
        handlers = list(root.handlers)
        level = root.level
        yield
        for handler in list(root.handlers):
            root.removeHandler(handler)
        for handler in handlers:
            root.addHandler(handler)
        root.setLevel(level)

    def test_single_handler(self):
        """Test repeated calls leave one console handler."""
        root = configure_logging("DEBUG")
        configure_logging(logging.INFO)

        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0], logging.StreamHandler)
        assert root.handlers[0].formatter._fmt == LOG_FORMAT
        assert root.level == logging.INFO

    def test_unknown_level(self):
        """Test unknown level names raise."""
        with pytest.raises(ValueError):
            configure_logging("LOUD")
