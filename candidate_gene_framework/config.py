"""
Pipeline Configuration

Dataclass configuration for a prioritisation run, loadable from YAML:

    regions_path: data/tads.tsv
    genes_path: data/gene_scores.tsv
    variants_path: data/variants.tsv
    priority_type: hiphive
    runner: sparse
    max_genes: 20
    filters:
      max_frequency: 1.0
      remove_off_target: true
      min_priority_score: 0.5

Relative input paths in a YAML file are resolved against the file's
directory.
"""

from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
import logging

import yaml

from modules.filters import RUNNER_MODES
from modules.variant_model import EffectKind, PriorityType

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
PATH_KEYS = ("regions_path", "genes_path", "variants_path")


def _reject_unknown_keys(cls, data: Dict[str, Any], section: str) -> None:
    known = {f.name for f in fields(cls)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown {section} option(s): {', '.join(unknown)}")


@dataclass
class FilterConfig:
    """Thresholds and switches selecting the variant and gene filters."""

    # Variant filters
    min_quality: Optional[float] = None
    max_frequency: Optional[float] = None  # percent
    min_pathogenicity: Optional[float] = None
    remove_off_target: bool = False
    off_target_effects: Optional[List[str]] = None  # SO terms; None = defaults
    regulatory_filter: bool = False
    interval: Optional[str] = None  # e.g. "chr10:123256200-123256300"
    gene_symbols: List[str] = field(default_factory=list)

    # Gene filters
    min_priority_score: Optional[float] = None
    known_genes: List[str] = field(default_factory=list)
    require_passed_variants: bool = True

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "FilterConfig":
        data = dict(data or {})
        _reject_unknown_keys(cls, data, "filter")
        return cls(**data)

    def off_target_effect_kinds(self) -> Optional[List[EffectKind]]:
        """
        Off-target effects as effect kinds.

        Raises:
            ValueError: If a term is not a known effect
        """
        if self.off_target_effects is None:
            return None
        kinds = []
        for term in self.off_target_effects:
            kind = EffectKind.from_term(term)
            if kind == EffectKind.CUSTOM and str(term).strip().lower() != "custom":
                raise ValueError(f"Unknown off-target effect: {term}")
            kinds.append(kind)
        return kinds


@dataclass
class PipelineConfig:
    """Complete configuration of a prioritisation run."""

    # Inputs
    regions_path: Optional[str] = None
    genes_path: Optional[str] = None
    variants_path: Optional[str] = None

    # Analysis
    priority_type: str = "hiphive"
    runner: str = "simple"  # simple, sparse
    reassign_in_domain: bool = True
    reassign_by_annotation: bool = True
    max_genes: int = 0  # 0 = report every passed gene
    n_workers: int = 1

    # Samples
    proband_sample_name: str = ""
    sample_names: List[str] = field(default_factory=list)

    log_level: str = "INFO"
    filters: FilterConfig = field(default_factory=FilterConfig)

    def __post_init__(self):
        if isinstance(self.filters, dict):
            self.filters = FilterConfig.from_dict(self.filters)
        self.validate()

    @property
    def priority(self) -> PriorityType:
        return PriorityType.parse(self.priority_type)

    def validate(self) -> None:
        """
        Check option values.

        Raises:
            ValueError: On an invalid value
        """
        PriorityType.parse(self.priority_type)
        if self.runner.lower() not in RUNNER_MODES:
            raise ValueError(
                f"runner must be one of {sorted(RUNNER_MODES)}, got {self.runner!r}"
            )
        if self.max_genes < 0:
            raise ValueError(f"max_genes must be >= 0, got {self.max_genes}")
        if self.n_workers < 1:
            raise ValueError(f"n_workers must be >= 1, got {self.n_workers}")
        if self.log_level.upper() not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {self.log_level}")
        self.filters.off_target_effect_kinds()

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "PipelineConfig":
        """
        Create a configuration from a plain mapping.

        Raises:
            ValueError: On unknown keys or invalid values
        """
        data = dict(data or {})
        _reject_unknown_keys(cls, data, "pipeline")
        data["filters"] = FilterConfig.from_dict(data.get("filters"))
        return cls(**data)

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "PipelineConfig":
        """
        Load a configuration from a YAML file.

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the file is not a mapping, or on unknown keys or
                invalid values
        """
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(config_path, "r") as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ValueError(f"Config file must contain a mapping: {path}")

        for key in PATH_KEYS:
            value = data.get(key)
            if value and not Path(value).is_absolute():
                data[key] = str(config_path.parent / value)

        logger.debug(f"Loaded config from {config_path}")
        return cls.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
