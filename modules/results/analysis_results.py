"""
Analysis Results

Container for everything a completed prioritisation run hands to reporting.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from modules.filters import FilterReport
from modules.variant_model import EffectKind, Gene, VariantEvaluation


@dataclass
class AnalysisResults:
    """
    Results of one analysis.

    Attributes:
        proband_sample_name: Name of the affected individual
        sample_names: Names of all genotyped samples, in genotype order
        vcf_path: Variant source the run was made from
        ped_path: Pedigree file, if any
        variant_evaluations: All variants, including those with unknown genes
        genes: Ranked genes with their assigned variants
        filter_reports: Pass/fail tallies per filter
        effect_counts: Per-sample variant counts by effect type
        top_genes: Ranked genes that passed filtering, limited for reporting
    """

    proband_sample_name: str = ""
    sample_names: List[str] = field(default_factory=list)
    vcf_path: Optional[Path] = None
    ped_path: Optional[Path] = None
    variant_evaluations: List[VariantEvaluation] = field(default_factory=list)
    genes: List[Gene] = field(default_factory=list)
    filter_reports: List[FilterReport] = field(default_factory=list)
    effect_counts: Dict[EffectKind, List[int]] = field(default_factory=dict)
    top_genes: List[Gene] = field(default_factory=list)

    @property
    def unannotated_variant_evaluations(self) -> List[VariantEvaluation]:
        """Variants without any transcript annotation."""
        return [v for v in self.variant_evaluations if not v.has_annotations]

    @property
    def passed_variant_evaluations(self) -> List[VariantEvaluation]:
        return [v for v in self.variant_evaluations if v.passed_filters]

    def summary(self) -> Dict[str, Any]:
        """Headline numbers for logging and display."""
        return {
            "proband": self.proband_sample_name,
            "n_samples": len(self.sample_names),
            "n_variants": len(self.variant_evaluations),
            "n_passed_variants": len(self.passed_variant_evaluations),
            "n_unannotated_variants": len(self.unannotated_variant_evaluations),
            "n_genes": len(self.genes),
            "n_passed_genes": sum(1 for g in self.genes if g.passed_filters),
            "n_top_genes": len(self.top_genes),
        }

    def __str__(self) -> str:
        lines = [
            "Analysis Results",
            "=" * 40,
            f"Proband: {self.proband_sample_name or 'unspecified'}",
            f"Variants: {len(self.variant_evaluations)} "
            f"({len(self.passed_variant_evaluations)} passed filters)",
            f"Genes: {len(self.genes)} ({len(self.top_genes)} reported)",
        ]
        if self.filter_reports:
            lines.append("")
            lines.append("Filters:")
            for report in self.filter_reports:
                lines.append(f"  {report}")
        return "\n".join(lines)
