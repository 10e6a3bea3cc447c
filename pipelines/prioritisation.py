"""
Gene Prioritisation Pipeline

End-to-end pipeline from pre-annotated variants to a ranked list of
candidate genes.

This pipeline integrates:
- Data loaders (regions, gene scores, variant table)
- Variant-level filters
- Gene reassignment (TAD-based, then annotation-based)
- Known-gene grouping and gene-level filters
- Result aggregation (ranking, effect counts, pruning)

Example Usage:
    from candidate_gene_framework.config import PipelineConfig
    from pipelines import GenePrioritisationPipeline

    config = PipelineConfig(
        regions_path="tads.tsv",
        genes_path="gene_scores.tsv",
        variants_path="variants.tsv",
        priority_type="hiphive",
        runner="sparse",
        max_genes=20,
    )

    pipeline = GenePrioritisationPipeline(config)
    results = pipeline.run()

    for gene in results.top_genes:
        print(gene.symbol, gene.priority_score(config.priority))
"""

from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Iterable, List, Optional, TypeVar
import logging

from candidate_gene_framework.config import FilterConfig, PipelineConfig
from modules.data_loaders import GeneScoreLoader, RegionLoader, VariantTableLoader
from modules.filters import (
    FilterRunner,
    is_associated_with_known_gene,
    make_filter_runner,
    make_gene_filters,
    make_variant_filters,
)
from modules.gene_reassignment import GeneReassigner
from modules.region_index import RegionIndex
from modules.results import AnalysisResults, count_by_effect, prune, rank_genes
from modules.variant_model import Gene, GeneRegistry, VariantEvaluation

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


class GenePrioritisationPipeline:
    """
    Filters, reassigns and groups variants, then ranks their genes.

    The gene registry is mutated by a run (filter outcomes and attached
    variants), so a registry should be used for a single run.
    """

    def __init__(
        self,
        config: PipelineConfig,
        registry: Optional[GeneRegistry] = None,
        region_index: Optional[RegionIndex] = None,
    ):
        """
        Initialize the pipeline.

        Args:
            config: Complete pipeline configuration
            registry: Pre-built gene registry; loaded from config.genes_path if None
            region_index: Pre-built region index; loaded from
                config.regions_path if None
        """
        self.config = config
        self._registry = registry
        self._region_index = region_index

    def run(
        self, variants: Optional[Iterable[VariantEvaluation]] = None
    ) -> AnalysisResults:
        """
        Execute the complete pipeline.

        Args:
            variants: Variants to analyse; loaded from config.variants_path if None

        Returns:
            AnalysisResults with all pipeline outputs
        """
        start_time = datetime.now()
        logger.info("Starting gene prioritisation pipeline")
        config = self.config

        # Step 1: Load data
        logger.info("Step 1: Loading data")
        variants = self._load_variants() if variants is None else list(variants)
        registry = self._load_registry()
        region_index = self._load_region_index()

        # Step 2: Variant filters
        logger.info("Step 2: Filtering variants")
        variant_runner = make_filter_runner(config.runner)
        self._filter_variants(variant_runner, variants)

        # Step 3: Gene reassignment
        logger.info("Step 3: Reassigning variants to candidate genes")
        self._reassign_variants(variants, registry, region_index)

        # Step 4: Known-gene grouping
        logger.info("Step 4: Grouping variants by gene")
        genes = self._group_by_gene(variants, registry)

        # Step 5: Gene filters
        logger.info("Step 5: Filtering genes")
        gene_runner = make_filter_runner(config.runner, registry)
        self._filter_genes(gene_runner, genes)

        # Step 6: Ranking and aggregation
        logger.info("Step 6: Ranking genes")
        ranked = rank_genes(genes, config.priority)
        effect_counts = count_by_effect(variants)
        top_genes = prune(ranked, config.max_genes)

        sample_names = list(config.sample_names)
        proband = config.proband_sample_name or (sample_names[0] if sample_names else "")

        runtime = (datetime.now() - start_time).total_seconds()
        logger.info(f"Pipeline completed in {runtime:.1f} seconds")

        return AnalysisResults(
            proband_sample_name=proband,
            sample_names=sample_names,
            vcf_path=Path(config.variants_path) if config.variants_path else None,
            variant_evaluations=variants,
            genes=ranked,
            filter_reports=(
                variant_runner.filter_reports() + gene_runner.filter_reports()
            ),
            effect_counts=effect_counts,
            top_genes=top_genes,
        )

    # =========================================================================
    # Step 1: Data Loading
    # =========================================================================

    def _load_variants(self) -> List[VariantEvaluation]:
        if not self.config.variants_path:
            raise ValueError("No variants provided and no variants_path configured")
        return VariantTableLoader().load(self.config.variants_path)

    def _load_registry(self) -> GeneRegistry:
        if self._registry is None:
            if not self.config.genes_path:
                raise ValueError("No gene registry provided and no genes_path configured")
            self._registry = GeneScoreLoader().load(self.config.genes_path)
        return self._registry

    def _load_region_index(self) -> RegionIndex:
        if self._region_index is None:
            if self.config.regions_path:
                self._region_index = RegionLoader().load_index(self.config.regions_path)
            else:
                logger.warning("No regions configured; domain reassignment has no effect")
                self._region_index = RegionIndex.build([])
        return self._region_index

    # =========================================================================
    # Steps 2-5
    # =========================================================================

    def _filter_variants(
        self, runner: FilterRunner, variants: List[VariantEvaluation]
    ) -> None:
        filter_config: FilterConfig = self.config.filters
        filters = make_variant_filters(
            min_quality=filter_config.min_quality,
            max_frequency=filter_config.max_frequency,
            min_pathogenicity=filter_config.min_pathogenicity,
            remove_off_target=filter_config.remove_off_target,
            regulatory_filter=filter_config.regulatory_filter,
            interval=filter_config.interval,
            gene_symbols=filter_config.gene_symbols,
            off_target_effects=filter_config.off_target_effect_kinds(),
        )
        logger.info(f"Running {len(filters)} variant filters ({runner.mode})")

        passed = self._map(lambda v: runner.run(filters, v), variants)
        logger.info(f"{sum(passed)} of {len(variants)} variants passed filters")

    def _reassign_variants(
        self,
        variants: List[VariantEvaluation],
        registry: GeneRegistry,
        region_index: RegionIndex,
    ) -> None:
        if not (self.config.reassign_in_domain or self.config.reassign_by_annotation):
            logger.info("Gene reassignment disabled")
            return

        reassigner = GeneReassigner(self.config.priority, registry, region_index)
        moved = self._map(
            lambda v: reassigner.reassign(
                v,
                in_domain=self.config.reassign_in_domain,
                by_annotation=self.config.reassign_by_annotation,
            ),
            variants,
        )
        logger.info(f"Reassigned {sum(moved)} of {len(variants)} variants")

    def _group_by_gene(
        self, variants: List[VariantEvaluation], registry: GeneRegistry
    ) -> List[Gene]:
        """Attach variants to their known genes; sparse runs attach passed variants only."""
        known = is_associated_with_known_gene(registry)
        sparse = self.config.runner.lower() == "sparse"

        n_unknown = 0
        for variant in variants:
            if not known(variant):
                n_unknown += 1
                continue
            if sparse and not variant.passed_filters:
                continue
            registry.assign_variant(variant)

        genes = [gene for gene in registry if gene.variant_evaluations]
        logger.info(
            f"Grouped variants into {len(genes)} genes "
            f"({n_unknown} variants with no known gene)"
        )
        return genes

    def _filter_genes(self, runner: FilterRunner, genes: List[Gene]) -> None:
        filter_config: FilterConfig = self.config.filters
        filters = make_gene_filters(
            priority_type=self.config.priority,
            min_priority_score=filter_config.min_priority_score,
            known_genes=filter_config.known_genes,
            require_passed_variants=filter_config.require_passed_variants,
        )
        logger.info(f"Running {len(filters)} gene filters ({runner.mode})")
        self._map(lambda g: runner.run(filters, g), genes)

    # =========================================================================
    # Helpers
    # =========================================================================

    def _map(self, func: Callable[[T], R], items: List[T]) -> List[R]:
        """Apply func to every item, on a thread pool when n_workers > 1."""
        if self.config.n_workers <= 1 or len(items) < 2:
            return [func(item) for item in items]
        with ThreadPoolExecutor(max_workers=self.config.n_workers) as executor:
            return list(executor.map(func, items))


def run_prioritisation(
    regions_path: Optional[str],
    genes_path: str,
    variants_path: str,
    max_genes: int = 0,
    **kwargs: Any,
) -> AnalysisResults:
    """
    Convenience function to run prioritisation with minimal configuration.

    Args:
        regions_path: Path to TAD region file (None for no domain reassignment)
        genes_path: Path to gene score table
        variants_path: Path to variant table
        max_genes: Maximum number of genes to report (0 for all)
        **kwargs: Additional PipelineConfig or FilterConfig options

    Returns:
        AnalysisResults with pipeline outputs
    """
    filter_options = {
        key: kwargs.pop(key)
        for key in list(kwargs)
        if key in FilterConfig.__dataclass_fields__
    }
    config = PipelineConfig(
        regions_path=regions_path,
        genes_path=genes_path,
        variants_path=variants_path,
        max_genes=max_genes,
        filters=FilterConfig(**filter_options),
        **kwargs,
    )
    return GenePrioritisationPipeline(config).run()
