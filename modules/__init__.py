"""
Candidate Gene Framework - Modules

This package organizes the framework modules:
- variant_model: Effects, variants, genes and the gene registry
- region_index: Chromosomal regions (TADs) and the region index
- gene_reassignment: TAD- and annotation-based reassignment of variants
- filters: Variant and gene filters, filter runners and reports
- results: Ranking, effect counts, gene pruning and analysis results
- data_loaders: Tabular loaders for regions, gene scores and variants
"""

__version__ = "0.1.0"
