"""
Data Loaders

Tabular loaders for the pre-computed inputs of a prioritisation run:
topological domains, scored genes and annotated variants.
"""

from modules.data_loaders.region_loader import RegionLoader
from modules.data_loaders.gene_loader import GeneScoreLoader
from modules.data_loaders.variant_loader import VariantTableLoader

__all__ = [
    "GeneScoreLoader",
    "RegionLoader",
    "VariantTableLoader",
]
