"""
Gene Reassignment

Reassigns regulatory and non-coding variants to the best phenotype-scoring
gene in their topological domain or among their own annotations.
"""

from modules.gene_reassignment.reassigner import GeneReassigner

__all__ = ["GeneReassigner"]
