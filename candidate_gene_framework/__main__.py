"""
Entry point for running the package as a module.

Usage:
    python -m candidate_gene_framework --config configs/example.yaml
"""

from .cli import main

if __name__ == "__main__":
    main()
