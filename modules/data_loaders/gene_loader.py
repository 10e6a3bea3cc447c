"""
Gene Score Loader

Loads genes and their pre-computed prioritiser scores into a GeneRegistry.

Expected tab-separated format, one column per scored priority type:

    symbol  entrez_id   hiphive phive
    FGFR2   2263        0.92    0.80
    ATE1    11101       0.31    .

Empty or '.' cells mean the gene was not scored by that prioritiser.
"""

from pathlib import Path
from typing import Dict, Union
import csv
import logging

from modules.variant_model import Gene, GeneRegistry, PriorityType

logger = logging.getLogger(__name__)

MISSING_VALUES = ("", ".", "NA")


class GeneScoreLoader:
    """Loader for gene prioritiser score tables."""

    def __init__(self, symbol_col: str = "symbol", entrez_col: str = "entrez_id"):
        self.symbol_col = symbol_col
        self.entrez_col = entrez_col

    def load(self, genes_path: Union[str, Path]) -> GeneRegistry:
        """
        Load a gene registry from a score table.

        Args:
            genes_path: Path to TSV file

        Returns:
            GeneRegistry with one gene per row

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: On a missing required column, a duplicate symbol or a
                non-numeric identifier or score
        """
        path = Path(genes_path)
        if not path.exists():
            raise FileNotFoundError(f"Gene score file not found: {genes_path}")

        registry = GeneRegistry()

        with open(path, "r") as f:
            reader = csv.DictReader(f, delimiter="\t")
            fieldnames = reader.fieldnames or []

            for required in (self.symbol_col, self.entrez_col):
                if required not in fieldnames:
                    raise ValueError(f"Required column not found: {required}")

            score_columns: Dict[str, PriorityType] = {}
            for column in fieldnames:
                if column in (self.symbol_col, self.entrez_col):
                    continue
                try:
                    score_columns[column] = PriorityType.parse(column)
                except ValueError:
                    logger.warning(f"Ignoring unknown score column '{column}'")

            for line_number, row in enumerate(reader, start=2):
                symbol = (row.get(self.symbol_col) or "").strip()
                if not symbol:
                    continue

                try:
                    gene = Gene(symbol=symbol, entrez_id=int(row[self.entrez_col]))
                    for column, priority_type in score_columns.items():
                        value = (row.get(column) or "").strip()
                        if value not in MISSING_VALUES:
                            gene.add_priority_score(priority_type, float(value))
                    registry.add(gene)
                except (TypeError, ValueError) as e:
                    raise ValueError(f"{path}:{line_number}: {e}") from e

        logger.info(
            f"Loaded {len(registry)} genes with scores for "
            f"{[p.name for p in score_columns.values()]}"
        )
        return registry
