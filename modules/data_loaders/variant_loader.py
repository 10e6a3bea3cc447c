"""
Variant Table Loader

Loads variants that were annotated upstream (effects, genes, transcript
annotations and scores already computed) from a tab-separated table:

    chrom  pos  ref  alt  effect  gene_symbol  entrez_id  quality  frequency  pathogenicity  genotypes  annotations
    10     150  A    G    upstream_gene_variant  ATE1  11101  60  0.01  .  0/1,0/0  ATE1:upstream_gene_variant|FGFR2-ATE1:intron_variant

Only the first five columns are required. Annotations are '|'-separated
SYMBOL:effect pairs in transcript priority order; the raw token is kept as the
annotation payload. Genotypes are comma-separated, one per sample.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Union
import csv
import logging

from modules.region_index import InvalidRegionError, parse_chromosome
from modules.variant_model import Annotation, EffectKind, VariantEvaluation

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("chrom", "pos", "ref", "alt", "effect")
MISSING_VALUES = ("", ".", "NA")


class VariantTableLoader:
    """Loader for pre-annotated variant tables."""

    def load(self, variants_path: Union[str, Path]) -> List[VariantEvaluation]:
        """
        Load variants from a table.

        Args:
            variants_path: Path to TSV file

        Returns:
            Variants in file order

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: On a missing required column or a malformed row
        """
        path = Path(variants_path)
        if not path.exists():
            raise FileNotFoundError(f"Variant table not found: {variants_path}")

        variants = []
        with open(path, "r") as f:
            reader = csv.DictReader(f, delimiter="\t")
            fieldnames = reader.fieldnames or []
            for required in REQUIRED_COLUMNS:
                if required not in fieldnames:
                    raise ValueError(f"Required column not found: {required}")

            for line_number, row in enumerate(reader, start=2):
                try:
                    variants.append(self._parse_row(row, f"{path}:{line_number}"))
                except (InvalidRegionError, TypeError, ValueError) as e:
                    raise ValueError(f"{path}:{line_number}: {e}") from e

        logger.info(f"Loaded {len(variants)} variants from {path}")
        return variants

    def _parse_row(self, row: Dict[str, Any], location: str) -> VariantEvaluation:
        annotations = self._parse_annotations(row.get("annotations"), location)
        gene_symbol = _text(row.get("gene_symbol"))
        if gene_symbol is None:
            gene_symbol = annotations[0].gene_symbol if annotations else "."

        genotypes_field = _text(row.get("genotypes"))
        genotypes = genotypes_field.split(",") if genotypes_field else []

        entrez = _text(row.get("entrez_id"))
        quality = _text(row.get("quality"))

        return VariantEvaluation(
            chromosome=parse_chromosome(row["chrom"]),
            position=int(row["pos"]),
            ref=row["ref"].strip(),
            alt=row["alt"].strip(),
            effect=_effect(row["effect"], location),
            gene_symbol=gene_symbol,
            entrez_gene_id=int(entrez) if entrez is not None else -1,
            annotations=annotations,
            quality=float(quality) if quality is not None else 0.0,
            frequency=_float(row.get("frequency")),
            pathogenicity=_float(row.get("pathogenicity")),
            genotypes=genotypes,
        )

    @staticmethod
    def _parse_annotations(value: Optional[str], location: str) -> List[Annotation]:
        text = _text(value)
        if text is None:
            return []

        annotations = []
        for token in text.split("|"):
            token = token.strip()
            if not token:
                continue
            symbol, _, effect = token.partition(":")
            annotations.append(
                Annotation(
                    gene_symbol=symbol,
                    most_pathogenic_effect=_effect(effect, location),
                    payload=token,
                )
            )
        return annotations


def _effect(term: Optional[str], location: str) -> EffectKind:
    effect = EffectKind.from_term(term)
    if effect == EffectKind.CUSTOM and (term or "").strip().lower() != EffectKind.CUSTOM.value:
        logger.warning(f"{location}: unrecognised effect term '{term}', using custom")
    return effect


def _text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return None if value in MISSING_VALUES else value


def _float(value: Optional[str]) -> Optional[float]:
    text = _text(value)
    return float(text) if text is not None else None
