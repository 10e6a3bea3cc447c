"""
Command-line interface for the Candidate Gene Framework.

Usage:
    python -m candidate_gene_framework --config configs/example.yaml
    cgf --config configs/example.yaml --runner sparse --max-genes 10
"""

import sys
from pathlib import Path

import click

from pipelines import GenePrioritisationPipeline

from . import __version__
from .config import PipelineConfig
from .logging_config import configure_logging


def _echo_results(results, priority_type) -> None:
    click.echo("")
    click.echo(str(results))

    click.echo("")
    click.echo("Variant effects (per sample):")
    any_counted = False
    for effect, counts in results.effect_counts.items():
        if any(counts):
            any_counted = True
            click.echo(f"  {effect.value:<40} {' '.join(str(c) for c in counts)}")
    if not any_counted:
        click.echo("  none")

    click.echo("")
    click.echo("Top genes:")
    if not results.top_genes:
        click.echo("  none")
    for rank, gene in enumerate(results.top_genes, start=1):
        click.echo(
            f"  {rank:>3}. {gene.symbol:<12} "
            f"score={gene.priority_score(priority_type):.3f} "
            f"variants={len(gene.passed_variant_evaluations)}/{len(gene.variant_evaluations)}"
        )


@click.command()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True),
    required=True,
    help="Path to YAML configuration file",
)
@click.option(
    "--max-genes",
    "-n",
    type=int,
    default=None,
    help="Override maximum number of genes to report (0 for all)",
)
@click.option(
    "--workers",
    "-w",
    type=int,
    default=None,
    help="Override number of worker threads",
)
@click.option(
    "--runner",
    "-r",
    type=click.Choice(["simple", "sparse"], case_sensitive=False),
    default=None,
    help="Override filter runner mode",
)
@click.option(
    "--verbose/--quiet",
    "-v/-q",
    default=True,
    help="Enable/disable verbose output",
)
@click.version_option(version=__version__, prog_name="candidate-gene-framework")
def main(config: str, max_genes: int, workers: int, runner: str, verbose: bool) -> None:
    """
    Candidate Gene Framework - Gene Prioritisation Pipeline

    Filter pre-annotated variants, reassign regulatory variants to the
    best-scoring gene in their TAD and rank the candidate genes.

    Example:
        python -m candidate_gene_framework --config configs/example.yaml
    """
    click.echo(f"Candidate Gene Framework v{__version__}")
    click.echo("=" * 50)

    config_path = Path(config)
    click.echo(f"Loading config: {config_path}")

    try:
        pipeline_config = PipelineConfig.from_yaml(str(config_path))

        # Apply overrides
        if max_genes is not None:
            pipeline_config.max_genes = max_genes
        if workers is not None:
            pipeline_config.n_workers = workers
        if runner is not None:
            pipeline_config.runner = runner.lower()
        pipeline_config.validate()

        configure_logging(pipeline_config.log_level if verbose else "WARNING")

        pipeline = GenePrioritisationPipeline(pipeline_config)
        results = pipeline.run()

        _echo_results(results, pipeline_config.priority)

        click.echo("")
        click.echo("Pipeline completed successfully!")

    except (FileNotFoundError, ValueError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except Exception as e:
        click.echo(f"Pipeline failed: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
