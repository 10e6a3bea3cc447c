"""
End-to-end pipelines for candidate gene prioritisation.

Example Usage:
    from candidate_gene_framework.config import PipelineConfig
    from pipelines import GenePrioritisationPipeline

    config = PipelineConfig.from_yaml("configs/example.yaml")
    results = GenePrioritisationPipeline(config).run()
"""

from pipelines.prioritisation import (
    GenePrioritisationPipeline,
    run_prioritisation,
)

__all__ = [
    "GenePrioritisationPipeline",
    "run_prioritisation",
]
