"""
Candidate Gene Framework

Prioritisation of candidate disease genes from pre-annotated variant calls,
with reassignment of regulatory variants to the best-scoring gene in their
topologically associating domain.
"""

__version__ = "0.1.0"

from .config import FilterConfig, PipelineConfig
from .logging_config import configure_logging

__all__ = [
    "FilterConfig",
    "PipelineConfig",
    "configure_logging",
    "__version__",
]
