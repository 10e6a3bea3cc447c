"""Console logging setup for command-line runs."""

import logging
from typing import Union

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def configure_logging(level: Union[int, str] = logging.INFO) -> logging.Logger:
    """Configure root logging with a single console handler.

    Calling this again replaces the existing root handlers rather than
    adding another one.

    Args:
        level: Logging level name or number

    Returns:
        The configured root logger
    """
    if isinstance(level, str):
        name = level
        level = logging.getLevelName(name.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {name}")

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        force=True,
    )

    return logging.getLogger()
