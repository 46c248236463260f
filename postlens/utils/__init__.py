"""Utility modules for PostLens."""

from postlens.utils.exceptions import (
    ConfigurationError,
    CorpusLoadError,
    NotFoundError,
    PostLensError,
)
from postlens.utils.logger import get_logger, setup_logging

__all__ = [
    # Logging
    "get_logger",
    "setup_logging",
    # Exceptions
    "PostLensError",
    "CorpusLoadError",
    "NotFoundError",
    "ConfigurationError",
]
