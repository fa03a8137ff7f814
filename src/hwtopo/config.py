"""
Process-wide settings for hwtopo that are not part of the domain model.
"""

import logging
import os

from domain_models.constants import DEFAULT_LOG_FORMAT, ENV_LOG_FORMAT

logger = logging.getLogger(__name__)


def get_log_format() -> str:
    """
    Retrieve the logging format from environment variables.

    Returns:
        The format string. Defaults to DEFAULT_LOG_FORMAT.
    """
    return os.environ.get(ENV_LOG_FORMAT) or DEFAULT_LOG_FORMAT


def configure_logging(level: str) -> None:
    """Send log records to stderr at the given level, replacing earlier handlers."""
    logging.basicConfig(level=level, format=get_log_format(), force=True)
    logger.debug("Logging configured at level %s", level)
