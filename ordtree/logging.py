"""
Public API for logging functionality.

Logging configures itself from environment variables on first use, so
get_logger() is all most callers need.

Quick Start:
    >>> from ordtree.logging import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.info("Hello world")

Environment Variables:
    - LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)
    - LOG_USE_RICH: Enable rich formatting (true/false)
    - LOG_FILE_PATH: Optional log file path
"""

from ordtree._core.logging import (
    RichLogger,
    clear_logging_config,
    configure_logging,
    get_logger,
    is_logging_configured,
    log_summary,
    logger,
)

__all__ = [
    'clear_logging_config',
    'configure_logging',
    'get_logger',
    'is_logging_configured',
    'log_summary',
    'logger',
    'RichLogger',
]
