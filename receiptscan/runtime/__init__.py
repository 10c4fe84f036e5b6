"""Runtime infrastructure for receiptscan.

This package provides process/runtime services including:
- Logging setup via get_logger()
- The OCR service client (receipt_pipeline)
- The HTTP server (receipt_server)

Usage:
    from receiptscan.runtime import get_logger

    logger = get_logger(__name__)
"""

from receiptscan.runtime.logging import (
    DEFAULT_LOG_LEVEL,
    LOG_FORMAT,
    LOG_FORMAT_DEBUG,
    configure_logging,
    get_logger,
    set_log_level,
)

__all__ = [
    "get_logger",
    "configure_logging",
    "set_log_level",
    "DEFAULT_LOG_LEVEL",
    "LOG_FORMAT",
    "LOG_FORMAT_DEBUG",
]
