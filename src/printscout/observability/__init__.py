"""Observability module for printscout.

Structured logging (structlog) with JSON output for production and
colored console output for development.

Example:
    >>> from printscout.observability import get_logger
    >>>
    >>> logger = get_logger(__name__)
    >>> logger.info("printscout.registry.loaded", count=2)
"""

from printscout.observability.logging import (
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
)

__all__ = [
    "bind_context",
    "clear_context",
    "configure_logging",
    "get_logger",
]
