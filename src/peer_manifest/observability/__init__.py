"""Observability module for peer manifest ingestion.

Structured logging with JSON output for production and colored console
output for development.

Example:
    >>> from peer_manifest.observability import get_logger
    >>>
    >>> logger = get_logger(__name__)
    >>> logger.info("manifest.loaded", batch_signing_keys=2)
"""

from peer_manifest.observability.logging import (
    configure_logging,
    get_logger,
    log_context,
)

__all__ = [
    "configure_logging",
    "get_logger",
    "log_context",
]
