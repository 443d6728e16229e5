"""Structured logging for peer manifest ingestion.

Library modules obtain loggers through :func:`get_logger`. Events are routed
into the standard :mod:`logging` tree as ``event`` message plus ``extra``
fields; nothing is written until a handler exists. Handlers on the root logger
are only installed by :func:`configure_logging`, which applications (and the
``peer-manifest`` CLI) call explicitly. Importing the package never touches
the host application's handlers.

Environment Variables:
    PEER_MANIFEST_LOG_FORMAT: "json" or "console" (read by configure_logging)
    PEER_MANIFEST_LOG_LEVEL: DEBUG, INFO, WARNING or ERROR
    PEER_MANIFEST_SERVICE_NAME: Value of the ``service`` field on every event

Example:
    >>> from peer_manifest.observability import configure_logging, get_logger
    >>>
    >>> configure_logging(log_format="json", log_level="INFO")
    >>> logger = get_logger("peer_manifest.manifest.loader")
    >>> logger.info("manifest.loaded", source="https://example.com/peer/specific-manifest.json")
"""

import logging
import os
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, TextIO

import structlog
from structlog.typing import Processor

DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_FORMAT = "console"
DEFAULT_SERVICE_NAME = "peer-manifest"

ENV_LOG_FORMAT = "PEER_MANIFEST_LOG_FORMAT"
ENV_LOG_LEVEL = "PEER_MANIFEST_LOG_LEVEL"
ENV_SERVICE_NAME = "PEER_MANIFEST_SERVICE_NAME"

LOG_FORMATS = ("console", "json")

# Set once configure_logging has installed a root handler
_logging_configured = False


def _parse_level(name: str) -> int:
    level = logging.getLevelName(name.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level {name!r}")
    return level


def _route_to_stdlib() -> None:
    """Send structlog events through stdlib logging unless the host configured structlog."""
    if structlog.is_configured():
        return
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.stdlib.render_to_log_kwargs,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


def _build_formatter(log_format: str) -> structlog.stdlib.ProcessorFormatter:
    renderer: Processor
    if log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(
            colors=True,
            exception_formatter=structlog.dev.plain_traceback,
        )
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.ExtraAdder(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.UnicodeDecoder(),
        ],
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )


def configure_logging(
    log_format: str | None = None,
    log_level: str | None = None,
    service_name: str | None = None,
    force: bool = False,
    stream: TextIO | None = None,
) -> None:
    """Install a structured handler on the root logger.

    Args:
        log_format: "json" or "console". Defaults to env var or "console"
        log_level: Minimum log level. Defaults to env var or "INFO"
        service_name: Bound as ``service`` on every event. Defaults to env var
            or "peer-manifest"
        force: Replace the handler even if already configured
        stream: Output stream; stderr keeps stdout free for CLI output

    Raises:
        ValueError: If the format or level is not recognized.
    """
    global _logging_configured

    if _logging_configured and not force:
        return

    log_format = (log_format or os.environ.get(ENV_LOG_FORMAT) or DEFAULT_LOG_FORMAT).lower()
    if log_format not in LOG_FORMATS:
        raise ValueError(f"Unknown log format {log_format!r} (expected one of {LOG_FORMATS})")
    level = _parse_level(log_level or os.environ.get(ENV_LOG_LEVEL) or DEFAULT_LOG_LEVEL)
    service_name = service_name or os.environ.get(ENV_SERVICE_NAME) or DEFAULT_SERVICE_NAME

    _route_to_stdlib()

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(_build_formatter(log_format))

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    structlog.contextvars.bind_contextvars(service=service_name)

    _logging_configured = True


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger for the given name.

    Safe to call at import time: no handlers are installed.

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("manifest.key.resolved", identifier="fake-key-2")
    """
    _route_to_stdlib()
    return structlog.stdlib.get_logger(name)


@contextmanager
def log_context(**kwargs: Any) -> Iterator[None]:
    """Bind fields to every event logged inside the ``with`` block.

    Example:
        >>> with log_context(peer_name="peer-a"):
        ...     logger.info("manifest.fetching")  # includes peer_name
    """
    with structlog.contextvars.bound_contextvars(**kwargs):
        yield
