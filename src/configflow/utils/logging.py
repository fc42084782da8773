"""Logging setup for configflow.

Diagnostics from a discovery run (skipped frameworks, unreadable files,
files the parser could not handle) go through loggers under the
``configflow`` namespace so the CLI can route them to stderr without
mixing them into rendered reports.
"""

import logging
from typing import Any

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAMESPACE = "configflow"


class StructuredFormatter(logging.Formatter):
    """Formatter that appends ``key=value`` context fields to each message."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        fields = getattr(record, "extra_fields", None)
        if not fields:
            return message
        extra = " ".join(f"{k}={v}" for k, v in fields.items())
        return f"{message} {extra}"


def configure_logging(
    level: str = "INFO",
    format_string: str | None = None,
    structured: bool = False,
    console: Console | None = None,
) -> None:
    """Configure the ``configflow`` logger.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_string: Custom format string
        structured: Plain stderr output with timestamps and context fields
            instead of the rich handler
        console: Rich console the handler writes to (stderr by default)
    """
    handler: logging.Handler
    if structured:
        if format_string is None:
            format_string = "%(asctime)s %(levelname)s %(name)s %(message)s"
        handler = logging.StreamHandler()
        handler.setFormatter(StructuredFormatter(format_string))
    else:
        handler = RichHandler(
            console=console or Console(stderr=True),
            show_time=False,
            show_path=False,
        )
        handler.setFormatter(StructuredFormatter(format_string or "%(message)s"))

    logger = logging.getLogger(LOGGER_NAMESPACE)
    logger.setLevel(getattr(logging, level.upper()))
    logger.handlers = [handler]
    logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Get a logger inside the configflow namespace.

    Args:
        name: Module name (prefixed with ``configflow.`` when missing)

    Returns:
        Logger instance
    """
    if not name.startswith(LOGGER_NAMESPACE):
        name = f"{LOGGER_NAMESPACE}.{name}"
    return logging.getLogger(name)


class ContextAdapter(logging.LoggerAdapter):
    """Adapter that attaches fixed context fields to every record."""

    def process(
        self, msg: str, kwargs: dict[str, Any]
    ) -> tuple[str, dict[str, Any]]:
        extra = kwargs.get("extra", {})
        extra["extra_fields"] = self.extra
        kwargs["extra"] = extra
        return msg, kwargs


def get_logger_with_context(name: str, **context: Any) -> ContextAdapter:
    """Get a logger that tags records with ``context``.

    Args:
        name: Module name
        **context: Fields included in every message (e.g. framework=django)

    Returns:
        ContextAdapter wrapping the module logger
    """
    return ContextAdapter(get_logger(name), context)
