"""Utility functions for configflow."""

from configflow.utils.logging import configure_logging, get_logger, get_logger_with_context
from configflow.utils.errors import (
    ConfigFlowError,
    ConfigurationError,
    FrameworkConfigError,
    InvalidConfidenceError,
    InvalidTypeError,
    MatcherInitError,
    MissingFieldError,
    ParseFailedError,
    QueryCompileError,
    UnsupportedLanguageError,
)

__all__ = [
    # Logging
    "configure_logging",
    "get_logger",
    "get_logger_with_context",
    # Errors
    "ConfigFlowError",
    "ConfigurationError",
    "FrameworkConfigError",
    "InvalidConfidenceError",
    "InvalidTypeError",
    "MatcherInitError",
    "MissingFieldError",
    "ParseFailedError",
    "QueryCompileError",
    "UnsupportedLanguageError",
]
