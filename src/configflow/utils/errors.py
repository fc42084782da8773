"""Exception hierarchy for discovery, framework loading and settings."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from configflow.models.common import ErrorRecord


class ConfigFlowError(Exception):
    """Root of every error configflow raises on purpose.

    ``code`` is a stable identifier for callers and the CLI; ``details``
    carries the offending field, path or language.
    """

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_error_record(self) -> ErrorRecord:
        return ErrorRecord(code=self.code, message=self.message, details=self.details)


class FrameworkConfigError(ConfigFlowError):
    """A framework definition could not be loaded."""

    def __init__(
        self,
        message: str,
        code: str = "INVALID_CONFIG",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code=code, details=details)


class MissingFieldError(FrameworkConfigError):
    """A required field is absent from a framework definition."""

    def __init__(self, field: str):
        super().__init__(
            f"Missing required field: {field}",
            code="MISSING_FIELD",
            details={"field": field},
        )


class InvalidTypeError(FrameworkConfigError):
    """A framework definition field has the wrong kind of value."""

    def __init__(self, field: str, expected: str):
        super().__init__(
            f"Field '{field}' must be a {expected}",
            code="INVALID_TYPE",
            details={"field": field, "expected": expected},
        )


class InvalidConfidenceError(FrameworkConfigError):
    """A confidence literal is not one of high, medium or low."""

    def __init__(self, value: Any):
        super().__init__(
            f"Invalid confidence: {value!r}",
            code="INVALID_CONFIDENCE",
            details={"value": value},
        )


class UnsupportedLanguageError(ConfigFlowError):
    """A framework targets a language without query support."""

    def __init__(self, language: str):
        super().__init__(
            f"Unsupported framework language: {language}",
            code="UNSUPPORTED_LANGUAGE",
            details={"language": language},
        )


class QueryCompileError(ConfigFlowError):
    """A framework query pattern failed to compile."""

    def __init__(self, framework: str, query: str, reason: str):
        super().__init__(
            f"Failed to compile query '{query}' for {framework}: {reason}",
            code="QUERY_COMPILE_ERROR",
            details={"framework": framework, "query": query},
        )


class ParseFailedError(ConfigFlowError):
    """The parser returned no usable tree for a file."""

    def __init__(self, file_path: str):
        super().__init__(
            f"Failed to parse {file_path}",
            code="PARSE_FAILED",
            details={"file_path": file_path},
        )


class MatcherInitError(ConfigFlowError):
    """A built-in language query failed to compile."""

    def __init__(self, language: str, reason: str):
        super().__init__(
            f"Failed to initialize {language} matcher: {reason}",
            code="MATCHER_INIT_ERROR",
            details={"language": language},
        )


class ConfigurationError(ConfigFlowError):
    """A settings file is missing, malformed or fails validation."""

    def __init__(
        self,
        message: str,
        config_key: str | None = None,
        path: Path | str | None = None,
    ):
        details: dict[str, Any] = {}
        if config_key:
            details["config_key"] = config_key
        if path is not None:
            details["path"] = str(path)
        super().__init__(message, code="CONFIG_ERROR", details=details)
