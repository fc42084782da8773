"""Enumerations shared by the discovery and framework models."""

from __future__ import annotations

from enum import Enum


class ConfigType(str, Enum):
    """Configuration value type inferred for a variable."""

    STRING = "string"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    URL = "url"
    CONNECTION_STRING = "connection_string"
    SECRET = "secret"
    EMAIL = "email"


class Confidence(str, Enum):
    """How certain a heuristic is about an inferred type or detection."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        """Numeric rank, lower wins when merging."""
        return _CONFIDENCE_RANK[self.value]

    def beats(self, other: Confidence) -> bool:
        """Return True if this confidence is strictly higher than ``other``."""
        return self.rank < other.rank


_CONFIDENCE_RANK = {"high": 0, "medium": 1, "low": 2}


class WarningType(str, Enum):
    """Kind of unresolved access site."""

    DYNAMIC_ACCESS = "dynamic_access"
    COMPUTED_KEY = "computed_key"
    UNKNOWN_PATTERN = "unknown_pattern"


class Language(str, Enum):
    """Source languages the matchers understand."""

    JAVASCRIPT = "javascript"
    PYTHON = "python"
    RUBY = "ruby"
    JAVA = "java"
    GO = "go"
