"""Heuristic type inference shared by the language matchers.

Each matcher first tries language-specific context rules (conversion
calls, literal comparisons) against the source line, then falls back to
keyword lists matched against the variable name.
"""

from __future__ import annotations

import re
from typing import Iterable

from configflow.models.types import Confidence, ConfigType

TypeHint = tuple[ConfigType, Confidence]
ContextRule = tuple["re.Pattern[str]", ConfigType, Confidence]

# Checked in order: connection strings contain URL, so they come first.
CONNECTION_STRING_KEYWORDS = (
    "DATABASE_URL",
    "DATABASE_URI",
    "DB_URL",
    "DB_URI",
    "REDIS_URL",
    "REDIS_URI",
    "MONGO_URL",
    "MONGO_URI",
    "MONGODB_URI",
    "CONNECTION_STRING",
    "DSN",
)
SECRET_KEYWORDS = ("SECRET", "API_KEY", "APIKEY", "TOKEN", "PASSWORD", "PRIVATE_KEY", "CREDENTIALS")
URL_KEYWORDS = ("URL", "ENDPOINT", "HOST")
EMAIL_KEYWORDS = ("EMAIL", "MAIL")
INTEGER_KEYWORDS = ("PORT", "TIMEOUT", "MAX", "MIN", "LIMIT", "COUNT", "SIZE")
BOOLEAN_KEYWORDS = ("DEBUG", "ENABLED", "DISABLED", "ENABLE", "FLAG")

NAME_RULES: tuple[tuple[ConfigType, tuple[str, ...]], ...] = (
    (ConfigType.CONNECTION_STRING, CONNECTION_STRING_KEYWORDS),
    (ConfigType.SECRET, SECRET_KEYWORDS),
    (ConfigType.URL, URL_KEYWORDS),
    (ConfigType.EMAIL, EMAIL_KEYWORDS),
    (ConfigType.INTEGER, INTEGER_KEYWORDS),
    (ConfigType.BOOLEAN, BOOLEAN_KEYWORDS),
)

DEFAULT_HINT: TypeHint = (ConfigType.STRING, Confidence.LOW)


def call_rule(names: Iterable[str], config_type: ConfigType, confidence: Confidence) -> ContextRule:
    """Build a rule matching a call to any of ``names``.

    ``int`` matches ``int(`` but not ``print(``; dotted names such as
    ``strconv.Atoi`` are matched literally.
    """
    alternatives = "|".join(re.escape(name) for name in names)
    return (re.compile(rf"(?<![\w.])(?:{alternatives})\s*\("), config_type, confidence)


def text_rule(pattern: str, config_type: ConfigType, confidence: Confidence) -> ContextRule:
    """Build a rule from a raw regular expression."""
    return (re.compile(pattern), config_type, confidence)


def infer_from_name(name: str) -> TypeHint:
    """Infer a type from keywords in the variable name."""
    upper = name.upper()
    for config_type, keywords in NAME_RULES:
        if any(keyword in upper for keyword in keywords):
            return config_type, Confidence.MEDIUM
    if upper.startswith("IS_"):
        return ConfigType.BOOLEAN, Confidence.MEDIUM
    return DEFAULT_HINT


def infer_from_context(context: str | None, rules: Iterable[ContextRule]) -> TypeHint | None:
    """Return the first context rule matching the source line."""
    if not context:
        return None
    for pattern, config_type, confidence in rules:
        if pattern.search(context):
            return config_type, confidence
    return None


def infer_type(name: str, context: str | None, rules: Iterable[ContextRule]) -> TypeHint:
    """Context rules first, then name keywords, then string/low."""
    return infer_from_context(context, rules) or infer_from_name(name)
