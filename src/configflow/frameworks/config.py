"""Framework definition loading and validation."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from configflow.models.framework import (
    Detection,
    FrameworkConfig,
    NamePatternRule,
    Query,
    TypeInference,
)
from configflow.models.types import Confidence, ConfigType
from configflow.utils.errors import (
    FrameworkConfigError,
    InvalidConfidenceError,
    InvalidTypeError,
    MissingFieldError,
)

LANGUAGE_TYPE_KEYS = {
    "javascript": "by_js_type",
    "python": "by_python_type",
    "java": "by_java_type",
    "ruby": "by_ruby_type",
}

_SCALARS = (str, int, float)


def parse_framework_config(source: str) -> FrameworkConfig:
    """Parse a YAML framework definition.

    Args:
        source: YAML document text

    Returns:
        The validated FrameworkConfig

    Raises:
        FrameworkConfigError: If the document is not valid YAML or not a mapping
        MissingFieldError: If a required field is absent
        InvalidTypeError: If a field holds the wrong kind of value
        InvalidConfidenceError: If a confidence literal is unknown
    """
    try:
        data = yaml.safe_load(source)
    except yaml.YAMLError as e:
        raise FrameworkConfigError(f"Invalid YAML in framework definition: {e}") from e

    if not isinstance(data, dict):
        raise FrameworkConfigError("Framework definition must be a mapping")

    language = _string(data, "language")
    return FrameworkConfig(
        name=_string(data, "name"),
        language=language,
        version=_string(data, "version"),
        description=_string(data, "description"),
        detection=_parse_detection(_mapping(data, "detection")),
        queries=[
            _parse_query(item, f"queries[{i}]")
            for i, item in enumerate(_list(data, "queries"))
        ],
        type_inference=_parse_type_inference(_mapping(data, "type_inference"), language),
    )


def load_framework_config(path: Path | str) -> FrameworkConfig:
    """Load a framework definition from a file."""
    return parse_framework_config(Path(path).read_text(encoding="utf-8"))


def _require(data: dict[str, Any], field: str, prefix: str = "") -> Any:
    if field not in data or data[field] is None:
        raise MissingFieldError(f"{prefix}{field}")
    return data[field]


def _string(data: dict[str, Any], field: str, prefix: str = "") -> str:
    value = _require(data, field, prefix)
    if isinstance(value, bool) or not isinstance(value, _SCALARS):
        raise InvalidTypeError(f"{prefix}{field}", "string")
    return str(value)


def _mapping(data: dict[str, Any], field: str, prefix: str = "") -> dict[str, Any]:
    value = _require(data, field, prefix)
    if not isinstance(value, dict):
        raise InvalidTypeError(f"{prefix}{field}", "mapping")
    return value


def _list(data: dict[str, Any], field: str, prefix: str = "") -> list[Any]:
    value = _require(data, field, prefix)
    if not isinstance(value, list):
        raise InvalidTypeError(f"{prefix}{field}", "list")
    return value


def _confidence(value: Any) -> Confidence:
    try:
        return Confidence(str(value).lower())
    except ValueError as e:
        raise InvalidConfidenceError(value) from e


def _config_type(value: Any, field: str) -> ConfigType:
    try:
        return ConfigType(str(value))
    except ValueError as e:
        raise InvalidTypeError(field, "config type") from e


def _parse_detection(data: dict[str, Any]) -> Detection:
    files = _list(data, "files", "detection.")
    if not all(isinstance(f, str) for f in files):
        raise InvalidTypeError("detection.files", "list of strings")

    patterns = _mapping(data, "patterns", "detection.")
    return Detection(
        files=files,
        patterns={str(k): str(v) for k, v in patterns.items()},
    )


def _parse_query(item: Any, prefix: str) -> Query:
    if not isinstance(item, dict):
        raise InvalidTypeError(prefix, "mapping")
    prefix = f"{prefix}."
    return Query(
        name=_string(item, "name", prefix),
        description=_string(item, "description", prefix),
        pattern=_string(item, "pattern", prefix),
        key_capture=_string(item, "key_capture", prefix),
        confidence=_confidence(_require(item, "confidence", prefix)),
    )


def _parse_type_inference(data: dict[str, Any], language: str) -> TypeInference:
    by_language_type: dict[str, ConfigType] = {}
    type_key = LANGUAGE_TYPE_KEYS.get(language)
    if type_key is not None and data.get(type_key) is not None:
        raw = data[type_key]
        if not isinstance(raw, dict):
            raise InvalidTypeError(f"type_inference.{type_key}", "mapping")
        for type_name, config_type in raw.items():
            by_language_type[str(type_name)] = _config_type(
                config_type, f"type_inference.{type_key}.{type_name}"
            )

    rules: list[NamePatternRule] = []
    raw_rules = data.get("by_name_pattern")
    if raw_rules is not None:
        if not isinstance(raw_rules, list):
            raise InvalidTypeError("type_inference.by_name_pattern", "list")
        for i, rule in enumerate(raw_rules):
            prefix = f"type_inference.by_name_pattern[{i}]."
            if not isinstance(rule, dict):
                raise InvalidTypeError(prefix.rstrip("."), "mapping")
            note = rule.get("note")
            rules.append(
                NamePatternRule(
                    pattern=_string(rule, "pattern", prefix),
                    type=_config_type(_require(rule, "type", prefix), f"{prefix}type"),
                    confidence=_confidence(_require(rule, "confidence", prefix)),
                    note=str(note) if note is not None else None,
                )
            )

    return TypeInference(by_language_type=by_language_type, by_name_pattern=rules)
