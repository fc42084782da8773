"""Declarative framework definitions and their query runtime."""

from configflow.frameworks.config import load_framework_config, parse_framework_config
from configflow.frameworks.embedded import EMBEDDED_FRAMEWORKS, get_embedded
from configflow.frameworks.parser import CompiledQuery, FrameworkParser, framework_language

__all__ = [
    "load_framework_config",
    "parse_framework_config",
    "EMBEDDED_FRAMEWORKS",
    "get_embedded",
    "CompiledQuery",
    "FrameworkParser",
    "framework_language",
]
