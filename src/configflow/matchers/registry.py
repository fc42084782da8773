"""Matcher registry with lazy per-language construction."""

from __future__ import annotations

from typing import Callable, Iterator

from configflow.matchers.base import Matcher
from configflow.matchers.go import GoMatcher
from configflow.matchers.java import JavaMatcher
from configflow.matchers.javascript import JavaScriptMatcher
from configflow.matchers.python import PythonMatcher
from configflow.matchers.ruby import RubyMatcher
from configflow.models.types import Language

MatcherFactory = Callable[[], Matcher]


class MatcherRegistry:
    """Registry mapping languages to matcher factories.

    Matchers compile their queries on construction, so the registry only
    builds one the first time a file of that language is seen and keeps
    it for the rest of the run.

    Example:
        registry = MatcherRegistry()
        registry.register(Language.PYTHON, PythonMatcher)

        matcher = registry.get(Language.PYTHON)
        result = matcher.discover("app.py", source)
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._factories: dict[Language, MatcherFactory] = {}
        self._instances: dict[Language, Matcher] = {}

    def register(self, language: Language, factory: MatcherFactory) -> None:
        """Register a matcher factory.

        Args:
            language: Language the matcher handles
            factory: Zero-argument callable returning a matcher

        Raises:
            ValueError: If a matcher is already registered for the language
        """
        if language in self._factories:
            raise ValueError(f"Matcher for '{language.value}' is already registered")
        self._factories[language] = factory

    def get(self, language: Language) -> Matcher | None:
        """Get (constructing on first use) the matcher for a language.

        Raises:
            MatcherInitError: If the matcher's built-in query fails to compile
        """
        matcher = self._instances.get(language)
        if matcher is not None:
            return matcher
        factory = self._factories.get(language)
        if factory is None:
            return None
        matcher = factory()
        self._instances[language] = matcher
        return matcher

    def __contains__(self, language: Language) -> bool:
        return language in self._factories

    def __iter__(self) -> Iterator[Language]:
        return iter(self._factories)

    def __len__(self) -> int:
        return len(self._factories)

    @property
    def initialized(self) -> list[Language]:
        """Languages whose matcher has been constructed."""
        return list(self._instances)

    def reset(self) -> None:
        """Drop constructed matchers, keeping registrations."""
        self._instances.clear()


def default_registry() -> MatcherRegistry:
    """Build a registry with every built-in language matcher."""
    registry = MatcherRegistry()
    registry.register(Language.JAVASCRIPT, JavaScriptMatcher)
    registry.register(Language.PYTHON, PythonMatcher)
    registry.register(Language.RUBY, RubyMatcher)
    registry.register(Language.JAVA, JavaMatcher)
    registry.register(Language.GO, GoMatcher)
    return registry
