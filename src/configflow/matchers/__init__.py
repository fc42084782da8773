"""Per-language environment variable access matchers."""

from configflow.matchers.base import Matcher, MatchContext, TreeSitterMatcher
from configflow.matchers.go import GoMatcher
from configflow.matchers.java import JavaMatcher
from configflow.matchers.javascript import JavaScriptMatcher
from configflow.matchers.languages import language_for_path
from configflow.matchers.python import PythonMatcher
from configflow.matchers.registry import MatcherRegistry, default_registry
from configflow.matchers.ruby import RubyMatcher

__all__ = [
    "Matcher",
    "MatchContext",
    "TreeSitterMatcher",
    "GoMatcher",
    "JavaMatcher",
    "JavaScriptMatcher",
    "PythonMatcher",
    "RubyMatcher",
    "MatcherRegistry",
    "default_registry",
    "language_for_path",
]
