"""Tree-sitter grammar loading."""

from __future__ import annotations

import functools
from typing import Callable

import tree_sitter_go
import tree_sitter_java
import tree_sitter_javascript
import tree_sitter_python
import tree_sitter_ruby
from tree_sitter import Language as TSLanguage
from tree_sitter import Parser, Query

from configflow.models.types import Language

_GRAMMARS: dict[Language, Callable[[], object]] = {
    Language.JAVASCRIPT: tree_sitter_javascript.language,
    Language.PYTHON: tree_sitter_python.language,
    Language.RUBY: tree_sitter_ruby.language,
    Language.JAVA: tree_sitter_java.language,
    Language.GO: tree_sitter_go.language,
}

EXTENSION_LANGUAGES: dict[str, Language] = {
    ".js": Language.JAVASCRIPT,
    ".jsx": Language.JAVASCRIPT,
    ".ts": Language.JAVASCRIPT,
    ".tsx": Language.JAVASCRIPT,
    ".mjs": Language.JAVASCRIPT,
    ".py": Language.PYTHON,
    ".rb": Language.RUBY,
    ".java": Language.JAVA,
    ".go": Language.GO,
}


@functools.lru_cache(maxsize=None)
def get_grammar(language: Language) -> TSLanguage:
    """Return the compiled tree-sitter grammar for ``language``."""
    return TSLanguage(_GRAMMARS[language]())


def new_parser(language: Language) -> Parser:
    """Create a parser bound to the grammar for ``language``."""
    return Parser(get_grammar(language))


def compile_query(language: Language, source: str) -> Query:
    """Compile query source against a grammar.

    Raises:
        tree_sitter.QueryError: If the pattern is malformed for the grammar
    """
    return Query(get_grammar(language), source)


def language_for_path(path: str) -> Language | None:
    """Classify a file by its extension."""
    for ext, language in EXTENSION_LANGUAGES.items():
        if path.endswith(ext):
            return language
    return None
