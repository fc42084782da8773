"""Runtime execution of framework-defined queries."""

from __future__ import annotations

import re
from dataclasses import dataclass

from tree_sitter import Query as TSQuery
from tree_sitter import QueryCursor, QueryError

from configflow.matchers.base import MatchContext, first, line_of, node_text, strip_quotes
from configflow.matchers.languages import compile_query, new_parser
from configflow.models.framework import FrameworkConfig, Query
from configflow.models.discovery import ParseResult
from configflow.models.types import ConfigType, Language
from configflow.utils.errors import ParseFailedError, QueryCompileError, UnsupportedLanguageError

# Languages a framework definition may target
FRAMEWORK_LANGUAGES = {
    "javascript": Language.JAVASCRIPT,
    "python": Language.PYTHON,
    "ruby": Language.RUBY,
    "java": Language.JAVA,
}

_PLACEHOLDER = re.compile(r"^\$\{([^}:]+)(?::([^}]*))?\}$")


def framework_language(name: str) -> Language:
    """Resolve a framework definition's language name.

    Raises:
        UnsupportedLanguageError: If framework queries are not supported for it
    """
    language = FRAMEWORK_LANGUAGES.get(name)
    if language is None:
        raise UnsupportedLanguageError(name)
    return language


@dataclass(frozen=True)
class CompiledQuery:
    """A framework query compiled against its grammar."""

    spec: Query
    query: TSQuery


class FrameworkParser:
    """Executes a framework's compiled queries against source files.

    Every query is compiled up front; one malformed pattern fails the
    whole framework. Usages come back typed ``string`` with the query's
    confidence and no file path; the coordinator fills the path in.

    Example:
        parser = FrameworkParser(parse_framework_config(text))
        result = parser.parse(source)
    """

    def __init__(self, config: FrameworkConfig) -> None:
        self.config = config
        self.language = framework_language(config.language)
        self.queries = [self._compile(spec) for spec in config.queries]
        self._parser = new_parser(self.language)

    @property
    def name(self) -> str:
        return self.config.name

    def _compile(self, spec: Query) -> CompiledQuery:
        try:
            query = compile_query(self.language, spec.pattern)
        except QueryError as e:
            raise QueryCompileError(self.config.name, spec.name, str(e)) from e
        return CompiledQuery(spec=spec, query=query)

    def parse(self, source: str | bytes, file_path: str = "") -> ParseResult:
        """Run every query over ``source``.

        Raises:
            ParseFailedError: If no syntax tree could be produced
        """
        data = source.encode("utf-8") if isinstance(source, str) else source
        tree = self._parser.parse(data)
        if tree is None or tree.root_node is None:
            raise ParseFailedError(file_path or self.config.name)

        ctx = MatchContext(file_path, data)
        for compiled in self.queries:
            spec = compiled.spec
            for _, captures in QueryCursor(compiled.query).matches(tree.root_node):
                key_node = first(captures, spec.key_capture)
                if key_node is None:
                    continue
                anchor = first(captures, "access") or key_node
                if not ctx.claim(anchor):
                    continue

                name, default = _split_key(strip_quotes(node_text(key_node)))
                if not name:
                    continue
                ctx.add_usage(name, (ConfigType.STRING, spec.confidence), line_of(anchor), default)
        return ctx.result()


def _split_key(text: str) -> tuple[str, str | None]:
    """Unwrap ``${KEY:default}`` placeholders; other keys pass through."""
    placeholder = _PLACEHOLDER.match(text)
    if placeholder is None:
        return text, None
    return placeholder.group(1).strip(), placeholder.group(2)
