"""Base matcher protocol and the shared tree-sitter query loop."""

from __future__ import annotations

from typing import Iterator, Protocol, runtime_checkable

from tree_sitter import Node, QueryCursor, QueryError

from configflow.matchers.inference import TypeHint
from configflow.matchers.languages import compile_query, new_parser
from configflow.models.discovery import DiscoveryWarning, EnvVarUsage, ParseResult
from configflow.models.types import Language, WarningType
from configflow.utils.errors import MatcherInitError, ParseFailedError

Captures = dict[str, list[Node]]

DYNAMIC_ACCESS_MESSAGE = "Dynamic environment variable access detected"
COMPUTED_KEY_MESSAGE = "Computed environment variable key detected"


@runtime_checkable
class Matcher(Protocol):
    """Protocol for per-language environment access matchers.

    A matcher turns one file's source text into the usages and warnings
    it contains. Instances are created once per discovery run and reused
    for every file of their language.

    Example:
        class MyMatcher:
            @property
            def language(self) -> Language:
                return Language.PYTHON

            def discover(self, file_path: str, source: str | bytes) -> ParseResult:
                return ParseResult()
    """

    @property
    def language(self) -> Language:
        """Language this matcher handles."""
        ...

    def discover(self, file_path: str, source: str | bytes) -> ParseResult:
        """Find environment variable accesses in a file.

        Args:
            file_path: Path recorded on every usage and warning
            source: Full file contents

        Returns:
            ParseResult for the file

        Raises:
            ParseFailedError: If no syntax tree could be produced
        """
        ...


def node_text(node: Node | None) -> str:
    """Decode a node's source text."""
    if node is None or node.text is None:
        return ""
    return node.text.decode("utf-8", errors="replace")


def line_of(node: Node) -> int:
    """1-based line number of a node's first character."""
    return node.start_point[0] + 1


def strip_quotes(text: str, quotes: str = "'\"") -> str:
    """Strip surrounding quote characters."""
    return text.strip(quotes)


def first(captures: Captures, name: str) -> Node | None:
    """First node bound to a capture, or None."""
    nodes = captures.get(name)
    return nodes[0] if nodes else None


def ancestors(node: Node) -> Iterator[tuple[Node, Node]]:
    """Yield ``(child, parent)`` pairs walking towards the root."""
    current = node
    parent = node.parent
    while parent is not None:
        yield current, parent
        current = parent
        parent = parent.parent


def same_node(a: Node | None, b: Node | None) -> bool:
    """Compare nodes by position and kind."""
    if a is None or b is None:
        return False
    return a.start_byte == b.start_byte and a.end_byte == b.end_byte and a.type == b.type


def contains(outer: Node, inner: Node) -> bool:
    """True if ``inner`` lies within ``outer``."""
    return outer.start_byte <= inner.start_byte and inner.end_byte <= outer.end_byte


class MatchContext:
    """Per-file accumulator handed to match handlers."""

    def __init__(self, file_path: str, source: bytes) -> None:
        self.file_path = file_path
        self.lines = source.decode("utf-8", errors="replace").split("\n")
        self.usages: list[EnvVarUsage] = []
        self.warnings: list[DiscoveryWarning] = []
        self._claimed: set[tuple[int, int]] = set()
        self._warned_lines: set[tuple[int, WarningType]] = set()

    def context_line(self, line_number: int) -> str | None:
        """The trimmed source line, or None when out of range."""
        if 1 <= line_number <= len(self.lines):
            return self.lines[line_number - 1].strip(" \t\r")
        return None

    def claim(self, node: Node) -> bool:
        """Mark an access node as handled; False if it already was."""
        key = (node.start_byte, node.end_byte)
        if key in self._claimed:
            return False
        self._claimed.add(key)
        return True

    def add_usage(
        self,
        name: str,
        hint: TypeHint,
        line_number: int,
        default_value: str | None = None,
    ) -> None:
        config_type, confidence = hint
        self.usages.append(
            EnvVarUsage(
                name=name,
                inferred_type=config_type,
                confidence=confidence,
                file_path=self.file_path,
                line_number=line_number,
                context=self.context_line(line_number),
                default_value=default_value,
            )
        )

    def add_warning(
        self,
        line_number: int,
        message: str,
        warning_type: WarningType,
        once_per_line: bool = False,
    ) -> None:
        if once_per_line:
            key = (line_number, warning_type)
            if key in self._warned_lines:
                return
            self._warned_lines.add(key)
        self.warnings.append(
            DiscoveryWarning(
                file_path=self.file_path,
                line_number=line_number,
                message=message,
                warning_type=warning_type,
            )
        )

    def result(self) -> ParseResult:
        return ParseResult(usages=self.usages, warnings=self.warnings)


class TreeSitterMatcher:
    """Base implementation driving one compiled query over a syntax tree.

    Subclasses set ``LANGUAGE`` and ``QUERY`` and implement
    :meth:`handle_match`, which receives each match's captures.
    """

    LANGUAGE: Language
    QUERY: str

    def __init__(self) -> None:
        try:
            self._query = compile_query(self.LANGUAGE, self.QUERY)
        except QueryError as e:
            raise MatcherInitError(self.LANGUAGE.value, str(e)) from e
        self._parser = new_parser(self.LANGUAGE)

    @property
    def language(self) -> Language:
        return self.LANGUAGE

    def discover(self, file_path: str, source: str | bytes) -> ParseResult:
        data = source.encode("utf-8") if isinstance(source, str) else source
        tree = self._parser.parse(data)
        if tree is None or tree.root_node is None:
            raise ParseFailedError(file_path)

        ctx = MatchContext(file_path, data)
        for _, captures in QueryCursor(self._query).matches(tree.root_node):
            self.handle_match(captures, ctx)
        return ctx.result()

    def handle_match(self, captures: Captures, ctx: MatchContext) -> None:
        """Turn one query match into usages or warnings."""
        raise NotImplementedError
