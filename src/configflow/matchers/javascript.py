"""JavaScript and TypeScript ``process.env`` matcher."""

from __future__ import annotations

from tree_sitter import Node

from configflow.matchers.base import (
    COMPUTED_KEY_MESSAGE,
    DYNAMIC_ACCESS_MESSAGE,
    Captures,
    MatchContext,
    TreeSitterMatcher,
    ancestors,
    first,
    line_of,
    node_text,
    same_node,
    strip_quotes,
)
from configflow.matchers.inference import call_rule, infer_type, text_rule
from configflow.models.types import Confidence, ConfigType, Language, WarningType

_PROCESS_ENV = """(member_expression
      object: (identifier) @process (#eq? @process "process")
      property: (property_identifier) @env (#eq? @env "env"))"""

QUERY = f"""
(member_expression
  object: {_PROCESS_ENV}
  property: (property_identifier) @key) @access

(subscript_expression
  object: {_PROCESS_ENV}
  index: (string) @key_string) @access

(subscript_expression
  object: {_PROCESS_ENV}
  index: (identifier) @dynamic_key) @dynamic_access

(subscript_expression
  object: {_PROCESS_ENV}
  index: (template_string) @template_key) @computed_access
"""

CONTEXT_RULES = [
    call_rule(("parseInt", "Number", "parseFloat"), ConfigType.INTEGER, Confidence.HIGH),
    call_rule(("Boolean",), ConfigType.BOOLEAN, Confidence.HIGH),
    text_rule(
        r"={2,3}\s*(['\"](true|false)['\"]|true\b|false\b)",
        ConfigType.BOOLEAN,
        Confidence.MEDIUM,
    ),
    call_rule(("new URL",), ConfigType.URL, Confidence.HIGH),
]

_DEFAULT_OPERATORS = ("||", "??")
# Stop the default search at statement boundaries; wrapping calls are walked through
_BOUNDARY_SUFFIXES = ("statement", "declaration", "program")


class JavaScriptMatcher(TreeSitterMatcher):
    """Finds ``process.env.KEY`` and ``process.env['KEY']`` accesses."""

    LANGUAGE = Language.JAVASCRIPT
    QUERY = QUERY

    def handle_match(self, captures: Captures, ctx: MatchContext) -> None:
        dynamic = first(captures, "dynamic_access")
        if dynamic is not None:
            if _is_process_env(dynamic):
                ctx.add_warning(line_of(dynamic), DYNAMIC_ACCESS_MESSAGE, WarningType.DYNAMIC_ACCESS)
            return

        computed = first(captures, "computed_access")
        if computed is not None:
            if _is_process_env(computed):
                ctx.add_warning(line_of(computed), COMPUTED_KEY_MESSAGE, WarningType.COMPUTED_KEY)
            return

        access = first(captures, "access")
        key_node = first(captures, "key") or first(captures, "key_string")
        if access is None or key_node is None or not _is_process_env(access):
            return
        if not ctx.claim(access):
            return

        name = strip_quotes(node_text(key_node))
        if not name:
            return

        line = line_of(access)
        hint = infer_type(name, ctx.context_line(line), CONTEXT_RULES)
        ctx.add_usage(name, hint, line, find_default(access))


def _is_process_env(node: Node) -> bool:
    return node_text(node).startswith("process.env")


def find_default(access: Node) -> str | None:
    """Default from ``access || x``, ``access ?? x`` or ``access ? a : x``."""
    for current, parent in ancestors(access):
        if parent.type == "binary_expression":
            operator = node_text(parent.child_by_field_name("operator"))
            is_left = same_node(parent.child_by_field_name("left"), current)
            if is_left and operator in _DEFAULT_OPERATORS:
                return _default_text(parent.child_by_field_name("right"))
        elif parent.type in ("ternary_expression", "conditional_expression"):
            if same_node(parent.child_by_field_name("condition"), current):
                return _default_text(parent.child_by_field_name("alternative"))
            return None
        elif parent.type.endswith(_BOUNDARY_SUFFIXES):
            return None
    return None


def _default_text(node: Node | None) -> str | None:
    if node is None:
        return None
    return strip_quotes(node_text(node), "'\"`")
