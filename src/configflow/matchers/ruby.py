"""Ruby ``ENV`` matcher."""

from __future__ import annotations

from tree_sitter import Node

from configflow.matchers.base import (
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

_ENV = '(constant) @env (#eq? @env "ENV")'
_FETCH = '(identifier) @fetch (#eq? @fetch "fetch")'

QUERY = f"""
(element_reference
  object: {_ENV}
  (string) @key_string) @access

(element_reference
  object: {_ENV}
  (identifier) @dynamic_key) @dynamic_access

(call
  receiver: {_ENV}
  method: {_FETCH}
  arguments: (argument_list . (string) @key_string)) @access

(call
  receiver: {_ENV}
  method: {_FETCH}
  arguments: (argument_list . (identifier) @dynamic_key)) @dynamic_access
"""

INTERPOLATION_MESSAGE = "Dynamic environment variable access detected (string interpolation)"

CONTEXT_RULES = [
    text_rule(r"\.to_i\b", ConfigType.INTEGER, Confidence.HIGH),
    call_rule(("Integer",), ConfigType.INTEGER, Confidence.HIGH),
    text_rule(
        r"==\s*(['\"](true|false)['\"]|true\b|false\b)",
        ConfigType.BOOLEAN,
        Confidence.MEDIUM,
    ),
]

_BOUNDARY_TYPES = ("program", "method", "class", "module", "block", "do_block", "argument_list")


class RubyMatcher(TreeSitterMatcher):
    """Finds ``ENV['KEY']`` and ``ENV.fetch('KEY', default)``.

    An interpolated key such as ``ENV["#{prefix}_KEY"]`` produces one
    warning per line and no usage.
    """

    LANGUAGE = Language.RUBY
    QUERY = QUERY

    def handle_match(self, captures: Captures, ctx: MatchContext) -> None:
        dynamic = first(captures, "dynamic_access")
        if dynamic is not None:
            if _is_env(dynamic) and ctx.claim(dynamic):
                ctx.add_warning(line_of(dynamic), DYNAMIC_ACCESS_MESSAGE, WarningType.DYNAMIC_ACCESS)
            return

        access = first(captures, "access")
        key_node = first(captures, "key_string")
        if access is None or key_node is None or not _is_env(access):
            return
        if not ctx.claim(access):
            return

        line = line_of(access)
        if any(child.type == "interpolation" for child in key_node.children):
            ctx.add_warning(
                line,
                INTERPOLATION_MESSAGE,
                WarningType.DYNAMIC_ACCESS,
                once_per_line=True,
            )
            return

        name = _string_value(key_node)
        if not name:
            return

        hint = infer_type(name, ctx.context_line(line), CONTEXT_RULES)
        default = _fetch_default(access) if access.type == "call" else None
        if default is None:
            default = _default_from_or(access)
        ctx.add_usage(name, hint, line, default)


def _is_env(node: Node) -> bool:
    return node_text(node).startswith("ENV")


def _string_value(node: Node) -> str:
    content = [node_text(child) for child in node.children if child.type == "string_content"]
    if content:
        return "".join(content)
    return strip_quotes(node_text(node))


def _literal(node: Node | None) -> str | None:
    if node is None or node.type == "nil":
        return None
    if node.type == "string":
        return _string_value(node)
    return node_text(node)


def _fetch_default(call: Node) -> str | None:
    arguments = call.child_by_field_name("arguments")
    if arguments is None:
        return None
    args = [arg for arg in arguments.named_children if arg.type != "comment"]
    if len(args) > 1:
        return _literal(args[1])
    return None


def _default_from_or(access: Node) -> str | None:
    for current, parent in ancestors(access):
        if parent.type == "binary":
            operator = node_text(parent.child_by_field_name("operator"))
            if operator in ("||", "or") and same_node(parent.child_by_field_name("left"), current):
                return _literal(parent.child_by_field_name("right"))
        elif parent.type in _BOUNDARY_TYPES:
            return None
    return None
