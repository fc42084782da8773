"""Python ``os.environ`` / ``os.getenv`` matcher."""

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

_OS_ENVIRON = """(attribute
      object: (identifier) @os (#eq? @os "os")
      attribute: (identifier) @environ (#eq? @environ "environ"))"""

_ENVIRON_GET = f"""(attribute
      object: {_OS_ENVIRON}
      attribute: (identifier) @get (#eq? @get "get"))"""

_OS_GETENV = """(attribute
      object: (identifier) @os (#eq? @os "os")
      attribute: (identifier) @getenv (#eq? @getenv "getenv"))"""

QUERY = f"""
(subscript
  value: {_OS_ENVIRON}
  subscript: (string) @key_string) @access

(subscript
  value: {_OS_ENVIRON}
  subscript: (identifier) @dynamic_key) @dynamic_access

(call
  function: {_ENVIRON_GET}
  arguments: (argument_list . (string) @key_string)) @access

(call
  function: {_OS_GETENV}
  arguments: (argument_list . (string) @key_string)) @access

(call
  function: {_ENVIRON_GET}
  arguments: (argument_list . (identifier) @dynamic_key)) @dynamic_access

(call
  function: {_OS_GETENV}
  arguments: (argument_list . (identifier) @dynamic_key)) @dynamic_access
"""

CONTEXT_RULES = [
    call_rule(("int", "float"), ConfigType.INTEGER, Confidence.HIGH),
    call_rule(("bool",), ConfigType.BOOLEAN, Confidence.HIGH),
    text_rule(
        r"==\s*(['\"](true|false|1|0)['\"]|True\b|False\b)",
        ConfigType.BOOLEAN,
        Confidence.MEDIUM,
    ),
]

_ACCESS_PREFIXES = ("os.environ", "os.getenv")
_BOUNDARY_SUFFIXES = ("statement", "definition", "module", "argument_list")


class PythonMatcher(TreeSitterMatcher):
    """Finds ``os.environ[...]``, ``os.environ.get(...)`` and ``os.getenv(...)``."""

    LANGUAGE = Language.PYTHON
    QUERY = QUERY

    def handle_match(self, captures: Captures, ctx: MatchContext) -> None:
        dynamic = first(captures, "dynamic_access")
        if dynamic is not None:
            if _is_os_access(dynamic) and ctx.claim(dynamic):
                ctx.add_warning(line_of(dynamic), DYNAMIC_ACCESS_MESSAGE, WarningType.DYNAMIC_ACCESS)
            return

        access = first(captures, "access")
        key_node = first(captures, "key_string")
        if access is None or key_node is None or not _is_os_access(access):
            return
        if not ctx.claim(access):
            return

        line = line_of(access)
        if any(child.type == "interpolation" for child in key_node.children):
            ctx.add_warning(line, COMPUTED_KEY_MESSAGE, WarningType.COMPUTED_KEY)
            return

        name = _string_value(key_node)
        if not name:
            return

        hint = infer_type(name, ctx.context_line(line), CONTEXT_RULES)
        default = _default_argument(access)
        if default is None:
            default = _default_from_or(access)
        ctx.add_usage(name, hint, line, default)


def _is_os_access(node: Node) -> bool:
    return node_text(node).startswith(_ACCESS_PREFIXES)


def _string_value(node: Node) -> str:
    content = [node_text(child) for child in node.children if child.type == "string_content"]
    if content:
        return "".join(content)
    return strip_quotes(node_text(node))


def _default_argument(call: Node) -> str | None:
    """Second positional argument, or ``default=`` keyword, of a get/getenv call."""
    if call.type != "call":
        return None
    arguments = call.child_by_field_name("arguments")
    if arguments is None:
        return None

    positional = []
    for arg in arguments.named_children:
        if arg.type == "keyword_argument":
            if node_text(arg.child_by_field_name("name")) == "default":
                return _literal(arg.child_by_field_name("value"))
            continue
        if arg.type != "comment":
            positional.append(arg)

    if len(positional) > 1:
        return _literal(positional[1])
    return None


def _default_from_or(access: Node) -> str | None:
    for current, parent in ancestors(access):
        if parent.type == "boolean_operator":
            is_or = any(child.type == "or" for child in parent.children)
            if is_or and same_node(parent.child_by_field_name("left"), current):
                return _literal(parent.child_by_field_name("right"))
        elif parent.type.endswith(_BOUNDARY_SUFFIXES):
            return None
    return None


def _literal(node: Node | None) -> str | None:
    if node is None or node.type == "none":
        return None
    if node.type == "string":
        return _string_value(node)
    return node_text(node)
