"""Go ``os.Getenv`` / ``os.LookupEnv`` / viper matcher."""

from __future__ import annotations

from typing import Iterator

from tree_sitter import Node

from configflow.matchers.base import (
    DYNAMIC_ACCESS_MESSAGE,
    Captures,
    MatchContext,
    TreeSitterMatcher,
    ancestors,
    contains,
    first,
    line_of,
    node_text,
    strip_quotes,
)
from configflow.matchers.inference import TypeHint, call_rule, infer_type, text_rule
from configflow.models.types import Confidence, ConfigType, Language, WarningType

_STRING = "[(interpreted_string_literal) (raw_string_literal)]"

QUERY = f"""
(call_expression
  function: (selector_expression
    operand: (identifier) @pkg (#eq? @pkg "os")
    field: (field_identifier) @func (#any-of? @func "Getenv" "LookupEnv"))
  arguments: (argument_list . {_STRING} @key_string .)) @access

(call_expression
  function: (selector_expression
    operand: (identifier) @pkg (#eq? @pkg "os")
    field: (field_identifier) @func (#any-of? @func "Getenv" "LookupEnv"))
  arguments: (argument_list . (identifier) @dynamic_key .)) @dynamic_access

(call_expression
  function: (selector_expression
    operand: (identifier) @viper (#eq? @viper "viper")
    field: (field_identifier) @method)
  arguments: (argument_list . {_STRING} @key_string .)) @viper_access
"""

CONTEXT_RULES = [
    call_rule(
        ("strconv.Atoi", "strconv.ParseInt", "strconv.ParseUint"),
        ConfigType.INTEGER,
        Confidence.HIGH,
    ),
    call_rule(("strconv.ParseBool",), ConfigType.BOOLEAN, Confidence.HIGH),
    text_rule(r'==\s*"(true|false)"', ConfigType.BOOLEAN, Confidence.MEDIUM),
]

VIPER_INTEGER_GETTERS = {"GetInt", "GetInt32", "GetInt64", "GetUint", "GetUint32", "GetUint64"}

_ENV_FUNCS = ("Getenv", "LookupEnv")
_BINDINGS = ("short_var_declaration", "assignment_statement", "var_spec")
_SCOPE_TYPES = ("block", "function_declaration", "method_declaration", "func_literal", "source_file")


class GoMatcher(TreeSitterMatcher):
    """Finds ``os.Getenv("KEY")``, ``os.LookupEnv("KEY")`` and ``viper.GetX("KEY")``."""

    LANGUAGE = Language.GO
    QUERY = QUERY

    def handle_match(self, captures: Captures, ctx: MatchContext) -> None:
        dynamic = first(captures, "dynamic_access")
        if dynamic is not None:
            if _is_os_env(captures) and ctx.claim(dynamic):
                ctx.add_warning(line_of(dynamic), DYNAMIC_ACCESS_MESSAGE, WarningType.DYNAMIC_ACCESS)
            return

        key_node = first(captures, "key_string")
        viper_access = first(captures, "viper_access")
        if viper_access is not None:
            self._handle_viper(viper_access, key_node, captures, ctx)
            return

        access = first(captures, "access")
        if access is None or key_node is None or not _is_os_env(captures):
            return
        if not ctx.claim(access):
            return

        name = strip_quotes(node_text(key_node), '"`')
        if not name:
            return

        line = line_of(access)
        hint = infer_type(name, ctx.context_line(line), CONTEXT_RULES)
        ctx.add_usage(name, hint, line, find_default(access))

    def _handle_viper(
        self,
        access: Node,
        key_node: Node | None,
        captures: Captures,
        ctx: MatchContext,
    ) -> None:
        method = node_text(first(captures, "method"))
        if key_node is None or node_text(first(captures, "viper")) != "viper":
            return
        if not method.startswith("Get") or not ctx.claim(access):
            return

        name = strip_quotes(node_text(key_node), '"`')
        if not name:
            return

        line = line_of(access)
        ctx.add_usage(name, _viper_type(method, name, ctx.context_line(line)), line)


def _is_os_env(captures: Captures) -> bool:
    return node_text(first(captures, "pkg")) == "os" and node_text(first(captures, "func")) in _ENV_FUNCS


def _viper_type(method: str, name: str, context: str | None) -> TypeHint:
    if method in VIPER_INTEGER_GETTERS:
        return ConfigType.INTEGER, Confidence.HIGH
    if method == "GetBool":
        return ConfigType.BOOLEAN, Confidence.HIGH
    if method == "GetString":
        return infer_type(name, context, CONTEXT_RULES)
    return ConfigType.STRING, Confidence.MEDIUM


def find_default(access: Node) -> str | None:
    """Default assigned by an ``if v == "" { v = "x" }`` fallback.

    Handles the fallback both as the if-statement's initializer
    (``if v := os.Getenv(..); v == ""``) and as the statement directly
    following the binding.
    """
    for _, parent in ancestors(access):
        if parent.type == "if_statement":
            initializer = parent.child_by_field_name("initializer")
            if initializer is not None and contains(initializer, access):
                return _assigned_literal(parent)
            return None
        if parent.type in _BINDINGS:
            if parent.parent is not None and parent.parent.type == "if_statement":
                continue
            binding = parent if parent.type != "var_spec" else parent.parent
            following = binding.next_named_sibling if binding is not None else None
            if following is not None and following.type == "if_statement":
                variable = _bound_name(parent)
                condition = node_text(following.child_by_field_name("condition"))
                if variable and condition.replace(" ", "") == f'{variable}==""':
                    return _assigned_literal(following)
            return None
        if parent.type in _SCOPE_TYPES:
            return None
    return None


def _bound_name(binding: Node) -> str:
    target = binding.child_by_field_name("left") or binding.child_by_field_name("name")
    if target is None:
        return ""
    if target.type == "expression_list":
        names = target.named_children
        return node_text(names[0]) if names else ""
    return node_text(target)


def _assigned_literal(if_statement: Node) -> str | None:
    consequence = if_statement.child_by_field_name("consequence")
    if consequence is None:
        return None
    for statement in _walk(consequence):
        if statement.type in ("assignment_statement", "short_var_declaration"):
            right = statement.child_by_field_name("right")
            literal = _first_string(right) if right is not None else None
            if literal is not None:
                return literal
    return None


def _first_string(node: Node) -> str | None:
    for child in _walk(node):
        if child.type in ("interpreted_string_literal", "raw_string_literal"):
            return strip_quotes(node_text(child), '"`')
    return None


def _walk(node: Node) -> Iterator[Node]:
    yield node
    for child in node.named_children:
        yield from _walk(child)
