"""Java ``System.getenv`` and Spring ``@Value`` matcher."""

from __future__ import annotations

import re

from tree_sitter import Node

from configflow.matchers.base import (
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
from configflow.matchers.inference import TypeHint, call_rule, infer_from_context, text_rule
from configflow.models.types import Confidence, ConfigType, Language, WarningType

_GETENV = """object: (identifier) @system (#eq? @system "System")
  name: (identifier) @getenv (#eq? @getenv "getenv")"""

QUERY = f"""
(method_invocation
  {_GETENV}
  arguments: (argument_list . (string_literal) @key_string .)) @access

(method_invocation
  {_GETENV}
  arguments: (argument_list . (identifier) @dynamic_key .)) @dynamic_access

(annotation
  name: (identifier) @value_annotation (#eq? @value_annotation "Value")
  arguments: (annotation_argument_list (string_literal) @value_string)) @annotation_access

(annotation
  name: (identifier) @value_annotation (#eq? @value_annotation "Value")
  arguments: (annotation_argument_list
    (element_value_pair
      key: (identifier) @value_key (#eq? @value_key "value")
      value: (string_literal) @value_string))) @annotation_access
"""

VARIABLE_KEY_MESSAGE = "Dynamic environment variable access detected (variable key)"

PLACEHOLDER = re.compile(r"\$\{([^}:]+)(?::([^}]*))?\}")

CONTEXT_RULES = [
    call_rule(("Integer.parseInt", "Long.parseLong"), ConfigType.INTEGER, Confidence.HIGH),
    call_rule(("Boolean.parseBoolean",), ConfigType.BOOLEAN, Confidence.HIGH),
    call_rule(("Double.parseDouble", "Float.parseFloat"), ConfigType.STRING, Confidence.HIGH),
    call_rule(("new URI", "new URL", "URI.create"), ConfigType.URL, Confidence.MEDIUM),
    text_rule(
        r"jdbc:|DriverManager\.getConnection|DataSource",
        ConfigType.CONNECTION_STRING,
        Confidence.MEDIUM,
    ),
]

_INTEGER_TYPES = {"int", "Integer", "long", "Long", "short", "Short"}
_BOOLEAN_TYPES = {"boolean", "Boolean"}
_URL_TYPES = {"URI", "URL"}
_DECLARATIONS = ("local_variable_declaration", "field_declaration", "formal_parameter")
_SCOPE_TYPES = ("block", "class_body", "method_declaration", "constructor_declaration", "program")


def infer_from_java_type(type_name: str) -> TypeHint:
    """Map a declared Java type to a config type."""
    if type_name in _INTEGER_TYPES:
        return ConfigType.INTEGER, Confidence.HIGH
    if type_name in _BOOLEAN_TYPES:
        return ConfigType.BOOLEAN, Confidence.HIGH
    if type_name.lower() in ("float", "double") or type_name == "String":
        return ConfigType.STRING, Confidence.HIGH
    if type_name in _URL_TYPES:
        return ConfigType.URL, Confidence.HIGH
    return ConfigType.STRING, Confidence.MEDIUM


class JavaMatcher(TreeSitterMatcher):
    """Finds ``System.getenv("KEY")`` and ``@Value("${KEY:default}")``.

    Types come from the declared type of the enclosing field or local
    variable when there is one; otherwise from conversion calls on the
    line. Java names are not matched against keyword lists.
    """

    LANGUAGE = Language.JAVA
    QUERY = QUERY

    def handle_match(self, captures: Captures, ctx: MatchContext) -> None:
        annotation = first(captures, "annotation_access")
        if annotation is not None:
            self._handle_annotation(annotation, first(captures, "value_string"), ctx)
            return

        dynamic = first(captures, "dynamic_access")
        if dynamic is not None:
            if _is_getenv(captures) and ctx.claim(dynamic):
                ctx.add_warning(line_of(dynamic), VARIABLE_KEY_MESSAGE, WarningType.DYNAMIC_ACCESS)
            return

        access = first(captures, "access")
        key_node = first(captures, "key_string")
        if access is None or key_node is None or not _is_getenv(captures):
            return
        if not ctx.claim(access):
            return

        name = strip_quotes(node_text(key_node))
        if not name:
            return

        line = line_of(access)
        hint = _declared_type(access)
        if hint is None:
            hint = infer_from_context(ctx.context_line(line), CONTEXT_RULES)
        ctx.add_usage(name, hint or (ConfigType.STRING, Confidence.LOW), line, _ternary_default(access))

    def _handle_annotation(self, annotation: Node, value: Node | None, ctx: MatchContext) -> None:
        if value is None or node_text(annotation.child_by_field_name("name")) != "Value":
            return
        if not ctx.claim(annotation):
            return

        placeholder = PLACEHOLDER.search(strip_quotes(node_text(value)))
        if placeholder is None:
            return
        name = placeholder.group(1).strip()
        if not name:
            return

        line = line_of(annotation)
        hint = _declared_type(annotation) or (ConfigType.STRING, Confidence.MEDIUM)
        ctx.add_usage(name, hint, line, placeholder.group(2))


def _is_getenv(captures: Captures) -> bool:
    return (
        node_text(first(captures, "system")) == "System"
        and node_text(first(captures, "getenv")) == "getenv"
    )


def _declared_type(node: Node) -> TypeHint | None:
    """Type of the nearest enclosing declaration, if it is a known one."""
    for _, parent in ancestors(node):
        if parent.type in _DECLARATIONS:
            type_node = parent.child_by_field_name("type")
            if type_node is None:
                return None
            if type_node.type == "boolean_type":
                return ConfigType.BOOLEAN, Confidence.HIGH
            type_name = node_text(type_node)
            if type_name == "var":
                return None
            return infer_from_java_type(type_name)
        if parent.type in _SCOPE_TYPES:
            return None
    return None


def _ternary_default(access: Node) -> str | None:
    for _, parent in ancestors(access):
        if parent.type == "ternary_expression":
            alternative = parent.child_by_field_name("alternative")
            if alternative is None or contains(alternative, access):
                return None
            return strip_quotes(node_text(alternative))
        if parent.type in _SCOPE_TYPES or parent.type.endswith("statement"):
            return None
    return None
