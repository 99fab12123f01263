"""Conversion of PHP expression nodes into argument shapes."""

from __future__ import annotations

import re
from typing import Iterator, Optional

from tree_sitter import Node

from ..models import (
    CallSite,
    Capability,
    Empty,
    FactoryCall,
    FieldRef,
    InlineList,
    LiteralString,
    MethodRef,
    Opaque,
    ValueSource,
)
from .parser import find_first, named_children, node_text

_STRING_TYPES = frozenset({"string", "encapsed_string"})
_STRING_PARTS = frozenset({"string_content", "string_value", "escape_sequence"})
_CALL_TYPES = frozenset({"member_call_expression", "nullsafe_member_call_expression"})

_SINGLE_QUOTED_ESCAPE = re.compile(r"\\([\\'])")
_DOUBLE_QUOTED_ESCAPE = re.compile(r"\\([nrtvef\\$\"])")
_INTERPOLATION = re.compile(r"(?<!\\)\$[A-Za-z_{]|\{\$")
_DOUBLE_QUOTED_MAP = {
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
    "e": "\x1b",
    "f": "\f",
    "\\": "\\",
    "$": "$",
    '"': '"',
}


def string_literal(node: Node, source: bytes) -> Optional[str]:
    """Return the value of a constant string literal, or None.

    Double quoted strings that interpolate variables are not constant and
    give None.
    """
    if node.type not in _STRING_TYPES:
        return None
    raw = node_text(node, source)
    if raw[:1] in {"b", "B"}:
        raw = raw[1:]
    if len(raw) < 2 or raw[0] != raw[-1] or raw[0] not in {"'", '"'}:
        return None
    inner = raw[1:-1]
    if raw[0] == "'":
        return _SINGLE_QUOTED_ESCAPE.sub(r"\1", inner)
    if any(child.type not in _STRING_PARTS for child in named_children(node)):
        return None
    if _INTERPOLATION.search(inner):
        return None
    return _DOUBLE_QUOTED_ESCAPE.sub(lambda match: _DOUBLE_QUOTED_MAP[match.group(1)], inner)


def short_class_name(name: str) -> str:
    """``\\Spatie\\QueryBuilder\\AllowedFilter`` -> ``AllowedFilter``."""
    return name.strip().lstrip("\\").rsplit("\\", 1)[-1]


def is_this(node: Optional[Node], source: bytes) -> bool:
    return node is not None and node.type == "variable_name" and node_text(node, source) == "$this"


def argument_values(arguments: Optional[Node]) -> Iterator[Node]:
    """Yield the expression node of each argument in order."""
    if arguments is None:
        return
    for child in named_children(arguments):
        if child.type == "argument":
            parts = named_children(child)
            if parts:
                # Named arguments carry their label first; the value is last.
                yield parts[-1]
        else:
            yield child


def array_values(array: Node) -> Iterator[Optional[Node]]:
    """Yield the value node of each element of an array literal."""
    for child in named_children(array):
        if child.type != "array_element_initializer":
            continue
        parts = named_children(child)
        # ``'key' => 'value'`` keeps the value last.
        yield parts[-1] if parts else None


def value_source(node: Optional[Node], source: bytes) -> ValueSource:
    """Describe the shape of an expression node."""
    if node is None:
        return Empty()
    kind = node.type
    if kind in _STRING_TYPES:
        text = string_literal(node, source)
        return LiteralString(text) if text is not None else Opaque(kind)
    if kind == "array_creation_expression":
        return InlineList(tuple(value_source(item, source) for item in array_values(node)))
    if kind == "parenthesized_expression":
        inner = named_children(node)
        return value_source(inner[0], source) if len(inner) == 1 else Opaque(kind)
    if kind in {"member_access_expression", "member_call_expression"}:
        name = node.child_by_field_name("name")
        if is_this(node.child_by_field_name("object"), source) and name is not None and name.type == "name":
            text = node_text(name, source)
            return FieldRef(text) if kind == "member_access_expression" else MethodRef(text)
        return Opaque(kind)
    if kind == "scoped_call_expression":
        scope = node.child_by_field_name("scope")
        name = node.child_by_field_name("name")
        if scope is None or name is None:
            return Opaque(kind)
        args = tuple(
            value_source(argument, source)
            for argument in argument_values(node.child_by_field_name("arguments"))
        )
        return FactoryCall(
            factory=short_class_name(node_text(scope, source)),
            method=node_text(name, source),
            args=args,
        )
    return Opaque(kind)


def find_call_site(
    method_node: Node,
    source: bytes,
    capability: Capability,
    owner: Optional[str] = None,
) -> Optional[CallSite]:
    """Locate the first ``->method(...)`` call named after ``capability``."""
    # TODO: check that the call is made on a QueryBuilder instance.
    call = find_first(
        method_node,
        lambda node: node.type in _CALL_TYPES
        and node_text(node.child_by_field_name("name"), source) == capability.method_name,
    )
    if call is None:
        return None
    arguments = tuple(
        value_source(argument, source)
        for argument in argument_values(call.child_by_field_name("arguments"))
    )
    return CallSite(capability=capability, arguments=arguments, owner=owner)


__all__ = [
    "argument_values",
    "array_values",
    "find_call_site",
    "is_this",
    "short_class_name",
    "string_literal",
    "value_source",
]
