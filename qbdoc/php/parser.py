"""Tree-sitter powered PHP parsing."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterator, Optional

import tree_sitter_php
from tree_sitter import Language, Node, Parser

PHP_LANGUAGE = Language(tree_sitter_php.language_php())

# Nodes that open a new function scope inside a method body.
FUNCTION_SCOPES = frozenset(
    {
        "anonymous_function",
        "anonymous_function_creation_expression",
        "arrow_function",
        "anonymous_class",
        "function_definition",
    }
)


@dataclass
class PhpTree:
    """A parsed PHP source unit and the bytes its nodes point into."""

    root: Node
    source: bytes
    path: Optional[str] = None

    def text(self, node: Optional[Node]) -> str:
        return node_text(node, self.source)


class PhpParser:
    """Parses PHP source text into tree-sitter syntax trees."""

    def __init__(self) -> None:
        self._parser = Parser(PHP_LANGUAGE)

    def parse(self, source: str, path: Optional[str] = None) -> PhpTree:
        source_bytes = source.encode("utf-8")
        tree = self._parser.parse(source_bytes)
        return PhpTree(root=tree.root_node, source=source_bytes, path=path)


def node_text(node: Optional[Node], source_bytes: bytes) -> str:
    if node is None:
        return ""
    return source_bytes[node.start_byte : node.end_byte].decode("utf-8", errors="ignore")


def walk(node: Node, skip: Callable[[Node], bool] | None = None) -> Iterator[Node]:
    """Yield ``node`` and its descendants in pre-order.

    Children of a node for which ``skip`` returns True are not visited; the
    node itself still is.
    """
    yield node
    if skip is not None and skip(node):
        return
    for child in node.children:
        yield from walk(child, skip)


def named_children(node: Node) -> list[Node]:
    """Return named children, leaving out comments."""
    return [child for child in node.named_children if child.type != "comment"]


def find_first(
    node: Node, predicate: Callable[[Node], bool], skip: Callable[[Node], bool] | None = None
) -> Optional[Node]:
    for candidate in walk(node, skip):
        if predicate(candidate):
            return candidate
    return None


__all__ = ["PHP_LANGUAGE", "PhpParser", "PhpTree", "find_first", "named_children", "node_text", "walk"]
