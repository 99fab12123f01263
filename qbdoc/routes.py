"""Route discovery from Laravel route files and per-handler access."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from tree_sitter import Node

from .logging import get_logger
from .models import CallSite, Feature
from .php.nodes import argument_values, array_values, find_call_site, string_literal
from .php.parser import PhpParser, PhpTree, named_children, walk
from .php.phpdoc import DocBlock, parse_docblock
from .php.units import DeclaringUnit

_LOGGER = get_logger("routes")

HTTP_VERBS = ("get", "post", "put", "patch", "delete", "options")
_ROUTE_FACADES = frozenset({"Route", "Illuminate\\Support\\Facades\\Route"})
_USE_CLAUSES = frozenset({"namespace_use_clause", "namespace_use_group_clause"})
_USE_PREFIXES = frozenset({"namespace_name", "namespace_name_as_prefix"})


@dataclass(frozen=True)
class Route:
    """A route pointing at a controller method."""

    methods: Tuple[str, ...]
    uri: str
    controller: str
    action: str
    name: Optional[str] = None
    file: Optional[str] = None
    line: Optional[int] = None

    @property
    def uses(self) -> str:
        return f"{self.controller}@{self.action}"


def normalize_uri(prefix: str, uri: str) -> str:
    """Join ``prefix`` and ``uri`` into an OpenAPI path."""
    parts = [part.strip("/") for part in (prefix, uri) if part and part.strip("/")]
    path = "/" + "/".join(parts)
    path = re.sub(r"\{([A-Za-z_][A-Za-z0-9_]*)\?\}", r"{\1}", path)
    return re.sub(r"/{2,}", "/", path)


class RouteReader:
    """Reads ``Route::<verb>(...)`` declarations with tree-sitter."""

    def __init__(self, parser: PhpParser | None = None) -> None:
        self._parser = parser or PhpParser()

    def read(self, path: Path, prefix: str = "") -> List[Route]:
        source = Path(path).read_text(encoding="utf-8")
        return self.read_source(source, prefix=prefix, file=str(path))

    def read_source(self, source: str, prefix: str = "", file: Optional[str] = None) -> List[Route]:
        tree = self._parser.parse(source, file)
        imports = _imports(tree)
        namespace = _namespace(tree)
        routes: List[Route] = []
        for node in walk(tree.root):
            if node.type != "scoped_call_expression":
                continue
            if tree.text(node.child_by_field_name("scope")).lstrip("\\") not in _ROUTE_FACADES:
                continue
            verb = tree.text(node.child_by_field_name("name")).lower()
            if verb not in HTTP_VERBS:
                continue
            route = self._route(tree, node, verb, prefix, imports, namespace)
            if route is not None:
                routes.append(route)
        return routes

    def _route(
        self,
        tree: PhpTree,
        node: Node,
        verb: str,
        prefix: str,
        imports: Dict[str, str],
        namespace: str,
    ) -> Optional[Route]:
        args = list(argument_values(node.child_by_field_name("arguments")))
        if len(args) < 2:
            return None
        uri = string_literal(args[0], tree.source)
        handler = _handler(tree, args[1], imports, namespace)
        if uri is None or handler is None:
            _LOGGER.debug("Skipping route at line %d with unsupported handler", node.start_point[0] + 1)
            return None
        controller, action = handler
        return Route(
            methods=(verb.upper(),),
            uri=normalize_uri(prefix, uri),
            controller=controller,
            action=action,
            name=_chained_name(tree, node),
            file=tree.path,
            line=node.start_point[0] + 1,
        )


def _handler(
    tree: PhpTree, node: Node, imports: Dict[str, str], namespace: str
) -> Optional[Tuple[str, str]]:
    if node.type == "array_creation_expression":
        items = [item for item in array_values(node) if item is not None]
        if len(items) != 2 or items[0].type != "class_constant_access_expression":
            return None
        parts = named_children(items[0])
        if len(parts) != 2 or tree.text(parts[1]) != "class":
            return None
        action = string_literal(items[1], tree.source)
        if action is None:
            return None
        return resolve_class_name(tree.text(parts[0]), imports, namespace), action
    text = string_literal(node, tree.source)
    if text and "@" in text:
        controller, _, action = text.partition("@")
        return controller.lstrip("\\"), action
    return None


def _chained_name(tree: PhpTree, node: Node) -> Optional[str]:
    parent = node.parent
    while parent is not None and parent.type == "member_call_expression":
        if tree.text(parent.child_by_field_name("name")) == "name":
            args = list(argument_values(parent.child_by_field_name("arguments")))
            if args:
                return string_literal(args[0], tree.source)
        parent = parent.parent
    return None


def _namespace(tree: PhpTree) -> str:
    for node in walk(tree.root):
        if node.type == "namespace_definition":
            return tree.text(node.child_by_field_name("name")).strip("\\")
    return ""


def _imports(tree: PhpTree) -> Dict[str, str]:
    """Map short names and aliases from ``use`` statements to full names.

    Group imports (``use App\\Http\\{A, B as C};``) get the group prefix.
    """
    imports: Dict[str, str] = {}
    for node in walk(tree.root):
        if node.type != "namespace_use_declaration":
            continue
        parts = named_children(node)
        group = next((part for part in parts if part.type == "namespace_use_group"), None)
        if group is None:
            prefix = ""
            clauses = [part for part in parts if part.type in _USE_CLAUSES]
        else:
            prefix = next(
                (tree.text(part).strip().strip("\\") for part in parts if part.type in _USE_PREFIXES),
                "",
            )
            clauses = [part for part in named_children(group) if part.type in _USE_CLAUSES]
        for clause in clauses:
            imported = _use_clause(tree, clause)
            if imported is None:
                continue
            alias, full = imported
            imports[alias] = f"{prefix}\\{full}" if prefix else full
    return imports


def _use_clause(tree: PhpTree, clause: Node) -> Optional[Tuple[str, str]]:
    parts = named_children(clause)
    if not parts:
        return None
    full = tree.text(parts[0]).strip("\\")
    alias_node = clause.child_by_field_name("alias")
    if alias_node is None:
        alias_node = next(
            (
                named_children(part)[0]
                for part in parts[1:]
                if part.type == "namespace_aliasing_clause" and named_children(part)
            ),
            parts[1] if len(parts) > 1 and parts[1].type == "name" else None,
        )
    alias = tree.text(alias_node) if alias_node is not None else full.rsplit("\\", 1)[-1]
    return alias, full


def resolve_class_name(name: str, imports: Dict[str, str], namespace: str = "") -> str:
    """Resolve a class reference the way PHP name resolution does."""
    if name.startswith("\\"):
        return name.lstrip("\\")
    head, sep, rest = name.partition("\\")
    if head in imports:
        return imports[head] + (sep + rest if sep else "")
    return f"{namespace}\\{name}" if namespace else name


class RouteInfo:
    """A route bound to the parsed unit of its controller."""

    def __init__(self, route: Route, unit: DeclaringUnit) -> None:
        self.route = route
        self.unit = unit
        self._method = unit.find_method(route.action)

    def method_node(self) -> Optional[Node]:
        return self._method

    def doc_block(self) -> DocBlock:
        if self._method is None:
            return DocBlock()
        return parse_docblock(self.unit.doc_comment(self._method))

    def find_call_site(self, feature: Feature) -> Optional[CallSite]:
        if self._method is None:
            return None
        return find_call_site(self._method, self.unit.source, feature.capability, owner=self.route.controller)


__all__ = ["HTTP_VERBS", "Route", "RouteInfo", "RouteReader", "normalize_uri", "resolve_class_name"]
