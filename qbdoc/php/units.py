"""Declaring units: parsed PHP class files used for cross-file lookups."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Protocol

from tree_sitter import Node

from ..logging import get_logger
from ..models import Empty, ValueSource
from .nodes import short_class_name, value_source
from .parser import FUNCTION_SCOPES, PhpParser, PhpTree, find_first, named_children, walk

_LOGGER = get_logger("units")


class DeclaringUnit:
    """One parsed PHP file, focused on the class a lookup asked for."""

    def __init__(self, tree: PhpTree, class_name: Optional[str] = None) -> None:
        self.tree = tree
        self.class_name = class_name
        self._scope = self._class_node() or tree.root

    @property
    def source(self) -> bytes:
        return self.tree.source

    def _class_node(self) -> Optional[Node]:
        wanted = short_class_name(self.class_name) if self.class_name else None
        first: Optional[Node] = None
        for node in walk(self.tree.root):
            if node.type != "class_declaration":
                continue
            if first is None:
                first = node
            if wanted is not None and self.tree.text(node.child_by_field_name("name")) == wanted:
                return node
        return first

    def find_method(self, name: str) -> Optional[Node]:
        return find_first(
            self._scope,
            lambda node: node.type == "method_declaration"
            and self.tree.text(node.child_by_field_name("name")) == name,
        )

    def find_field(self, name: str) -> Optional[Node]:
        """Return the ``property_element`` declaring ``$name``."""
        wanted = f"${name}"
        for node in walk(self._scope):
            if node.type != "property_element":
                continue
            variable = node.child_by_field_name("name")
            if variable is None:
                variable = next((c for c in node.named_children if c.type == "variable_name"), None)
            if variable is not None and self.tree.text(variable) == wanted:
                return node
        return None

    def field_default(self, name: str) -> Optional[ValueSource]:
        """Shape of the property's default value; None when the field is missing."""
        element = self.find_field(name)
        if element is None:
            return None
        return value_source(_property_default(element), self.source)

    def method_return(self, name: str) -> Optional[ValueSource]:
        """Shape of the first value the method returns.

        None when the method or a return statement is missing. Returns in
        nested closures belong to the closure and are not considered.
        """
        method = self.find_method(name)
        if method is None:
            return None
        body = method.child_by_field_name("body")
        if body is None:
            return None
        statement = find_first(
            body,
            lambda node: node.type == "return_statement",
            skip=lambda node: node.type in FUNCTION_SCOPES,
        )
        if statement is None:
            return None
        parts = named_children(statement)
        return value_source(parts[0], self.source) if parts else Empty()

    def doc_comment(self, method: Node) -> Optional[str]:
        sibling = method.prev_named_sibling
        if sibling is None or sibling.type != "comment":
            return None
        text = self.tree.text(sibling)
        return text if text.startswith("/**") else None


def _property_default(element: Node) -> Optional[Node]:
    field_value = element.child_by_field_name("default_value")
    if field_value is not None:
        return field_value
    seen_equals = False
    for child in element.children:
        if child.type == "property_initializer":
            inner = named_children(child)
            return inner[0] if inner else None
        if child.type == "=":
            seen_equals = True
        elif seen_equals and child.is_named and child.type != "comment":
            return child
    return None


class UnitProvider(Protocol):
    """Loads the declaring unit of a class by its fully qualified name."""

    def load(self, class_name: str) -> Optional[DeclaringUnit]:
        ...


class ComposerUnitProvider:
    """Locates class files through composer's PSR-4 autoload tables.

    Files are parsed again on every ``load``.
    """

    def __init__(self, project_root: Path, parser: PhpParser | None = None) -> None:
        self.root = Path(project_root)
        self._parser = parser or PhpParser()
        self._prefixes = _read_psr4(self.root / "composer.json")

    def locate(self, class_name: str) -> Optional[Path]:
        name = class_name.strip().lstrip("\\")
        for prefix in sorted(self._prefixes, key=len, reverse=True):
            if not name.startswith(prefix):
                continue
            relative = name[len(prefix) :].replace("\\", "/") + ".php"
            for directory in self._prefixes[prefix]:
                candidate = self.root / directory / relative
                if candidate.is_file():
                    return candidate
        return None

    def load(self, class_name: str) -> Optional[DeclaringUnit]:
        path = self.locate(class_name)
        if path is None:
            _LOGGER.debug("No autoload path for %s", class_name)
            return None
        try:
            source = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            _LOGGER.warning("Unable to read %s: %s", path, exc)
            return None
        return DeclaringUnit(self._parser.parse(source, str(path)), class_name)


class SourceUnitProvider:
    """Serves units from in-memory source text keyed by class name."""

    def __init__(self, sources: Mapping[str, str], parser: PhpParser | None = None) -> None:
        self._sources = {name.lstrip("\\"): text for name, text in sources.items()}
        self._parser = parser or PhpParser()

    def load(self, class_name: str) -> Optional[DeclaringUnit]:
        source = self._sources.get(class_name.lstrip("\\"))
        if source is None:
            return None
        return DeclaringUnit(self._parser.parse(source), class_name)


def _read_psr4(composer_file: Path) -> Dict[str, List[str]]:
    if not composer_file.is_file():
        return {}
    try:
        data = json.loads(composer_file.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        _LOGGER.warning("Ignoring unreadable %s: %s", composer_file, exc)
        return {}
    prefixes: Dict[str, List[str]] = {}
    if not isinstance(data, dict):
        return prefixes
    for section in ("autoload", "autoload-dev"):
        table = data.get(section)
        if not isinstance(table, dict):
            continue
        psr4 = table.get("psr-4")
        if not isinstance(psr4, dict):
            continue
        for prefix, directories in psr4.items():
            if isinstance(directories, str):
                directories = [directories]
            if not isinstance(directories, list):
                continue
            prefixes.setdefault(prefix, []).extend(str(item) for item in directories)
    return prefixes


__all__ = ["ComposerUnitProvider", "DeclaringUnit", "SourceUnitProvider", "UnitProvider"]
