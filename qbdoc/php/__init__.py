"""PHP syntax support built on tree-sitter."""

from .nodes import find_call_site, value_source
from .parser import PhpParser, PhpTree
from .phpdoc import DocBlock, DocTag, parse_docblock
from .units import ComposerUnitProvider, DeclaringUnit, SourceUnitProvider, UnitProvider

__all__ = [
    "ComposerUnitProvider",
    "DeclaringUnit",
    "DocBlock",
    "DocTag",
    "PhpParser",
    "PhpTree",
    "SourceUnitProvider",
    "UnitProvider",
    "find_call_site",
    "parse_docblock",
    "value_source",
]
