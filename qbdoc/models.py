"""Core data models shared across qbdoc components."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional, Tuple, Union


class Capability(str, Enum):
    """Query builder methods whose arguments shape the query string."""

    INCLUDE = "allowedIncludes"
    FILTER = "allowedFilters"
    SORT = "allowedSorts"
    FIELD = "allowedFields"

    @property
    def method_name(self) -> str:
        return self.value


@dataclass
class Feature:
    """One documented capability with its query parameter key."""

    capability: Capability
    query_parameter_key: str
    sample_values: List[str] = field(default_factory=list)

    @property
    def method_name(self) -> str:
        return self.capability.method_name


# ---------------------------------------------------------------------------
# Argument shapes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Empty:
    """No expression at all, e.g. a bare ``return;``."""


@dataclass(frozen=True)
class LiteralString:
    text: str


@dataclass(frozen=True)
class InlineList:
    items: Tuple["ValueSource", ...] = ()


@dataclass(frozen=True)
class FieldRef:
    """``$this->name`` read of a property on the handler's class."""

    name: str


@dataclass(frozen=True)
class MethodRef:
    """``$this->name()`` call of a method on the handler's class."""

    name: str


@dataclass(frozen=True)
class FactoryCall:
    """Static constructor such as ``AllowedFilter::exact('name')``."""

    factory: str
    method: str
    args: Tuple["ValueSource", ...] = ()


@dataclass(frozen=True)
class Opaque:
    """Any expression none of the other shapes describe."""

    node_type: str


ValueSource = Union[Empty, LiteralString, InlineList, FieldRef, MethodRef, FactoryCall, Opaque]


class Unsupported:
    """Marker for an argument shape the inference engine cannot resolve."""

    _instance: Optional["Unsupported"] = None

    def __new__(cls) -> "Unsupported":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSUPPORTED"


UNSUPPORTED = Unsupported()

ResolvedValue = Union[str, Unsupported]


@dataclass(frozen=True)
class CallSite:
    """A located capability call inside a handler method."""

    capability: Capability
    arguments: Tuple[ValueSource, ...] = ()
    owner: Optional[str] = None


# ---------------------------------------------------------------------------
# Documentation output
# ---------------------------------------------------------------------------


class ValueType(str, Enum):
    STRING = "string"
    INTEGER = "integer"
    BOOLEAN = "boolean"


@dataclass
class ParamOverride:
    """Structured metadata parsed from one ``@queryParam`` tag."""

    type: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    examples: List[str] = field(default_factory=list)
    enum: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class ParameterDescriptor:
    """Emission-ready metadata for one query parameter."""

    key: str
    value_type: ValueType = ValueType.STRING
    format: Optional[str] = None
    description: Optional[str] = None
    example: Any = None
    examples: Tuple[Any, ...] = ()
    enum_values: Tuple[str, ...] = ()
