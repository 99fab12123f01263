"""Static inference of the values a capability call allows."""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional, Sequence

from ..logging import get_logger
from ..models import (
    UNSUPPORTED,
    CallSite,
    Empty,
    FactoryCall,
    FieldRef,
    InlineList,
    LiteralString,
    MethodRef,
    Opaque,
    ResolvedValue,
    ValueSource,
)
from ..php.units import DeclaringUnit, UnitProvider
from .factories import FactoryValueExtractor

_LOGGER = get_logger("inference")

# Each resolver receives the first argument, already narrowed by the dispatch key.
_Resolver = Callable[[Any, CallSite], List[ResolvedValue]]


class ValueInferenceEngine:
    """Resolves a call site's arguments into the ordered list of allowed values.

    Dispatch happens on the shape of the first argument. Every shape in
    ``ValueSource`` has an entry in the resolver table; a new shape needs a
    new entry.

    * ``->allowedIncludes()``                      -> ``[]``
    * ``->allowedIncludes(['posts', ...])``         -> each element
    * ``->allowedIncludes('posts', 'posts.author')`` -> each argument
    * ``->allowedIncludes($this->includes)``        -> property default
    * ``->allowedIncludes($this->includes())``      -> first returned array

    Elements that cannot be resolved become ``UNSUPPORTED``, except in the
    property form where they are dropped. Resolution never raises.
    """

    def __init__(self, units: UnitProvider, factories: FactoryValueExtractor | None = None) -> None:
        self._units = units
        self._factories = factories or FactoryValueExtractor()
        self._resolvers: Dict[type, _Resolver] = {
            InlineList: self._from_inline_list,
            LiteralString: self._from_variadic_strings,
            FieldRef: self._from_field,
            MethodRef: self._from_method,
            FactoryCall: self._nothing,
            Empty: self._nothing,
            Opaque: self._nothing,
        }

    def resolve(self, call_site: CallSite) -> List[ResolvedValue]:
        if not call_site.arguments:
            return []
        first = call_site.arguments[0]
        return self._resolvers[type(first)](first, call_site)

    def _nothing(self, first: ValueSource, call_site: CallSite) -> List[ResolvedValue]:
        return []

    def _from_inline_list(self, items: InlineList, call_site: CallSite) -> List[ResolvedValue]:
        return [self._element(item) for item in items.items]

    def _from_variadic_strings(self, first: LiteralString, call_site: CallSite) -> List[ResolvedValue]:
        return [
            argument.text if isinstance(argument, LiteralString) else UNSUPPORTED
            for argument in call_site.arguments
        ]

    def _from_field(self, reference: FieldRef, call_site: CallSite) -> List[ResolvedValue]:
        unit = self._load(call_site)
        if unit is None:
            return []
        default = unit.field_default(reference.name)
        if not isinstance(default, InlineList):
            _LOGGER.debug("Property $%s has no array default", reference.name)
            return []
        # Property defaults keep only literal entries; other entries are dropped.
        return [item.text for item in default.items if isinstance(item, LiteralString)]

    def _from_method(self, reference: MethodRef, call_site: CallSite) -> List[ResolvedValue]:
        unit = self._load(call_site)
        if unit is None:
            return []
        returned = unit.method_return(reference.name)
        if not isinstance(returned, InlineList):
            _LOGGER.debug("Method %s() does not return an array literal", reference.name)
            return []
        return [self._element(item) for item in returned.items]

    def _element(self, item: ValueSource) -> ResolvedValue:
        if isinstance(item, LiteralString):
            return item.text
        if isinstance(item, FactoryCall):
            return self._factories.extract(item)
        return UNSUPPORTED

    def _load(self, call_site: CallSite) -> Optional[DeclaringUnit]:
        if not call_site.owner:
            return None
        unit = self._units.load(call_site.owner)
        if unit is None:
            _LOGGER.debug("Declaring unit for %s not found", call_site.owner)
        return unit


def supported_values(values: Sequence[ResolvedValue]) -> List[str]:
    """Drop ``UNSUPPORTED`` markers, keeping order."""
    return [value for value in values if isinstance(value, str)]


__all__ = ["ValueInferenceEngine", "supported_values"]
