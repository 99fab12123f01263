"""Names carried by query builder rule factories."""

from __future__ import annotations

from typing import Dict, Tuple

from ..models import UNSUPPORTED, FactoryCall, LiteralString, ResolvedValue

# (factory class, method) -> position of the argument holding the parameter name.
NAME_ARGUMENT: Dict[Tuple[str, str], int] = {
    ("AllowedFilter", "custom"): 0,
    ("AllowedFilter", "partial"): 0,
    ("AllowedFilter", "exact"): 0,
    ("AllowedFilter", "beginsWithStrict"): 0,
    ("AllowedFilter", "endsWithStrict"): 0,
    ("AllowedFilter", "callback"): 0,
    ("AllowedFilter", "scope"): 0,
    ("AllowedFilter", "autoDetect"): 1,
    ("AllowedSort", "callback"): 0,
    ("AllowedSort", "field"): 0,
}


class FactoryValueExtractor:
    """Reads the parameter name out of calls like ``AllowedFilter::exact('name')``."""

    def __init__(self, table: Dict[Tuple[str, str], int] | None = None) -> None:
        self._table = dict(NAME_ARGUMENT if table is None else table)

    def extract(self, call: FactoryCall) -> ResolvedValue:
        position = self._table.get((call.factory, call.method))
        if position is None or position >= len(call.args):
            return UNSUPPORTED
        argument = call.args[position]
        if not isinstance(argument, LiteralString):
            return UNSUPPORTED
        return argument.text


__all__ = ["FactoryValueExtractor", "NAME_ARGUMENT"]
