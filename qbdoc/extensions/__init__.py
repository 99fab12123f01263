"""Operation extensions and discovery utilities."""

from __future__ import annotations

from importlib import metadata
from typing import Callable, Iterable, List, Sequence, Set

from .base import ExtensionContext, OperationExtension
from .query_builder import QueryBuilderExtension

_ENTRY_POINT_GROUP = "qbdoc.extensions"

_BUILTIN_FACTORIES: dict[str, Callable[[ExtensionContext], OperationExtension]] = {
    "query_builder": QueryBuilderExtension,
}


def discover_extensions(
    context: ExtensionContext, enabled: Sequence[str] | None = None
) -> List[OperationExtension]:
    """Return instantiated extensions, honoring optional enabled names."""

    enabled_set: Set[str] | None = None
    if enabled is not None:
        enabled_set = {name.lower() for name in enabled}

    extensions: List[OperationExtension] = []
    seen: Set[str] = set()

    def _add(name: str, factory: Callable[[ExtensionContext], OperationExtension]) -> None:
        key = name.lower()
        if enabled_set is not None and key not in enabled_set:
            return
        if key in seen:
            return
        instance = factory(context)
        if not isinstance(instance, OperationExtension):
            raise TypeError(f"Extension factory for '{name}' did not return an OperationExtension")
        extensions.append(instance)
        seen.add(key)
        if enabled_set is not None:
            enabled_set.discard(key)

    for name, factory in _BUILTIN_FACTORIES.items():
        _add(name, factory)

    for entry in _iter_entry_points():
        name = entry.name
        try:
            loaded = entry.load()
        except Exception as exc:
            raise RuntimeError(f"Failed to load extension entry point '{name}': {exc}") from exc

        def _factory(ctx: ExtensionContext, obj: object = loaded) -> OperationExtension:
            return _coerce_extension(obj, ctx)

        _add(name, _factory)

    if enabled_set:
        missing = ", ".join(sorted(enabled_set))
        raise ValueError(f"Unknown extensions requested: {missing}")

    return extensions


def _coerce_extension(obj: object, context: ExtensionContext) -> OperationExtension:
    if isinstance(obj, OperationExtension):
        return obj
    if callable(obj):
        instance = obj(context)
        if isinstance(instance, OperationExtension):
            return instance
    raise TypeError("Extension entry point must be an OperationExtension subclass or factory")


def _iter_entry_points() -> Iterable[metadata.EntryPoint]:
    return metadata.entry_points().select(group=_ENTRY_POINT_GROUP)


__all__ = [
    "ExtensionContext",
    "OperationExtension",
    "QueryBuilderExtension",
    "discover_extensions",
]
