"""Registry of callbacks that may veto parameters before emission."""

from __future__ import annotations

import importlib
from typing import TYPE_CHECKING, Any, Callable, Iterable, Iterator, List

from .models import Feature

if TYPE_CHECKING:  # pragma: no cover
    from .openapi import Operation, Parameter

Hook = Callable[["Operation", "Parameter", Feature], Any]


class HookRegistry:
    """Ordered list of hooks; the first truthy result halts the parameter."""

    def __init__(self, hooks: Iterable[Hook] = ()) -> None:
        self._hooks: List[Hook] = list(hooks)

    def register(self, hook: Hook) -> Hook:
        """Append ``hook``; returns it so the method works as a decorator."""
        if not callable(hook):
            raise TypeError("Hook must be callable")
        self._hooks.append(hook)
        return hook

    def run(self, operation: "Operation", parameter: "Parameter", feature: Feature) -> Any:
        for hook in self._hooks:
            halt = hook(operation, parameter, feature)
            if halt:
                return halt
        return False

    def __len__(self) -> int:
        return len(self._hooks)

    def __iter__(self) -> Iterator[Hook]:
        return iter(self._hooks)


def load_hook(path: str) -> Hook:
    """Import a hook from a ``package.module:attribute`` path."""
    module_name, _, attribute = path.partition(":")
    if not module_name or not attribute:
        raise ValueError(f"Hook path must look like 'module:attribute', got '{path}'")
    module = importlib.import_module(module_name)
    try:
        hook = getattr(module, attribute)
    except AttributeError as exc:
        raise ValueError(f"Module '{module_name}' has no attribute '{attribute}'") from exc
    if not callable(hook):
        raise TypeError(f"Hook '{path}' is not callable")
    return hook


__all__ = ["Hook", "HookRegistry", "load_hook"]
