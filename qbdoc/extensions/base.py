"""Base classes for operation extensions."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from ..config import ParameterKeys
from ..hooks import HookRegistry
from ..openapi import Operation
from ..php.units import UnitProvider
from ..routes import RouteInfo


@dataclass
class ExtensionContext:
    """Collaborators shared by every extension of one generation run."""

    parameters: ParameterKeys
    hooks: HookRegistry
    units: UnitProvider


class OperationExtension(ABC):
    """Contract for extensions that enrich an operation from its route."""

    def __init__(self, context: ExtensionContext) -> None:
        self.context = context

    @abstractmethod
    def handle(self, operation: Operation, route_info: RouteInfo) -> None:
        """Add documentation for ``route_info`` to ``operation``."""
