"""Static OpenAPI documentation for spatie/laravel-query-builder endpoints."""

from .generator import ControllerNotFoundError, DocumentGenerator
from .hooks import HookRegistry

__version__ = "0.1.0"

__all__ = ["ControllerNotFoundError", "DocumentGenerator", "HookRegistry", "__version__"]
