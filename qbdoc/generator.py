"""Pipeline that turns a Laravel project into an OpenAPI document."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence

from .config import CONFIG_FILENAME, ConfigError, QbdocConfig, load_config
from .extensions import ExtensionContext, OperationExtension, discover_extensions
from .hooks import HookRegistry, load_hook
from .logging import get_logger
from .openapi import Operation, build_document, path_parameters
from .php.nodes import short_class_name
from .php.units import ComposerUnitProvider, UnitProvider
from .routes import Route, RouteInfo, RouteReader


class ControllerNotFoundError(LookupError):
    """Raised when a route points at a controller that cannot be located."""


class DocumentGenerator:
    """Coordinates route discovery, extensions and document rendering."""

    def __init__(
        self,
        config: QbdocConfig | None = None,
        hooks: HookRegistry | None = None,
        units: UnitProvider | None = None,
        extensions: Optional[Iterable[OperationExtension]] = None,
        route_reader: RouteReader | None = None,
    ) -> None:
        self._config = config
        self.hooks = hooks if hooks is not None else HookRegistry()
        self._units = units
        self._extension_overrides = list(extensions) if extensions is not None else None
        self.route_reader = route_reader or RouteReader()
        self.logger = get_logger("generator")

    def generate(self, path: str | Path) -> Dict[str, Any]:
        """Build the OpenAPI document for the project at ``path``."""
        project = Path(path).expanduser().resolve()
        config = self._config or load_config(project)
        self.logger.info("Generating documentation for %s", project)

        hooks = HookRegistry(self.hooks)
        for hook_path in config.hooks:
            try:
                hooks.register(load_hook(hook_path))
            except (ImportError, ValueError, TypeError) as exc:
                raise ConfigError(f"Invalid hook '{hook_path}' in {CONFIG_FILENAME}: {exc}") from exc

        units = self._units or ComposerUnitProvider(project)
        context = ExtensionContext(parameters=config.parameters, hooks=hooks, units=units)
        try:
            extensions = self._select_extensions(context, config)
        except (ValueError, TypeError, RuntimeError) as exc:
            raise ConfigError(f"Invalid extensions in {CONFIG_FILENAME}: {exc}") from exc
        self.logger.debug("Selected %d extensions", len(extensions))

        operations: List[Operation] = []
        for route in self.read_routes(project, config):
            info = self._route_info(route, units)
            if info is None:
                continue
            for method in route.methods:
                operation = self._operation(route, info, method)
                for extension in extensions:
                    extension.handle(operation, info)
                operations.append(operation)
        self.logger.info("Documented %d operations", len(operations))

        return build_document(
            operations,
            title=config.document.title,
            version=config.document.version,
            servers=config.document.servers,
        )

    def read_routes(self, project: Path, config: QbdocConfig) -> List[Route]:
        routes: List[Route] = []
        for relative in config.routes.files:
            route_file = project / relative
            if not route_file.is_file():
                raise FileNotFoundError(f"Route file not found: {route_file}")
            found = self.route_reader.read(route_file, prefix=config.routes.prefix)
            self.logger.debug("Found %d routes in %s", len(found), relative)
            routes.extend(found)
        return routes

    def _select_extensions(
        self, context: ExtensionContext, config: QbdocConfig
    ) -> Sequence[OperationExtension]:
        if self._extension_overrides is not None:
            return self._extension_overrides
        return discover_extensions(context, config.extensions.enabled)

    def _route_info(self, route: Route, units: UnitProvider) -> Optional[RouteInfo]:
        unit = units.load(route.controller)
        if unit is None:
            raise ControllerNotFoundError(
                f"Controller {route.controller} for route {route.uri} could not be located"
            )
        info = RouteInfo(route, unit)
        if info.method_node() is None:
            self.logger.warning("Method %s not found; skipping %s", route.uses, route.uri)
            return None
        return info

    @staticmethod
    def _operation(route: Route, info: RouteInfo, method: str) -> Operation:
        controller = short_class_name(route.controller)
        doc = info.doc_block()
        summary = doc.text.splitlines()[0] if doc.text else None
        tag = controller[: -len("Controller")] if controller.endswith("Controller") else controller
        return Operation(
            method=method,
            path=route.uri,
            operation_id=route.name or f"{controller}.{route.action}",
            summary=summary,
            tags=[tag] if tag else [],
            parameters=path_parameters(route.uri),
        )


__all__ = ["ControllerNotFoundError", "DocumentGenerator"]
