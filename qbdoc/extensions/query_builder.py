"""Documents the query string accepted by spatie/laravel-query-builder endpoints."""

from __future__ import annotations

from typing import List, Optional

from ..annotations import parse_overrides
from ..inference import ValueInferenceEngine, supported_values
from ..logging import get_logger
from ..models import Capability, Feature, ParamOverride
from ..openapi import Operation, Parameter
from ..routes import RouteInfo
from ..synthesis import ParameterSynthesizer
from .base import ExtensionContext, OperationExtension


class QueryBuilderExtension(OperationExtension):
    """Adds include, filter, sort and fields parameters to operations."""

    def __init__(
        self,
        context: ExtensionContext,
        engine: ValueInferenceEngine | None = None,
        synthesizer: ParameterSynthesizer | None = None,
    ) -> None:
        super().__init__(context)
        self.engine = engine or ValueInferenceEngine(context.units)
        self.synthesizer = synthesizer or ParameterSynthesizer()
        self.logger = get_logger("extensions.query_builder")

    def features(self) -> List[Feature]:
        keys = self.context.parameters
        return [
            Feature(Capability.INCLUDE, keys.include, ["posts", "posts.comments", "books"]),
            Feature(Capability.FILTER, keys.filter, ["[name]=john", "[email]=gmail"]),
            Feature(Capability.SORT, keys.sort, ["title", "-title", "title,-id"]),
            Feature(Capability.FIELD, keys.fields, ["id", "title", "posts.id"]),
        ]

    def handle(self, operation: Operation, route_info: RouteInfo) -> None:
        overrides: Optional[List[ParamOverride]] = None
        for feature in self.features():
            call_site = route_info.find_call_site(feature)
            if call_site is None:
                continue
            if overrides is None:
                overrides = parse_overrides(route_info.doc_block())

            resolved = self.engine.resolve(call_site)
            values = supported_values(resolved)
            if len(values) != len(resolved):
                self.logger.debug(
                    "%s: dropped %d unsupported %s argument(s)",
                    route_info.route.uses,
                    len(resolved) - len(values),
                    feature.method_name,
                )

            for descriptor in self.synthesizer.synthesize(feature, values, overrides):
                parameter = Parameter.from_descriptor(descriptor)
                if self.context.hooks.run(operation, parameter, feature):
                    self.logger.debug("Hook halted parameter %s", parameter.name)
                    continue
                operation.add_parameters([parameter])


__all__ = ["QueryBuilderExtension"]
