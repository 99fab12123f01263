"""Synthesis of query parameter descriptors from inferred values."""

from __future__ import annotations

import random
from dataclasses import replace
from datetime import date
from typing import Callable, Iterable, List, Optional, Sequence

from .models import Capability, Feature, ParamOverride, ParameterDescriptor, ValueType

INCLUDE_DESCRIPTION = "Comma separated list of relationships to include."
SORT_DESCRIPTION = "Comma separated list of fields to sort by. Prefix with '-' to sort descending."

_OVERRIDE_TYPES = {
    "string": ValueType.STRING,
    "integer": ValueType.INTEGER,
    "boolean": ValueType.BOOLEAN,
}


def heuristic_type(
    key: str,
    name: str,
    *,
    rng: random.Random,
    today: Callable[[], date] = date.today,
) -> ParameterDescriptor:
    """Guess type and example from the last two characters of ``name``."""
    suffix = name[-2:]
    if suffix == "at":
        return ParameterDescriptor(
            key=key, value_type=ValueType.STRING, format="date", example=today().isoformat()
        )
    if suffix == "id":
        return ParameterDescriptor(key=key, value_type=ValueType.INTEGER, example=rng.randint(1, 1000))
    if suffix in {"ed", "ng"}:
        return ParameterDescriptor(key=key, value_type=ValueType.BOOLEAN, example=rng.random() < 0.5)
    return ParameterDescriptor(key=key, value_type=ValueType.STRING, example="")


def apply_override(descriptor: ParameterDescriptor, override: ParamOverride) -> ParameterDescriptor:
    """Layer a ``@queryParam`` override on top of a descriptor."""
    result = descriptor
    value_type = _OVERRIDE_TYPES.get(override.type or "")
    if value_type is not None:
        # A declared type starts from a fresh schema: no format, no guessed example.
        result = replace(
            result,
            value_type=value_type,
            format=None,
            example=None,
            examples=(),
            enum_values=tuple(override.enum) if value_type is ValueType.STRING else (),
        )
    if override.description:
        result = replace(result, description=override.description)
    if override.examples:
        result = replace(result, example=override.examples[0], examples=tuple(override.examples))
    return result


def override_matches(override: ParamOverride, key: str, value: str) -> bool:
    return override.name is not None and override.name in (key, value)


class ParameterSynthesizer:
    """Turns resolved values and comment overrides into parameter descriptors."""

    def __init__(
        self,
        rng: random.Random | None = None,
        today: Callable[[], date] | None = None,
    ) -> None:
        self._rng = rng or random.Random()
        self._today = today or date.today

    def synthesize(
        self,
        feature: Feature,
        values: Sequence[str],
        overrides: Iterable[ParamOverride] = (),
    ) -> List[ParameterDescriptor]:
        if feature.capability in {Capability.FILTER, Capability.FIELD}:
            return self._per_value(feature, values, list(overrides))
        return [self._combined(feature, values)]

    def _per_value(
        self, feature: Feature, values: Sequence[str], overrides: List[ParamOverride]
    ) -> List[ParameterDescriptor]:
        descriptors: List[ParameterDescriptor] = []
        for value in values:
            key = f"{feature.query_parameter_key}[{value}]"
            descriptor = heuristic_type(key, value, rng=self._rng, today=self._today)
            for override in overrides:
                if override_matches(override, key, value):
                    descriptor = apply_override(descriptor, override)
            descriptors.append(descriptor)
        return descriptors

    def _combined(self, feature: Feature, values: Sequence[str]) -> ParameterDescriptor:
        if feature.capability is Capability.INCLUDE:
            description = INCLUDE_DESCRIPTION
            examples = list(values)
            self._rng.shuffle(examples)
        else:
            description = SORT_DESCRIPTION
            examples = [variant for value in values for variant in (value, f"-{value}")]
        if not examples:
            examples = list(feature.sample_values)
        example: Optional[str] = examples[0] if examples else None
        return ParameterDescriptor(
            key=feature.query_parameter_key,
            value_type=ValueType.STRING,
            description=description,
            example=example,
            examples=tuple(examples),
        )


__all__ = [
    "INCLUDE_DESCRIPTION",
    "SORT_DESCRIPTION",
    "ParameterSynthesizer",
    "apply_override",
    "heuristic_type",
    "override_matches",
]
