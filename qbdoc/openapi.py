"""Minimal OpenAPI 3.1 object model for generated documents."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence

from .models import ParameterDescriptor, ValueType

OPENAPI_VERSION = "3.1.0"


@dataclass
class Schema:
    type: ValueType = ValueType.STRING
    format: Optional[str] = None
    description: Optional[str] = None
    example: Any = None
    examples: List[Any] = field(default_factory=list)
    enum: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"type": self.type.value}
        if self.format:
            payload["format"] = self.format
        if self.description:
            payload["description"] = self.description
        if self.enum:
            payload["enum"] = list(self.enum)
        if self.example is not None:
            payload["example"] = self.example
        if self.examples:
            payload["examples"] = list(self.examples)
        return payload


@dataclass
class Parameter:
    name: str
    location: str = "query"
    schema: Schema = field(default_factory=Schema)
    description: Optional[str] = None
    example: Any = None
    required: bool = False

    @classmethod
    def from_descriptor(cls, descriptor: ParameterDescriptor) -> "Parameter":
        schema = Schema(
            type=descriptor.value_type,
            format=descriptor.format,
            example=descriptor.example,
            examples=list(descriptor.examples),
            enum=list(descriptor.enum_values),
        )
        return cls(
            name=descriptor.key,
            schema=schema,
            description=descriptor.description,
            example=descriptor.example,
        )

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"name": self.name, "in": self.location}
        if self.description:
            payload["description"] = self.description
        if self.required:
            payload["required"] = True
        payload["schema"] = self.schema.to_dict()
        if self.example is not None:
            payload["example"] = self.example
        return payload


@dataclass
class Operation:
    method: str
    path: str
    operation_id: Optional[str] = None
    summary: Optional[str] = None
    description: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    parameters: List[Parameter] = field(default_factory=list)

    def add_parameters(self, parameters: Iterable[Parameter]) -> None:
        self.parameters.extend(parameters)

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {}
        if self.operation_id:
            payload["operationId"] = self.operation_id
        if self.summary:
            payload["summary"] = self.summary
        if self.description:
            payload["description"] = self.description
        if self.tags:
            payload["tags"] = list(self.tags)
        payload["parameters"] = [parameter.to_dict() for parameter in self.parameters]
        payload["responses"] = {"200": {"description": "Successful response"}}
        return payload


def path_parameters(path: str) -> List[Parameter]:
    """Path parameters for the ``{name}`` segments of ``path``."""
    return [
        Parameter(name=name, location="path", required=True)
        for name in re.findall(r"\{([A-Za-z_][A-Za-z0-9_]*)\}", path)
    ]


def build_document(
    operations: Sequence[Operation],
    *,
    title: str = "API",
    version: str = "1.0.0",
    servers: Sequence[str] = (),
) -> Dict[str, Any]:
    paths: Dict[str, Dict[str, Any]] = {}
    for operation in sorted(operations, key=lambda op: (op.path, op.method)):
        paths.setdefault(operation.path, {})[operation.method.lower()] = operation.to_dict()
    document: Dict[str, Any] = {
        "openapi": OPENAPI_VERSION,
        "info": {"title": title, "version": version},
    }
    if servers:
        document["servers"] = [{"url": url} for url in servers]
    document["paths"] = paths
    return document


__all__ = ["OPENAPI_VERSION", "Operation", "Parameter", "Schema", "build_document", "path_parameters"]
