from __future__ import annotations

from qbdoc.models import ParameterDescriptor, ValueType
from qbdoc.openapi import Operation, Parameter, build_document, path_parameters


def test_parameter_from_descriptor() -> None:
    descriptor = ParameterDescriptor(
        key="filter[status]",
        value_type=ValueType.STRING,
        description="Account status",
        example="active",
        examples=("active", "closed"),
        enum_values=("active", "closed"),
    )
    payload = Parameter.from_descriptor(descriptor).to_dict()
    assert payload == {
        "name": "filter[status]",
        "in": "query",
        "description": "Account status",
        "schema": {
            "type": "string",
            "enum": ["active", "closed"],
            "example": "active",
            "examples": ["active", "closed"],
        },
        "example": "active",
    }


def test_falsy_examples_are_kept() -> None:
    descriptor = ParameterDescriptor(key="filter[is_verified]", value_type=ValueType.BOOLEAN, example=False)
    payload = Parameter.from_descriptor(descriptor).to_dict()
    assert payload["schema"] == {"type": "boolean", "example": False}
    assert payload["example"] is False


def test_path_parameters_are_required() -> None:
    parameters = path_parameters("/api/users/{user}/posts/{post}")
    assert [(p.name, p.location, p.required) for p in parameters] == [
        ("user", "path", True),
        ("post", "path", True),
    ]


def test_build_document_groups_operations_by_path() -> None:
    show = Operation("GET", "/api/users/{user}", operation_id="users.show", tags=["User"])
    index = Operation("GET", "/api/users", operation_id="users.index")
    store = Operation("POST", "/api/users", operation_id="users.store")
    index.add_parameters([Parameter("sort")])

    document = build_document([show, store, index], title="Demo", version="2.0.0", servers=["https://api.test"])

    assert document["openapi"] == "3.1.0"
    assert document["info"] == {"title": "Demo", "version": "2.0.0"}
    assert document["servers"] == [{"url": "https://api.test"}]
    assert list(document["paths"]) == ["/api/users", "/api/users/{user}"]
    assert set(document["paths"]["/api/users"]) == {"get", "post"}
    get = document["paths"]["/api/users"]["get"]
    assert get["operationId"] == "users.index"
    assert get["parameters"] == [{"name": "sort", "in": "query", "schema": {"type": "string"}}]
    assert "200" in get["responses"]
    assert document["paths"]["/api/users/{user}"]["get"]["tags"] == ["User"]
