from __future__ import annotations

import random
from datetime import date

from qbdoc.models import Capability, Feature, ParamOverride, ValueType
from qbdoc.synthesis import (
    INCLUDE_DESCRIPTION,
    SORT_DESCRIPTION,
    ParameterSynthesizer,
    apply_override,
    heuristic_type,
)

FILTER = Feature(Capability.FILTER, "filter", ["[name]=john"])
FIELDS = Feature(Capability.FIELD, "fields", ["id"])
INCLUDE = Feature(Capability.INCLUDE, "include", ["posts", "books"])
SORT = Feature(Capability.SORT, "sort", ["title", "-title"])


def test_suffix_heuristics(synthesizer: ParameterSynthesizer) -> None:
    created, user, verified, trending, name = synthesizer.synthesize(
        FILTER, ["created_at", "user_id", "is_verified", "trending", "name"]
    )

    assert created.key == "filter[created_at]"
    assert (created.value_type, created.format, created.example) == (ValueType.STRING, "date", "2024-05-17")
    assert user.value_type is ValueType.INTEGER
    assert 1 <= user.example <= 1000
    assert verified.value_type is ValueType.BOOLEAN
    assert isinstance(verified.example, bool)
    assert trending.value_type is ValueType.BOOLEAN
    assert (name.value_type, name.format, name.example) == (ValueType.STRING, None, "")


def test_suffix_only_looks_at_the_last_two_characters() -> None:
    rng = random.Random(1)
    assert heuristic_type("filter[is_active]", "is_active", rng=rng).value_type is ValueType.STRING
    assert heuristic_type("filter[at]", "at", rng=rng, today=lambda: date(2020, 1, 2)).example == "2020-01-02"


def test_fields_are_keyed_per_value(synthesizer: ParameterSynthesizer) -> None:
    descriptors = synthesizer.synthesize(FIELDS, ["id", "title"])
    assert [descriptor.key for descriptor in descriptors] == ["fields[id]", "fields[title]"]


def test_override_replaces_type_and_example(synthesizer: ParameterSynthesizer) -> None:
    override = ParamOverride(name="posts.id", type="integer", examples=["42"])
    (descriptor,) = synthesizer.synthesize(FILTER, ["posts.id"], [override])
    assert descriptor.key == "filter[posts.id]"
    assert descriptor.value_type is ValueType.INTEGER
    assert descriptor.example == "42"
    assert descriptor.examples == ("42",)


def test_override_by_full_key_and_string_enum(synthesizer: ParameterSynthesizer) -> None:
    override = ParamOverride(
        name="filter[status]",
        type="string",
        description="Account status",
        enum=["active", "closed"],
    )
    status, other = synthesizer.synthesize(FILTER, ["status", "other"], [override])
    assert status.description == "Account status"
    assert status.enum_values == ("active", "closed")
    assert status.example is None
    assert other.description is None
    assert other.enum_values == ()


def test_override_matching_is_exact(synthesizer: ParameterSynthesizer) -> None:
    overrides = [ParamOverride(name="Created_At", type="integer"), ParamOverride(name="created", type="integer")]
    (descriptor,) = synthesizer.synthesize(FILTER, ["created_at"], overrides)
    assert descriptor.value_type is ValueType.STRING
    assert descriptor.format == "date"


def test_enum_is_only_attached_to_strings() -> None:
    base = heuristic_type("filter[age]", "age", rng=random.Random(3))
    result = apply_override(base, ParamOverride(name="age", type="integer", enum=["1", "2"]))
    assert result.value_type is ValueType.INTEGER
    assert result.enum_values == ()


def test_unrecognized_override_type_keeps_the_heuristic() -> None:
    base = heuristic_type("filter[user_id]", "user_id", rng=random.Random(3))
    result = apply_override(base, ParamOverride(name="user_id", type="uuid", description="Owner"))
    assert result.value_type is ValueType.INTEGER
    assert result.example == base.example
    assert result.description == "Owner"


def test_later_overrides_win(synthesizer: ParameterSynthesizer) -> None:
    overrides = [
        ParamOverride(name="age", type="integer", examples=["1"]),
        ParamOverride(name="age", examples=["2", "3"]),
    ]
    (descriptor,) = synthesizer.synthesize(FILTER, ["age"], overrides)
    assert descriptor.value_type is ValueType.INTEGER
    assert descriptor.examples == ("2", "3")
    assert descriptor.example == "2"


def test_sort_expands_each_value_to_both_directions(synthesizer: ParameterSynthesizer) -> None:
    (descriptor,) = synthesizer.synthesize(SORT, ["title", "id"])
    assert descriptor.key == "sort"
    assert descriptor.value_type is ValueType.STRING
    assert descriptor.description == SORT_DESCRIPTION
    assert descriptor.examples == ("title", "-title", "id", "-id")
    assert descriptor.example == "title"


def test_include_is_one_descriptor_with_shuffled_examples(synthesizer: ParameterSynthesizer) -> None:
    values = ["posts", "posts.comments", "books", "author"]
    (descriptor,) = synthesizer.synthesize(INCLUDE, values)
    assert descriptor.key == "include"
    assert descriptor.description == INCLUDE_DESCRIPTION
    assert sorted(descriptor.examples) == sorted(values)
    assert descriptor.example == descriptor.examples[0]


def test_combined_capabilities_ignore_overrides(synthesizer: ParameterSynthesizer) -> None:
    (descriptor,) = synthesizer.synthesize(SORT, ["title"], [ParamOverride(name="sort", type="integer")])
    assert descriptor.value_type is ValueType.STRING


def test_sample_values_fill_in_when_nothing_resolved(synthesizer: ParameterSynthesizer) -> None:
    (include,) = synthesizer.synthesize(INCLUDE, [])
    (sort,) = synthesizer.synthesize(SORT, [])
    assert include.examples == ("posts", "books")
    assert sort.examples == ("title", "-title")
    assert synthesizer.synthesize(FILTER, []) == []
