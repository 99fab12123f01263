"""Tests for argument shape conversion and call-site location."""

from __future__ import annotations

from qbdoc.models import (
    CallSite,
    Capability,
    FactoryCall,
    FieldRef,
    InlineList,
    LiteralString,
    MethodRef,
    Opaque,
)
from qbdoc.php.nodes import find_call_site, short_class_name
from qbdoc.php.parser import PhpParser
from qbdoc.php.units import DeclaringUnit


def _call_site(statements: str, capability: Capability = Capability.INCLUDE) -> CallSite | None:
    source = (
        "<?php\n"
        "class UserController\n{\n"
        "    public function index()\n    {\n"
        f"        {statements}\n"
        "    }\n}\n"
    )
    tree = PhpParser().parse(source)
    unit = DeclaringUnit(tree, "UserController")
    method = unit.find_method("index")
    assert method is not None
    return find_call_site(method, tree.source, capability, owner="App\\Http\\Controllers\\UserController")


def test_missing_call_returns_none() -> None:
    assert _call_site("return QueryBuilder::for(User::class)->get();") is None


def test_call_without_arguments_has_no_arguments() -> None:
    site = _call_site("return QueryBuilder::for(User::class)->allowedIncludes()->get();")
    assert site is not None
    assert site.arguments == ()
    assert site.capability is Capability.INCLUDE
    assert site.owner == "App\\Http\\Controllers\\UserController"


def test_inline_list_of_strings() -> None:
    site = _call_site("return QueryBuilder::for(User::class)->allowedIncludes(['posts', \"posts.author\"])->get();")
    assert site is not None
    assert site.arguments == (
        InlineList((LiteralString("posts"), LiteralString("posts.author"))),
    )


def test_variadic_string_arguments() -> None:
    site = _call_site("return QueryBuilder::for(User::class)->allowedIncludes('posts', 'books')->get();")
    assert site is not None
    assert site.arguments == (LiteralString("posts"), LiteralString("books"))


def test_this_property_and_method_references() -> None:
    field_site = _call_site("return QueryBuilder::for(User::class)->allowedIncludes($this->includes)->get();")
    method_site = _call_site("return QueryBuilder::for(User::class)->allowedIncludes($this->includes())->get();")
    assert field_site is not None and method_site is not None
    assert field_site.arguments == (FieldRef("includes"),)
    assert method_site.arguments == (MethodRef("includes"),)


def test_reference_on_other_object_is_opaque() -> None:
    site = _call_site("return QueryBuilder::for(User::class)->allowedIncludes($other->includes())->get();")
    assert site is not None
    assert site.arguments == (Opaque("member_call_expression"),)


def test_factory_calls_keep_class_method_and_arguments() -> None:
    site = _call_site(
        "return QueryBuilder::for(User::class)->allowedFilters(["
        "AllowedFilter::exact('id'), \\Spatie\\QueryBuilder\\AllowedFilter::partial('name')"
        "])->get();",
        Capability.FILTER,
    )
    assert site is not None
    assert site.arguments == (
        InlineList(
            (
                FactoryCall("AllowedFilter", "exact", (LiteralString("id"),)),
                FactoryCall("AllowedFilter", "partial", (LiteralString("name"),)),
            )
        ),
    )


def test_interpolated_string_is_not_literal() -> None:
    site = _call_site('return QueryBuilder::for(User::class)->allowedIncludes(["posts.$relation"])->get();')
    assert site is not None
    (items,) = site.arguments
    assert isinstance(items, InlineList)
    assert items.items == (Opaque("encapsed_string"),)


def test_keyed_array_elements_use_the_value() -> None:
    site = _call_site("return QueryBuilder::for(User::class)->allowedSorts(['latest' => 'created_at'])->get();", Capability.SORT)
    assert site is not None
    assert site.arguments == (InlineList((LiteralString("created_at"),)),)


def test_each_capability_finds_its_own_call_in_a_chain() -> None:
    chain = (
        "return QueryBuilder::for(User::class)"
        "->allowedFilters(['name'])"
        "->allowedSorts('title')"
        "->get();"
    )
    filters = _call_site(chain, Capability.FILTER)
    sorts = _call_site(chain, Capability.SORT)
    assert filters is not None and sorts is not None
    assert filters.arguments == (InlineList((LiteralString("name"),)),)
    assert sorts.arguments == (LiteralString("title"),)
    assert _call_site(chain, Capability.FIELD) is None


def test_escaped_quotes_are_unescaped() -> None:
    site = _call_site("return QueryBuilder::for(User::class)->allowedIncludes('it\\'s')->get();")
    assert site is not None
    assert site.arguments == (LiteralString("it's"),)


def test_short_class_name() -> None:
    assert short_class_name("\\Spatie\\QueryBuilder\\AllowedSort") == "AllowedSort"
    assert short_class_name("AllowedSort") == "AllowedSort"
