"""Parsing of ``@queryParam`` annotations in handler doc comments.

A tag reads::

    @queryParam <type> <name> [description] [@example <value>]... [@enum a, b, c]

``@example`` takes either a quoted value, kept whole, or an unquoted comma
separated list. ``@enum`` takes a comma separated list up to the end of the
tag (or up to the next ``@example``).
"""

from __future__ import annotations

import re
from typing import List, Union

from .models import ParamOverride
from .php.phpdoc import DocBlock, parse_docblock

QUERY_PARAM_TAG = "@queryParam"

_WHITESPACE = re.compile(r"\s+")
_HEAD = re.compile(r"^(\w+(?:\[\])?)\s+([\w.\[\]]+)")
_EXAMPLE = re.compile(r"@example\s+(\"[^\"]*\"|'[^']*'|[^\s@]+)")
_ENUM = re.compile(r"@enum\s+(.*?)(?=\s*@example\b|$)")
_SEPARATOR_DASH = re.compile(r"(?:^|\s)-+(?=\s|$)")


def parse_overrides(doc: Union[DocBlock, str, None]) -> List[ParamOverride]:
    """Return one override per ``@queryParam`` tag, in comment order."""
    if not isinstance(doc, DocBlock):
        doc = parse_docblock(doc)
    return [parse_query_param(tag.value) for tag in doc.tags_named(QUERY_PARAM_TAG)]


def parse_query_param(value: str) -> ParamOverride:
    text = _WHITESPACE.sub(" ", value).strip()
    override = ParamOverride()

    head = _HEAD.match(text)
    if head:
        override.type = head.group(1)
        override.name = head.group(2)

    for match in _EXAMPLE.finditer(text):
        override.examples.extend(_split_example(match.group(1)))

    enum = _ENUM.search(text)
    if enum:
        override.enum = [item.strip() for item in enum.group(1).split(",") if item.strip()]

    description = text[head.end() :] if head else text
    description = _EXAMPLE.sub(" ", description)
    description = _ENUM.sub(" ", description)
    description = _SEPARATOR_DASH.sub(" ", description)
    description = _WHITESPACE.sub(" ", description).strip()
    override.description = description or None
    return override


def _split_example(raw: str) -> List[str]:
    if raw[:1] in {'"', "'"}:
        return [raw.strip("\"'")]
    return [item.strip() for item in raw.split(",") if item.strip()]


__all__ = ["QUERY_PARAM_TAG", "parse_overrides", "parse_query_param"]
