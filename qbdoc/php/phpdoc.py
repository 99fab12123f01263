"""Splitting of PHPDoc comments into text and tag nodes."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Optional

_TAG_LINE = re.compile(r"^@([A-Za-z_\\][\w\\:-]*)(?:\s+(.*))?$")
_LEADING_STAR = re.compile(r"^\s*\*(?!/)\s?")

# Sub-annotations that belong to the tag above them when written on their own line.
CONTINUATION_TAGS = frozenset({"@example", "@enum"})


@dataclass
class DocTag:
    name: str
    value: str = ""


@dataclass
class DocBlock:
    """A parsed ``/** ... */`` comment."""

    text: str = ""
    tags: List[DocTag] = field(default_factory=list)

    def tags_named(self, name: str) -> List[DocTag]:
        return [tag for tag in self.tags if tag.name == name]


def parse_docblock(comment: Optional[str]) -> DocBlock:
    """Split a PHPDoc comment into its free text and its tags.

    A tag runs from its ``@name`` line until the next tag line or a blank
    line. Lines starting with ``@example`` or ``@enum`` stay in the current
    tag.
    """
    if not comment:
        return DocBlock()
    body = comment.strip()
    if body.startswith("/**"):
        body = body[3:]
    elif body.startswith("/*"):
        body = body[2:]
    if body.endswith("*/"):
        body = body[:-2]

    text_lines: List[str] = []
    tags: List[DocTag] = []
    current: Optional[DocTag] = None
    for raw in body.splitlines():
        line = _LEADING_STAR.sub("", raw).strip()
        if not line:
            current = None
            continue
        match = _TAG_LINE.match(line)
        if match and not (current is not None and f"@{match.group(1)}" in CONTINUATION_TAGS):
            current = DocTag(name=f"@{match.group(1)}", value=(match.group(2) or "").strip())
            tags.append(current)
        elif current is not None:
            current.value = f"{current.value}\n{line}" if current.value else line
        else:
            text_lines.append(line)
    return DocBlock(text="\n".join(text_lines), tags=tags)


__all__ = ["CONTINUATION_TAGS", "DocBlock", "DocTag", "parse_docblock"]
