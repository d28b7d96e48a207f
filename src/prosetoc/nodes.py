"""Typed outline nodes for prosetoc.

All outline structures are frozen dataclasses with slots. They are built
fresh on every ``OutlineBuilder.build`` call and never shared between calls.

Structure:
OutlineResult
└── entries: tuple[OutlineEntry, ...]
    └── children: tuple[OutlineEntry, ...]  (recursive)

Thread Safety:
All nodes are frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class HeadingRecord:
    """A heading that passed admission, before nesting.

    Attributes:
        level: Heading level as found in ``attrs.level`` (not range-checked)
        title: Concatenated text of the heading's text runs

    """

    level: int
    title: str


@dataclass(frozen=True, slots=True)
class OutlineEntry:
    """One heading in the nested outline.

    Attributes:
        id: Slug derived from the title, used as an anchor
        title: Heading text
        level: Heading level
        children: Deeper headings that follow this one

    """

    id: str
    title: str
    level: int
    children: tuple[OutlineEntry, ...] = ()

    def walk(self) -> Iterator[OutlineEntry]:
        """Yield this entry and all descendants in document order."""
        stack = [self]
        while stack:
            entry = stack.pop()
            yield entry
            stack.extend(reversed(entry.children))


@dataclass(frozen=True, slots=True)
class OutlineResult:
    """Nested outline plus the total number of headings in it."""

    entries: tuple[OutlineEntry, ...] = ()
    total_results: int = 0

    def walk(self) -> Iterator[OutlineEntry]:
        """Yield every entry in document order, nested ones included."""
        for entry in self.entries:
            yield from entry.walk()


EMPTY_RESULT = OutlineResult()
