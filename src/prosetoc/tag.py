"""Template context for table-of-contents tags.

A templating layer renders the outline recursively: each item exposes
``toc_id``, ``toc_title``, ``toc_level`` and ``children``, and top-level
items also carry ``total_results``. ``OutlineTag`` produces exactly that
shape. The builder is passed in by the caller; there is no global tag
registry to look it up from.

Example:
    >>> tag = OutlineTag(OutlineBuilder())
    >>> items = tag.render(page["content"], when=page["show_toc"])
    >>> [item["toc_title"] for item in items]
    ['Heading 1']

"""

from __future__ import annotations

from typing import Any, Protocol

from prosetoc.nodes import OutlineEntry, OutlineResult


class OutlineSource(Protocol):
    """Anything that can turn a document tree into an OutlineResult."""

    def build(self, tree: object) -> OutlineResult: ...


class OutlineTag:
    """Expose an injected builder's outline as template context."""

    __slots__ = ("_builder",)

    def __init__(self, builder: OutlineSource) -> None:
        self._builder = builder

    @property
    def builder(self) -> OutlineSource:
        return self._builder

    def render(self, tree: object, *, when: object = True) -> list[dict[str, Any]]:
        """Return the template items for ``tree``.

        Args:
            tree: Raw document tree handed to the builder.
            when: Gate for the whole outline. Falsy values skip the build
                and return an empty list.

        """
        if not when:
            return []
        return to_context(self._builder.build(tree))


def to_context(result: OutlineResult) -> list[dict[str, Any]]:
    """Convert an OutlineResult to a list of template items."""
    items = [_entry_context(entry) for entry in result.entries]
    for item in items:
        item["total_results"] = result.total_results
    return items


def _entry_context(entry: OutlineEntry) -> dict[str, Any]:
    # Pre-order with an explicit stack: outline depth is unbounded.
    root = _context_item(entry)
    pending = [(entry, root)]
    while pending:
        current, item = pending.pop()
        for child in current.children:
            child_item = _context_item(child)
            item["children"].append(child_item)
            pending.append((child, child_item))
    return root


def _context_item(entry: OutlineEntry) -> dict[str, Any]:
    return {
        "toc_id": entry.id,
        "toc_title": entry.title,
        "toc_level": entry.level,
        "children": [],
    }
