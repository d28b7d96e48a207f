"""Level-based nesting of a flat heading sequence.

Turns ``[(1, "A"), (2, "B"), (3, "C"), (1, "D")]`` into::

    A
    └── B
        └── C
    D

Single left-to-right pass. Open entries live on a stack of arena indices;
an entry stays open until a heading of the same or a shallower level
arrives. Skipped levels (1 followed by 3) nest under the nearest open
shallower entry, and no placeholder entries are invented.

Entries are collected in a mutable arena while the pass runs and frozen
into OutlineEntry trees at the end, so no entry ever holds a reference
to its parent.

"""

from collections.abc import Iterable
from dataclasses import dataclass, field

from prosetoc.nodes import OutlineEntry


@dataclass(slots=True)
class _Slot:
    """Arena slot: one entry plus the arena indices of its children."""

    id: str
    title: str
    level: int
    children: list[int] = field(default_factory=list)


def nest_entries(items: Iterable[tuple[str, str, int]]) -> tuple[OutlineEntry, ...]:
    """Nest ``(id, title, level)`` triples into an outline forest.

    Args:
        items: Entries in document order.

    Returns:
        Top-level OutlineEntry tuple; deeper entries are reachable through
        ``children``.

    """
    arena: list[_Slot] = []
    roots: list[int] = []
    stack: list[int] = []

    for entry_id, title, level in items:
        while stack and arena[stack[-1]].level >= level:
            stack.pop()

        index = len(arena)
        arena.append(_Slot(id=entry_id, title=title, level=level))

        if stack:
            arena[stack[-1]].children.append(index)
        else:
            roots.append(index)
        stack.append(index)

    return tuple(_freeze(arena, index) for index in roots)


def flat_entries(items: Iterable[tuple[str, str, int]]) -> tuple[OutlineEntry, ...]:
    """Return every entry at the top level, in document order."""
    return tuple(
        OutlineEntry(id=entry_id, title=title, level=level)
        for entry_id, title, level in items
    )


def _freeze(arena: list[_Slot], index: int) -> OutlineEntry:
    # Iterative post-order: levels are unbounded, so depth is too.
    frozen: dict[int, OutlineEntry] = {}
    pending: list[tuple[int, bool]] = [(index, False)]
    while pending:
        current, expanded = pending.pop()
        slot = arena[current]
        if expanded:
            frozen[current] = OutlineEntry(
                id=slot.id,
                title=slot.title,
                level=slot.level,
                children=tuple(frozen.pop(child) for child in slot.children),
            )
        else:
            pending.append((current, True))
            pending.extend((child, False) for child in reversed(slot.children))
    return frozen[index]
