"""Heading extraction from untrusted rich-text document trees.

Walks the top level of a ProseMirror-style node list and yields one
HeadingRecord per well-formed heading node. Nothing about the input is
assumed: every field is matched structurally and anything that does not
fit is skipped, never raised.

A heading is admitted when it looks like::

    {
        "type": "heading",
        "attrs": {"level": 2},
        "content": [{"type": "text", "text": "Install"}, ...],
    }

Example:
    >>> list(extract_headings([
    ...     {"type": "heading", "attrs": {"level": 1},
    ...      "content": [{"type": "text", "text": "Intro"}]},
    ...     {"type": "paragraph", "content": []},
    ... ]))
    [HeadingRecord(level=1, title='Intro')]

Thread Safety:
    Pure functions over their input; safe to call from any thread.

"""

from collections.abc import Iterator, Sequence

from prosetoc.nodes import HeadingRecord
from prosetoc.utils.logger import get_logger

logger = get_logger(__name__)


def extract_headings(tree: object) -> Iterator[HeadingRecord]:
    """Yield a HeadingRecord for each admissible top-level heading node.

    Args:
        tree: Any value. Only non-string sequences are walked; everything
            else yields nothing.

    Yields:
        HeadingRecord in document order.

    """
    match tree:
        case [*items]:
            pass
        case _:
            if tree is not None:
                logger.debug("Ignoring non-sequence tree of type %s", type(tree).__name__)
            return

    for index, item in enumerate(items):
        record = admit_node(item)
        if record is not None:
            yield record
        elif _is_heading(item):
            logger.debug("Skipping malformed heading node at index %d", index)


def admit_node(item: object) -> HeadingRecord | None:
    """Return a HeadingRecord if ``item`` is a well-formed heading, else None."""
    match item:
        case {
            "type": "heading",
            "attrs": {"level": int() as level},
            "content": [_, *_] as content,
        } if not isinstance(level, bool):
            title = collect_title(content)
            if not title:
                return None
            return HeadingRecord(level=level, title=title)
        case _:
            return None


def collect_title(content: Sequence[object]) -> str:
    """Concatenate the text of every text run in a heading's content.

    Children that are not ``{"type": "text", "text": <str>}`` are skipped
    one by one; they do not invalidate their siblings.

    """
    parts: list[str] = []
    for child in content:
        match child:
            case {"type": "text", "text": str() as text}:
                parts.append(text)
            case _:
                pass
    return "".join(parts)


def _is_heading(item: object) -> bool:
    match item:
        case {"type": "heading"}:
            return True
        case _:
            return False
