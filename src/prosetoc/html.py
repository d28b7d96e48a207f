"""Heading extraction from plain HTML content.

Fields that store rendered HTML rather than a structured node tree can
still get an outline: ``nodes_from_html`` scans ``<h1>`` to ``<h6>`` elements
and returns heading-shaped document nodes that ``OutlineBuilder.build``
accepts like any other tree.

Example:
    >>> nodes_from_html("<h1>Intro</h1><p>Body</p><h2>Setup &amp; Use</h2>")
    [{'type': 'heading', 'attrs': {'level': 1}, 'content': [{'type': 'text', 'text': 'Intro'}]},
     {'type': 'heading', 'attrs': {'level': 2}, 'content': [{'type': 'text', 'text': 'Setup & Use'}]}]

"""

from __future__ import annotations

import re
from html.parser import HTMLParser
from typing import Any

_HEADING_TAGS = {f"h{n}": n for n in range(1, 7)}
_WHITESPACE = re.compile(r"\s+")


class _HeadingScanner(HTMLParser):
    """Collect the text of each heading element, in document order."""

    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.headings: list[tuple[int, str]] = []
        self._level: int | None = None
        self._parts: list[str] = []

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        level = _HEADING_TAGS.get(tag)
        if level is None:
            return
        # A heading opened inside another one closes the outer heading.
        self._finish()
        self._level = level

    def handle_endtag(self, tag: str) -> None:
        if tag in _HEADING_TAGS:
            self._finish()

    def handle_data(self, data: str) -> None:
        if self._level is not None:
            self._parts.append(data)

    def close(self) -> None:
        super().close()
        self._finish()

    def _finish(self) -> None:
        if self._level is None:
            return
        text = _WHITESPACE.sub(" ", "".join(self._parts)).strip()
        if text:
            self.headings.append((self._level, text))
        self._level = None
        self._parts = []


def nodes_from_html(markup: str) -> list[dict[str, Any]]:
    """Convert the headings of an HTML fragment into document nodes.

    Args:
        markup: HTML source. Non-string values produce an empty list.

    Returns:
        Heading nodes in document order; headings without text are dropped.

    """
    if not isinstance(markup, str) or not markup:
        return []

    scanner = _HeadingScanner()
    scanner.feed(markup)
    scanner.close()

    return [
        {
            "type": "heading",
            "attrs": {"level": level},
            "content": [{"type": "text", "text": text}],
        }
        for level, text in scanner.headings
    ]
