"""Outline builder: document tree in, nested outline out.

The builder chains the three passes:

1. extract_headings: admit well-formed heading nodes as HeadingRecords
2. id derivation: slugify each title (optionally de-duplicated)
3. nest_entries: fold the flat sequence into a tree by level

Failure semantics:
    ``build`` never raises for any input shape. Malformed nodes are skipped
    and logged at DEBUG; the worst case is an empty OutlineResult. A custom
    ``slugify`` that raises or returns a non-string falls back to the
    default slug for that heading.

Thread Safety:
    An OutlineBuilder holds only its (immutable) config. All per-call state
    is local to ``build``, so one builder can be shared across threads.

Example:
    >>> builder = OutlineBuilder()
    >>> result = builder.build([
    ...     {"type": "heading", "attrs": {"level": 1},
    ...      "content": [{"type": "text", "text": "Getting Started"}]},
    ... ])
    >>> result.entries[0].id
    'getting-started'

"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator

from prosetoc.config import OutlineConfig, get_outline_config
from prosetoc.extract import extract_headings
from prosetoc.nesting import flat_entries, nest_entries
from prosetoc.nodes import EMPTY_RESULT, HeadingRecord, OutlineResult
from prosetoc.utils.logger import get_logger
from prosetoc.utils.text import slugify as default_slugify

logger = get_logger(__name__)


class OutlineBuilder:
    """Build a nested table of contents from a rich-text document tree.

    Usage:
        >>> builder = OutlineBuilder(OutlineConfig(max_level=3))
        >>> result = builder.build(tree)
        >>> for entry in result.entries:
        ...     print(entry.id, entry.title, len(entry.children))

    """

    __slots__ = ("_config",)

    def __init__(self, config: OutlineConfig | None = None) -> None:
        """Initialize builder.

        Args:
            config: Fixed configuration. When None, the context config
                (``get_outline_config()``) is read on every ``build`` call.
        """
        self._config = config

    @property
    def config(self) -> OutlineConfig:
        """Configuration that the next ``build`` call will use."""
        return self._config if self._config is not None else get_outline_config()

    def build(self, tree: object) -> OutlineResult:
        """Extract and nest the headings of ``tree``.

        Args:
            tree: Ordered sequence of document nodes. Any other value is
                accepted and produces an empty result.

        Returns:
            OutlineResult whose ``total_results`` counts every entry,
            nested ones included.

        """
        config = self.config
        records = [r for r in extract_headings(tree) if config.accepts_level(r.level)]
        if not records:
            return EMPTY_RESULT

        items = list(self._identify(records, config))
        entries = flat_entries(items) if config.flat else nest_entries(items)

        logger.debug(
            "Built outline: %d headings, %d top-level entries",
            len(records),
            len(entries),
        )
        return OutlineResult(entries=entries, total_results=len(records))

    def _identify(
        self, records: Iterable[HeadingRecord], config: OutlineConfig
    ) -> Iterator[tuple[str, str, int]]:
        make_id = _id_factory(config)
        seen: dict[str, int] = {}
        for record in records:
            entry_id = make_id(record.title)
            if config.unique_ids:
                entry_id = _dedupe(entry_id, seen)
            yield entry_id, record.title, record.level

    def __repr__(self) -> str:
        return f"OutlineBuilder(config={self._config!r})"


def _id_factory(config: OutlineConfig) -> Callable[[str], str]:
    separator = config.separator
    custom = config.slugify
    if custom is None:
        return lambda title: default_slugify(title, separator=separator)

    def make_id(title: str) -> str:
        try:
            slug = custom(title)
        except Exception:
            logger.debug("Custom slugify failed for %r", title, exc_info=True)
            return default_slugify(title, separator=separator)
        if not isinstance(slug, str):
            logger.debug("Custom slugify returned %s for %r", type(slug).__name__, title)
            return default_slugify(title, separator=separator)
        return slug

    return make_id


def _dedupe(slug: str, seen: dict[str, int]) -> str:
    """Return ``slug`` or the first free ``slug-N`` variant, and record it."""
    if slug not in seen:
        seen[slug] = 0
        return slug
    counter = seen[slug]
    candidate = slug
    while candidate in seen:
        counter += 1
        candidate = f"{slug}-{counter}"
    seen[slug] = counter
    seen[candidate] = 0
    return candidate
