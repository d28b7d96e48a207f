"""Content-addressed outline cache for prosetoc.

The builder itself keeps no state between calls. Callers that render the
same document repeatedly can memoise results with a (tree_hash, config_hash)
keyed cache and ``build_outline(tree, cache=...)``.

Thread Safety:
    DictOutlineCache is not thread-safe. For parallel use, wrap get/put in a
    lock or provide another OutlineCache implementation.

Example:
    >>> from prosetoc import build_outline, DictOutlineCache
    >>> cache = DictOutlineCache()
    >>> first = build_outline(tree, cache=cache)
    >>> second = build_outline(tree, cache=cache)  # Cache hit
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Protocol

from prosetoc.utils.hashing import hash_str

if TYPE_CHECKING:
    from prosetoc.config import OutlineConfig
    from prosetoc.nodes import OutlineResult


class OutlineCache(Protocol):
    """Protocol for content-addressed outline caches.

    Cache key is (tree_hash, config_hash). Cached value is an OutlineResult,
    which is immutable and safe to share.
    """

    def get(self, tree_hash: str, config_hash: str) -> OutlineResult | None:
        """Return cached OutlineResult if present, else None."""
        ...

    def put(self, tree_hash: str, config_hash: str, result: OutlineResult) -> None:
        """Store OutlineResult in cache."""
        ...


class DictOutlineCache:
    """In-memory outline cache using a dict.

    Not thread-safe.
    """

    __slots__ = ("_data",)

    def __init__(self) -> None:
        self._data: dict[tuple[str, str], OutlineResult] = {}

    def get(self, tree_hash: str, config_hash: str) -> OutlineResult | None:
        """Return cached OutlineResult if present, else None."""
        return self._data.get((tree_hash, config_hash))

    def put(self, tree_hash: str, config_hash: str, result: OutlineResult) -> None:
        """Store OutlineResult in cache."""
        self._data[(tree_hash, config_hash)] = result

    def __len__(self) -> int:
        return len(self._data)


def hash_tree(tree: object) -> str:
    """Compute a stable hash of a document tree for cache keys.

    The tree is canonicalised as sorted-key JSON. Trees that cannot be
    canonicalised (non-string keys, cycles, unsupported values) hash to
    ``""``, which callers treat as "do not cache".

    Args:
        tree: Raw document tree

    Returns:
        Hex digest of SHA256 hash, or "" if caching should be bypassed
    """
    try:
        canonical = json.dumps(tree, sort_keys=True, separators=(",", ":"))
    except (TypeError, ValueError, RecursionError):
        return ""
    return hash_str(canonical)


def hash_config(config: OutlineConfig) -> str:
    """Compute hash of OutlineConfig for cache key.

    When a custom slugify is set, returns empty string to disable caching
    (the callback affects output in a non-hashable way).

    Args:
        config: OutlineConfig to hash

    Returns:
        Hex digest of config hash, or "" if cache should be bypassed
    """
    if config.slugify is not None:
        return ""
    parts = (
        str(config.min_level),
        str(config.max_level),
        str(config.flat),
        str(config.unique_ids),
        config.separator,
    )
    return hash_str("|".join(parts))


__all__ = [
    "DictOutlineCache",
    "OutlineCache",
    "hash_config",
    "hash_tree",
]
