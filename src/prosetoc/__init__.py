"""
prosetoc: Table-of-contents extraction for rich-text document trees

Builds a nested outline from ProseMirror-style node lists (the format used
by block editors such as Bard/Tiptap). Input is treated as untrusted: any
malformed node is skipped, and building never raises.

Quick Start:
    >>> from prosetoc import build_outline
    >>> result = build_outline([
    ...     {"type": "heading", "attrs": {"level": 1},
    ...      "content": [{"type": "text", "text": "Intro"}]},
    ...     {"type": "heading", "attrs": {"level": 2},
    ...      "content": [{"type": "text", "text": "Setup"}]},
    ... ])
    >>> result.total_results
    2
    >>> result.entries[0].children[0].id
    'setup'

    >>> # Or keep a configured builder around
    >>> from prosetoc import OutlineBuilder, OutlineConfig
    >>> builder = OutlineBuilder(OutlineConfig(max_level=3, unique_ids=True))
    >>> result = builder.build(tree)

Installation:
    pip install prosetoc              # Zero runtime dependencies
"""

from prosetoc.builder import OutlineBuilder
from prosetoc.cache import DictOutlineCache, OutlineCache, hash_config, hash_tree
from prosetoc.config import (
    OutlineConfig,
    get_outline_config,
    outline_config_context,
    reset_outline_config,
    set_outline_config,
)
from prosetoc.errors import ConfigError, ProsetocError
from prosetoc.extract import extract_headings
from prosetoc.html import nodes_from_html
from prosetoc.nodes import HeadingRecord, OutlineEntry, OutlineResult
from prosetoc.serialization import from_dict, from_json, to_dict, to_json
from prosetoc.tag import OutlineTag, to_context
from prosetoc.utils.text import slugify

__version__ = "0.1.0"


def build_outline(
    tree: object,
    *,
    config: OutlineConfig | None = None,
    cache: OutlineCache | None = None,
) -> OutlineResult:
    """Build a nested outline from a document tree.

    Args:
        tree: Ordered sequence of document nodes (any value is accepted)
        config: Outline configuration (uses the context config if None)
        cache: Optional content-addressed cache. Checked before building;
            on a miss the result is stored. Bypassed for trees that cannot
            be hashed and for configs with a custom slugify.

    Returns:
        OutlineResult with nested entries and the total heading count

    """
    builder = OutlineBuilder(config)
    if cache is None:
        return builder.build(tree)

    tree_hash = hash_tree(tree)
    config_hash = hash_config(builder.config)
    if not tree_hash or not config_hash:
        return builder.build(tree)

    cached = cache.get(tree_hash, config_hash)
    if cached is not None:
        return cached

    result = builder.build(tree)
    cache.put(tree_hash, config_hash, result)
    return result


__all__ = [
    "ConfigError",
    "DictOutlineCache",
    "HeadingRecord",
    "OutlineBuilder",
    "OutlineCache",
    "OutlineConfig",
    "OutlineEntry",
    "OutlineResult",
    "OutlineTag",
    "ProsetocError",
    "__version__",
    "build_outline",
    "extract_headings",
    "from_dict",
    "from_json",
    "get_outline_config",
    "hash_config",
    "hash_tree",
    "nodes_from_html",
    "outline_config_context",
    "reset_outline_config",
    "set_outline_config",
    "slugify",
    "to_context",
    "to_dict",
    "to_json",
]
