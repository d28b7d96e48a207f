"""Utility modules for prosetoc.

Provides:
- text: slugify for heading ids
- hashing: hash_str for cache keys
- logger: get_logger for logging
"""

from prosetoc.utils.hashing import hash_str
from prosetoc.utils.logger import get_logger
from prosetoc.utils.text import slugify

__all__ = [
    "get_logger",
    "hash_str",
    "slugify",
]
