"""Slug generation for heading anchor ids.

Example:
    >>> from prosetoc.utils.text import slugify
    >>> slugify("Hello World!")
    'hello-world'
"""

from __future__ import annotations

import re

# Anything that is not a Unicode letter or digit separates words.
_NON_ALNUM = re.compile(r"[\W_]+")


def slugify(text: str, separator: str = "-") -> str:
    """Convert heading text to a URL-safe anchor id.

    Lowercases the text, splits it on every run of non-alphanumeric
    characters and joins the words with ``separator``. The text is taken
    literally: HTML entities are not decoded, so ``&amp;`` contributes the
    word ``amp``. Unicode letters and digits are preserved.

    Args:
        text: Text to slugify
        separator: String placed between words (default: '-')

    Returns:
        Slug string, possibly empty

    Examples:
        >>> slugify("Hello World!")
        'hello-world'
        >>> slugify("v1.2_release")
        'v1-2-release'
        >>> slugify("  --Intro--  ")
        'intro'
        >>> slugify("Café Olé")
        'café-olé'
        >>> slugify("Alpha Beta", separator="ab")
        'alphaabbeta'
    """
    if not text:
        return ""
    return separator.join(word for word in _NON_ALNUM.split(text.lower()) if word)
