"""Logger namespace for prosetoc.

Every module logs under ``prosetoc.<module>`` and the library installs no
handlers. Skipped heading nodes and per-build summaries are emitted at
DEBUG, so a host application sees them only after opting in:

    >>> import logging
    >>> logging.basicConfig()
    >>> logging.getLogger("prosetoc").setLevel(logging.DEBUG)
    >>> OutlineBuilder().build([{"type": "heading"}])
    DEBUG:prosetoc.extract:Skipping malformed heading node at index 0
"""

from __future__ import annotations

import logging

_ROOT = "prosetoc"


def get_logger(name: str) -> logging.Logger:
    """Return the logger for a prosetoc module.

    Args:
        name: Module name, usually ``__name__``. Names outside the package
            are placed under ``prosetoc.`` so one level setting on the
            ``prosetoc`` logger controls everything.

    Example:
        >>> get_logger("prosetoc.builder").name
        'prosetoc.builder'
        >>> get_logger("cms_glue").name
        'prosetoc.cms_glue'
    """
    if name != _ROOT and not name.startswith(_ROOT + "."):
        name = f"{_ROOT}.{name}"
    return logging.getLogger(name)
