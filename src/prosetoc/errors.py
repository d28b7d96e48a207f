"""Exception classes for prosetoc.

The outline builder itself never raises on malformed documents; these
exceptions cover programmer errors such as invalid configuration.
"""

from __future__ import annotations


class ProsetocError(Exception):
    """Base exception for all prosetoc errors.

    Subclass this for specific error categories.
    """

    pass


class ConfigError(ProsetocError):
    """Invalid outline configuration.

    Raised when an OutlineConfig is constructed with values that cannot
    produce a meaningful outline (e.g. ``min_level`` above ``max_level``).
    """

    def __init__(self, option: str, message: str) -> None:
        """Initialize config error.

        Args:
            option: Name of the offending config field
            message: Description of the problem
        """
        self.option = option
        super().__init__(f"Config option '{option}': {message}")
