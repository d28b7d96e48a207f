"""ContextVar-based outline configuration for prosetoc.

Provides thread-local configuration using Python's ContextVars (PEP 567).
An OutlineBuilder created without an explicit config reads the active one
at build time.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed.

Usage:
    from prosetoc.config import OutlineConfig, outline_config_context

    with outline_config_context(OutlineConfig(max_level=3)):
        result = OutlineBuilder().build(tree)

"""

from collections.abc import Callable
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Iterator

from prosetoc.errors import ConfigError


def _is_level(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True, slots=True)
class OutlineConfig:
    """Immutable outline configuration.

    The defaults reproduce the permissive behaviour: every admissible heading
    is kept whatever its level, and duplicate ids are left as they are.

    Attributes:
        min_level: Drop headings with a level below this (None = no bound)
        max_level: Drop headings with a level above this (None = no bound)
        flat: Return every entry at the top level instead of nesting
        unique_ids: Suffix repeated ids with ``-1``, ``-2``, ...
        separator: Separator used by the default slugify
        slugify: Optional callback replacing the default id derivation

    """

    min_level: int | None = None
    max_level: int | None = None
    flat: bool = False
    unique_ids: bool = False
    separator: str = "-"
    slugify: Callable[[str], str] | None = None

    def __post_init__(self) -> None:
        if self.min_level is not None and not _is_level(self.min_level):
            raise ConfigError("min_level", f"expected int or None, got {self.min_level!r}")
        if self.max_level is not None and not _is_level(self.max_level):
            raise ConfigError("max_level", f"expected int or None, got {self.max_level!r}")
        if (
            self.min_level is not None
            and self.max_level is not None
            and self.min_level > self.max_level
        ):
            raise ConfigError(
                "min_level",
                f"{self.min_level} is greater than max_level {self.max_level}",
            )
        if not isinstance(self.separator, str):
            raise ConfigError("separator", f"expected str, got {self.separator!r}")
        if self.slugify is not None and not callable(self.slugify):
            raise ConfigError("slugify", "must be callable")

    def accepts_level(self, level: int) -> bool:
        """Return True if a heading of this level falls inside the bounds."""
        if self.min_level is not None and level < self.min_level:
            return False
        return not (self.max_level is not None and level > self.max_level)

    @classmethod
    def from_dict(cls, config_dict: dict) -> "OutlineConfig":
        """Create OutlineConfig from dictionary.

        Only includes keys that are valid OutlineConfig fields; unknown keys
        are silently ignored. The original add-on option names ``from``,
        ``depth`` and ``is_flat`` are accepted as aliases.

        Args:
            config_dict: Dictionary with config values.

        Returns:
            New OutlineConfig instance with values from dict.

        Raises:
            ConfigError: If a value is invalid.

        Example:
            >>> config = OutlineConfig.from_dict({"depth": 3, "unknown_key": 1})
            >>> config.max_level
            3

        """
        aliases = {"from": "min_level", "depth": "max_level", "is_flat": "flat"}
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered: dict = {}
        for key, value in config_dict.items():
            key = aliases.get(key, key)
            if key in valid_fields:
                filtered[key] = value
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: OutlineConfig = OutlineConfig()

_outline_config: ContextVar[OutlineConfig] = ContextVar(
    "outline_config",
    default=_DEFAULT_CONFIG,
)


def get_outline_config() -> OutlineConfig:
    """Get current outline configuration (thread-local)."""
    return _outline_config.get()


def set_outline_config(config: OutlineConfig) -> None:
    """Set outline configuration for current context.

    Args:
        config: OutlineConfig instance to use for this context.

    """
    _outline_config.set(config)


def reset_outline_config() -> None:
    """Reset to the default configuration."""
    _outline_config.set(_DEFAULT_CONFIG)


@contextmanager
def outline_config_context(config: OutlineConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Args:
        config: OutlineConfig to use within the context.

    Yields:
        None

    Thread Safety:
        Only affects the current thread's context. Restores the previous
        config even if an exception is raised.

    """
    previous = _outline_config.get()
    _outline_config.set(config)
    try:
        yield
    finally:
        _outline_config.set(previous)


__all__ = [
    "OutlineConfig",
    "get_outline_config",
    "outline_config_context",
    "reset_outline_config",
    "set_outline_config",
]
