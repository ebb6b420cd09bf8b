"""Shared validation helpers for frozen dataclass models.

Private module -- not part of the public API. Used by ``__post_init__``
methods in sibling model modules and by the resolver to enforce runtime
type constraints and port bounds.
"""

from __future__ import annotations

from typing import Any

from .constants import MAX_PORT, MIN_PORT


def validate_instance(value: Any, expected: type | tuple[type, ...], name: str) -> None:
    """Raise ``TypeError`` if *value* is not an instance of *expected*."""
    if not isinstance(value, expected):
        names = (
            " or ".join(t.__name__ for t in expected)
            if isinstance(expected, tuple)
            else expected.__name__
        )
        article = "an" if names[0] in "AEIOUaeiou" else "a"
        raise TypeError(f"{name} must be {article} {names}, got {type(value).__name__}")


def is_port(value: Any) -> bool:
    """Return True if *value* is an ``int`` in the valid port range (``bool`` excluded)."""
    if isinstance(value, bool) or not isinstance(value, int):
        return False
    return MIN_PORT <= value <= MAX_PORT


def validate_port(value: Any, name: str) -> None:
    """Raise if *value* is not an ``int`` within ``[MIN_PORT, MAX_PORT]``."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")
    if not MIN_PORT <= value <= MAX_PORT:
        raise ValueError(f"{name} must be between {MIN_PORT} and {MAX_PORT}, got {value}")
