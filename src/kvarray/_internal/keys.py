"""Key validation and nested-collection helpers."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

import structlog

from kvarray.errors import InvalidArgumentError, InvalidKeyError
from kvarray.types import Elements, Key

logger = structlog.get_logger()


def is_valid_key(value: object) -> bool:
    """Return True for non-negative ints (bools excluded) and strings."""
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return value >= 0
    return isinstance(value, str)


def validate_key(value: object) -> Key:
    """Return ``value`` unchanged if it is a usable key.

    Raises:
        InvalidKeyError: If the value is neither a non-negative int nor a string.
    """
    if not is_valid_key(value):
        logger.debug("invalid_key", value_type=type(value).__name__)
        msg = f"Invalid key {value!r}: keys must be non-negative integers or strings"
        raise InvalidKeyError(msg)
    return value  # type: ignore[return-value]


def next_index(elements: Elements) -> int:
    """Return the next free integer key (one past the largest int key)."""
    int_keys = [k for k in elements if isinstance(k, int)]
    return max(int_keys) + 1 if int_keys else 0


def as_nested(value: Any) -> Elements | None:
    """Return a copy of ``value`` as elements when it is a nested collection.

    Mappings (including collection instances) keep their keys; lists and
    tuples are auto-indexed. Anything else, strings included, is a leaf.
    """
    if isinstance(value, Mapping):
        return dict(value.items())
    if isinstance(value, (list, tuple)):
        return dict(enumerate(value))
    return None


def to_elements(source: Mapping[Any, Any] | Iterable[Any] | None) -> Elements:
    """Build validated backing elements from a mapping or a plain iterable.

    Raises:
        InvalidKeyError: If a mapping carries an unusable key.
        InvalidArgumentError: If ``source`` is neither a mapping nor iterable.
    """
    if source is None:
        return {}
    if isinstance(source, Mapping):
        return {validate_key(k): v for k, v in source.items()}
    if isinstance(source, (str, bytes)):
        msg = f"Cannot build a collection from {type(source).__name__}; wrap it in a list"
        raise InvalidArgumentError(msg)
    try:
        return dict(enumerate(source))
    except TypeError as exc:
        msg = f"Cannot build a collection from {type(source).__name__}"
        raise InvalidArgumentError(msg) from exc
