"""Mutable collection variant: every operation edits the receiver in place."""

from __future__ import annotations

from typing import ClassVar, Self

from kvarray import operations as ops
from kvarray._internal.keys import validate_key
from kvarray.base import BaseArray
from kvarray.types import Elements, Key, Value


class MutableArray(BaseArray):
    """An ordered collection whose operations replace its elements and return ``self``.

    Each operation computes its result in full before swapping it in, so a call
    that raises leaves the collection as it was. Not thread-safe: callers must
    serialize access to a shared instance.

    Example:
        >>> numbers = MutableArray([3, 1, 2])
        >>> numbers.sort().push(4) is numbers
        True
        >>> numbers.to_list()
        [1, 2, 3, 4]
    """

    mutable: ClassVar[bool] = True

    def _apply(self, elements: Elements) -> Self:
        self._elements = elements
        return self

    def __setitem__(self, key: Key, value: Value) -> None:
        self._elements[validate_key(key)] = value

    def __delitem__(self, key: Key) -> None:
        del self._elements[key]

    def push(self, *values: Value) -> Self:
        """Append values under the next free integer keys."""
        return self._apply(ops.push(self._elements, values))

    def unshift(self, *values: Value) -> Self:
        """Prepend values; integer keys are renumbered."""
        return self._apply(ops.unshift(self._elements, values))

    def pop(self) -> Value | None:
        """Remove and return the last value, or None when empty."""
        if not self._elements:
            return None
        return self._elements.popitem()[1]

    def shift(self) -> Value | None:
        """Remove and return the first value, renumbering integer keys."""
        if not self._elements:
            return None
        first = self.first()
        self._apply(ops.slice_range(self._elements, 1))
        return first
