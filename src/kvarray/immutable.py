"""Immutable collection variant: every operation returns a new instance."""

from __future__ import annotations

from typing import ClassVar, Self

from kvarray.base import BaseArray
from kvarray.types import Elements


class ImmutableArray(BaseArray):
    """An ordered collection that is never modified after construction.

    Example:
        >>> letters = ImmutableArray(["a", "b", "c"])
        >>> letters.reverse(preserve_keys=True).to_dict()
        {2: 'c', 1: 'b', 0: 'a'}
        >>> letters.to_dict()
        {0: 'a', 1: 'b', 2: 'c'}
    """

    mutable: ClassVar[bool] = False

    def _apply(self, elements: Elements) -> Self:
        instance = type(self).__new__(type(self))
        instance._elements = elements
        return instance

    def __hash__(self) -> int:
        return hash(tuple(self._elements.items()))
