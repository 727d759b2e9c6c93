"""Factory construction and conversion between collection variants."""

from __future__ import annotations

from typing import Literal, overload

from kvarray.base import BaseArray, Source
from kvarray.immutable import ImmutableArray
from kvarray.mutable import MutableArray


@overload
def create(elements: Source | None = ..., *, mutable: Literal[False] = ...) -> ImmutableArray: ...


@overload
def create(elements: Source | None = ..., *, mutable: Literal[True]) -> MutableArray: ...


def create(elements: Source | None = None, *, mutable: bool = False) -> BaseArray:
    """Create a collection of the requested variant.

    Args:
        elements: Mapping, iterable of values, or a collection of either variant
            (copied, never shared).
        mutable: Build a MutableArray instead of an ImmutableArray.
    """
    if mutable:
        return MutableArray(elements)
    return ImmutableArray(elements)


def freeze(collection: BaseArray) -> ImmutableArray:
    """Return an immutable copy of ``collection``."""
    return ImmutableArray(collection)


def thaw(collection: BaseArray) -> MutableArray:
    """Return a mutable copy of ``collection``."""
    return MutableArray(collection)
