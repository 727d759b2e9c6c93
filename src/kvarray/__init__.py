"""kvarray: ordered int/str-keyed collections in immutable and mutable flavours.

Both variants share one operation set (reverse, slice, merge, sort, map,
filter, ...). ImmutableArray returns a new collection from every operation;
MutableArray edits itself and returns itself for chaining.

Example:
    >>> from kvarray import ImmutableArray, MutableArray
    >>>
    >>> scores = ImmutableArray({"ann": 3, "bob": 1, "cy": 2})
    >>> scores.sort(preserve_keys=True).to_dict()
    {'bob': 1, 'cy': 2, 'ann': 3}
    >>>
    >>> queue = MutableArray(["b", "c"])
    >>> queue.unshift("a").push("d").to_list()
    ['a', 'b', 'c', 'd']
"""

from __future__ import annotations

from kvarray.base import BaseArray
from kvarray.config import KvArrayConfig, configure_logging, get_config
from kvarray.errors import (
    InvalidArgumentError,
    InvalidKeyError,
    KvArrayError,
    RecursionDepthError,
    TypeMismatchError,
)
from kvarray.factory import create, freeze, thaw
from kvarray.immutable import ImmutableArray
from kvarray.mutable import MutableArray
from kvarray.types import Elements, Key, SortOrder, Strategy, Value

__version__ = "0.1.0"

__all__ = [
    "BaseArray",
    "Elements",
    "ImmutableArray",
    "InvalidArgumentError",
    "InvalidKeyError",
    "Key",
    "KvArrayConfig",
    "KvArrayError",
    "MutableArray",
    "RecursionDepthError",
    "SortOrder",
    "Strategy",
    "TypeMismatchError",
    "Value",
    "__version__",
    "configure_logging",
    "create",
    "freeze",
    "get_config",
    "thaw",
]
