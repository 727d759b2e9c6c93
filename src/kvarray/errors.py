"""Exception types raised by collection operations."""

from __future__ import annotations


class KvArrayError(Exception):
    """Base class for all kvarray errors."""


class InvalidArgumentError(KvArrayError, ValueError):
    """Raised when an operation receives an argument outside its domain."""


class InvalidKeyError(InvalidArgumentError):
    """Raised when a value cannot be used as a collection key."""


class TypeMismatchError(KvArrayError, TypeError):
    """Raised when a callable was required but something else was supplied."""


class RecursionDepthError(KvArrayError, RecursionError):
    """Raised when a recursive operation nests deeper than ``max_depth``."""
