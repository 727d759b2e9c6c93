"""Three-way comparators for each sort strategy.

Every comparator returns a negative number, zero or a positive number and is
total over mixed value types, so sorting never raises on heterogeneous data.
"""

from __future__ import annotations

import locale
import math
import re
from collections.abc import Callable
from decimal import Decimal
from functools import cmp_to_key
from numbers import Real
from typing import Any

from kvarray.errors import InvalidArgumentError
from kvarray.types import Strategy

Comparator = Callable[[Any, Any], int]

_DIGIT_RUN = re.compile(r"(\d+)")


def _cmp(a: Any, b: Any) -> int:
    return (a > b) - (a < b)


def _is_number(value: Any) -> bool:
    # Decimal is not registered as a numbers.Real
    return isinstance(value, (Real, Decimal))


def _is_nan(value: Any) -> bool:
    if isinstance(value, Decimal):
        return value.is_nan()
    return isinstance(value, float) and math.isnan(value)


def _rank(value: Any) -> int:
    if value is None:
        return 0
    if _is_number(value):
        return 1
    if isinstance(value, str):
        return 2
    return 3


def to_string(value: Any) -> str:
    """String form used by STRING-based strategies and diff."""
    return "" if value is None else str(value)


def _parse_number(text: str) -> int | float:
    if "_" in text:
        return 0
    try:
        return int(text)
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError:
        return 0
    return number if math.isfinite(number) else 0


def to_number(value: Any) -> Real | Decimal:
    """Numeric form used by the NUMERIC strategy.

    Numbers pass through, except NaN which becomes 0. Strings holding a
    finite decimal number are parsed; everything else is 0.
    """
    if _is_number(value):
        return 0 if _is_nan(value) else value
    if isinstance(value, str):
        return _parse_number(value.strip())
    return 0


def natural_key(text: str) -> tuple[tuple[int, int | str], ...]:
    """Split ``text`` into digit runs (as ints) and text runs (as strings)."""
    parts: list[tuple[int, int | str]] = []
    for index, chunk in enumerate(_DIGIT_RUN.split(text)):
        if not chunk:
            continue
        if index % 2:
            parts.append((0, int(chunk)))
        else:
            parts.append((1, chunk))
    return tuple(parts)


def _compare_other(a: Any, b: Any) -> int:
    # Values of different types group by type name; within a type the
    # native ordering applies when there is one, repr otherwise
    if type(a) is not type(b):
        by_name = _cmp(type(a).__qualname__, type(b).__qualname__)
        if by_name:
            return by_name
    else:
        try:
            return _cmp(a, b)
        except TypeError:
            pass
    return _cmp(repr(a), repr(b))


def compare_regular(a: Any, b: Any) -> int:
    rank_a, rank_b = _rank(a), _rank(b)
    if rank_a != rank_b:
        return rank_a - rank_b
    if rank_a == 0:
        return 0
    if rank_a == 1:
        return _cmp(to_number(a), to_number(b))
    if rank_a == 3:
        return _compare_other(a, b)
    return _cmp(a, b)


def compare_numeric(a: Any, b: Any) -> int:
    return _cmp(to_number(a), to_number(b))


def compare_string(a: Any, b: Any) -> int:
    return _cmp(to_string(a), to_string(b))


def compare_string_case_insensitive(a: Any, b: Any) -> int:
    return _cmp(to_string(a).casefold(), to_string(b).casefold())


def compare_natural(a: Any, b: Any) -> int:
    return _cmp(natural_key(to_string(a)), natural_key(to_string(b)))


def _collation_key(value: Any) -> list[str]:
    # strxfrm rejects embedded NUL characters, so collate the pieces between them
    return [locale.strxfrm(part) for part in to_string(value).split("\x00")]


def compare_locale(a: Any, b: Any) -> int:
    return _cmp(_collation_key(a), _collation_key(b))


_COMPARATORS: dict[Strategy, Comparator] = {
    Strategy.REGULAR: compare_regular,
    Strategy.NUMERIC: compare_numeric,
    Strategy.STRING: compare_string,
    Strategy.STRING_CASE_INSENSITIVE: compare_string_case_insensitive,
    Strategy.NATURAL: compare_natural,
    Strategy.LOCALE: compare_locale,
}


def get_comparator(strategy: Strategy | str) -> Comparator:
    """Return the comparator for ``strategy`` (enum member or its value).

    Raises:
        InvalidArgumentError: If ``strategy`` names no known strategy.
    """
    try:
        return _COMPARATORS[Strategy(strategy)]
    except ValueError as exc:
        msg = f"Unknown comparison strategy: {strategy!r}"
        raise InvalidArgumentError(msg) from exc


def sort_key(comparator: Comparator) -> Callable[[Any], Any]:
    """Wrap a three-way comparator for use as ``sorted(key=...)``."""
    return cmp_to_key(comparator)
