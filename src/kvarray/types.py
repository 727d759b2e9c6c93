"""Key, value and comparison types shared by both collection variants."""

from __future__ import annotations

from enum import Enum
from typing import Any, TypeAlias

# Keys are a tagged union: non-negative ints or strings, never coerced into each other.
Key: TypeAlias = int | str
Value: TypeAlias = Any
Elements: TypeAlias = dict[Key, Value]


class SortOrder(str, Enum):
    """Direction of a sort."""

    ASC = "asc"
    DESC = "desc"


class Strategy(str, Enum):
    """Comparison semantics used by sort, sort_keys and unique.

    - REGULAR: None < numbers < strings < anything else; numbers numerically,
      strings by code point, the rest by ``repr``.
    - NUMERIC: values converted to numbers, non-numeric values count as 0.
    - STRING: ``str(value)`` by code point.
    - STRING_CASE_INSENSITIVE: casefolded string form.
    - NATURAL: digit runs compared as integers ("img2" < "img10").
    - LOCALE: ``locale.strxfrm`` under the current ``LC_COLLATE``.
    """

    REGULAR = "regular"
    NUMERIC = "numeric"
    STRING = "string"
    STRING_CASE_INSENSITIVE = "string_case_insensitive"
    NATURAL = "natural"
    LOCALE = "locale"
