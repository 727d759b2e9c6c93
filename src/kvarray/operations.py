"""Pure transforms over backing elements.

Each function reads the elements it is given without modifying them and
returns a fresh dict. The collection variants differ only in what they do with
that result: ImmutableArray wraps it in a new instance, MutableArray swaps it
in as its own backing dict.

"Renumbering" below means integer keys are reassigned 0, 1, 2, ... in result
order while string keys are kept as they are.
"""

from __future__ import annotations

import random
from collections.abc import Callable, Iterable
from functools import cmp_to_key
from itertools import chain
from typing import Any

import structlog

from kvarray._internal.comparison import get_comparator, sort_key, to_string
from kvarray._internal.keys import as_nested, next_index, validate_key
from kvarray.config import get_config
from kvarray.errors import InvalidArgumentError, RecursionDepthError, TypeMismatchError
from kvarray.types import Elements, Key, SortOrder, Strategy, Value

logger = structlog.get_logger()

_rng: random.Random | None = None


def shared_rng() -> random.Random:
    """Return the module generator, seeded from ``random_seed`` on first use."""
    global _rng  # noqa: PLW0603
    if _rng is None:
        _rng = random.Random(get_config().random_seed)
    return _rng


def reset_rng() -> None:
    """Drop the module generator so the next use reseeds it (for testing)."""
    global _rng  # noqa: PLW0603
    _rng = None


def require_callable(fn: object, name: str) -> None:
    if not callable(fn):
        msg = f"{name} must be callable, got {type(fn).__name__}"
        raise TypeMismatchError(msg)


def _is_descending(order: SortOrder | str) -> bool:
    try:
        return SortOrder(order) is SortOrder.DESC
    except ValueError as exc:
        msg = f"Unknown sort order: {order!r}"
        raise InvalidArgumentError(msg) from exc


def _check_depth(depth: int) -> None:
    limit = get_config().max_depth
    if depth > limit:
        logger.warning("recursion_limit_exceeded", depth=depth, max_depth=limit)
        msg = f"Nesting deeper than max_depth={limit} (self-referential collection?)"
        raise RecursionDepthError(msg)


def _renumber(pairs: Iterable[tuple[Key, Value]]) -> Elements:
    result: Elements = {}
    index = 0
    for key, value in pairs:
        if isinstance(key, int):
            result[index] = value
            index += 1
        else:
            result[key] = value
    return result


def reindex(elements: Elements) -> Elements:
    return dict(enumerate(elements.values()))


def flip(elements: Elements) -> Elements:
    """Swap keys and values; later entries win when values collide.

    Raises:
        InvalidKeyError: If a value cannot serve as a key.
    """
    return {validate_key(value): key for key, value in elements.items()}


def reverse(elements: Elements, preserve_keys: bool = False) -> Elements:
    pairs = reversed(elements.items())
    if preserve_keys:
        return dict(pairs)
    return _renumber(pairs)


def pad(elements: Elements, size: int, value: Value) -> Elements:
    """Grow to ``abs(size)`` entries, filling at the front when ``size`` is negative."""
    count = len(elements)
    if abs(size) <= count:
        return dict(elements)
    fillers = ((0, value) for _ in range(abs(size) - count))
    if size < 0:
        return _renumber(chain(fillers, elements.items()))
    return _renumber(chain(elements.items(), fillers))


def slice_range(
    elements: Elements,
    offset: int,
    length: int | None = None,
    preserve_keys: bool = False,
) -> Elements:
    """Extract a contiguous run of entries.

    A negative ``offset`` counts from the end. ``length=None`` runs to the end
    and a negative ``length`` stops that many entries before the end.
    """
    count = len(elements)
    start = offset if offset >= 0 else max(count + offset, 0)
    if length is None:
        stop = count
    elif length < 0:
        stop = max(count + length, 0)
    else:
        stop = start + length
    pairs = list(elements.items())[start:stop]
    if preserve_keys:
        return dict(pairs)
    return _renumber(pairs)


def chunk(elements: Elements, size: int, preserve_keys: bool = False) -> Elements:
    """Split into groups of at most ``size`` entries, each stored as a dict value.

    Raises:
        InvalidArgumentError: If ``size`` is less than 1.
    """
    if size < 1:
        msg = f"Chunk size must be a positive integer, got {size!r}"
        raise InvalidArgumentError(msg)
    items = list(elements.items())
    chunks: Elements = {}
    for number, start in enumerate(range(0, len(items), size)):
        group = items[start : start + size]
        if preserve_keys:
            chunks[number] = dict(group)
        else:
            chunks[number] = {i: value for i, (_, value) in enumerate(group)}
    return chunks


def unique(elements: Elements, strategy: Strategy | str = Strategy.STRING) -> Elements:
    """Drop entries equal (under ``strategy``) to an earlier entry; keys survive."""
    compare = get_comparator(strategy)
    kept: list[Value] = []
    result: Elements = {}
    for key, value in elements.items():
        if any(compare(value, seen) == 0 for seen in kept):
            continue
        kept.append(value)
        result[key] = value
    return result


def _merge_into(dest: Elements, source: Elements, depth: int) -> Elements:
    _check_depth(depth)
    for key, value in source.items():
        if not isinstance(key, str):
            dest[next_index(dest)] = value
        elif key not in dest:
            dest[key] = value
        else:
            gathered = as_nested(dest[key])
            if gathered is None:
                gathered = {0: dest[key]}
            nested = as_nested(value)
            if nested is None:
                gathered[next_index(gathered)] = value
            else:
                gathered = _merge_into(gathered, nested, depth + 1)
            dest[key] = gathered
    return dest


def merge(first: Elements, second: Elements, recursive: bool = False) -> Elements:
    """Merge ``second`` onto ``first``.

    String keys of ``second`` overwrite those of ``first`` in place; integer
    keys from both are appended and renumbered. When ``recursive``, a string
    key present on both sides gathers both values into one nested dict instead
    of overwriting, merging nested collections recursively.
    """
    if not recursive:
        return _renumber(chain(first.items(), second.items()))
    return _merge_into(_merge_into({}, first, 1), second, 1)


def _replace_into(dest: Elements, source: Elements, depth: int) -> Elements:
    _check_depth(depth)
    result = dict(dest)
    for key, value in source.items():
        nested_source = as_nested(value)
        nested_dest = as_nested(result[key]) if key in result else None
        if nested_source is not None and nested_dest is not None:
            result[key] = _replace_into(nested_dest, nested_source, depth + 1)
        else:
            result[key] = value
    return result


def replace(first: Elements, second: Elements, recursive: bool = False) -> Elements:
    """Overwrite entries of ``first`` with every key of ``second``, integer keys included.

    Keys missing from ``first`` are appended. When ``recursive``, nested
    collections present on both sides are replaced key by key.
    """
    if recursive:
        return _replace_into(first, second, 1)
    result = dict(first)
    result.update(second)
    return result


def combine(keys: Elements, values: Elements) -> Elements:
    """Pair the values of ``keys`` with the values of ``values``.

    Raises:
        InvalidArgumentError: If both sides differ in length.
        InvalidKeyError: If a value of ``keys`` cannot serve as a key.
    """
    if len(keys) != len(values):
        msg = f"Cannot combine {len(keys)} keys with {len(values)} values: lengths differ"
        raise InvalidArgumentError(msg)
    return {validate_key(k): v for k, v in zip(keys.values(), values.values())}


def diff(elements: Elements, other: Elements) -> Elements:
    """Keep entries whose string form occurs nowhere among ``other``'s values."""
    excluded = {to_string(value) for value in other.values()}
    return {k: v for k, v in elements.items() if to_string(v) not in excluded}


def shuffle(elements: Elements, rng: random.Random | None = None) -> Elements:
    values = list(elements.values())
    (rng or shared_rng()).shuffle(values)
    return dict(enumerate(values))


def sort_values(
    elements: Elements,
    order: SortOrder | str = SortOrder.ASC,
    strategy: Strategy | str = Strategy.REGULAR,
    preserve_keys: bool = False,
) -> Elements:
    """Stable sort by value; without ``preserve_keys`` keys become 0..n-1."""
    key = sort_key(get_comparator(strategy))
    pairs = sorted(
        elements.items(),
        key=lambda item: key(item[1]),
        reverse=_is_descending(order),
    )
    if preserve_keys:
        return dict(pairs)
    return {i: value for i, (_, value) in enumerate(pairs)}


def sort_keys(
    elements: Elements,
    order: SortOrder | str = SortOrder.ASC,
    strategy: Strategy | str = Strategy.REGULAR,
) -> Elements:
    key = sort_key(get_comparator(strategy))
    return dict(
        sorted(elements.items(), key=lambda item: key(item[0]), reverse=_is_descending(order))
    )


def map_values(elements: Elements, fn: Callable[[Value], Any]) -> Elements:
    require_callable(fn, "map function")
    return {key: fn(value) for key, value in elements.items()}


def filter_values(elements: Elements, fn: Callable[[Value], Any] | None = None) -> Elements:
    """Keep entries for which ``fn(value)`` (or the value itself) is truthy."""
    if fn is None:
        return {key: value for key, value in elements.items() if value}
    require_callable(fn, "filter function")
    return {key: value for key, value in elements.items() if fn(value)}


def _walk_leaves(elements: Elements, fn: Callable[[Value, Key], Any], depth: int) -> None:
    _check_depth(depth)
    for key, value in elements.items():
        nested = as_nested(value)
        if nested is None:
            fn(value, key)
        else:
            _walk_leaves(nested, fn, depth + 1)


def walk(
    elements: Elements,
    fn: Callable[[Value, Key], Any],
    recursive: bool = False,
) -> Elements:
    """Call ``fn(value, key)`` for every entry and return the entries unchanged.

    When ``recursive``, nested collections are descended into and ``fn`` only
    sees their leaves.
    """
    require_callable(fn, "walk function")
    if recursive:
        _walk_leaves(elements, fn, 1)
    else:
        for key, value in elements.items():
            fn(value, key)
    return dict(elements)


def custom_sort_values(elements: Elements, fn: Callable[[Value, Value], int]) -> Elements:
    require_callable(fn, "comparator")
    return dict(enumerate(sorted(elements.values(), key=cmp_to_key(fn))))


def custom_sort_keys(elements: Elements, fn: Callable[[Key, Key], int]) -> Elements:
    require_callable(fn, "comparator")
    key = cmp_to_key(fn)
    return dict(sorted(elements.items(), key=lambda item: key(item[0])))


def push(elements: Elements, values: Iterable[Value]) -> Elements:
    result = dict(elements)
    index = next_index(result)
    for value in values:
        result[index] = value
        index += 1
    return result


def unshift(elements: Elements, values: Iterable[Value]) -> Elements:
    return _renumber(chain(((0, value) for value in values), elements.items()))


def clear(elements: Elements) -> Elements:  # noqa: ARG001
    return {}
