"""Base container shared by the immutable and mutable collection variants."""

from __future__ import annotations

import json
import random
from abc import abstractmethod
from collections.abc import Callable, Iterable, Iterator, Mapping
from typing import TYPE_CHECKING, Any, ClassVar, Self

from rich.console import Console
from rich.pretty import Pretty

from kvarray import operations as ops
from kvarray._internal.comparison import to_string
from kvarray._internal.keys import to_elements
from kvarray.errors import InvalidArgumentError
from kvarray.types import Elements, Key, SortOrder, Strategy, Value

if TYPE_CHECKING:
    from kvarray.immutable import ImmutableArray
    from kvarray.mutable import MutableArray

Source = Mapping[Any, Any] | Iterable[Any]


class BaseArray(Mapping[Key, Value]):
    """An insertion-ordered mapping of int/str keys to arbitrary values.

    Every transform is computed by a pure function in ``kvarray.operations``
    and handed to ``_apply``, which each variant implements: ImmutableArray
    returns a new instance, MutableArray replaces its own elements and
    returns itself.

    Construction accepts a mapping (keys validated and kept), any other
    iterable (auto-indexed from 0) or another collection of either variant
    (shallow copy).
    """

    mutable: ClassVar[bool] = False

    _elements: Elements

    def __init__(self, elements: Source | None = None) -> None:
        if isinstance(elements, BaseArray):
            self._elements = dict(elements._elements)
        else:
            self._elements = to_elements(elements)

    @abstractmethod
    def _apply(self, elements: Elements) -> Self:
        """Commit freshly computed elements according to the variant."""
        ...

    # Construction helpers

    @classmethod
    def create(cls, *values: Value) -> Self:
        """Create an auto-indexed collection from positional values."""
        return cls(values)

    @classmethod
    def from_json(cls, text: str | bytes) -> Self:
        """Create a collection from a JSON array or object.

        Raises:
            InvalidArgumentError: If the text is not valid JSON or decodes to a scalar.
        """
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            msg = f"Invalid JSON: {exc}"
            raise InvalidArgumentError(msg) from exc
        if not isinstance(data, (dict, list)):
            msg = f"JSON must decode to an array or object, got {type(data).__name__}"
            raise InvalidArgumentError(msg)
        return cls(data)

    @classmethod
    def from_string(cls, text: str, separator: str) -> Self:
        """Split ``text`` on ``separator`` into stripped, auto-indexed values."""
        if not separator:
            msg = "Separator must be a non-empty string"
            raise InvalidArgumentError(msg)
        if not text:
            return cls()
        return cls(part.strip() for part in text.split(separator))

    @classmethod
    def with_range(cls, start: int, stop: int, step: int = 1) -> Self:
        """Create a collection of integers from ``start`` to ``stop`` inclusive.

        Counts down when ``start`` is greater than ``stop``; the sign of
        ``step`` is ignored.
        """
        if step == 0:
            msg = "Range step must not be zero"
            raise InvalidArgumentError(msg)
        step = abs(step)
        if start <= stop:
            return cls(range(start, stop + 1, step))
        return cls(range(start, stop - 1, -step))

    # Mapping protocol

    def __getitem__(self, key: Key) -> Value:
        return self._elements[key]

    def __iter__(self) -> Iterator[Key]:
        return iter(self._elements)

    def __len__(self) -> int:
        return len(self._elements)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BaseArray):
            return NotImplemented
        if self.mutable is not other.mutable:
            return False
        return list(self._elements.items()) == list(other._elements.items())

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._elements!r})"

    # Accessors

    def contains(self, value: Value) -> bool:
        return value in self._elements.values()

    def contains_key(self, key: Key) -> bool:
        return key in self._elements

    def index_of(self, value: Value) -> Key | None:
        """Return the first key holding ``value``, or None."""
        for key, candidate in self._elements.items():
            if candidate == value:
                return key
        return None

    def find(self, fn: Callable[[Value], Any]) -> Value | None:
        """Return the first value for which ``fn`` is truthy, or None."""
        ops.require_callable(fn, "find function")
        for value in self._elements.values():
            if fn(value):
                return value
        return None

    def first(self) -> Value | None:
        return next(iter(self._elements.values()), None)

    def last(self) -> Value | None:
        return next(reversed(self._elements.values()), None)

    def random(self, rng: random.Random | None = None) -> Value | None:
        """Return a randomly chosen value, or None when empty."""
        if not self._elements:
            return None
        return (rng or ops.shared_rng()).choice(list(self._elements.values()))

    def is_empty(self) -> bool:
        return not self._elements

    def is_assoc(self) -> bool:
        """True when non-empty and every key is a string."""
        return bool(self._elements) and all(isinstance(k, str) for k in self._elements)

    def is_numeric(self) -> bool:
        """True when non-empty and every key is an integer."""
        return bool(self._elements) and all(isinstance(k, int) for k in self._elements)

    # Export

    def to_dict(self) -> Elements:
        """Convert to a plain dict (shallow copy)."""
        return dict(self._elements)

    def to_list(self) -> list[Value]:
        return list(self._elements.values())

    def to_json(self, **kwargs: Any) -> str:
        """Serialize to JSON: an array when keys are exactly 0..n-1, else an object."""
        if list(self._elements) == list(range(len(self._elements))):
            return json.dumps(self.to_list(), **kwargs)
        return json.dumps(self._elements, **kwargs)

    def to_readable_string(self, separator: str = ", ", quote: str = "") -> str:
        return separator.join(f"{quote}{to_string(v)}{quote}" for v in self._elements.values())

    def dump(self, console: Console | None = None) -> None:
        """Pretty-print the class name and elements to ``console`` (stdout by default)."""
        console = console or Console()
        console.print(f"[bold]{type(self).__name__}[/bold] ({len(self)} elements)")
        console.print(Pretty(self._elements, expand_all=True))

    def copy(self) -> Self:
        """Return a shallow copy of the same variant."""
        return type(self)(self)

    def to_immutable(self) -> ImmutableArray:
        from kvarray.immutable import ImmutableArray  # noqa: PLC0415

        return ImmutableArray(self)

    def to_mutable(self) -> MutableArray:
        from kvarray.mutable import MutableArray  # noqa: PLC0415

        return MutableArray(self)

    # Operations

    def reindex(self) -> Self:
        """Reassign keys 0..n-1 in current order."""
        return self._apply(ops.reindex(self._elements))

    def flip(self) -> Self:
        """Exchange keys with their values.

        Raises:
            InvalidKeyError: If a value is not a non-negative int or a string.
        """
        return self._apply(ops.flip(self._elements))

    def reverse(self, preserve_keys: bool = False) -> Self:
        """Reverse order; integer keys are renumbered unless ``preserve_keys``."""
        return self._apply(ops.reverse(self._elements, preserve_keys))

    def pad(self, size: int, value: Value) -> Self:
        """Pad to ``abs(size)`` entries with ``value``, at the front for negative sizes."""
        return self._apply(ops.pad(self._elements, size, value))

    def slice(self, offset: int, length: int | None = None, preserve_keys: bool = False) -> Self:
        """Extract a run of entries (negative offset/length count from the end)."""
        return self._apply(ops.slice_range(self._elements, offset, length, preserve_keys))

    def chunk(self, size: int, preserve_keys: bool = False) -> Self:
        """Split into dicts of at most ``size`` entries.

        Raises:
            InvalidArgumentError: If ``size`` is less than 1.
        """
        return self._apply(ops.chunk(self._elements, size, preserve_keys))

    def unique(self, strategy: Strategy | str = Strategy.STRING) -> Self:
        """Remove repeated values, keeping the first occurrence and its key."""
        return self._apply(ops.unique(self._elements, strategy))

    def merge_with(self, other: Source, recursive: bool = False) -> Self:
        """Merge ``other`` onto this collection (``other`` wins on string keys)."""
        return self._apply(ops.merge(self._elements, to_elements(other), recursive))

    def merge_to(self, other: Source, recursive: bool = False) -> Self:
        """Merge this collection onto ``other`` (this collection wins on string keys)."""
        return self._apply(ops.merge(to_elements(other), self._elements, recursive))

    def replace_with(self, other: Source, recursive: bool = False) -> Self:
        """Overwrite entries with those of ``other``, integer keys included."""
        return self._apply(ops.replace(self._elements, to_elements(other), recursive))

    def replace_in(self, other: Source, recursive: bool = False) -> Self:
        """Overwrite entries of ``other`` with this collection's entries."""
        return self._apply(ops.replace(to_elements(other), self._elements, recursive))

    def combine_with(self, other: Source) -> Self:
        """Use this collection's values as keys for ``other``'s values."""
        return self._apply(ops.combine(self._elements, to_elements(other)))

    def combine_to(self, other: Source) -> Self:
        """Use ``other``'s values as keys for this collection's values."""
        return self._apply(ops.combine(to_elements(other), self._elements))

    def diff_with(self, other: Source) -> Self:
        """Keep entries whose value (as a string) is absent from ``other``."""
        return self._apply(ops.diff(self._elements, to_elements(other)))

    def shuffle(self, rng: random.Random | None = None) -> Self:
        """Randomly reorder values and reindex."""
        return self._apply(ops.shuffle(self._elements, rng))

    def sort(
        self,
        order: SortOrder | str = SortOrder.ASC,
        strategy: Strategy | str = Strategy.REGULAR,
        preserve_keys: bool = False,
    ) -> Self:
        """Sort by value.

        Args:
            order: Ascending or descending.
            strategy: Comparison semantics, see ``Strategy``.
            preserve_keys: Keep each value's key instead of reindexing 0..n-1.
        """
        return self._apply(ops.sort_values(self._elements, order, strategy, preserve_keys))

    def sort_keys(
        self,
        order: SortOrder | str = SortOrder.ASC,
        strategy: Strategy | str = Strategy.REGULAR,
    ) -> Self:
        """Sort by key; keys are never reindexed."""
        return self._apply(ops.sort_keys(self._elements, order, strategy))

    def map(self, fn: Callable[[Value], Any]) -> Self:
        return self._apply(ops.map_values(self._elements, fn))

    def filter(self, fn: Callable[[Value], Any] | None = None) -> Self:
        """Keep entries where ``fn(value)`` is truthy (the value itself if no ``fn``)."""
        return self._apply(ops.filter_values(self._elements, fn))

    def walk(self, fn: Callable[[Value, Key], Any], recursive: bool = False) -> Self:
        """Call ``fn(value, key)`` on every entry (leaves only when ``recursive``)."""
        return self._apply(ops.walk(self._elements, fn, recursive))

    def custom_sort(self, fn: Callable[[Value, Value], int]) -> Self:
        """Sort values with a three-way comparator and reindex."""
        return self._apply(ops.custom_sort_values(self._elements, fn))

    def custom_sort_keys(self, fn: Callable[[Key, Key], int]) -> Self:
        """Sort keys with a three-way comparator."""
        return self._apply(ops.custom_sort_keys(self._elements, fn))

    def clear(self) -> Self:
        return self._apply(ops.clear(self._elements))
