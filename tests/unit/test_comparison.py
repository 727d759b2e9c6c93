"""Tests for strategy comparators."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from fractions import Fraction

import pytest

from kvarray._internal.comparison import (
    compare_natural,
    compare_numeric,
    compare_regular,
    compare_string,
    compare_string_case_insensitive,
    get_comparator,
    natural_key,
    to_number,
    to_string,
)
from kvarray.errors import InvalidArgumentError
from kvarray.types import Strategy


class TestConversions:
    """Tests for value conversions."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (3, 3),
            (2.5, 2.5),
            (True, True),
            (" 42 ", 42),
            ("1e3", 1000.0),
            ("abc", 0),
            (None, 0),
            ([1], 0),
            (Decimal("5.5"), Decimal("5.5")),
            (Fraction(1, 3), Fraction(1, 3)),
            ("nan", 0),
            ("inf", 0),
            ("-Infinity", 0),
            ("1e400", 0),
            ("1_000", 0),
            (float("nan"), 0),
            (Decimal("NaN"), 0),
        ],
    )
    def test_to_number(self, value: object, expected: object) -> None:
        """Numbers pass through, numeric strings parse, the rest is zero."""
        assert to_number(value) == expected

    def test_to_string_none_is_empty(self) -> None:
        """None has an empty string form."""
        assert to_string(None) == ""
        assert to_string(12) == "12"

    def test_natural_key_splits_digit_runs(self) -> None:
        """Digit runs become integers."""
        assert natural_key("file10b") == ((1, "file"), (0, 10), (1, "b"))


class TestComparators:
    """Tests for the three-way comparators."""

    def test_regular_ranks_types(self) -> None:
        """None < numbers < strings < other values."""
        assert compare_regular(None, 0) < 0
        assert compare_regular(10, "1") < 0
        assert compare_regular("z", [0]) < 0
        assert compare_regular(None, None) == 0

    def test_regular_numbers_mix(self) -> None:
        """Ints and floats compare numerically."""
        assert compare_regular(1, 1.0) == 0
        assert compare_regular(2, 1.5) > 0

    def test_regular_exact_numbers_are_numbers(self) -> None:
        """Decimals and fractions rank with numbers and compare by value."""
        assert compare_regular(Decimal("10"), Decimal("9")) > 0
        assert compare_regular(Decimal("2.5"), 3) < 0
        assert compare_regular(Fraction(1, 2), 0.25) > 0
        assert compare_regular(Decimal("1"), "0") < 0

    def test_regular_nan_compares_as_zero(self) -> None:
        """NaN does not break the ordering of numbers."""
        assert compare_regular(float("nan"), 0) == 0
        assert compare_regular(Decimal("NaN"), 1) < 0

    def test_regular_uses_native_order_within_a_type(self) -> None:
        """Same-type values Python can order compare natively."""
        assert compare_regular(date(2025, 10, 1), date(2025, 9, 1)) > 0
        assert compare_regular((1, 9), (1, 10)) < 0

    def test_regular_unorderable_values_fall_back_to_repr(self) -> None:
        """Same-type values without an ordering compare by repr."""
        assert compare_regular((1, "a"), ("a", 1)) > 0
        assert compare_regular(("a", 1), (1, "a")) < 0

    def test_regular_groups_other_types_by_name(self) -> None:
        """Values of different non-scalar types order by type name."""
        assert compare_regular(date(2030, 1, 1), [0]) < 0
        assert compare_regular((0,), [9]) > 0

    def test_numeric_orders_decimals(self) -> None:
        """Decimals keep their value under the numeric strategy."""
        assert compare_numeric(Decimal("10"), Decimal("9")) > 0
        assert compare_numeric(Decimal("1"), Decimal("2")) < 0

    def test_numeric_rejects_special_strings(self) -> None:
        """Non-finite and underscored strings count as zero."""
        assert compare_numeric("nan", "0") == 0
        assert compare_numeric("inf", "1") < 0
        assert compare_numeric("1_000", "999") < 0

    def test_numeric_vs_string(self) -> None:
        """Numeric and string strategies disagree on digit strings."""
        assert compare_numeric("10", "9") > 0
        assert compare_string("10", "9") < 0

    def test_case_insensitive(self) -> None:
        """Case is ignored."""
        assert compare_string_case_insensitive("Apple", "apple") == 0
        assert compare_string_case_insensitive("apple", "Banana") < 0

    def test_natural(self) -> None:
        """Embedded numbers compare by value."""
        assert compare_natural("img2", "img10") < 0
        assert compare_natural("a", "a1") < 0

    def test_locale_comparator_is_consistent(self) -> None:
        """Locale comparison agrees with itself under the current collation."""
        compare = get_comparator(Strategy.LOCALE)
        assert compare("abc", "abc") == 0
        assert compare("abc", "abd") == -compare("abd", "abc")

    def test_get_comparator_accepts_values(self) -> None:
        """Strategies may be given by their string value."""
        assert get_comparator("natural") is compare_natural

    def test_get_comparator_rejects_unknown(self) -> None:
        """Unknown strategies raise an argument error."""
        with pytest.raises(InvalidArgumentError, match="Unknown comparison strategy"):
            get_comparator("fuzzy")
