"""Property-based tests using Hypothesis."""

from __future__ import annotations

from hypothesis import given
from hypothesis import strategies as st

from kvarray import ImmutableArray, MutableArray, SortOrder, Strategy

keys = st.one_of(
    st.integers(min_value=0, max_value=1000),
    st.text(min_size=1, max_size=8),
)
scalars = st.one_of(
    st.none(),
    st.booleans(),
    st.integers(min_value=-1000, max_value=1000),
    st.text(max_size=8),
)
elements = st.dictionaries(keys=keys, values=scalars, max_size=12)
string_keyed = st.dictionaries(
    keys=st.text(min_size=1, max_size=6),
    values=st.integers(min_value=-100, max_value=100),
    max_size=6,
)


class TestVariantInvariants:
    """Immutable results are fresh; mutable results are the receiver."""

    @given(data=elements)
    def test_immutable_source_unchanged(self, data: dict) -> None:
        """Operations never alter the immutable receiver."""
        source = ImmutableArray(data)
        before = list(source.items())
        source.reverse().sort(strategy=Strategy.STRING).pad(20, 0).slice(1).reindex()
        source.merge_with(data).unique().chunk(3)
        assert list(source.items()) == before

    @given(data=elements)
    def test_mutable_returns_self(self, data: dict) -> None:
        """Chained mutable operations return the same object."""
        target = MutableArray(data)
        assert target.reverse().sort(strategy=Strategy.STRING).reindex() is target
        assert list(target.keys()) == list(range(len(data)))

    @given(data=elements)
    def test_variants_agree(self, data: dict) -> None:
        """Both variants compute the same pairs."""
        frozen = ImmutableArray(data).sort(SortOrder.DESC, Strategy.NATURAL, True)
        live = MutableArray(data).sort(SortOrder.DESC, Strategy.NATURAL, True)
        assert list(frozen.items()) == list(live.items())


class TestAlgebraicProperties:
    """Round trips and idempotence."""

    @given(data=elements)
    def test_reindex_idempotent(self, data: dict) -> None:
        """reindex(reindex(X)) == reindex(X)."""
        once = ImmutableArray(data).reindex()
        assert once.reindex() == once

    @given(data=elements)
    def test_reverse_round_trip(self, data: dict) -> None:
        """Reversing twice with preserved keys restores X."""
        source = ImmutableArray(data)
        assert source.reverse(True).reverse(True) == source

    @given(data=st.lists(st.text(min_size=1, max_size=6), unique=True, max_size=10))
    def test_flip_involution(self, data: list[str]) -> None:
        """Flipping twice restores a collision-free collection."""
        source = ImmutableArray(data)
        assert source.flip().flip() == source

    @given(data=elements, strategy=st.sampled_from(list(Strategy)))
    def test_sort_keys_are_sequential(self, data: dict, strategy: Strategy) -> None:
        """Sorting without preserved keys yields keys 0..n-1."""
        result = ImmutableArray(data).sort(strategy=strategy)
        assert list(result.keys()) == list(range(len(data)))

    @given(data=elements)
    def test_slice_whole(self, data: dict) -> None:
        """slice(0, len(X)) with preserved keys is X."""
        source = ImmutableArray(data)
        assert source.slice(0, len(source), True) == source

    @given(data=st.dictionaries(keys=keys, values=scalars, min_size=1, max_size=12))
    def test_slice_last(self, data: dict) -> None:
        """slice(-1) is the last element only."""
        result = ImmutableArray(data).slice(-1)
        assert result.to_list() == [list(data.values())[-1]]

    @given(x=string_keyed, y=string_keyed, z=string_keyed)
    def test_string_keyed_merge_associative(self, x: dict, y: dict, z: dict) -> None:
        """Non-recursive merge is associative on string keys."""
        left = ImmutableArray(x).merge_with(y).merge_with(z)
        right = ImmutableArray(x).merge_with(ImmutableArray(y).merge_with(z))
        assert left == right

    @given(data=elements)
    def test_unique_has_no_string_duplicates(self, data: dict) -> None:
        """After unique() no two values share a string form."""
        result = ImmutableArray(data).unique()
        forms = ["" if v is None else str(v) for v in result.values()]
        assert len(forms) == len(set(forms))
        assert set(result.keys()) <= set(data.keys())
