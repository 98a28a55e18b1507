"""Tests for runtime/args.py - immutable argument collections."""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from msgformat import Args, ValueKind, arg
from msgformat.runtime.value import Value


class TestConstruction:
    """Building Args from mappings, positions and chains."""

    def test_from_mapping(self) -> None:
        """Mapping values are wrapped with Value.of."""
        args = Args.from_mapping({"name": "Ada", "count": 3})
        assert args.get("name") == Value.of("Ada")
        assert args.get("count") is not None
        assert args.get("count").kind is ValueKind.INTEGER  # type: ignore[union-attr]

    def test_positional(self) -> None:
        """Positional values are keyed by index."""
        args = Args.positional("a", 3)
        assert list(args) == [0, 1]
        assert args.get(1) == Value.of(3)

    def test_empty(self) -> None:
        """No entries."""
        args = Args()
        assert len(args) == 0
        assert args.get("x") is None

    def test_chained_builder(self) -> None:
        """arg().arg() appends in order."""
        args = arg("name", "Jacob").arg("place", "the store")
        assert list(args) == ["name", "place"]
        assert args.get("place") == Value.of("the store")

    def test_chain_does_not_mutate_receiver(self) -> None:
        """Each .arg() returns a new Args."""
        base = arg("a", 1)
        extended = base.arg("b", 2)
        assert "b" not in base
        assert "b" in extended
        assert len(base) == 1

    def test_duplicate_key_rejected(self) -> None:
        """Keys are unique."""
        with pytest.raises(ValueError, match="Duplicate"):
            arg("a", 1).arg("a", 2)

    @pytest.mark.parametrize("key", [1.5, None, ("a",), True])
    def test_invalid_key_type(self, key: object) -> None:
        """Keys must be str or int (bool excluded)."""
        with pytest.raises(TypeError):
            Args({key: 1})  # type: ignore[dict-item]

    def test_negative_index_rejected(self) -> None:
        """Positional indices are non-negative."""
        with pytest.raises(ValueError, match=">= 0"):
            arg(-1, "x")


class TestCoerce:
    """Args.coerce accepts the forms format() accepts."""

    def test_args_passthrough(self) -> None:
        """Args instances are returned unchanged."""
        args = arg("a", 1)
        assert Args.coerce(args) is args

    def test_mapping(self) -> None:
        """Plain dicts are wrapped."""
        assert Args.coerce({"a": 1}) == arg("a", 1)

    def test_none(self) -> None:
        """None means no arguments."""
        assert len(Args.coerce(None)) == 0


class TestMappingBehaviour:
    """Read-only mapping protocol."""

    def test_items_preserve_order(self) -> None:
        """Insertion order is iteration order."""
        args = arg("z", 1).arg("a", 2)
        assert [key for key, _value in args.items()] == ["z", "a"]

    def test_equality(self) -> None:
        """Equal entries in equal order compare equal."""
        assert arg("a", 1).arg("b", 2) == Args({"a": 1, "b": 2})
        assert arg("a", 1) != arg("a", 2)

    def test_unhashable(self) -> None:
        """Args is a mapping-like value, not a hashable key."""
        with pytest.raises(TypeError):
            hash(arg("a", 1))

    def test_repr(self) -> None:
        """Repr shows raw values."""
        assert repr(arg("a", 1)) == "Args({'a': 1})"

    def test_no_item_assignment(self) -> None:
        """Args cannot be modified after construction."""
        args = arg("a", 1)
        with pytest.raises(TypeError):
            args._values["b"] = Value.of(2)  # type: ignore[index]

    @given(st.lists(st.text(max_size=5), unique=True, max_size=10))
    def test_chain_preserves_order(self, keys: list[str]) -> None:
        """Property: chaining keys in any order keeps that order."""
        args = Args()
        for index, key in enumerate(keys):
            args = args.arg(key, index)
        assert list(args) == keys
