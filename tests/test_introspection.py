"""Tests for message introspection and argument extraction."""

from __future__ import annotations

import pytest

from msgformat import (
    ArgumentContext,
    ArgumentRef,
    DepthLimitExceededError,
    Message,
    Placeholder,
    PluralSelect,
    Select,
)
from msgformat.introspection import (
    ArgumentInfo,
    clear_introspection_cache,
    extract_arguments,
    introspect_message,
)

INVITE = Message.of(
    Select.create(
        "gender",
        female=Message.of(ArgumentRef("host"), " invites her friends"),
        other=Message.of(ArgumentRef("host"), " invites their friends"),
    ),
    " (",
    PluralSelect.create(
        "guests",
        one=Message.of(Placeholder(), " guest"),
        other=Message.of(Placeholder(), " guests"),
    ),
    ")",
)


class TestIntrospectMessage:
    """introspect_message results."""

    def test_argument_keys(self) -> None:
        """Every referenced key is reported once."""
        info = introspect_message(INVITE)
        assert info.get_argument_keys() == frozenset({"gender", "host", "guests"})

    def test_argument_contexts(self) -> None:
        """Keys are grouped by the role they play."""
        info = introspect_message(INVITE)
        assert info.keys_in_context(ArgumentContext.SELECT) == frozenset({"gender"})
        assert info.keys_in_context(ArgumentContext.PLURAL) == frozenset({"guests"})
        assert info.keys_in_context(ArgumentContext.PATTERN) == frozenset({"host"})

    def test_same_key_in_two_roles(self) -> None:
        """A key used as plural discriminant and as text appears in both roles."""
        message = Message.of(PluralSelect.create("n", other=Message.of(ArgumentRef("n"))))
        info = introspect_message(message)
        assert info.arguments == frozenset({
            ArgumentInfo("n", ArgumentContext.PLURAL),
            ArgumentInfo("n", ArgumentContext.PATTERN),
        })

    def test_flags_and_depth(self) -> None:
        """Selectors, placeholders and nesting depth are summarized."""
        info = introspect_message(INVITE)
        assert info.has_selectors
        assert info.has_placeholders
        assert info.max_depth == 1

    def test_flat_message(self) -> None:
        """A flat message has no selectors and depth 0."""
        info = introspect_message(Message.of("Hi ", ArgumentRef(0)))
        assert not info.has_selectors
        assert not info.has_placeholders
        assert info.max_depth == 0
        assert info.requires_argument(0)
        assert not info.requires_argument("name")

    def test_nested_depth(self) -> None:
        """Depth counts nested selector levels."""
        inner = Select.create("b", other=Message.of(PluralSelect.create("c", other="x")))
        message = Message.of(Select.create("a", other=Message.of(inner)))
        assert introspect_message(message).max_depth == 3

    def test_exact_branches_visited(self) -> None:
        """Arguments inside exact branches are found."""
        message = Message.of(
            PluralSelect.create("n", exact={0: Message.of(ArgumentRef("empty"))}, other="x")
        )
        assert "empty" in extract_arguments(message)

    def test_rejects_non_message(self) -> None:
        """Only Message objects are accepted."""
        with pytest.raises(TypeError, match="Expected Message"):
            introspect_message("Hello")  # type: ignore[arg-type]

    def test_too_deep_raises(self) -> None:
        """Trees beyond the depth limit raise instead of overflowing."""
        message = Message.text("x")
        for _ in range(150):
            message = Message.of(Select.create("k", other=message))
        with pytest.raises(DepthLimitExceededError):
            introspect_message(message, use_cache=False)


class TestIntrospectionCache:
    """Weak per-message cache."""

    def test_cached_result_reused(self) -> None:
        """Repeated introspection returns the same object."""
        clear_introspection_cache()
        first = introspect_message(INVITE)
        assert introspect_message(INVITE) is first

    def test_cache_bypass(self) -> None:
        """use_cache=False computes a fresh, equal result."""
        first = introspect_message(INVITE)
        fresh = introspect_message(INVITE, use_cache=False)
        assert fresh is not first
        assert fresh == first

    def test_clear(self) -> None:
        """clear_introspection_cache drops entries."""
        first = introspect_message(INVITE)
        clear_introspection_cache()
        assert introspect_message(INVITE) is not first
