"""Hypothesis strategies for msgformat tests.

Provides generators for numbers, locale codes and well-formed message trees.
"""

from __future__ import annotations

from decimal import Decimal

from hypothesis import strategies as st

from msgformat import (
    ArgumentRef,
    Literal,
    Message,
    Placeholder,
    PluralSelect,
    Select,
)

# Locales spanning the CLDR plural families
LOCALE_CODES = st.sampled_from([
    "en", "en_US", "en-GB",
    "lv", "lv_LV",
    "de", "de_DE",
    "pl", "pl_PL",
    "ru", "ru_RU",
    "ar", "ar_SA",
    "fr", "fr_FR",
    "ja", "ja_JP",
    "cy", "ga", "sl",
    "xx_UNKNOWN",
])

INTEGERS = st.integers(min_value=-10**12, max_value=10**12)

DECIMALS = st.decimals(
    min_value=Decimal("-1000000"), max_value=Decimal("1000000"),
    allow_nan=False, allow_infinity=False, places=3,
)

FINITE_FLOATS = st.floats(
    min_value=-1e9, max_value=1e9, allow_nan=False, allow_infinity=False
)

# Includes NaN and infinities: classification must stay total
ANY_NUMBER = st.one_of(
    INTEGERS,
    DECIMALS,
    st.floats(allow_nan=True, allow_infinity=True),
    st.sampled_from([Decimal("NaN"), Decimal("Infinity"), Decimal("-Infinity")]),
)

ARGUMENT_NAMES = st.sampled_from(["name", "count", "gender", "place", "n"])

SAFE_TEXT = st.text(
    alphabet=st.characters(blacklist_categories=("Cs",)), max_size=20
)


def _branch(children: st.SearchStrategy[Message]) -> st.SearchStrategy[Message]:
    plural = st.builds(
        lambda key, one, other, offset: Message.of(
            PluralSelect.create(key, one=one, other=other, offset=offset)
        ),
        ARGUMENT_NAMES,
        children,
        children,
        st.integers(min_value=0, max_value=2),
    )
    select = st.builds(
        lambda key, a, other: Message.of(Select.create(key, a=a, other=other)),
        ARGUMENT_NAMES,
        children,
        children,
    )
    concat = st.lists(children, max_size=3).map(
        lambda messages: Message(tuple(part for m in messages for part in m.parts))
    )
    return st.one_of(plural, select, concat)


LEAF_MESSAGES = st.one_of(
    SAFE_TEXT.map(lambda text: Message.of(Literal(text))),
    ARGUMENT_NAMES.map(lambda key: Message.of(ArgumentRef(key))),
    st.just(Message.of(Placeholder())),
)

MESSAGES = st.recursive(LEAF_MESSAGES, _branch, max_leaves=12)

ARGUMENT_VALUES = st.one_of(
    INTEGERS, FINITE_FLOATS, DECIMALS, SAFE_TEXT, st.none(), st.booleans()
)

ARGUMENT_MAPS = st.dictionaries(ARGUMENT_NAMES, ARGUMENT_VALUES, max_size=5)
