"""Tests for locale code normalization and Babel locale loading."""

from __future__ import annotations

import pytest
from babel import Locale
from babel.core import UnknownLocaleError

from msgformat.locale_utils import base_language, get_babel_locale, normalize_locale


class TestNormalizeLocale:
    """BCP-47 to POSIX conversion."""

    @pytest.mark.parametrize(
        ("code", "expected"),
        [
            ("en-US", "en_US"),
            ("en_US", "en_US"),
            ("EN-us", "en_US"),
            ("pt-br", "pt_BR"),
            ("sr-latn-rs", "sr_Latn_RS"),
            ("de_DE.UTF-8", "de_DE"),
            ("es-419", "es_419"),
            ("lv", "lv"),
            ("", ""),
            ("  ", ""),
        ],
    )
    def test_normalize(self, code: str, expected: str) -> None:
        """Separators, casing and encodings are normalized."""
        assert normalize_locale(code) == expected

    @pytest.mark.parametrize(
        ("code", "expected"),
        [("pt-BR", "pt"), ("sr_Latn_RS", "sr"), ("EN", "en"), ("", "")],
    )
    def test_base_language(self, code: str, expected: str) -> None:
        """Language subtag only."""
        assert base_language(code) == expected


class TestGetBabelLocale:
    """Cached Babel locale loading."""

    def test_loads_locale(self) -> None:
        """BCP-47 codes are accepted."""
        locale = get_babel_locale("de-DE")
        assert isinstance(locale, Locale)
        assert locale.language == "de"
        assert locale.territory == "DE"

    def test_cached(self) -> None:
        """The same object is returned for the same code."""
        assert get_babel_locale("fr") is get_babel_locale("fr")

    def test_unknown_raises(self) -> None:
        """Babel's error propagates for unknown locales."""
        with pytest.raises((UnknownLocaleError, ValueError)):
            get_babel_locale("xx")
