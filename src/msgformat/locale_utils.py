"""Locale code handling shared by plural rules and Context.

Callers write "en-US", "en_US" or "EN-us"; registry keys, classifier caches
and Babel lookups all go through normalize_locale() so they agree.

Python 3.13+.
"""

from __future__ import annotations

import functools
from typing import TYPE_CHECKING

from msgformat.constants import MAX_LOCALE_CACHE_SIZE

if TYPE_CHECKING:
    from babel import Locale

__all__ = [
    "base_language",
    "get_babel_locale",
    "normalize_locale",
]


def normalize_locale(locale_code: str) -> str:
    """Convert BCP-47 locale code to POSIX format for Babel.

    BCP-47 uses hyphens (en-US), while Babel/POSIX uses underscores (en_US).
    The language subtag is lowercased and a two-letter region subtag is
    uppercased so that "EN-us", "en_US" and "en-US" share one registry key.
    Encoding suffixes ("de_DE.UTF-8") are stripped.

    Args:
        locale_code: BCP-47 or POSIX locale code

    Returns:
        POSIX-formatted locale code (e.g., "en_US", "pt_BR")

    Example:
        >>> normalize_locale("en-US")
        'en_US'
        >>> normalize_locale("PT-br")
        'pt_BR'
        >>> normalize_locale("sr-Latn-RS")
        'sr_Latn_RS'
    """
    code = locale_code.split(".", 1)[0].strip().replace("-", "_")
    subtags = [tag for tag in code.split("_") if tag]
    if not subtags:
        return ""
    normalized = [subtags[0].lower()]
    for tag in subtags[1:]:
        if len(tag) == 2 and tag.isalpha():
            normalized.append(tag.upper())
        elif len(tag) == 4 and tag.isalpha():
            normalized.append(tag.title())
        else:
            normalized.append(tag)
    return "_".join(normalized)


def base_language(locale_code: str) -> str:
    """Return the language subtag of a locale code.

    Example:
        >>> base_language("pt-BR")
        'pt'
    """
    return normalize_locale(locale_code).split("_", 1)[0]


@functools.lru_cache(maxsize=MAX_LOCALE_CACHE_SIZE)
def get_babel_locale(locale_code: str) -> Locale:
    """Babel Locale for a BCP-47 or POSIX code, parsed once per code.

    Both CLDR plural classifiers and Context number/date formatting load
    their locale through here.

    Raises:
        babel.core.UnknownLocaleError: If Babel has no data for the locale
        ValueError: If the code is malformed
    """
    from babel import Locale  # noqa: PLC0415 - keeps CLDR loading off the import path

    return Locale.parse(normalize_locale(locale_code))
