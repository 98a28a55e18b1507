"""CLDR plural classification with a per-locale classifier registry.

A classifier is a pure function mapping a number to a PluralCategory.
Classifiers are registered per (locale, plural type) and looked up once per
Context construction. Adding a locale never touches another locale's rules
or the lookup mechanism.

Lookup order for a locale code:
    1. Classifier registered for the exact normalized locale (pt_BR)
    2. Classifier registered for a shorter prefix (sr_Latn, then sr)
    3. Babel's CLDR plural rules for the locale (when use_cldr is enabled)
    4. The fallback locale's classifier (English), flagged as a fallback

Python 3.13+. Depends on Babel for CLDR data and plural operands.

Reference: https://www.unicode.org/cldr/charts/47/supplemental/language_plural_rules.html
"""

from __future__ import annotations

import functools
import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from decimal import Decimal
from typing import TYPE_CHECKING, TypeAlias, Literal

from babel.core import UnknownLocaleError as BabelUnknownLocaleError
from babel.plural import extract_operands

from msgformat.constants import DEFAULT_LOCALE, MAX_LOCALE_CACHE_SIZE
from msgformat.diagnostics import Diagnostic, ErrorTemplate
from msgformat.enums import PluralCategory, PluralType
from msgformat.locale_utils import base_language, get_babel_locale, normalize_locale

if TYPE_CHECKING:
    from babel.plural import PluralRule

__all__ = [
    "CldrClassifier",
    "PluralClassifier",
    "PluralNumber",
    "PluralRuleRegistry",
    "ResolvedClassifier",
    "categories_for",
    "checked_classify",
    "classify",
    "cldr_classifier",
    "create_default_registry",
    "english_cardinal_classifier",
    "english_ordinal_classifier",
    "get_shared_registry",
    "safe_classify",
]

logger = logging.getLogger(__name__)

PluralNumber: TypeAlias = "int | float | Decimal"
PluralClassifier: TypeAlias = "Callable[[PluralNumber], PluralCategory | str]"


# ============================================================================
# BUILT-IN CLASSIFIERS
# ============================================================================


def english_cardinal_classifier(value: PluralNumber) -> PluralCategory:
    """English cardinal rule: ``one: i = 1 and v = 0``.

    Operands follow CLDR: i is the integer digits of |n|, v the number of
    visible fraction digits. Floats carry no trailing zeros, so 1.0 counts
    as 1 while Decimal("1.0") has one visible fraction digit.

    Examples:
        >>> english_cardinal_classifier(1)
        <PluralCategory.ONE: 'one'>
        >>> english_cardinal_classifier(-1)
        <PluralCategory.ONE: 'one'>
        >>> english_cardinal_classifier(0)
        <PluralCategory.OTHER: 'other'>
        >>> english_cardinal_classifier(Decimal("1.0"))
        <PluralCategory.OTHER: 'other'>
    """
    operands = extract_operands(value)
    integer_digits, visible_fraction_digits = operands[1], operands[2]
    if integer_digits == 1 and visible_fraction_digits == 0:
        return PluralCategory.ONE
    return PluralCategory.OTHER


def english_ordinal_classifier(value: PluralNumber) -> PluralCategory:
    """English ordinal rule (1st, 2nd, 3rd, 4th, 11th, 12th, 13th, 21st).

    one: n % 10 = 1 and n % 100 != 11
    two: n % 10 = 2 and n % 100 != 12
    few: n % 10 = 3 and n % 100 != 13
    """
    n = extract_operands(value)[0]
    ones, hundreds = n % 10, n % 100
    if ones == 1 and hundreds != 11:
        return PluralCategory.ONE
    if ones == 2 and hundreds != 12:
        return PluralCategory.TWO
    if ones == 3 and hundreds != 13:
        return PluralCategory.FEW
    return PluralCategory.OTHER


_BUILTIN_CATEGORIES: dict[Callable[..., object], frozenset[PluralCategory]] = {
    english_cardinal_classifier: frozenset({PluralCategory.ONE, PluralCategory.OTHER}),
    english_ordinal_classifier: frozenset(
        {PluralCategory.ONE, PluralCategory.TWO, PluralCategory.FEW, PluralCategory.OTHER}
    ),
}


@dataclass(frozen=True, slots=True)
class CldrClassifier:
    """Classifier backed by Babel's CLDR plural rule for one locale.

    Attributes:
        locale_code: Normalized locale the rule was loaded for
        plural_type: Cardinal or ordinal rule set
        rule: Babel PluralRule (callable returning a category string)
    """

    locale_code: str
    plural_type: PluralType
    rule: PluralRule = field(repr=False, compare=False)

    def __call__(self, value: PluralNumber) -> PluralCategory:
        """Classify value with the CLDR rule."""
        return PluralCategory(self.rule(value))

    @property
    def categories(self) -> frozenset[PluralCategory]:
        """Categories this rule can produce (always includes OTHER)."""
        return frozenset(PluralCategory(tag) for tag in self.rule.tags) | {PluralCategory.OTHER}


@functools.lru_cache(maxsize=MAX_LOCALE_CACHE_SIZE)
def cldr_classifier(locale_code: str, plural_type: PluralType = PluralType.CARDINAL) -> CldrClassifier:
    """Load the CLDR classifier for a locale from Babel.

    Args:
        locale_code: BCP-47 or POSIX locale code
        plural_type: Cardinal or ordinal rules

    Returns:
        CldrClassifier for the locale

    Raises:
        babel.core.UnknownLocaleError: If Babel has no data for the locale
        ValueError: If the locale code is malformed

    Examples:
        >>> cldr_classifier("pl")(2)
        <PluralCategory.FEW: 'few'>
        >>> cldr_classifier("lv")(0)
        <PluralCategory.ZERO: 'zero'>
    """
    locale = get_babel_locale(locale_code)
    rule = locale.ordinal_form if plural_type is PluralType.ORDINAL else locale.plural_form
    return CldrClassifier(
        locale_code=normalize_locale(locale_code), plural_type=PluralType(plural_type), rule=rule
    )


def safe_classify(classifier: PluralClassifier, value: PluralNumber) -> PluralCategory:
    """Run a classifier and guarantee exactly one category.

    Classification is total: values a rule cannot handle (NaN, infinity)
    and classifiers that return an unknown category string all map to OTHER.
    Classifiers may return either PluralCategory members or their string
    values.

    Args:
        classifier: Classifier to run
        value: Number to classify

    Returns:
        Plural category for value
    """
    category, _diagnostic = checked_classify(classifier, value)
    return category


def checked_classify(
    classifier: PluralClassifier, value: PluralNumber, locale_code: str | None = None
) -> tuple[PluralCategory, Diagnostic | None]:
    """Like safe_classify(), but also report a classifier that misbehaved.

    An unknown category string still maps to OTHER, and the returned
    INVALID_PLURAL_CATEGORY diagnostic lets formatting collect it. Values a
    rule cannot handle (NaN, infinity) are not errors and return None.

    Returns:
        Tuple of (category, diagnostic or None)
    """
    try:
        result = classifier(value)
    except (ArithmeticError, ValueError, TypeError) as e:
        logger.debug("Classifier could not handle %r (%s); using 'other'", value, e)
        return PluralCategory.OTHER, None
    try:
        return PluralCategory(result), None
    except ValueError:
        logger.warning("Classifier returned invalid plural category %r; using 'other'", result)
        return PluralCategory.OTHER, ErrorTemplate.invalid_plural_category(result, locale_code)


def categories_for(classifier: PluralClassifier) -> frozenset[PluralCategory] | None:
    """Return the categories a classifier can produce, if known.

    Known for built-in English rules and CLDR classifiers; None for
    caller-registered functions.
    """
    if isinstance(classifier, CldrClassifier):
        return classifier.categories
    try:
        return _BUILTIN_CATEGORIES.get(classifier)
    except TypeError:  # unhashable callable object
        return None


# ============================================================================
# REGISTRY
# ============================================================================


@dataclass(frozen=True, slots=True)
class ResolvedClassifier:
    """Outcome of a registry lookup.

    Attributes:
        classifier: Classifier to use for the locale
        locale_key: Registry key or CLDR locale that matched
        source: Where the classifier came from
    """

    classifier: PluralClassifier
    locale_key: str
    source: Literal["registered", "cldr", "fallback"]

    @property
    def is_fallback(self) -> bool:
        """True when the locale had no rules of its own."""
        return self.source == "fallback"


class PluralRuleRegistry:
    """Mapping from (locale, plural type) to classifier.

    Populated at start-up and read-only afterwards in typical use. Register
    and lookup are guarded by a lock so late registration from another
    thread is still safe.

    Examples:
        >>> registry = create_default_registry(use_cldr=False)
        >>> registry.resolve("en-GB").locale_key
        'en'
        >>> registry.register("xx", lambda n: "one" if n == 1 else "other")
        >>> registry.classify("xx", 1)
        <PluralCategory.ONE: 'one'>
    """

    __slots__ = ("_classifiers", "_fallback_locale", "_lock", "_use_cldr")

    def __init__(self, *, use_cldr: bool = True, fallback_locale: str = DEFAULT_LOCALE) -> None:
        """Initialize an empty registry.

        Args:
            use_cldr: Consult Babel's CLDR data for unregistered locales
            fallback_locale: Locale whose classifier serves unknown locales
        """
        self._classifiers: dict[tuple[str, PluralType], PluralClassifier] = {}
        self._lock = threading.RLock()
        self._use_cldr = use_cldr
        self._fallback_locale = normalize_locale(fallback_locale)

    @property
    def use_cldr(self) -> bool:
        """Whether Babel CLDR data backs unregistered locales."""
        return self._use_cldr

    @property
    def fallback_locale(self) -> str:
        """Locale whose rules serve unknown locales."""
        return self._fallback_locale

    def register(
        self,
        locale_code: str,
        classifier: PluralClassifier,
        *,
        plural_type: PluralType = PluralType.CARDINAL,
    ) -> None:
        """Register a classifier for a locale.

        Replaces any classifier previously registered under the same key.

        Args:
            locale_code: BCP-47 or POSIX locale code ("de", "pt-BR")
            classifier: Callable mapping a number to a plural category
            plural_type: Cardinal (default) or ordinal

        Raises:
            ValueError: If locale_code is empty
            TypeError: If classifier is not callable
        """
        key = normalize_locale(locale_code)
        if not key:
            msg = "Locale code cannot be empty"
            raise ValueError(msg)
        if not callable(classifier):
            msg = f"Classifier for '{locale_code}' must be callable, got {type(classifier).__name__}"
            raise TypeError(msg)
        with self._lock:
            self._classifiers[(key, PluralType(plural_type))] = classifier
        logger.debug("Registered %s classifier for locale: %s", plural_type, key)

    def resolve(
        self, locale_code: str, plural_type: PluralType = PluralType.CARDINAL
    ) -> ResolvedClassifier:
        """Find the classifier for a locale. Never fails.

        Args:
            locale_code: BCP-47 or POSIX locale code
            plural_type: Cardinal (default) or ordinal

        Returns:
            ResolvedClassifier; is_fallback is True when the locale is unknown
        """
        plural_type = PluralType(plural_type)
        key = normalize_locale(locale_code)

        with self._lock:
            for candidate in self._candidates(key):
                registered = self._classifiers.get((candidate, plural_type))
                if registered is not None:
                    return ResolvedClassifier(registered, candidate, "registered")

        if self._use_cldr and key:
            for candidate in dict.fromkeys((key, base_language(key))):
                try:
                    return ResolvedClassifier(
                        cldr_classifier(candidate, plural_type), candidate, "cldr"
                    )
                except (BabelUnknownLocaleError, ValueError):
                    continue

        return ResolvedClassifier(self._fallback_classifier(plural_type), self._fallback_locale, "fallback")

    def classify(
        self,
        locale_code: str,
        value: PluralNumber,
        *,
        plural_type: PluralType = PluralType.CARDINAL,
    ) -> PluralCategory:
        """Classify value under the rules for locale_code."""
        return safe_classify(self.resolve(locale_code, plural_type).classifier, value)

    def registered_locales(
        self, plural_type: PluralType = PluralType.CARDINAL
    ) -> frozenset[str]:
        """Return the locale keys with an explicitly registered classifier."""
        with self._lock:
            return frozenset(key for key, kind in self._classifiers if kind == plural_type)

    def copy(self) -> PluralRuleRegistry:
        """Create an independent registry with the same classifiers."""
        clone = PluralRuleRegistry(use_cldr=self._use_cldr, fallback_locale=self._fallback_locale)
        with self._lock:
            clone._classifiers = dict(self._classifiers)
        return clone

    def __len__(self) -> int:
        """Number of registered (locale, plural type) entries."""
        with self._lock:
            return len(self._classifiers)

    @staticmethod
    def _candidates(key: str) -> list[str]:
        # sr_Latn_RS -> sr_Latn_RS, sr_Latn, sr
        subtags = key.split("_") if key else []
        return ["_".join(subtags[:end]) for end in range(len(subtags), 0, -1)]

    def _fallback_classifier(self, plural_type: PluralType) -> PluralClassifier:
        with self._lock:
            registered = self._classifiers.get((self._fallback_locale, plural_type))
        if registered is not None:
            return registered
        if plural_type is PluralType.ORDINAL:
            return english_ordinal_classifier
        return english_cardinal_classifier


def create_default_registry(*, use_cldr: bool = True) -> PluralRuleRegistry:
    """Create a registry with the built-in English cardinal and ordinal rules.

    Args:
        use_cldr: Back unregistered locales with Babel's CLDR data

    Returns:
        New PluralRuleRegistry
    """
    registry = PluralRuleRegistry(use_cldr=use_cldr)
    registry.register("en", english_cardinal_classifier)
    registry.register("en", english_ordinal_classifier, plural_type=PluralType.ORDINAL)
    return registry


_shared_registry: PluralRuleRegistry | None = None
_shared_registry_lock = threading.Lock()


def get_shared_registry() -> PluralRuleRegistry:
    """Return the process-wide default registry, creating it on first use.

    Classifiers registered here are visible to every Context created
    without an explicit registry.
    """
    global _shared_registry  # noqa: PLW0603 - lazily built process-wide singleton
    if _shared_registry is None:
        with _shared_registry_lock:
            if _shared_registry is None:
                _shared_registry = create_default_registry()
    return _shared_registry


def classify(
    locale_code: str,
    value: PluralNumber,
    *,
    plural_type: PluralType = PluralType.CARDINAL,
) -> PluralCategory:
    """Select the plural category of value for a locale.

    Total and pure: unknown locales use the English fallback rules, and
    values no rule can handle select OTHER.

    Args:
        locale_code: Locale code (e.g., "lv_LV", "en-US", "ar")
        value: Number to categorize
        plural_type: Cardinal (default) or ordinal

    Returns:
        Plural category

    Examples:
        >>> classify("en", 1)
        <PluralCategory.ONE: 'one'>
        >>> classify("ru", 5)
        <PluralCategory.MANY: 'many'>
        >>> classify("en", 22, plural_type=PluralType.ORDINAL)
        <PluralCategory.TWO: 'two'>
    """
    return get_shared_registry().classify(locale_code, value, plural_type=plural_type)
