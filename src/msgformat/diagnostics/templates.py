"""Diagnostic constructors for every error the formatter can report.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode

__all__ = ["ErrorTemplate"]


class ErrorTemplate:
    """One static constructor per diagnostic code.

    Resolver, Context, validation and DepthGuard build their diagnostics
    here, so wording and hints for a code live in one place and tests can
    compare against the same text.
    """

    @staticmethod
    def missing_argument(argument: str | int) -> Diagnostic:
        """Argument referenced by a part is absent from Args.

        Args:
            argument: Argument name or positional index

        Returns:
            Diagnostic for MISSING_ARGUMENT
        """
        msg = f"Argument '{argument}' not provided"
        return Diagnostic(
            code=DiagnosticCode.MISSING_ARGUMENT,
            message=msg,
            hint=f"Pass '{argument}' when building Args",
            argument_name=str(argument),
        )

    @staticmethod
    def type_mismatch(argument: str | int | None, expected: str, received: str) -> Diagnostic:
        """Argument holds a value of the wrong kind.

        Args:
            argument: Argument name or index (None when raised by a bare Value)
            expected: Kind the consumer needed (e.g. "number")
            received: Kind actually stored (e.g. "string")

        Returns:
            Diagnostic for TYPE_MISMATCH
        """
        subject = "Value" if argument is None else f"Argument '{argument}'"
        msg = f"{subject} is {received}, expected {expected}"
        return Diagnostic(
            code=DiagnosticCode.TYPE_MISMATCH,
            message=msg,
            hint=f"Pass a {expected} value" if argument is None
            else f"Pass a {expected} value for '{argument}'",
            argument_name=None if argument is None else str(argument),
            expected_type=expected,
            received_type=received,
        )

    @staticmethod
    def unknown_locale(locale_code: str, fallback: str) -> Diagnostic:
        """Locale has no plural rules or CLDR data; fallback used.

        Args:
            locale_code: Locale requested by the caller
            fallback: Locale whose rules are used instead

        Returns:
            Warning diagnostic for UNKNOWN_LOCALE
        """
        msg = f"Unknown locale '{locale_code}', using '{fallback}' rules"
        return Diagnostic(
            code=DiagnosticCode.UNKNOWN_LOCALE,
            message=msg,
            hint="Register a classifier for this locale or check the locale code",
            locale_code=locale_code,
            severity="warning",
        )

    @staticmethod
    def no_matching_branch(argument: str | int, discriminant: str, kind: str) -> Diagnostic:
        """Select/plural has no branch for the discriminant and no 'other'.

        Args:
            argument: Selector argument name or index
            discriminant: Computed category or select key
            kind: "plural", "selectordinal" or "select"

        Returns:
            Diagnostic for NO_MATCHING_BRANCH
        """
        msg = f"No {kind} branch for '{discriminant}' on argument '{argument}'"
        return Diagnostic(
            code=DiagnosticCode.NO_MATCHING_BRANCH,
            message=msg,
            hint="Every plural and select must define an 'other' branch",
            argument_name=str(argument),
        )

    @staticmethod
    def formatting_failed(kind: str, value: object, reason: str) -> Diagnostic:
        """Locale-aware formatting failed.

        Args:
            kind: What was being formatted ("number", "date", ...)
            value: The value that failed
            reason: Underlying error text

        Returns:
            Diagnostic for FORMATTING_FAILED
        """
        msg = f"Formatting {kind} '{value}' failed: {reason}"
        return Diagnostic(code=DiagnosticCode.FORMATTING_FAILED, message=msg)

    @staticmethod
    def max_depth_exceeded(max_depth: int) -> Diagnostic:
        """Nested branches exceed the depth limit.

        Args:
            max_depth: Configured limit

        Returns:
            Diagnostic for MAX_DEPTH_EXCEEDED
        """
        msg = f"Maximum nesting depth ({max_depth}) exceeded"
        return Diagnostic(
            code=DiagnosticCode.MAX_DEPTH_EXCEEDED,
            message=msg,
            hint="Flatten nested plural/select branches",
        )

    @staticmethod
    def placeholder_outside_plural() -> Diagnostic:
        """'#' placeholder formatted outside any plural branch."""
        return Diagnostic(
            code=DiagnosticCode.PLACEHOLDER_OUTSIDE_PLURAL,
            message="Placeholder '#' used outside a plural branch",
            hint="Use '#' only inside plural or selectordinal branches",
        )

    @staticmethod
    def unknown_part(type_name: str) -> Diagnostic:
        """Object in a message is not a known message part."""
        msg = f"Unknown message part type: {type_name}"
        return Diagnostic(code=DiagnosticCode.UNKNOWN_PART, message=msg)

    @staticmethod
    def invalid_plural_category(result: object, locale_code: str | None = None) -> Diagnostic:
        """Classifier returned something that is not a plural category."""
        msg = f"Classifier returned invalid plural category {result!r}"
        return Diagnostic(
            code=DiagnosticCode.INVALID_PLURAL_CATEGORY,
            message=msg,
            hint="Classifiers must return a PluralCategory or its string value",
            locale_code=locale_code,
        )

    @staticmethod
    def validation_missing_other(argument: str | int, kind: str) -> Diagnostic:
        """Select/plural defines no 'other' branch."""
        msg = f"{kind} on argument '{argument}' has no 'other' branch"
        return Diagnostic(
            code=DiagnosticCode.VALIDATION_MISSING_OTHER,
            message=msg,
            hint="Add an 'other' branch so every value selects something",
            argument_name=str(argument),
        )

    @staticmethod
    def validation_depth_exceeded(max_depth: int) -> Diagnostic:
        """Message nests deeper than the validation limit."""
        msg = f"Message nesting exceeds maximum depth ({max_depth})"
        return Diagnostic(code=DiagnosticCode.VALIDATION_DEPTH_EXCEEDED, message=msg)

    @staticmethod
    def validation_placeholder_outside_plural() -> Diagnostic:
        """'#' appears where no plural value is available."""
        return Diagnostic(
            code=DiagnosticCode.VALIDATION_PLACEHOLDER_OUTSIDE_PLURAL,
            message="Placeholder '#' appears outside a plural branch",
            severity="warning",
        )

    @staticmethod
    def validation_unused_category(
        argument: str | int, category: str, locale_code: str
    ) -> Diagnostic:
        """Plural branch category is never produced by the locale's rules."""
        msg = f"Branch '{category}' on argument '{argument}' is unused in locale '{locale_code}'"
        return Diagnostic(
            code=DiagnosticCode.VALIDATION_UNUSED_CATEGORY,
            message=msg,
            argument_name=str(argument),
            locale_code=locale_code,
            severity="warning",
        )
