"""Validation result for producer-side message checks.

Parsers and builders that produce message trees can validate them before
handing them to the formatter. Formatting itself tolerates every issue
reported here; validation only surfaces them early.

Python 3.13+.
"""

from dataclasses import dataclass

from .codes import Diagnostic

__all__ = [
    "ValidationIssue",
    "ValidationResult",
]


@dataclass(frozen=True, slots=True)
class ValidationIssue:
    """Single validation finding.

    Attributes:
        diagnostic: Structured description of the problem
        path: Location in the tree, outermost first (e.g. ("count:plural", "one"))
    """

    diagnostic: Diagnostic
    path: tuple[str, ...] = ()

    @property
    def code(self) -> str:
        """Diagnostic code name."""
        return self.diagnostic.code.name

    def format(self) -> str:
        """Format issue as a single human-readable line."""
        location = " > ".join(self.path)
        where = f" at {location}" if location else ""
        return f"[{self.code}]{where}: {self.diagnostic.message}"


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Outcome of validate_message().

    Attributes:
        errors: Issues that make formatting lossy (missing 'other' branch, depth)
        warnings: Suspicious constructions that still format as written

    Example:
        >>> ValidationResult.valid().is_valid
        True
    """

    errors: tuple[ValidationIssue, ...]
    warnings: tuple[ValidationIssue, ...]

    @property
    def is_valid(self) -> bool:
        """True when there are no errors; warnings are allowed."""
        return not self.errors

    @property
    def error_count(self) -> int:
        return len(self.errors)

    @property
    def warning_count(self) -> int:
        return len(self.warnings)

    @staticmethod
    def valid() -> "ValidationResult":
        """Result with no issues."""
        return ValidationResult(errors=(), warnings=())

    def format(self, *, include_warnings: bool = True) -> str:
        """Multi-line report, errors first, one indented line per issue."""
        sections = [("Errors", self.errors)]
        if include_warnings:
            sections.append(("Warnings", self.warnings))

        lines: list[str] = []
        for title, issues in sections:
            if issues:
                lines.append(f"{title} ({len(issues)}):")
                lines.extend(f"  {issue.format()}" for issue in issues)
        return "\n".join(lines) if lines else "Validation passed: no errors or warnings"
