"""Producer-side validation of message trees.

Formatting tolerates every issue found here (missing branches render nothing,
stray placeholders render '#'), so validation is about catching authoring
mistakes early, not about making formatting safe.

Errors:
    - plural or select without an 'other' branch
    - nesting deeper than the depth limit
Warnings:
    - '#' placeholder outside any plural branch
    - plural branch for a category the target locale never produces

Python 3.13+.
"""

from __future__ import annotations

import logging

from msgformat.constants import MAX_DEPTH
from msgformat.diagnostics import (
    DepthLimitExceededError,
    Diagnostic,
    ErrorTemplate,
    ValidationIssue,
    ValidationResult,
)
from msgformat.enums import PluralCategory, PluralType
from msgformat.runtime.message import Message
from msgformat.runtime.parts import Placeholder, PluralSelect, Select
from msgformat.runtime.plural_rules import PluralRuleRegistry, categories_for, get_shared_registry
from msgformat.visitor import MessageVisitor

__all__ = ["ValidationVisitor", "validate_message"]

logger = logging.getLogger(__name__)


class ValidationVisitor(MessageVisitor):
    """Visitor collecting validation issues with their tree paths."""

    __slots__ = ("_categories", "_locale_code", "_path", "_plural_depth", "errors", "warnings")

    def __init__(
        self,
        *,
        categories: dict[PluralType, frozenset[PluralCategory]] | None = None,
        locale_code: str | None = None,
        max_depth: int = MAX_DEPTH,
    ) -> None:
        """Initialize visitor.

        Args:
            categories: Categories the target locale produces, per plural type;
                None disables the unused-category check
            locale_code: Target locale, for diagnostics
            max_depth: Maximum branch nesting depth
        """
        super().__init__(max_depth=max_depth)
        self.errors: list[ValidationIssue] = []
        self.warnings: list[ValidationIssue] = []
        self._categories = categories or {}
        self._locale_code = locale_code
        self._path: list[str] = []
        self._plural_depth = 0

    def _issue(self, diagnostic: Diagnostic) -> None:
        issue = ValidationIssue(diagnostic, tuple(self._path))
        if diagnostic.severity == "warning":
            self.warnings.append(issue)
        else:
            self.errors.append(issue)

    def visit_Placeholder(self, node: Placeholder) -> None:  # noqa: ARG002 - dispatch signature
        if self._plural_depth == 0:
            self._issue(ErrorTemplate.validation_placeholder_outside_plural())

    def visit_PluralSelect(self, node: PluralSelect) -> None:
        kind = "selectordinal" if node.plural_type is PluralType.ORDINAL else "plural"
        if node.other is None:
            self._issue(ErrorTemplate.validation_missing_other(node.key, kind))

        produced = self._categories.get(node.plural_type)
        if produced is not None:
            for category, _branch in node.branches:
                if category not in produced:
                    self._issue(
                        ErrorTemplate.validation_unused_category(
                            node.key, category, self._locale_code or ""
                        )
                    )

        self._path.append(f"{node.key}:{kind}")
        self._plural_depth += 1
        try:
            for number, branch in node.exact:
                self._visit_labeled(f"={number}", branch)
            for category, branch in node.branches:
                self._visit_labeled(str(category), branch)
        finally:
            self._plural_depth -= 1
            self._path.pop()

    def visit_Select(self, node: Select) -> None:
        if node.other is None:
            self._issue(ErrorTemplate.validation_missing_other(node.key, "select"))
        self._path.append(f"{node.key}:select")
        try:
            for selector, branch in node.branches:
                self._visit_labeled(selector, branch)
        finally:
            self._path.pop()

    def _visit_labeled(self, label: str, branch: Message) -> None:
        self._path.append(label)
        try:
            self.visit_branch(branch)
        finally:
            self._path.pop()


def _locale_categories(
    locale_code: str, registry: PluralRuleRegistry
) -> dict[PluralType, frozenset[PluralCategory]]:
    produced: dict[PluralType, frozenset[PluralCategory]] = {}
    for plural_type in PluralType:
        resolved = registry.resolve(locale_code, plural_type)
        known = categories_for(resolved.classifier)
        if known is not None:
            produced[plural_type] = known
    return produced


def validate_message(
    message: Message,
    locale_code: str | None = None,
    *,
    registry: PluralRuleRegistry | None = None,
    max_depth: int = MAX_DEPTH,
) -> ValidationResult:
    """Validate a message tree.

    Args:
        message: Message to check
        locale_code: Target locale; enables the unused-category warning
        registry: Plural rules to consult (default: shared registry)
        max_depth: Maximum allowed branch nesting

    Returns:
        ValidationResult; is_valid is False when any error was found

    Example:
        >>> plural = PluralSelect.create("n", one="one thing")
        >>> validate_message(Message.of(plural)).is_valid
        False
    """
    categories = None
    if locale_code is not None:
        categories = _locale_categories(
            locale_code, get_shared_registry() if registry is None else registry
        )

    visitor = ValidationVisitor(
        categories=categories, locale_code=locale_code, max_depth=max_depth
    )
    try:
        visitor.visit(message)
    except DepthLimitExceededError:
        visitor.errors.append(
            ValidationIssue(ErrorTemplate.validation_depth_exceeded(visitor.max_depth))
        )

    result = ValidationResult(errors=tuple(visitor.errors), warnings=tuple(visitor.warnings))
    logger.debug(
        "Validated message: %d error(s), %d warning(s)", result.error_count, result.warning_count
    )
    return result
