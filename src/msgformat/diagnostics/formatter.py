"""Rendering of diagnostics and collected formatting errors.

format_with_errors() and validate_message() hand back structured
diagnostics; this module turns them into text for logs, CLIs and tooling.

Python 3.13+. Zero external dependencies.
"""

import json
from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum

from .codes import Diagnostic
from .errors import MessageFormatError

__all__ = [
    "DiagnosticFormatter",
    "OutputFormat",
]

# Optional Diagnostic fields shown as "= label: value" lines, in this order
_DETAIL_FIELDS: tuple[tuple[str, str], ...] = (
    ("locale", "locale_code"),
    ("argument", "argument_name"),
    ("expected", "expected_type"),
    ("received", "received_type"),
)


class OutputFormat(StrEnum):
    """How DiagnosticFormatter renders a diagnostic."""

    DETAILED = "detailed"
    """Headline plus one line per populated field and the hint."""

    LINE = "line"
    """CODE: message, on one line."""

    JSON = "json"
    """One JSON object per diagnostic."""


@dataclass(frozen=True, slots=True)
class DiagnosticFormatter:
    """Renders diagnostics in one output format.

    Attributes:
        output_format: DETAILED (default), LINE or JSON
        max_length: Truncate message and hint text to this many characters;
            None keeps them whole

    Example:
        >>> formatter = DiagnosticFormatter(output_format=OutputFormat.LINE)
        >>> print(formatter.format(ErrorTemplate.missing_argument("name")))
        MISSING_ARGUMENT: Argument 'name' not provided
    """

    output_format: OutputFormat = OutputFormat.DETAILED
    max_length: int | None = None

    def format(self, diagnostic: Diagnostic) -> str:
        """Render one diagnostic."""
        match self.output_format:
            case OutputFormat.LINE:
                return f"{diagnostic.code.name}: {self._clip(diagnostic.message)}"
            case OutputFormat.JSON:
                return self._to_json(diagnostic)
            case _:
                return self._to_detailed(diagnostic)

    def format_all(self, diagnostics: Iterable[Diagnostic]) -> str:
        """Render several diagnostics, separated by a blank line."""
        return "\n\n".join(map(self.format, diagnostics))

    def format_errors(self, errors: Iterable[MessageFormatError]) -> str:
        """Render errors collected by a formatting pass.

        Errors built without a Diagnostic fall back to their class name and text.
        """
        rendered = [
            self.format(error.diagnostic)
            if error.diagnostic is not None
            else f"{type(error).__name__}: {self._clip(str(error))}"
            for error in errors
        ]
        return "\n\n".join(rendered)

    def _to_detailed(self, diagnostic: Diagnostic) -> str:
        lines = [f"{diagnostic.severity}[{diagnostic.code.name}]: {self._clip(diagnostic.message)}"]
        for label, attribute in _DETAIL_FIELDS:
            value = getattr(diagnostic, attribute)
            if value:
                lines.append(f"  = {label}: {value}")
        if diagnostic.hint:
            lines.append(f"  = help: {self._clip(diagnostic.hint)}")
        return "\n".join(lines)

    def _to_json(self, diagnostic: Diagnostic) -> str:
        payload: dict[str, str | int] = {
            "code": diagnostic.code.name,
            "code_value": diagnostic.code.value,
            "severity": diagnostic.severity,
            "message": self._clip(diagnostic.message),
        }
        payload.update(
            (attribute, value)
            for _label, attribute in _DETAIL_FIELDS
            if (value := getattr(diagnostic, attribute))
        )
        if diagnostic.hint:
            payload["hint"] = self._clip(diagnostic.hint)
        return json.dumps(payload, ensure_ascii=False)

    def _clip(self, text: str) -> str:
        if self.max_length is None or len(text) <= self.max_length:
            return text
        return f"{text[: self.max_length]}..."
