"""Per-pass mutable state for message resolution.

A formatting pass reads an immutable Message, Args and Context; everything
that changes while walking the tree lives here instead:
    - errors collected so far (formatting never raises them)
    - branch nesting depth (DepthGuard)
    - the stack of enclosing plural values, read by '#'

Thread Safety:
    ResolutionState is created per pass and never shared, so concurrent
    format calls on one Message/Context need no locking.

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field

from msgformat.constants import MAX_DEPTH
from msgformat.core.depth_guard import DepthGuard
from msgformat.diagnostics import MessageFormatError

from .plural_rules import PluralNumber

__all__ = ["ResolutionState"]


@dataclass(slots=True)
class ResolutionState:
    """Explicit state for one formatting pass.

    Attributes:
        max_depth: Maximum branch nesting depth
        errors: Errors collected in encounter order
    """

    max_depth: int = MAX_DEPTH
    errors: list[MessageFormatError] = field(default_factory=list)
    _guard: DepthGuard = field(init=False)
    _plural_values: list[PluralNumber] = field(default_factory=list, init=False)

    def __post_init__(self) -> None:
        self._guard = DepthGuard(max_depth=self.max_depth)

    def record(self, error: MessageFormatError) -> None:
        """Collect an error; resolution continues with a fallback."""
        self.errors.append(error)

    @property
    def depth(self) -> int:
        """Current branch nesting depth."""
        return self._guard.current_depth

    @property
    def plural_value(self) -> PluralNumber | None:
        """Value of the innermost enclosing plural (after offset), if any."""
        return self._plural_values[-1] if self._plural_values else None

    @contextmanager
    def branch(self, plural_value: PluralNumber | None = None) -> Iterator[None]:
        """Enter a selected branch one level deeper.

        Usage:
            with state.branch(count - offset):
                self._emit_parts(branch.parts, ...)

        A select branch passes no value, so '#' inside it still refers to
        the enclosing plural.

        Raises:
            DepthLimitExceededError: If max_depth is already reached
        """
        with self._guard:
            if plural_value is None:
                yield
                return
            self._plural_values.append(plural_value)
            try:
                yield
            finally:
                self._plural_values.pop()
