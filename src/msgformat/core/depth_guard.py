"""Nesting limit for plural/select branches.

Message trees are built by producers and can be nested arbitrarily deep.
The resolver, the visitors and validation all recurse once per branch, so
each of them counts branch entries with a DepthGuard and gives up cleanly
(DepthLimitExceededError) before the interpreter stack runs out.

Python 3.13+.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from typing import Self

from msgformat.constants import MAX_DEPTH
from msgformat.diagnostics import DepthLimitExceededError, ErrorTemplate

__all__ = ["DepthGuard", "depth_clamp"]

logger = logging.getLogger(__name__)

# Python frames consumed per nested branch by the deepest walker (visitor)
_FRAMES_PER_LEVEL = 8


@dataclass(slots=True)
class DepthGuard:
    """Counts open branch sections and refuses the one past the limit.

    One guard belongs to one formatting pass or one visitor and is never
    shared, so it needs no locking.

        guard = DepthGuard(max_depth=2)
        with guard:          # depth 1
            with guard:      # depth 2
                with guard:  # raises DepthLimitExceededError
                    ...

    Attributes:
        max_depth: Deepest allowed nesting, after depth_clamp()
        current_depth: Number of guarded sections currently open
    """

    max_depth: int = MAX_DEPTH
    current_depth: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        self.max_depth = depth_clamp(self.max_depth)

    def __enter__(self) -> Self:
        # Check before counting: __exit__ does not run when __enter__ raises
        if self.is_exceeded():
            raise DepthLimitExceededError(ErrorTemplate.max_depth_exceeded(self.max_depth))
        self.current_depth += 1
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.current_depth -= 1

    def is_exceeded(self) -> bool:
        """True when one more nested section would be refused."""
        return self.current_depth >= self.max_depth


def depth_clamp(requested_depth: int, reserve_frames: int = 50) -> int:
    """Reduce requested_depth to what the interpreter stack can hold.

    Args:
        requested_depth: Depth asked for by the caller
        reserve_frames: Frames left for the caller's own stack

    Returns:
        requested_depth, or the largest safe depth when that is smaller
    """
    recursion_limit = sys.getrecursionlimit()
    safe_depth = (recursion_limit - reserve_frames) // _FRAMES_PER_LEVEL
    if requested_depth <= safe_depth:
        return requested_depth
    logger.warning(
        "Depth %d would overflow the stack (recursion limit %d); using %d",
        requested_depth,
        recursion_limit,
        safe_depth,
    )
    return safe_depth
