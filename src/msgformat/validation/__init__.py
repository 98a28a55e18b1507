"""Validation utilities for message trees.

Standalone checks that producers (catalog loaders, parsers, builders) run
before handing messages to the formatter.

Python 3.13+.
"""

from msgformat.validation.message import (
    validate_message,
)

__all__ = [
    "validate_message",
]
