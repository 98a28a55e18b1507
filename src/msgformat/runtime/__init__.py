"""Formatting runtime.

Provides argument values, message parts, the formatting Context, plural
rules and the resolver that ties them together.

Python 3.13+.
"""

from .args import Args, arg
from .context import Context, NumberOptions, TextSink
from .message import Message, format_message, write_message
from .parts import ArgumentRef, Literal, MessagePart, Placeholder, PluralSelect, Select
from .plural_rules import (
    PluralClassifier,
    PluralRuleRegistry,
    classify,
    cldr_classifier,
    create_default_registry,
    english_cardinal_classifier,
    english_ordinal_classifier,
    get_shared_registry,
)
from .resolution_context import ResolutionState
from .resolver import MessageResolver
from .value import ArgumentKey, Formattable, Value

__all__ = [
    "ArgumentKey",
    "ArgumentRef",
    "Args",
    "Context",
    "Formattable",
    "Literal",
    "Message",
    "MessagePart",
    "MessageResolver",
    "NumberOptions",
    "Placeholder",
    "PluralClassifier",
    "PluralRuleRegistry",
    "PluralSelect",
    "ResolutionState",
    "Select",
    "TextSink",
    "Value",
    "arg",
    "classify",
    "cldr_classifier",
    "create_default_registry",
    "english_cardinal_classifier",
    "english_ordinal_classifier",
    "format_message",
    "get_shared_registry",
    "write_message",
]
