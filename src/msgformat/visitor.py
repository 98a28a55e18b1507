"""Visitor pattern for message tree traversal.

Enables tools to walk a Message without modifying the part classes.

NOTE: This module follows Python stdlib ast.NodeVisitor naming convention.
Methods are named visit_NodeName (PascalCase), e.g. visit_PluralSelect.

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import ClassVar

from msgformat.constants import MAX_DEPTH
from msgformat.core.depth_guard import DepthGuard
from msgformat.runtime.message import Message
from msgformat.runtime.parts import PluralSelect, Select

__all__ = ["MessageVisitor"]


class MessageVisitor:
    """Base visitor for traversing a message tree.

    Follows stdlib ast.NodeVisitor convention: generic_visit() automatically
    traverses child nodes. Override visit_NodeType methods to add custom
    behavior, and call self.generic_visit(node) to keep descending.

    Every branch Message is entered through visit_branch(), which is guarded
    by a DepthGuard: a tree nested deeper than max_depth raises
    DepthLimitExceededError instead of exhausting the stack.

    Example:
        >>> class CountPlurals(MessageVisitor):
        ...     def __init__(self):
        ...         super().__init__()
        ...         self.count = 0
        ...
        ...     def visit_PluralSelect(self, node):
        ...         self.count += 1
        ...         self.generic_visit(node)
    """

    __slots__ = ("_depth_guard", "_instance_dispatch_cache")

    # Method names only, built once per class via __init_subclass__
    _class_visit_methods: ClassVar[dict[str, str]] = {}

    def __init_subclass__(cls, **kwargs: object) -> None:
        """Build class-level dispatch table when subclass is defined."""
        super().__init_subclass__(**kwargs)
        cls._class_visit_methods = {}
        for name in dir(cls):
            if name.startswith("visit_") and name != "visit_branch":
                cls._class_visit_methods[name[6:]] = name

    def __init__(self, *, max_depth: int | None = None) -> None:
        """Initialize visitor with depth guard and dispatch cache.

        Subclasses MUST call super().__init__().

        Args:
            max_depth: Maximum branch nesting depth (default: MAX_DEPTH)
        """
        self._depth_guard = DepthGuard(max_depth=max_depth if max_depth is not None else MAX_DEPTH)
        self._instance_dispatch_cache: dict[type, Callable[[object], None]] = {}

    @property
    def depth(self) -> int:
        """Current branch nesting depth (0 at the top-level message)."""
        return self._depth_guard.current_depth

    @property
    def max_depth(self) -> int:
        """Effective depth limit (clamped to the interpreter recursion limit)."""
        return self._depth_guard.max_depth

    def visit(self, node: object) -> None:
        """Dispatch to visit_<TypeName>, or generic_visit when none is defined."""
        node_type = type(node)
        method = self._instance_dispatch_cache.get(node_type)
        if method is None:
            method_name = self._class_visit_methods.get(node_type.__name__)
            method = getattr(self, method_name) if method_name else self.generic_visit
            self._instance_dispatch_cache[node_type] = method
        method(node)

    def visit_branch(self, branch: Message) -> None:
        """Visit a plural/select branch one level deeper.

        Raises:
            DepthLimitExceededError: If max_depth is exceeded
        """
        with self._depth_guard:
            self.visit(branch)

    def generic_visit(self, node: object) -> None:
        """Visit all children of node. Leaf parts have none."""
        match node:
            case Message(parts=parts):
                for part in parts:
                    self.visit(part)
            case PluralSelect():
                for _number, branch in node.exact:
                    self.visit_branch(branch)
                for _category, branch in node.branches:
                    self.visit_branch(branch)
            case Select(branches=branches):
                for _selector, branch in branches:
                    self.visit_branch(branch)
