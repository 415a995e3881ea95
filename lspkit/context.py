"""Immutable per-request data passed implicitly through layers."""

from __future__ import annotations

import contextlib
import contextvars
from dataclasses import dataclass
from typing import Any as _AnyType
from typing import Dict, Generic, Iterator, Optional, TypeVar

T = TypeVar("T")


class Key(Generic[T]):
    """A lookup key for a Context; every instance is a distinct key."""

    __slots__ = ("name",)

    def __init__(self, name: Optional[str] = None) -> None:
        self.name = name

    def __repr__(self) -> str:
        return f"Key({self.name!r})" if self.name else f"Key(at {id(self):#x})"


@dataclass(frozen=True)
class _Node:
    parent: Optional["_Node"]
    key: Key
    value: _AnyType


_ANONYMOUS_KEYS: Dict[type, Key] = {}


class Context:
    """An immutable chain of key/value pairs.

    New data is added by deriving a child context; lookups walk from the
    newest entry towards the root.
    """

    __slots__ = ("_node",)

    def __init__(self, _node: Optional[_Node] = None) -> None:
        self._node = _node

    @staticmethod
    def empty() -> "Context":
        """Return a root context holding no data."""
        return Context()

    @staticmethod
    def current() -> "Context":
        """Return the ambient context of the running thread."""
        return _CURRENT.get()

    @staticmethod
    def swap_current(replacement: "Context") -> "Context":
        """Make ``replacement`` the ambient context and return the old one."""
        old = _CURRENT.get()
        _CURRENT.set(replacement)
        return old

    def _nodes(self) -> Iterator[_Node]:
        node = self._node
        while node is not None:
            yield node
            node = node.parent

    def get(self, key: Key[T]) -> Optional[T]:
        """Return the value stored for ``key``, or None if there is none."""
        return next((node.value for node in self._nodes() if node.key is key), None)

    def get_existing(self, key: Key[T]) -> T:
        """Return the value stored for ``key``; raise KeyError if absent."""
        for node in self._nodes():
            if node.key is key:
                return node.value
        raise KeyError(key)

    def derive(self, key: Key[T], value: T) -> "Context":
        """Return a child context that also maps ``key`` to ``value``."""
        return Context(_Node(self._node, key, value))

    def derive_value(self, value: _AnyType) -> "Context":
        """Return a child context holding ``value`` under a private key of its type."""
        key = _ANONYMOUS_KEYS.setdefault(type(value), Key(type(value).__name__))
        return self.derive(key, value)

    def clone(self) -> "Context":
        """Return a context sharing this one's data."""
        return Context(self._node)


_CURRENT: contextvars.ContextVar[Context] = contextvars.ContextVar(
    "lspkit_current_context", default=Context()
)


@contextlib.contextmanager
def with_context(context: Context) -> Iterator[Context]:
    """Make ``context`` current for the block, then restore the previous one."""
    restore = Context.swap_current(context)
    try:
        yield context
    finally:
        Context.swap_current(restore)


@contextlib.contextmanager
def with_context_value(key: Key[T], value: T) -> Iterator[Context]:
    """Extend the current context with one value for the block."""
    with with_context(Context.current().derive(key, value)) as context:
        yield context