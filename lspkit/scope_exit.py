"""Run cleanup code when a block is left, unless released."""

from __future__ import annotations

from typing import Callable


class ScopeExit:
    """Context manager that calls a function on exit unless released."""

    def __init__(self, func: Callable[[], object]) -> None:
        self._func = func
        self._engaged = True

    def release(self) -> None:
        """Cancel the pending call."""
        self._engaged = False

    @property
    def engaged(self) -> bool:
        return self._engaged

    def __enter__(self) -> "ScopeExit":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._engaged:
            self._engaged = False
            self._func()


def make_scope_exit(func: Callable[[], object]) -> ScopeExit:
    """Return a ScopeExit that calls ``func`` when its block ends."""
    return ScopeExit(func)