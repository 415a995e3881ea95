"""A one-slot hand-off between threads."""

from __future__ import annotations

import threading
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class Condition(Generic[T]):
    """Holds at most one value that a waiting thread can take.

    ``notify`` stores a value, replacing any value not yet taken, and wakes
    one waiter. ``wait`` takes the stored value.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition()
        self._value: Optional[T] = None

    def notify(self, data: Optional[T]) -> None:
        """Store ``data`` and wake one waiting thread."""
        with self._cond:
            self._value = data
            self._cond.notify()

    def wait(self, timeout: int = 0) -> Optional[T]:
        """Take the stored value.

        With ``timeout`` 0 this blocks until a value arrives. Otherwise it
        waits at most ``timeout`` milliseconds and returns None if nothing
        arrived in time.
        """
        with self._cond:
            if not timeout:
                self._cond.wait_for(lambda: self._value is not None)
            elif self._value is None:
                if not self._cond.wait(timeout / 1000.0):
                    return None
            value, self._value = self._value, None
            return value