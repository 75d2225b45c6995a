"""A value shared between threads, guarded by a lock and a condition."""

from __future__ import annotations

import threading
import time
from typing import Generic, TypeVar

T = TypeVar("T")


class SharedValue(Generic[T]):
    """Holds a value that several threads read, write and wait on."""

    def __init__(self, initial: T | None = None) -> None:
        self._value = initial
        self._condition = threading.Condition()

    def assign(self, value: T) -> None:
        """Replace the held value."""
        with self._condition:
            self._value = value

    def get(self) -> T:
        """Return a snapshot of the held value."""
        with self._condition:
            return self._value

    def increment(self) -> None:
        """Add one to the held value."""
        with self._condition:
            self._value += 1

    def notify_all(self) -> None:
        """Wake every thread blocked in :meth:`wait_for_signal`."""
        with self._condition:
            self._condition.notify_all()

    def assign_and_notify_all(self, value: T) -> None:
        """Replace the held value and wake every waiting thread."""
        with self._condition:
            self._value = value
            self._condition.notify_all()

    def wait_for_signal(self, timeout: float | None = None) -> T:
        """Block until notified, then return the held value.

        Raises TimeoutError if ``timeout`` seconds pass without a notification.
        """
        with self._condition:
            if not self._condition.wait(timeout):
                raise TimeoutError("no signal received before the timeout")
            return self._value

    def get_after(self, wait_us: int = 33000) -> T:
        """Sleep for ``wait_us`` microseconds, then return the held value."""
        time.sleep(wait_us / 1_000_000)
        return self.get()