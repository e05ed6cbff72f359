"""Readers-writer lock guarding the resolver's catalog snapshot.

Lookups (get_text, get_quantity_text, current_locale) take the read side
and may run concurrently; installing a freshly loaded catalog pair takes
the write side. A queued writer blocks new readers, so a pending locale
switch is not starved by a steady stream of lookups.

Ownership rules:
    A thread may nest read() blocks freely.
    read() inside write(), write() inside read() and nested write()
    raise RuntimeError instead of deadlocking.

Python 3.13+.
"""

from __future__ import annotations

import threading
import time
from contextlib import contextmanager
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable, Generator

__all__ = ["RWLock"]


class RWLock:
    """Readers-writer lock with writer preference and reentrant reads.

    Example:
        >>> lock = RWLock()
        >>> with lock.read(), lock.read():
        ...     lock.reader_count
        1
        >>> with lock.write(timeout=1.0):
        ...     lock.writer_active
        True
    """

    __slots__ = ("_cond", "_queued_writers", "_read_depth", "_writer")

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        # thread id -> nesting depth of its read() blocks
        self._read_depth: dict[int, int] = {}
        self._writer: int | None = None
        self._queued_writers = 0

    def __repr__(self) -> str:
        return (
            f"RWLock(readers={len(self._read_depth)}, "
            f"writer={self._writer is not None}, queued={self._queued_writers})"
        )

    @contextmanager
    def read(self, timeout: float | None = None) -> Generator[None]:
        """Hold the shared side for the duration of the block.

        Raises:
            RuntimeError: If this thread holds the write side
            TimeoutError: If the lock is not acquired within timeout seconds
            ValueError: If timeout is negative
        """
        me = threading.get_ident()
        deadline = _deadline(timeout)
        with self._cond:
            if self._writer == me:
                msg = "Cannot take read lock while holding write lock"
                raise RuntimeError(msg)
            depth = self._read_depth.get(me, 0)
            if depth == 0:
                self._await(
                    lambda: self._writer is None and self._queued_writers == 0,
                    deadline,
                    "read",
                )
            self._read_depth[me] = depth + 1
        try:
            yield
        finally:
            with self._cond:
                remaining = self._read_depth[me] - 1
                if remaining:
                    self._read_depth[me] = remaining
                else:
                    del self._read_depth[me]
                    if not self._read_depth:
                        self._cond.notify_all()

    @contextmanager
    def write(self, timeout: float | None = None) -> Generator[None]:
        """Hold the exclusive side for the duration of the block.

        Raises:
            RuntimeError: If this thread holds either side already
            TimeoutError: If the lock is not acquired within timeout seconds
            ValueError: If timeout is negative
        """
        me = threading.get_ident()
        deadline = _deadline(timeout)
        with self._cond:
            if me in self._read_depth:
                msg = "Cannot upgrade read lock to write lock"
                raise RuntimeError(msg)
            if self._writer == me:
                msg = "Cannot take write lock: already holding it"
                raise RuntimeError(msg)
            self._queued_writers += 1
            try:
                self._await(
                    lambda: self._writer is None and not self._read_depth,
                    deadline,
                    "write",
                )
                self._writer = me
            finally:
                self._queued_writers -= 1
                # A timed-out writer must release the readers it was holding back
                self._cond.notify_all()
        try:
            yield
        finally:
            with self._cond:
                self._writer = None
                self._cond.notify_all()

    def _await(self, ready: Callable[[], bool], deadline: float | None, side: str) -> None:
        """Wait on the condition (already held) until ready() is true."""
        while not ready():
            if deadline is None:
                self._cond.wait()
                continue
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                msg = f"Timed out waiting for {side} lock"
                raise TimeoutError(msg)
            self._cond.wait(remaining)

    @property
    def reader_count(self) -> int:
        """Distinct threads currently inside read()."""
        with self._cond:
            return len(self._read_depth)

    @property
    def writer_active(self) -> bool:
        with self._cond:
            return self._writer is not None


def _deadline(timeout: float | None) -> float | None:
    if timeout is None:
        return None
    if timeout < 0:
        msg = f"Timeout must be non-negative, got {timeout}"
        raise ValueError(msg)
    return time.monotonic() + timeout
