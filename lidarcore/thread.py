"""Worker threads with cooperative cancellation."""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Any


class Thread:
    """A worker running ``proc(*args)``.

    Cancellation is cooperative: :meth:`terminate` and :meth:`join` set
    :attr:`cancelled`, which a long-running ``proc`` is expected to poll.
    """

    def __init__(self, proc: Callable[..., Any], *args: Any) -> None:
        self._proc = proc
        self._args = args
        self._cancel = threading.Event()
        self._thread: threading.Thread | None = None
        self.result: Any = None

    def _run(self) -> None:
        self.result = self._proc(*self._args)

    def start(self) -> None:
        """Start running the worker; raises RuntimeError if already started."""
        if self._thread is not None:
            raise RuntimeError("thread already started")
        self._thread = threading.Thread(target=self._run, daemon=True)
        self._thread.start()

    @property
    def cancelled(self) -> bool:
        """Whether the worker has been asked to stop."""
        return self._cancel.is_set()

    @property
    def handle(self) -> int:
        """The native thread identifier, or 0 when not started."""
        if self._thread is None or self._thread.ident is None:
            return 0
        return self._thread.ident

    def terminate(self) -> None:
        """Ask the worker to stop without waiting for it."""
        if self._thread is not None:
            self._cancel.set()

    def join(self, timeout: float | None = None) -> bool:
        """Request cancellation and wait up to ``timeout`` seconds.

        Returns True once the worker has finished (or was never started).
        """
        if self._thread is None:
            return True
        self._cancel.set()
        self._thread.join(timeout)
        return not self._thread.is_alive()

    def is_alive(self) -> bool:
        """Whether the worker is still running."""
        return self._thread is not None and self._thread.is_alive()


def create_thread(proc: Callable[..., Any], *args: Any) -> Thread:
    """Create and start a :class:`Thread` running ``proc(*args)``."""
    thread = Thread(proc, *args)
    thread.start()
    return thread