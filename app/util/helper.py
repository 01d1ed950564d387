"""
Small helpers: URL shape check, async sleep and a thread-safe debounce.
"""

import re
import asyncio
import functools
import threading
from typing import Any, Callable, Generic, ParamSpec, TypeVar

P = ParamSpec("P")
R = TypeVar("R")

_LABEL = r"[a-z\d](?:[a-z\d-]*[a-z\d])?"

_URL_RE = re.compile(
    r"(https?://)?"                                   # protocol
    rf"(?:(?:{_LABEL}\.)+[a-z]{{2,}}"                 # domain name
    r"|(?:\d{1,3}\.){3}\d{1,3})"                      # OR ip (v4) address
    r"(?::\d+)?(?:/[-a-z\d%_.~+]*)*"                  # port and path
    r"(?:\?[;&a-z\d%_.~+=-]*)?"                       # query string
    r"(?:#[-a-z\d_]*)?",                              # fragment locator
    re.IGNORECASE | re.ASCII,
)


def check_url(url: Any) -> bool:
    """Return True if ``url`` has the shape of a web URL. Never raises."""
    if not isinstance(url, str):
        return False
    return _URL_RE.fullmatch(url) is not None


async def sleep(ms: float) -> None:
    """Suspend the current coroutine for ``ms`` milliseconds."""
    await asyncio.sleep(max(ms, 0) / 1000)


class Debounced(Generic[P, R]):
    """
    Callable wrapper that delays ``fn`` until ``ms`` milliseconds pass
    without another call. Only the last call's arguments are used.

    The wrapped function runs on a timer thread, so its return value is
    discarded; use ``flush()`` to run a pending call synchronously.
    """

    def __init__(self, fn: Callable[P, R], ms: float = 0):
        # Before our own fields: update_wrapper copies fn.__dict__ onto self.
        functools.update_wrapper(self, fn)
        self._fn = fn
        self._delay = max(ms, 0) / 1000
        self._lock = threading.Lock()
        self._timer: threading.Timer | None = None
        self._pending: tuple[tuple, dict] | None = None
        self._generation = 0

    def __call__(self, *args: P.args, **kwargs: P.kwargs) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._generation += 1
            self._pending = (args, kwargs)
            self._timer = threading.Timer(self._delay, self._fire, args=(self._generation,))
            self._timer.daemon = True
            self._timer.start()

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._pending is not None

    def cancel(self) -> None:
        """Drop the pending call, if any."""
        with self._lock:
            self._take()

    def flush(self) -> R | None:
        """Run the pending call now and return its result."""
        with self._lock:
            pending = self._take()
        if pending is None:
            return None
        args, kwargs = pending
        return self._fn(*args, **kwargs)

    def _take(self) -> tuple[tuple, dict] | None:
        # Caller holds the lock.
        if self._timer is not None:
            self._timer.cancel()
        pending, self._pending, self._timer = self._pending, None, None
        self._generation += 1
        return pending

    def _fire(self, generation: int) -> None:
        with self._lock:
            # A newer call (or cancel/flush) superseded this timer.
            if generation != self._generation:
                return
            pending = self._take()
        if pending is not None:
            args, kwargs = pending
            self._fn(*args, **kwargs)


def debounce(fn: Callable[P, R], ms: float = 0) -> Debounced[P, R]:
    """Wrap ``fn`` so rapid repeated calls collapse into one trailing call."""
    return Debounced(fn, ms)
