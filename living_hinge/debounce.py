# living_hinge/debounce.py
# Cancellable, restartable single-shot task used to coalesce bursts of edits.
#
# Every schedule() cancels the pending call and arms a new one, so a burst of edits
# runs the callback once, one quiescence window after the last edit. The timer
# factory is injectable (default threading.Timer) so tests can fire it by hand.

from __future__ import annotations

import threading
from typing import Any, Callable, Optional, Protocol

from .config import DEFAULTS


class TimerLike(Protocol):
    def start(self) -> None: ...

    def cancel(self) -> None: ...


TimerFactory = Callable[[float, Callable[[], None]], TimerLike]


def _thread_timer(delay_s: float, fn: Callable[[], None]) -> TimerLike:
    t = threading.Timer(delay_s, fn)
    t.daemon = True
    return t


class DebounceScheduler:
    def __init__(self, delay_s: Optional[float] = None, timer_factory: Optional[TimerFactory] = None):
        self.delay_s = DEFAULTS.debounce_s if delay_s is None else float(delay_s)
        if self.delay_s < 0:
            raise ValueError("delay_s must be >= 0")
        self._factory = timer_factory or _thread_timer
        self._lock = threading.Lock()
        self._timer: Optional[TimerLike] = None
        self._fn: Optional[Callable[[], Any]] = None
        self._generation = 0

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._fn is not None

    def schedule(self, fn: Callable[[], Any]) -> None:
        """Cancel whatever is pending and run `fn` after the quiescence window."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._generation += 1
            generation = self._generation
            self._fn = fn
            self._timer = self._factory(self.delay_s, lambda: self._fire(generation))
            self._timer.start()

    def cancel(self) -> bool:
        """Drop the pending call. Returns True if one was pending."""
        with self._lock:
            had = self._fn is not None
            if self._timer is not None:
                self._timer.cancel()
            self._timer = None
            self._fn = None
            self._generation += 1
            return had

    def flush(self) -> bool:
        """Run the pending call now on the caller's thread. Returns True if one ran."""
        with self._lock:
            fn = self._take()
        if fn is None:
            return False
        fn()
        return True

    def _take(self) -> Optional[Callable[[], Any]]:
        fn = self._fn
        if self._timer is not None:
            self._timer.cancel()
        self._timer = None
        self._fn = None
        self._generation += 1
        return fn

    def _fire(self, generation: int) -> None:
        with self._lock:
            # a timer that lost the race with schedule()/cancel() must not run
            if generation != self._generation:
                return
            fn = self._take()
        if fn is not None:
            fn()
