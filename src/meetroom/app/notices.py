"""Single-slot, auto-expiring notice.

A new notice replaces the pending one and restarts its timer. Replaced
notices are dropped, there is no backlog.

// [LAW:one-source-of-truth] (message, deadline) is the whole state.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Callable, Optional, Protocol

NOTICE_TIMEOUT_S = 3.0


class TimerHandle(Protocol):
    def stop(self) -> Any: ...


Scheduler = Callable[[float, Callable[[], None]], TimerHandle]


@dataclass(frozen=True)
class Notice:
    message: str
    deadline: float


class NoticeQueue:
    """Holds at most one Notice.

    ``schedule(delay, callback)`` arms the expiry timer and returns a handle
    with ``stop()``; Textual's ``App.set_timer`` fits. Without a scheduler,
    expiry is still observed through ``current`` against ``clock``.
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        schedule: Optional[Scheduler] = None,
        timeout: float = NOTICE_TIMEOUT_S,
    ) -> None:
        self._clock = clock
        self._schedule = schedule
        self._timeout = timeout
        self._notice: Notice | None = None
        self._timer: TimerHandle | None = None
        self._listeners: list[Callable[[], None]] = []

    def subscribe(self, listener: Callable[[], None]) -> None:
        self._listeners.append(listener)

    def _changed(self) -> None:
        for listener in list(self._listeners):
            listener()

    @property
    def current(self) -> Notice | None:
        notice = self._notice
        if notice is None or self._clock() >= notice.deadline:
            return None
        return notice

    def enqueue(self, message: str) -> Notice:
        self._stop_timer()
        notice = Notice(message=message, deadline=self._clock() + self._timeout)
        self._notice = notice
        if self._schedule is not None:
            self._timer = self._schedule(self._timeout, lambda: self._drop(notice))
        self._changed()
        return notice

    def expire(self) -> None:
        """Drop the notice if its deadline has passed."""
        notice = self._notice
        if notice is not None and self._clock() >= notice.deadline:
            self._drop(notice)

    def _drop(self, notice: Notice) -> None:
        # A timer armed for a replaced notice must not clear its successor.
        if self._notice is not notice:
            return
        self._notice = None
        self._timer = None
        self._changed()

    def clear(self) -> None:
        self._stop_timer()
        if self._notice is not None:
            self._notice = None
            self._changed()

    def _stop_timer(self) -> None:
        if self._timer is not None:
            self._timer.stop()
            self._timer = None
