"""In-process stand-in for the calling SDK.

The room reads one signal from it, ``calling_state``, and renders only once
the call is JOINED. Media transport is not modelled.
"""

from __future__ import annotations

import logging
from enum import Enum, auto
from typing import Callable

logger = logging.getLogger(__name__)


class CallingState(Enum):
    UNKNOWN = auto()
    IDLE = auto()
    JOINING = auto()
    JOINED = auto()
    RECONNECTING = auto()
    LEFT = auto()


class LocalCall:
    """A call with a fixed participant roster."""

    def __init__(self, call_id: str, participants: list[str] | None = None) -> None:
        self.call_id = call_id
        self.participants: list[str] = list(participants or [])
        self.calling_state = CallingState.IDLE
        self._listeners: list[Callable[[CallingState], None]] = []

    def subscribe(self, listener: Callable[[CallingState], None]) -> None:
        self._listeners.append(listener)

    def _set_state(self, state: CallingState) -> None:
        if state is self.calling_state:
            return
        logger.info("call_state call=%s %s -> %s", self.call_id, self.calling_state.name, state.name)
        self.calling_state = state
        for listener in list(self._listeners):
            listener(state)

    def join(self) -> None:
        if self.calling_state is CallingState.JOINED:
            return
        self._set_state(CallingState.JOINING)
        self._set_state(CallingState.JOINED)

    def leave(self) -> None:
        self._set_state(CallingState.LEFT)
