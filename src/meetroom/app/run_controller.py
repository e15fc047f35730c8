"""Run lifecycle for the code panel: Idle -> Running -> Idle.

// [LAW:single-enforcer] begin() is the sole concurrency guard; there is no
//   request queue and no cancellation of an in-flight run.
// [LAW:one-source-of-truth] result_text is what the output pane shows.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable

from meetroom.core import languages
from meetroom.core.execution import (
    NO_CODE_MESSAGE,
    ExecutionClient,
    ExecutionResult,
    Failure,
    Output,
)

logger = logging.getLogger(__name__)

RUNNING_PLACEHOLDER = "Running..."
EMPTY_PLACEHOLDER = "Run the code to see output"

SAMPLE_SOURCE = (
    "console.log('Hello, World!');\n"
    "function add(a, b) {\n"
    "  return a + b;\n"
    "}\n"
    "console.log(add(5, 3));"
)


class RunState(Enum):
    IDLE = auto()
    RUNNING = auto()


@dataclass(frozen=True)
class RunTicket:
    """Snapshot of one accepted submission."""

    language_key: str
    runtime: languages.RuntimeSpec
    source: str


def format_result(result: ExecutionResult) -> str:
    if isinstance(result, Output):
        return result.text
    return f"Error: {result.message}"


class RunController:
    """Owns the source buffer, selected language and last result."""

    def __init__(
        self,
        client: ExecutionClient,
        language_key: str = languages.DEFAULT_LANGUAGE,
        source: str = SAMPLE_SOURCE,
    ) -> None:
        self._client = client
        self.state = RunState.IDLE
        self.language_key = language_key
        self.source = source
        self.result_text = ""
        self._listeners: list[Callable[[], None]] = []

    @property
    def is_running(self) -> bool:
        return self.state is RunState.RUNNING

    @property
    def display_text(self) -> str:
        return self.result_text or EMPTY_PLACEHOLDER

    def subscribe(self, listener: Callable[[], None]) -> None:
        self._listeners.append(listener)

    def _changed(self) -> None:
        for listener in list(self._listeners):
            listener()

    def update_source(self, text: str) -> None:
        self.source = text

    def select_language(self, language_key: str) -> bool:
        """Switch language while idle; clears the result, keeps the source."""
        if self.is_running:
            return False
        if language_key == self.language_key:
            return True
        self.language_key = language_key
        self.result_text = ""
        self._changed()
        return True

    def begin(self) -> RunTicket | None:
        """Accept a submission, or return None when nothing should be sent.

        The "Running..." placeholder is set here, before any await.
        """
        if self.is_running:
            logger.debug("run_ignored reason=already_running")
            return None
        if not self.source.strip():
            self.result_text = format_result(Failure(NO_CODE_MESSAGE))
            self._changed()
            return None

        ticket = RunTicket(
            language_key=self.language_key,
            runtime=languages.resolve(self.language_key),
            source=self.source,
        )
        self.state = RunState.RUNNING
        self.result_text = RUNNING_PLACEHOLDER
        logger.info(
            "run_started language=%s runtime=%s@%s",
            ticket.language_key,
            ticket.runtime.runtime_id,
            ticket.runtime.runtime_version,
        )
        self._changed()
        return ticket

    def finish(self, result: ExecutionResult) -> None:
        self.result_text = format_result(result)
        self.state = RunState.IDLE
        logger.info("run_finished result=%s", type(result).__name__)
        self._changed()

    async def execute(self, ticket: RunTicket) -> ExecutionResult:
        # The client blocks on the socket; keep it off the event loop.
        try:
            result = await asyncio.to_thread(self._client.submit, ticket.runtime, ticket.source)
        except Exception as exc:
            logger.exception("run_crashed language=%s", ticket.language_key)
            result = Failure(str(exc) or type(exc).__name__)
        # Back to idle whatever the client did.
        self.finish(result)
        return result

    async def submit(self) -> ExecutionResult | None:
        ticket = self.begin()
        if ticket is None:
            return None
        return await self.execute(ticket)
