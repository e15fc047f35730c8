"""App lifecycle management for Textual in-process tests.

Creates MeetingRoomApp instances wired for testing and manages run_test() lifecycle.
State isolation: every call creates a fresh call, client and app.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from textual.pilot import Pilot

from meetroom.app.calling import LocalCall
from meetroom.io.settings import RunnerConfig
from meetroom.tui.app import MeetingRoomApp
from tests.harness.builders import FakeExecutionClient, make_call


@asynccontextmanager
async def run_app(
    *,
    size: tuple[int, int] = (140, 40),
    client: FakeExecutionClient | None = None,
    call: LocalCall | None = None,
    config: RunnerConfig | None = None,
    personal_room: bool = False,
) -> AsyncIterator[tuple[Pilot, MeetingRoomApp]]:
    """Create and run a MeetingRoomApp in test mode.

    Yields (pilot, app). The execution client is a FakeExecutionClient
    unless one is passed in; no network is touched.
    """
    app = MeetingRoomApp(
        call if call is not None else make_call(),
        client=client if client is not None else FakeExecutionClient(),
        config=config,
        personal_room=personal_room,
    )

    async with app.run_test(size=size) as pilot:
        # Let on_mount finish and the call join after the first refresh.
        await pilot.pause()
        await pilot.pause()
        yield pilot, app
