"""Textual in-process test harness for meetroom.

Re-exports all public API for convenient imports:
    from tests.harness import run_app, press_and_settle, FakeExecutionClient, ...
"""

from tests.harness.app_runner import run_app
from tests.harness.interactions import (
    press_and_settle,
    click_and_settle,
    wait_for_run,
)
from tests.harness.builders import (
    FakeClock,
    FakeExecutionClient,
    FakeKeyEvent,
    FakeScheduler,
    make_call,
)

__all__ = [
    "run_app",
    "press_and_settle",
    "click_and_settle",
    "wait_for_run",
    "FakeClock",
    "FakeExecutionClient",
    "FakeKeyEvent",
    "FakeScheduler",
    "make_call",
]
