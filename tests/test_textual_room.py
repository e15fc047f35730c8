"""Meeting room tests using the Textual in-process harness."""

import threading

import pytest

from meetroom.app.calling import CallingState
from meetroom.app.notices import NOTICE_TIMEOUT_S
from meetroom.app.run_controller import RUNNING_PLACEHOLDER, RunState
from meetroom.core.execution import Failure, Output
from meetroom.io.settings import RunnerConfig, load_setting
from tests.harness import (
    FakeExecutionClient,
    click_and_settle,
    make_call,
    press_and_settle,
    run_app,
    wait_for_run,
)

pytestmark = pytest.mark.textual


def _output_text(app) -> str:
    return app.query_one("#code-panel").output_text


async def test_room_renders_once_call_joined():
    call = make_call()
    async with run_app(call=call) as (pilot, app):
        assert call.calling_state is CallingState.JOINED
        assert app.query_one("#room").display
        assert not app.query_one("#loading").display
        assert app.lockout.attached


async def test_lockout_detached_on_exit():
    async with run_app() as (pilot, app):
        lockout = app.lockout
    assert not lockout.attached


async def test_escape_is_swallowed_and_shows_notice():
    async with run_app() as (pilot, app):
        await press_and_settle(pilot, "escape")
        banner = app.query_one("#notice")
        assert banner.display
        assert app.notices.current.message == "Escape key is disabled during the meeting."


async def test_notice_banner_hides_after_timeout():
    async with run_app() as (pilot, app):
        await press_and_settle(pilot, "escape")
        banner = app.query_one("#notice")
        assert banner.display

        await pilot.pause(NOTICE_TIMEOUT_S + 0.5)

        assert app.notices.current is None
        assert not banner.display


async def test_ctrl_tab_shows_notice():
    async with run_app() as (pilot, app):
        await press_and_settle(pilot, "ctrl+tab")
        assert app.notices.current.message == "Ctrl+Tab is disabled during the meeting."


async def test_participants_toggle_and_render_rule():
    async with run_app() as (pilot, app):
        participants = app.query_one("#participants")
        assert not participants.display

        await press_and_settle(pilot, "p")
        assert participants.display

        # Code panel hides the list without clearing its flag.
        app.action_toggle_code_panel()
        await pilot.pause()
        assert app.visibility.show_participants
        assert not participants.display
        assert app.query_one("#stage").has_class("-minimized")

        app.action_toggle_code_panel()
        await pilot.pause()
        assert participants.display


async def test_participants_close_button():
    async with run_app() as (pilot, app):
        await press_and_settle(pilot, "p")
        await click_and_settle(pilot, "#participants-close")
        assert not app.visibility.show_participants
        assert not app.query_one("#participants").display


async def test_code_panel_opens_with_placeholder():
    async with run_app() as (pilot, app):
        panel = app.query_one("#code-panel")
        assert not panel.display
        await press_and_settle(pilot, "e")
        assert panel.display
        assert "Run the code to see output" in _output_text(app)


async def test_run_code_shows_output():
    client = FakeExecutionClient(Output("Hello, World!\n8\n"))
    async with run_app(client=client) as (pilot, app):
        app.action_toggle_code_panel()
        await pilot.pause()

        await press_and_settle(pilot, "f5")
        await wait_for_run(pilot)

        assert app.runs.state is RunState.IDLE
        assert "Hello, World!" in _output_text(app)
        runtime, source = client.calls[0]
        assert runtime.runtime_id == "node"
        assert source == app.runs.source


async def test_run_failure_is_shown_inline():
    client = FakeExecutionClient(Failure("Failed to execute code: Unknown error"))
    async with run_app(client=client) as (pilot, app):
        app.action_toggle_code_panel()
        await pilot.pause()
        app.action_run_code()
        await wait_for_run(pilot)
        assert "Error: Failed to execute code: Unknown error" in _output_text(app)


async def test_crashing_client_keeps_room_open_and_unlocks_controls():
    client = FakeExecutionClient(error=RuntimeError("connection reset"))
    async with run_app(client=client) as (pilot, app):
        app.action_toggle_code_panel()
        await pilot.pause()
        app.action_run_code()
        await wait_for_run(pilot)

        assert app.is_running
        assert app.runs.state is RunState.IDLE
        assert "Error: connection reset" in _output_text(app)
        assert not app.query_one("#run-button").disabled
        assert not app.query_one("#language-select").disabled


async def test_run_key_ignored_when_panel_hidden():
    client = FakeExecutionClient()
    async with run_app(client=client) as (pilot, app):
        await press_and_settle(pilot, "f5")
        assert client.calls == []
        assert app.runs.state is RunState.IDLE


async def test_controls_locked_while_running():
    gate = threading.Event()
    client = FakeExecutionClient(Output("done\n"), gate=gate)
    async with run_app(client=client) as (pilot, app):
        app.action_toggle_code_panel()
        await pilot.pause()
        app.action_run_code()
        await pilot.pause()

        assert app.runs.is_running
        assert RUNNING_PLACEHOLDER in _output_text(app)
        assert app.query_one("#language-select").disabled
        assert app.query_one("#run-button").disabled
        assert app.query_one("#code-close").disabled

        # Resubmitting and closing are both refused mid-run.
        app.action_run_code()
        app.action_close_code_panel()
        assert app.visibility.show_code_panel

        gate.set()
        await wait_for_run(pilot)
        assert len(client.calls) == 1
        assert not app.query_one("#run-button").disabled
        assert "done" in _output_text(app)


async def test_language_select_changes_language_and_clears_output():
    async with run_app() as (pilot, app):
        app.action_toggle_code_panel()
        await pilot.pause()
        app.runs.finish(Output("old output"))
        await pilot.pause()

        app.query_one("#language-select").value = "python"
        await pilot.pause()

        assert app.runs.language_key == "python"
        assert app.runs.result_text == ""


async def test_editor_edits_flow_into_source():
    async with run_app() as (pilot, app):
        app.action_toggle_code_panel()
        await pilot.pause()
        editor = app.query_one("#code-panel").editor
        editor.clear()
        editor.insert("print(1+1)")
        await pilot.pause()
        assert app.runs.source == "print(1+1)"


async def test_default_language_from_config():
    config = RunnerConfig(default_language="python")
    async with run_app(config=config) as (pilot, app):
        assert app.runs.language_key == "python"


async def test_unknown_default_language_falls_back():
    config = RunnerConfig(default_language="ruby")
    async with run_app(config=config) as (pilot, app):
        assert app.runs.language_key == "javascript"


async def test_layout_cycle_is_persisted():
    async with run_app() as (pilot, app):
        await press_and_settle(pilot, "l")
        assert app.call_layout.value == "speaker-right"
        assert load_setting("call_layout") == "speaker-right"


async def test_personal_room_has_no_end_call_button():
    async with run_app(personal_room=True) as (pilot, app):
        assert not app.query("#btn-end-call")
        assert app.query("#btn-leave")


async def test_leave_button_leaves_call():
    call = make_call()
    async with run_app(call=call) as (pilot, app):
        await pilot.click("#btn-leave")
    assert call.calling_state is CallingState.LEFT
