"""Main TUI application using Textual.

// [LAW:locality-or-seam] Thin coordinator. Run lifecycle lives in
//   app.run_controller, notices in app.notices, key lockout in app.lockout,
//   layout flags in app.room_state. This module wires them to widgets.
// [LAW:single-enforcer] on_event is where lockout keys are swallowed;
//   on_key is the sole dispatcher for everything else.
"""

from __future__ import annotations

import logging
import time
from typing import Callable

from textual import events
from textual.app import App, ComposeResult
from textual.containers import Horizontal
from textual.css.query import NoMatches
from textual.widgets import Button, Header, LoadingIndicator, Select, TextArea

import meetroom.io.settings
from meetroom.app.calling import CallingState, LocalCall
from meetroom.app.lockout import LockoutSession
from meetroom.app.notices import NoticeQueue
from meetroom.app.room_state import CallLayout, PanelVisibility, next_layout
from meetroom.app.run_controller import RunController
from meetroom.core import languages
from meetroom.core.execution import ExecutionClient
from meetroom.io.settings import RunnerConfig
from meetroom.tui.keymap import BUTTON_ACTIONS, ROOM_KEYMAP
from meetroom.tui.widgets import (
    CallStage,
    CodePanel,
    CodePanelState,
    ControlBar,
    NoticeBanner,
    ParticipantsList,
)

logger = logging.getLogger(__name__)


class MeetingRoomApp(App):
    """Meeting room with an in-call code runner."""

    TITLE = "meetroom"

    CSS = """
    #loading {
        height: 1fr;
    }

    #room {
        height: 1fr;
    }
    """

    def __init__(
        self,
        call: LocalCall,
        client: ExecutionClient | None = None,
        config: RunnerConfig | None = None,
        personal_room: bool = False,
        clock: Callable[[], float] = time.monotonic,
    ):
        super().__init__()
        self._call = call
        self._config = config or RunnerConfig()
        self._personal_room = personal_room
        self._closing = False

        client = client or ExecutionClient(
            execute_url=self._config.execute_url,
            request_timeout=self._config.request_timeout,
        )
        language_key = self._config.default_language
        if not languages.is_known(language_key):
            logger.warning("unknown_default_language key=%s fallback=%s", language_key, languages.DEFAULT_LANGUAGE)
            language_key = languages.DEFAULT_LANGUAGE

        self.visibility = PanelVisibility()
        self.call_layout = CallLayout.parse(self._config.call_layout)
        self.runs = RunController(client, language_key=language_key)
        self.notices = NoticeQueue(clock=clock, schedule=self._schedule_notice_expiry)
        self.lockout = LockoutSession(self.notices)

        self.runs.subscribe(self._sync_code_panel)
        self.notices.subscribe(self._sync_notice)
        self._call.subscribe(self._on_call_state)

        self.sub_title = f"room: {call.call_id}"

    # ─── Widget accessors ──────────────────────────────────────────────

    def _query_safe(self, selector):
        try:
            return self.query_one(selector)
        except NoMatches:
            return None

    def _get_code_panel(self) -> CodePanel | None:
        return self._query_safe("#code-panel")

    # ─── Lifecycle ─────────────────────────────────────────────────────

    def compose(self) -> ComposeResult:
        yield Header()
        yield NoticeBanner(id="notice")
        yield LoadingIndicator(id="loading")
        with Horizontal(id="room"):
            yield CallStage(id="stage")
            yield ParticipantsList(id="participants")
            yield CodePanel(self.runs.language_key, self.runs.source, id="code-panel")
        yield ControlBar(personal_room=self._personal_room, id="controls")

    def on_mount(self) -> None:
        self.lockout.attach()
        panel = self._get_code_panel()
        if panel is not None:
            panel.apply_editor_language(languages.get_option(self.runs.language_key))
        self._sync_room()
        if self._call.calling_state is not CallingState.JOINED:
            self.call_after_refresh(self._call.join)

    def on_unmount(self) -> None:
        self._closing = True
        self.lockout.detach()
        logger.info("room_closed call=%s", self._call.call_id)

    # ─── Key dispatch ──────────────────────────────────────────────────

    async def on_event(self, event: events.Event) -> None:
        # Runs before bindings and before the focused widget sees the key.
        if isinstance(event, events.Key) and self.lockout.intercept(event):
            return
        await super().on_event(event)

    async def on_key(self, event: events.Key) -> None:
        action_name = ROOM_KEYMAP.get(event.key)
        if action_name:
            event.prevent_default()
            await self.run_action(action_name)

    async def on_button_pressed(self, event: Button.Pressed) -> None:
        action_name = BUTTON_ACTIONS.get(event.button.id or "")
        if action_name:
            event.stop()
            await self.run_action(action_name)

    def on_select_changed(self, event: Select.Changed) -> None:
        if event.select.id != "language-select" or event.value is Select.BLANK:
            return
        language_key = str(event.value)
        if self.runs.select_language(language_key):
            panel = self._get_code_panel()
            if panel is not None:
                panel.apply_editor_language(languages.get_option(language_key))

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        if event.text_area.id == "code-editor":
            self.runs.update_source(event.text_area.text)

    # ─── Actions ───────────────────────────────────────────────────────

    def action_toggle_participants(self) -> None:
        self.visibility.toggle_participants()
        self._sync_room()

    def action_close_participants(self) -> None:
        self.visibility.close_participants()
        self._sync_room()

    def action_toggle_code_panel(self) -> None:
        shown = self.visibility.toggle_code_panel()
        self._sync_room()
        panel = self._get_code_panel()
        if shown and panel is not None:
            panel.editor.focus()

    def action_close_code_panel(self) -> None:
        if self.runs.is_running:
            return
        self.visibility.close_code_panel()
        self._sync_room()

    def action_cycle_layout(self) -> None:
        self.call_layout = next_layout(self.call_layout)
        try:
            meetroom.io.settings.save_setting("call_layout", self.call_layout.value)
        except OSError as e:
            logger.warning("layout_not_saved error=%s", e)
        self._sync_room()

    def action_run_code(self) -> None:
        if not self.visibility.show_code_panel:
            return
        ticket = self.runs.begin()
        if ticket is None:
            return
        self.run_worker(
            self.runs.execute(ticket),
            name="code-run",
            group="code-run",
            exit_on_error=False,
        )

    def action_leave_call(self) -> None:
        self._call.leave()
        self.exit()

    def action_end_call(self) -> None:
        logger.info("call_ended_for_everyone call=%s", self._call.call_id)
        self._call.leave()
        self.exit()

    def action_quit(self) -> None:
        self.action_leave_call()

    # ─── State -> widgets ──────────────────────────────────────────────

    def _schedule_notice_expiry(self, delay: float, callback: Callable[[], None]):
        return self.set_timer(delay, callback, name="notice-expiry")

    def _on_call_state(self, state: CallingState) -> None:
        if not self._closing:
            self._sync_room()

    def _sync_room(self) -> None:
        joined = self._call.calling_state is CallingState.JOINED
        for selector, shown in (("#loading", not joined), ("#room", joined), ("#controls", joined)):
            widget = self._query_safe(selector)
            if widget is not None:
                widget.display = shown

        stage = self._query_safe("#stage")
        if stage is not None:
            stage.update_stage(
                self.call_layout,
                self._call.participants,
                minimized=self.visibility.show_code_panel,
            )

        participants = self._query_safe("#participants")
        if participants is not None:
            participants.display = self.visibility.participants_rendered
            participants.update_participants(self._call.participants)

        panel = self._get_code_panel()
        if panel is not None:
            panel.display = self.visibility.show_code_panel
        self._sync_code_panel()

    def _sync_code_panel(self) -> None:
        panel = self._get_code_panel()
        if panel is None:
            return
        panel.update_display(
            CodePanelState(running=self.runs.is_running, output_text=self.runs.display_text)
        )

    def _sync_notice(self) -> None:
        banner = self._query_safe("#notice")
        if banner is not None:
            banner.update_notice(self.notices.current)
