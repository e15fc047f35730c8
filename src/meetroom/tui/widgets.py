"""Meeting room widgets.

Widgets hold no room state; the app pushes display values into them through
their update_* methods.

// [LAW:single-enforcer] update_* is the sole render entry for each widget.
"""

from __future__ import annotations

from dataclasses import dataclass

from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.widgets import Button, Select, Static, TextArea

import meetroom.tui.panel_renderers
from meetroom.app.notices import Notice
from meetroom.app.room_state import CallLayout
from meetroom.core.languages import LANGUAGES, LanguageOption


@dataclass
class CodePanelState:
    """Display state pushed from app.py to the code panel."""

    running: bool
    output_text: str


class NoticeBanner(Static):
    DEFAULT_CSS = """
    NoticeBanner {
        dock: top;
        width: 100%;
        height: auto;
        padding: 0 2;
        background: $error;
        color: $text;
        text-style: bold;
        content-align: center middle;
        display: none;
    }
    """

    def update_notice(self, notice: Notice | None) -> None:
        self.display = notice is not None
        self.update(notice.message if notice is not None else "")


class CallStage(Static):
    DEFAULT_CSS = """
    CallStage {
        width: 1fr;
        height: 1fr;
        padding: 1 2;
        border: round $primary;
    }

    CallStage.-minimized {
        width: 30;
        height: 6;
    }
    """

    def update_stage(self, layout: CallLayout, participants: list[str], minimized: bool) -> None:
        self.set_class(minimized, "-minimized")
        self.update(meetroom.tui.panel_renderers.render_stage(layout, participants, minimized))


class ParticipantsList(Vertical):
    DEFAULT_CSS = """
    ParticipantsList {
        display: none;
        width: 32;
        height: 1fr;
        margin-left: 1;
        padding: 0 1;
        border: round $accent;
    }

    ParticipantsList #participants-body {
        height: 1fr;
    }
    """

    def compose(self) -> ComposeResult:
        yield Static("", id="participants-body")
        yield Button("Close", id="participants-close")

    def update_participants(self, participants: list[str]) -> None:
        body = self.query_one("#participants-body", Static)
        body.update(meetroom.tui.panel_renderers.render_participants(participants))


class CodePanel(Vertical):
    """Editor, language picker, run button and output pane."""

    DEFAULT_CSS = """
    CodePanel {
        display: none;
        width: 1fr;
        height: 1fr;
        margin-left: 1;
        padding: 0 1;
        background: $panel;
        border: round $secondary;
    }

    CodePanel #code-header {
        height: 3;
    }

    CodePanel #code-title {
        width: 1fr;
        padding: 1 0;
        text-style: bold;
    }

    CodePanel #language-select {
        width: 20;
    }

    CodePanel #code-body {
        height: 1fr;
    }

    CodePanel #code-editor {
        width: 1fr;
        height: 1fr;
    }

    CodePanel #code-output-scroll {
        width: 1fr;
        height: 1fr;
        background: $surface;
        padding: 0 1;
    }
    """

    def __init__(self, language_key: str, source: str, **kwargs) -> None:
        super().__init__(**kwargs)
        self._language_key = language_key
        self._source = source
        self.output_text = ""

    def compose(self) -> ComposeResult:
        with Horizontal(id="code-header"):
            yield Static("Code Editor", id="code-title")
            yield Select(
                [(option.label, option.key) for option in LANGUAGES],
                value=self._language_key,
                allow_blank=False,
                id="language-select",
            )
            yield Button("Run ▶", id="run-button", variant="success")
            yield Button("×", id="code-close")
        with Horizontal(id="code-body"):
            yield TextArea.code_editor(self._source, id="code-editor")
            with VerticalScroll(id="code-output-scroll"):
                yield Static("", id="code-output")

    @property
    def editor(self) -> TextArea:
        return self.query_one("#code-editor", TextArea)

    def apply_editor_language(self, option: LanguageOption) -> None:
        """Highlight as *option* when the editor supports it, else plain text."""
        editor = self.editor
        wanted = option.editor_language
        editor.language = wanted if wanted in editor.available_languages else None

    def update_display(self, state: CodePanelState) -> None:
        self.output_text = state.output_text
        # Selector, run and close stay locked while a run is in flight.
        self.query_one("#language-select", Select).disabled = state.running
        self.query_one("#run-button", Button).disabled = state.running
        self.query_one("#code-close", Button).disabled = state.running
        self.query_one("#code-output", Static).update(
            meetroom.tui.panel_renderers.render_output(state.output_text, state.running)
        )


class ControlBar(Horizontal):
    DEFAULT_CSS = """
    ControlBar {
        dock: bottom;
        height: auto;
        align: center middle;
    }

    ControlBar Button {
        margin: 0 1;
    }

    ControlBar #key-help {
        width: auto;
        padding: 1 1;
    }
    """

    def __init__(self, personal_room: bool = False, **kwargs) -> None:
        super().__init__(**kwargs)
        self._personal_room = personal_room

    def compose(self) -> ComposeResult:
        yield Button("Layout", id="btn-layout")
        yield Button("Participants", id="btn-participants")
        yield Button("Code", id="btn-code")
        yield Button("Leave", id="btn-leave", variant="warning")
        # Personal rooms are not ended for everyone.
        if not self._personal_room:
            yield Button("End call", id="btn-end-call", variant="error")
        yield Static(meetroom.tui.panel_renderers.render_key_help(), id="key-help")
