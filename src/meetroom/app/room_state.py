"""Meeting room layout state: panel visibility and call layout.

The participants list and the code panel toggle independently. The code
panel hides the participants list at render time only, so both flags can
be on at once; turning the code panel off brings the list back.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class CallLayout(Enum):
    GRID = "grid"
    SPEAKER_LEFT = "speaker-left"
    SPEAKER_RIGHT = "speaker-right"

    @property
    def title(self) -> str:
        return self.value.title()

    @classmethod
    def parse(cls, value: str | None) -> "CallLayout":
        """Parse a layout name; unknown names fall back to speaker-left."""
        for layout in cls:
            if layout.value == (value or "").strip().lower():
                return layout
        return cls.SPEAKER_LEFT


LAYOUT_CYCLE = [CallLayout.GRID, CallLayout.SPEAKER_LEFT, CallLayout.SPEAKER_RIGHT]


@dataclass
class PanelVisibility:
    show_participants: bool = False
    show_code_panel: bool = False

    @property
    def participants_rendered(self) -> bool:
        return self.show_participants and not self.show_code_panel

    def toggle_participants(self) -> bool:
        self.show_participants = not self.show_participants
        return self.show_participants

    def toggle_code_panel(self) -> bool:
        self.show_code_panel = not self.show_code_panel
        return self.show_code_panel

    def close_participants(self) -> None:
        self.show_participants = False

    def close_code_panel(self) -> None:
        self.show_code_panel = False


def next_layout(current: CallLayout) -> CallLayout:
    idx = LAYOUT_CYCLE.index(current)
    return LAYOUT_CYCLE[(idx + 1) % len(LAYOUT_CYCLE)]
