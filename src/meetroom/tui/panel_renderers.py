"""Panel rendering logic - pure functions for building display text.

Program output is appended as plain text, never parsed as markup.
"""

from __future__ import annotations

from rich.text import Text

from meetroom.app.room_state import CallLayout
from meetroom.tui.keymap import KEY_HELP


def _tile(name: str, width: int) -> str:
    label = name if len(name) <= width - 4 else name[: width - 5] + "…"
    return "[ " + label.center(width - 4) + " ]"


def render_stage(layout: CallLayout, participants: list[str], minimized: bool = False) -> Text:
    """Render the call stage: a speaker tile plus a participant bar, or a grid."""
    text = Text()
    text.append(f"Layout: {layout.title}", style="bold")
    text.append("\n")
    if not participants:
        text.append("Waiting for participants…", style="dim")
        return text

    if minimized:
        text.append(participants[0])
        if len(participants) > 1:
            text.append(f" +{len(participants) - 1}", style="dim")
        return text

    tile_width = 18
    if layout is CallLayout.GRID:
        per_row = 3
        for start in range(0, len(participants), per_row):
            row = participants[start : start + per_row]
            text.append(" ".join(_tile(name, tile_width) for name in row))
            text.append("\n")
        return text

    speaker, others = participants[0], participants[1:]
    bar = " ".join(_tile(name, tile_width) for name in others)
    speaker_tile = _tile(speaker, tile_width * 2)
    # Speaker-left puts the participant bar on the right, and vice versa.
    if layout is CallLayout.SPEAKER_LEFT:
        text.append(speaker_tile, style="bold")
        if bar:
            text.append("  " + bar)
    else:
        if bar:
            text.append(bar + "  ")
        text.append(speaker_tile, style="bold")
    return text


def render_participants(participants: list[str]) -> Text:
    text = Text()
    text.append(f"Participants ({len(participants)})", style="bold")
    for name in participants:
        text.append("\n• ")
        text.append(name)
    return text


def render_output(output: str, running: bool) -> Text:
    return Text(output, style="italic dim" if running else "")


def render_key_help() -> Text:
    text = Text()
    for i, (keys, label) in enumerate(KEY_HELP):
        if i:
            text.append("  ")
        text.append(keys, style="bold")
        text.append(f" {label}", style="dim")
    return text
