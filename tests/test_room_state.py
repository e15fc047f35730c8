"""Tests for panel visibility and call layout state."""

from meetroom.app.room_state import CallLayout, PanelVisibility, next_layout


def test_toggles_are_independent_negations():
    vis = PanelVisibility()
    assert vis.toggle_participants() is True
    assert vis.toggle_code_panel() is True
    assert vis.show_participants and vis.show_code_panel
    assert vis.toggle_participants() is False
    assert vis.show_code_panel


def test_code_panel_hides_participants_only_at_render_time():
    vis = PanelVisibility(show_participants=True)
    assert vis.participants_rendered

    vis.toggle_code_panel()
    assert vis.show_participants
    assert not vis.participants_rendered

    vis.toggle_code_panel()
    assert vis.participants_rendered


def test_close_helpers():
    vis = PanelVisibility(show_participants=True, show_code_panel=True)
    vis.close_participants()
    vis.close_code_panel()
    assert vis == PanelVisibility()


def test_layout_cycle_wraps():
    layout = CallLayout.GRID
    seen = []
    for _ in range(3):
        layout = next_layout(layout)
        seen.append(layout)
    assert seen == [CallLayout.SPEAKER_LEFT, CallLayout.SPEAKER_RIGHT, CallLayout.GRID]


def test_layout_parse():
    assert CallLayout.parse("grid") is CallLayout.GRID
    assert CallLayout.parse(" Speaker-Right ") is CallLayout.SPEAKER_RIGHT
    assert CallLayout.parse("mosaic") is CallLayout.SPEAKER_LEFT
    assert CallLayout.parse(None) is CallLayout.SPEAKER_LEFT
    assert CallLayout.SPEAKER_LEFT.title == "Speaker-Left"
