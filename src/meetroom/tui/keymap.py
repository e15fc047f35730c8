"""Key and button -> action tables for the meeting room.

on_key in the app is the sole key dispatcher; keys typed into the editor
are consumed there and never reach this table. Lockout keys never reach it
either, the lockout session swallows them first.
"""

# [LAW:one-source-of-truth] Key->action mapping.
ROOM_KEYMAP: dict[str, str] = {
    "p": "toggle_participants",
    "f3": "toggle_participants",
    "e": "toggle_code_panel",
    "f2": "toggle_code_panel",
    "l": "cycle_layout",
    "f4": "cycle_layout",
    "ctrl+r": "run_code",
    "f5": "run_code",
}

# [LAW:one-source-of-truth] Button id->action mapping.
BUTTON_ACTIONS: dict[str, str] = {
    "btn-layout": "cycle_layout",
    "btn-participants": "toggle_participants",
    "btn-code": "toggle_code_panel",
    "btn-leave": "leave_call",
    "btn-end-call": "end_call",
    "run-button": "run_code",
    "code-close": "close_code_panel",
    "participants-close": "close_participants",
}

KEY_HELP: list[tuple[str, str]] = [
    ("p / F3", "participants"),
    ("e / F2", "code editor"),
    ("l / F4", "layout"),
    ("Ctrl+R / F5", "run code"),
    ("Ctrl+Q", "leave"),
]
