"""Focus lockout: swallow window-switching shortcuts during a meeting.

The room owns one LockoutSession, attaches it on mount and detaches it on
unmount. While attached, matching key events have their default action
prevented and a notice is shown.

Terminals rarely deliver Alt+Tab (the window manager takes it first), so the
Alt+Tab notice says the block may not hold.

// [LAW:dataflow-not-control-flow] LOCKOUT_RULES is data; intercept() walks it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from meetroom.app.notices import NoticeQueue

logger = logging.getLogger(__name__)

_MODIFIERS = ("ctrl", "alt", "shift", "meta", "super")
_ALIASES = {"control": "ctrl", "option": "alt", "esc": "escape", "cmd": "super"}


@dataclass(frozen=True)
class LockoutRule:
    name: str
    key: str
    modifier: str | None
    message: str

    def matches(self, modifiers: frozenset[str], key: str) -> bool:
        if key != self.key:
            return False
        return self.modifier is None or self.modifier in modifiers


LOCKOUT_RULES: tuple[LockoutRule, ...] = (
    LockoutRule("escape", "escape", None, "Escape key is disabled during the meeting."),
    LockoutRule("ctrl+tab", "tab", "ctrl", "Ctrl+Tab is disabled during the meeting."),
    LockoutRule(
        "alt+tab",
        "tab",
        "alt",
        "Alt+Tab is disabled during the meeting (browser may override).",
    ),
)


def parse_key(key: str) -> tuple[frozenset[str], str]:
    """Split a Textual key name like ``ctrl+shift+tab`` into (modifiers, key)."""
    parts = [_ALIASES.get(p, p) for p in key.lower().split("+") if p]
    if not parts:
        return frozenset(), ""
    mods = frozenset(p for p in parts[:-1] if p in _MODIFIERS)
    return mods, parts[-1]


class LockoutSession:
    def __init__(self, notices: NoticeQueue, rules: tuple[LockoutRule, ...] = LOCKOUT_RULES) -> None:
        self._notices = notices
        self._rules = rules
        self.attached = False

    def attach(self) -> None:
        self.attached = True
        logger.info("lockout_attached rules=%s", ",".join(r.name for r in self._rules))

    def detach(self) -> None:
        self.attached = False
        logger.info("lockout_detached")

    def matching_rules(self, key: str) -> list[LockoutRule]:
        modifiers, base = parse_key(key)
        return [rule for rule in self._rules if rule.matches(modifiers, base)]

    def intercept(self, event: Any) -> bool:
        """Suppress *event* if it matches a rule. Returns True when suppressed.

        Must run inside the event's own dispatch so prevent_default() lands
        before any widget or binding sees the key.
        """
        if not self.attached:
            return False
        matched = self.matching_rules(event.key)
        if not matched:
            return False
        event.prevent_default()
        event.stop()
        # Later rules win: ctrl+alt+tab ends on the Alt+Tab notice.
        for rule in matched:
            self._notices.enqueue(rule.message)
            logger.info("lockout_blocked combo=%s", rule.name)
        return True
