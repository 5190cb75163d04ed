"""Client-side proctoring watchers for the student kiosk.

These checks are deterrence, not enforcement. Everything here runs on the
student's own machine, so a student who controls that machine can defeat
any of it (a second device, a VM, a patched client, reading network
traffic). Nothing the server trusts depends on this module.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable

from quiz_guard.constants.quiz_constants import MAX_TAB_SWITCHES
from quiz_guard.constants.ui_constants import (
    FULLSCREEN_TERMINATED_MESSAGE,
    SHORTCUT_BLOCKED_MESSAGE,
    TAB_SWITCH_TERMINATED_MESSAGE,
    TAB_SWITCH_WARNING_TEMPLATE,
)
from quiz_guard.core.services.delivery_session import CompletionReason, DeliverySession

logger = logging.getLogger(__name__)

# (key, ctrl, shift) combinations that open developer tools or page source.
_BLOCKED_SHORTCUTS: frozenset[tuple[str, bool, bool]] = frozenset(
    {
        ("F12", False, False),
        ("I", True, True),
        ("J", True, True),
        ("C", True, True),
        ("U", True, False),
    }
)


class ProctoringEvent(Enum):
    TAB_SWITCH_WARNING = auto()
    TAB_SWITCH_TERMINATED = auto()
    FULLSCREEN_TERMINATED = auto()
    SHORTCUT_BLOCKED = auto()


@dataclass(slots=True)
class ProctoringNotice:
    event: ProctoringEvent
    message: str
    strikes: int


class ProctoringMonitor:
    """Turns focus, fullscreen and keyboard events into warnings or forced submission.

    Tab switches are tolerated up to ``max_strikes - 1`` times; leaving
    fullscreen ends the quiz at once. Each watcher escalates through
    ``DeliverySession.force_complete``, which is what keeps two watchers
    firing together from submitting twice.
    """

    def __init__(
        self,
        session: DeliverySession,
        *,
        max_strikes: int = MAX_TAB_SWITCHES,
        notify: Callable[[ProctoringNotice], None] | None = None,
    ) -> None:
        self._session = session
        self._max_strikes = max_strikes
        self._notify = notify
        self._strikes = 0
        self._active = True

    @property
    def strikes(self) -> int:
        return self._strikes

    @property
    def blocks_context_menu(self) -> bool:
        return self._session.is_in_progress

    def on_application_state(self, active: bool) -> ProctoringNotice | None:
        """Count a strike only on the edge from active to not active.

        Platforms report one switch-away as several states in a row
        (Inactive then Hidden, Inactive then Suspended).
        """
        was_active, self._active = self._active, active
        if active or not was_active:
            return None
        return self.on_visibility_hidden()

    def on_visibility_hidden(self) -> ProctoringNotice | None:
        if not self._session.is_in_progress:
            return None
        self._strikes += 1
        if self._strikes >= self._max_strikes:
            logger.warning("Tab switch strike %d/%d: terminating", self._strikes, self._max_strikes)
            self._session.force_complete(CompletionReason.TAB_SWITCH)
            return self._emit(ProctoringEvent.TAB_SWITCH_TERMINATED, TAB_SWITCH_TERMINATED_MESSAGE)
        logger.warning("Tab switch strike %d/%d", self._strikes, self._max_strikes)
        return self._emit(
            ProctoringEvent.TAB_SWITCH_WARNING,
            TAB_SWITCH_WARNING_TEMPLATE.format(count=self._strikes, limit=self._max_strikes),
        )

    def on_fullscreen_exit(self) -> ProctoringNotice | None:
        if not self._session.is_in_progress:
            return None
        logger.warning("Fullscreen left during quiz: terminating")
        self._session.force_complete(CompletionReason.FULLSCREEN_EXIT)
        return self._emit(ProctoringEvent.FULLSCREEN_TERMINATED, FULLSCREEN_TERMINATED_MESSAGE)

    def should_block_key(self, key: str, *, ctrl: bool = False, shift: bool = False) -> bool:
        """Return True when a developer-tool shortcut should be swallowed."""
        if not self._session.is_in_progress:
            return False
        if (key.upper(), ctrl, shift) not in _BLOCKED_SHORTCUTS:
            return False
        self._emit(ProctoringEvent.SHORTCUT_BLOCKED, SHORTCUT_BLOCKED_MESSAGE)
        return True

    def _emit(self, event: ProctoringEvent, message: str) -> ProctoringNotice:
        notice = ProctoringNotice(event=event, message=message, strikes=self._strikes)
        if self._notify is not None:
            self._notify(notice)
        return notice
