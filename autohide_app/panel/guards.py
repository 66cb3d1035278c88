"""
Collapse guards.

An automatic collapse is allowed only while nothing on the page indicates the
user is still working with the panel. The checks read the live document at
call time, so a guard that appears or disappears while a collapse is pending
is honoured when the collapse fires.
"""

from typing import Optional

from ..logging.config import get_guard_logger, log_guard_decision
from ..utils.timers import Scheduler
from .locator import PanelLocator

guard_logger = get_guard_logger(__name__)


class CollapsePause:
    """Time window during which collapsing is suspended."""

    def __init__(self, scheduler: Scheduler) -> None:
        self.scheduler = scheduler
        self.paused_until_ms = 0.0

    def pause(self, duration_ms: float) -> None:
        self.paused_until_ms = self.scheduler.now_ms() + duration_ms

    def is_paused(self) -> bool:
        return self.scheduler.now_ms() < self.paused_until_ms

    def reset(self) -> None:
        self.paused_until_ms = 0.0


class GuardEvaluator:
    """Decides whether an automatic collapse is currently allowed."""

    def __init__(self, locator: PanelLocator, pause: Optional[CollapsePause] = None) -> None:
        self.locator = locator
        self.pause = pause
        self.guard_logger = guard_logger

    def may_collapse(self) -> bool:
        """
        True iff no check blocks a collapse right now.

        Checks, in order: pinned-open panel, visible guard elements, a pause
        after a menu click, and the pointer still resting over the panel or a
        guard element.
        """
        if self.locator.is_pinned():
            log_guard_decision(self.guard_logger, "pinned", False, "Panel is pinned open")
            return False

        guards = self.locator.find_guards()
        if guards:
            log_guard_decision(
                self.guard_logger,
                "visible_guard",
                False,
                "Dialog or menu is open",
                context={"guards": sorted(repr(guard) for guard in guards)}
            )
            return False

        if self.pause is not None and self.pause.is_paused():
            log_guard_decision(
                self.guard_logger,
                "menu_pause",
                False,
                "Collapse paused after menu interaction",
                context={"paused_until_ms": self.pause.paused_until_ms}
            )
            return False

        if self.pointer_over_panel_area():
            log_guard_decision(self.guard_logger, "pointer_over", False, "Pointer is over the panel area")
            return False

        log_guard_decision(self.guard_logger, "all", True, "No guard blocks collapse")
        return True

    def pointer_over_panel_area(self) -> bool:
        panel = self.locator.find_panel()
        if panel is not None and panel.hovered:
            return True
        return any(candidate.hovered for candidate in self.locator.find_guard_candidates())
