"""
Hover intent recognizer.

Converts pointer enter/leave events on the panel into debounced expand and
collapse actions. At most one settle timer is outstanding; arming a new one
always cancels the previous one, so the most recent pointer event decides the
outcome. Both directions re-read the host page when the timer fires.
"""

from typing import Optional

from ..config.defaults import IntentTimings
from ..errors import IntentTransitionError
from ..logging.config import get_intent_logger, log_intent_transition
from ..panel.actuator import ToggleActuator
from ..panel.guards import GuardEvaluator
from ..panel.locator import PanelLocator
from ..utils.timers import Scheduler
from .models import HoverIntent, IntentDirection, IntentState, PanelState

intent_logger = get_intent_logger(__name__)


class IntentRecognizer:
    """
    Three-state machine: IDLE, PENDING_EXPAND, PENDING_COLLAPSE.

    pointer_enter:  IDLE → PENDING_EXPAND, PENDING_EXPAND → PENDING_EXPAND
                    (restarted), PENDING_COLLAPSE → IDLE.
    pointer_leave:  PENDING_EXPAND → IDLE, IDLE / PENDING_COLLAPSE →
                    PENDING_COLLAPSE if collapsing is allowed now, else IDLE.
    timer fires:    re-check, toggle if still applicable, → IDLE.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        locator: PanelLocator,
        guards: GuardEvaluator,
        actuator: ToggleActuator,
        timings: Optional[IntentTimings] = None
    ) -> None:
        self.scheduler = scheduler
        self.locator = locator
        self.guards = guards
        self.actuator = actuator
        self.timings = timings or IntentTimings()
        self.logger = intent_logger
        self._pending: Optional[HoverIntent] = None
        self.collapsed_by_engine = False

    @property
    def state(self) -> IntentState:
        if self._pending is None:
            return IntentState.IDLE
        return self._pending.direction.pending_state

    @property
    def pending(self) -> Optional[HoverIntent]:
        return self._pending

    def pointer_enter(self) -> None:
        if self.state is IntentState.PENDING_COLLAPSE:
            self._cancel_pending("pointer_enter")
            return

        if self.locator.panel_state() is PanelState.EXPANDED:
            self._cancel_pending("pointer_enter")
            return

        self._arm(IntentDirection.EXPAND, self.timings.expand_delay_ms, "pointer_enter")

    def pointer_leave(self) -> None:
        if self.state is IntentState.PENDING_EXPAND:
            self._cancel_pending("pointer_leave")
            return

        self.request_collapse(trigger="pointer_leave")

    def request_collapse(self, trigger: str = "request_collapse") -> None:
        """Arm a collapse if one is allowed right now; otherwise stay idle."""
        self._cancel_pending(trigger)

        if self.locator.panel_state() is PanelState.COLLAPSED:
            return

        if not self.guards.may_collapse():
            self.logger.debug("Collapse not armed, guard active", trigger=trigger)
            return

        self._arm(IntentDirection.COLLAPSE, self.timings.collapse_delay_ms, trigger)

    def cancel(self) -> None:
        """Drop any pending intent without acting."""
        self._cancel_pending("cancel")

    def reset(self) -> None:
        self.cancel()
        self.collapsed_by_engine = False

    def _arm(self, direction: IntentDirection, delay_ms: int, trigger: str) -> None:
        previous = self.state
        if self._pending is not None:
            self._pending.cancel()

        fire_at = self.scheduler.now_ms() + delay_ms
        handle = self.scheduler.call_later(delay_ms, self._on_timer, direction)
        self._pending = HoverIntent(direction=direction, fire_at_ms=fire_at, handle=handle)

        log_intent_transition(
            self.logger,
            from_state=previous.value,
            to_state=self.state.value,
            trigger=trigger,
            context={"delay_ms": delay_ms, "fire_at_ms": fire_at}
        )

    def _cancel_pending(self, trigger: str) -> None:
        if self._pending is None:
            return

        previous = self.state
        self._pending.cancel()
        self._pending = None
        log_intent_transition(
            self.logger,
            from_state=previous.value,
            to_state=IntentState.IDLE.value,
            trigger=trigger
        )

    def _on_timer(self, direction: IntentDirection) -> None:
        # Runs on the host event loop; nothing may propagate from here
        try:
            self._settle(direction)
        except Exception as e:
            self._pending = None
            self.logger.error(
                "Hover intent failed to settle",
                direction=direction.value,
                error=str(e),
                error_type=type(e).__name__
            )

    def _settle(self, direction: IntentDirection) -> None:
        if self._pending is None or self._pending.direction is not direction:
            raise IntentTransitionError(
                "Settle timer fired without a matching pending intent",
                current_state=self.state.value,
                attempted_transition=f"{direction.value}->idle",
            )

        self._pending = None
        log_intent_transition(
            self.logger,
            from_state=direction.pending_state.value,
            to_state=IntentState.IDLE.value,
            trigger="settled"
        )

        panel_state = self.locator.panel_state()
        if panel_state is not direction.required_panel_state:
            self.logger.debug(
                "Panel already in target state, discarding intent",
                direction=direction.value,
                panel_state=panel_state.value
            )
            return

        if direction is IntentDirection.COLLAPSE:
            if not self.guards.may_collapse():
                self.logger.debug("Collapse discarded, guard active at fire time")
                return
            if self.actuator.toggle(reason="hover_collapse"):
                self.collapsed_by_engine = True
        else:
            if self.actuator.toggle(reason="hover_expand"):
                self.collapsed_by_engine = False
