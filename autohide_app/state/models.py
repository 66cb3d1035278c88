"""
State machine data models for the hover intent recognizer.

Panel state is inferred fresh for every decision; these types only describe
the engine's own transient bookkeeping.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class PanelState(str, Enum):
    """Panel visibility as read from the host page."""
    COLLAPSED = "collapsed"
    EXPANDED = "expanded"
    UNKNOWN = "unknown"


class IntentState(str, Enum):
    """Hover intent recognizer states."""
    IDLE = "idle"
    PENDING_EXPAND = "pending_expand"
    PENDING_COLLAPSE = "pending_collapse"


class IntentDirection(str, Enum):
    """What a pending intent will do when it settles."""
    EXPAND = "expand"
    COLLAPSE = "collapse"

    @property
    def pending_state(self) -> IntentState:
        if self is IntentDirection.EXPAND:
            return IntentState.PENDING_EXPAND
        return IntentState.PENDING_COLLAPSE

    @property
    def required_panel_state(self) -> PanelState:
        """Panel state that must still hold when the intent fires."""
        if self is IntentDirection.EXPAND:
            return PanelState.COLLAPSED
        return PanelState.EXPANDED


class EngineLifecycle(str, Enum):
    """Controller lifecycle."""
    STOPPED = "stopped"
    RUNNING = "running"


@dataclass(frozen=True)
class HoverIntent:
    """The single outstanding settle timer."""

    direction: IntentDirection
    fire_at_ms: float
    handle: Any                                      # Scheduler TimerHandle

    def cancel(self) -> None:
        self.handle.cancel()
