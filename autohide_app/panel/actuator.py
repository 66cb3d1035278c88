"""Toggle activation: the engine's only write into the host page."""

from typing import Optional

import structlog

from ..errors import PanelNotFoundError
from .locator import PanelLocator

logger = structlog.get_logger(__name__)


class ToggleActuator:
    """Dispatches a single activation at the panel's toggle control."""

    def __init__(self, locator: PanelLocator) -> None:
        self.locator = locator
        self.logger = logger
        self.toggle_count = 0
        self.dispatching = False

    def toggle(self, reason: Optional[str] = None) -> bool:
        """
        Activate the toggle control once.

        Callers check panel state beforehand; the actuator does not.

        Returns:
            True if an activation was dispatched
        """
        try:
            toggle = self.locator.require_toggle()
        except PanelNotFoundError as e:
            self.logger.warning("Toggle control not available, skipping", selector=e.selector, reason=reason)
            return False

        self.dispatching = True
        try:
            toggle.click()
        finally:
            self.dispatching = False
        self.toggle_count += 1
        self.logger.info("Panel toggle activated", reason=reason, toggle_count=self.toggle_count)
        return True
