"""
Settings gate: turns the stored enable flag into engine start/stop calls.

Reads fail safe. A store that cannot be read, or a missing key, means the
engine stays disabled.
"""

from typing import TYPE_CHECKING, Any, Callable, Optional

import structlog

from .defaults import SettingsParams
from .settings_store import SettingsStore, StorageChange

if TYPE_CHECKING:
    from ..engine import AutoHideController

logger = structlog.get_logger(__name__)


class SettingsGate:
    """Resolves the enable flag and forwards changes to the controller."""

    def __init__(
        self,
        store: SettingsStore,
        params: Optional[SettingsParams] = None,
        restore_on_disable: bool = True
    ) -> None:
        self.store = store
        self.params = params or SettingsParams()
        self.restore_on_disable = restore_on_disable
        self.logger = logger.bind(storage_key=self.params.storage_key)
        self._unsubscribe: Optional[Callable[[], None]] = None
        self._changes_seen = 0

    async def read(self) -> bool:
        """Current flag; ``False`` when the store fails or the key is absent."""
        try:
            value = await self.store.get(self.params.storage_key, False)
        except Exception as e:
            self.logger.warning(
                "Failed to read auto-hide setting, treating as disabled",
                error=str(e),
                error_type=type(e).__name__
            )
            return False

        return value is True

    def on_change(self, callback: Callable[[bool], Any]) -> Callable[[], None]:
        """
        Register for flag changes.

        Notifications for other keys or other storage areas are ignored.

        Returns:
            Function that removes the registration
        """
        key = self.params.storage_key
        area = self.params.storage_area

        def listener(changes: dict[str, StorageChange], changed_area: str) -> None:
            if changed_area != area or key not in changes:
                return
            callback(changes[key].new_value is True)

        self.store.add_change_listener(listener)
        return lambda: self.store.remove_change_listener(listener)

    async def bind(self, controller: "AutoHideController") -> None:
        """Subscribe to changes, then apply the current flag."""
        if self._unsubscribe is None:
            self._unsubscribe = self.on_change(lambda enabled: self._apply(controller, enabled))

        seen = self._changes_seen
        enabled = await self.read()

        if self._changes_seen != seen:
            self.logger.debug("Initial setting superseded by a change notification")
            return

        self.logger.info("Auto-hide setting resolved", enabled=enabled)
        self._forward(controller, enabled)

    def unbind(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def _apply(self, controller: "AutoHideController", enabled: bool) -> None:
        self._changes_seen += 1
        self.logger.info("Auto-hide setting changed", enabled=enabled)
        self._forward(controller, enabled)

    def _forward(self, controller: "AutoHideController", enabled: bool) -> None:
        if enabled:
            controller.start()
        else:
            controller.stop(restore=self.restore_on_disable)
