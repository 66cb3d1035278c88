"""
Main auto-hide engine coordinator.

Wires the settings gate, panel locator, guard evaluator, intent recognizer
and toggle actuator together and owns the engine lifecycle:

Settings → Controller.start() → pointer listeners → IntentRecognizer →
GuardEvaluator (fresh read) → ToggleActuator
"""

from typing import Any, Callable, Optional

import structlog

from .config.defaults import AutoHideParams, get_default_config
from .config.settings_gate import SettingsGate
from .config.settings_store import SettingsStore
from .dom.models import Element, Event, MutationObserver, MutationRecord, Window
from .panel.actuator import ToggleActuator
from .panel.guards import CollapsePause, GuardEvaluator
from .panel.locator import PanelLocator
from .state.machine import IntentRecognizer
from .state.models import EngineLifecycle, PanelState
from .utils.timers import AsyncioScheduler, Scheduler, TimerHandle

logger = structlog.get_logger(__name__)

POINTER_ENTER = "mouseenter"
POINTER_LEAVE = "mouseleave"
TEARDOWN = "beforeunload"


class AutoHideController:
    """
    Owns the engine lifecycle, the panel listeners and the single hover intent.

    ``start()`` and ``stop()`` are idempotent. Every host callback is
    guarded so that a failure inside the engine never reaches the host page.
    """

    def __init__(
        self,
        window: Window,
        scheduler: Optional[Scheduler] = None,
        params: Optional[AutoHideParams] = None
    ) -> None:
        self.window = window
        self.document = window.document
        self.scheduler = scheduler or AsyncioScheduler()
        self.params = params or get_default_config()
        self.logger = logger

        self.locator = PanelLocator(self.document, self.params.panel, self.params.guards)
        self.pause = CollapsePause(self.scheduler)
        self.guards = GuardEvaluator(self.locator, self.pause)
        self.actuator = ToggleActuator(self.locator)
        self.recognizer = IntentRecognizer(
            self.scheduler, self.locator, self.guards, self.actuator, self.params.timings
        )

        self._lifecycle = EngineLifecycle.STOPPED
        self._panel: Optional[Element] = None
        self._observer: Optional[MutationObserver] = None
        self._resize_timer: Optional[TimerHandle] = None
        self._resize_followup: Optional[TimerHandle] = None
        self._collapse_on_attach = False

    @property
    def lifecycle(self) -> EngineLifecycle:
        return self._lifecycle

    @property
    def is_running(self) -> bool:
        return self._lifecycle is EngineLifecycle.RUNNING

    @property
    def attached_panel(self) -> Optional[Element]:
        return self._panel

    def start(self) -> None:
        if self.is_running:
            return

        self._lifecycle = EngineLifecycle.RUNNING
        self.pause.reset()
        self.recognizer.reset()
        self._collapse_on_attach = self.params.behavior.collapse_on_start

        self._observer = MutationObserver(self._on_mutation)
        self._observer.observe(self.document.body, child_list=True, subtree=True)
        self.window.add_event_listener("resize", self._on_resize)
        self.window.add_event_listener(TEARDOWN, self._on_teardown)
        self.document.add_event_listener("click", self._on_document_click, capture=True)

        self.check_and_reattach()
        self.logger.info("Auto-hide engine started", panel_attached=self._panel is not None)

    def stop(self, restore: bool = False) -> None:
        if not self.is_running:
            return

        self._lifecycle = EngineLifecycle.STOPPED
        self._collapse_on_attach = False
        self.recognizer.cancel()
        self._cancel_resize_timers()

        if restore:
            self._restore_panel()
        self.recognizer.reset()
        self.pause.reset()

        self._detach_panel()
        if self._observer is not None:
            self._observer.disconnect()
            self._observer = None
        self.window.remove_event_listener("resize", self._on_resize)
        self.window.remove_event_listener(TEARDOWN, self._on_teardown)
        self.document.remove_event_listener("click", self._on_document_click, capture=True)

        self.logger.info("Auto-hide engine stopped", restored=restore)

    def check_and_reattach(self) -> None:
        """Follow the panel as the host removes, hides or re-renders it."""
        if not self.is_running:
            return

        if self._panel is not None and not self._panel.is_connected:
            self._detach_panel()
            self.recognizer.reset()

        if self._panel is not None and not self.locator.is_visible(self._panel):
            self._detach_panel()
            return

        current = self.locator.find_panel()
        if current is not None and current is not self._panel and self.locator.is_visible(current):
            self._attach_panel(current)
            self._initial_collapse(current)

    def _attach_panel(self, panel: Element) -> None:
        self._detach_panel()
        self._panel = panel
        panel.add_event_listener(POINTER_ENTER, self._on_pointer_enter)
        panel.add_event_listener(POINTER_LEAVE, self._on_pointer_leave)
        self.logger.debug("Attached pointer listeners", panel=repr(panel))

    def _initial_collapse(self, panel: Element) -> None:
        # Only the first panel attached after start(), even if rendered late
        if not self._collapse_on_attach:
            return
        self._collapse_on_attach = False
        if not panel.hovered:
            self.recognizer.request_collapse(trigger="start")

    def _detach_panel(self) -> None:
        if self._panel is None:
            return
        self._panel.remove_event_listener(POINTER_ENTER, self._on_pointer_enter)
        self._panel.remove_event_listener(POINTER_LEAVE, self._on_pointer_leave)
        self.recognizer.cancel()
        self.logger.debug("Detached pointer listeners", panel=repr(self._panel))
        self._panel = None

    def _restore_panel(self) -> None:
        if self.recognizer.collapsed_by_engine and self.locator.panel_state() is PanelState.COLLAPSED:
            self.actuator.toggle(reason="restore_on_disable")

    def _cancel_resize_timers(self) -> None:
        for handle in (self._resize_timer, self._resize_followup):
            if handle is not None:
                handle.cancel()
        self._resize_timer = None
        self._resize_followup = None

    def _guarded(self, action: str, func: Callable[[], Any]) -> None:
        try:
            func()
        except Exception as e:
            self.logger.error(
                "Auto-hide handler failed",
                action=action,
                error=str(e),
                error_type=type(e).__name__
            )

    # Host callbacks

    def _on_pointer_enter(self, event: Event) -> None:
        if self.is_running:
            self._guarded("pointer_enter", self.recognizer.pointer_enter)

    def _on_pointer_leave(self, event: Event) -> None:
        if self.is_running:
            self._guarded("pointer_leave", self.recognizer.pointer_leave)

    def _on_mutation(self, records: list[MutationRecord], observer: MutationObserver) -> None:
        if self.is_running:
            self._guarded("mutation", self.check_and_reattach)

    def _on_resize(self, event: Event) -> None:
        if not self.is_running:
            return
        self._cancel_resize_timers()
        self._resize_timer = self.scheduler.call_later(
            self.params.reattach.resize_debounce_ms, self._on_resize_settled
        )

    def _on_resize_settled(self) -> None:
        self._resize_timer = None
        if not self.is_running:
            return
        self._guarded("resize", self.check_and_reattach)
        # Host layout transitions can outlast the debounce window
        self._resize_followup = self.scheduler.call_later(
            self.params.reattach.resize_followup_ms, self._on_resize_followup
        )

    def _on_resize_followup(self) -> None:
        self._resize_followup = None
        if self.is_running:
            self._guarded("resize_followup", self.check_and_reattach)

    def _on_document_click(self, event: Event) -> None:
        # Our own toggle activation is not a user menu interaction
        if self.is_running and not self.actuator.dispatching:
            self._guarded("click", lambda: self._pause_for_click(event))

    def _pause_for_click(self, event: Event) -> None:
        target = event.target
        if target is None:
            return

        selectors = self.params.menu_click
        for kind, selector in (
            ("menu_item", selectors.menu_items),
            ("panel_button", selectors.panel_buttons),
            ("options_button", selectors.options_buttons),
        ):
            if target.closest(selector) is not None:
                self.pause.pause(self.params.pause.menu_click_pause_ms)
                self.logger.debug("Collapse paused after click", click_kind=kind)
                return

    def _on_teardown(self, event: Event) -> None:
        self.stop()


class AutoHideEngine:
    """
    Entry point for a page: binds settings to the controller and tears
    everything down when the page unloads.
    """

    def __init__(
        self,
        window: Window,
        store: SettingsStore,
        scheduler: Optional[Scheduler] = None,
        params: Optional[AutoHideParams] = None
    ) -> None:
        self.window = window
        self.params = params or get_default_config()
        self.controller = AutoHideController(window, scheduler, self.params)
        self.gate = SettingsGate(
            store,
            self.params.settings,
            restore_on_disable=self.params.behavior.restore_on_disable
        )
        self.logger = logger
        self._launched = False

    async def launch(self) -> None:
        """Apply the stored setting and follow its changes until teardown."""
        if not self._launched:
            self._launched = True
            self.window.add_event_listener(TEARDOWN, self._on_teardown)
        await self.gate.bind(self.controller)

    def shutdown(self) -> None:
        """Release the settings subscription and stop the controller."""
        self.gate.unbind()
        self.controller.stop()
        if self._launched:
            self.window.remove_event_listener(TEARDOWN, self._on_teardown)
            self._launched = False
        self.logger.info("Auto-hide engine shut down")

    def _on_teardown(self, event: Event) -> None:
        self.shutdown()
