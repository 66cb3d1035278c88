"""
Error handling tests for the auto-hide engine.

Tests cover the error classification and the guarantee that host page
conditions degrade to "do nothing this cycle" instead of failing.
"""

import asyncio
from dataclasses import replace
from unittest.mock import patch

import pytest

from autohide_app.config.defaults import PanelSelectors
from autohide_app.config.settings_gate import SettingsGate
from autohide_app.config.settings_store import InMemorySettingsStore
from autohide_app.dom.models import Window
from autohide_app.engine import AutoHideController
from autohide_app.errors import (
    ConfigValidationError,
    ConfigurationUnavailableError,
    HostConditionError,
    IntentTransitionError,
    InvalidSelectorError,
    PanelNotFoundError,
    SystemFailureError,
)
from autohide_app.panel.locator import PanelLocator


class TestErrorClassification:
    """Test error classification system."""

    def test_host_condition_error_hierarchy(self):
        """Test that host condition errors are recoverable."""
        base_error = HostConditionError("base error")
        assert base_error.recoverable is True
        assert base_error.context == {}

        unavailable = ConfigurationUnavailableError("store offline", key="flag", source="sync")
        assert isinstance(unavailable, HostConditionError)
        assert unavailable.key == "flag"
        assert unavailable.source == "sync"

        not_found = PanelNotFoundError("no toggle", selector="button", context={"attempt": 2})
        assert not_found.selector == "button"
        assert not_found.context == {"attempt": 2}

    def test_system_failure_error_hierarchy(self):
        """Test that system failures are not recoverable."""
        selector_error = InvalidSelectorError("bad", selector="div[", position=3)
        assert isinstance(selector_error, SystemFailureError)
        assert selector_error.recoverable is False
        assert selector_error.position == 3

        transition_error = IntentTransitionError(
            "stale", current_state="idle", attempted_transition="expand->idle"
        )
        assert transition_error.current_state == "idle"
        assert transition_error.attempted_transition == "expand->idle"

        validation_error = ConfigValidationError("invalid")
        assert validation_error.errors == []


class TestHostConditionHandling:
    """Test graceful degradation on host page conditions."""

    def test_require_toggle_raises_when_missing(self):
        locator = PanelLocator(Window().document)
        with pytest.raises(PanelNotFoundError) as exc_info:
            locator.require_toggle()
        assert 'side-nav-menu-button' in exc_info.value.selector

    def test_controller_starts_without_panel(self, scheduler):
        window = Window()
        controller = AutoHideController(window, scheduler)
        controller.start()

        assert controller.is_running
        assert controller.attached_panel is None
        assert scheduler.pending_count() == 0
        controller.stop()

    def test_store_failure_keeps_engine_disabled(self):
        class BrokenStore(InMemorySettingsStore):
            async def get(self, key, default=None):
                raise OSError("quota exceeded")

        gate = SettingsGate(BrokenStore())
        started = []

        class Controller:
            def start(self):
                started.append(True)

            def stop(self, restore=False):
                pass

        asyncio.run(gate.bind(Controller()))
        assert started == []

    def test_mutation_handler_failure_is_contained(self, expanded_page, scheduler):
        controller = AutoHideController(expanded_page.window, scheduler)
        controller.start()

        with patch.object(controller, "check_and_reattach", side_effect=RuntimeError("boom")):
            expanded_page.add_guard()
        assert controller.is_running

    def test_guard_check_failure_at_fire_discards_collapse(self, expanded_page, scheduler):
        controller = AutoHideController(expanded_page.window, scheduler)
        controller.start()

        with patch.object(controller.guards, "may_collapse", side_effect=RuntimeError("detached")):
            assert scheduler.advance(500) == 1

        assert expanded_page.toggle_count == 0
        assert controller.recognizer.pending is None

    def test_invalid_selector_surfaces_at_lookup(self):
        locator = PanelLocator(Window().document, replace(PanelSelectors(), panel="bard-sidenav["))
        with pytest.raises(InvalidSelectorError):
            locator.find_panel()
