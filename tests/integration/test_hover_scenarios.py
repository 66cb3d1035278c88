"""End-to-end hover scenarios driven through the settings-gated engine."""

import asyncio

import pytest

from autohide_app.config.settings_store import InMemorySettingsStore
from autohide_app.engine import AutoHideController, AutoHideEngine

KEY = "gvSidebarAutoHide"


def launch(page, scheduler, enabled=True):
    store = InMemorySettingsStore({KEY: enabled})
    engine = AutoHideEngine(page.window, store, scheduler)
    asyncio.run(engine.launch())
    return engine, store


@pytest.mark.integration
class TestHoverScenarios:
    """Concrete hover sequences against a rendered host page."""

    def test_guard_blocks_collapse_until_removed(self, expanded_page, scheduler):
        guard = expanded_page.add_guard()
        launch(expanded_page, scheduler)

        expanded_page.leave()
        scheduler.advance(600)
        assert expanded_page.toggle_count == 0

        guard.remove()
        expanded_page.leave()
        scheduler.advance(600)
        assert expanded_page.toggle_count == 1

    def test_pass_over_collapsed_panel(self, collapsed_page, scheduler):
        launch(collapsed_page, scheduler)

        collapsed_page.enter()
        scheduler.advance(150)
        collapsed_page.leave()
        scheduler.advance(400)
        assert collapsed_page.toggle_count == 0

    def test_disabled_flag_attaches_nothing(self, expanded_page, scheduler):
        engine, _ = launch(expanded_page, scheduler, enabled=False)

        assert expanded_page.panel.listener_count() == 0
        expanded_page.enter()
        expanded_page.leave()
        scheduler.advance(2000)
        assert expanded_page.toggle_count == 0
        assert not engine.controller.is_running

    def test_guard_opened_after_leave_suppresses_collapse(self, expanded_page, scheduler):
        launch(expanded_page, scheduler)
        scheduler.advance(500)
        assert expanded_page.toggle_count == 1
        expanded_page.clicks.clear()

        expanded_page.leave()
        scheduler.advance(250)
        guard = expanded_page.add_guard("mat-mdc-dialog-container", 480, 320)
        scheduler.advance(250)
        assert expanded_page.toggle_count == 0

        guard.remove()
        scheduler.advance(1000)
        assert expanded_page.toggle_count == 0

    def test_guard_closed_within_window_collapses_once(self, expanded_page, scheduler):
        launch(expanded_page, scheduler)
        scheduler.advance(500)
        expanded_page.clicks.clear()

        expanded_page.leave()
        scheduler.advance(100)
        guard = expanded_page.add_guard("mat-mdc-menu-panel", 200, 240)
        scheduler.advance(200)
        guard.remove()
        scheduler.advance(200)
        assert expanded_page.toggle_count == 1

        scheduler.advance(2000)
        assert expanded_page.toggle_count == 1

    def test_dwell_then_leave_expands_and_collapses(self, collapsed_page, scheduler):
        launch(collapsed_page, scheduler)

        collapsed_page.enter()
        scheduler.advance(300)
        assert collapsed_page.toggle_count == 1

        # Host reacts to the toggle by opening the panel
        collapsed_page.document.body.add_class("mat-sidenav-opened")
        collapsed_page.leave()
        scheduler.advance(500)
        assert collapsed_page.toggle_count == 2

    def test_jitter_over_edge_settles_on_last_event(self, expanded_page, scheduler):
        launch(expanded_page, scheduler)
        scheduler.advance(500)
        expanded_page.clicks.clear()

        for _ in range(5):
            expanded_page.leave()
            scheduler.advance(100)
            expanded_page.enter()
            scheduler.advance(100)
        assert scheduler.pending_count() == 0

        expanded_page.leave()
        scheduler.advance(500)
        assert expanded_page.toggle_count == 1


@pytest.mark.integration
class TestLifecycleGuarantees:
    """Listener and timer hygiene across enable, disable and teardown."""

    def test_no_action_after_stop(self, expanded_page, scheduler):
        controller = AutoHideController(expanded_page.window, scheduler)
        controller.start()
        controller.stop()

        expanded_page.enter()
        expanded_page.leave()
        assert scheduler.pending_count() == 0
        scheduler.advance(1000)
        assert expanded_page.toggle_count == 0

    def test_disable_while_collapse_pending(self, expanded_page, scheduler):
        engine, store = launch(expanded_page, scheduler)
        assert scheduler.pending_count() == 1

        store.set_now(KEY, False)
        assert scheduler.pending_count() == 0
        scheduler.advance(1000)
        assert expanded_page.toggle_count == 0

    def test_teardown_while_expand_pending(self, collapsed_page, scheduler):
        launch(collapsed_page, scheduler)
        collapsed_page.enter()

        collapsed_page.window.unload()
        scheduler.advance(1000)
        assert collapsed_page.toggle_count == 0
        assert collapsed_page.window.listener_count() == 0

    def test_toggle_setting_repeatedly(self, collapsed_page, scheduler):
        engine, store = launch(collapsed_page, scheduler)
        for enabled in (False, True, True, False, True):
            store.set_now(KEY, enabled)

        assert engine.controller.is_running
        assert collapsed_page.panel.listener_count("mouseenter") == 1
        assert collapsed_page.document.listener_count("click") == 1
