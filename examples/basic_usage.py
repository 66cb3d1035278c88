#!/usr/bin/env python3
"""
Basic Usage Example - Sidebar Auto-Hide Engine

This script runs the auto-hide engine on a real asyncio event loop against
an in-memory host page. It shows how to:
- Build a host page with a side panel and its toggle button
- Launch the engine behind the stored enable flag
- Drive pointer events and watch the debounced toggles
- Disable the engine through the settings store

Run: python examples/basic_usage.py
"""

import asyncio

from autohide_app.config.settings_store import InMemorySettingsStore
from autohide_app.dom.models import Element, Event, Rect, Window
from autohide_app.engine import AutoHideEngine
from autohide_app.logging import configure_logging

SETTING_KEY = "gvSidebarAutoHide"


def build_page() -> Window:
    """Create a host page with an expanded panel."""
    window = Window()
    body = window.document.body
    body.add_class("mat-sidenav-opened")
    body.append_child(Element("bard-sidenav", rect=Rect(width=308, height=900)))

    toggle = Element("button", attributes={"data-test-id": "side-nav-menu-button"})

    def host_toggle(event: Event) -> None:
        # The host flips its own markers when the toggle is activated
        panel = window.document.query_selector("bard-sidenav")
        if body.has_class("mat-sidenav-opened"):
            body.remove_class("mat-sidenav-opened")
            panel.set_rect(72, 900)
            print("   🖱️  host: panel collapsed")
        else:
            body.add_class("mat-sidenav-opened")
            panel.set_rect(308, 900)
            print("   🖱️  host: panel expanded")

    toggle.add_event_listener("click", host_toggle)
    body.append_child(toggle)
    return window


async def main_async() -> None:
    print("🚀 Sidebar Auto-Hide Engine - Basic Usage Demo")
    print("=" * 60)

    window = build_page()
    panel = window.document.query_selector("bard-sidenav")
    store = InMemorySettingsStore({SETTING_KEY: True})

    print("1. Launching the engine with auto-hide enabled...")
    engine = AutoHideEngine(window, store)
    await engine.launch()
    print(f"   Running: {engine.controller.is_running}")
    print()

    print("2. Waiting for the collapse armed at start...")
    await asyncio.sleep(0.7)
    print()

    print("3. Brief pass over the collapsed panel (150ms)...")
    panel.dispatch_event(Event(type="mouseenter"))
    await asyncio.sleep(0.15)
    panel.dispatch_event(Event(type="mouseleave"))
    await asyncio.sleep(0.4)
    print(f"   Toggles so far: {engine.controller.actuator.toggle_count}")
    print()

    print("4. Resting on the panel long enough to expand it...")
    panel.dispatch_event(Event(type="mouseenter"))
    await asyncio.sleep(0.4)
    print()

    print("5. Leaving while a dialog is open...")
    dialog = Element("div", classes=["mat-mdc-dialog-container"], rect=Rect(width=480, height=320))
    window.document.body.append_child(dialog)
    panel.dispatch_event(Event(type="mouseleave"))
    await asyncio.sleep(0.6)
    print(f"   Toggles so far: {engine.controller.actuator.toggle_count}")
    dialog.remove()
    print()

    print("6. Disabling auto-hide in settings...")
    await store.set(SETTING_KEY, False)
    print(f"   Running: {engine.controller.is_running}")
    print()

    window.unload()
    print("✅ Demo complete")


def main():
    """Run the demo."""
    configure_logging(level="INFO")
    asyncio.run(main_async())


if __name__ == "__main__":
    main()
