#!/usr/bin/env python3
"""
Hover Replay Demo - Sidebar Auto-Hide Engine

Replays scripted pointer traces against the engine on a virtual clock, so
the intent recognizer's decisions can be inspected without waiting in real
time. Each trace prints the toggle count and the recognizer state after
every step.

Run: python examples/hover_replay_demo.py
"""

from typing import List, Tuple

from autohide_app.dom.models import Element, Event, Rect, Window
from autohide_app.engine import AutoHideController
from autohide_app.logging import configure_logging
from autohide_app.utils.timers import ManualScheduler

# (action, milliseconds to advance afterwards)
Trace = List[Tuple[str, int]]

TRACES = {
    "pass-over collapsed rail": (False, [("enter", 150), ("leave", 400)]),
    "dwell on collapsed rail": (False, [("enter", 350)]),
    "leave expanded panel": (True, [("leave", 600)]),
    "jitter at the edge": (True, [("leave", 200), ("enter", 100), ("leave", 200), ("enter", 600)]),
    "leave with menu open": (True, [("guard", 0), ("leave", 600), ("unguard", 0), ("leave", 600)]),
}


def build_page(expanded: bool) -> Window:
    window = Window()
    body = window.document.body
    if expanded:
        body.add_class("mat-sidenav-opened")
    body.append_child(Element("bard-sidenav", rect=Rect(width=308 if expanded else 72, height=900)))
    body.append_child(Element("button", attributes={"data-test-id": "side-nav-menu-button"}))
    return window


def replay(name: str, expanded: bool, trace: Trace) -> None:
    print(f"\n▶️  {name}")
    window = build_page(expanded)
    scheduler = ManualScheduler()
    controller = AutoHideController(window, scheduler)
    controller.start()
    scheduler.advance(600)
    baseline = controller.actuator.toggle_count

    panel = window.document.query_selector("bard-sidenav")
    menu = Element("div", classes=["mat-mdc-menu-panel"], rect=Rect(width=200, height=240))

    for action, advance_ms in trace:
        if action == "enter":
            panel.dispatch_event(Event(type="mouseenter"))
        elif action == "leave":
            panel.dispatch_event(Event(type="mouseleave"))
        elif action == "guard":
            window.document.body.append_child(menu)
        elif action == "unguard":
            menu.remove()
        scheduler.advance(advance_ms)
        print(
            f"   t={scheduler.now_ms():>6.0f}ms  {action:<8} "
            f"state={controller.recognizer.state.value:<17} "
            f"toggles={controller.actuator.toggle_count - baseline}"
        )

    controller.stop()


def main():
    """Replay every trace."""
    configure_logging(level="WARNING")
    print("🎬 Hover Replay Demo")
    print("=" * 60)
    for name, (expanded, trace) in TRACES.items():
        replay(name, expanded, trace)


if __name__ == "__main__":
    main()
