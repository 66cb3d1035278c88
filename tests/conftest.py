"""Pytest configuration and shared fixtures."""

from dataclasses import dataclass, field
from typing import Callable

import pytest

from autohide_app.dom.models import Element, Event, Rect, Window
from autohide_app.utils.timers import ManualScheduler


@dataclass
class HostPage:
    """A rendered host page with a panel and a toggle button."""
    window: Window
    panel: Element
    toggle: Element
    clicks: list = field(default_factory=list)

    @property
    def document(self):
        return self.window.document

    @property
    def toggle_count(self) -> int:
        return len(self.clicks)

    def enter(self) -> None:
        self.panel.dispatch_event(Event(type="mouseenter"))

    def leave(self) -> None:
        self.panel.dispatch_event(Event(type="mouseleave"))

    def add_guard(self, class_name: str = "gv-color-picker-dialog",
                  width: float = 180, height: float = 120) -> Element:
        guard = Element("div", classes=[class_name], rect=Rect(width=width, height=height))
        self.document.body.append_child(guard)
        return guard


def build_host_page(
    expanded: bool = True,
    collapsed_marker: bool = False,
    panel_width: float = 320,
    panel_height: float = 800,
) -> HostPage:
    window = Window()
    document = window.document

    if expanded:
        document.body.add_class("mat-sidenav-opened")

    panel = Element("bard-sidenav", rect=Rect(width=panel_width, height=panel_height))
    if collapsed_marker:
        content = Element("side-navigation-content")
        content.append_child(Element("div", classes=["collapsed"]))
        panel.append_child(content)
    document.body.append_child(panel)

    toggle = Element("button", attributes={"data-test-id": "side-nav-menu-button"})
    page = HostPage(window=window, panel=panel, toggle=toggle)
    toggle.add_event_listener("click", page.clicks.append)
    document.body.append_child(toggle)
    return page


@pytest.fixture
def scheduler() -> ManualScheduler:
    """Virtual clock starting at zero."""
    return ManualScheduler()


@pytest.fixture
def make_host_page() -> Callable[..., HostPage]:
    """Factory for host pages with custom panel state."""
    return build_host_page


@pytest.fixture
def expanded_page() -> HostPage:
    """Host page with the panel open."""
    return build_host_page(expanded=True)


@pytest.fixture
def collapsed_page() -> HostPage:
    """Host page with the panel collapsed to its rail."""
    return build_host_page(expanded=False, collapsed_marker=True)
