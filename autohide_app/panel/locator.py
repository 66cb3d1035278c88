"""
Stateless lookups against the live host document.

Every call reads the document afresh; nothing is cached across calls because
the host page re-renders the panel outside the engine's control.
"""

from typing import Optional

import structlog

from ..config.defaults import GuardSelectors, PanelSelectors
from ..dom.models import Document, Element
from ..errors import PanelNotFoundError
from ..state.models import PanelState

logger = structlog.get_logger(__name__)


class PanelLocator:
    """Finds the panel, its toggle control and visible guard elements."""

    def __init__(
        self,
        document: Document,
        panel: Optional[PanelSelectors] = None,
        guards: Optional[GuardSelectors] = None
    ) -> None:
        self.document = document
        self.panel_selectors = panel or PanelSelectors()
        self.guard_selectors = guards or GuardSelectors()

    def find_panel(self) -> Optional[Element]:
        return self.document.query_selector(self.panel_selectors.panel)

    def find_toggle(self) -> Optional[Element]:
        for selector in self.panel_selectors.toggle:
            toggle = self.document.query_selector(selector)
            if toggle is not None:
                return toggle
        return None

    def require_toggle(self) -> Element:
        """
        Find the toggle control.

        Raises:
            PanelNotFoundError: If the host has not rendered the toggle
        """
        toggle = self.find_toggle()
        if toggle is None:
            raise PanelNotFoundError(
                "Panel toggle control not found",
                selector=", ".join(self.panel_selectors.toggle),
            )
        return toggle

    def find_guard_candidates(self) -> list[Element]:
        """All guard elements in the document, visible or not."""
        candidates: list[Element] = []
        for selector in self.guard_selectors.selectors:
            for element in self.document.query_selector_all(selector):
                if element not in candidates:
                    candidates.append(element)
        return candidates

    def find_guards(self) -> set[Element]:
        """Guard elements that are present and visually significant."""
        return {element for element in self.find_guard_candidates() if self.is_visible(element)}

    @staticmethod
    def is_visible(element: Element) -> bool:
        """Rendered with non-zero width and height."""
        if element.style.get("display") == "none" or element.style.get("visibility") == "hidden":
            return False
        rect = element.get_bounding_client_rect()
        return rect.width > 0 and rect.height > 0

    def is_pinned(self) -> bool:
        """The user opened the panel explicitly and wants it kept open."""
        pinned_class = self.panel_selectors.pinned_class
        if self.document.body.has_class(pinned_class):
            return True
        panel = self.find_panel()
        return panel is not None and panel.has_class(pinned_class)

    def panel_state(self) -> PanelState:
        """Infer whether the panel is collapsed from host classes and geometry."""
        selectors = self.panel_selectors

        if self.document.body.has_class(selectors.opened_body_class):
            return PanelState.EXPANDED

        content = self.document.query_selector(selectors.content)
        if content is not None and content.has_class(selectors.collapsed_class):
            return PanelState.COLLAPSED

        panel = self.find_panel()
        if panel is None:
            return PanelState.UNKNOWN

        if panel.get_bounding_client_rect().width < selectors.collapsed_max_width_px:
            return PanelState.COLLAPSED
        return PanelState.EXPANDED
