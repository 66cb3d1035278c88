"""
Host document model.

In-memory DOM with selector lookups, geometry, event dispatch and mutation
observation that the auto-hide engine reads from and dispatches into.
"""

from .models import (
    Document,
    Element,
    Event,
    EventTarget,
    MutationObserver,
    MutationRecord,
    Rect,
    Window,
)
from .selectors import compile_selector

__all__ = [
    "Document",
    "Element",
    "Event",
    "EventTarget",
    "MutationObserver",
    "MutationRecord",
    "Rect",
    "Window",
    "compile_selector",
]
