"""
Hover intent state machine.

Debounces pointer enter/leave events on the panel into expand and collapse
actions. Handles transitions between IDLE → PENDING_EXPAND / PENDING_COLLAPSE
→ IDLE with a single cancellable timer.
"""
