"""
Autohide App - Sidebar Auto-Hide Engine

Watches a host-page navigation panel, infers show/hide intent from pointer
hover behaviour and activates the panel's own toggle control, without
fighting explicit user actions or open dialogs and menus.
"""

__version__ = "0.1.0"
__author__ = "Autohide Team"
