"""
Host condition error classifications.

These exceptions describe states of the host page or its configuration store
that the engine treats as transient: it falls back to the disabled default or
retries on the next observation instead of failing.
"""

from typing import Optional, Dict, Any


class HostConditionError(Exception):
    """Base class for transient host conditions that are handled gracefully."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = True


class ConfigurationUnavailableError(HostConditionError):
    """The settings store could not be read."""

    def __init__(self, message: str, key: Optional[str] = None,
                 source: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.key = key
        self.source = source


class PanelNotFoundError(HostConditionError):
    """The panel (or its toggle) is not rendered yet."""

    def __init__(self, message: str, selector: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.selector = selector
