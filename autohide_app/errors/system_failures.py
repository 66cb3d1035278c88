"""
System failure error classifications.

These exceptions represent misconfiguration or internal inconsistencies that
are not fixed by waiting for the host page to change.
"""

from typing import Optional, Dict, Any


class SystemFailureError(Exception):
    """Base class for unrecoverable failures."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class InvalidSelectorError(SystemFailureError):
    """A CSS selector could not be parsed."""

    def __init__(self, message: str, selector: Optional[str] = None,
                 position: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.selector = selector
        self.position = position


class ConfigValidationError(SystemFailureError):
    """Configuration values failed validation."""

    def __init__(self, message: str, errors: Optional[list] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.errors = errors or []


class IntentTransitionError(SystemFailureError):
    """A hover intent transition that the state machine does not allow."""

    def __init__(self, message: str, current_state: Optional[str] = None,
                 attempted_transition: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.current_state = current_state
        self.attempted_transition = attempted_transition
