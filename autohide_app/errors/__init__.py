"""
Error classification for the auto-hide engine.

Host conditions are transient and degrade to "do nothing this cycle";
system failures point at misconfiguration or programming errors.
"""

from .host_conditions import (
    HostConditionError,
    ConfigurationUnavailableError,
    PanelNotFoundError,
)
from .system_failures import (
    SystemFailureError,
    InvalidSelectorError,
    ConfigValidationError,
    IntentTransitionError,
)

__all__ = [
    # Host Conditions
    "HostConditionError",
    "ConfigurationUnavailableError",
    "PanelNotFoundError",
    # System Failures
    "SystemFailureError",
    "InvalidSelectorError",
    "ConfigValidationError",
    "IntentTransitionError",
]
