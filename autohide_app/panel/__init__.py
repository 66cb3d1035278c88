"""
Panel access: locating host elements, evaluating collapse guards and
activating the panel's toggle control.
"""

from .actuator import ToggleActuator
from .guards import CollapsePause, GuardEvaluator
from .locator import PanelLocator

__all__ = ["CollapsePause", "GuardEvaluator", "PanelLocator", "ToggleActuator"]
