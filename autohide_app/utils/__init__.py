"""Utility modules for the auto-hide engine."""

from .timers import AsyncioScheduler, ManualScheduler, Scheduler, TimerHandle

__all__ = ["AsyncioScheduler", "ManualScheduler", "Scheduler", "TimerHandle"]
