"""
Logging configuration and utilities for the auto-hide engine.
"""
from .config import configure_logging, get_logger, subsystem_level_filter

__all__ = ["configure_logging", "get_logger", "subsystem_level_filter"]
