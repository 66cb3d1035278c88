"""
Centralized logging configuration for the auto-hide engine.

This module provides standardized logging configuration using structlog
for all components. Guard decisions and intent transitions are logged through
dedicated helpers so they share one structured format, and both subsystems
can be turned down independently because guard checks run on every pointer
event.
"""
import logging
import sys
from typing import Any, Optional, TextIO

import structlog
from structlog.types import EventDict, FilteringBoundLogger, Processor

ENGINE_LOGGER = "autohide_app"

_METHOD_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "warn": logging.WARNING,
    "error": logging.ERROR,
    "exception": logging.ERROR,
    "critical": logging.CRITICAL,
}


def subsystem_level_filter(subsystem_levels: dict[str, str]) -> Processor:
    """
    Build a processor dropping events below a per-subsystem threshold.

    Args:
        subsystem_levels: Level name per ``subsystem`` value, e.g. ``{"guards": "INFO"}``

    Returns:
        structlog processor
    """
    thresholds = {name: getattr(logging, level.upper()) for name, level in subsystem_levels.items()}

    def processor(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
        threshold = thresholds.get(event_dict.get("subsystem"))
        if threshold is not None and _METHOD_LEVELS.get(method_name, logging.INFO) < threshold:
            raise structlog.DropEvent
        return event_dict

    return processor


def configure_logging(
    level: str = "INFO",
    format_json: bool = False,
    include_timestamp: bool = True,
    subsystem_levels: Optional[dict[str, str]] = None,
    stream: Optional[TextIO] = None,
    extra_processors: Optional[list] = None
) -> None:
    """
    Configure structlog for the engine and the host process embedding it.

    Args:
        level: Level for the ``autohide_app`` loggers (DEBUG, INFO, WARNING, ERROR)
        format_json: If True, output JSON format; otherwise human-readable
        include_timestamp: Include timestamp in log output
        subsystem_levels: Stricter levels for the ``guards`` / ``intent`` subsystems
        stream: Output stream, stdout when omitted
        extra_processors: Additional structlog processors to include
    """
    log_level = getattr(logging, level.upper())

    logging.basicConfig(
        stream=stream or sys.stdout,
        format="%(message)s"
    )
    logging.getLogger(ENGINE_LOGGER).setLevel(log_level)

    processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
    ]

    if subsystem_levels:
        processors.append(subsystem_level_filter(subsystem_levels))

    processors.extend([
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ])

    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

    if extra_processors:
        processors.extend(extra_processors)

    if format_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=stream is None))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    """
    Get a configured structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger instance
    """
    return structlog.get_logger(name)


def get_guard_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger for collapse guard decisions.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger bound to the guards subsystem
    """
    return get_logger(name).bind(subsystem="guards")


def get_intent_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger for hover intent transitions.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger bound to the intent subsystem
    """
    return get_logger(name).bind(subsystem="intent")


def log_guard_decision(
    logger: FilteringBoundLogger,
    guard_name: str,
    passed: bool,
    reason: str,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a collapse guard decision with standardized format.

    Args:
        logger: Structlog logger instance
        guard_name: Name of the guard being evaluated
        passed: Whether the guard allowed the collapse
        reason: Detailed reason for the decision
        context: Additional context data
    """
    bound_logger = logger.bind(
        guard_name=guard_name,
        guard_result="PASS" if passed else "BLOCK",
        reason=reason,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    if passed:
        bound_logger.debug("Guard passed")
    else:
        bound_logger.info("Guard blocked collapse")


def log_intent_transition(
    logger: FilteringBoundLogger,
    from_state: str,
    to_state: str,
    trigger: str,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a hover intent transition with standardized format.

    Args:
        logger: Structlog logger instance
        from_state: Current intent state
        to_state: Target intent state
        trigger: What triggered the transition
        context: Additional context data
    """
    bound_logger = logger.bind(
        from_state=from_state,
        to_state=to_state,
        trigger=trigger,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.debug("Intent transition")
