"""Logging configuration and utilities."""

from route_planner.shared.logging.config import (
    setup_logging,
    configure_from_env,
    log_state_transition,
    StructuredFormatter,
)
from route_planner.shared.logging.debug_logger import (
    DebugLogger,
    get_or_create_logger,
    get_existing_logger,
    remove_logger,
)

__all__ = [
    "setup_logging",
    "configure_from_env",
    "log_state_transition",
    "StructuredFormatter",
    "DebugLogger",
    "get_or_create_logger",
    "get_existing_logger",
    "remove_logger",
]
