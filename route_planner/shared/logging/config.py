"""
Logging setup for the route planner.

The app logs in a pipe-separated text format by default. Setting
ROUTE_PLANNER_LOG_FORMAT=json switches the route_planner loggers to one
JSON object per line, which is what the outcome transitions are shaped for.
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from route_planner.shared.contracts.route_output import RequestOutcome


TEXT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)-40s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LOG_FORMAT_ENV = "ROUTE_PLANNER_LOG_FORMAT"
LOG_FILE_ENV = "ROUTE_PLANNER_LOG_FILE"

# Attributes passed through logger.info(..., extra={...}) that are lifted
# to top-level JSON keys
CONTEXT_FIELDS = ("session_id", "request_id", "event")


class StructuredFormatter(logging.Formatter):
    """Render a record as a single JSON line, Japanese text unescaped."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for name in CONTEXT_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                entry[name] = value

        if hasattr(record, "extra"):
            entry["extra"] = record.extra

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, ensure_ascii=False)


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    logger_name: str = "route_planner",
    json_format: bool = True,
) -> logging.Logger:
    """
    Attach stdout (and optionally file) handlers to the package logger.

    The logger stops propagating to the root logger so records are not
    written twice when the root is also configured.

    Args:
        level: Logging level (default: INFO)
        log_file: Optional path of a UTF-8 log file
        logger_name: Logger to configure
        json_format: JSON lines if True, the pipe-separated text format otherwise

    Returns:
        The configured logger.
    """
    logger = logging.getLogger(logger_name)
    logger.setLevel(level)
    logger.handlers = []
    logger.propagate = False

    if json_format:
        formatter: logging.Formatter = StructuredFormatter()
    else:
        formatter = logging.Formatter(TEXT_FORMAT, datefmt=DATE_FORMAT)

    handlers: list = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def configure_from_env(level: int = logging.INFO) -> Optional[logging.Logger]:
    """
    Switch to JSON logging when ROUTE_PLANNER_LOG_FORMAT=json.

    Returns:
        The configured package logger, or None when text logging stays on.
    """
    if os.environ.get(LOG_FORMAT_ENV, "text").lower() != "json":
        return None
    return setup_logging(level=level, log_file=os.environ.get(LOG_FILE_ENV))


def log_state_transition(
    event: str,
    outcome: "RequestOutcome",
    extra: Optional[Dict[str, Any]] = None,
    logger: Optional[logging.Logger] = None,
) -> None:
    """
    Log a request outcome transition.

    Args:
        event: Name of the event (e.g., "request_started", "request_failed")
        outcome: The outcome that just became current
        extra: Additional context to include in the log
        logger: Logger instance to use. If not provided, uses default.
    """
    if logger is None:
        logger = logging.getLogger("route_planner")

    outcome_summary = {
        "request_id": outcome.request_id,
        "status": outcome.status,
        "error_kind": outcome.error_kind.value if outcome.error_kind else None,
        "schedule_entries": len(outcome.schedule),
        "sources": len(outcome.sources),
    }

    log_data = {
        "event": event,
        "outcome_summary": outcome_summary,
    }

    if extra:
        log_data["extra"] = extra

    record = logger.makeRecord(
        logger.name,
        logging.INFO,
        "",
        0,
        f"State transition: {event}",
        args=(),
        exc_info=None,
    )
    record.extra = log_data
    record.event = event
    record.request_id = outcome.request_id

    logger.handle(record)
