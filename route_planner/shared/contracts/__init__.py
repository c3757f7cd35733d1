"""Output contracts for the route planner."""

from route_planner.shared.contracts.route_output import (
    ScheduleEntry,
    SourceRecord,
    GenerationResult,
    ErrorKind,
    RequestOutcome,
    USER_MESSAGES,
)

__all__ = [
    "ScheduleEntry",
    "SourceRecord",
    "GenerationResult",
    "ErrorKind",
    "RequestOutcome",
    "USER_MESSAGES",
]
