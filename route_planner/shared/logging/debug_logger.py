"""
Debug logger for tracking generation calls and API timing.

Writes per-session JSON Lines log files to the logs/ directory.
"""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional


# Session-based logger registry to ensure same instance is reused
_logger_registry: Dict[str, "DebugLogger"] = {}


def get_or_create_logger(session_id: str, logs_dir: str = "logs") -> "DebugLogger":
    """
    Get an existing logger for the session or create a new one.

    This ensures the same DebugLogger instance is used across all
    API calls and graph nodes for a given session, so call counts and
    durations accumulate in one place.

    Args:
        session_id: Unique session identifier
        logs_dir: Directory to store log files (default: "logs")

    Returns:
        DebugLogger instance for this session
    """
    if session_id not in _logger_registry:
        _logger_registry[session_id] = DebugLogger(session_id, logs_dir)
    return _logger_registry[session_id]


def get_existing_logger(session_id: str) -> Optional["DebugLogger"]:
    """Return the session's logger if one was created, without creating one."""
    return _logger_registry.get(session_id)


def remove_logger(session_id: str) -> None:
    """Remove a logger from the registry (e.g., after session ends)."""
    _logger_registry.pop(session_id, None)


class DebugLogger:
    """
    Debug logger that writes per-session JSON log files.

    Each session gets its own folder containing session_logs.json, one
    JSON object per line.
    """

    def __init__(self, session_id: str, logs_dir: str = "logs"):
        self.session_id = session_id
        self.base_logs_dir = Path(logs_dir)
        self.session_dir = self.base_logs_dir / session_id
        self.log_file = self.session_dir / "session_logs.json"

        self.session_dir.mkdir(parents=True, exist_ok=True)

        self._generation_call_count = 0
        self._failed_generation_count = 0
        self._total_generation_duration_ms = 0.0
        self._total_api_duration_ms = 0.0

    def _get_timestamp(self) -> str:
        return datetime.now(timezone.utc).isoformat()

    def _append_to_log(self, entry: Dict[str, Any]) -> None:
        with open(self.log_file, "a", encoding="utf-8") as f:
            f.write(json.dumps(entry, ensure_ascii=False) + "\n")

    def log_generation_call(
        self,
        request_id: int,
        prompt: str,
        response: Optional[str],
        duration_ms: float,
        model: str,
        grounding_chunk_count: int = 0,
        success: bool = True,
        error: Optional[str] = None,
    ) -> None:
        """
        Log a generation call with prompt, raw response and timing.

        Args:
            request_id: Orchestrator request id the call belongs to
            prompt: Prompt sent to the model
            response: Raw response text (None if the call failed)
            duration_ms: Time taken for the call in milliseconds
            model: Model identifier
            grounding_chunk_count: Number of grounding chunks returned
            success: Whether the call succeeded
            error: Error description if the call failed
        """
        self._generation_call_count += 1
        self._total_generation_duration_ms += duration_ms
        if not success:
            self._failed_generation_count += 1

        entry = {
            "type": "generation_call",
            "timestamp": self._get_timestamp(),
            "session_id": self.session_id,
            "request_id": request_id,
            "model": model,
            "prompt": prompt,
            "response": response,
            "duration_ms": round(duration_ms, 2),
            "grounding_chunks": grounding_chunk_count,
            "success": success,
        }

        if error:
            entry["error"] = error

        self._append_to_log(entry)

    def log_api_timing(
        self,
        endpoint: str,
        duration_ms: float,
        request_id: Optional[int] = None,
        success: bool = True,
        error: Optional[str] = None,
    ) -> None:
        """
        Log API endpoint timing.

        Args:
            endpoint: API endpoint path (e.g., "/api/route/sessions/{id}/generate")
            duration_ms: Total time for the API call in milliseconds
            request_id: Orchestrator request id (if applicable)
            success: Whether the API call succeeded
            error: Error message if the call failed
        """
        self._total_api_duration_ms += duration_ms

        entry = {
            "type": "api_timing",
            "timestamp": self._get_timestamp(),
            "session_id": self.session_id,
            "endpoint": endpoint,
            "duration_ms": round(duration_ms, 2),
            "success": success,
        }

        if request_id is not None:
            entry["request_id"] = request_id

        if error:
            entry["error"] = error

        self._append_to_log(entry)

    def get_accumulated_stats(self) -> Dict[str, Any]:
        """Current accumulated statistics, without logging."""
        return {
            "generation_call_count": self._generation_call_count,
            "failed_generation_count": self._failed_generation_count,
            "total_generation_duration_ms": round(self._total_generation_duration_ms, 2),
            "total_api_duration_ms": round(self._total_api_duration_ms, 2),
        }

    def log_session_summary(self) -> Dict[str, Any]:
        """
        Log and return a session summary with totals.

        Returns:
            Summary dictionary with all totals
        """
        summary = {
            "type": "session_summary",
            "timestamp": self._get_timestamp(),
            "session_id": self.session_id,
            **self.get_accumulated_stats(),
        }

        self._append_to_log(summary)
        return summary
