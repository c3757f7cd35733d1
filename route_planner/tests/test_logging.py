"""
Tests for structured logging and the per-session debug logger.
"""

import json
import logging

import pytest

from route_planner.shared.contracts.route_output import ErrorKind, RequestOutcome
from route_planner.shared.logging.config import (
    StructuredFormatter,
    setup_logging,
    configure_from_env,
    log_state_transition,
)
from route_planner.shared.logging.debug_logger import (
    DebugLogger,
    get_or_create_logger,
    remove_logger,
)


@pytest.fixture
def package_logger():
    """The route_planner logger, restored after the test."""
    logger = logging.getLogger("route_planner")
    saved = (list(logger.handlers), logger.propagate, logger.level)
    yield logger
    for handler in logger.handlers:
        if handler not in saved[0]:
            handler.close()
    logger.handlers, logger.propagate = saved[0], saved[1]
    logger.setLevel(saved[2])


class ListHandler(logging.Handler):
    """Collects formatted records."""

    def __init__(self):
        super().__init__()
        self.lines = []

    def emit(self, record):
        self.lines.append(self.format(record))


class TestStructuredLogging:
    """Tests for the JSON formatter and state transition logging."""

    def test_state_transition_is_json(self):
        """Transitions are logged as JSON with an outcome summary."""
        logger = setup_logging(logger_name="route_planner.test_transitions")
        handler = ListHandler()
        handler.setFormatter(StructuredFormatter())
        logger.addHandler(handler)

        outcome = RequestOutcome.failure(3, ErrorKind.NO_JSON_FOUND)
        log_state_transition("request_failed", outcome, extra={"session_id": "s1"}, logger=logger)

        entry = json.loads(handler.lines[-1])
        assert entry["message"] == "State transition: request_failed"
        assert entry["extra"]["outcome_summary"]["error_kind"] == "no_json_found"
        assert entry["extra"]["outcome_summary"]["request_id"] == 3
        assert entry["extra"]["extra"] == {"session_id": "s1"}

    def test_log_file_written(self, tmp_path):
        """setup_logging writes to a file when asked."""
        log_file = tmp_path / "route.log"
        logger = setup_logging(log_file=str(log_file), logger_name="route_planner.test_file")

        logger.info("上田駅")
        for handler in logger.handlers:
            handler.flush()

        entry = json.loads(log_file.read_text(encoding="utf-8").splitlines()[-1])
        assert entry["message"] == "上田駅"

    def test_text_mode_leaves_logging_alone(self, monkeypatch, package_logger):
        """Without the JSON switch the package logger is untouched."""
        monkeypatch.delenv("ROUTE_PLANNER_LOG_FORMAT", raising=False)

        before = list(package_logger.handlers)

        assert configure_from_env() is None
        assert package_logger.handlers == before

    def test_json_mode_from_environment(self, monkeypatch, tmp_path, package_logger):
        """ROUTE_PLANNER_LOG_FORMAT=json writes JSON lines with request context."""
        log_file = tmp_path / "app.log"
        monkeypatch.setenv("ROUTE_PLANNER_LOG_FORMAT", "json")
        monkeypatch.setenv("ROUTE_PLANNER_LOG_FILE", str(log_file))

        logger = configure_from_env()
        assert logger is package_logger

        logging.getLogger("route_planner.planner.orchestrator").info(
            "Request started", extra={"session_id": "s9", "request_id": 2}
        )
        for handler in logger.handlers:
            handler.flush()

        entry = json.loads(log_file.read_text(encoding="utf-8").splitlines()[-1])
        assert entry["logger"] == "route_planner.planner.orchestrator"
        assert entry["session_id"] == "s9"
        assert entry["request_id"] == 2


class TestDebugLogger:
    """Tests for per-session JSONL debug logs."""

    def test_registry_reuses_instance(self, tmp_path):
        """The same session gets the same logger until removed."""
        first = get_or_create_logger("reuse", str(tmp_path))
        assert get_or_create_logger("reuse", str(tmp_path)) is first

        remove_logger("reuse")
        assert get_or_create_logger("reuse", str(tmp_path)) is not first
        remove_logger("reuse")

    def test_summary_accumulates(self, tmp_path):
        """The session summary totals calls and failures."""
        debug_logger = DebugLogger("summary", str(tmp_path))
        debug_logger.log_generation_call(1, "prompt", "[]", 120.0, "gemini-2.5-flash")
        debug_logger.log_generation_call(
            2, "prompt", None, 30.0, "gemini-2.5-flash", success=False, error="quota"
        )
        debug_logger.log_api_timing("/api/route/sessions/{session_id}/generate", 200.0)

        summary = debug_logger.log_session_summary()

        assert summary["generation_call_count"] == 2
        assert summary["failed_generation_count"] == 1
        assert summary["total_generation_duration_ms"] == 150.0

        lines = (tmp_path / "summary" / "session_logs.json").read_text(encoding="utf-8").splitlines()
        assert [json.loads(line)["type"] for line in lines] == [
            "generation_call",
            "generation_call",
            "api_timing",
            "session_summary",
        ]
        assert json.loads(lines[1])["error"] == "quota"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
