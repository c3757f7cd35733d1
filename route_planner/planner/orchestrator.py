"""
Route orchestrator.

Owns the current RequestOutcome for one planning session and is the only
writer of it. Requests are single-flight: a new request cannot start while
one is loading. Each request is tagged with a monotonic id and a result
that arrives after the orchestrator has moved on is discarded.
"""

import asyncio
import logging
from typing import Any, Dict, Optional

from route_planner.planner.graph.build import create_route_graph
from route_planner.planner.graph.config import RouteGraphConfig, DEFAULT_CONFIG
from route_planner.planner.nodes.route import SupportsGenerate
from route_planner.planner.schemas import PlanningRequest, initial_route_state
from route_planner.shared.contracts.route_output import (
    ErrorKind,
    RequestOutcome,
    ScheduleEntry,
    SourceRecord,
)
from route_planner.shared.logging.config import log_state_transition


logger = logging.getLogger(__name__)


class RequestInFlightError(RuntimeError):
    """Raised when a request is started while another one is loading."""

    pass


def outcome_from_state(final_state: Dict[str, Any], request_id: int) -> RequestOutcome:
    """
    Convert a finished workflow state into a request outcome.

    Args:
        final_state: State returned by the route graph
        request_id: Id of the request the state belongs to

    Returns:
        success with schedule and sources, or failure carrying any sources
        that were collected before the failure
    """
    sources = [SourceRecord.model_validate(s) for s in final_state.get("sources", [])]

    error_kind = final_state.get("error_kind")
    if error_kind:
        return RequestOutcome.failure(request_id, ErrorKind(error_kind), sources=sources)

    schedule = [ScheduleEntry.model_validate(e) for e in final_state.get("schedule", [])]
    return RequestOutcome.success(request_id, schedule, sources)


class RouteOrchestrator:
    """
    Sequences prompt building, generation and extraction for one session.

    Usage:
        orchestrator = RouteOrchestrator()
        outcome = await orchestrator.generate_route(request)
    """

    def __init__(
        self,
        client: Optional[SupportsGenerate] = None,
        config: Optional[RouteGraphConfig] = None,
        session_id: Optional[str] = None,
    ):
        self.config = config or DEFAULT_CONFIG
        self.session_id = session_id
        self._graph = create_route_graph(client=client, config=self.config)
        self._latest_request_id = 0
        self._outcome = RequestOutcome.idle()

    @property
    def outcome(self) -> RequestOutcome:
        return self._outcome

    @property
    def is_loading(self) -> bool:
        return self._outcome.status == "loading"

    def _log_prefix(self, request_id: int) -> str:
        return f"[session={self.session_id or 'unknown'}] [request={request_id}] [orchestrator] "

    def _set_outcome(self, outcome: RequestOutcome, event: str) -> RequestOutcome:
        self._outcome = outcome
        log_state_transition(event, outcome, extra={"session_id": self.session_id})
        return outcome

    def reset(self) -> RequestOutcome:
        """
        Return to idle, abandoning any request still in flight.

        A response for an abandoned request is discarded when it arrives.
        """
        self._latest_request_id += 1
        return self._set_outcome(RequestOutcome.idle(self._latest_request_id), "reset")

    async def generate_route(self, request: PlanningRequest) -> RequestOutcome:
        """
        Run one route generation request.

        Args:
            request: Validated planning constraints

        Returns:
            The outcome that is current when the call returns

        Raises:
            RequestInFlightError: If a request is already loading
            asyncio.CancelledError: Re-raised after the request is marked failed
        """
        if self.is_loading:
            logger.warning(
                f"{self._log_prefix(self._outcome.request_id)}Rejected new request "
                f"while loading"
            )
            raise RequestInFlightError("A route request is already in progress")

        self._latest_request_id += 1
        request_id = self._latest_request_id
        _log = self._log_prefix(request_id)

        # Previous results are cleared before anything else happens
        self._set_outcome(RequestOutcome.idle(request_id), "request_cleared")

        if not request.districts:
            logger.info(f"{_log}Empty district selection - not calling the model")
            return self._set_outcome(
                RequestOutcome.failure(request_id, ErrorKind.EMPTY_SELECTION),
                "request_failed",
            )

        self._set_outcome(RequestOutcome.loading(request_id), "request_started")
        logger.info(
            f"{_log}Request started | districts={len(request.districts)}, "
            f"speeches={request.total_speeches}, "
            f"window={request.start_time}-{request.end_time}"
        )

        try:
            final_state = await self._graph.ainvoke(
                initial_route_state(request, request_id, self.session_id),
                {"recursion_limit": self.config.recursion_limit},
            )
            outcome = outcome_from_state(final_state, request_id)
        except asyncio.CancelledError:
            if request_id == self._latest_request_id:
                logger.warning(f"{_log}Request cancelled while loading")
                self._set_outcome(
                    RequestOutcome.failure(request_id, ErrorKind.SERVICE_ERROR),
                    "request_cancelled",
                )
            raise
        except Exception as e:
            logger.exception(f"{_log}Route workflow failed: {e}")
            outcome = RequestOutcome.failure(request_id, ErrorKind.SERVICE_ERROR)

        if request_id != self._latest_request_id:
            logger.info(
                f"{_log}Discarding stale result | latest_request={self._latest_request_id}, "
                f"status={outcome.status}"
            )
            return self._outcome

        event = "request_succeeded" if outcome.status == "success" else "request_failed"
        return self._set_outcome(outcome, event)
