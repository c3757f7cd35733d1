"""
FastAPI endpoints for the route planner.

Provides the district catalog and per-session route generation. Each
session owns one orchestrator, so the single-flight rule applies per
session.
"""

import logging
import time
import uuid
from datetime import datetime, timezone
from typing import Dict, Any

from fastapi import APIRouter, HTTPException, status

from route_planner.planner.districts import UEDA_DISTRICTS_GROUPED, all_districts
from route_planner.planner.graph.config import DEFAULT_CONFIG
from route_planner.planner.orchestrator import RouteOrchestrator, RequestInFlightError
from route_planner.planner.schemas import (
    PlanningRequest,
    DistrictCatalogResponse,
    StartSessionResponse,
    SessionOutcomeResponse,
)
from route_planner.shared.logging.debug_logger import (
    get_or_create_logger,
    get_existing_logger,
    remove_logger,
)


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/route", tags=["route"])

# In-memory session storage (nothing is persisted across restarts)
_sessions: Dict[str, Dict[str, Any]] = {}


def create_orchestrator(session_id: str) -> RouteOrchestrator:
    """Create the orchestrator backing a new session."""
    return RouteOrchestrator(config=DEFAULT_CONFIG, session_id=session_id)


def _get_session(session_id: str) -> Dict[str, Any]:
    if session_id not in _sessions:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Session {session_id} not found",
        )
    return _sessions[session_id]


@router.get("/districts", response_model=DistrictCatalogResponse)
async def get_districts() -> DistrictCatalogResponse:
    """Return the grouped district catalog and its flat list."""
    return DistrictCatalogResponse(
        groups=UEDA_DISTRICTS_GROUPED,
        all_districts=all_districts(),
    )


@router.post("/sessions", response_model=StartSessionResponse)
async def start_session() -> StartSessionResponse:
    """
    Start a new planning session.

    Returns:
        Session ID and the initial idle outcome
    """
    session_id = str(uuid.uuid4())
    orchestrator = create_orchestrator(session_id)

    _sessions[session_id] = {
        "orchestrator": orchestrator,
        "created_at": datetime.now(timezone.utc).isoformat(),
    }
    logger.info(f"[session={session_id}] [api=start_session] Session created")

    return StartSessionResponse(session_id=session_id, outcome=orchestrator.outcome)


@router.post("/sessions/{session_id}/generate", response_model=SessionOutcomeResponse)
async def generate_route(session_id: str, request: PlanningRequest) -> SessionOutcomeResponse:
    """
    Generate a speech route for the session.

    Args:
        session_id: Session identifier
        request: Planning constraints

    Returns:
        The outcome of this request (success or failure)
    """
    api_start_time = time.perf_counter()
    endpoint = "/api/route/sessions/{session_id}/generate"

    session = _get_session(session_id)
    orchestrator: RouteOrchestrator = session["orchestrator"]
    debug_logger = get_or_create_logger(session_id, DEFAULT_CONFIG.logs_dir)

    try:
        outcome = await orchestrator.generate_route(request)
    except RequestInFlightError as e:
        api_duration_ms = (time.perf_counter() - api_start_time) * 1000
        debug_logger.log_api_timing(
            endpoint=endpoint,
            duration_ms=api_duration_ms,
            success=False,
            error=str(e),
        )
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="A route request is already in progress for this session",
        )

    api_duration_ms = (time.perf_counter() - api_start_time) * 1000
    debug_logger.log_api_timing(
        endpoint=endpoint,
        duration_ms=api_duration_ms,
        request_id=outcome.request_id,
        success=outcome.status == "success",
        error=outcome.error_kind.value if outcome.error_kind else None,
    )

    return SessionOutcomeResponse.from_outcome(session_id, outcome)


@router.get("/sessions/{session_id}", response_model=SessionOutcomeResponse)
async def get_session_outcome(session_id: str) -> SessionOutcomeResponse:
    """Return the session's current outcome."""
    session = _get_session(session_id)
    return SessionOutcomeResponse.from_outcome(session_id, session["orchestrator"].outcome)


@router.delete("/sessions/{session_id}")
async def delete_session(session_id: str) -> Dict[str, str]:
    """
    Delete a planning session.

    Args:
        session_id: Session identifier

    Returns:
        Confirmation message
    """
    _get_session(session_id)
    del _sessions[session_id]

    debug_logger = get_existing_logger(session_id)
    if debug_logger is not None:
        debug_logger.log_session_summary()
        remove_logger(session_id)

    return {"message": f"Session {session_id} deleted"}


@router.get("/health")
async def health_check() -> Dict[str, str]:
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": "route-planner",
    }
