"""
Schemas for the route planner.

Defines the state schema for LangGraph and the Pydantic models for
planning requests and API responses.
"""

import operator
import re
from typing import TypedDict, List, Optional, Annotated, Dict, Any, Union

from pydantic import BaseModel, Field, field_validator

from route_planner.planner.districts import is_known_district
from route_planner.shared.contracts.route_output import RequestOutcome


TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


# =============================================================================
# LangGraph State Schema
# =============================================================================


class RouteState(TypedDict):
    """
    State schema for the route workflow.

    This TypedDict defines all the data that flows through the LangGraph
    workflow for one generation request.
    """

    # Request (from PlanningRequest)
    districts: List[str]
    total_speeches: str
    start_time: str
    end_time: str

    # Pipeline data
    prompt: Optional[str]
    raw_text: Optional[str]
    grounding_chunks: List[dict]

    # Results (dicts dumped from ScheduleEntry / SourceRecord)
    schedule: List[dict]
    sources: List[dict]

    # Failure kind value, if any step failed
    error_kind: Optional[str]

    # Tracking
    messages: Annotated[List[dict], operator.add]
    request_id: int
    session_id: Optional[str]


# =============================================================================
# Request Models (Pydantic)
# =============================================================================


class PlanningRequest(BaseModel):
    """
    Constraints for one route generation request.

    An empty district list is accepted here; the orchestrator reports it
    as an empty selection without calling the model.
    """

    districts: List[str] = Field(
        default_factory=list, description="Districts to visit, in selection order"
    )
    total_speeches: Union[int, str] = Field(
        default="8",
        alias="totalSpeeches",
        description="Number of speeches (positive integer or numeric string)",
    )
    start_time: str = Field(
        default="09:00", alias="startTime", pattern=TIME_PATTERN, description="HH:MM"
    )
    end_time: str = Field(
        default="17:00", alias="endTime", pattern=TIME_PATTERN, description="HH:MM"
    )

    class Config:
        """Pydantic model configuration."""

        populate_by_name = True

    @field_validator("districts")
    @classmethod
    def _dedupe_known_districts(cls, value: List[str]) -> List[str]:
        unknown = [d for d in value if not is_known_district(d)]
        if unknown:
            raise ValueError(f"Unknown districts: {unknown}")
        return list(dict.fromkeys(value))

    @field_validator("total_speeches")
    @classmethod
    def _positive_speech_count(cls, value: Union[int, str]) -> Union[int, str]:
        if isinstance(value, str):
            value = value.strip()
            if not re.fullmatch(r"\d+", value):
                raise ValueError("totalSpeeches must be a positive integer")
            if int(value) <= 0:
                raise ValueError("totalSpeeches must be a positive integer")
            return value
        if value <= 0:
            raise ValueError("totalSpeeches must be a positive integer")
        return value


# =============================================================================
# API Models (Pydantic)
# =============================================================================


class DistrictCatalogResponse(BaseModel):
    """District catalog for building the selection form."""

    groups: Dict[str, List[str]] = Field(description="Area name to sub-districts")
    all_districts: List[str] = Field(description="Flat list in catalog order")


class StartSessionResponse(BaseModel):
    """Response for a newly created planning session."""

    session_id: str = Field(description="Session identifier")
    outcome: RequestOutcome = Field(description="Initial (idle) outcome")


class SessionOutcomeResponse(BaseModel):
    """Current outcome of a planning session."""

    session_id: str = Field(description="Session identifier")
    view: str = Field(description="loading, error, placeholder or results")
    outcome: RequestOutcome = Field(description="Current request outcome")

    @classmethod
    def from_outcome(cls, session_id: str, outcome: RequestOutcome) -> "SessionOutcomeResponse":
        return cls(session_id=session_id, view=outcome.view, outcome=outcome)


def initial_route_state(
    request: PlanningRequest,
    request_id: int,
    session_id: Optional[str] = None,
) -> Dict[str, Any]:
    """Create the initial workflow state for a planning request."""
    return {
        "districts": list(request.districts),
        "total_speeches": str(request.total_speeches),
        "start_time": request.start_time,
        "end_time": request.end_time,
        "prompt": None,
        "raw_text": None,
        "grounding_chunks": [],
        "schedule": [],
        "sources": [],
        "error_kind": None,
        "messages": [],
        "request_id": request_id,
        "session_id": session_id,
    }
