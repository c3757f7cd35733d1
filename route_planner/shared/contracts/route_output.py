"""
Route planner output contract.

Defines the schedule entries, source records, and request outcome that
the route orchestrator produces for each generation request.
"""

from enum import Enum
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field


class ScheduleEntry(BaseModel):
    """A single step of the speech route."""

    action: Literal["移動", "演説", "食事"] = Field(
        description="Travel (移動), speech (演説) or meal (食事)"
    )
    location: str = Field(min_length=1, description="Location or description")
    start_time: str = Field(alias="startTime", description="Start time (HH:MM)")
    end_time: str = Field(alias="endTime", description="End time (HH:MM)")

    class Config:
        """Pydantic model configuration."""

        populate_by_name = True
        json_schema_extra = {
            "example": {
                "action": "演説",
                "location": "上田駅お城口",
                "startTime": "09:00",
                "endTime": "09:20",
            }
        }


class SourceRecord(BaseModel):
    """A web source cited by the grounded generation."""

    uri: str = Field(min_length=1, description="Source URL")
    title: str = Field(default="", description="Source page title")

    @property
    def display_title(self) -> str:
        return self.title or self.uri


class GenerationResult(BaseModel):
    """Raw text and grounding metadata returned by the generation service."""

    text: str = Field(default="", description="Model response text")
    grounding_chunks: List[Dict[str, Any]] = Field(
        default_factory=list,
        description="Grounding chunks shaped {web?: {uri?, title?}}",
    )


class ErrorKind(str, Enum):
    """Failure kinds surfaced to the user."""

    EMPTY_SELECTION = "empty_selection"
    SERVICE_ERROR = "service_error"
    NO_JSON_FOUND = "no_json_found"
    MALFORMED_JSON = "malformed_json"

    @property
    def is_parse_error(self) -> bool:
        return self in (ErrorKind.NO_JSON_FOUND, ErrorKind.MALFORMED_JSON)


USER_MESSAGES: Dict[ErrorKind, str] = {
    ErrorKind.EMPTY_SELECTION: "少なくとも1つの地区を選択してください。",
    ErrorKind.SERVICE_ERROR: (
        "ルートの生成中にエラーが発生しました。しばらくしてからもう一度お試しください。"
    ),
    ErrorKind.NO_JSON_FOUND: "AIからの応答に有効なスケジュールデータが見つかりませんでした。",
    ErrorKind.MALFORMED_JSON: (
        "AIからの応答を解析できませんでした。形式が正しくない可能性があります。"
    ),
}


OutcomeStatus = Literal["idle", "loading", "success", "failure"]


class RequestOutcome(BaseModel):
    """
    Contract for the state of a single route generation request.

    Exactly one outcome is current per orchestrator; a new outcome always
    replaces the previous one in full.
    """

    status: OutcomeStatus = Field(description="idle, loading, success or failure")
    request_id: int = Field(default=0, description="Monotonic request identifier")
    schedule: List[ScheduleEntry] = Field(
        default_factory=list, description="Extracted schedule, in model order"
    )
    sources: List[SourceRecord] = Field(
        default_factory=list, description="Grounding sources, in citation order"
    )
    error_kind: Optional[ErrorKind] = Field(
        default=None, description="Failure kind when status is 'failure'"
    )
    message: Optional[str] = Field(
        default=None, description="User-facing message when status is 'failure'"
    )

    @property
    def view(self) -> str:
        """Which of loading/error/placeholder/results a client should show."""
        if self.status == "loading":
            return "loading"
        if self.status == "failure":
            return "error"
        if self.status == "success" and self.schedule:
            return "results"
        return "placeholder"

    @classmethod
    def idle(cls, request_id: int = 0) -> "RequestOutcome":
        return cls(status="idle", request_id=request_id)

    @classmethod
    def loading(cls, request_id: int) -> "RequestOutcome":
        return cls(status="loading", request_id=request_id)

    @classmethod
    def success(
        cls,
        request_id: int,
        schedule: List[ScheduleEntry],
        sources: List[SourceRecord],
    ) -> "RequestOutcome":
        return cls(
            status="success",
            request_id=request_id,
            schedule=schedule,
            sources=sources,
        )

    @classmethod
    def failure(
        cls,
        request_id: int,
        error_kind: ErrorKind,
        sources: Optional[List[SourceRecord]] = None,
    ) -> "RequestOutcome":
        return cls(
            status="failure",
            request_id=request_id,
            sources=sources or [],
            error_kind=error_kind,
            message=USER_MESSAGES[error_kind],
        )
