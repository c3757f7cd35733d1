"""
Prompt builders for the route planner.

These functions construct the prompt sent to the model from the user's
selections. Output is deterministic: the same inputs always give the
same text.
"""

from typing import List, Optional, Union, TYPE_CHECKING

from route_planner.planner.prompts.templates import (
    RoutePromptConfig,
    ROUTE_PROMPT_TEMPLATE,
    DISTRICT_SEPARATOR,
)

if TYPE_CHECKING:
    from route_planner.planner.schemas import PlanningRequest


DEFAULT_PROMPT_CONFIG = RoutePromptConfig()


class EmptySelectionError(ValueError):
    """Raised when a prompt is requested with no districts selected."""

    pass


def build_route_prompt(
    districts: List[str],
    total_speeches: Union[int, str],
    start_time: str,
    end_time: str,
    config: Optional[RoutePromptConfig] = None,
) -> str:
    """
    Build the route planning prompt.

    Args:
        districts: Selected districts, in selection order
        total_speeches: Requested number of speeches
        start_time: Start of the activity window (HH:MM)
        end_time: End of the activity window (HH:MM)
        config: Optional planning parameters. Uses defaults if not provided.

    Returns:
        Complete prompt string

    Raises:
        EmptySelectionError: If no districts are selected
    """
    if not districts:
        raise EmptySelectionError("At least one district must be selected")

    if config is None:
        config = DEFAULT_PROMPT_CONFIG

    return config.format_prompt(
        ROUTE_PROMPT_TEMPLATE,
        districts=DISTRICT_SEPARATOR.join(districts),
        total_speeches=str(total_speeches),
        start_time=start_time,
        end_time=end_time,
    )


def build_prompt_for_request(
    request: "PlanningRequest",
    config: Optional[RoutePromptConfig] = None,
) -> str:
    """Build the route prompt from a validated PlanningRequest."""
    return build_route_prompt(
        districts=request.districts,
        total_speeches=request.total_speeches,
        start_time=request.start_time,
        end_time=request.end_time,
        config=config,
    )
