"""Prompt template and builders for the route planner."""

from route_planner.planner.prompts.templates import (
    RoutePromptConfig,
    ROUTE_PROMPT_TEMPLATE,
)
from route_planner.planner.prompts.builders import (
    EmptySelectionError,
    build_route_prompt,
    build_prompt_for_request,
)

__all__ = [
    "RoutePromptConfig",
    "ROUTE_PROMPT_TEMPLATE",
    "EmptySelectionError",
    "build_route_prompt",
    "build_prompt_for_request",
]
