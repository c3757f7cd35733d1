"""
Routing logic for the route LangGraph workflow.

Sends the request to the next step, or straight to completion once a
step has recorded an error.
"""

import logging
from typing import Literal

from route_planner.planner.schemas import RouteState


logger = logging.getLogger(__name__)


def route_after_prompt(state: RouteState) -> Literal["generate", "complete"]:
    """
    Decide whether to call the model after building the prompt.

    Args:
        state: Current route state

    Returns:
        "complete" if prompt building failed, "generate" otherwise
    """
    session_id = state.get("session_id") or "unknown"
    _log = f"[session={session_id}] [graph=route] [router=route_after_prompt] "

    if state.get("error_kind"):
        logger.info(f"{_log}Routing to 'complete' | error={state['error_kind']}")
        return "complete"

    logger.info(f"{_log}Routing to 'generate'")
    return "generate"


def route_after_generate(state: RouteState) -> Literal["extract", "complete"]:
    """
    Decide whether there is a response to extract from.

    Args:
        state: Current route state

    Returns:
        "complete" if the generation call failed, "extract" otherwise
    """
    session_id = state.get("session_id") or "unknown"
    _log = f"[session={session_id}] [graph=route] [router=route_after_generate] "

    if state.get("error_kind"):
        logger.info(f"{_log}Routing to 'complete' | error={state['error_kind']}")
        return "complete"

    logger.info(f"{_log}Routing to 'extract'")
    return "extract"
