"""
Route nodes for the LangGraph workflow.

Each node handles one step of a generation request: building the prompt,
calling the model, and extracting the schedule and sources. Failures are
recorded in state as an error kind instead of being raised, so the
orchestrator always gets a final state back.
"""

import logging
import time
from typing import Any, Dict, Optional, Protocol

from route_planner.planner.prompts.builders import EmptySelectionError, build_route_prompt
from route_planner.planner.prompts.templates import RoutePromptConfig
from route_planner.planner.response_parser import (
    NoJsonFoundError,
    MalformedJsonError,
    extract_schedule,
)
from route_planner.planner.schemas import RouteState
from route_planner.planner.sources import collect_sources
from route_planner.shared.contracts.route_output import ErrorKind, GenerationResult
from route_planner.shared.logging.debug_logger import get_or_create_logger


logger = logging.getLogger(__name__)


class SupportsGenerate(Protocol):
    """Anything that can answer a prompt with text and grounding chunks."""

    async def generate(self, prompt: str) -> GenerationResult:
        ...


def _log_prefix(state: RouteState, node: str) -> str:
    session_id = state.get("session_id") or "unknown"
    request_id = state.get("request_id", 0)
    return f"[session={session_id}] [request={request_id}] [graph=route] [node={node}] "


def build_prompt_node(
    state: RouteState,
    prompt_config: Optional[RoutePromptConfig] = None,
) -> Dict[str, Any]:
    """
    Build the planning prompt from the request fields.

    Args:
        state: Current route state
        prompt_config: Optional fixed planning parameters

    Returns:
        State update with the prompt, or with an empty_selection error
    """
    _log = _log_prefix(state, "build_prompt")

    try:
        prompt = build_route_prompt(
            districts=state["districts"],
            total_speeches=state["total_speeches"],
            start_time=state["start_time"],
            end_time=state["end_time"],
            config=prompt_config,
        )
    except EmptySelectionError:
        logger.info(f"{_log}No districts selected - skipping generation")
        return {
            "error_kind": ErrorKind.EMPTY_SELECTION.value,
            "messages": [
                {"role": "system", "agent": "route", "content": "No districts selected"}
            ],
        }

    logger.info(
        f"{_log}Prompt built | districts={len(state['districts'])}, "
        f"speeches={state['total_speeches']}, "
        f"window={state['start_time']}-{state['end_time']}, chars={len(prompt)}"
    )
    return {
        "prompt": prompt,
        "messages": [
            {"role": "system", "agent": "route", "content": "Prompt built"}
        ],
    }


async def generate_node(
    state: RouteState,
    client: SupportsGenerate,
    model_name: str = "unknown",
    logs_dir: str = "logs",
) -> Dict[str, Any]:
    """
    Call the generation service with the built prompt.

    Args:
        state: Current route state (prompt must be set)
        client: Generation client
        model_name: Model identifier, for logging
        logs_dir: Directory for the per-session debug log

    Returns:
        State update with raw text and grounding chunks, or a
        service_error kind if the call failed
    """
    _log = _log_prefix(state, "generate")
    session_id = state.get("session_id")
    debug_logger = get_or_create_logger(session_id, logs_dir) if session_id else None

    logger.info(f"{_log}Calling model | model={model_name}")
    start_time = time.perf_counter()

    try:
        result = await client.generate(state["prompt"])
    except Exception as e:
        duration_ms = (time.perf_counter() - start_time) * 1000
        logger.exception(f"{_log}Generation failed after {duration_ms:.0f}ms: {e}")
        if debug_logger:
            debug_logger.log_generation_call(
                request_id=state.get("request_id", 0),
                prompt=state["prompt"],
                response=None,
                duration_ms=duration_ms,
                model=model_name,
                success=False,
                error=f"{type(e).__name__}: {e}",
            )
        return {
            "error_kind": ErrorKind.SERVICE_ERROR.value,
            "messages": [
                {"role": "system", "agent": "route", "content": "Generation failed"}
            ],
        }

    duration_ms = (time.perf_counter() - start_time) * 1000
    if debug_logger:
        debug_logger.log_generation_call(
            request_id=state.get("request_id", 0),
            prompt=state["prompt"],
            response=result.text,
            duration_ms=duration_ms,
            model=model_name,
            grounding_chunk_count=len(result.grounding_chunks),
        )

    logger.info(
        f"{_log}Model responded | duration={duration_ms:.0f}ms, "
        f"chars={len(result.text)}, grounding_chunks={len(result.grounding_chunks)}"
    )
    return {
        "raw_text": result.text,
        "grounding_chunks": result.grounding_chunks,
        "messages": [
            {"role": "system", "agent": "route", "content": "Model responded"}
        ],
    }


def extract_node(state: RouteState) -> Dict[str, Any]:
    """
    Extract the schedule and the sources from the model response.

    The two are independent: a schedule parse failure still keeps
    whatever sources the grounding metadata provided.

    Args:
        state: Current route state with raw_text and grounding_chunks

    Returns:
        State update with schedule, sources, and error kind on parse failure
    """
    _log = _log_prefix(state, "extract")

    sources = collect_sources(state.get("grounding_chunks"))
    update: Dict[str, Any] = {"sources": [s.model_dump() for s in sources]}

    try:
        schedule = extract_schedule(state.get("raw_text") or "")
    except NoJsonFoundError:
        logger.error(
            f"{_log}No schedule array in response | response={state.get('raw_text')!r}"
        )
        update["error_kind"] = ErrorKind.NO_JSON_FOUND.value
        update["messages"] = [
            {"role": "system", "agent": "route", "content": "No schedule found"}
        ]
        return update
    except MalformedJsonError as e:
        logger.error(f"{_log}Failed to parse schedule: {e} | payload={e.payload!r}")
        update["error_kind"] = ErrorKind.MALFORMED_JSON.value
        update["messages"] = [
            {"role": "system", "agent": "route", "content": "Malformed schedule"}
        ]
        return update

    logger.info(
        f"{_log}Extraction complete | entries={len(schedule)}, sources={len(sources)}"
    )
    update["schedule"] = [entry.model_dump() for entry in schedule]
    update["messages"] = [
        {
            "role": "system",
            "agent": "route",
            "content": f"Schedule extracted: {len(schedule)} entries, {len(sources)} sources",
        }
    ]
    return update


def complete_node(state: RouteState) -> Dict[str, Any]:
    """
    Final node that logs how the request ended.

    Args:
        state: Current route state

    Returns:
        Completion tracking message
    """
    _log = _log_prefix(state, "complete")
    error_kind = state.get("error_kind")

    logger.info(
        f"{_log}Request complete | error={error_kind or 'none'}, "
        f"schedule={len(state.get('schedule', []))}, "
        f"sources={len(state.get('sources', []))} -> END"
    )

    return {
        "messages": [
            {
                "role": "system",
                "agent": "route",
                "content": f"Request complete. Error: {error_kind or 'none'}.",
            }
        ],
    }
