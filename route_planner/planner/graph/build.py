"""
Route graph construction.

Builds the workflow that sequences prompt building, generation, and
extraction for one request. The generation client is injected so tests
and alternative backends can replace the Gemini client.
"""

from typing import Any, Dict, Optional

from langgraph.graph import StateGraph, END

from route_planner.planner.schemas import RouteState
from route_planner.planner.nodes.route import (
    SupportsGenerate,
    build_prompt_node,
    generate_node,
    extract_node,
    complete_node,
)
from route_planner.planner.nodes.routing import route_after_prompt, route_after_generate
from route_planner.planner.graph.config import RouteGraphConfig, DEFAULT_CONFIG
from route_planner.shared.llm.client import GenerationClient


def create_generation_client(config: Optional[RouteGraphConfig] = None) -> GenerationClient:
    """Create a Gemini client from graph configuration."""
    if config is None:
        config = DEFAULT_CONFIG

    return GenerationClient(
        model=config.model,
        timeout=config.llm_timeout,
        enable_web_search=config.enable_web_search,
        max_attempts=config.max_attempts,
        retry_min_wait=config.retry_min_wait,
        retry_max_wait=config.retry_max_wait,
    )


def create_route_graph(
    client: Optional[SupportsGenerate] = None,
    config: Optional[RouteGraphConfig] = None,
):
    """
    Create and compile the route workflow.

    The graph structure is:
        Entry -> build_prompt -> route_after_prompt
                                   ├→ error → complete → END
                                   └→ generate -> route_after_generate
                                                    ├→ error → complete → END
                                                    └→ extract → complete → END

    Args:
        client: Generation client. A Gemini client is created if not provided.
        config: Optional configuration. Uses DEFAULT_CONFIG if not provided.

    Returns:
        Compiled LangGraph application; run it with ainvoke().
    """
    if config is None:
        config = DEFAULT_CONFIG
    if client is None:
        client = create_generation_client(config)

    def _build_prompt(state: RouteState) -> Dict[str, Any]:
        return build_prompt_node(state, prompt_config=config.prompt)

    async def _generate(state: RouteState) -> Dict[str, Any]:
        return await generate_node(
            state,
            client,
            model_name=getattr(client, "model", config.model),
            logs_dir=config.logs_dir,
        )

    graph = StateGraph(RouteState)

    graph.add_node("build_prompt", _build_prompt)
    graph.add_node("generate", _generate)
    graph.add_node("extract", extract_node)
    graph.add_node("complete", complete_node)

    graph.set_entry_point("build_prompt")

    graph.add_conditional_edges(
        "build_prompt",
        route_after_prompt,
        {
            "generate": "generate",
            "complete": "complete",
        },
    )
    graph.add_conditional_edges(
        "generate",
        route_after_generate,
        {
            "extract": "extract",
            "complete": "complete",
        },
    )
    graph.add_edge("extract", "complete")
    graph.add_edge("complete", END)

    return graph.compile()
