"""Graph nodes for the route planner."""

from route_planner.planner.nodes.route import (
    build_prompt_node,
    generate_node,
    extract_node,
    complete_node,
)
from route_planner.planner.nodes.routing import route_after_prompt, route_after_generate

__all__ = [
    "build_prompt_node",
    "generate_node",
    "extract_node",
    "complete_node",
    "route_after_prompt",
    "route_after_generate",
]
