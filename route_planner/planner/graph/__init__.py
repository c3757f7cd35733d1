"""Graph construction and configuration for the route planner."""

from route_planner.planner.graph.build import create_route_graph, create_generation_client
from route_planner.planner.graph.config import RouteGraphConfig, get_config

__all__ = [
    "create_route_graph",
    "create_generation_client",
    "RouteGraphConfig",
    "get_config",
]
