"""
Speech route planner for election campaigns in Ueda City.

This package contains:
- shared/: Common infrastructure (Gemini client, logging, contracts)
- planner/: Prompt building, schedule/source extraction, route workflow,
  orchestrator and API
"""

from route_planner.planner.graph.build import create_route_graph
from route_planner.planner.orchestrator import RouteOrchestrator

__all__ = ["create_route_graph", "RouteOrchestrator"]
