"""
Route planner for campaign street speeches.

Builds a planning prompt from the selected districts, asks a grounded
model for a schedule, and extracts the schedule and its web sources.
"""

from route_planner.planner.schemas import PlanningRequest, RouteState
from route_planner.planner.graph.build import create_route_graph
from route_planner.planner.orchestrator import RouteOrchestrator, RequestInFlightError

__all__ = [
    "PlanningRequest",
    "RouteState",
    "create_route_graph",
    "RouteOrchestrator",
    "RequestInFlightError",
]
