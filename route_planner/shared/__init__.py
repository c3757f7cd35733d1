"""
Shared infrastructure for the route planner.

Modules:
- llm: Gemini client with grounding and optional retries
- logging: Structured JSON logging and per-session debug logs
- contracts: Schedule, source and outcome contracts
"""

from route_planner.shared.llm.client import GenerationClient, GenerationError
from route_planner.shared.logging.config import setup_logging, log_state_transition

__all__ = [
    "GenerationClient",
    "GenerationError",
    "setup_logging",
    "log_state_transition",
]
