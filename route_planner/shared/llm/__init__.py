"""LLM client utilities."""

from route_planner.shared.llm.client import (
    GenerationClient,
    GenerationError,
    extract_grounding_chunks,
)

__all__ = ["GenerationClient", "GenerationError", "extract_grounding_chunks"]
