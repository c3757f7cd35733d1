"""
Graph configuration for the route planner.

Centralizes configuration options for the route workflow and the
generation client, making it easy to tune behavior without modifying
the graph wiring.
"""

import os
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv

from route_planner.planner.prompts.templates import RoutePromptConfig

load_dotenv()


@dataclass
class RouteGraphConfig:
    """
    Configuration for the route graph.

    Attributes:
        recursion_limit: Maximum number of graph steps
        model: Gemini model identifier
        enable_web_search: Whether to attach the Google Search tool
        llm_timeout: Generation call timeout in seconds
        max_attempts: Generation attempts per request (1 = no retry)
        retry_min_wait: Minimum backoff between attempts, in seconds
        retry_max_wait: Maximum backoff between attempts, in seconds
        logs_dir: Directory for per-session debug logs
        prompt: Fixed planning parameters for the prompt
    """

    recursion_limit: int = 10

    # LLM configuration
    model: str = field(
        default_factory=lambda: os.environ.get("GEMINI_MODEL", "gemini-2.5-flash")
    )
    enable_web_search: bool = True
    llm_timeout: int = 60  # seconds

    # Retry configuration (used by tenacity in shared/llm/client.py)
    max_attempts: int = 1
    retry_min_wait: int = 2  # seconds
    retry_max_wait: int = 10  # seconds

    # Debug logging
    logs_dir: str = "logs"

    prompt: RoutePromptConfig = field(default_factory=RoutePromptConfig)


# Default configuration instance
DEFAULT_CONFIG = RouteGraphConfig()


def get_config(
    model: Optional[str] = None,
    enable_web_search: Optional[bool] = None,
    llm_timeout: Optional[int] = None,
    max_attempts: Optional[int] = None,
    logs_dir: Optional[str] = None,
    prompt: Optional[RoutePromptConfig] = None,
) -> RouteGraphConfig:
    """
    Create a configuration with optional overrides.

    Args:
        model: Override for the Gemini model
        enable_web_search: Override for the grounding tool flag
        llm_timeout: Override for the call timeout
        max_attempts: Override for generation attempts
        logs_dir: Override for the debug log directory
        prompt: Override for the prompt parameters

    Returns:
        RouteGraphConfig with specified overrides applied
    """
    return RouteGraphConfig(
        recursion_limit=DEFAULT_CONFIG.recursion_limit,
        model=model or DEFAULT_CONFIG.model,
        enable_web_search=enable_web_search
        if enable_web_search is not None
        else DEFAULT_CONFIG.enable_web_search,
        llm_timeout=llm_timeout or DEFAULT_CONFIG.llm_timeout,
        max_attempts=max_attempts or DEFAULT_CONFIG.max_attempts,
        retry_min_wait=DEFAULT_CONFIG.retry_min_wait,
        retry_max_wait=DEFAULT_CONFIG.retry_max_wait,
        logs_dir=logs_dir or DEFAULT_CONFIG.logs_dir,
        prompt=prompt or DEFAULT_CONFIG.prompt,
    )
