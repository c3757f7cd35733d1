"""
Gemini client with Google Search grounding.

Provides a lazily created SDK client and an async wrapper for grounded
generation calls. Retries are driven by tenacity and are off by default
(one attempt); a fresh user request is the normal recovery path.
"""

import logging
import os
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv
from google import genai
from google.genai import types
from tenacity import (
    AsyncRetrying,
    stop_after_attempt,
    wait_exponential,
    retry_if_not_exception_type,
)

from route_planner.shared.contracts.route_output import GenerationResult

load_dotenv()


logger = logging.getLogger(__name__)

API_KEY_ENV_VARS = ("GEMINI_API_KEY", "API_KEY")
DEFAULT_MODEL = "gemini-2.5-flash"


class GenerationError(Exception):
    """Raised when the generation service call fails for any reason."""

    pass


def get_api_key() -> Optional[str]:
    """Return the first configured API key, or None."""
    for name in API_KEY_ENV_VARS:
        value = os.environ.get(name)
        if value:
            return value
    return None


def extract_grounding_chunks(response: Any) -> List[Dict[str, Any]]:
    """
    Pull grounding chunks off the first candidate as plain dicts.

    Args:
        response: A GenerateContentResponse (or anything shaped like one)

    Returns:
        List of chunk dicts shaped {web?: {uri?, title?}}; empty when the
        response carries no grounding metadata.
    """
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return []

    metadata = getattr(candidates[0], "grounding_metadata", None)
    chunks = getattr(metadata, "grounding_chunks", None) or []

    result = []
    for chunk in chunks:
        if isinstance(chunk, dict):
            result.append(chunk)
        elif hasattr(chunk, "model_dump"):
            result.append(chunk.model_dump(exclude_none=True))
    return result


class GenerationClient:
    """
    Async wrapper around the google-genai SDK.

    The SDK client is created on first use so that a missing API key
    surfaces as a GenerationError at call time rather than at startup.
    """

    def __init__(
        self,
        model: str = DEFAULT_MODEL,
        timeout: int = 60,
        enable_web_search: bool = True,
        max_attempts: int = 1,
        retry_min_wait: int = 2,
        retry_max_wait: int = 10,
    ):
        self.model = model
        self.timeout = timeout
        self.enable_web_search = enable_web_search
        self.max_attempts = max_attempts
        self.retry_min_wait = retry_min_wait
        self.retry_max_wait = retry_max_wait
        self._client: Optional[genai.Client] = None

    def _get_client(self) -> genai.Client:
        if self._client is None:
            api_key = get_api_key()
            if not api_key:
                raise GenerationError(
                    "GEMINI_API_KEY environment variable is not set. "
                    "Please set it to your Gemini API key."
                )
            self._client = genai.Client(
                api_key=api_key,
                http_options=types.HttpOptions(timeout=self.timeout * 1000),
            )
        return self._client

    def _build_config(self) -> types.GenerateContentConfig:
        tools = []
        if self.enable_web_search:
            tools.append(types.Tool(google_search=types.GoogleSearch()))
        return types.GenerateContentConfig(tools=tools)

    async def _generate_once(self, prompt: str) -> GenerationResult:
        client = self._get_client()
        response = await client.aio.models.generate_content(
            model=self.model,
            contents=prompt,
            config=self._build_config(),
        )
        return GenerationResult(
            text=response.text or "",
            grounding_chunks=extract_grounding_chunks(response),
        )

    async def generate(self, prompt: str) -> GenerationResult:
        """
        Call Gemini with the prompt and grounding enabled.

        Args:
            prompt: Complete planning prompt

        Returns:
            GenerationResult with response text and grounding chunks.

        Raises:
            GenerationError: On any failure (missing key, network, auth,
                quota, or SDK error) once all attempts are exhausted.
        """
        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self.max_attempts),
                wait=wait_exponential(
                    multiplier=1, min=self.retry_min_wait, max=self.retry_max_wait
                ),
                retry=retry_if_not_exception_type(GenerationError),
                reraise=True,
            ):
                with attempt:
                    if attempt.retry_state.attempt_number > 1:
                        logger.warning(
                            f"Retrying generation | attempt={attempt.retry_state.attempt_number}"
                            f"/{self.max_attempts}, model={self.model}"
                        )
                    return await self._generate_once(prompt)
        except GenerationError:
            raise
        except Exception as e:
            raise GenerationError(f"Generation call failed: {e}") from e
