"""
Response parser for the route planner.

Recovers the schedule JSON array from the model's free-text response.
The model is told to answer with JSON only, but may still wrap the array
in prose, so the array is delimited by the first '[' and the last ']'.
This is a bracket scan, not a JSON tokenizer: brackets in surrounding
prose will widen the slice and make it fail to parse.
"""

import json
import logging
from typing import List

from pydantic import TypeAdapter, ValidationError

from route_planner.shared.contracts.route_output import ScheduleEntry


logger = logging.getLogger(__name__)

_schedule_adapter = TypeAdapter(List[ScheduleEntry])


class ParseError(Exception):
    """Raised when response parsing fails."""

    pass


class NoJsonFoundError(ParseError):
    """Raised when the response contains no bracket-delimited array."""

    pass


class MalformedJsonError(ParseError):
    """Raised when the delimited array is not a valid schedule."""

    def __init__(self, message: str, payload: str):
        super().__init__(message)
        self.payload = payload


def extract_json_array(raw_response: str) -> str:
    """
    Slice the JSON array out of an LLM response.

    Args:
        raw_response: Raw LLM response string

    Returns:
        Substring from the first '[' through the last ']' inclusive

    Raises:
        NoJsonFoundError: If either bracket is missing
    """
    content = raw_response.strip()

    start = content.find("[")
    end = content.rfind("]")

    if start == -1 or end == -1 or end < start:
        raise NoJsonFoundError("No JSON array found in response")

    return content[start : end + 1]


def extract_schedule(raw_response: str) -> List[ScheduleEntry]:
    """
    Parse the schedule out of a route planning response.

    Entries are returned in the order the model gave them; order and
    overlap are not checked.

    Args:
        raw_response: Raw LLM response string

    Returns:
        List of schedule entries (may be empty if the model returned [])

    Raises:
        NoJsonFoundError: If no array delimiters are present
        MalformedJsonError: If the array fails to decode or validate
    """
    json_str = extract_json_array(raw_response)

    try:
        data = json.loads(json_str)
    except json.JSONDecodeError as e:
        raise MalformedJsonError(f"Failed to parse schedule JSON: {e}", json_str) from e

    try:
        return _schedule_adapter.validate_python(data)
    except ValidationError as e:
        raise MalformedJsonError(
            f"Schedule JSON does not match expected shape: {e.error_count()} errors",
            json_str,
        ) from e
