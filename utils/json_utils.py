"""Helpers for reading JSON out of model responses."""

import json
import re
from typing import Any, Dict


# Leading ```json / ``` fence, or trailing ``` fence
_FENCE_PATTERN = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)


def strip_code_fences(text: str) -> str:
    """
    Remove markdown code fences wrapped around a model response.

    Args:
        text: Raw response text

    Returns:
        The response with surrounding fences and whitespace removed
    """
    return _FENCE_PATTERN.sub("", text.strip()).strip()


def parse_json_response(text: str) -> Dict[str, Any]:
    """
    Parse a model response that should contain a single JSON object.

    Args:
        text: Raw response text, possibly fenced

    Returns:
        The decoded JSON object

    Raises:
        ValueError: If the text is not valid JSON or not a JSON object
    """
    json_string = strip_code_fences(text)
    try:
        data = json.loads(json_string)
    except json.JSONDecodeError as e:
        raise ValueError(f"Response is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object, got {type(data).__name__}")

    return data
