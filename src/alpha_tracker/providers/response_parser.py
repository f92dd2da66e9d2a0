"""Recovery of JSON documents from free-form model output."""

import json
import logging
import re
from typing import Any

from alpha_tracker.core.exceptions import ResponseParseError

logger = logging.getLogger(__name__)

_FENCE = re.compile(r"```(?:json)?", re.IGNORECASE)
_OBJECT = re.compile(r"\{[\s\S]*\}")


def parse_json_response(text: str) -> dict[str, Any]:
    """
    Parse model output into a JSON object.

    First strips markdown code fences and parses strictly; if that fails,
    salvages the outermost {...} span found in the raw text.
    """
    if not text or not text.strip():
        raise ResponseParseError("Empty response from research gateway")

    cleaned = _FENCE.sub("", text).strip()
    try:
        return _require_object(json.loads(cleaned))
    except json.JSONDecodeError as exc:
        logger.warning("Direct JSON parse failed, trying fragment extraction: %s", exc)

    match = _OBJECT.search(text)
    if match:
        try:
            return _require_object(json.loads(match.group(0)))
        except json.JSONDecodeError as exc:
            logger.error("JSON fragment extraction failed: %s", exc)

    raise ResponseParseError("Failed to parse research response as JSON")


def _require_object(data: Any) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise ResponseParseError(f"Expected a JSON object, got {type(data).__name__}")
    return data
