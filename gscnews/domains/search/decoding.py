"""
Enhancement Decoding - Turn model reply text into an EnhancementResult.

Accepted reply shapes, tried in order:
- the whole reply is a JSON object
- a JSON object inside a ```json fenced block
- the span from the first "{" to the last "}"

Anything else is a DecodeFailure.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from .models import EnhancementResult, UpstreamEnhancement

logger = logging.getLogger(__name__)

__all__ = ["DecodeFailure", "decode_enhancement", "extract_json_object"]

_FENCED_BLOCK = re.compile(r"```(?:json)?\s*\n?(.*?)\n?\s*```", re.DOTALL | re.IGNORECASE)


@dataclass(frozen=True)
class DecodeFailure:
    """Reply could not be read as a JSON object."""

    reason: str
    raw: str


def _loads_object(text: str) -> dict[str, Any] | None:
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, RecursionError):
        return None
    return data if isinstance(data, dict) else None


def extract_json_object(text: str) -> dict[str, Any] | None:
    """Find a JSON object in a model reply, or None."""
    stripped = text.strip()
    if not stripped:
        return None

    data = _loads_object(stripped)
    if data is not None:
        return data

    match = _FENCED_BLOCK.search(stripped)
    if match:
        logger.debug("Found JSON in code block, extracting")
        data = _loads_object(match.group(1).strip())
        if data is not None:
            return data

    start = stripped.find("{")
    end = stripped.rfind("}") + 1
    if start >= 0 and end > start:
        return _loads_object(stripped[start:end])

    return None


def decode_enhancement(
    content: str,
    original_query: str,
) -> EnhancementResult | DecodeFailure:
    """
    Decode a model reply into an EnhancementResult.

    Args:
        content: Text of the first completion choice
        original_query: Raw user query, used for a missing enhancedQuery

    Returns:
        EnhancementResult with per-field defaults applied, or DecodeFailure
        when no JSON object could be found
    """
    data = extract_json_object(content)
    if data is None:
        return DecodeFailure(reason="No JSON object in model reply", raw=content)

    try:
        upstream = UpstreamEnhancement.model_validate(data)
    except ValidationError as e:
        return DecodeFailure(reason=f"Invalid enhancement payload: {e}", raw=content)
    return upstream.to_result(original_query)
