"""Extraction of the JSON payload embedded in an issue body."""

import json
import logging
import re
from typing import Any

logger = logging.getLogger(__name__)

# First ```json fence holding a brace-delimited span
JSON_FENCE_PATTERN = re.compile(r"```json\s*\{[\s\S]*?\}\s*```", re.MULTILINE)
# Outermost braces inside the fence
JSON_OBJECT_PATTERN = re.compile(r"\{[\s\S]*\}", re.MULTILINE)


def find_json_block(body: str | None) -> str | None:
    """Return the brace-delimited text of the first ```json fence in a body."""
    if not body:
        return None

    fence = JSON_FENCE_PATTERN.search(body)
    if fence is None:
        return None

    match = JSON_OBJECT_PATTERN.search(fence.group(0))
    return match.group(0) if match else None


def extract_payload(body: str | None) -> dict[str, Any] | None:
    """Parse the JSON object embedded in an issue body.

    Only the first fenced block is considered. Surrounding prose is ignored.

    Args:
        body: Raw markdown body of the issue

    Returns:
        The decoded object, or None when the body is empty, holds no fenced
        block, or the block is not a valid JSON object
    """
    block = find_json_block(body)
    if block is None:
        return None

    try:
        payload = json.loads(block)
    except json.JSONDecodeError as e:
        logger.warning("Malformed JSON payload: %s", e)
        return None

    if not isinstance(payload, dict):
        logger.warning("JSON payload is a %s, expected an object", type(payload).__name__)
        return None
    return payload
