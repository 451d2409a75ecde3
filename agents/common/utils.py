"""Shared utility functions for agents."""

import json
import logging
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


def parse_json_response(response: str) -> Optional[Dict[str, Any]]:
    """Parse a JSON object from model output.

    Accepts bare JSON or JSON wrapped in a markdown code fence.

    Args:
        response: Model response text

    Returns:
        Parsed object, or None when no JSON object can be recovered
    """
    text = (response or "").strip()

    if text.startswith("```"):
        text = text.split("\n", 1)[1] if "\n" in text else ""
        if text.rstrip().endswith("```"):
            text = text.rstrip()[:-3]

    try:
        parsed = json.loads(text)
    except json.JSONDecodeError:
        start, end = text.find("{"), text.rfind("}")
        if start == -1 or end <= start:
            logger.warning("Response is not valid JSON")
            return None
        try:
            parsed = json.loads(text[start:end + 1])
        except json.JSONDecodeError:
            logger.warning("Response is not valid JSON")
            return None

    if not isinstance(parsed, dict):
        logger.warning(f"Expected a JSON object, got {type(parsed).__name__}")
        return None
    return parsed
