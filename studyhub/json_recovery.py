import json
import re
import logging
from typing import Any

logger = logging.getLogger(__name__)

# Greedy: first "{" through the last "}"
JSON_OBJECT_PATTERN = re.compile(r"\{[\s\S]*\}")

# Applied in order. Each can alter string literals that contain the same text.
REPAIRS = [
    (re.compile(r",\s*}"), "}"),      # trailing commas in objects
    (re.compile(r",\s*\]"), "]"),     # trailing commas in arrays
    (re.compile(r"\]\s*\["), "],["),  # adjacent arrays
]


class JsonRecoveryError(ValueError):
    """Raised when no JSON value can be recovered from model output"""
    pass


def recover_json(text: str) -> Any:
    """
    Parse JSON from raw LLM output, tolerating common model artifacts.

    Strict parse first. If that fails, the outermost {...} span is taken to
    drop any prose around it, trailing commas and concatenated arrays are
    repaired, and the span is parsed again.

    Raises:
        JsonRecoveryError: if no object span exists or the repaired span
            still fails to parse
    """
    try:
        return json.loads(text)
    except (json.JSONDecodeError, TypeError):
        logger.debug("Direct parsing failed, trying to extract JSON...")

    match = JSON_OBJECT_PATTERN.search(text or "")
    if not match:
        raise JsonRecoveryError("No JSON object found in response")

    json_string = match.group(0)
    for pattern, replacement in REPAIRS:
        json_string = pattern.sub(replacement, json_string)

    logger.debug(f"Cleaned JSON string: {json_string}")

    try:
        return json.loads(json_string)
    except json.JSONDecodeError as e:
        logger.error(f"JSON parsing error after cleaning: {e}")
        raise JsonRecoveryError(f"Invalid JSON after cleaning: {e}") from e
