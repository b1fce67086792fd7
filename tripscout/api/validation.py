"""Structural checks for decoded model output.

Decoding (``decode_content``) and validation (``is_travel_plan`` /
``check_extension_batch``) are separate steps so each can be exercised on its
own. Neither validator raises: they log the failing field and report it.
"""

from __future__ import annotations

import json
import logging
import math
from typing import Any, Optional

from tripscout.api.errors import DecodeError, EmptyResponseError

logger = logging.getLogger(__name__)

REQUIRED_ARRAYS = ("mustSeeAttractions", "hiddenGems", "restaurants", "itinerary", "accommodation")
REQUIRED_ITEM_FIELDS = ("title", "description", "location")


def _is_coordinate(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def decode_content(content: Optional[str]) -> Any:
    """Decode the model's message content.

    Raises:
        EmptyResponseError: content is missing or blank
        DecodeError: content is not valid JSON; the parser message is kept
    """
    if content is None or not content.strip():
        raise EmptyResponseError("No content received from OpenAI")
    try:
        return json.loads(content.strip())
    except json.JSONDecodeError as exc:
        raise DecodeError(f"Failed to parse OpenAI response: {exc}") from exc


# ---------------------------------------------------------------------------
# Full plan
# ---------------------------------------------------------------------------

def validation_failure(data: Any) -> Optional[str]:
    """Return why ``data`` is not a travel plan, or None if it is one.

    A missing ``events`` array is filled in with ``[]`` on ``data`` itself;
    every other check is read-only.
    """
    if not isinstance(data, dict):
        logger.error("Invalid response: not an object: %r", data)
        return "response is not an object"

    destination = data.get("destination")
    coords = destination.get("coordinates") if isinstance(destination, dict) else None
    has_coords = isinstance(coords, dict) and all(_is_coordinate(coords.get(axis)) for axis in ("lat", "lng"))
    if not has_coords:
        logger.error("Invalid response: missing destination coordinates: %r", destination)
        return "missing destination coordinates"

    for key in REQUIRED_ARRAYS:
        if not isinstance(data.get(key), list):
            logger.error("Invalid response: %s is not an array: %r", key, data.get(key))
            return f"{key} is not an array"

    events = data.get("events")
    if events is None:
        data["events"] = []
    elif not isinstance(events, list):
        logger.error("Invalid response: events is present but not an array: %r", events)
        return "events is present but not an array"

    if not isinstance(data.get("practicalAdvice"), str):
        logger.error("Invalid response: practicalAdvice is not a string: %r", data.get("practicalAdvice"))
        return "practicalAdvice is not a string"

    return None


def is_travel_plan(data: Any) -> bool:
    """Type-guard for a decoded full-plan response."""
    return validation_failure(data) is None


# ---------------------------------------------------------------------------
# Extension batches
# ---------------------------------------------------------------------------

def item_failure(item: Any) -> Optional[str]:
    """Strict check applied to every item of a "load more" batch."""
    if not isinstance(item, dict):
        return "item is not an object"
    for name in REQUIRED_ITEM_FIELDS:
        value = item.get(name)
        if not isinstance(value, str) or not value.strip():
            return f"item is missing {name}"
    coords = item.get("coordinates")
    if not isinstance(coords, dict):
        return "item is missing coordinates"
    for axis in ("lat", "lng"):
        if not _is_coordinate(coords.get(axis)):
            return f"item is missing coordinates.{axis}"
    return None


def check_extension_batch(payload: Any, key: str, expected: int = 5) -> Optional[str]:
    """Return why ``payload`` is not a valid batch under ``key``, or None.

    The batch is all-or-nothing: one bad item rejects every item.
    """
    if not isinstance(payload, dict):
        logger.error("Invalid response structure: not an object: %r", payload)
        return "response is not an object"

    items = payload.get(key)
    if not isinstance(items, list) or len(items) != expected:
        logger.error("Invalid response structure for %s: %r", key, items)
        return f"expected object with {key} array of {expected} items"

    for index, item in enumerate(items):
        reason = item_failure(item)
        if reason:
            logger.error("Invalid %s item at position %d (%s): %r", key, index, reason, item)
            return f"invalid {key} item at position {index}: {reason}"
    return None


def describe(data: Any) -> str:
    """Short preview of a payload for debug logs."""
    text = json.dumps(data, ensure_ascii=False) if not isinstance(data, str) else data
    return text[:200] + ("..." if len(text) > 200 else "")
