"""Travel plan generation and "load more" extensions.

Each public function performs exactly one model round trip and returns a
``Result``. Nothing is retried and nothing is cached; the caller decides what
to do with a failure.
"""

from __future__ import annotations

import logging
from typing import Tuple

from tripscout.api.errors import (
    ExtensionError,
    GenerationError,
    Result,
    TripScoutError,
    ValidationError,
)
from tripscout.api.models import ExtensionRequest, PlanRequest, Suggestion, TravelPlan
from tripscout.api.prompts import (
    EXTENSION_BATCH_SIZE,
    EXTENSION_KEYS,
    build_extension_prompts,
    build_plan_prompts,
)
from tripscout.api.validation import check_extension_batch, decode_content, describe, validation_failure

logger = logging.getLogger(__name__)

_CATEGORY_LABELS = {
    "attractions": "attractions",
    "hidden_gems": "hidden gems",
    "activities": "activities",
}


# ---------------------------------------------------------------------------
# Full plan
# ---------------------------------------------------------------------------

def parse_travel_plan(content, duration=None) -> TravelPlan:
    """Decode and validate a full-plan response.

    Raises:
        EmptyResponseError, DecodeError, ValidationError
    """
    payload = decode_content(content)
    logger.debug("Successfully parsed JSON response")

    reason = validation_failure(payload)
    if reason:
        raise ValidationError(f"OpenAI response does not match expected format: {reason}")

    try:
        plan = TravelPlan.from_dict(payload)
    except ValueError as exc:
        logger.error("Invalid response: %s", exc)
        raise ValidationError(f"OpenAI response does not match expected format: {exc}") from exc
    if duration is not None and len(plan.itinerary) != duration:
        logger.warning(
            "Itinerary has %d days but %d were requested", len(plan.itinerary), duration
        )
    return plan


def generate_travel_plan(transport, request: PlanRequest) -> Result[TravelPlan]:
    """Generate a complete travel plan for ``request``.

    Args:
        transport: object exposing ``complete(system, user, max_tokens)``
        request: destination, start date, duration, interests and language

    Returns:
        Result holding the TravelPlan, or a GenerationError whose ``kind`` is
        one of TransportError, EmptyResponseError, DecodeError, ValidationError
    """
    system_prompt, user_prompt = build_plan_prompts(
        request.destination, request.date, request.duration, request.interests, request.language
    )

    logger.info(
        "Generating travel plan for %s, %d days, interests=%s, language=%s",
        request.destination,
        request.duration,
        ", ".join(request.interests),
        request.language,
    )
    try:
        content = transport.complete(
            system_prompt, user_prompt, max_tokens=transport.settings.max_tokens
        )
        if content:
            logger.debug("Raw response: %s", describe(content))
        plan = parse_travel_plan(content, request.duration)
    except TripScoutError as exc:
        logger.error("Error generating travel plan: %s", exc)
        return Result.failure(GenerationError(exc))

    logger.info("Response validation successful for %s", plan.destination.name)
    return Result.success(plan)


# ---------------------------------------------------------------------------
# Extensions
# ---------------------------------------------------------------------------

def parse_extension_batch(content, category: str) -> Tuple[Suggestion, ...]:
    """Decode and check a "load more" response for ``category``.

    Raises:
        EmptyResponseError, DecodeError, ValidationError
    """
    key = EXTENSION_KEYS[category]
    payload = decode_content(content)
    reason = check_extension_batch(payload, key, EXTENSION_BATCH_SIZE)
    if reason:
        raise ValidationError(f"Invalid response format: {reason}")
    return tuple(Suggestion.from_dict(item) for item in payload[key])


def generate_more(transport, category: str, request: ExtensionRequest) -> Result[Tuple[Suggestion, ...]]:
    """Ask for exactly five new items of ``category``.

    Titles in ``request.existing_titles`` are excluded in the prompt only;
    a repeated title in the answer is passed through as-is.
    """
    label = _CATEGORY_LABELS[category]
    system_prompt, user_prompt = build_extension_prompts(
        category,
        request.destination,
        request.interests,
        request.language,
        request.existing_titles,
    )

    logger.info(
        "Generating more %s for %s (%d already shown)",
        label,
        request.destination,
        len(request.existing_titles),
    )
    try:
        content = transport.complete(system_prompt, user_prompt)
        items = parse_extension_batch(content, category)
    except TripScoutError as exc:
        logger.error("Error generating more %s: %s", label, exc)
        return Result.failure(ExtensionError(exc, label))

    return Result.success(items)


def generate_more_attractions(transport, request: ExtensionRequest) -> Result[Tuple[Suggestion, ...]]:
    return generate_more(transport, "attractions", request)


def generate_more_hidden_gems(transport, request: ExtensionRequest) -> Result[Tuple[Suggestion, ...]]:
    return generate_more(transport, "hidden_gems", request)


def generate_more_activities(transport, request: ExtensionRequest) -> Result[Tuple[Suggestion, ...]]:
    return generate_more(transport, "activities", request)
