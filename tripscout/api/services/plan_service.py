# tripscout/api/services/plan_service.py
"""Service layer between HTTP payloads and the planner operations."""

import logging
from datetime import date
from typing import Any, Dict, List, Sequence

from tripscout.api.models import (
    LANGUAGES,
    MAX_DURATION,
    MIN_DURATION,
    ExtensionRequest,
    PlanRequest,
    Suggestion,
)

logger = logging.getLogger(__name__)


class PlanService:
    """Builds planner requests from JSON bodies and merges "load more" batches."""

    @staticmethod
    def _interests(data: Dict[str, Any]) -> List[str]:
        interests = data.get("interests")
        if not isinstance(interests, list) or not interests:
            raise ValueError("At least one interest is required")
        if not all(isinstance(i, str) and i.strip() for i in interests):
            raise ValueError("Interests must be non-empty strings")
        return interests

    @staticmethod
    def _language(data: Dict[str, Any]) -> str:
        language = data.get("language", "en")
        if language not in LANGUAGES:
            raise ValueError(f"Language must be one of: {', '.join(LANGUAGES)}")
        return language

    @staticmethod
    def _destination(data: Dict[str, Any]) -> str:
        destination = data.get("destination")
        if not destination or not isinstance(destination, str):
            raise ValueError("Invalid destination parameter")
        return destination.strip()

    @staticmethod
    def plan_request_from_json(data: Dict[str, Any]) -> PlanRequest:
        """Validate a plan request body.

        Args:
            data: JSON body with destination, date (YYYY-MM-DD), duration,
                interests and optional language

        Returns:
            PlanRequest ready for ``generate_travel_plan``

        Raises:
            ValueError: If any parameter is missing or out of range
        """
        if not isinstance(data, dict):
            raise ValueError("Request body must be a JSON object")

        duration = data.get("duration")
        if isinstance(duration, bool) or not isinstance(duration, int):
            raise ValueError("Duration must be an integer")
        if duration < MIN_DURATION or duration > MAX_DURATION:
            raise ValueError(f"Duration must be between {MIN_DURATION} and {MAX_DURATION}")

        raw_date = data.get("date")
        try:
            start = date.fromisoformat(raw_date) if raw_date else date.today()
        except (TypeError, ValueError):
            raise ValueError("Date must use the YYYY-MM-DD format")

        return PlanRequest(
            destination=PlanService._destination(data),
            date=start,
            duration=duration,
            interests=PlanService._interests(data),
            language=PlanService._language(data),
        )

    @staticmethod
    def extension_request_from_json(data: Dict[str, Any]) -> ExtensionRequest:
        """Validate a "load more" request body.

        Raises:
            ValueError: If any parameter is missing or malformed
        """
        if not isinstance(data, dict):
            raise ValueError("Request body must be a JSON object")

        existing = data.get("existingTitles", [])
        if not isinstance(existing, list) or not all(isinstance(t, str) for t in existing):
            raise ValueError("existingTitles must be a list of strings")

        return ExtensionRequest(
            destination=PlanService._destination(data),
            interests=PlanService._interests(data),
            language=PlanService._language(data),
            existing_titles=existing,
        )

    @staticmethod
    def append_batch(existing: Sequence[Suggestion], batch: Sequence[Suggestion]) -> List[Suggestion]:
        """Return a new list with ``batch`` after ``existing``.

        Existing items keep their order and nothing is removed. Titles the
        model repeated despite the exclusion list are kept too.
        """
        merged = list(existing)
        merged.extend(batch)
        logger.debug("Appended %d items to %d existing", len(batch), len(existing))
        return merged

    @staticmethod
    def existing_titles(items: Sequence[Suggestion]) -> List[str]:
        return [item.title for item in items]
