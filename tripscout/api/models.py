"""Shared data structures for travel planning.

The model answers with camelCase JSON (``mustSeeAttractions``,
``practicalAdvice`` ...). These dataclasses are the typed view of that JSON:
attributes are snake_case and ``to_dict()`` restores the wire names so the
front-end can consume the plan unchanged.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, Optional, Sequence, Tuple

LANGUAGES = ("en", "fr")
MIN_DURATION = 1
MAX_DURATION = 30

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Coordinates:
    """A latitude / longitude pair."""

    lat: float
    lng: float

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional["Coordinates"]:
        """Return coordinates or None when either value is missing."""
        if not isinstance(data, dict):
            return None
        lat, lng = data.get("lat"), data.get("lng")
        if lat is None or lng is None:
            return None
        try:
            return cls(lat=float(lat), lng=float(lng))
        except (TypeError, ValueError):
            return None

    def is_finite(self) -> bool:
        return math.isfinite(self.lat) and math.isfinite(self.lng)

    def to_dict(self) -> dict:
        return {"lat": self.lat, "lng": self.lng}


@dataclass(frozen=True)
class Suggestion:
    """A single recommended place or activity.

    Attractions, hidden gems, restaurants, events, accommodation areas and
    "load more" activities all share this shape. Fields the model adds that
    are not modelled explicitly (``date`` on events, ``timing`` on
    activities ...) are kept in ``extra``.
    """

    title: str
    description: str
    location: Optional[str] = None
    coordinates: Optional[Coordinates] = None
    price: Optional[str] = None
    rating: Optional[float] = None
    image_url: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict, compare=False)

    _KNOWN = ("title", "description", "location", "coordinates", "price", "rating", "imageUrl")

    @property
    def is_mappable(self) -> bool:
        """True when the item carries usable coordinates."""
        return self.coordinates is not None and self.coordinates.is_finite()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Suggestion":
        rating = data.get("rating")
        try:
            rating = float(rating) if rating is not None else None
        except (TypeError, ValueError):
            rating = None
        return cls(
            title=str(data.get("title") or ""),
            description=str(data.get("description") or ""),
            location=data.get("location"),
            coordinates=Coordinates.from_dict(data.get("coordinates")),
            price=data.get("price"),
            rating=rating,
            image_url=data.get("imageUrl"),
            extra={k: v for k, v in data.items() if k not in cls._KNOWN},
        )

    def to_dict(self) -> dict:
        result: Dict[str, Any] = {"title": self.title, "description": self.description}
        if self.location is not None:
            result["location"] = self.location
        if self.coordinates is not None:
            result["coordinates"] = self.coordinates.to_dict()
        if self.price is not None:
            result["price"] = self.price
        if self.rating is not None:
            result["rating"] = self.rating
        if self.image_url is not None:
            result["imageUrl"] = self.image_url
        result.update(self.extra)
        return result


@dataclass(frozen=True)
class ItineraryDay:
    """One day of the itinerary; ``day`` is 1-based."""

    day: int
    activities: Tuple[str, ...]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ItineraryDay":
        """Raises ValueError when ``day`` is not a whole number or ``activities`` is not a list."""
        day = data.get("day")
        if isinstance(day, bool) or not isinstance(day, (int, float, str)):
            raise ValueError(f"invalid itinerary day: {day!r}")
        try:
            number = int(day)
        except (ValueError, OverflowError):
            raise ValueError(f"invalid itinerary day: {day!r}") from None
        activities = data.get("activities") or []
        if not isinstance(activities, list):
            raise ValueError(f"invalid activities for day {number}: {activities!r}")
        return cls(day=number, activities=tuple(str(a) for a in activities))

    def to_dict(self) -> dict:
        return {"day": self.day, "activities": list(self.activities)}


@dataclass(frozen=True)
class Destination:
    name: str
    coordinates: Coordinates

    def to_dict(self) -> dict:
        return {"name": self.name, "coordinates": self.coordinates.to_dict()}


@dataclass(frozen=True)
class TravelPlan:
    """The root structured output of a full-plan generation."""

    destination: Destination
    must_see_attractions: Tuple[Suggestion, ...]
    hidden_gems: Tuple[Suggestion, ...]
    restaurants: Tuple[Suggestion, ...]
    itinerary: Tuple[ItineraryDay, ...]
    events: Tuple[Suggestion, ...]
    accommodation: Tuple[Suggestion, ...]
    practical_advice: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TravelPlan":
        """Build a plan from a payload that already passed ``is_travel_plan``."""
        dest = data["destination"]
        coords = Coordinates.from_dict(dest["coordinates"])

        def entries(key: str) -> list:
            kept = []
            for entry in data.get(key) or ():
                if isinstance(entry, dict):
                    kept.append(entry)
                else:
                    logger.warning("Dropping %s entry that is not an object: %r", key, entry)
            return kept

        def items(key: str) -> Tuple[Suggestion, ...]:
            return tuple(Suggestion.from_dict(i) for i in entries(key))

        return cls(
            destination=Destination(name=str(dest.get("name") or ""), coordinates=coords),
            must_see_attractions=items("mustSeeAttractions"),
            hidden_gems=items("hiddenGems"),
            restaurants=items("restaurants"),
            itinerary=tuple(ItineraryDay.from_dict(d) for d in entries("itinerary")),
            events=items("events"),
            accommodation=items("accommodation"),
            practical_advice=data["practicalAdvice"],
        )

    def to_dict(self) -> dict:
        return {
            "destination": self.destination.to_dict(),
            "mustSeeAttractions": [s.to_dict() for s in self.must_see_attractions],
            "hiddenGems": [s.to_dict() for s in self.hidden_gems],
            "restaurants": [s.to_dict() for s in self.restaurants],
            "itinerary": [d.to_dict() for d in self.itinerary],
            "events": [s.to_dict() for s in self.events],
            "accommodation": [s.to_dict() for s in self.accommodation],
            "practicalAdvice": self.practical_advice,
        }


@dataclass(frozen=True)
class PlanRequest:
    """Parameters of a full-plan generation."""

    destination: str
    date: date
    duration: int
    interests: Tuple[str, ...]
    language: str = "en"

    def __post_init__(self):
        # Accept any sequence of interests but store a tuple.
        object.__setattr__(self, "interests", tuple(self.interests))


@dataclass(frozen=True)
class ExtensionRequest:
    """Parameters of a "load more" request for one category."""

    destination: str
    interests: Tuple[str, ...]
    language: str = "en"
    existing_titles: Tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "interests", tuple(self.interests))
        object.__setattr__(self, "existing_titles", tuple(self.existing_titles))


def suggestions_to_dicts(items: Sequence[Suggestion]) -> list:
    return [s.to_dict() for s in items]
