# tripscout/api/photos.py
"""Place photos from the Google Maps Places API.

Only suggestions that carry coordinates are enriched; an item without
coordinates is simply not mappable and is left alone.
"""
from __future__ import annotations

import dataclasses
import logging
from typing import List, Optional, Sequence, Tuple
from urllib.parse import urlencode

import googlemaps
from googlemaps import exceptions as gmaps_exceptions

from tripscout.api.config import get_google_maps_config
from tripscout.api.errors import PhotoLookupError, TransportError
from tripscout.api.models import Coordinates, Suggestion

logger = logging.getLogger(__name__)

PHOTO_URL = "https://maps.googleapis.com/maps/api/place/photo"
MAX_PHOTOS = 5


class PhotoService:
    """Looks up photo URLs around a point or for a free-text location."""

    def __init__(self, client: googlemaps.Client, api_key: str, max_width: int = 800, radius: int = 500):
        self.client = client
        self.api_key = api_key
        self.max_width = max_width
        self.radius = radius

    @classmethod
    def from_config(cls) -> Optional["PhotoService"]:
        """Build a service from environment config, or None without an API key."""
        cfg = get_google_maps_config()
        api_key = cfg.get("api_key", "")
        if not api_key:
            logger.error("No Google Maps API key found in config")
            return None
        logger.info(f"Initializing Google Maps client with key: {api_key[:10]}...")
        return cls(
            googlemaps.Client(key=api_key),
            api_key,
            max_width=cfg["photo_max_width"],
            radius=cfg["nearby_radius"],
        )

    def photo_url(self, photo_reference: str) -> str:
        query = urlencode(
            {"maxwidth": self.max_width, "photo_reference": photo_reference, "key": self.api_key}
        )
        return f"{PHOTO_URL}?{query}"

    def _urls(self, photos) -> List[str]:
        return [self.photo_url(p["photo_reference"]) for p in photos or [] if p.get("photo_reference")]

    def get_place_photos(self, coordinates: Coordinates) -> List[str]:
        """Return up to five photo URLs of tourist attractions near ``coordinates``.

        Raises:
            PhotoLookupError: the nearby search did not return results
            TransportError: the Maps API could not be reached
        """
        try:
            response = self.client.places_nearby(
                location=(coordinates.lat, coordinates.lng),
                radius=self.radius,
                type="tourist_attraction",
            )
        except gmaps_exceptions.ApiError as e:
            raise PhotoLookupError("Failed to fetch nearby places") from e
        except (gmaps_exceptions.TransportError, gmaps_exceptions.Timeout) as e:
            raise TransportError(f"Google Maps request failed: {e}") from e

        if response.get("status") != "OK" or not response.get("results"):
            raise PhotoLookupError("Failed to fetch nearby places")

        photos: List[str] = []
        for result in response["results"]:
            photos.extend(self._urls(result.get("photos")))
        return photos[:MAX_PHOTOS]

    def get_location_photos(self, location: str) -> List[str]:
        """Return up to five photo URLs for the best match of ``location``.

        Falls back to a place-details lookup when the match itself carries
        no photos.

        Raises:
            PhotoLookupError: no place matched, or the details lookup failed
            TransportError: the Maps API could not be reached
        """
        try:
            response = self.client.find_place(
                input=location, input_type="textquery", fields=["photos", "place_id"]
            )
            candidates = response.get("candidates") or []
            if response.get("status") != "OK" or not candidates:
                raise PhotoLookupError("Place not found")

            place = candidates[0]
            if place.get("photos"):
                return self._urls(place["photos"])[:MAX_PHOTOS]
            if not place.get("place_id"):
                return []

            details = self.client.place(place["place_id"], fields=["photo"])
            if details.get("status") != "OK":
                raise PhotoLookupError("Failed to get place details")
            return self._urls(details.get("result", {}).get("photos"))[:MAX_PHOTOS]
        except gmaps_exceptions.ApiError as e:
            raise PhotoLookupError("Place not found") from e
        except (gmaps_exceptions.TransportError, gmaps_exceptions.Timeout) as e:
            raise TransportError(f"Google Maps request failed: {e}") from e

    def enrich_suggestions(self, items: Sequence[Suggestion]) -> Tuple[Suggestion, ...]:
        """Return copies of ``items`` with ``image_url`` set where a photo exists.

        The function is intentionally lenient: lookup failures are logged and
        the item is returned unchanged, so the rest of the plan still renders.
        """
        enriched = []
        for item in items:
            if not item.is_mappable or item.image_url:
                enriched.append(item)
                continue
            try:
                photos = self.get_place_photos(item.coordinates)
            except (PhotoLookupError, TransportError) as e:
                logger.warning(f"No photo for '{item.title}': {e}")
                enriched.append(item)
                continue
            enriched.append(dataclasses.replace(item, image_url=photos[0]) if photos else item)
        return tuple(enriched)


__all__ = ["PhotoService", "MAX_PHOTOS"]
