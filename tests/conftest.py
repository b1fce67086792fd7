"""Pytest configuration and shared fakes for the TripScout tests."""
from __future__ import annotations

import copy
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest

# Ensure the project root is on sys.path so that `import tripscout` and `import main` work under pytest.
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from tripscout.api.config import ModelSettings  # noqa: E402


class FakeTransport:
    """Stands in for ChatTransport; returns canned content and records calls."""

    def __init__(self, content: Optional[str] = None, error: Optional[Exception] = None, chunks=None):
        self.settings = ModelSettings()
        self.content = content
        self.error = error
        self.chunks = chunks or []
        self.calls: List[Dict[str, Any]] = []

    def complete(self, system_prompt, user_prompt, max_tokens=None):
        self.calls.append({"system": system_prompt, "user": user_prompt, "max_tokens": max_tokens})
        if self.error is not None:
            raise self.error
        return self.content

    def stream(self, system_prompt, user_prompt, max_tokens=None):
        self.calls.append({"system": system_prompt, "user": user_prompt, "max_tokens": max_tokens})
        for chunk in self.chunks:
            yield chunk
        if self.error is not None:
            raise self.error


def make_item(title: str, **overrides) -> Dict[str, Any]:
    item = {
        "title": title,
        "description": f"About {title}",
        "location": "Lisbon",
        "coordinates": {"lat": 38.7139, "lng": -9.1334},
    }
    item.update(overrides)
    return item


_PLAN: Dict[str, Any] = {
    "destination": {"name": "Lisbon", "coordinates": {"lat": 38.7223, "lng": -9.1393}},
    "mustSeeAttractions": [make_item("Castelo de S. Jorge"), make_item("Torre de Belém")],
    "hiddenGems": [make_item("LX Factory")],
    "restaurants": [make_item("Cervejaria Ramiro", price="$$", rating=4.6)],
    "itinerary": [
        {
            "day": day,
            "activities": [
                f"Morning: 9:00 AM - Visit spot {day}",
                f"Afternoon: 2:00 PM - Explore area {day}",
                f"Evening: 7:00 PM - Dinner {day}",
            ],
        }
        for day in (1, 2, 3)
    ],
    "events": [make_item("Festas de Lisboa", date="June")],
    "accommodation": [make_item("Alfama"), make_item("Chiado"), make_item("Príncipe Real")],
    "practicalAdvice": "Wear comfortable shoes; the city is hilly.",
}


@pytest.fixture
def plan_payload() -> Dict[str, Any]:
    """A fresh, valid full-plan response payload."""
    return copy.deepcopy(_PLAN)


@pytest.fixture
def plan_content(plan_payload) -> str:
    return json.dumps(plan_payload)


def batch_content(key: str, count: int = 5, **item_overrides) -> str:
    return json.dumps({key: [make_item(f"Place {n}", **item_overrides) for n in range(count)]})


def sse(*events: str) -> bytes:
    """Frame token payloads the way the chat completion stream does."""
    return "".join(f"data: {event}\n\n" for event in events).encode("utf-8")


def token(content: str) -> str:
    return json.dumps({"choices": [{"delta": {"content": content}}]}, ensure_ascii=False)
