# tripscout/api/services/share_service.py
"""Plain-text rendering of a travel plan for sharing."""

import logging

from tripscout.api.models import TravelPlan

logger = logging.getLogger(__name__)

SOURCE_URL = "https://www.tripscout.eu/"

_HEADINGS = {
    "en": {
        "title": "Travel Plan for",
        "attractions": "🏛️ Must-See Attractions",
        "gems": "💎 Hidden Gems",
        "restaurants": "🍽️ Restaurants",
        "itinerary": "📅 Itinerary",
        "day": "Day",
        "advice": "💡 Practical Advice",
        "accommodation": "🏨 Recommended Accommodation",
        "found_on": "Found on",
    },
    "fr": {
        "title": "Plan de Voyage pour",
        "attractions": "🏛️ Attractions Incontournables",
        "gems": "💎 Trésors Cachés",
        "restaurants": "🍽️ Restaurants",
        "itinerary": "📅 Itinéraire",
        "day": "Jour",
        "advice": "💡 Conseils Pratiques",
        "accommodation": "🏨 Hébergement Recommandé",
        "found_on": "Trouvé sur",
    },
}


class ShareService:
    """Formats plans for the clipboard / native share sheet."""

    @staticmethod
    def format_plan_for_sharing(plan: TravelPlan, language: str = "en") -> str:
        """Render ``plan`` as text with headings in ``language``.

        Args:
            plan: Validated travel plan
            language: "en" or "fr"

        Returns:
            Multi-line text ending with the source URL
        """
        h = _HEADINGS.get(language, _HEADINGS["en"])
        lines = [f"{h['title']} {plan.destination.name}", ""]

        lines.append(h["attractions"])
        lines.extend(f"• {a.title} - {a.description}" for a in plan.must_see_attractions)

        lines.extend(["", h["gems"]])
        lines.extend(f"• {g.title} - {g.description}" for g in plan.hidden_gems)

        lines.extend(["", h["restaurants"]])
        for r in plan.restaurants:
            price = f" ({r.price})" if r.price else ""
            lines.append(f"• {r.title} - {r.description}{price}")

        lines.extend(["", h["itinerary"]])
        for day in plan.itinerary:
            lines.append(f"{h['day']} {day.day}:")
            lines.extend(f"• {activity}" for activity in day.activities)
            lines.append("")

        lines.append(h["advice"])
        lines.extend([plan.practical_advice, ""])

        lines.append(h["accommodation"])
        lines.extend(f"• {acc.title} - {acc.description}" for acc in plan.accommodation)

        lines.extend(["", f"{h['found_on']} {SOURCE_URL}"])
        logger.debug("Formatted plan for %s (%d lines)", plan.destination.name, len(lines))
        return "\n".join(lines)


__all__ = ["ShareService"]
