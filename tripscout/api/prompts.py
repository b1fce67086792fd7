"""Prompt construction for the travel planner.

Every builder is pure: it returns a ``(system_prompt, user_prompt)`` pair and
never touches the network. Bad parameters raise ``ValueError`` before any
request is made.
"""

from __future__ import annotations

import json
from datetime import date
from typing import Dict, Sequence, Tuple

from tripscout.api.models import LANGUAGES, MAX_DURATION, MIN_DURATION

# Extension categories: category -> JSON key the model must answer with.
EXTENSION_KEYS: Dict[str, str] = {
    "attractions": "attractions",
    "hidden_gems": "hiddenGems",
    "activities": "activities",
}
EXTENSION_BATCH_SIZE = 5

TIME_SLOTS = {
    "en": ("Morning: 9:00 AM", "Afternoon: 2:00 PM", "Evening: 7:00 PM"),
    "fr": ("Matin: 9h00", "Après-midi: 14h00", "Soir: 19h00"),
}

_COORDS_EXAMPLE = {"lat": 12.3456, "lng": 78.9012}


# ---------------------------------------------------------------------------
# Parameter checks
# ---------------------------------------------------------------------------

def _check_common(destination: str, interests: Sequence[str], language: str) -> None:
    if not destination or not isinstance(destination, str) or not destination.strip():
        raise ValueError("Invalid destination parameter")
    if not interests or not all(isinstance(i, str) and i for i in interests):
        raise ValueError("At least one interest is required")
    if language not in LANGUAGES:
        raise ValueError(f"Unsupported language: {language!r}")


def _check_duration(duration: int) -> None:
    if isinstance(duration, bool) or not isinstance(duration, int):
        raise ValueError("Duration must be an integer")
    if duration < MIN_DURATION or duration > MAX_DURATION:
        raise ValueError(f"Duration must be between {MIN_DURATION} and {MAX_DURATION}")


def format_start_date(start: date, language: str) -> str:
    """Format the start date the way the target locale writes it."""
    if language == "fr":
        return f"{start.day:02d}/{start.month:02d}/{start.year}"
    return f"{start.month}/{start.day}/{start.year}"


def _language_rule(language: str) -> str:
    if language == "fr":
        return "CRITICAL: ALL text content MUST be in French, including descriptions, activities, and advice"
    return "All content should be in English"


# ---------------------------------------------------------------------------
# Full plan
# ---------------------------------------------------------------------------

def _plan_schema_example(language: str) -> str:
    morning, afternoon, evening = TIME_SLOTS[language]
    fr = language == "fr"

    def item(title, description, location, **extra):
        entry = {"title": title, "description": description}
        entry.update(extra)
        entry["location"] = location
        entry["coordinates"] = _COORDS_EXAMPLE
        return entry

    example = {
        "destination": {"name": "City Name", "coordinates": _COORDS_EXAMPLE},
        "mustSeeAttractions": [item("Example Attraction", "Description of the attraction", "Address or area")],
        "hiddenGems": [item("Hidden Spot", "Why it's special", "Where to find it")],
        "restaurants": [
            dict(
                item("Restaurant Name", "Type of cuisine and atmosphere", "Address"),
                price="€€€" if fr else "$$$",
                rating=4.5,
            )
        ],
        "itinerary": [
            {
                "day": 1,
                "activities": [
                    f"{morning} - " + ("Visite de X" if fr else "Visit X"),
                    f"{afternoon} - " + ("Explorer Y" if fr else "Explore Y"),
                    f"{evening} - " + ("Dîner à Z" if fr else "Dinner at Z"),
                ],
            }
        ],
        "events": [item("Event Name", "What's happening", "Event location", date="Event date or timing")],
        "practicalAdvice": (
            "Important tips and information about the destination such as available transportation, weather"
        ),
        "accommodation": [item("District Name", "District details", "Area")],
    }
    return json.dumps(example, indent=2, ensure_ascii=False)


def build_plan_prompts(
    destination: str,
    start: date,
    duration: int,
    interests: Sequence[str],
    language: str = "en",
) -> Tuple[str, str]:
    """Return the system and user prompts for a full travel plan."""
    _check_common(destination, interests, language)
    _check_duration(duration)

    joined = ", ".join(interests)
    slots = ", ".join(f'"{slot}"' for slot in TIME_SLOTS[language])
    period_rule = (
        f"use French time periods ({slots})" if language == "fr" else f"use English time periods ({slots})"
    )

    system_prompt = f"""You are a travel assistant that MUST respond with ONLY a valid JSON object, no other text. Follow these rules:
1. Response must be a single JSON object
2. Do not include any explanatory text before or after the JSON
3. All string values must be properly escaped
4. CRITICAL: All recommendations MUST be highly relevant to the user's interests: {joined}
5. For each interest, provide at least:
   - 5 must-see attractions related to that interest
   - 5 hidden gems related to that interest
   - 3 restaurants that match the interest (especially for Food & Dining)
6. CRITICAL: The itinerary MUST:
   - Include exactly {duration} days, numbered from 1 to {duration}
   - Have exactly 3 activities per day (morning, afternoon, evening)
   - Group activities by interest when possible
   - Include specific times for each activity
   - Reference the recommended attractions, gems, and restaurants
7. Provide at least 3 different relevant districts or areas where to stay, considering the selected interests
8. MUST include accurate coordinates (latitude and longitude) for the destination and all locations
9. {_language_rule(language)}
10. For itinerary activities, {period_rule}
11. When suggesting restaurants, prioritize:
    - Local cuisine for "Food & Dining"
    - Family-friendly options for "Family Activities"
    - Atmospheric venues for "Culture & History"
    - Quick service for "Adventure" activities
12. For accommodation recommendations:
    - Consider proximity to attractions matching interests
    - Suggest areas with relevant amenities (e.g., nightlife districts for "Nightlife" interest)
13. Use the exact structure below:

{_plan_schema_example(language)}"""

    start_text = format_start_date(start, language)
    if language == "fr":
        user_prompt = (
            f"Générez un plan de voyage détaillé pour {destination}, {duration} jour(s), "
            f"qui se concentre spécifiquement sur les intérêts suivants: {joined}, "
            f"à partir du {start_text}. IMPORTANT: Les recommandations doivent être fortement liées "
            "aux intérêts sélectionnés. Répondez UNIQUEMENT avec un objet JSON valide qui suit exactement "
            "la structure fournie, sans texte supplémentaire. Incluez les coordonnées précises pour toutes "
            "les locations. TOUT LE CONTENU DOIT ÊTRE EN FRANÇAIS."
        )
    else:
        user_prompt = (
            f"Generate a detailed travel plan for {destination}, {duration} day(s), "
            f"that specifically focuses on the following interests: {joined}, "
            f"starting from {start_text}. IMPORTANT: Recommendations must be strongly tied to the "
            "selected interests. Respond ONLY with a valid JSON object that exactly follows the provided "
            "structure, no additional text. Include accurate coordinates for all locations."
        )
    return system_prompt, user_prompt


# ---------------------------------------------------------------------------
# "Load more" extensions
# ---------------------------------------------------------------------------

_EXTENSION_COPY = {
    "attractions": {
        "noun": "attractions",
        "item": {"title": "Attraction Name", "description": "Detailed description of the attraction",
                 "location": "Address or area"},
        "rules": [
            "Each attraction must be highly relevant to the user's interests: {interests}",
            "Focus on unique and interesting attractions that match the user's interests",
        ],
        "en": "Generate 5 new attractions for {destination} that match these interests: {interests}. "
              "Do not include these existing attractions:\n{existing}",
        "fr": "Générez 5 nouvelles attractions pour {destination} qui correspondent aux intérêts "
              "suivants: {interests}. Ne pas inclure ces attractions existantes:\n{existing}",
    },
    "hidden_gems": {
        "noun": "hidden gems",
        "item": {"title": "Hidden Gem Name",
                 "description": "Detailed description emphasizing why it's special and unique",
                 "location": "Address or area"},
        "rules": [
            "Each hidden gem must be highly relevant to the user's interests: {interests}",
            "Each hidden gem must be less known, off the beaten path, authentic to the local culture "
            "and not commonly found in standard tourist guides",
        ],
        "en": "Generate 5 new hidden gems for {destination} that match these interests: {interests}. "
              "These places should be authentic and off the beaten path. "
              "Do not include these existing places:\n{existing}",
        "fr": "Générez 5 nouveaux trésors cachés pour {destination} qui correspondent aux intérêts "
              "suivants: {interests}. Ces lieux doivent être authentiques et hors des sentiers battus. "
              "Ne pas inclure ces lieux existants:\n{existing}",
    },
    "activities": {
        "noun": "activity suggestions",
        "item": {"title": "Activity Name",
                 "description": "Detailed description of what to do and what to expect",
                 "timing": {"en": "Suggested duration: 2-3 hours", "fr": "Durée suggérée: 2-3 heures"},
                 "location": "Where to do this activity",
                 "bestTimeOfDay": {"en": "Morning", "fr": "Matin"}},
        "rules": [
            "Each activity must be highly relevant to the user's interests: {interests}",
            "Each activity must be specific and actionable, with timing information and a venue",
        ],
        "en": "Generate 5 new activity suggestions for {destination} that match these interests: "
              "{interests}. These activities should be unique and not include:\n{existing}",
        "fr": "Générez 5 nouvelles suggestions d'activités pour {destination} qui correspondent aux "
              "intérêts suivants: {interests}. Ces activités doivent être uniques et ne pas inclure:\n{existing}",
    },
}


def _localized(value, language):
    return value[language] if isinstance(value, dict) else value


def build_extension_prompts(
    category: str,
    destination: str,
    interests: Sequence[str],
    language: str = "en",
    existing_titles: Sequence[str] = (),
) -> Tuple[str, str]:
    """Return prompts asking for exactly five new items of ``category``.

    ``existing_titles`` are listed in the user prompt so the model skips
    them; nothing here guarantees it actually does.
    """
    if category not in EXTENSION_KEYS:
        raise ValueError(f"Unknown extension category: {category!r}")
    _check_common(destination, interests, language)

    key = EXTENSION_KEYS[category]
    copy = _EXTENSION_COPY[category]
    joined = ", ".join(interests)

    item = {k: _localized(v, language) for k, v in copy["item"].items()}
    item["coordinates"] = _COORDS_EXAMPLE
    # Keep coordinates right after location, like the plan schema.
    if "bestTimeOfDay" in item:
        item["bestTimeOfDay"] = item.pop("bestTimeOfDay")
    item_json = json.dumps(item, indent=2, ensure_ascii=False)

    rules = [
        f"Response must be a JSON object with a single '{key}' key containing an array of "
        f"exactly {EXTENSION_BATCH_SIZE} NEW {copy['noun']}",
        *(rule.format(interests=joined) for rule in copy["rules"]),
        "Do not include any explanatory text before or after the JSON",
        f"Each item must follow this exact structure, including title, description, location "
        f"and coordinates:\n{item_json}",
        "ALL text content MUST be in French" if language == "fr" else "All content should be in English",
        "Ensure coordinates are as accurate as possible",
        f'Response format must be exactly:\n{{\n  "{key}": [\n    {{ item1 }},\n    {{ item2 }},\n    ...\n  ]\n}}',
    ]
    numbered = "\n".join(f"{n}. {rule}" for n, rule in enumerate(rules, 1))
    system_prompt = (
        f"You are a travel assistant that MUST respond with ONLY a valid JSON object containing "
        f"a '{key}' array, no other text. Follow these rules:\n{numbered}"
    )

    existing = "\n".join(f"- {title}" for title in existing_titles) or "- (none)"
    user_prompt = copy[language].format(destination=destination, interests=joined, existing=existing)
    if language == "fr":
        user_prompt += f". REPONDEZ UNIQUEMENT AVEC UN OBJET JSON CONTENANT UN TABLEAU '{key}'."
    else:
        user_prompt += f". RESPOND ONLY WITH A JSON OBJECT CONTAINING A '{key}' ARRAY."
    return system_prompt, user_prompt
