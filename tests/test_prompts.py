from datetime import date

import pytest

from tripscout.api.prompts import (
    EXTENSION_KEYS,
    TIME_SLOTS,
    build_extension_prompts,
    build_plan_prompts,
    format_start_date,
)


@pytest.mark.parametrize("language", ["en", "fr"])
@pytest.mark.parametrize("duration", [1, 7, 30])
def test_user_prompt_mentions_destination_duration_and_interests(language, duration):
    interests = ["Food & Dining", "Culture & History", "Nightlife"]
    _, user = build_plan_prompts("Lisbon", date(2025, 3, 5), duration, interests, language)

    assert "Lisbon" in user
    assert str(duration) in user
    for interest in interests:
        assert interest in user


def test_system_prompt_uses_english_time_slots():
    system, _ = build_plan_prompts("Lisbon", date(2025, 3, 5), 3, ["Adventure"], "en")

    for slot in TIME_SLOTS["en"]:
        assert slot in system
    assert "Matin: 9h00" not in system
    assert "exactly 3 days" in system
    assert "MUST be in French" not in system


def test_system_prompt_uses_french_time_slots_and_language_rule():
    system, user = build_plan_prompts("Lyon", date(2025, 3, 5), 4, ["Adventure"], "fr")

    for slot in TIME_SLOTS["fr"]:
        assert slot in system
    assert "Morning: 9:00 AM" not in system
    assert "ALL text content MUST be in French" in system
    assert "€€€" in system
    assert "EN FRANÇAIS" in user


def test_plan_prompts_are_deterministic():
    args = ("Porto", date(2025, 1, 2), 2, ["Adventure"], "en")
    assert build_plan_prompts(*args) == build_plan_prompts(*args)


def test_start_date_is_formatted_per_locale():
    assert format_start_date(date(2025, 3, 5), "en") == "3/5/2025"
    assert format_start_date(date(2025, 3, 5), "fr") == "05/03/2025"

    _, user = build_plan_prompts("Lisbon", date(2025, 3, 5), 3, ["Adventure"], "fr")
    assert "05/03/2025" in user


@pytest.mark.parametrize(
    "kwargs",
    [
        {"duration": 0},
        {"duration": 31},
        {"duration": True},
        {"interests": []},
        {"language": "de"},
        {"destination": "  "},
    ],
)
def test_plan_prompts_reject_bad_parameters(kwargs):
    params = {
        "destination": "Lisbon",
        "start": date(2025, 3, 5),
        "duration": 3,
        "interests": ["Adventure"],
        "language": "en",
    }
    params.update(kwargs)
    with pytest.raises(ValueError):
        build_plan_prompts(**params)


@pytest.mark.parametrize("category, key", sorted(EXTENSION_KEYS.items()))
def test_extension_prompts_name_the_array_key_and_exclusions(category, key):
    system, user = build_extension_prompts(
        category, "Lisbon", ["Adventure"], "en", ["Castelo de S. Jorge", "LX Factory"]
    )

    assert f"'{key}'" in system
    assert "exactly 5 NEW" in system
    assert '"coordinates"' in system
    assert "- Castelo de S. Jorge\n- LX Factory" in user
    assert "Lisbon" in user


def test_activity_prompt_is_localized():
    system, user = build_extension_prompts("activities", "Lisbon", ["Adventure"], "fr", [])

    assert "Durée suggérée" in system
    assert "ALL text content MUST be in French" in system
    assert "REPONDEZ UNIQUEMENT" in user


def test_extension_prompts_reject_unknown_category():
    with pytest.raises(ValueError):
        build_extension_prompts("restaurants", "Lisbon", ["Adventure"], "en", [])
