import json
from datetime import date

import pytest

from conftest import FakeTransport, batch_content, make_item
from tripscout.api.errors import (
    DecodeError,
    EmptyResponseError,
    ExtensionError,
    GenerationError,
    TransportError,
    ValidationError,
)
from tripscout.api.models import ExtensionRequest, PlanRequest, TravelPlan
from tripscout.api.planner import (
    generate_more_activities,
    generate_more_attractions,
    generate_more_hidden_gems,
    generate_travel_plan,
)

LISBON = PlanRequest(
    destination="Lisbon",
    date=date(2025, 6, 1),
    duration=3,
    interests=["Food & Dining"],
    language="en",
)


def test_lisbon_plan_has_three_days_of_three_slots(plan_content):
    transport = FakeTransport(plan_content)

    result = generate_travel_plan(transport, LISBON)

    assert result.ok
    plan = result.value
    assert isinstance(plan, TravelPlan)
    assert len(plan.itinerary) == 3
    assert [d.day for d in plan.itinerary] == [1, 2, 3]
    for day in plan.itinerary:
        assert len(day.activities) == 3
        for activity in day.activities:
            assert any(slot in activity for slot in ("Morning:", "Afternoon:", "Evening:"))


def test_plan_request_is_sent_once_with_max_tokens(plan_content):
    transport = FakeTransport(plan_content)

    generate_travel_plan(transport, LISBON)

    assert len(transport.calls) == 1
    assert transport.calls[0]["max_tokens"] == 4000
    assert "Lisbon" in transport.calls[0]["user"]


def test_plan_fields_are_typed(plan_content):
    plan = generate_travel_plan(FakeTransport(plan_content), LISBON).unwrap()

    assert plan.destination.name == "Lisbon"
    assert plan.destination.coordinates.lat == pytest.approx(38.7223)
    assert plan.restaurants[0].price == "$$"
    assert plan.restaurants[0].rating == pytest.approx(4.6)
    assert plan.events[0].extra == {"date": "June"}
    assert plan.to_dict()["mustSeeAttractions"][0]["title"] == "Castelo de S. Jorge"


def test_missing_events_become_empty(plan_payload):
    del plan_payload["events"]
    plan = generate_travel_plan(FakeTransport(json.dumps(plan_payload)), LISBON).unwrap()
    assert plan.events == ()


def test_transport_failure_is_returned():
    cause = TransportError("connection reset")
    result = generate_travel_plan(FakeTransport(error=cause), LISBON)

    assert not result.ok
    assert isinstance(result.error, GenerationError)
    assert result.kind is cause
    assert "connection reset" in str(result.error)


def test_empty_content_is_returned():
    result = generate_travel_plan(FakeTransport(""), LISBON)
    assert isinstance(result.kind, EmptyResponseError)


def test_conversational_text_fails_to_decode():
    result = generate_travel_plan(FakeTransport("Here you go: {}"), LISBON)

    assert isinstance(result.kind, DecodeError)
    assert str(result.error).startswith("Failed to generate travel plan: Failed to parse OpenAI response")


def test_shape_mismatch_is_a_validation_error(plan_payload):
    del plan_payload["hiddenGems"]
    result = generate_travel_plan(FakeTransport(json.dumps(plan_payload)), LISBON)

    assert isinstance(result.kind, ValidationError)
    assert "does not match expected format" in str(result.error)
    with pytest.raises(GenerationError):
        result.unwrap()


@pytest.mark.parametrize("day", ["Day 1", None, [1], {"n": 1}, float("inf")])
def test_malformed_itinerary_day_is_a_validation_error(plan_payload, day):
    plan_payload["itinerary"][0]["day"] = day
    result = generate_travel_plan(FakeTransport(json.dumps(plan_payload)), LISBON)

    assert isinstance(result.error, GenerationError)
    assert isinstance(result.kind, ValidationError)
    assert "invalid itinerary day" in str(result.error)


def test_itinerary_activities_must_be_a_list(plan_payload):
    plan_payload["itinerary"][1]["activities"] = "Morning: walk"
    result = generate_travel_plan(FakeTransport(json.dumps(plan_payload)), LISBON)

    assert isinstance(result.kind, ValidationError)
    assert "invalid activities for day 2" in str(result.error)


def test_numeric_string_day_is_accepted(plan_payload):
    plan_payload["itinerary"][0]["day"] = "1"
    plan = generate_travel_plan(FakeTransport(json.dumps(plan_payload)), LISBON).unwrap()
    assert plan.itinerary[0].day == 1


def test_non_object_entries_are_dropped_with_a_warning(plan_payload, caplog):
    plan_payload["mustSeeAttractions"].append("Belem Tower")
    expected = len(plan_payload["mustSeeAttractions"]) - 1

    with caplog.at_level("WARNING", logger="tripscout.api.models"):
        plan = TravelPlan.from_dict(plan_payload)

    assert len(plan.must_see_attractions) == expected
    assert "Dropping mustSeeAttractions entry" in caplog.text
    assert "Belem Tower" in caplog.text


def test_bad_parameters_raise_before_any_request():
    transport = FakeTransport("{}")
    bad = PlanRequest(destination="Lisbon", date=date(2025, 6, 1), duration=0, interests=["Adventure"])

    with pytest.raises(ValueError):
        generate_travel_plan(transport, bad)
    assert transport.calls == []


FRENCH_ATTRACTIONS = ExtensionRequest(
    destination="Lisbon",
    interests=["Adventure"],
    language="fr",
    existing_titles=["Castelo de S. Jorge"],
)


def test_more_attractions_returns_five_new_mappable_items():
    transport = FakeTransport(batch_content("attractions"))

    result = generate_more_attractions(transport, FRENCH_ATTRACTIONS)

    assert result.ok
    items = result.value
    assert len(items) == 5
    assert [i.title for i in items] == [f"Place {n}" for n in range(5)]
    assert all(i.coordinates is not None for i in items)
    assert "Castelo de S. Jorge" not in [i.title for i in items]
    assert "- Castelo de S. Jorge" in transport.calls[0]["user"]
    assert transport.calls[0]["max_tokens"] is None


@pytest.mark.parametrize(
    "operation, key",
    [
        (generate_more_attractions, "attractions"),
        (generate_more_hidden_gems, "hiddenGems"),
        (generate_more_activities, "activities"),
    ],
)
def test_each_extender_reads_its_own_key(operation, key):
    result = operation(FakeTransport(batch_content(key)), FRENCH_ATTRACTIONS)
    assert result.ok
    assert len(result.value) == 5


@pytest.mark.parametrize("count", [4, 6])
def test_batch_of_wrong_size_is_rejected(count):
    result = generate_more_hidden_gems(FakeTransport(batch_content("hiddenGems", count)), FRENCH_ATTRACTIONS)

    assert isinstance(result.error, ExtensionError)
    assert isinstance(result.kind, ValidationError)
    assert str(result.error).startswith("Failed to generate more hidden gems")


def test_one_bad_item_rejects_the_whole_batch():
    items = [make_item(f"Place {n}") for n in range(5)]
    del items[4]["coordinates"]["lng"]
    result = generate_more_activities(FakeTransport(json.dumps({"activities": items})), FRENCH_ATTRACTIONS)

    assert not result.ok
    assert result.value is None


def test_repeated_titles_are_not_filtered():
    items = [make_item("Castelo de S. Jorge")] + [make_item(f"Place {n}") for n in range(4)]
    result = generate_more_attractions(FakeTransport(json.dumps({"attractions": items})), FRENCH_ATTRACTIONS)

    assert result.ok
    assert result.value[0].title == "Castelo de S. Jorge"


def test_extension_transport_failure_is_returned():
    result = generate_more_attractions(FakeTransport(error=TransportError("timeout")), FRENCH_ATTRACTIONS)
    assert isinstance(result.kind, TransportError)
