"""Tests for the parse/repair/fallback orchestrator."""
import math
from types import SimpleNamespace

import pytest

from itinerary_parser import (
    ItineraryParser,
    normalize,
    parse,
    parse_stored_response,
    process_response,
    total_cost,
    validate,
)
from itinerary_parser.models.itinerary import ActivityCategory, ParseStrategy


class TestParse:
    """Test the parse() entry point."""

    def test_well_formed_two_days(self, two_day_json, start_date):
        """Dates follow the start date, costs become numbers, categories map."""
        days = parse(two_day_json, "2025-07-16")

        assert [d.day_number for d in days] == [1, 2]
        assert [d.date for d in days] == ["2025-07-16", "2025-07-17"]
        museum, lunch = days[0].activities
        assert museum.category == ActivityCategory.SIGHTSEEING
        assert museum.cost == 500
        assert museum.location == "National Museum, Janpath"
        assert lunch.category == ActivityCategory.FOOD
        assert days[1].activities[0].cost == 1200
        assert days[1].activities[0].category == ActivityCategory.TRANSPORTATION

    def test_claimed_day_numbers_ignored(self, start_date):
        raw = '[{"day": 3, "activities": []}, {"day": 7}, {"day": 7}]'
        days = parse(raw, start_date)

        assert [d.day_number for d in days] == [1, 2, 3]
        assert [d.date for d in days] == ["2025-07-16", "2025-07-17", "2025-07-18"]

    def test_fenced_and_wrapped_json(self, two_day_json, start_date):
        """Markdown fences and surrounding prose are stripped."""
        fenced = f"```json\n{two_day_json}\n```"
        wrapped = f"Here is your itinerary:\n{two_day_json}\nEnjoy your trip!"

        assert len(parse(fenced, start_date)) == 2
        assert len(parse(wrapped, start_date)) == 2

    def test_missing_final_closers(self, two_day_json, start_date):
        """Earlier days survive when the trailing closers are cut off."""
        text = two_day_json.rstrip()[:-1].rstrip()[:-1]
        days = parse(text, start_date)

        assert len(days) == 2
        assert days[0].activities[0].title == "National Museum"

    def test_truncated_mid_activity(self, truncated_mid_activity, start_date):
        """The incomplete trailing day is dropped."""
        days = parse(truncated_mid_activity, start_date)

        assert len(days) == 1
        assert len(days[0].activities) == 2

    def test_prose_fallback(self, start_date):
        days = parse("Day 1:\n9:00 AM Visit the National Museum", start_date)

        assert len(days) == 1
        assert days[0].activities[0].category == ActivityCategory.SIGHTSEEING
        assert days[0].activities[0].time == "9:00 AM"

    def test_unrepairable_json_falls_back_to_text(self, start_date):
        days = parse("[oops]\nDay 1:\n10:00 Lunch at Karim's", start_date)

        assert len(days) == 1
        assert days[0].activities[0].category == ActivityCategory.FOOD

    @pytest.mark.parametrize("raw", ["", "   ", "[]", "{}", "no itinerary here", None])
    def test_total_failure_returns_empty(self, raw, start_date):
        assert parse(raw, start_date) == []

    def test_out_of_range_day_heading(self, start_date):
        """A heading whose date cannot exist is skipped, earlier days kept."""
        days = parse("Day 1\n10:00 Walk\nDay 99999999\n11:00 Swim", start_date)

        assert len(days) == 1
        assert [a.title for a in days[0].activities] == ["10:00 Walk"]

    def test_deeply_nested_json(self, start_date):
        """Nesting too deep for the decoder falls through without raising."""
        assert parse("[" * 50000 + "]" * 50000, start_date) == []

    def test_integer_over_digit_limit(self, start_date):
        raw = '[{"activities": [{"activity": "x", "cost": ' + "1" * 5000 + "}]}]"

        assert isinstance(parse(raw, start_date), list)

    def test_integer_cost_too_large_for_float(self, start_date):
        raw = '[{"activities": [{"activity": "x", "cost": 1' + "0" * 400 + "}]}]"
        days = parse(raw, start_date)

        assert days[0].activities[0].cost == 0

    def test_bracketed_citation_uses_text_parser(self, start_date):
        """An array with no day objects is not taken as an itinerary."""
        report = process_response(
            "See the guide [1].\nDay 1:\n9:00 AM Visit the National Museum", start_date
        )

        assert report.strategy == ParseStrategy.TEXT
        assert len(report.itinerary[0].activities) == 1

    def test_invalid_start_date_raises(self, two_day_json):
        with pytest.raises(ValueError):
            parse(two_day_json, "someday")

    def test_input_size_guard(self, two_day_json, start_date):
        """Oversized responses are cut and then repaired like a truncation."""
        parser = ItineraryParser(max_response_chars=two_day_json.index('"Taxi'))
        days = parser.parse(two_day_json, start_date)

        assert len(days) == 1

    def test_category_and_cost_closure(self, start_date):
        raw = (
            '[{"activities": [{"category": "karaoke", "cost": "free"},'
            ' {"type": "Bar", "cost": -5}, {"cost": "USD 40"}]}]'
        )
        activities = parse(raw, start_date)[0].activities

        assert all(a.category in set(ActivityCategory) for a in activities)
        assert [a.cost for a in activities] == [0, 0, 40]
        assert all(math.isfinite(a.cost) and a.cost >= 0 for a in activities)


class TestProcessResponse:
    """Test the parse + validate + normalize flow."""

    def test_json_report(self, two_day_json, start_date):
        report = process_response(two_day_json, start_date)

        assert report.strategy == ParseStrategy.JSON
        assert report.validation.is_valid
        assert report.total_cost == 2500
        assert report.to_display_dict()["total_days"] == 2

    def test_repaired_report(self, truncated_mid_activity, start_date):
        report = process_response(truncated_mid_activity, start_date)

        assert report.strategy == ParseStrategy.REPAIRED
        assert report.validation.is_valid

    def test_text_report(self, start_date):
        report = process_response("Day 1\n18:00 Dinner by the lake", start_date)

        assert report.strategy == ParseStrategy.TEXT
        assert report.validation.is_valid

    def test_empty_report(self, start_date):
        report = process_response("", start_date)

        assert report.strategy == ParseStrategy.EMPTY
        assert report.itinerary == []
        assert report.validation.errors == ["Itinerary cannot be empty"]
        assert report.total_cost == 0


class TestHelpers:
    """Test the module-level helpers."""

    def test_validate_and_normalize_round_trip(self, start_date):
        """A failing itinerary passes validation after normalize()."""
        raw = [{"activities": [{"activity": "Sunset cruise"}]}]

        assert not validate(raw).is_valid
        fixed = normalize(raw, start_date)
        assert validate(fixed).is_valid
        assert normalize(fixed, start_date) == fixed

    def test_total_cost(self, two_day_json, start_date):
        assert total_cost(parse(two_day_json, start_date)) == 2500
        assert total_cost([{"activities": [{"cost": 100}, {"cost": "₹50"}, {}]}]) == 150
        assert total_cost(None) == 0

    def test_parse_stored_response(self, two_day_json, start_date):
        assert len(parse_stored_response({"raw_response": two_day_json}, start_date)) == 2
        assert len(parse_stored_response({"rawResponse": two_day_json}, start_date)) == 2
        record = SimpleNamespace(raw_response=two_day_json)
        assert len(parse_stored_response(record, start_date)) == 2

    def test_parse_stored_response_missing(self, start_date):
        assert parse_stored_response(None, start_date) == []
        assert parse_stored_response({"raw_response": ""}, start_date) == []
