"""Unit tests for repeating schedule expansion."""

from datetime import date

from application.services.content.schedule import (
    expand_schedule,
    schedule_key,
    time_key,
    unique_times,
)

# 2025-01-01 is a Wednesday
TODAY = date(2025, 1, 1)


def saturday_event(**overrides):
    event = {
        "name": "Weekly protest",
        "locationId": "hotel-a",
        "weekday": 6,
        "time": "14:00",
        "enabled": True,
        "excludedDates": [],
    }
    event.update(overrides)
    return event


class TestExpandSchedule:
    """Test four-week materialization."""

    def test_four_saturdays(self):
        assert expand_schedule(saturday_event(), TODAY) == [
            {"locationId": "hotel-a", "datetime": "2025-01-04T14:00"},
            {"locationId": "hotel-a", "datetime": "2025-01-11T14:00"},
            {"locationId": "hotel-a", "datetime": "2025-01-18T14:00"},
            {"locationId": "hotel-a", "datetime": "2025-01-25T14:00"},
        ]

    def test_window_includes_day_28(self):
        # Wednesday event: today plus four more Wednesdays up to 2025-01-29
        instances = expand_schedule(saturday_event(weekday=3), TODAY)
        assert [i["datetime"][:10] for i in instances] == [
            "2025-01-01",
            "2025-01-08",
            "2025-01-15",
            "2025-01-22",
            "2025-01-29",
        ]

    def test_sunday_is_zero(self):
        instances = expand_schedule(saturday_event(weekday=0), TODAY)
        assert instances[0]["datetime"] == "2025-01-05T14:00"

    def test_excluded_dates_skipped(self):
        instances = expand_schedule(saturday_event(excludedDates=["2025-01-11"]), TODAY)
        assert "2025-01-11T14:00" not in [i["datetime"] for i in instances]
        assert len(instances) == 3

    def test_disabled_event_yields_nothing(self):
        assert expand_schedule(saturday_event(enabled=False), TODAY) == []

    def test_malformed_excluded_dates_ignored(self):
        instances = expand_schedule(saturday_event(excludedDates=[["2025-01-04"], {"d": 1}, 7, "2025-01-11"]), TODAY)
        assert [i["datetime"] for i in instances] == ["2025-01-04T14:00", "2025-01-18T14:00", "2025-01-25T14:00"]

    def test_excluded_dates_not_a_list(self):
        assert len(expand_schedule(saturday_event(excludedDates="2025-01-04"), TODAY)) == 4

    def test_non_object_event_yields_nothing(self):
        assert expand_schedule("weekly", TODAY) == []
        assert expand_schedule(None, TODAY) == []


class TestKeys:
    """Test identity helpers."""

    def test_schedule_key(self):
        assert schedule_key(saturday_event()) == "hotel-a|6|14:00"

    def test_time_key(self):
        assert time_key({"locationId": "x", "datetime": "2025-01-04T14:00"}) == "x|2025-01-04T14:00"

    def test_unique_times_keeps_first(self):
        first = {"locationId": "x", "datetime": "d", "note": "first"}
        second = {"locationId": "x", "datetime": "d", "note": "second"}
        assert unique_times([first, second]) == [first]

    def test_unique_times_passes_non_objects_through(self):
        entry = {"locationId": "x", "datetime": "d"}
        assert unique_times([entry, "junk", dict(entry), None, "junk"]) == [entry, "junk", None, "junk"]
