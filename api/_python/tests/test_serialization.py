"""
Tests for plan parsing and view serialization.
"""

import json

import pytest

from helpers import build_plan
from zoneshift.errors import PlanValidationError, UnknownZoneError
from zoneshift.planner import compute_plan
from zoneshift.serialization import parse_core_plan, plan_to_dict, view_to_dict


def camel_case_plan() -> dict:
    """Plan as persisted by the browser client."""
    return {
        "id": "trip-42",
        "version": 1,
        "params": {
            "homeZone": "America/New_York",
            "targetZone": "Europe/Paris",
            "startDateLocal": "2025-05-10",
            "startSleepLocalTime": "23:00",
            "startSleepZone": "America/New_York",
            "sleepHours": 7.5,
            "maxShiftLaterPerDayHours": 1,
            "maxShiftEarlierPerDayHours": 1.5,
        },
        "anchors": [
            {
                "id": "meeting",
                "kind": "wake",
                "localDate": "2025-05-13",
                "localTime": "07:30",
                "zone": "Europe/Paris",
            }
        ],
        "events": [
            {
                "id": "flight",
                "title": "JFK-CDG",
                "start": "2025-05-11T22:00:00Z",
                "end": "2025-05-12T05:30:00Z",
                "colorHint": "peach",
            },
            {
                "id": "dinner",
                "title": "Dinner",
                "local": {"date": "2025-05-12", "time": "20:00", "zone": "Europe/Paris"},
            },
        ],
        "prefs": {"displayZone": "home", "timeStepMinutes": 15},
    }


class TestParseCorePlan:
    def test_camel_case_keys(self):
        plan = parse_core_plan(camel_case_plan())
        assert plan.params.home_zone == "America/New_York"
        assert plan.params.sleep_hours == 7.5
        assert plan.params.start_sleep_zone == "America/New_York"
        assert plan.anchors[0].local_time == "07:30"
        assert plan.events[0].color_hint == "peach"
        assert plan.events[1].local.zone == "Europe/Paris"
        assert plan.prefs.display_zone == "home"
        assert plan.prefs.time_step_minutes == 15

    def test_round_trip(self, sample_plan):
        assert parse_core_plan(plan_to_dict(sample_plan)) == sample_plan

    def test_round_trip_through_json(self):
        plan = parse_core_plan(camel_case_plan())
        assert parse_core_plan(json.loads(json.dumps(plan_to_dict(plan)))) == plan

    def test_defaults(self):
        data = plan_to_dict(build_plan())
        del data["prefs"]
        del data["anchors"]
        plan = parse_core_plan(data)
        assert plan.prefs.display_zone == "target"
        assert plan.anchors == []

    def test_missing_fields_all_reported(self):
        with pytest.raises(PlanValidationError) as exc_info:
            parse_core_plan({"params": {"homeZone": "UTC"}})
        errors = exc_info.value.errors
        assert "Missing required field: plan.id" in errors
        assert "Missing required field: params.target_zone" in errors
        assert "Missing required field: params.sleep_hours" in errors
        assert not any("home_zone" in error for error in errors)

    def test_not_an_object(self):
        with pytest.raises(PlanValidationError, match="plan must be an object"):
            parse_core_plan(["not", "a", "plan"])

    def test_bad_anchor_kind(self):
        data = camel_case_plan()
        data["anchors"][0]["kind"] = "nap"
        with pytest.raises(PlanValidationError, match="kind must be 'wake' or 'sleep'"):
            parse_core_plan(data)

    def test_event_needs_a_start(self):
        data = camel_case_plan()
        del data["events"][0]["start"]
        with pytest.raises(PlanValidationError, match=r"events\[0\] needs either start or local"):
            parse_core_plan(data)

    def test_anchor_date_content_not_checked(self):
        """Bad anchor dates parse; they are dropped at compute time."""
        data = camel_case_plan()
        data["anchors"][0]["localDate"] = "2025-05-32"
        assert parse_core_plan(data).anchors[0].local_date == "2025-05-32"

    def test_unknown_zone(self):
        data = camel_case_plan()
        data["params"]["targetZone"] = "Europe/Atlantis"
        with pytest.raises(UnknownZoneError):
            parse_core_plan(data)


class TestViewToDict:
    def test_json_serializable(self, sample_plan):
        data = view_to_dict(compute_plan(sample_plan))
        encoded = json.loads(json.dumps(data))
        first = encoded["days"][0]
        assert first["date"] == "2024-10-17"
        assert first["wake"] == "2024-10-17T00:30+08:00[Asia/Taipei]"
        assert first["wake_time_local"] == "00:30"
        assert encoded["meta"]["days_needed"] == 6
        assert encoded["display_zone"] == "Asia/Taipei"

    def test_infinite_days_needed_becomes_null(self, log_messages):
        data = view_to_dict(compute_plan(build_plan(max_later=0, max_earlier=0)))
        assert data["meta"]["days_needed"] is None
        json.dumps(data)
