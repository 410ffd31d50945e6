"""
Conversion between plain dicts and plan/view types.

parse_core_plan accepts both snake_case keys and the camelCase keys used by
persisted browser plans ("homeZone", "localDate", ...). plan_to_dict writes
snake_case, and parse_core_plan(plan_to_dict(plan)) == plan.
"""

import math
from dataclasses import asdict, fields, is_dataclass
from datetime import date, datetime
from typing import Any

from .errors import PlanValidationError
from .types import AnchorPoint, ComputedView, CorePlan, EventItem, LocalDateTime, PlanParams, PlanPrefs
from .validation import validate_plan
from .zoned import format_zoned

# snake_case field -> camelCase alias
_ALIASES = {
    "home_zone": "homeZone",
    "target_zone": "targetZone",
    "start_date_local": "startDateLocal",
    "start_sleep_local_time": "startSleepLocalTime",
    "start_sleep_zone": "startSleepZone",
    "sleep_hours": "sleepHours",
    "max_shift_later_per_day_hours": "maxShiftLaterPerDayHours",
    "max_shift_earlier_per_day_hours": "maxShiftEarlierPerDayHours",
    "local_date": "localDate",
    "local_time": "localTime",
    "local_end": "localEnd",
    "color_hint": "colorHint",
    "display_zone": "displayZone",
    "time_step_minutes": "timeStepMinutes",
    "default_shift_anchor": "defaultShiftAnchor",
}

_MISSING = object()


class _FieldReader:
    """Reads fields from a raw dict, collecting errors instead of raising."""

    def __init__(self, data: Any, path: str, errors: list[str]):
        self.path = path
        self.errors = errors
        if not isinstance(data, dict):
            errors.append(f"{path} must be an object")
            data = {}
        self.data = data

    def get(self, name: str, required: bool = False, default: Any = None) -> Any:
        value = self.data.get(name, _MISSING)
        if value is _MISSING and name in _ALIASES:
            value = self.data.get(_ALIASES[name], _MISSING)
        if value is _MISSING or value is None:
            if required:
                self.errors.append(f"Missing required field: {self.path}.{name}")
            return default
        return value

    def get_str(self, name: str, required: bool = False) -> str | None:
        value = self.get(name, required)
        if value is not None and not isinstance(value, str):
            self.errors.append(f"{self.path}.{name} must be a string")
            return None
        return value


def _parse_local(data: Any, path: str, errors: list[str]) -> LocalDateTime | None:
    if data is None:
        return None
    reader = _FieldReader(data, path, errors)
    return LocalDateTime(
        date=reader.get_str("date", required=True),
        time=reader.get_str("time", required=True),
        zone=reader.get_str("zone", required=True),
    )


def _parse_anchor(data: Any, path: str, errors: list[str]) -> AnchorPoint:
    reader = _FieldReader(data, path, errors)
    kind = reader.get_str("kind", required=True)
    if kind is not None and kind not in ("wake", "sleep"):
        errors.append(f"{path}.kind must be 'wake' or 'sleep', got {kind!r}")
    # Date/time content is not checked here: a bad anchor is dropped at compute time
    return AnchorPoint(
        id=reader.get_str("id", required=True),
        kind=kind,
        local_date=reader.get_str("local_date", required=True),
        local_time=reader.get_str("local_time", required=True),
        zone=reader.get_str("zone", required=True),
        note=reader.get_str("note"),
    )


def _parse_event(data: Any, path: str, errors: list[str]) -> EventItem:
    reader = _FieldReader(data, path, errors)
    event = EventItem(
        id=reader.get_str("id", required=True),
        title=reader.get_str("title", required=True),
        start=reader.get_str("start"),
        end=reader.get_str("end"),
        local=_parse_local(reader.get("local"), f"{path}.local", errors),
        local_end=_parse_local(reader.get("local_end"), f"{path}.local_end", errors),
        color_hint=reader.get_str("color_hint"),
    )
    if event.start is None and event.local is None:
        errors.append(f"{path} needs either start or local")
    return event


def _parse_list(data: Any, path: str, errors: list[str], parse_item) -> list:
    if data is None:
        return []
    if not isinstance(data, list):
        errors.append(f"{path} must be a list")
        return []
    return [parse_item(item, f"{path}[{idx}]", errors) for idx, item in enumerate(data)]


def parse_core_plan(data: dict) -> CorePlan:
    """
    Build a CorePlan from a raw dict and validate it.

    Args:
        data: Plan dict (snake_case or camelCase keys)

    Returns:
        Validated CorePlan

    Raises:
        PlanValidationError: listing every structural problem found, or
            from validate_plan (including UnknownZoneError)
    """
    errors: list[str] = []
    root = _FieldReader(data, "plan", errors)
    params_reader = _FieldReader(root.get("params", required=True, default={}), "params", errors)

    params = PlanParams(
        home_zone=params_reader.get_str("home_zone", required=True),
        target_zone=params_reader.get_str("target_zone", required=True),
        start_date_local=params_reader.get_str("start_date_local", required=True),
        start_sleep_local_time=params_reader.get_str("start_sleep_local_time", required=True),
        sleep_hours=params_reader.get("sleep_hours", required=True),
        max_shift_later_per_day_hours=params_reader.get("max_shift_later_per_day_hours", required=True),
        max_shift_earlier_per_day_hours=params_reader.get("max_shift_earlier_per_day_hours", required=True),
        start_sleep_zone=params_reader.get_str("start_sleep_zone"),
    )

    prefs_reader = _FieldReader(root.get("prefs", default={}), "prefs", errors)
    prefs = PlanPrefs(
        display_zone=prefs_reader.get("display_zone", default="target"),
        time_step_minutes=prefs_reader.get("time_step_minutes", default=30),
    )

    default_anchor_data = root.get("default_shift_anchor")
    plan = CorePlan(
        id=root.get_str("id", required=True),
        version=root.get("version", default=1),
        params=params,
        anchors=_parse_list(root.get("anchors"), "anchors", errors, _parse_anchor),
        events=_parse_list(root.get("events"), "events", errors, _parse_event),
        prefs=prefs,
        default_shift_anchor=(
            _parse_anchor(default_anchor_data, "default_shift_anchor", errors)
            if default_anchor_data is not None
            else None
        ),
    )

    if errors:
        raise PlanValidationError(errors)
    validate_plan(plan)
    return plan


def plan_to_dict(plan: CorePlan) -> dict:
    """Convert a plan to a JSON-safe dict (snake_case keys)."""
    return asdict(plan)


def to_jsonable(obj: Any) -> Any:
    """
    Convert computed values to JSON-safe data recursively.

    Aware datetimes become "2024-10-18T07:30+08:00[Asia/Taipei]", dates
    become "YYYY-MM-DD" and an infinite days-needed becomes None.
    """
    if is_dataclass(obj) and not isinstance(obj, type):
        return {f.name: to_jsonable(getattr(obj, f.name)) for f in fields(obj)}
    if isinstance(obj, datetime):
        return format_zoned(obj)
    if isinstance(obj, date):
        return obj.isoformat()
    if isinstance(obj, dict):
        return {str(to_jsonable(k)): to_jsonable(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [to_jsonable(item) for item in obj]
    if isinstance(obj, float) and math.isinf(obj):
        return None
    return obj


def view_to_dict(view: ComputedView) -> dict:
    """Convert a computed view to a JSON-safe dict."""
    return to_jsonable(view)
