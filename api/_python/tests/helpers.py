"""
Test helper functions for realignment schedule validation.

These functions can be imported by test modules for schedule analysis.
"""

import sys
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path

import pytz

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from zoneshift.types import (
    AnchorPoint,
    ComputedView,
    CorePlan,
    EventItem,
    PlanParams,
    PlanPrefs,
    ResolvedAnchor,
)
from zoneshift.zoned import format_time, in_zone, minutes_between, to_zoned


def build_plan(
    home_zone: str = "UTC",
    target_zone: str = "Asia/Tokyo",
    start_date_local: str = "2025-03-01",
    start_sleep_local_time: str = "23:00",
    start_sleep_zone: str | None = "UTC",
    sleep_hours: float = 8,
    max_later: float = 1,
    max_earlier: float = 1,
    anchors: list[AnchorPoint] | None = None,
    events: list[EventItem] | None = None,
    display_zone: str = "target",
) -> CorePlan:
    """
    Build a plan for testing.

    Defaults: UTC home, Tokyo target (UTC+9, no DST), sleeping 23:00-07:00
    UTC from 1 March 2025, 1h/day caps both ways.
    """
    return CorePlan(
        id="test-plan",
        params=PlanParams(
            home_zone=home_zone,
            target_zone=target_zone,
            start_date_local=start_date_local,
            start_sleep_local_time=start_sleep_local_time,
            start_sleep_zone=start_sleep_zone,
            sleep_hours=sleep_hours,
            max_shift_later_per_day_hours=max_later,
            max_shift_earlier_per_day_hours=max_earlier,
        ),
        anchors=list(anchors or []),
        events=list(events or []),
        prefs=PlanPrefs(display_zone=display_zone),
    )


def utc(year: int, month: int, day: int, hour: int = 0, minute: int = 0) -> datetime:
    """Aware UTC datetime."""
    return pytz.UTC.localize(datetime(year, month, day, hour, minute))


def zoned(local_date: str, local_time: str, zone: str) -> datetime:
    """Aware datetime from local date/time strings."""
    return to_zoned(local_date, local_time, zone)


def time_diff_hours(start: datetime, end: datetime) -> float:
    """
    Hours elapsed from start to end.

    Returns the difference (end - start) in hours, by instant.
    """
    return minutes_between(start, end) / 60


def wake_times_local(view: ComputedView, zone: str) -> list[str]:
    """Wake time of each day as "HH:MM" in a zone."""
    return [format_time(in_zone(day.wake, zone)) for day in view.days]


def anchor_dates(resolved: list[ResolvedAnchor]) -> set[date]:
    """Target-zone dates carrying an anchor."""
    return {item.wake.date() for item in resolved}


@dataclass
class ValidationIssue:
    """An issue found during schedule validation."""

    severity: str  # "error" or "warning"
    category: str  # e.g., "clamp_bound", "date_coverage"
    message: str
    date: str


def validate_date_coverage(view: ComputedView) -> list[ValidationIssue]:
    """
    Validate that the days are consecutive with exactly one entry per date.

    Args:
        view: Computed view

    Returns:
        List of validation issues found
    """
    issues = []
    for previous, current in zip(view.days, view.days[1:]):
        gap = (current.date - previous.date).days
        if gap != 1:
            issues.append(
                ValidationIssue(
                    severity="error",
                    category="date_coverage",
                    message=f"Expected consecutive dates, got a gap of {gap} days",
                    date=current.date.isoformat(),
                )
            )
    return issues


def validate_clamp_bound(
    view: ComputedView, anchored: set[date], max_cap_hours: float
) -> list[ValidationIssue]:
    """
    Validate the per-day drift between consecutive interpolated dates.

    Only pairs where neither date carries an anchor are checked: the step
    into an anchor date is allowed to jump so the anchor is hit exactly.

    Args:
        view: Computed view
        anchored: Dates carrying an anchor
        max_cap_hours: Larger of the two per-day caps

    Returns:
        List of validation issues found
    """
    issues = []
    for previous, current in zip(view.days, view.days[1:]):
        if previous.date in anchored or current.date in anchored:
            continue
        drift = time_diff_hours(previous.wake, current.wake) - 24
        # Float tolerance for sub-minute steps
        if abs(drift) > max_cap_hours + 1e-6:
            issues.append(
                ValidationIssue(
                    severity="error",
                    category="clamp_bound",
                    message=f"Wake drifted {drift:+.2f}h (cap {max_cap_hours}h)",
                    date=current.date.isoformat(),
                )
            )
    return issues


def run_all_validations(
    view: ComputedView, anchored: set[date], max_cap_hours: float
) -> list[ValidationIssue]:
    """Run every structural validation on a computed view."""
    return validate_date_coverage(view) + validate_clamp_bound(view, anchored, max_cap_hours)
