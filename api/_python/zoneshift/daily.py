"""
Per-day view derived from the wake schedule.

For each date: sleep window, bright-light window and how far the sleep start
moved compared with simply repeating the previous day.
"""

from datetime import date, datetime

from .projection import project_range
from .types import BrightWindow, DailyView, DayAnchorInfo
from .zoned import (
    MINUTES_PER_DAY,
    add_days,
    add_minutes,
    minutes_between,
    start_of_day,
)

# Bright light starts this long after waking
BRIGHT_START_OFFSET_MINUTES = 30
# ...and stops this long before the next sleep
BRIGHT_END_BEFORE_SLEEP_HOURS = 3
# Collapsed windows are reported at wake + this many hours
BRIGHT_FALLBACK_HOURS = 3

def compute_bright_window(wake: datetime, next_sleep_start: datetime) -> BrightWindow:
    """
    Recommended light exposure for the waking day that starts at wake.

    The window runs from wake + 30 min to 3h before the next sleep, clamped
    to the wake's local calendar day. If nothing usable is left, start and
    end collapse onto wake + 3h.

    Args:
        wake: Wake instant (its zone defines the calendar day)
        next_sleep_start: Sleep that ends this waking day

    Returns:
        BrightWindow (collapsed=True when start == end by fallback)
    """
    day_start = start_of_day(wake)
    day_end = add_days(day_start, 1)

    start = max(day_start, add_minutes(wake, BRIGHT_START_OFFSET_MINUTES))
    end = min(day_end, add_minutes(next_sleep_start, -BRIGHT_END_BEFORE_SLEEP_HOURS * 60))

    if end <= start:
        fallback = add_minutes(wake, BRIGHT_FALLBACK_HOURS * 60)
        return BrightWindow(start=fallback, end=fallback, collapsed=True)
    return BrightWindow(start=start, end=end)


def build_daily_views(
    schedule: dict[date, datetime],
    sleep_duration_minutes: int,
    display_zone: str,
    anchors_by_day: dict[date, list[DayAnchorInfo]] | None = None,
) -> list[DailyView]:
    """
    Derive the daily views for a wake schedule.

    Args:
        schedule: Date -> wake instant, in date order
        sleep_duration_minutes: Length of each sleep
        display_zone: Zone for the local "HH:MM" strings
        anchors_by_day: Anchors to list under each date

    Returns:
        One DailyView per schedule entry. The first day's change_hours is
        always 0.
    """
    anchors_by_day = anchors_by_day or {}
    entries = list(schedule.items())
    days = []
    previous_sleep_start = None

    for idx, (day, wake) in enumerate(entries):
        sleep_start = add_minutes(wake, -sleep_duration_minutes)

        if idx + 1 < len(entries):
            next_sleep_start = add_minutes(entries[idx + 1][1], -sleep_duration_minutes)
        else:
            next_sleep_start = add_minutes(wake, MINUTES_PER_DAY - sleep_duration_minutes)
        bright = compute_bright_window(wake, next_sleep_start)

        change_hours = 0.0
        if previous_sleep_start is not None:
            baseline = add_days(previous_sleep_start, 1)
            change_hours = minutes_between(baseline, sleep_start) / 60

        sleep_window = project_range(sleep_start, wake, display_zone)
        bright_window = project_range(bright.start, bright.end, display_zone)

        days.append(
            DailyView(
                date=day,
                wake=wake,
                sleep_start=sleep_start,
                bright=bright,
                change_hours=change_hours,
                sleep_start_local=sleep_window.start.local_time,
                sleep_end_local=sleep_window.end.local_time,
                wake_time_local=sleep_window.end.local_time,
                bright_start_local=bright_window.start.local_time,
                bright_end_local=bright_window.end.local_time,
                sleep_window=sleep_window,
                bright_window=bright_window,
                anchors=list(anchors_by_day.get(day, [])),
            )
        )
        previous_sleep_start = sleep_start

    if days:
        days[0].change_hours = 0.0
    return days
