"""
Wake schedule interpolation.

Builds one wake instant per target-zone calendar date from a set of resolved
anchors. Between two consecutive anchors the wake time drifts by a constant
per-day step, clamped to the plan's shift caps; the anchors themselves are
always hit exactly.

Algorithm:
1. Sort anchors by wake instant.
2. Seed each anchor's own date (first anchor on a date wins).
3. Interpolate every consecutive pair; intermediate dates are only written
   if still empty, the right endpoint always takes the anchor's exact value.
4. Forward-fill remaining gaps by repeating the previous wake one day later.
5. Back-fill leading gaps by repeating the first known wake one day earlier.
"""

from datetime import date, datetime

from loguru import logger

from .strategy import hours_to_minutes
from .types import InterpPolicy, ResolvedAnchor
from .zoned import MINUTES_PER_DAY, add_days, add_minutes, enumerate_dates, minutes_between


def clamp(value: float, lower: float, upper: float) -> float:
    """Clamp value into [lower, upper]."""
    return min(max(value, lower), upper)


def interpolate_daily_wake_times(
    start_wake: datetime,
    end_wake: datetime,
    dates: list[date],
    policy: InterpPolicy,
) -> list[datetime]:
    """
    Interpolate wake instants across consecutive dates.

    The naive path repeats the start wake every 24h. Any deviation from that
    needed to reach end_wake is spread evenly across the intervals, clamped
    to [-max_earlier, +max_later] minutes per day. The final date always
    gets end_wake exactly, so the clamp shapes the path but never moves a
    checkpoint.

    Args:
        start_wake: Wake instant on the first date
        end_wake: Wake instant on the last date
        dates: Consecutive dates covered, first and last included
        policy: Per-day shift caps in hours

    Returns:
        One wake instant per date
    """
    if not dates:
        return []
    if len(dates) == 1:
        return [start_wake]

    intervals = len(dates) - 1
    base_minutes = intervals * MINUTES_PER_DAY
    total_minutes = minutes_between(start_wake, end_wake)
    shift_minutes = total_minutes - base_minutes
    raw_per_day = shift_minutes / intervals

    max_later = hours_to_minutes(policy.max_later_per_day)
    max_earlier = -hours_to_minutes(policy.max_earlier_per_day)
    step_minutes = clamp(raw_per_day, max_earlier, max_later)

    wakes = [start_wake]
    current = start_wake
    for _ in range(1, intervals):
        current = add_minutes(add_days(current, 1), step_minutes)
        wakes.append(current)
    wakes.append(end_wake)
    return wakes


def compute_wake_schedule(
    resolved_anchors: list[ResolvedAnchor],
    date_range: list[date],
    policy: InterpPolicy,
) -> dict[date, datetime]:
    """
    Compute the wake instant for every date in range.

    Args:
        resolved_anchors: All anchors (implicit and user), any order
        date_range: Consecutive target-zone dates to cover
        policy: Per-day shift caps

    Returns:
        Dict of date -> wake instant, in date order, one entry per date in
        range (empty if there are no anchors)
    """
    wake_map: dict[date, datetime] = {}
    if not resolved_anchors or not date_range:
        return wake_map

    # Stable sort: anchors with identical instants keep their input order
    ordered = sorted(resolved_anchors, key=lambda item: item.wake)
    in_range = set(date_range)

    for item in ordered:
        key = item.wake.date()
        if key in in_range and key not in wake_map:
            wake_map[key] = item.wake

    # Anchors outside the range seed nothing and bound no segment
    bounded = [item for item in ordered if item.wake.date() in in_range]
    for left, right in zip(bounded, bounded[1:]):
        left_date = left.wake.date()
        right_date = right.wake.date()
        segment = enumerate_dates(left_date, right_date)
        if len(segment) < 2:
            continue

        wakes = interpolate_daily_wake_times(left.wake, right.wake, segment, policy)
        last = len(segment) - 1
        for idx, (key, wake) in enumerate(zip(segment, wakes)):
            if idx == last or key not in wake_map:
                wake_map[key] = wake

    previous = None
    for key in date_range:
        if key in wake_map:
            previous = wake_map[key]
        elif previous is not None:
            previous = add_days(previous, 1)
            wake_map[key] = previous

    first_known = next((d for d in date_range if d in wake_map), None)
    if first_known is not None:
        current = wake_map[first_known]
        for key in reversed(date_range[: date_range.index(first_known)]):
            current = add_days(current, -1)
            wake_map[key] = current

    logger.debug(
        f"Wake schedule: {len(ordered)} anchors over {len(date_range)} dates "
        f"({date_range[0]} to {date_range[-1]})"
    )
    return {key: wake_map[key] for key in date_range if key in wake_map}
