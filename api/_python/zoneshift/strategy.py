"""
Shift direction and pace.

Given the net zone difference, the sleeper can reach the target schedule by
moving their wake time later each day or earlier each day. Each direction
has its own per-day cap; the direction that needs fewer days wins, and a tie
goes to "later".

Key rules:
- later candidate   = -delta normalized into [0, 24)
- earlier candidate = later candidate - 24, normalized into (-24, 0]
- days needed       = ceil(|shift| / cap), at least 1 for a non-zero shift,
                      0 for a zero shift, infinite for a zero cap
"""

import math
from datetime import datetime

from loguru import logger

from .anchors import DEFAULT_SHIFT_ANCHOR_ID
from .types import AnchorPoint, CorePlan, InterpPolicy, PlanParams, ShiftStrategy
from .zoned import add_days, add_minutes, format_time, in_zone, offset_hours, to_zoned

INFINITE_DAYS = math.inf

DEFAULT_SHIFT_ANCHOR_NOTE = "Auto-generated alignment anchor"


def hours_to_minutes(hours: float) -> int:
    """Convert hours to whole minutes."""
    return round(hours * 60)


def get_policy(params: PlanParams) -> InterpPolicy:
    """Per-day shift caps from plan parameters."""
    return InterpPolicy(
        max_later_per_day=params.max_shift_later_per_day_hours or 0,
        max_earlier_per_day=params.max_shift_earlier_per_day_hours or 0,
    )


def start_sleep_instant(params: PlanParams) -> datetime:
    """The first sleep of the plan, expressed in the target zone."""
    start = to_zoned(
        params.start_date_local, params.start_sleep_local_time, params.sleep_zone, strict=False
    )
    return in_zone(start, params.target_zone)


def compute_zone_delta_hours(home_zone: str, target_zone: str, instant: datetime) -> float:
    """
    Net zone difference at an instant.

    Returns:
        Target offset minus home offset, in hours (e.g., +15.0 for
        Los Angeles to Taipei in October)
    """
    return offset_hours(instant, target_zone) - offset_hours(instant, home_zone)


def days_needed_for(shift_hours: float, max_per_day: float) -> float:
    """
    Days needed to cover a shift at a per-day cap.

    Returns:
        0 for no shift, math.inf when the cap is zero, otherwise at least 1
    """
    if shift_hours == 0:
        return 0
    if max_per_day <= 0:
        return INFINITE_DAYS
    return max(1, math.ceil(abs(shift_hours) / max_per_day))


def resolve_shift_strategy(total_delta_hours: float, policy: InterpPolicy) -> ShiftStrategy:
    """
    Pick the direction that reaches the target zone in fewer days.

    Args:
        total_delta_hours: Target offset minus home offset
        policy: Per-day caps for each direction

    Returns:
        ShiftStrategy with direction, signed shift and days needed
    """
    later_shift = -total_delta_hours % 24
    earlier_shift = later_shift - 24 if later_shift > 0 else 0.0

    later_days = days_needed_for(later_shift, policy.max_later_per_day)
    earlier_days = days_needed_for(earlier_shift, policy.max_earlier_per_day)

    # Ties (including both infinite) resolve to "later"
    if later_days <= earlier_days:
        return ShiftStrategy(
            direction="later", shift_amount_hours=later_shift, days_needed=later_days
        )
    return ShiftStrategy(
        direction="earlier", shift_amount_hours=earlier_shift, days_needed=earlier_days
    )


def compute_shift_strategy(params: PlanParams) -> tuple[float, ShiftStrategy]:
    """
    Zone delta and shift strategy for a plan.

    Returns:
        Tuple of (total_delta_hours, strategy)
    """
    start = start_sleep_instant(params)
    total_delta = compute_zone_delta_hours(params.home_zone, params.target_zone, start)
    return total_delta, resolve_shift_strategy(total_delta, get_policy(params))


def make_default_shift_anchor(plan: CorePlan) -> AnchorPoint | None:
    """
    Build the aligned wake anchor that ends the realignment.

    aligned wake = start sleep + days_needed days + shift hours + sleep duration

    Returns:
        Wake anchor in the target zone, or None when the strategy needs an
        infinite number of days (both caps zero with a non-zero shift) or
        lands outside the supported date range
    """
    params = plan.params
    _, strategy = compute_shift_strategy(params)
    if not strategy.is_feasible:
        logger.warning(
            f"Plan {plan.id!r}: shift of {strategy.shift_amount_hours:+.2f}h cannot be "
            f"reached with caps later={params.max_shift_later_per_day_hours}h/day, "
            f"earlier={params.max_shift_earlier_per_day_hours}h/day"
        )
        return None

    try:
        aligned_sleep = add_minutes(
            add_days(start_sleep_instant(params), int(strategy.days_needed)),
            hours_to_minutes(strategy.shift_amount_hours),
        )
        aligned_wake = add_minutes(aligned_sleep, hours_to_minutes(params.sleep_hours))
    except OverflowError:
        logger.warning(
            f"Plan {plan.id!r}: aligned wake {strategy.days_needed} days out is outside "
            f"the supported date range"
        )
        return None

    return AnchorPoint(
        id=DEFAULT_SHIFT_ANCHOR_ID,
        kind="wake",
        local_date=aligned_wake.date().isoformat(),
        local_time=format_time(aligned_wake),
        zone=params.target_zone,
        note=DEFAULT_SHIFT_ANCHOR_NOTE,
    )
