"""
Plan computation.

compute_plan is a pure function from a CorePlan to a ComputedView. It holds
no state between calls and reads no clock, so it is safe to call on every
edit of the plan.

Architecture:
1. Validation rejects plans that cannot be computed (validation.py)
2. Shift strategy picks the direction and the aligned wake (strategy.py)
3. Anchors are resolved to wake instants in the target zone (anchors.py)
4. The wake schedule is interpolated across the date range (interpolation.py)
5. Daily views are derived from the schedule (daily.py)
6. Anchors and events are projected into the display zone (projection.py)
"""

from datetime import date

from loguru import logger

from .anchors import INITIAL_WAKE_ANCHOR_ID, group_anchors_by_day, resolve_anchors
from .daily import build_daily_views
from .interpolation import compute_wake_schedule
from .projection import project_anchor, project_event, resolve_display_zone
from .strategy import (
    compute_shift_strategy,
    get_policy,
    hours_to_minutes,
    make_default_shift_anchor,
    start_sleep_instant,
)
from .types import AnchorPoint, ComputedView, CorePlan, PlanMeta, ResolvedAnchor
from .validation import validate_plan
from .zoned import MAX_RANGE_DAYS, add_minutes, enumerate_dates, format_time


class ZoneShiftPlanner:
    """
    Computes the realignment schedule for a plan.

    The implicit anchors (initial wake and aligned wake) are built here as
    locals next to the user's anchors; the plan's own anchor list is never
    modified.
    """

    def compute(self, plan: CorePlan) -> ComputedView:
        """
        Compute the full view for a plan.

        Args:
            plan: Plan to compute (not modified)

        Returns:
            ComputedView with daily views, projections and metadata

        Raises:
            PlanValidationError: plan parameters are unusable (includes
                UnknownZoneError)
        """
        validate_plan(plan)

        params = plan.params
        target_zone = params.target_zone
        sleep_minutes = hours_to_minutes(params.sleep_hours)

        # 1. Shift strategy
        total_delta_hours, strategy = compute_shift_strategy(params)

        # 2. Implicit anchors + user anchors
        start_sleep = start_sleep_instant(params)
        initial_wake = add_minutes(start_sleep, sleep_minutes)
        anchors = self._collect_anchors(plan, initial_wake)

        # 3. Resolve; anchors too far past the start are dropped like unresolvable ones
        resolved = self._within_range(
            resolve_anchors(anchors, target_zone, sleep_minutes), start_sleep.date()
        )

        # 4. Wake schedule over start date .. latest anchor date
        date_range = enumerate_dates(start_sleep.date(), self._last_date(resolved, initial_wake.date()))
        schedule = compute_wake_schedule(resolved, date_range, get_policy(params))

        # 5. Daily views
        display_zone = resolve_display_zone(plan)
        days = build_daily_views(
            schedule,
            sleep_minutes,
            display_zone,
            group_anchors_by_day(resolved, sleep_minutes),
        )

        # 6. Projections
        projected_anchors = [
            projected
            for projected in (project_anchor(item.anchor, display_zone) for item in resolved)
            if projected is not None
        ]
        projected_events = [
            projected
            for projected in (project_event(event, display_zone) for event in plan.events)
            if projected is not None
        ]

        dropped = len(anchors) - len(resolved)
        logger.debug(
            f"Plan {plan.id!r}: {len(days)} days, direction={strategy.direction}, "
            f"delta={total_delta_hours:+.2f}h, dropped anchors={dropped}"
        )

        return ComputedView(
            days=days,
            projected_anchors=projected_anchors,
            projected_events=projected_events,
            meta=PlanMeta(
                total_delta_hours=total_delta_hours,
                direction=strategy.direction,
                per_day_shifts=[day.change_hours for day in days],
                shift_amount_hours=strategy.shift_amount_hours,
                days_needed=strategy.days_needed,
            ),
            display_zone=display_zone,
        )

    def _collect_anchors(self, plan: CorePlan, initial_wake) -> list[AnchorPoint]:
        """Aligned anchor, initial wake anchor, then the user's anchors."""
        anchors = []

        default_anchor = plan.default_shift_anchor or make_default_shift_anchor(plan)
        if default_anchor is not None:
            anchors.append(default_anchor)

        anchors.append(
            AnchorPoint(
                id=INITIAL_WAKE_ANCHOR_ID,
                kind="wake",
                local_date=initial_wake.date().isoformat(),
                local_time=format_time(initial_wake),
                zone=plan.params.target_zone,
            )
        )
        anchors.extend(plan.anchors)
        return anchors

    def _within_range(self, resolved: list[ResolvedAnchor], first_date: date) -> list[ResolvedAnchor]:
        """Drop anchors whose wake date is MAX_RANGE_DAYS or more after first_date."""
        kept = []
        for item in resolved:
            if (item.wake.date() - first_date).days >= MAX_RANGE_DAYS:
                logger.warning(
                    f"Dropping anchor {item.anchor.id!r}: {item.wake.date()} is more than "
                    f"{MAX_RANGE_DAYS} days after the plan start"
                )
                continue
            kept.append(item)
        return kept

    def _last_date(self, resolved: list[ResolvedAnchor], fallback: date) -> date:
        """Latest target-zone wake date among resolved anchors."""
        if not resolved:
            return fallback
        return max(item.wake.date() for item in resolved)


def compute_plan(plan: CorePlan) -> ComputedView:
    """
    Convenience function to compute a plan.

    Args:
        plan: CorePlan with parameters, anchors and events

    Returns:
        ComputedView
    """
    planner = ZoneShiftPlanner()
    return planner.compute(plan)
