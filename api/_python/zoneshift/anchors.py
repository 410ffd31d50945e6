"""
Anchor resolution.

Turns user checkpoints (local date + time + zone) into canonical wake
instants in the target zone. A sleep anchor's wake instant is its local
instant plus the sleep duration.

A single anchor that cannot be resolved is logged and skipped; it never
aborts the computation for the rest of the plan.
"""

from collections import defaultdict
from datetime import date, datetime

from loguru import logger

from .errors import ResolutionError, UnknownZoneError
from .types import AnchorPoint, DayAnchorInfo, ResolvedAnchor
from .zoned import add_minutes, in_zone, to_zoned

# Ids reserved for anchors the core synthesizes
INITIAL_WAKE_ANCHOR_ID = "__initial-wake"
DEFAULT_SHIFT_ANCHOR_ID = "default-shift-anchor"
SYSTEM_ANCHOR_PREFIX = "__"


def is_system_anchor(anchor: AnchorPoint) -> bool:
    """True for anchors synthesized by the core rather than entered by the user."""
    return anchor.id == DEFAULT_SHIFT_ANCHOR_ID or anchor.id.startswith(SYSTEM_ANCHOR_PREFIX)


def anchor_moment(anchor: AnchorPoint) -> datetime:
    """
    The anchor's own local moment, as an instant in the anchor's zone.

    Raises:
        ResolutionError: malformed or impossible local date/time
        UnknownZoneError: unknown anchor zone
    """
    return to_zoned(anchor.local_date, anchor.local_time, anchor.zone)


def resolve_anchor_wake(
    anchor: AnchorPoint, target_zone: str, sleep_duration_minutes: int
) -> datetime | None:
    """
    Resolve an anchor to the wake instant it implies, in the target zone.

    Args:
        anchor: Anchor to resolve (not modified)
        target_zone: IANA zone the schedule is computed in
        sleep_duration_minutes: Added to sleep anchors to find their wake

    Returns:
        Wake instant, or None if the anchor cannot be resolved
    """
    try:
        in_target = in_zone(anchor_moment(anchor), target_zone)
        if anchor.kind == "wake":
            return in_target
        elif anchor.kind == "sleep":
            return add_minutes(in_target, sleep_duration_minutes)
        else:
            raise ResolutionError(f"Unknown anchor kind {anchor.kind!r}")
    except (ResolutionError, UnknownZoneError, OverflowError) as e:
        logger.warning(f"Dropping anchor {anchor.id!r}: {e}")
        return None


def resolve_anchors(
    anchors: list[AnchorPoint], target_zone: str, sleep_duration_minutes: int
) -> list[ResolvedAnchor]:
    """Resolve every anchor that can be resolved, preserving input order."""
    resolved = []
    for anchor in anchors:
        wake = resolve_anchor_wake(anchor, target_zone, sleep_duration_minutes)
        if wake is not None:
            resolved.append(ResolvedAnchor(anchor=anchor, wake=wake))
    return resolved


def group_anchors_by_day(
    resolved: list[ResolvedAnchor], sleep_duration_minutes: int
) -> dict[date, list[DayAnchorInfo]]:
    """
    Group resolved anchors under the target-zone date of their own moment.

    Wake anchors are keyed by their wake instant, sleep anchors by their
    sleep instant (the wake instant minus the sleep duration).
    """
    by_day: dict[date, list[DayAnchorInfo]] = defaultdict(list)
    for item in resolved:
        if item.anchor.kind == "wake":
            moment = item.wake
        else:
            moment = add_minutes(item.wake, -sleep_duration_minutes)
        by_day[moment.date()].append(
            DayAnchorInfo(
                id=item.anchor.id,
                kind=item.anchor.kind,
                instant=moment,
                editable=not is_system_anchor(item.anchor),
                note=item.anchor.note,
            )
        )
    return dict(by_day)
