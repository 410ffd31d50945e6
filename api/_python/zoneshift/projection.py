"""
Display-zone projection.

Re-expresses canonical instants (wake schedule, anchors, events) in the zone
the user is viewing. Projection never changes the underlying instant, only
its local representation.

Renderers use day_delta to annotate ranges that cross local midnight
("+1 day") without redoing zone arithmetic themselves. Splitting such ranges
into per-day segments is left to the renderer.
"""

from datetime import datetime

import pytz
from loguru import logger

from .anchors import anchor_moment
from .errors import ResolutionError, UnknownZoneError
from .types import (
    AnchorPoint,
    CorePlan,
    EventItem,
    ProjectedAnchor,
    ProjectedEvent,
    ProjectedInstant,
    ProjectedRange,
)
from .zoned import in_zone, parse_instant, to_zoned


def resolve_display_zone(plan: CorePlan) -> str:
    """IANA zone for the plan's display preference ("home" or "target")."""
    if plan.prefs is not None and plan.prefs.display_zone == "home":
        return plan.params.home_zone
    return plan.params.target_zone


def project_instant(value: datetime | str, zone: str) -> ProjectedInstant:
    """
    Project an instant into a zone.

    Args:
        value: Aware datetime, or an ISO 8601 instant string
        zone: IANA zone to express it in

    Returns:
        ProjectedInstant carrying the UTC instant and its zoned form

    Raises:
        ResolutionError: the instant cannot be represented in the zone
    """
    if isinstance(value, str):
        instant = parse_instant(value)
    else:
        try:
            instant = value.astimezone(pytz.UTC)
        except OverflowError as e:
            raise ResolutionError(f"Instant {value} is out of range") from e
    try:
        zoned = in_zone(instant, zone)
    except OverflowError as e:
        raise ResolutionError(f"Instant {instant} is out of range in {zone}") from e
    return ProjectedInstant(instant=instant, zoned=zoned, zone=zone)


def day_delta(start: datetime, end: datetime, zone: str) -> int:
    """Calendar dates from start's local date to end's local date in a zone."""
    return (in_zone(end, zone).date() - in_zone(start, zone).date()).days


def project_range(start: datetime | str, end: datetime | str, zone: str) -> ProjectedRange:
    """Project a start/end pair and count the dates it spans in the zone."""
    projected_start = project_instant(start, zone)
    projected_end = project_instant(end, zone)
    return ProjectedRange(
        start=projected_start,
        end=projected_end,
        day_delta=day_delta(projected_start.instant, projected_end.instant, zone),
    )


def describe_day_delta(difference: int) -> str:
    """Suffix such as " (+1 day)" or " (-2 days)"; empty for the same day."""
    if difference == 0:
        return ""
    unit = "day" if abs(difference) == 1 else "days"
    sign = "+" if difference > 0 else "-"
    return f" ({sign}{abs(difference)} {unit})"


def project_anchor(anchor: AnchorPoint, zone: str) -> ProjectedAnchor | None:
    """Project an anchor's own moment, or None if it cannot be resolved."""
    try:
        return ProjectedAnchor(anchor=anchor, projected=project_instant(anchor_moment(anchor), zone))
    except (ResolutionError, UnknownZoneError) as e:
        logger.warning(f"Failed to project anchor {anchor.id!r}: {e}")
        return None


def resolve_event_instant(event: EventItem, which: str) -> datetime | None:
    """
    Instant for an event's start or end.

    The ISO instant field wins; the local date/time/zone form is the
    fallback. Returns None when neither is set.

    Raises:
        ResolutionError, UnknownZoneError: the field is set but unusable
    """
    iso = event.start if which == "start" else event.end
    if iso:
        return parse_instant(iso)
    local = event.local if which == "start" else event.local_end
    if local is not None:
        return to_zoned(local.date, local.time, local.zone)
    return None


def project_event(event: EventItem, zone: str) -> ProjectedEvent | None:
    """
    Project an event into the display zone.

    Returns:
        ProjectedEvent, or None if its start cannot be resolved. An unusable
        end is dropped (logged) and the event is kept as a point in time.
    """
    try:
        start = resolve_event_instant(event, "start")
        projected_start = project_instant(start, zone) if start is not None else None
    except (ResolutionError, UnknownZoneError) as e:
        logger.warning(f"Failed to resolve start of event {event.id!r}: {e}")
        return None
    if projected_start is None:
        logger.warning(f"Event {event.id!r} has no start; skipping")
        return None

    try:
        end = resolve_event_instant(event, "end")
        projected_end = project_instant(end, zone) if end is not None else None
    except (ResolutionError, UnknownZoneError) as e:
        logger.warning(f"Failed to resolve end of event {event.id!r}: {e}")
        projected_end = None

    if projected_end is None:
        return ProjectedEvent(event=event, start=projected_start)
    return ProjectedEvent(
        event=event,
        start=projected_start,
        end=projected_end,
        day_delta=day_delta(projected_start.instant, projected_end.instant, zone),
    )
