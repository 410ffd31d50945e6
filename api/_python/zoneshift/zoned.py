"""
Zone-aware instant arithmetic.

Every instant is a timezone-aware datetime carrying a pytz zone. Offsets are
never cached: each operation re-localizes or re-normalizes its result so the
offset is read fresh at the resulting instant (DST transitions included).

Local wall-clock conversion follows two rules:
- Ambiguous local times (clocks fall back) resolve to the earlier instant.
- Non-existent local times (clocks spring forward) are an error for
  user-entered values, and roll forward past the gap for arithmetic results.
"""

from datetime import date, datetime, time, timedelta

import pytz

from .errors import DateRangeError, ResolutionError, UnknownZoneError

# Longest schedule the core will enumerate (about ten years)
MAX_RANGE_DAYS = 3660

MINUTES_PER_DAY = 24 * 60


def get_zone(zone_id: str) -> pytz.BaseTzInfo:
    """
    Look up an IANA zone.

    Raises:
        UnknownZoneError: if the id is not in the tz database
    """
    if not isinstance(zone_id, str) or not zone_id:
        raise UnknownZoneError(str(zone_id))
    try:
        return pytz.timezone(zone_id)
    except pytz.UnknownTimeZoneError as e:
        raise UnknownZoneError(zone_id) from e


def parse_date(date_str: str) -> date:
    """Parse "YYYY-MM-DD" string to date object."""
    parts = date_str.split("-")
    if len(parts) != 3 or len(parts[0]) != 4:
        raise ValueError(f"Date must be YYYY-MM-DD: {date_str!r}")
    return date(int(parts[0]), int(parts[1]), int(parts[2]))


def parse_time(time_str: str) -> time:
    """Parse "HH:MM" string to time object."""
    parts = time_str.split(":")
    if len(parts) != 2:
        raise ValueError(f"Time must be HH:MM: {time_str!r}")
    return time(int(parts[0]), int(parts[1]))


def _zone_of(dt: datetime) -> pytz.BaseTzInfo | None:
    zone_id = getattr(dt.tzinfo, "zone", None)
    return pytz.timezone(zone_id) if zone_id else None


def _localize_wall_clock(naive: datetime, tz: pytz.BaseTzInfo) -> datetime:
    """Attach a zone to a wall-clock time, rolling forward out of DST gaps."""
    try:
        return tz.localize(naive, is_dst=None)
    except pytz.AmbiguousTimeError:
        return tz.localize(naive, is_dst=True)
    except pytz.NonExistentTimeError:
        # is_dst=False keeps the pre-transition offset, which lands the
        # instant just past the gap once normalized
        return tz.normalize(tz.localize(naive, is_dst=False))


def to_zoned(local_date: str, local_time: str, zone_id: str, strict: bool = True) -> datetime:
    """
    Build an instant from a local date, local time and zone.

    Args:
        local_date: "YYYY-MM-DD"
        local_time: "HH:MM"
        zone_id: IANA zone the wall-clock values are expressed in
        strict: Reject times that fall inside a DST gap

    Returns:
        Aware datetime in zone_id

    Raises:
        ResolutionError: malformed or out-of-range date/time, or a DST-gap
            time when strict
        UnknownZoneError: unknown zone_id
    """
    tz = get_zone(zone_id)
    try:
        naive = datetime.combine(parse_date(local_date), parse_time(local_time))
    except (AttributeError, TypeError, ValueError) as e:
        raise ResolutionError(
            f"Invalid local date/time {local_date!r} {local_time!r}: {e}"
        ) from e

    try:
        if not strict:
            return _localize_wall_clock(naive, tz)
        try:
            return tz.localize(naive, is_dst=None)
        except pytz.AmbiguousTimeError:
            return tz.localize(naive, is_dst=True)
    except pytz.NonExistentTimeError as e:
        raise ResolutionError(
            f"Local time {local_date} {local_time} does not exist in {zone_id}"
        ) from e
    except OverflowError as e:
        raise ResolutionError(
            f"Local time {local_date} {local_time} is out of range in {zone_id}"
        ) from e


def parse_instant(iso: str) -> datetime:
    """
    Parse an ISO 8601 instant ("2024-10-18T05:00:00Z" or with an offset).

    Returns:
        Aware datetime in UTC

    Raises:
        ResolutionError: malformed string, missing offset or out of range
    """
    try:
        parsed = datetime.fromisoformat(iso.replace("Z", "+00:00"))
        if parsed.tzinfo is None:
            raise ResolutionError(f"Instant has no UTC offset: {iso!r}")
        return parsed.astimezone(pytz.UTC)
    except (AttributeError, TypeError, ValueError, OverflowError) as e:
        raise ResolutionError(f"Invalid instant {iso!r}") from e


def in_zone(dt: datetime, zone_id: str) -> datetime:
    """Re-express an instant in another zone. The instant is unchanged."""
    return dt.astimezone(get_zone(zone_id))


def add_minutes(dt: datetime, minutes: float) -> datetime:
    """Add exact elapsed minutes (may be negative or fractional)."""
    if minutes == 0:
        return dt
    shifted = dt + timedelta(minutes=minutes)
    tz = _zone_of(dt)
    return tz.normalize(shifted) if tz is not None else shifted


def add_days(dt: datetime, days: int) -> datetime:
    """
    Add calendar days, keeping the local wall-clock time.

    Across a DST change the elapsed time is 23h or 25h rather than 24h.
    """
    if days == 0:
        return dt
    tz = _zone_of(dt)
    if tz is None:
        return dt + timedelta(days=days)
    naive = dt.replace(tzinfo=None) + timedelta(days=days)
    return _localize_wall_clock(naive, tz)


def offset_hours(dt: datetime, zone_id: str) -> float:
    """
    Get UTC offset in hours for a zone at a given instant.

    Returns:
        Offset in hours (e.g., -8.0 for PST, -7.0 for PDT)
    """
    return in_zone(dt, zone_id).utcoffset().total_seconds() / 3600


def minutes_between(start: datetime, end: datetime) -> float:
    """Exact signed minutes from start to end."""
    return (end - start).total_seconds() / 60


def start_of_day(dt: datetime) -> datetime:
    """Local midnight of dt's date, in dt's own zone."""
    midnight = datetime.combine(dt.date(), time(0, 0))
    tz = _zone_of(dt)
    if tz is None:
        return midnight.replace(tzinfo=dt.tzinfo)
    return _localize_wall_clock(midnight, tz)


def enumerate_dates(start: date, end: date) -> list[date]:
    """
    List every calendar date from start through end (inclusive).

    Raises:
        DateRangeError: if the range exceeds MAX_RANGE_DAYS
    """
    span = (end - start).days
    if span < 0:
        return []
    if span >= MAX_RANGE_DAYS:
        raise DateRangeError(
            f"Schedule spans {span + 1} days ({start} to {end}); "
            f"the limit is {MAX_RANGE_DAYS}"
        )
    return [start + timedelta(days=offset) for offset in range(span + 1)]


def format_time(dt: datetime) -> str:
    """Format local time as "HH:MM" (24-hour format for data fields)."""
    return f"{dt.hour:02d}:{dt.minute:02d}"


def format_zoned(dt: datetime) -> str:
    """Format as "2024-10-18T07:30+08:00[Asia/Taipei]"."""
    zone_id = getattr(dt.tzinfo, "zone", None)
    stamp = dt.replace(second=0, microsecond=0).isoformat(timespec="minutes")
    return f"{stamp}[{zone_id}]" if zone_id else stamp
