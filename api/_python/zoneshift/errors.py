"""
Error types for plan computation.

Three kinds of failure:
- Fatal input errors (PlanValidationError and subclasses) abort compute_plan.
- Per-item errors (ResolutionError) drop a single anchor or event.
- Degenerate results are not errors at all; they are represented in the output.
"""


class ZoneShiftError(Exception):
    """Base class for all zoneshift errors."""


class PlanValidationError(ZoneShiftError, ValueError):
    """Plan data rejected before computation."""

    def __init__(self, errors: list[str] | str):
        if isinstance(errors, str):
            errors = [errors]
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


class UnknownZoneError(PlanValidationError):
    """IANA zone id not found in the tz database."""

    def __init__(self, zone_id: str):
        self.zone_id = zone_id
        super().__init__(f"Unknown time zone: {zone_id!r}")


class DateRangeError(PlanValidationError):
    """Schedule date range too long to enumerate."""


class ResolutionError(ZoneShiftError):
    """A single anchor or event time could not be turned into an instant."""
