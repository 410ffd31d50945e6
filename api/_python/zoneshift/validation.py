"""
Plan validation.

Rejects plans that cannot be computed at all (fatal input errors). Problems
confined to a single anchor or event are not checked here; those items are
dropped during computation instead.
"""

from .errors import PlanValidationError, ResolutionError
from .types import CorePlan, PlanParams, PlanPrefs
from .zoned import (
    MAX_RANGE_DAYS,
    MINUTES_PER_DAY,
    add_days,
    add_minutes,
    get_zone,
    in_zone,
    parse_date,
    parse_time,
    to_zoned,
)

PLAN_VERSION = 1

MAX_SLEEP_HOURS = 24
MAX_SHIFT_CAP_HOURS = 12
MIN_TIME_STEP_MINUTES = 1
MAX_TIME_STEP_MINUTES = 240


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_date(value: object) -> bool:
    """Validate date format like '2024-10-17'."""
    if not isinstance(value, str) or len(value) != 10:
        return False
    try:
        parse_date(value)
        return True
    except ValueError:
        return False


def validate_time(value: object) -> bool:
    """Validate time format like '07:00'."""
    if not isinstance(value, str) or len(value) != 5:
        return False
    try:
        parse_time(value)
        return True
    except ValueError:
        return False


def _start_sleep_in_range(params: PlanParams) -> bool:
    """True when the start sleep and a full schedule after it are representable."""
    try:
        start = in_zone(
            to_zoned(
                params.start_date_local, params.start_sleep_local_time, params.sleep_zone, strict=False
            ),
            params.target_zone,
        )
        add_days(start, -1)
        add_minutes(add_days(start, MAX_RANGE_DAYS), MINUTES_PER_DAY)
    except (ResolutionError, OverflowError):
        return False
    return True


def validate_params(params: PlanParams) -> list[str]:
    """
    Check plan parameters.

    Zones are looked up first; an unknown zone raises UnknownZoneError
    straight away since nothing else can be checked without it.

    Returns:
        List of error messages (empty if valid)
    """
    get_zone(params.home_zone)
    get_zone(params.target_zone)
    if params.start_sleep_zone is not None:
        get_zone(params.start_sleep_zone)

    errors = []

    if not validate_date(params.start_date_local):
        errors.append(f"Invalid start date format: {params.start_date_local!r}")
    if not validate_time(params.start_sleep_local_time):
        errors.append(f"Invalid start sleep time format: {params.start_sleep_local_time!r}")

    if not errors and not _start_sleep_in_range(params):
        errors.append(
            f"Start sleep {params.start_date_local} {params.start_sleep_local_time} "
            f"is outside the supported date range"
        )

    sleep_hours = params.sleep_hours
    if not _is_number(sleep_hours) or not 0 < sleep_hours <= MAX_SLEEP_HOURS:
        errors.append(f"sleep_hours must be a number in (0, {MAX_SLEEP_HOURS}], got {sleep_hours!r}")

    for name in ("max_shift_later_per_day_hours", "max_shift_earlier_per_day_hours"):
        cap = getattr(params, name)
        if not _is_number(cap) or not 0 <= cap <= MAX_SHIFT_CAP_HOURS:
            errors.append(f"{name} must be a number between 0 and {MAX_SHIFT_CAP_HOURS}, got {cap!r}")

    return errors


def validate_prefs(prefs: PlanPrefs | None) -> list[str]:
    """Check display preferences. Returns list of error messages."""
    if prefs is None:
        return []
    errors = []
    if prefs.display_zone not in ("home", "target"):
        errors.append(f"display_zone must be 'home' or 'target', got {prefs.display_zone!r}")
    step = prefs.time_step_minutes
    if (
        not isinstance(step, int)
        or isinstance(step, bool)
        or not MIN_TIME_STEP_MINUTES <= step <= MAX_TIME_STEP_MINUTES
    ):
        errors.append(
            f"time_step_minutes must be an integer between {MIN_TIME_STEP_MINUTES} "
            f"and {MAX_TIME_STEP_MINUTES}, got {step!r}"
        )
    return errors


def validate_plan(plan: CorePlan) -> None:
    """
    Validate a plan before computation.

    Raises:
        UnknownZoneError: home, target or start sleep zone is unknown
        PlanValidationError: any other fatal problem (all of them listed)
    """
    errors = []
    if not plan.id:
        errors.append("Plan id is required")
    if plan.version != PLAN_VERSION:
        errors.append(f"Unsupported plan version: {plan.version!r}")
    errors.extend(validate_params(plan.params))
    errors.extend(validate_prefs(plan.prefs))
    if errors:
        raise PlanValidationError(errors)
