"""
Data structures for plan computation.

Plan inputs (CorePlan and its parts) are plain data owned by the caller.
Computed outputs (ComputedView and its parts) are derived fresh on every
compute_plan call and never persisted on their own.

All instants are timezone-aware datetimes. Local dates are "YYYY-MM-DD"
strings and local times are "HH:MM" strings, matching the persisted plan.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Literal

# =============================================================================
# Plan Types (input)
# =============================================================================

AnchorKind = Literal["wake", "sleep"]

ShiftDirection = Literal["later", "earlier"]

DisplayZone = Literal["home", "target"]


@dataclass
class PlanParams:
    """Core parameters of a realignment plan."""

    home_zone: str  # IANA timezone (e.g., "America/Los_Angeles")
    target_zone: str  # IANA timezone (e.g., "Asia/Taipei")
    start_date_local: str  # "2024-10-17" date of the first sleep
    start_sleep_local_time: str  # "23:30" bedtime on that date
    sleep_hours: float  # (0, 24]
    max_shift_later_per_day_hours: float  # >= 0
    max_shift_earlier_per_day_hours: float  # >= 0
    start_sleep_zone: str | None = None  # Zone of the start sleep (None = target_zone)

    @property
    def sleep_zone(self) -> str:
        """Zone the start-of-sleep local time is expressed in."""
        return self.start_sleep_zone or self.target_zone


@dataclass(frozen=True)
class AnchorPoint:
    """
    A fixed wake or sleep checkpoint.

    Frozen: resolution pairs the anchor with a computed instant instead of
    writing back into it.
    """

    id: str
    kind: AnchorKind
    local_date: str  # "YYYY-MM-DD"
    local_time: str  # "HH:MM"
    zone: str  # IANA timezone the local date/time is expressed in
    note: str | None = None


@dataclass(frozen=True)
class LocalDateTime:
    """A wall-clock date and time in a named zone."""

    date: str  # "YYYY-MM-DD"
    time: str  # "HH:MM"
    zone: str


@dataclass
class EventItem:
    """
    A user activity shown alongside the schedule.

    Either the instant form (start/end ISO strings) or the local form
    (local/local_end) may be given. The instant form wins when both are set.
    """

    id: str
    title: str
    start: str | None = None  # ISO 8601 instant, e.g. "2024-10-18T05:00:00Z"
    end: str | None = None
    local: LocalDateTime | None = None
    local_end: LocalDateTime | None = None
    color_hint: str | None = None


@dataclass
class PlanPrefs:
    """Display preferences stored with the plan."""

    display_zone: DisplayZone = "target"
    time_step_minutes: int = 30


@dataclass
class CorePlan:
    """Everything the core needs to compute a schedule."""

    id: str
    params: PlanParams
    anchors: list[AnchorPoint] = field(default_factory=list)
    events: list[EventItem] = field(default_factory=list)
    prefs: PlanPrefs = field(default_factory=PlanPrefs)
    default_shift_anchor: AnchorPoint | None = None
    version: int = 1


# =============================================================================
# Intermediate Types
# =============================================================================


@dataclass(frozen=True)
class ResolvedAnchor:
    """An anchor paired with its canonical wake instant in the target zone."""

    anchor: AnchorPoint
    wake: datetime


@dataclass(frozen=True)
class InterpPolicy:
    """Per-day shift caps used by the interpolator, in hours."""

    max_later_per_day: float
    max_earlier_per_day: float


@dataclass(frozen=True)
class ShiftStrategy:
    """
    Outcome of direction selection.

    days_needed is math.inf when the chosen direction has a zero cap and a
    non-zero shift.
    """

    direction: ShiftDirection
    shift_amount_hours: float  # Positive = later, negative = earlier
    days_needed: float  # int-valued, or math.inf

    @property
    def is_feasible(self) -> bool:
        """True if the target can be reached in a finite number of days."""
        return self.days_needed != float("inf")


# =============================================================================
# Computed Types (output)
# =============================================================================


@dataclass
class DayAnchorInfo:
    """An anchor listed under the date it falls on."""

    id: str
    kind: AnchorKind
    instant: datetime  # Wake instant for wake anchors, sleep instant for sleep anchors
    editable: bool  # False for system anchors
    note: str | None = None


@dataclass(frozen=True)
class BrightWindow:
    """
    Recommended light-exposure interval for one waking day.

    When no usable window exists, start == end and collapsed is True.
    """

    start: datetime
    end: datetime
    collapsed: bool = False


@dataclass(frozen=True)
class ProjectedInstant:
    """An instant re-expressed in a display zone."""

    instant: datetime  # UTC
    zoned: datetime  # Same instant in the display zone
    zone: str

    @property
    def local_date(self) -> str:
        return self.zoned.date().isoformat()

    @property
    def local_time(self) -> str:
        return f"{self.zoned.hour:02d}:{self.zoned.minute:02d}"


@dataclass(frozen=True)
class ProjectedRange:
    """
    A start/end pair in a display zone.

    day_delta counts calendar dates from start to end in that zone, so a
    renderer can annotate "+1 day" without redoing zone arithmetic.
    """

    start: ProjectedInstant
    end: ProjectedInstant
    day_delta: int


@dataclass
class DailyView:
    """Derived sleep, wake and light timings for one target-zone date."""

    date: date  # Target-zone calendar date
    wake: datetime
    sleep_start: datetime
    bright: BrightWindow
    change_hours: float  # Shift versus previous sleep start + 1 day

    # Local "HH:MM" in the display zone
    sleep_start_local: str
    sleep_end_local: str
    wake_time_local: str
    bright_start_local: str  # wake + 3h on both ends when the window collapsed
    bright_end_local: str

    # Same windows projected into the display zone, with their day_delta
    sleep_window: ProjectedRange
    bright_window: ProjectedRange

    anchors: list[DayAnchorInfo] = field(default_factory=list)


@dataclass
class ProjectedAnchor:
    """An anchor with its local moment projected into the display zone."""

    anchor: AnchorPoint
    projected: ProjectedInstant


@dataclass
class ProjectedEvent:
    """An event projected into the display zone."""

    event: EventItem
    start: ProjectedInstant
    end: ProjectedInstant | None = None
    day_delta: int = 0  # End date minus start date in the display zone


@dataclass
class PlanMeta:
    """Plan-level summary numbers."""

    total_delta_hours: float  # Target offset minus home offset
    direction: ShiftDirection
    per_day_shifts: list[float]
    shift_amount_hours: float = 0.0
    days_needed: float = 0


@dataclass
class ComputedView:
    """Output of compute_plan."""

    days: list[DailyView]
    projected_anchors: list[ProjectedAnchor]
    projected_events: list[ProjectedEvent]
    meta: PlanMeta
    display_zone: str = ""
