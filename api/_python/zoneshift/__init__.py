"""
ZoneShift Circadian Realignment Planner

Computes a day-by-day sleep/wake/bright-light schedule that moves a
traveller's body clock from their home zone to a destination zone within
per-day shift limits.

Main entry point: compute_plan (pure function, CorePlan -> ComputedView)
"""

from .errors import (
    DateRangeError,
    PlanValidationError,
    ResolutionError,
    UnknownZoneError,
    ZoneShiftError,
)
from .planner import ZoneShiftPlanner, compute_plan
from .projection import day_delta, describe_day_delta, project_instant, project_range
from .serialization import parse_core_plan, plan_to_dict, view_to_dict
from .types import (
    AnchorPoint,
    BrightWindow,
    ComputedView,
    CorePlan,
    DailyView,
    EventItem,
    LocalDateTime,
    PlanMeta,
    PlanParams,
    PlanPrefs,
    ProjectedAnchor,
    ProjectedEvent,
    ProjectedInstant,
    ProjectedRange,
)

__all__ = [
    # Types
    "AnchorPoint",
    "EventItem",
    "LocalDateTime",
    "PlanParams",
    "PlanPrefs",
    "CorePlan",
    "BrightWindow",
    "DailyView",
    "PlanMeta",
    "ComputedView",
    "ProjectedInstant",
    "ProjectedRange",
    "ProjectedAnchor",
    "ProjectedEvent",
    # Planner
    "ZoneShiftPlanner",
    "compute_plan",
    # Projection
    "project_instant",
    "project_range",
    "day_delta",
    "describe_day_delta",
    # Serialization
    "parse_core_plan",
    "plan_to_dict",
    "view_to_dict",
    # Errors
    "ZoneShiftError",
    "PlanValidationError",
    "UnknownZoneError",
    "DateRangeError",
    "ResolutionError",
]
