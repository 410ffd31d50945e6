"""
Demo plan: Los Angeles to Taipei in October 2024.

Used as the default plan by the command-line script and as a realistic
fixture in tests.
"""

from .types import AnchorPoint, CorePlan, EventItem, LocalDateTime, PlanParams, PlanPrefs


def make_sample_plan() -> CorePlan:
    """Build a fresh copy of the demo plan."""
    return CorePlan(
        id="zoneshift-demo",
        params=PlanParams(
            home_zone="America/Los_Angeles",
            target_zone="Asia/Taipei",
            start_date_local="2024-10-17",
            start_sleep_local_time="16:30",  # 01:30 in Los Angeles
            sleep_hours=8,
            max_shift_later_per_day_hours=1.5,
            max_shift_earlier_per_day_hours=1,
        ),
        anchors=[
            AnchorPoint(
                id="taipei-morning-market",
                kind="wake",
                local_date="2024-10-21",
                local_time="09:00",
                zone="Asia/Taipei",
                note="Meet friends for breakfast",
            ),
        ],
        events=[
            EventItem(
                id="flight-out",
                title="Flight to Taipei",
                start="2024-10-18T05:00:00Z",
                end="2024-10-18T17:30:00Z",
                color_hint="peach",
            ),
            EventItem(
                id="check-in",
                title="Hotel Check-In",
                local=LocalDateTime(date="2024-10-19", time="22:00", zone="Asia/Taipei"),
                local_end=LocalDateTime(date="2024-10-19", time="23:00", zone="Asia/Taipei"),
                color_hint="peach",
            ),
        ],
        prefs=PlanPrefs(display_zone="target", time_step_minutes=30),
    )
