"""Training guide: weekday routine and daily intake targets."""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class DailyTarget:
    """Recommended daily range for one quantity."""

    label: str
    low: float
    high: float | None
    unit: str


# Indexed by date.weekday(): Monday is 0.
WEEKLY_ROUTINE = (
    "Upper push + HIIT 20 min",
    "Lower body + LISS 40 min",
    "LISS 40 min",
    "Upper pull + HIIT 20 min",
    "Full body + LISS 40 min",
    "LISS 40 min",
    "Rest / walk",
)

DAILY_TARGETS = (
    DailyTarget(label="calories", low=2000, high=2100, unit="kcal"),
    DailyTarget(label="protein", low=150, high=170, unit="g"),
    DailyTarget(label="carbs", low=160, high=200, unit="g"),
    DailyTarget(label="fat", low=40, high=50, unit="g"),
    DailyTarget(label="water", low=2.5, high=3, unit="L"),
    DailyTarget(label="sleep", low=7, high=None, unit="h"),
)


def workout_plan_for(day: date) -> str:
    """Return the planned workout for a date."""
    return WEEKLY_ROUTINE[day.weekday()]
