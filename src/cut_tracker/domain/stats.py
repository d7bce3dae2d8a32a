"""Domain models for weekly statistics."""

from dataclasses import dataclass
from datetime import date
from typing import Final


class NoData:
    """Marker for a statistic computed over zero valid samples."""

    _instance: "NoData | None" = None

    def __new__(cls) -> "NoData":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NO_DATA"


NO_DATA: Final = NoData()

Stat = float | NoData


@dataclass(frozen=True)
class WeekWindow:
    """Inclusive Monday-to-Sunday range."""

    start: date
    end: date

    @property
    def start_key(self) -> str:
        return self.start.isoformat()

    @property
    def end_key(self) -> str:
        return self.end.isoformat()

    def contains(self, day: str) -> bool:
        """Return True when a YYYY-MM-DD string falls inside the window."""
        return self.start_key <= day <= self.end_key


@dataclass(frozen=True)
class WeeklySummary:
    """Averages, sums and workout tallies for one week."""

    window: WeekWindow
    record_count: int
    averages: dict[str, Stat]
    totals: dict[str, Stat]
    workouts: dict[str, int]


@dataclass(frozen=True)
class WeightPoint:
    """One point of the weight trend."""

    date: str
    weight: float
