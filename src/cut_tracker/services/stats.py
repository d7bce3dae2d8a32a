"""Weekly statistics over daily records."""

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date, timedelta
from decimal import ROUND_HALF_UP, Decimal

from cut_tracker.domain.records import (
    NUMERIC_FIELDS,
    WORKOUT_KINDS,
    DailyRecord,
    Goal,
    normalize_date,
    parse_number,
)
from cut_tracker.domain.stats import (
    NO_DATA,
    Stat,
    WeeklySummary,
    WeekWindow,
    WeightPoint,
)
from cut_tracker.services.records import RecordStore

# Floats this large have no fractional part left to round.
_INTEGRAL_FLOAT = 2.0**52


def week_window(reference: str | date) -> WeekWindow:
    """Return the Monday-to-Sunday window containing a date."""
    day = date.fromisoformat(normalize_date(reference))
    # weekday() counts from Monday; Sunday closes the week begun six days earlier.
    start = day - timedelta(days=day.weekday())
    return WeekWindow(start=start, end=start + timedelta(days=6))


def records_in_window(
    records: Iterable[DailyRecord], window: WeekWindow
) -> list[DailyRecord]:
    """Return the records whose date falls inside the window."""
    return [record for record in records if window.contains(record.date)]


def average(records: Iterable[DailyRecord], field_name: str) -> Stat:
    """Mean of the parseable values of a field, to one decimal."""
    values = _numbers(records, field_name)
    if not values:
        return NO_DATA
    summed = sum(values)
    if not math.isfinite(summed):
        return NO_DATA
    return _round_half_up(summed / len(values), 1)


def total(records: Iterable[DailyRecord], field_name: str) -> Stat:
    """Sum of the parseable values of a field, to a whole number."""
    values = _numbers(records, field_name)
    if not values:
        return NO_DATA
    summed = sum(values)
    if not math.isfinite(summed):
        return NO_DATA
    return _round_half_up(summed, 0)


def tally_workouts(records: Iterable[DailyRecord]) -> dict[str, int]:
    """Count, per workout flag, the records with that flag set."""
    counts = {kind: 0 for kind in WORKOUT_KINDS}
    for record in records:
        for kind in WORKOUT_KINDS:
            if record.workout.get(kind, False):
                counts[kind] += 1
    return counts


def summarize_week(
    records: Iterable[DailyRecord], reference: str | date
) -> WeeklySummary:
    """Reduce the week containing ``reference`` into averages, sums and tallies."""
    window = week_window(reference)
    selected = records_in_window(records, window)
    return WeeklySummary(
        window=window,
        record_count=len(selected),
        averages={name: average(selected, name) for name in NUMERIC_FIELDS},
        totals={name: total(selected, name) for name in NUMERIC_FIELDS},
        workouts=tally_workouts(selected),
    )


def weight_trend(records: Iterable[DailyRecord]) -> list[WeightPoint]:
    """Return dated weights across all records, oldest first."""
    points = []
    for record in sorted(records, key=lambda item: item.date):
        weight = parse_number(record.weight)
        if weight is None:
            continue
        points.append(WeightPoint(date=record.date, weight=weight))
    return points


def trend_bounds(points: Sequence[WeightPoint], goal: Goal) -> tuple[float, float]:
    """Return the chart range covering the goal weights and every point."""
    weights = [point.weight for point in points]
    low = min([goal.target_weight - 1, *weights])
    high = max([goal.start_weight + 1, *weights])
    return float(low), float(high)


@dataclass
class StatsService:
    """Recomputes statistics from the record store on every call."""

    store: RecordStore

    def weekly(self, reference: str | date | None = None) -> WeeklySummary:
        """Return the summary for the week of a date, default the active date."""
        resolved = self.store.active_date if reference is None else reference
        return summarize_week(self.store.days, resolved)

    def trend(self) -> list[WeightPoint]:
        """Return the weight trend across the whole store."""
        return weight_trend(self.store.days)

    def trend_bounds(self) -> tuple[float, float]:
        """Return the chart range for the current trend and goal."""
        return trend_bounds(self.trend(), self.store.goal)


def _numbers(records: Iterable[DailyRecord], field_name: str) -> list[float]:
    if field_name not in NUMERIC_FIELDS:
        raise ValueError(f"Not a numeric field: {field_name}")
    values = []
    for record in records:
        number = parse_number(getattr(record, field_name))
        if number is not None:
            values.append(number)
    return values


def _round_half_up(value: float, places: int) -> float:
    if abs(value) >= _INTEGRAL_FLOAT:
        return value
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))
