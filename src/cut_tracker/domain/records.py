"""Domain models for daily records and the goal."""

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date

WORKOUT_KINDS = ("push", "pull", "legs", "full", "hiit", "liss")
NUMERIC_FIELDS = ("weight", "waist", "calories", "protein", "carbs", "fat", "steps")
TEXT_FIELDS = ("notes",)

# Measurements keep whatever the user typed (or a JSON number from an import).
FieldValue = str | int | float


def blank_workout() -> dict[str, bool]:
    """Return a workout flag set with every flag cleared."""
    return {kind: False for kind in WORKOUT_KINDS}


@dataclass(frozen=True)
class DailyRecord:
    """Measurements, intake and activity logged for one calendar date."""

    date: str
    weight: FieldValue = ""
    waist: FieldValue = ""
    calories: FieldValue = ""
    protein: FieldValue = ""
    carbs: FieldValue = ""
    fat: FieldValue = ""
    steps: FieldValue = ""
    workout: dict[str, bool] = field(default_factory=blank_workout)
    notes: str = ""


@dataclass(frozen=True)
class Goal:
    """Starting point and target of the cut."""

    start_weight: float
    target_weight: float
    start_body_fat: float
    target_body_fat: float
    height: float


DEFAULT_GOAL = Goal(
    start_weight=75.1,
    target_weight=70,
    start_body_fat=23.1,
    target_body_fat=18,
    height=183,
)

_GOAL_KEYS = {
    "start_weight": "startWeight",
    "target_weight": "targetWeight",
    "start_body_fat": "startBodyFat",
    "target_body_fat": "targetBodyFat",
    "height": "height",
}


def normalize_date(value: str | date) -> str:
    """Return the canonical YYYY-MM-DD form of a date, raising ValueError."""
    if isinstance(value, date):
        return value.isoformat()
    return date.fromisoformat(value.strip()).isoformat()


def parse_number(value: object) -> float | None:
    """Parse a stored field as a finite float; None when it is not a number."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        try:
            number = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        cleaned = value.strip()
        if not cleaned:
            return None
        try:
            number = float(cleaned)
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(number):
        return None
    return number


def blank_record(day: str) -> DailyRecord:
    """Return an empty record stamped with the given date."""
    return DailyRecord(date=day)


def merge_record(record: DailyRecord, changes: Mapping[str, object]) -> DailyRecord:
    """Apply a partial update to a record.

    Top-level fields are replaced wholesale. The workout flag set is merged
    key by key so that updating one flag leaves the others untouched.
    """
    values: dict[str, object] = {}
    for name, value in changes.items():
        if name == "date":
            continue
        if name == "workout":
            values["workout"] = _merge_workout(record.workout, value)
        elif name in NUMERIC_FIELDS:
            values[name] = _field_value(name, value)
        elif name in TEXT_FIELDS:
            values[name] = "" if value is None else str(value)
        else:
            raise ValueError(f"Unknown record field: {name}")
    return DailyRecord(
        date=record.date,
        weight=values.get("weight", record.weight),
        waist=values.get("waist", record.waist),
        calories=values.get("calories", record.calories),
        protein=values.get("protein", record.protein),
        carbs=values.get("carbs", record.carbs),
        fat=values.get("fat", record.fat),
        steps=values.get("steps", record.steps),
        workout=values.get("workout", dict(record.workout)),
        notes=values.get("notes", record.notes),
    )


def record_to_dict(record: DailyRecord) -> dict[str, object]:
    """Serialize a record into its stored JSON shape."""
    return {
        "date": record.date,
        "weight": record.weight,
        "waist": record.waist,
        "calories": record.calories,
        "protein": record.protein,
        "carbs": record.carbs,
        "fat": record.fat,
        "steps": record.steps,
        "workout": {kind: record.workout.get(kind, False) for kind in WORKOUT_KINDS},
        "notes": record.notes,
    }


def record_from_dict(raw: object) -> DailyRecord:
    """Build a record from its stored JSON shape, raising ValueError if malformed."""
    if not isinstance(raw, Mapping):
        raise ValueError("Record must be an object")
    day = raw.get("date")
    if not isinstance(day, str):
        raise ValueError("Record is missing its date")
    changes = {
        name: raw[name]
        for name in (*NUMERIC_FIELDS, *TEXT_FIELDS, "workout")
        if name in raw and raw[name] is not None
    }
    return merge_record(blank_record(normalize_date(day)), changes)


def goal_to_dict(goal: Goal) -> dict[str, float]:
    """Serialize the goal using its stored camelCase keys."""
    return {key: getattr(goal, attr) for attr, key in _GOAL_KEYS.items()}


def goal_from_dict(raw: object, fallback: Goal = DEFAULT_GOAL) -> Goal:
    """Build a goal from its stored shape; missing keys keep the fallback."""
    if not isinstance(raw, Mapping):
        raise ValueError("Goal must be an object")
    values: dict[str, float] = {}
    for attr, key in _GOAL_KEYS.items():
        if key not in raw or raw[key] is None:
            values[attr] = getattr(fallback, attr)
            continue
        value = raw[key]
        number = parse_number(value)
        if number is None:
            raise ValueError(f"Goal field {key} is not a number")
        # JSON numbers are kept as given so exports reproduce them.
        values[attr] = value if isinstance(value, int | float) else number
    return Goal(**values)


def _field_value(name: str, value: object) -> FieldValue:
    if value is None:
        return ""
    if isinstance(value, bool) or not isinstance(value, str | int | float):
        raise ValueError(f"Field {name} must be text or a number")
    return value


def _merge_workout(current: Mapping[str, bool], update: object) -> dict[str, bool]:
    if not isinstance(update, Mapping):
        raise ValueError("Workout update must be an object")
    merged = {kind: bool(current.get(kind, False)) for kind in WORKOUT_KINDS}
    for kind, flag in update.items():
        if kind not in merged:
            raise ValueError(f"Unknown workout flag: {kind}")
        merged[kind] = bool(flag)
    return merged
