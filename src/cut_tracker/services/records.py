"""Daily record store backed by a key-value blob store."""

import json
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import date
from typing import TypeVar

from cut_tracker.domain.records import (
    DEFAULT_GOAL,
    DailyRecord,
    Goal,
    blank_record,
    goal_from_dict,
    goal_to_dict,
    merge_record,
    normalize_date,
    record_from_dict,
    record_to_dict,
)
from cut_tracker.services.blob_store import BlobStore

_logger = logging.getLogger(__name__)

DAYS_SLOT = "days"
GOAL_SLOT = "goal"
ACTIVE_DATE_SLOT = "activeDate"

T = TypeVar("T")


@dataclass
class RecordStore:
    """Holds the day collection, the goal and the active date.

    Every slot is read once by ``load`` and rewritten in full whenever it
    changes. Writes are best effort: failures are logged and dropped.
    """

    blob_store: BlobStore
    today: Callable[[], date]
    prefix: str = "cut"
    default_goal: Goal = DEFAULT_GOAL
    goal: Goal = DEFAULT_GOAL
    active_date: str = ""
    _days: list[DailyRecord] = field(default_factory=list, repr=False)

    @classmethod
    def load(
        cls,
        blob_store: BlobStore,
        today: Callable[[], date],
        prefix: str = "cut",
        default_goal: Goal = DEFAULT_GOAL,
    ) -> "RecordStore":
        """Restore a store from the blob store, falling back to defaults."""
        store = cls(
            blob_store=blob_store,
            today=today,
            prefix=prefix,
            default_goal=default_goal,
            goal=default_goal,
        )
        today_key = today().isoformat()
        store._days = store._load_slot(
            DAYS_SLOT, _parse_days, [blank_record(today_key)]
        )
        store.goal = store._load_slot(
            GOAL_SLOT, lambda raw: goal_from_dict(raw, default_goal), default_goal
        )
        store.active_date = store._load_slot(
            ACTIVE_DATE_SLOT, _parse_active_date, today_key
        )
        store._ensure_active_record()
        return store

    @property
    def days(self) -> tuple[DailyRecord, ...]:
        """Return all records in ascending date order."""
        return tuple(self._days)

    def get(self, day: str | date) -> DailyRecord:
        """Return the record for a date, or a blank one when none exists."""
        key = normalize_date(day)
        index = self._index_of(key)
        if index is None:
            return blank_record(key)
        return self._days[index]

    def upsert(self, day: str | date, changes: Mapping[str, object]) -> DailyRecord:
        """Merge a partial update into the record for a date and persist."""
        key = normalize_date(day)
        index = self._index_of(key)
        current = blank_record(key) if index is None else self._days[index]
        updated = merge_record(current, changes)
        if index is None:
            self._days.append(updated)
        else:
            self._days[index] = updated
        self._days.sort(key=lambda record: record.date)
        self._persist_days()
        return updated

    def select_date(self, day: str | date) -> DailyRecord:
        """Make a date active, creating its record when missing."""
        self.active_date = normalize_date(day)
        self._persist(ACTIVE_DATE_SLOT, self.active_date)
        return self._ensure_active_record()

    def active_record(self) -> DailyRecord:
        """Return the record of the active date."""
        return self.get(self.active_date)

    def save_active(self, changes: Mapping[str, object]) -> DailyRecord:
        """Merge a partial update into the active date's record."""
        return self.upsert(self.active_date, changes)

    def update_goal(self, goal: Goal) -> Goal:
        """Replace the goal and persist it."""
        self.goal = goal
        self._persist(GOAL_SLOT, goal_to_dict(goal))
        return goal

    def reset_all(self) -> None:
        """Drop every record, keeping one blank record for the active date."""
        key = self._key(DAYS_SLOT)
        try:
            self.blob_store.remove(key)
        except OSError:
            _logger.exception("Failed to clear slot", extra={"key": key})
        self._days = [blank_record(self.active_date)]
        self._persist_days()
        _logger.info("Reset all records", extra={"active_date": self.active_date})

    def export_snapshot(self) -> str:
        """Serialize the goal and every record as pretty-printed JSON."""
        payload = {
            "goal": goal_to_dict(self.goal),
            "days": [record_to_dict(record) for record in self._days],
        }
        return json.dumps(payload, ensure_ascii=False, indent=2)

    def export_filename(self) -> str:
        """Return the download name for an export taken today."""
        return f"cut-tracker-{self.today().isoformat()}.json"

    def import_snapshot(self, payload: str | bytes) -> bool:
        """Replace goal and records from an exported snapshot.

        Returns False and leaves the store untouched when the payload is not
        JSON or does not have the export shape.
        """
        try:
            goal, days = _parse_snapshot(json.loads(payload), self.default_goal)
        except ValueError as exc:
            _logger.warning("Rejected snapshot import: %s", exc)
            return False
        self.goal = goal
        self._days = days
        self._persist(GOAL_SLOT, goal_to_dict(goal))
        self._persist_days()
        self._ensure_active_record()
        _logger.info("Imported snapshot with %s records", len(days))
        return True

    def _ensure_active_record(self) -> DailyRecord:
        index = self._index_of(self.active_date)
        if index is not None:
            return self._days[index]
        record = blank_record(self.active_date)
        self._days.append(record)
        self._days.sort(key=lambda item: item.date)
        self._persist_days()
        return record

    def _index_of(self, key: str) -> int | None:
        for index, record in enumerate(self._days):
            if record.date == key:
                return index
        return None

    def _key(self, slot: str) -> str:
        return f"{self.prefix}.{slot}"

    def _load_slot(self, slot: str, parse: Callable[[object], T], default: T) -> T:
        key = self._key(slot)
        try:
            raw = self.blob_store.read(key)
            if raw is None:
                return default
            return parse(json.loads(raw))
        except (OSError, ValueError):
            _logger.warning("Ignoring unreadable slot %s, using default", key)
            return default

    def _persist_days(self) -> None:
        self._persist(DAYS_SLOT, [record_to_dict(record) for record in self._days])

    def _persist(self, slot: str, value: object) -> None:
        key = self._key(slot)
        try:
            self.blob_store.write(key, json.dumps(value, ensure_ascii=False))
        except OSError:
            _logger.exception("Failed to persist slot", extra={"key": key})


def _parse_days(raw: object) -> list[DailyRecord]:
    if not isinstance(raw, list):
        raise ValueError("Days must be a list")
    by_date: dict[str, DailyRecord] = {}
    for item in raw:
        record = record_from_dict(item)
        by_date[record.date] = record
    return sorted(by_date.values(), key=lambda record: record.date)


def _parse_active_date(raw: object) -> str:
    if not isinstance(raw, str):
        raise ValueError("Active date must be a string")
    return normalize_date(raw)


def _parse_snapshot(
    raw: object, default_goal: Goal
) -> tuple[Goal, list[DailyRecord]]:
    if not isinstance(raw, Mapping):
        raise ValueError("Snapshot must be an object")
    if raw.get("goal") is None or raw.get("days") is None:
        raise ValueError("Snapshot needs both goal and days")
    return goal_from_dict(raw["goal"], default_goal), _parse_days(raw["days"])
