"""Tests for the daily record store."""

import json
from datetime import date

import pytest

from cut_tracker.domain.records import DEFAULT_GOAL, Goal
from cut_tracker.services.records import RecordStore
from tests.conftest import FailingBlobStore, RecordingBlobStore, fixed_today


def test_load_defaults_to_today(store: RecordStore) -> None:
    assert store.active_date == "2024-06-12"
    assert [record.date for record in store.days] == ["2024-06-12"]
    assert store.goal == DEFAULT_GOAL


def test_load_restores_persisted_slots() -> None:
    blob_store = RecordingBlobStore(
        slots={
            "cut.days": json.dumps(
                [
                    {"date": "2024-06-11", "weight": "79"},
                    {"date": "2024-06-10", "weight": "80"},
                ]
            ),
            "cut.goal": json.dumps({"startWeight": 90, "targetWeight": 80}),
            "cut.activeDate": json.dumps("2024-06-10"),
        }
    )

    store = RecordStore.load(blob_store, today=fixed_today)

    assert [record.date for record in store.days] == ["2024-06-10", "2024-06-11"]
    assert store.goal.start_weight == 90
    assert store.active_date == "2024-06-10"
    assert "cut.days" not in blob_store.writes


def test_load_falls_back_on_corrupt_slots() -> None:
    blob_store = RecordingBlobStore(
        slots={
            "cut.days": "{not json",
            "cut.goal": json.dumps([1, 2, 3]),
            "cut.activeDate": json.dumps(42),
        }
    )

    store = RecordStore.load(blob_store, today=fixed_today)

    assert [record.date for record in store.days] == ["2024-06-12"]
    assert store.goal == DEFAULT_GOAL
    assert store.active_date == "2024-06-12"


def test_load_synthesizes_record_for_active_date() -> None:
    blob_store = RecordingBlobStore(
        slots={
            "cut.days": json.dumps([{"date": "2024-06-10", "weight": "80"}]),
            "cut.activeDate": json.dumps("2024-06-14"),
        }
    )

    store = RecordStore.load(blob_store, today=fixed_today)

    assert [record.date for record in store.days] == ["2024-06-10", "2024-06-14"]
    assert json.loads(blob_store.slots["cut.days"])[1]["date"] == "2024-06-14"


def test_get_returns_blank_record_without_inserting(store: RecordStore) -> None:
    record = store.get("2024-01-01")

    assert record.date == "2024-01-01"
    assert record.weight == ""
    assert len(store.days) == 1


def test_upsert_merges_disjoint_updates(store: RecordStore) -> None:
    store.upsert("2024-06-10", {"weight": "80"})
    store.upsert("2024-06-10", {"calories": "2100", "notes": "cheat meal"})

    record = store.get("2024-06-10")
    assert record.weight == "80"
    assert record.calories == "2100"
    assert record.notes == "cheat meal"


def test_upsert_preserves_other_workout_flags(store: RecordStore) -> None:
    store.upsert("2024-06-12", {"workout": {"pull": True}})
    record = store.upsert("2024-06-12", {"workout": {"push": True}})

    assert record.workout == {
        "push": True,
        "pull": True,
        "legs": False,
        "full": False,
        "hiit": False,
        "liss": False,
    }


def test_upsert_keeps_dates_unique_and_sorted(store: RecordStore) -> None:
    for day in ["2024-06-15", "2024-06-01", "2024-06-15", "2024-06-12", "2024-06-01"]:
        store.upsert(day, {"steps": "1000"})

    dates = [record.date for record in store.days]
    assert dates == ["2024-06-01", "2024-06-12", "2024-06-15"]


def test_upsert_accepts_date_objects(store: RecordStore) -> None:
    store.upsert(date(2024, 6, 13), {"weight": "78"})

    assert store.get("2024-06-13").weight == "78"


def test_upsert_persists_days_slot(
    store: RecordStore, blob_store: RecordingBlobStore
) -> None:
    store.upsert("2024-06-10", {"weight": "80"})

    persisted = json.loads(blob_store.slots["cut.days"])
    assert [item["date"] for item in persisted] == ["2024-06-10", "2024-06-12"]
    assert persisted[0]["weight"] == "80"


def test_upsert_rejects_unknown_field_without_changes(store: RecordStore) -> None:
    with pytest.raises(ValueError):
        store.upsert("2024-06-10", {"mood": "great"})

    assert [record.date for record in store.days] == ["2024-06-12"]


def test_select_date_creates_blank_record(
    store: RecordStore, blob_store: RecordingBlobStore
) -> None:
    record = store.select_date("2024-06-20")

    assert record.date == "2024-06-20"
    assert store.active_date == "2024-06-20"
    assert json.loads(blob_store.slots["cut.activeDate"]) == "2024-06-20"
    assert [item.date for item in store.days] == ["2024-06-12", "2024-06-20"]


def test_select_date_keeps_existing_record(store: RecordStore) -> None:
    store.upsert("2024-06-10", {"weight": "80"})

    record = store.select_date("2024-06-10")

    assert record.weight == "80"
    assert len(store.days) == 2


def test_save_active_updates_active_record(store: RecordStore) -> None:
    store.select_date("2024-06-11")

    store.save_active({"protein": "160"})

    assert store.active_record().protein == "160"
    assert store.get("2024-06-12").protein == ""


def test_update_goal_persists(
    store: RecordStore, blob_store: RecordingBlobStore
) -> None:
    goal = Goal(
        start_weight=90,
        target_weight=82,
        start_body_fat=25,
        target_body_fat=20,
        height=178,
    )

    store.update_goal(goal)

    assert store.goal == goal
    assert json.loads(blob_store.slots["cut.goal"])["targetWeight"] == 82


def test_reset_all_leaves_one_blank_record(
    store: RecordStore, blob_store: RecordingBlobStore
) -> None:
    store.upsert("2024-06-10", {"weight": "80"})
    store.select_date("2024-06-11")
    store.save_active({"weight": "79"})

    store.reset_all()

    assert [record.date for record in store.days] == ["2024-06-11"]
    assert store.days[0].weight == ""
    assert blob_store.removals == ["cut.days"]
    assert len(json.loads(blob_store.slots["cut.days"])) == 1


def test_export_snapshot_shape(store: RecordStore) -> None:
    store.upsert("2024-06-10", {"weight": 80.2, "workout": {"liss": True}})

    snapshot = store.export_snapshot()
    payload = json.loads(snapshot)

    assert snapshot.startswith('{\n  "goal": {')
    assert set(payload) == {"goal", "days"}
    assert payload["goal"]["startWeight"] == 75.1
    assert payload["days"][0]["weight"] == 80.2
    assert payload["days"][0]["workout"]["liss"] is True
    assert store.export_snapshot() == snapshot


def test_export_filename_uses_today(store: RecordStore) -> None:
    assert store.export_filename() == "cut-tracker-2024-06-12.json"


def test_import_round_trip(store: RecordStore) -> None:
    store.update_goal(
        Goal(
            start_weight=88.8,
            target_weight=80,
            start_body_fat=24.5,
            target_body_fat=17,
            height=180,
        )
    )
    store.upsert("2024-06-10", {"weight": "80", "calories": 2000, "notes": "ok"})
    store.upsert("2024-06-11", {"workout": {"hiit": True, "push": True}})
    snapshot = store.export_snapshot()

    restored = RecordStore.load(RecordingBlobStore(), today=fixed_today)
    assert restored.import_snapshot(snapshot) is True

    assert restored.goal == store.goal
    assert restored.days == store.days
    assert restored.export_snapshot() == snapshot


def test_import_replaces_state_wholesale(
    store: RecordStore, blob_store: RecordingBlobStore
) -> None:
    store.upsert("2024-05-01", {"weight": "85"})
    payload = json.dumps(
        {
            "goal": {
                "startWeight": 80,
                "targetWeight": 74,
                "startBodyFat": 20,
                "targetBodyFat": 15,
                "height": 175,
            },
            "days": [
                {"date": "2024-06-12", "weight": "78"},
                {"date": "2024-06-10", "weight": "81"},
                {"date": "2024-06-10", "weight": "80"},
            ],
        }
    )

    assert store.import_snapshot(payload) is True

    assert [record.date for record in store.days] == ["2024-06-10", "2024-06-12"]
    assert store.get("2024-06-10").weight == "80"
    assert store.goal.height == 175
    assert json.loads(blob_store.slots["cut.goal"])["height"] == 175


def test_import_adds_record_for_active_date(store: RecordStore) -> None:
    payload = json.dumps({"goal": {}, "days": [{"date": "2024-06-01"}]})

    assert store.import_snapshot(payload) is True

    assert [record.date for record in store.days] == ["2024-06-01", "2024-06-12"]


@pytest.mark.parametrize(
    "payload",
    [
        "not json",
        b"\xff\xfe",
        "[]",
        json.dumps({"days": []}),
        json.dumps({"goal": {}}),
        json.dumps({"goal": {}, "days": {"date": "2024-06-10"}}),
        json.dumps({"goal": {}, "days": [{"weight": "80"}]}),
        json.dumps({"goal": {"height": "tall"}, "days": []}),
    ],
)
def test_import_rejects_bad_payload(store: RecordStore, payload: str | bytes) -> None:
    store.upsert("2024-06-10", {"weight": "80"})
    before = store.export_snapshot()

    assert store.import_snapshot(payload) is False

    assert store.export_snapshot() == before


def test_write_failures_are_ignored() -> None:
    blob_store = FailingBlobStore()
    store = RecordStore.load(blob_store, today=fixed_today)

    store.upsert("2024-06-10", {"weight": "80"})
    store.reset_all()

    assert blob_store.attempts >= 2
    assert [record.date for record in store.days] == ["2024-06-12"]
