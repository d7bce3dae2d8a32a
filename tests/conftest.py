"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import date

import pytest

from cut_tracker.config import Settings
from cut_tracker.containers import AppContainer, build_container
from cut_tracker.services.blob_store import BlobStore, InMemoryBlobStore
from cut_tracker.services.records import RecordStore

TODAY = date(2024, 6, 12)


def fixed_today() -> date:
    return TODAY


@dataclass
class RecordingBlobStore(BlobStore):
    """In-memory blob store that remembers every call."""

    slots: dict[str, str] = field(default_factory=dict)
    writes: list[str] = field(default_factory=list)
    removals: list[str] = field(default_factory=list)

    def read(self, key: str) -> str | None:
        return self.slots.get(key)

    def write(self, key: str, value: str) -> None:
        self.writes.append(key)
        self.slots[key] = value

    def remove(self, key: str) -> None:
        self.removals.append(key)
        self.slots.pop(key, None)


@dataclass
class FailingBlobStore(BlobStore):
    """Blob store whose reads return nothing and whose writes always fail."""

    attempts: int = 0

    def read(self, key: str) -> str | None:
        return None

    def write(self, key: str, value: str) -> None:
        self.attempts += 1
        raise OSError("disk full")

    def remove(self, key: str) -> None:
        raise OSError("read-only")


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(data_dir=tmp_path / "data", storage_prefix="cut")


@pytest.fixture
def blob_store() -> RecordingBlobStore:
    return RecordingBlobStore()


@pytest.fixture
def store(blob_store: RecordingBlobStore) -> RecordStore:
    return RecordStore.load(blob_store, today=fixed_today)


@pytest.fixture
def container(settings: Settings, blob_store: RecordingBlobStore) -> AppContainer:
    return build_container(settings, blob_store=blob_store, today=fixed_today)


@pytest.fixture
def memory_store() -> RecordStore:
    return RecordStore.load(InMemoryBlobStore(), today=fixed_today)
