"""Dependency container wiring for the application."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import date

from cut_tracker.adapters.json_file_blob_store import JsonFileBlobStore
from cut_tracker.config import Settings, local_today
from cut_tracker.services.blob_store import BlobStore
from cut_tracker.services.records import RecordStore
from cut_tracker.services.stats import StatsService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    blob_store: BlobStore
    record_store: RecordStore
    stats_service: StatsService


def build_container(
    settings: Settings | None = None,
    blob_store: BlobStore | None = None,
    today: Callable[[], date] | None = None,
) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    resolved_blob_store = (
        blob_store
        if blob_store is not None
        else JsonFileBlobStore(resolved_settings.data_dir)
    )

    def resolved_today() -> date:
        return local_today(resolved_settings.timezone)

    clock = today or resolved_today
    record_store = RecordStore.load(
        resolved_blob_store,
        today=clock,
        prefix=resolved_settings.storage_prefix,
    )
    return AppContainer(
        settings=resolved_settings,
        blob_store=resolved_blob_store,
        record_store=record_store,
        stats_service=StatsService(record_store),
    )
