"""Key-value blob store abstractions."""

from dataclasses import dataclass
from typing import Protocol


class BlobStore(Protocol):
    """Persistence interface for whole-value text slots."""

    def read(self, key: str) -> str | None:
        """Return the stored text for a key, if present."""

    def write(self, key: str, value: str) -> None:
        """Replace the stored text for a key."""

    def remove(self, key: str) -> None:
        """Delete a key if present."""


@dataclass
class InMemoryBlobStore(BlobStore):
    """In-memory blob store, lost when the process exits."""

    _slots: dict[str, str]

    def __init__(self, slots: dict[str, str] | None = None) -> None:
        self._slots = dict(slots or {})

    def read(self, key: str) -> str | None:
        """Return the stored text for a key."""
        return self._slots.get(key)

    def write(self, key: str, value: str) -> None:
        """Store text under a key."""
        self._slots[key] = value

    def remove(self, key: str) -> None:
        """Drop a key."""
        self._slots.pop(key, None)
