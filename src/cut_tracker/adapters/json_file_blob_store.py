"""File-backed blob store keeping one JSON document per slot."""

from dataclasses import dataclass
from pathlib import Path

from cut_tracker.services.blob_store import BlobStore


@dataclass
class JsonFileBlobStore(BlobStore):
    """Blob store writing each slot to ``<directory>/<key>.json``."""

    directory: Path

    def read(self, key: str) -> str | None:
        """Return the slot contents, or None when the file is missing."""
        path = self._path(key)
        if not path.is_file():
            return None
        return path.read_text(encoding="utf-8")

    def write(self, key: str, value: str) -> None:
        """Replace the slot file atomically."""
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self._path(key)
        tmp_path = path.with_suffix(".json.tmp")
        tmp_path.write_text(value, encoding="utf-8")
        tmp_path.replace(path)

    def remove(self, key: str) -> None:
        """Delete the slot file if it exists."""
        self._path(key).unlink(missing_ok=True)

    def _path(self, key: str) -> Path:
        if not key or "/" in key or "\\" in key or key.startswith("."):
            raise ValueError(f"Invalid slot key: {key!r}")
        return self.directory / f"{key}.json"
