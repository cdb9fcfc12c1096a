"""Key-value store backed by JSON files on disk."""

import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

from pediatric_dosing.domain.errors import PersistenceError
from pediatric_dosing.services.persistence import KeyValueStore


@dataclass
class JsonFileKeyValueStore(KeyValueStore):
    """Stores each key as ``<key>.json`` inside a directory."""

    directory: Path

    def get(self, key: str) -> str | None:
        """Return the file contents for a key, if the file exists."""
        path = self._path(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise PersistenceError(f"Failed to read {path}") from exc

    def set(self, key: str, value: str) -> None:
        """Write a key atomically through a temporary file."""
        path = self._path(key)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.directory, prefix=f".{key}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(value)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise PersistenceError(f"Failed to write {path}") from exc

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"
