"""
JSON File Storage Implementation

One file per key: ``<data_dir>/<key>.json`` holding the JSON text for that
key. Writes go to a temporary file in the same directory and are moved
into place, so a crash mid-write leaves the previous value intact.
"""

import os
import re
import tempfile
from pathlib import Path
from typing import Optional

from personal_tracker.services.storage.interface import (
    KeyValueStoreInterface,
    StoreReadError,
    StoreWriteError,
)


_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")

SUFFIX = ".json"


class JsonFileStore(KeyValueStoreInterface):
    """Key-value store backed by a directory of JSON files."""

    def __init__(self, data_dir: Path):
        self._dir = Path(data_dir)

    @property
    def data_dir(self) -> Path:
        return self._dir

    def _path(self, key: str) -> Path:
        if not _KEY_PATTERN.match(key):
            raise ValueError(f"Invalid store key: {key!r}")
        return self._dir / f"{key}{SUFFIX}"

    def get(self, key: str) -> Optional[str]:
        path = self._path(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise StoreReadError(f"Could not read {path}: {e}") from e

    def set(self, key: str, value: str) -> None:
        path = self._path(key)
        tmp_name = None
        try:
            self._dir.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._dir, prefix=f".{key}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
            os.replace(tmp_name, path)
        except OSError as e:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StoreWriteError(f"Could not write {path}: {e}") from e

    def delete(self, key: str) -> bool:
        path = self._path(key)
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            raise StoreWriteError(f"Could not delete {path}: {e}") from e
        return True

    def keys(self) -> list[str]:
        if not self._dir.is_dir():
            return []
        return sorted(p.stem for p in self._dir.glob(f"*{SUFFIX}"))
