"""
Durable key-value storage for save slots.

``SaveStorage`` is the capability the save service needs. Writes must
be all-or-nothing: a reader sees either the previous value or the new
one, never a torn file.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class SaveStorage(Protocol):
    """Key-value store holding serialized saves."""

    def read(self, key: str) -> str | None:
        """Return the stored text, or None when the key is absent."""
        ...

    def write(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...

    def exists(self, key: str) -> bool: ...


class FileSaveStorage:
    """
    One JSON file per key inside a directory.

    Writes go to a temporary file in the same directory and are moved
    into place with ``os.replace``.
    """

    SUFFIX = ".json"

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)

    def path_for(self, key: str) -> Path:
        return self.directory / f"{key}{self.SUFFIX}"

    def read(self, key: str) -> str | None:
        path = self.path_for(key)
        try:
            with open(path, 'r', encoding='utf-8') as f:
                return f.read()
        except FileNotFoundError:
            return None

    def write(self, key: str, value: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self.path_for(key)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{key}.", suffix=".tmp", dir=self.directory)
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                f.write(value)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        logger.debug(f"Wrote {len(value)} characters to {path}")

    def delete(self, key: str) -> None:
        self.path_for(key).unlink(missing_ok=True)

    def exists(self, key: str) -> bool:
        return self.path_for(key).is_file()


class MemorySaveStorage:
    """In-process storage for tests and headless sessions."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._values: dict[str, str] = dict(initial or {})

    def read(self, key: str) -> str | None:
        return self._values.get(key)

    def write(self, key: str, value: str) -> None:
        self._values[key] = value

    def delete(self, key: str) -> None:
        self._values.pop(key, None)

    def exists(self, key: str) -> bool:
        return key in self._values

    def clear(self) -> None:
        self._values.clear()
