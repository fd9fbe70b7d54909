"""
Key-value persistence used by the saved-recalls store.

The store is a byte-oriented collaborator: it knows nothing about what the
bytes mean.
"""

import os
import logging
from pathlib import Path
from typing import Dict, Optional, Protocol

logger = logging.getLogger("Storage")


class KeyValueStore(Protocol):
    """Minimal byte store interface."""

    def get_bytes(self, key: str) -> Optional[bytes]:
        ...

    def set_bytes(self, key: str, value: bytes) -> None:
        ...


class InMemoryKeyValueStore:
    """Process-local store, mainly for tests and ephemeral sessions."""

    def __init__(self, initial: Optional[Dict[str, bytes]] = None):
        self._data: Dict[str, bytes] = dict(initial or {})

    def get_bytes(self, key: str) -> Optional[bytes]:
        """Return the bytes stored under key, or None if the key is absent."""
        return self._data.get(key)

    def set_bytes(self, key: str, value: bytes) -> None:
        """Store value under key, replacing any previous value."""
        self._data[key] = value


class FileKeyValueStore:
    """
    Stores each key as a file inside a directory.

    Writes go to a temporary file first and are then renamed over the
    target so a crash never leaves a half-written value behind.
    """

    def __init__(self, directory: str):
        self.directory = Path(directory)
        os.makedirs(self.directory, exist_ok=True)
        logger.info(f"File store ready at {self.directory}")

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get_bytes(self, key: str) -> Optional[bytes]:
        """Return the bytes stored under key, or None if the key is absent."""
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_bytes()

    def set_bytes(self, key: str, value: bytes) -> None:
        """Store value under key, replacing any previous value."""
        path = self._path(key)
        tmp_path = path.with_suffix(".tmp")
        with open(tmp_path, "wb") as f:
            f.write(value)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, path)
