"""env-prefs - Key-value storage backends

All backends are synchronous, process-local and string-keyed with string
values. There are no transactions and no cross-process locking.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, List, Optional, Protocol, runtime_checkable

logger = logging.getLogger(__name__)

PREFERENCES_FILE = "preferences.json"


@runtime_checkable
class KeyValueBackend(Protocol):
    """Storage primitive consumed by the preference store."""

    def get_item(self, key: str) -> Optional[str]: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...

    def keys(self) -> List[str]: ...


class InMemoryBackend:
    """Dict-backed store that lives as long as the process"""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove_item(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> List[str]:
        return list(self._data)

    def __len__(self) -> int:
        return len(self._data)


class JsonFileBackend(InMemoryBackend):
    """Whole store persisted as a single JSON object file.

    The file is read once on construction and rewritten after every
    mutation. A missing file is an empty store; an unreadable or corrupt
    file is logged and treated as empty. If the file cannot be written,
    the failure is logged once and later changes are kept in memory only.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self.persistent = True
        super().__init__(self._load())

    def _load(self) -> Dict[str, str]:
        """Load the store from disk"""
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable preferences file {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring preferences file {self.path}: top level is not an object")
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _flush(self) -> None:
        """Persist the store, dropping to memory-only mode on failure"""
        if not self.persistent:
            return
        try:
            self._write()
        except OSError as e:
            logger.warning(
                f"Cannot write preferences file {self.path}, changes will not persist: {e}"
            )
            self.persistent = False

    def _write(self) -> None:
        """Write the store atomically via a temp file in the same directory"""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=".prefs-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(self._data, f, indent=2, ensure_ascii=False, sort_keys=True)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def set_item(self, key: str, value: str) -> None:
        super().set_item(key, value)
        self._flush()

    def remove_item(self, key: str) -> None:
        if key in self._data:
            super().remove_item(key)
            self._flush()


class NullBackend:
    """Backend used when no persistent storage is available.

    Reads find nothing and writes are accepted but dropped, so callers
    fall back to their defaults and nothing survives a restart.
    """

    def get_item(self, key: str) -> Optional[str]:
        return None

    def set_item(self, key: str, value: str) -> None:
        logger.debug(f"Storage unavailable, dropping write to {key}")

    def remove_item(self, key: str) -> None:
        logger.debug(f"Storage unavailable, dropping remove of {key}")

    def keys(self) -> List[str]:
        return []


def create_backend(kind: str, storage_dir: Optional[Path] = None) -> KeyValueBackend:
    """Create a storage backend.

    Args:
        kind: One of "file", "memory" or "none".
        storage_dir: Directory holding the preferences file (file backend only).

    Returns:
        The backend. A file backend whose directory cannot be prepared
        degrades to NullBackend.

    Raises:
        ValueError: If kind is unknown, or storage_dir is missing for "file".
    """
    if kind == "memory":
        return InMemoryBackend()
    if kind == "none":
        return NullBackend()
    if kind != "file":
        raise ValueError(f"Unknown storage backend: {kind}")
    if storage_dir is None:
        raise ValueError("storage_dir is required for the file backend")

    try:
        storage_dir = Path(storage_dir).expanduser()
        storage_dir.mkdir(parents=True, exist_ok=True)
        return JsonFileBackend(storage_dir / PREFERENCES_FILE)
    except OSError as e:
        logger.warning(f"Persistent storage unavailable at {storage_dir}, using defaults only: {e}")
        return NullBackend()
