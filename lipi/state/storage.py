"""
Key-value stores for persisted reader preferences.

Anything that implements ``get``/``set`` can back the preference contexts;
tests use ``InMemoryStorage`` and the service uses ``JsonFileStorage`` when a
path is configured. A store that cannot be read behaves as an empty one.
"""
import json
import logging
import os
import tempfile
import threading
from typing import Dict, Optional, Protocol

SCRIPT_STORAGE_KEY = "vaikhari-script"
LANG_STORAGE_KEY = "vaikhari-lang"


class KeyValueStorage(Protocol):
    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class InMemoryStorage:
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._data[key] = value


class JsonFileStorage:
    """Flat JSON object on disk, rewritten atomically on every set."""

    def __init__(self, path: str):
        self.path = path
        self._lock = threading.RLock()
        self._data: Optional[Dict[str, str]] = None

    def _load(self) -> Dict[str, str]:
        if self._data is not None:
            return self._data
        data: Dict[str, str] = {}
        if os.path.exists(self.path):
            try:
                with open(self.path, "r", encoding="utf-8") as f:
                    raw = json.load(f)
                if isinstance(raw, dict):
                    data = {str(k): str(v) for k, v in raw.items() if isinstance(v, str)}
                else:
                    logging.warning("[STORAGE] ignoring non-object preferences file path=%s", self.path)
            except (OSError, ValueError) as e:
                logging.warning("[STORAGE] failed to read preferences path=%s error=%s", self.path, e)
        self._data = data
        return data

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            data = self._load()
            data[key] = value
            directory = os.path.dirname(os.path.abspath(self.path))
            os.makedirs(directory, exist_ok=True)
            fd, tmp = tempfile.mkstemp(dir=directory, prefix=".prefs-", suffix=".json")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(data, f, ensure_ascii=False, indent=2, sort_keys=True)
                os.replace(tmp, self.path)
            except OSError:
                if os.path.exists(tmp):
                    os.unlink(tmp)
                raise


class NamespacedStorage:
    """Prefixes every key so several clients can share one backing store."""

    def __init__(self, base: KeyValueStorage, namespace: str):
        self.base = base
        self.namespace = namespace

    def _key(self, key: str) -> str:
        return f"{self.namespace}:{key}"

    def get(self, key: str) -> Optional[str]:
        return self.base.get(self._key(key))

    def set(self, key: str, value: str) -> None:
        self.base.set(self._key(key), value)


def build_storage(path: Optional[str] = None) -> KeyValueStorage:
    if path:
        return JsonFileStorage(path)
    return InMemoryStorage()
