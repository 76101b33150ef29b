from __future__ import annotations

from collections import OrderedDict
from pathlib import Path
from typing import Dict
import json
import threading


def make_cache_key(text: str, source: str | None, target: str) -> str:
    return f"{(source or 'auto').lower()}::{target.lower()}::{text}"


class TranslationMemory:
    """Translations persisted to a JSON file between runs."""

    def __init__(self, path: Path, *, auto_flush: bool = True) -> None:
        self.path = path
        self.auto_flush = auto_flush
        self._lock = threading.Lock()
        self._data: Dict[str, str] = {}
        self._dirty = False
        self._load()

    def _load(self) -> None:
        if not self.path.exists():
            return
        try:
            with self.path.open("r", encoding="utf-8") as handle:
                data = json.load(handle)
        except json.JSONDecodeError:
            data = {}
        self._data = {k: v for k, v in data.items() if isinstance(v, str)} if isinstance(data, dict) else {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def get(self, key: str) -> str | None:
        with self._lock:
            return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._data[key] = value
            self._dirty = True
        if self.auto_flush:
            self.flush()

    def flush(self) -> None:
        with self._lock:
            if not self._dirty:
                return
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("w", encoding="utf-8") as handle:
                json.dump(self._data, handle, ensure_ascii=False, indent=2)
            self._dirty = False


class SessionCache:
    """In-process LRU of recent translations."""

    def __init__(self, *, maxsize: int = 2048) -> None:
        self.maxsize = maxsize
        self._store: OrderedDict[str, str] = OrderedDict()
        self._lock = threading.Lock()

    def get(self, key: str) -> str | None:
        with self._lock:
            value = self._store.get(key)
            if value is not None:
                self._store.move_to_end(key)
            return value

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._store[key] = value
            self._store.move_to_end(key)
            if len(self._store) > self.maxsize:
                self._store.popitem(last=False)

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._store
