from __future__ import annotations

import asyncio
import itertools
import threading
from typing import Iterator, Sequence

from .base import BaseTranslator
from .exceptions import ConfigurationError


class RotationCursor:
    """Monotonic tick counter shared by concurrent callers."""

    def __init__(self, start: int = 0) -> None:
        self._counter = itertools.count(start)
        self._lock = threading.Lock()

    def next(self) -> int:
        with self._lock:
            return next(self._counter)

    def next_index(self, size: int) -> int:
        if size <= 0:
            raise ValueError("size must be positive")
        return self.next() % size


class ProviderGroup:
    """All key-bound translators of one provider plus their rotation state."""

    def __init__(self, name: str, translators: Sequence[BaseTranslator]) -> None:
        if not translators:
            raise ConfigurationError(f"Provider group {name!r} has no translators")
        self.name = name
        self.translators = tuple(translators)
        self._cursor = RotationCursor()

    def __len__(self) -> int:
        return len(self.translators)

    def __iter__(self) -> Iterator[BaseTranslator]:
        return iter(self.translators)

    def __repr__(self) -> str:
        return f"<ProviderGroup {self.name} keys={len(self.translators)}>"

    def next_key_index(self) -> int:
        """Advance the key rotation and return the selected key index."""
        return self._cursor.next_index(len(self.translators))

    def translator_at(self, base: int, offset: int = 0) -> BaseTranslator:
        return self.translators[(base + offset) % len(self.translators)]

    async def close(self) -> None:
        await asyncio.gather(*(translator.close() for translator in self.translators))
