from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Callable, List, Optional, Protocol, Sequence

from loguru import logger

from utils.cache import SessionCache, TranslationMemory, make_cache_key
from utils.text import deduplicate_texts, restore_padding

from .base import TranslationResult
from .config import SETTINGS


ProgressCallback = Callable[[int, int], None]
LogCallback = Callable[[str], None]


class TextTranslator(Protocol):
    async def translate_text(
        self, text: str, target_lang: str, source_lang: str | None = None
    ) -> TranslationResult: ...


@dataclass(slots=True)
class PendingEntry:
    text: str
    indexes: List[int]
    cache_key: str


class TranslationService:
    """Caller-facing translation with caching and keep-the-original fallback.

    Translations that fail everywhere are returned as the original text, so
    callers never have to handle a translation error.
    """

    def __init__(
        self,
        translator: TextTranslator,
        memory: TranslationMemory | None = None,
        session_cache: SessionCache | None = None,
        *,
        concurrency_limit: int | None = None,
    ) -> None:
        self.translator = translator
        self.memory = memory
        self.session_cache = session_cache or SessionCache()
        self.concurrency_limit = max(1, concurrency_limit or SETTINGS.concurrency_limit)

    def _lookup(self, key: str) -> Optional[str]:
        cached = self.session_cache.get(key)
        if cached is None and self.memory is not None:
            cached = self.memory.get(key)
        return cached

    def _store(self, key: str, translation: str) -> None:
        self.session_cache.set(key, translation)
        if self.memory is not None:
            self.memory.set(key, translation)

    async def translate(self, text: str, target_lang: str, source_lang: str | None = None) -> str:
        """Translate one text, returning it unchanged if every provider fails."""
        core = text.strip() if text else ""
        if not core:
            return text

        key = make_cache_key(core, source_lang, target_lang)
        cached = self._lookup(key)
        if cached is not None:
            return restore_padding(text, cached)

        result = await self.translator.translate_text(core, target_lang, source_lang)
        if result.success and result.has_text:
            self._store(key, result.translation)
            return restore_padding(text, result.translation)

        logger.warning("Keeping original text, translation failed: {}", result.error)
        return text

    async def translate_many(
        self,
        *,
        texts: Sequence[str],
        target_lang: str,
        source_lang: str | None = None,
        progress_cb: ProgressCallback | None = None,
        log_cb: LogCallback | None = None,
    ) -> List[str]:
        total = len(texts)
        resolved: List[str | None] = [None] * total
        dedup = deduplicate_texts(list(texts))

        pending: List[PendingEntry] = []
        for unique_text, indexes in zip(dedup.unique_texts, dedup.groups):
            if not unique_text.strip():
                for idx in indexes:
                    resolved[idx] = texts[idx]
                continue
            key = make_cache_key(unique_text, source_lang, target_lang)
            cached = self._lookup(key)
            if cached is not None:
                for idx in indexes:
                    resolved[idx] = restore_padding(texts[idx], cached)
                continue
            pending.append(PendingEntry(text=unique_text, indexes=list(indexes), cache_key=key))

        completed = sum(1 for item in resolved if item is not None)
        if progress_cb:
            progress_cb(completed, total)

        if pending:
            await self._translate_pending(
                pending=pending,
                texts=texts,
                resolved=resolved,
                source_lang=source_lang,
                target_lang=target_lang,
                progress_cb=progress_cb,
                log_cb=log_cb,
            )

        return [text if text is not None else texts[idx] for idx, text in enumerate(resolved)]

    async def _translate_pending(
        self,
        *,
        pending: Sequence[PendingEntry],
        texts: Sequence[str],
        resolved: List[str | None],
        source_lang: str | None,
        target_lang: str,
        progress_cb: ProgressCallback | None,
        log_cb: LogCallback | None,
    ) -> None:
        sem = asyncio.Semaphore(self.concurrency_limit)
        total = len(resolved)
        completed = sum(1 for item in resolved if item is not None)

        async def translate_one(entry: PendingEntry) -> None:
            nonlocal completed
            async with sem:
                result = await self.translator.translate_text(entry.text, target_lang, source_lang)

            # None leaves the original text in place for every index
            translated: str | None = None
            if result.success and result.has_text:
                translated = result.translation
                self._store(entry.cache_key, translated)
            else:
                if log_cb:
                    log_cb(f"Kept original text: {result.error}")
                logger.warning("Keeping original text, translation failed: {}", result.error)

            for idx in entry.indexes:
                resolved[idx] = restore_padding(texts[idx], translated) if translated is not None else None
                completed += 1
                if progress_cb:
                    progress_cb(completed, total)

        await asyncio.gather(*(translate_one(entry) for entry in pending))
