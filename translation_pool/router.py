"""
Round-robin translation router.

Alternates the starting provider for every request, rotates keys inside
each provider, and falls back across keys and providers until one of them
returns a non-blank translation.
"""
from __future__ import annotations

from typing import List, Sequence

from loguru import logger

from .base import BaseTranslator, TranslationRequest, TranslationResult
from .exceptions import ConfigurationError
from .group import ProviderGroup, RotationCursor


ROUTER_PROVIDER = "RoundRobin"


class RoundRobinTranslator:
    name = ROUTER_PROVIDER

    def __init__(self, groups: Sequence[ProviderGroup]) -> None:
        if not groups:
            raise ConfigurationError("At least one translation provider must be configured")
        self.groups = tuple(groups)
        self._cursor = RotationCursor()

    def __repr__(self) -> str:
        names = ", ".join(group.name for group in self.groups)
        return f"<RoundRobinTranslator [{names}]>"

    async def __aenter__(self) -> "RoundRobinTranslator":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    @property
    def provider_names(self) -> List[str]:
        return [group.name for group in self.groups]

    async def close(self) -> None:
        for group in self.groups:
            await group.close()

    async def translate_text(
        self,
        text: str,
        target_lang: str,
        source_lang: str | None = None,
    ) -> TranslationResult:
        return await self.translate(
            TranslationRequest(text=text, target_lang=target_lang, source_lang=source_lang)
        )

    async def translate(self, request: TranslationRequest) -> TranslationResult:
        """Route one request through the pool.

        Never raises for provider failures: either the first non-blank
        successful result is returned, or a failed result naming every
        provider that was attempted. Cancelling the calling task aborts the
        in-flight attempt and skips all remaining candidates.
        """
        if request is None:
            raise TypeError("translate() requires a TranslationRequest")

        group_count = len(self.groups)
        start = self._cursor.next_index(group_count)
        attempted: List[str] = []
        errors: List[str] = []

        for provider_offset in range(group_count):
            group = self.groups[(start + provider_offset) % group_count]
            if provider_offset:
                logger.info("Falling back to {} ({} keys)", group.name, len(group))
            attempted.append(group.name)

            base = group.next_key_index()
            for key_offset in range(len(group)):
                translator = group.translator_at(base, key_offset)
                result = await self._attempt(translator, request)
                if result.success and result.has_text:
                    return result

                error = result.error or "empty translation"
                logger.warning("{}[{}] failed: {}", group.name, translator.key_index, error)
                errors.append(f"{group.name}[{translator.key_index}]: {error}")

        logger.error("All translation providers failed: {}", ", ".join(attempted))
        return TranslationResult.failed(
            f"All translation providers failed ({', '.join(attempted)}): " + "; ".join(errors),
            ROUTER_PROVIDER,
        )

    async def _attempt(self, translator: BaseTranslator, request: TranslationRequest) -> TranslationResult:
        try:
            return await translator.translate(request)
        except Exception as exc:  # noqa: BLE001
            logger.exception("{}[{}] raised during translation", translator.name, translator.key_index)
            return TranslationResult.failed(f"{type(exc).__name__}: {exc}", translator.name)
