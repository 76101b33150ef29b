from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

import aiohttp
from loguru import logger

from .exceptions import ProviderError


@dataclass(frozen=True, slots=True)
class TranslationRequest:
    text: str
    target_lang: str
    source_lang: str | None = None


@dataclass(frozen=True, slots=True)
class TranslationResult:
    success: bool
    translation: str | None
    error: str | None
    provider: str

    @classmethod
    def ok(cls, translation: str, provider: str) -> "TranslationResult":
        return cls(success=True, translation=translation, error=None, provider=provider)

    @classmethod
    def failed(cls, error: str, provider: str) -> "TranslationResult":
        return cls(success=False, translation=None, error=error, provider=provider)

    @property
    def has_text(self) -> bool:
        return bool(self.translation and self.translation.strip())


class BaseTranslator(ABC):
    """One provider client bound to one credential.

    Subclasses implement ``_translate`` and raise ``ProviderError`` for
    anything the provider reports as a failure. ``translate`` converts those,
    transport errors and timeouts into failed results.
    """

    name: str = "base"
    requires_key: bool = True

    def __init__(
        self,
        *,
        key_index: int = 0,
        timeout: float = 10.0,
        proxy: str | None = None,
    ) -> None:
        self.key_index = key_index
        self.timeout = timeout
        self.proxy = proxy
        self._session: Optional[aiohttp.ClientSession] = None

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.name}[{self.key_index}]>"

    def _session_headers(self) -> dict[str, str]:
        return {}

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(total=self.timeout)
            self._session = aiohttp.ClientSession(headers=self._session_headers(), timeout=timeout)
        return self._session

    async def close(self) -> None:
        """Close the session."""
        if self._session is not None:
            if not self._session.closed:
                await self._session.close()
            self._session = None

    async def translate(self, request: TranslationRequest) -> TranslationResult:
        if request is None:
            raise TypeError("translate() requires a TranslationRequest")

        try:
            translated = await self._translate(request)
        except ProviderError as exc:
            return self._failure(str(exc))
        except asyncio.TimeoutError:
            return self._failure(f"{self.name} timed out after {self.timeout:g}s")
        except aiohttp.ClientError as exc:
            return self._failure(f"{self.name} connection error: {exc}")

        return TranslationResult.ok(translated, self.name)

    def _failure(self, message: str) -> TranslationResult:
        logger.debug("{}[{}] failed: {}", self.name, self.key_index, message)
        return TranslationResult.failed(message, self.name)

    @abstractmethod
    async def _translate(self, request: TranslationRequest) -> str:
        """Send one request to the provider and return the translated text."""
