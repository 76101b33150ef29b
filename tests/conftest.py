"""Shared fakes for translation pool tests."""

from __future__ import annotations

import asyncio
from typing import Any, List, Tuple

import pytest

from translation_pool.base import TranslationRequest, TranslationResult
from translation_pool.group import ProviderGroup


ENV_VARS = [
    "TRANSLATION_PROVIDER_ORDER",
    "DEEPL_API_KEYS",
    "DEEPL_ENDPOINT",
    "DEEPL_TIMEOUT_SECONDS",
    "AZURE_TRANSLATOR_KEYS",
    "AZURE_TRANSLATOR_ENDPOINT",
    "AZURE_TRANSLATOR_REGION",
    "AZURE_TIMEOUT_SECONDS",
    "GOOGLE_TRANSLATE_ENABLED",
    "GOOGLE_TRANSLATE_ENDPOINT",
    "GOOGLE_TIMEOUT_SECONDS",
    "BING_TRANSLATE_ENABLED",
    "BING_TRANSLATE_ENDPOINT",
    "BING_TIMEOUT_SECONDS",
    "TRANSLATION_POOL_PROXY",
    "TRANSLATION_POOL_MEMORY",
    "TRANSLATION_POOL_SOURCE",
    "TRANSLATION_POOL_TARGET",
    "TRANSLATION_POOL_CONCURRENCY",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep developer environment variables out of the settings under test."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class FakeTranslator:
    """Scripted translator.

    ``response`` may be a string (success), ``None`` (graceful failure),
    an exception instance (raised), or an async callable producing a result.
    """

    def __init__(self, name: str, key_index: int = 0, response: Any = "ok", log: List[Tuple[str, int]] | None = None):
        self.name = name
        self.key_index = key_index
        self.response = response
        self.log = log if log is not None else []
        self.requests: List[TranslationRequest] = []
        self.closed = False

    async def translate(self, request: TranslationRequest) -> TranslationResult:
        self.log.append((self.name, self.key_index))
        self.requests.append(request)
        response = self.response
        if isinstance(response, BaseException):
            raise response
        if callable(response):
            return await response(request)
        if response is None:
            return TranslationResult.failed(f"{self.name} key {self.key_index} unavailable", self.name)
        return TranslationResult.ok(response, self.name)

    async def close(self) -> None:
        self.closed = True


def make_group(name: str, responses: List[Any], log: List[Tuple[str, int]]) -> ProviderGroup:
    return ProviderGroup(
        name,
        [FakeTranslator(name, index, response, log) for index, response in enumerate(responses)],
    )


class DummyResp:
    def __init__(self, status: int = 200, data: Any = None, text: str = "", raise_on_enter: BaseException | None = None):
        self.status = status
        self._data = data
        self._text = text
        self._raise = raise_on_enter

    async def __aenter__(self):
        if self._raise is not None:
            raise self._raise
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False

    async def json(self, content_type=None):
        if isinstance(self._data, Exception):
            raise self._data
        return self._data

    async def text(self):
        return self._text


class DummySession:
    """Stands in for aiohttp.ClientSession; replays queued responses."""

    def __init__(self, *responses: DummyResp):
        self.responses = list(responses)
        self.calls: List[Tuple[str, str, dict]] = []
        self.closed = False

    def _next(self, method: str, url: str, kwargs: dict) -> DummyResp:
        self.calls.append((method, url, kwargs))
        return self.responses.pop(0)

    def get(self, url, **kwargs):
        return self._next("GET", url, kwargs)

    def post(self, url, **kwargs):
        return self._next("POST", url, kwargs)

    async def close(self):
        self.closed = True


def use_session(monkeypatch, translator, session: DummySession) -> DummySession:
    async def fake_get_session():
        return session

    monkeypatch.setattr(translator, "_get_session", fake_get_session)
    return session


def run(coro):
    return asyncio.run(coro)
