"""
Bing Translator (keyless, web-token based)

Uses the same endpoint as the bing.com/translator page. The page embeds
short-lived anti-abuse tokens which are scraped once and reused until the
service rejects them.
"""
from __future__ import annotations

import asyncio
import re
from dataclasses import dataclass
from typing import Optional

from .base import BaseTranslator, TranslationRequest
from .exceptions import ProviderError


IG_PATTERN = re.compile(r'IG:"([^"]+)"')
IID_PATTERN = re.compile(r'data-iid="([^"]+)"')
ABUSE_PATTERN = re.compile(r'params_AbusePreventionHelper\s*=\s*\[\s*(\d+)\s*,\s*"([^"]+)"')


@dataclass(slots=True)
class BingTokens:
    ig: str
    iid: str
    key: str
    token: str


class BingTranslator(BaseTranslator):
    """Bing Translator through the public ``ttranslatev3`` endpoint."""

    name = "Bing"
    requires_key = False

    DEFAULT_ENDPOINT = "https://www.bing.com"

    LANG_MAP = {
        "auto": "auto-detect",
        "zh": "zh-Hans",
        "zh-cn": "zh-Hans",
        "zh-tw": "zh-Hant",
        "no": "nb",
    }

    def __init__(
        self,
        *,
        endpoint: str | None = None,
        timeout: float = 10.0,
        proxy: str | None = None,
    ) -> None:
        super().__init__(key_index=0, timeout=timeout, proxy=proxy)
        self.endpoint = (endpoint or self.DEFAULT_ENDPOINT).rstrip("/")
        self._tokens: Optional[BingTokens] = None
        self._token_lock = asyncio.Lock()
        self._request_count = 0

    def _session_headers(self) -> dict[str, str]:
        return {
            "Accept": "*/*",
            "Accept-Language": "en-US,en;q=0.9",
            "Origin": self.endpoint,
            "Referer": f"{self.endpoint}/translator",
            "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
        }

    def _map_lang(self, lang: Optional[str]) -> str:
        if not lang:
            return "auto-detect"
        return self.LANG_MAP.get(lang.lower(), lang)

    @staticmethod
    def parse_tokens(html: str) -> BingTokens:
        ig = IG_PATTERN.search(html)
        iid = IID_PATTERN.search(html)
        abuse = ABUSE_PATTERN.search(html)
        if not (ig and iid and abuse):
            raise ProviderError(BingTranslator.name, "Bing Translator: could not read page tokens")
        return BingTokens(ig=ig.group(1), iid=iid.group(1), key=abuse.group(1), token=abuse.group(2))

    async def _get_tokens(self) -> BingTokens:
        async with self._token_lock:
            if self._tokens is None:
                session = await self._get_session()
                async with session.get(f"{self.endpoint}/translator", proxy=self.proxy) as resp:
                    if resp.status != 200:
                        raise ProviderError(self.name, f"Bing Translator page error: HTTP {resp.status}", status=resp.status)
                    html = await resp.text()
                self._tokens = self.parse_tokens(html)
            return self._tokens

    def invalidate_tokens(self) -> None:
        self._tokens = None

    async def _translate(self, request: TranslationRequest) -> str:
        tokens = await self._get_tokens()
        self._request_count += 1
        params = {
            "isVertical": "1",
            "IG": tokens.ig,
            "IID": f"{tokens.iid}.{self._request_count}",
        }
        form = {
            "fromLang": self._map_lang(request.source_lang),
            "to": self._map_lang(request.target_lang),
            "text": request.text,
            "token": tokens.token,
            "key": tokens.key,
        }

        session = await self._get_session()
        async with session.post(f"{self.endpoint}/ttranslatev3", params=params, data=form, proxy=self.proxy) as resp:
            if resp.status == 429:
                raise ProviderError(self.name, "Bing Translator: Too many requests", status=429)

            if resp.status != 200:
                self.invalidate_tokens()
                raise ProviderError(self.name, f"Bing Translator error: HTTP {resp.status}", status=resp.status)

            try:
                data = await resp.json(content_type=None)
            except ValueError as exc:
                self.invalidate_tokens()
                raise ProviderError(self.name, f"Bing Translator returned invalid JSON: {exc}") from exc

        # Rejected tokens come back as HTTP 200 with a statusCode body
        if isinstance(data, dict):
            self.invalidate_tokens()
            status = data.get("statusCode")
            raise ProviderError(self.name, f"Bing Translator rejected the request (status {status})", status=status)

        try:
            return data[0]["translations"][0]["text"]
        except (KeyError, IndexError, TypeError) as exc:
            raise ProviderError(self.name, "Bing Translator returned an unexpected payload") from exc
