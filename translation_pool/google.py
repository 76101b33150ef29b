"""
Keyless Google Translator using the public ``gtx`` web endpoint.
"""
from __future__ import annotations

from .base import BaseTranslator, TranslationRequest
from .exceptions import ProviderError


class GoogleTranslator(BaseTranslator):
    """Google Translate through the free ``translate_a/single`` endpoint.

    No credential is needed, so a pool holds exactly one instance.
    """

    name = "Google"
    requires_key = False

    DEFAULT_ENDPOINT = "https://translate.googleapis.com/translate_a/single"

    def __init__(
        self,
        *,
        endpoint: str | None = None,
        timeout: float = 10.0,
        proxy: str | None = None,
    ) -> None:
        super().__init__(key_index=0, timeout=timeout, proxy=proxy)
        self.endpoint = endpoint or self.DEFAULT_ENDPOINT

    def _session_headers(self) -> dict[str, str]:
        return {
            "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
        }

    def _build_params(self, request: TranslationRequest) -> dict[str, str]:
        return {
            "client": "gtx",
            "sl": request.source_lang or "auto",
            "tl": request.target_lang,
            "dt": "t",
            "q": request.text,
        }

    async def _translate(self, request: TranslationRequest) -> str:
        session = await self._get_session()
        async with session.get(self.endpoint, params=self._build_params(request), proxy=self.proxy) as resp:
            if resp.status == 429:
                raise ProviderError(self.name, "Google Translate: Too many requests", status=429)

            if resp.status != 200:
                raise ProviderError(self.name, f"Google Translate error: HTTP {resp.status}", status=resp.status)

            try:
                data = await resp.json(content_type=None)
            except ValueError as exc:
                raise ProviderError(self.name, f"Google Translate returned invalid JSON: {exc}") from exc

        segments = data[0] if isinstance(data, list) and data else None
        if not segments:
            raise ProviderError(self.name, "Google Translate returned no segments")
        try:
            return "".join(part[0] for part in segments if part and part[0])
        except (KeyError, IndexError, TypeError) as exc:
            raise ProviderError(self.name, f"Google Translate returned an unexpected payload: {exc!r}") from exc
