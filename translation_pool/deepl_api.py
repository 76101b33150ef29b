"""
DeepL API Translator

Official DeepL API translator supporting both Free and Pro plans.
"""
from __future__ import annotations

from typing import Optional

from .base import BaseTranslator, TranslationRequest
from .exceptions import ProviderError


class DeepLAPITranslator(BaseTranslator):
    """DeepL API Translator bound to one authentication key.

    Keys ending in ``:fx`` belong to the Free plan and are sent to the
    free endpoint unless an explicit endpoint is configured.
    """

    name = "DeepL"
    requires_key = True

    # API URLs
    PRO_API_URL = "https://api.deepl.com/v2/translate"
    FREE_API_URL = "https://api-free.deepl.com/v2/translate"

    # Target language codes that differ from a plain upper-casing
    LANG_MAP = {
        "en": "EN-US",
        "pt": "PT-PT",
        "zh": "ZH-HANS",
        "nb": "NB",
        "no": "NB",
    }

    def __init__(
        self,
        *,
        api_key: str,
        api_url: str | None = None,
        key_index: int = 0,
        timeout: float = 10.0,
        proxy: str | None = None,
    ) -> None:
        if not api_key:
            raise ValueError("DeepL API key is required")

        super().__init__(key_index=key_index, timeout=timeout, proxy=proxy)
        self.api_key = api_key

        if api_url:
            self.api_url = api_url
        elif api_key.endswith(":fx"):
            self.api_url = self.FREE_API_URL
        else:
            self.api_url = self.PRO_API_URL

    def _session_headers(self) -> dict[str, str]:
        return {
            "Authorization": f"DeepL-Auth-Key {self.api_key}",
            "Content-Type": "application/json",
        }

    def _map_target(self, lang: str) -> str:
        return self.LANG_MAP.get(lang.lower(), lang.upper())

    @staticmethod
    def _map_source(lang: Optional[str]) -> Optional[str]:
        # DeepL only accepts the base language for the source, e.g. EN not EN-GB
        if not lang or lang.lower() == "auto":
            return None
        return lang.split("-")[0].upper()

    async def _translate(self, request: TranslationRequest) -> str:
        payload: dict = {
            "text": [request.text],
            "target_lang": self._map_target(request.target_lang),
        }
        source_lang = self._map_source(request.source_lang)
        if source_lang:
            payload["source_lang"] = source_lang

        session = await self._get_session()
        async with session.post(self.api_url, json=payload, proxy=self.proxy) as resp:
            if resp.status == 403:
                raise ProviderError(self.name, "DeepL API: Invalid API key or insufficient permissions", status=403)

            if resp.status == 456:
                raise ProviderError(self.name, "DeepL API: Quota exceeded", status=456)

            if resp.status == 429:
                raise ProviderError(self.name, "DeepL API: Too many requests", status=429)

            if resp.status != 200:
                text = await resp.text()
                raise ProviderError(self.name, f"DeepL API error: HTTP {resp.status} - {text[:200]}", status=resp.status)

            try:
                data = await resp.json(content_type=None)
            except ValueError as exc:
                raise ProviderError(self.name, f"DeepL API returned invalid JSON: {exc}") from exc

        translations = data.get("translations") if isinstance(data, dict) else None
        if not translations:
            raise ProviderError(self.name, "DeepL API returned no translations")
        try:
            return translations[0]["text"]
        except (KeyError, IndexError, TypeError) as exc:
            raise ProviderError(self.name, f"DeepL API returned an unexpected payload: {exc!r}") from exc
