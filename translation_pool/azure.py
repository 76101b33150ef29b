"""
Azure AI Translator (Text Translation API v3.0).
"""
from __future__ import annotations

from typing import Optional

from .base import BaseTranslator, TranslationRequest
from .exceptions import ProviderError


class AzureTranslator(BaseTranslator):
    """Azure Translator bound to one subscription key."""

    name = "Azure"
    requires_key = True

    DEFAULT_ENDPOINT = "https://api.cognitive.microsofttranslator.com"
    API_VERSION = "3.0"

    # Azure uses BCP 47 tags with a script suffix for Chinese
    LANG_MAP = {
        "zh": "zh-Hans",
        "zh-cn": "zh-Hans",
        "zh-tw": "zh-Hant",
        "no": "nb",
    }

    def __init__(
        self,
        *,
        api_key: str,
        endpoint: str | None = None,
        region: str | None = None,
        key_index: int = 0,
        timeout: float = 10.0,
        proxy: str | None = None,
    ) -> None:
        if not api_key:
            raise ValueError("Azure Translator key is required")

        super().__init__(key_index=key_index, timeout=timeout, proxy=proxy)
        self.api_key = api_key
        self.region = region or None
        self.translate_url = f"{(endpoint or self.DEFAULT_ENDPOINT).rstrip('/')}/translate"

    def _session_headers(self) -> dict[str, str]:
        headers = {
            "Ocp-Apim-Subscription-Key": self.api_key,
            "Content-Type": "application/json",
        }
        if self.region:
            headers["Ocp-Apim-Subscription-Region"] = self.region
        return headers

    def _map_lang(self, lang: str) -> str:
        return self.LANG_MAP.get(lang.lower(), lang)

    def _build_params(self, request: TranslationRequest) -> dict[str, str]:
        params = {"api-version": self.API_VERSION, "to": self._map_lang(request.target_lang)}
        if request.source_lang and request.source_lang.lower() != "auto":
            params["from"] = self._map_lang(request.source_lang)
        return params

    @staticmethod
    def _error_message(data: object) -> Optional[str]:
        if isinstance(data, dict) and isinstance(data.get("error"), dict):
            return data["error"].get("message")
        return None

    async def _translate(self, request: TranslationRequest) -> str:
        session = await self._get_session()
        async with session.post(
            self.translate_url,
            params=self._build_params(request),
            json=[{"Text": request.text}],
            proxy=self.proxy,
        ) as resp:
            if resp.status != 200:
                try:
                    detail = self._error_message(await resp.json(content_type=None))
                except ValueError:
                    detail = None
                if resp.status == 401:
                    message = "Azure Translator: Invalid subscription key or region"
                elif resp.status == 403:
                    message = "Azure Translator: Quota exceeded or access denied"
                elif resp.status == 429:
                    message = "Azure Translator: Too many requests"
                else:
                    message = f"Azure Translator error: HTTP {resp.status}"
                if detail:
                    message = f"{message} ({detail})"
                raise ProviderError(self.name, message, status=resp.status)

            try:
                data = await resp.json(content_type=None)
            except ValueError as exc:
                raise ProviderError(self.name, f"Azure Translator returned invalid JSON: {exc}") from exc

        try:
            return data[0]["translations"][0]["text"]
        except (KeyError, IndexError, TypeError) as exc:
            raise ProviderError(self.name, "Azure Translator returned an unexpected payload") from exc
