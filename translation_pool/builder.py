"""
Translator Pool Builder

Turns provider settings into ordered provider groups and the router over them.
Supports: DeepL API, Azure Translator (keyed), Google, Bing (keyless)
"""
from __future__ import annotations

from typing import Callable, Dict, List, Optional

from loguru import logger

from .azure import AzureTranslator
from .base import BaseTranslator
from .bing import BingTranslator
from .config import KNOWN_PROVIDERS, SETTINGS, ProviderSettings, TranslationSettings
from .deepl_api import DeepLAPITranslator
from .exceptions import ConfigurationError
from .google import GoogleTranslator
from .group import ProviderGroup
from .router import RoundRobinTranslator


# Available translation providers
AVAILABLE_PROVIDERS = {
    "DeepL": "DeepL API (key per translator)",
    "Azure": "Azure AI Translator (key per translator)",
    "Google": "Google Translate (keyless)",
    "Bing": "Bing Translator (keyless)",
}


def get_available_providers() -> dict[str, str]:
    """Get available translation providers with display names."""
    return AVAILABLE_PROVIDERS.copy()


def _build_deepl(provider: ProviderSettings, proxy: Optional[str]) -> List[BaseTranslator]:
    return [
        DeepLAPITranslator(
            api_key=key,
            api_url=provider.endpoint,
            key_index=index,
            timeout=provider.timeout_seconds,
            proxy=proxy,
        )
        for index, key in enumerate(provider.api_keys)
    ]


def _build_azure(provider: ProviderSettings, proxy: Optional[str]) -> List[BaseTranslator]:
    return [
        AzureTranslator(
            api_key=key,
            endpoint=provider.endpoint,
            region=provider.region,
            key_index=index,
            timeout=provider.timeout_seconds,
            proxy=proxy,
        )
        for index, key in enumerate(provider.api_keys)
    ]


def _build_google(provider: ProviderSettings, proxy: Optional[str]) -> List[BaseTranslator]:
    return [GoogleTranslator(endpoint=provider.endpoint, timeout=provider.timeout_seconds, proxy=proxy)]


def _build_bing(provider: ProviderSettings, proxy: Optional[str]) -> List[BaseTranslator]:
    return [BingTranslator(endpoint=provider.endpoint, timeout=provider.timeout_seconds, proxy=proxy)]


ProviderFactory = Callable[[ProviderSettings, Optional[str]], List[BaseTranslator]]

PROVIDER_FACTORIES: Dict[str, ProviderFactory] = {
    "DeepL": _build_deepl,
    "Azure": _build_azure,
    "Google": _build_google,
    "Bing": _build_bing,
}

PROVIDER_CLASSES: Dict[str, type[BaseTranslator]] = {
    "DeepL": DeepLAPITranslator,
    "Azure": AzureTranslator,
    "Google": GoogleTranslator,
    "Bing": BingTranslator,
}


def resolve_provider_order(order: List[str]) -> List[str]:
    """Normalise configured names to canonical provider names.

    Raises:
        ConfigurationError: on blank, unknown or duplicate names
    """
    canonical = {name.lower(): name for name in KNOWN_PROVIDERS}
    resolved: List[str] = []
    for raw in order:
        name = (raw or "").strip()
        if not name:
            raise ConfigurationError("ProviderOrder contains a blank provider name")
        match = canonical.get(name.lower())
        if match is None:
            raise ConfigurationError(
                f"Unknown provider {raw!r} in ProviderOrder (known: {', '.join(KNOWN_PROVIDERS)})"
            )
        if match in resolved:
            raise ConfigurationError(f"Provider {match!r} is listed twice in ProviderOrder")
        resolved.append(match)
    return resolved


class TranslatorPoolBuilder:
    """Builds provider groups from settings. Performs no network calls."""

    def __init__(self, settings: TranslationSettings | None = None) -> None:
        self.settings = settings or SETTINGS.translation

    def _is_enabled(self, name: str, provider: ProviderSettings) -> bool:
        if PROVIDER_CLASSES[name].requires_key:
            return bool(provider.api_keys)
        return provider.enabled

    def _build_group(self, name: str) -> Optional[ProviderGroup]:
        provider = self.settings.provider(name)
        if not self._is_enabled(name, provider):
            return None

        if len(set(provider.api_keys)) != len(provider.api_keys):
            raise ConfigurationError(f"{name} has duplicate API keys configured")

        translators = PROVIDER_FACTORIES[name](provider, self.settings.proxy_url)
        logger.debug("Built provider group {} with {} translator(s)", name, len(translators))
        return ProviderGroup(name, translators)

    def build_groups(self) -> List[ProviderGroup]:
        """Build enabled provider groups in ``ProviderOrder`` order.

        Ordered providers that are not configured are skipped with a warning;
        configured providers missing from the order are appended.

        Raises:
            ConfigurationError: if the configuration is invalid or no provider is usable
        """
        order = resolve_provider_order(self.settings.provider_order)

        built: Dict[str, ProviderGroup] = {}
        for name in KNOWN_PROVIDERS:
            group = self._build_group(name)
            if group is not None:
                built[name] = group

        groups: List[ProviderGroup] = []
        for name in order:
            group = built.pop(name, None)
            if group is None:
                logger.warning("Provider {} is listed in ProviderOrder but not configured; skipping", name)
                continue
            groups.append(group)
        groups.extend(built.values())

        if not groups:
            raise ConfigurationError(
                "No translation provider is configured: set API keys for DeepL/Azure or enable Google/Bing"
            )
        logger.info("Translation pool order: {}", ", ".join(group.name for group in groups))
        return groups

    def build(self) -> RoundRobinTranslator:
        return RoundRobinTranslator(self.build_groups())


def build_router(settings: TranslationSettings | None = None) -> RoundRobinTranslator:
    return TranslatorPoolBuilder(settings).build()
