"""
Translation pool

Routes translation requests across several providers with key rotation,
provider alternation and failover.

Supported providers:
- DeepL API (one translator per key)
- Azure AI Translator (one translator per key)
- Google Translate (keyless)
- Bing Translator (keyless)
"""
from .base import BaseTranslator, TranslationRequest, TranslationResult
from .exceptions import ConfigurationError, ProviderError, TranslationPoolError
from .deepl_api import DeepLAPITranslator
from .azure import AzureTranslator
from .google import GoogleTranslator
from .bing import BingTranslator
from .group import ProviderGroup, RotationCursor
from .router import ROUTER_PROVIDER, RoundRobinTranslator
from .builder import TranslatorPoolBuilder, build_router, get_available_providers, AVAILABLE_PROVIDERS
from .service import TranslationService

__all__ = [
    "BaseTranslator",
    "TranslationRequest",
    "TranslationResult",
    "ConfigurationError",
    "ProviderError",
    "TranslationPoolError",
    "DeepLAPITranslator",
    "AzureTranslator",
    "GoogleTranslator",
    "BingTranslator",
    "ProviderGroup",
    "RotationCursor",
    "ROUTER_PROVIDER",
    "RoundRobinTranslator",
    "TranslatorPoolBuilder",
    "build_router",
    "get_available_providers",
    "AVAILABLE_PROVIDERS",
    "TranslationService",
]
