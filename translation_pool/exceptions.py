"""
Exceptions for the translation pool.
"""
from __future__ import annotations


class TranslationPoolError(Exception):
    """Base exception for the translation pool."""
    pass


class ConfigurationError(TranslationPoolError):
    """Raised at startup when the provider configuration is unusable."""
    pass


class ProviderError(TranslationPoolError):
    """Raised inside a translator when its provider rejects a request."""

    def __init__(self, provider: str, message: str, *, status: int | None = None) -> None:
        super().__init__(message)
        self.provider = provider
        self.status = status
