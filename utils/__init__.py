from .cache import TranslationMemory, SessionCache, make_cache_key
from .text import deduplicate_texts, restore_padding
from .logging_config import configure_logging

__all__ = [
    "TranslationMemory",
    "SessionCache",
    "make_cache_key",
    "deduplicate_texts",
    "restore_padding",
    "configure_logging",
]
