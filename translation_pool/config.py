from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping
import json
import os

from .exceptions import ConfigurationError


STORAGE_DIR = Path.home() / ".translation-pool"
DEFAULT_MEMORY_PATH = STORAGE_DIR / "translation_memory.json"

KNOWN_PROVIDERS = ("DeepL", "Azure", "Google", "Bing")
DEFAULT_TIMEOUT_SECONDS = 10

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


def parse_bool(value: Any, *, key: str = "value") -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in _TRUE | _FALSE:
        return value.strip().lower() in _TRUE
    raise ConfigurationError(f"{key} must be a boolean, got {value!r}")


def parse_int(value: Any, *, key: str = "value", minimum: int | None = None) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"{key} must be an integer, got {value!r}")
    try:
        number = int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"{key} must be an integer, got {value!r}") from exc
    if minimum is not None and number < minimum:
        raise ConfigurationError(f"{key} must be at least {minimum}, got {number}")
    return number


def parse_list(value: Any, *, key: str = "value") -> list[str]:
    """Accept a JSON list or a comma separated string; blank entries are dropped."""
    if value is None:
        return []
    if isinstance(value, str):
        items = value.split(",")
    elif isinstance(value, (list, tuple)):
        items = value
    else:
        raise ConfigurationError(f"{key} must be a list of strings, got {value!r}")
    result = []
    for item in items:
        if not isinstance(item, str):
            raise ConfigurationError(f"{key} must contain only strings, got {item!r}")
        if item.strip():
            result.append(item.strip())
    return result


def _env_list(name: str, default: str = "") -> list[str]:
    return parse_list(os.getenv(name, default), key=name)


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    return default if raw is None else parse_int(raw, key=name, minimum=1)


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    return default if raw is None else parse_bool(raw, key=name)


@dataclass(slots=True)
class ProviderSettings:
    api_keys: list[str] = field(default_factory=list)
    enabled: bool = False
    timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS
    endpoint: str | None = None
    region: str | None = None


@dataclass(slots=True)
class TranslationSettings:
    provider_order: list[str] = field(
        default_factory=lambda: _env_list("TRANSLATION_PROVIDER_ORDER", ",".join(KNOWN_PROVIDERS))
    )
    deepl: ProviderSettings = field(default_factory=lambda: ProviderSettings(
        api_keys=_env_list("DEEPL_API_KEYS"),
        timeout_seconds=_env_int("DEEPL_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS),
        endpoint=os.getenv("DEEPL_ENDPOINT"),
    ))
    azure: ProviderSettings = field(default_factory=lambda: ProviderSettings(
        api_keys=_env_list("AZURE_TRANSLATOR_KEYS"),
        timeout_seconds=_env_int("AZURE_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS),
        endpoint=os.getenv("AZURE_TRANSLATOR_ENDPOINT"),
        region=os.getenv("AZURE_TRANSLATOR_REGION"),
    ))
    google: ProviderSettings = field(default_factory=lambda: ProviderSettings(
        enabled=_env_bool("GOOGLE_TRANSLATE_ENABLED"),
        timeout_seconds=_env_int("GOOGLE_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS),
        endpoint=os.getenv("GOOGLE_TRANSLATE_ENDPOINT"),
    ))
    bing: ProviderSettings = field(default_factory=lambda: ProviderSettings(
        enabled=_env_bool("BING_TRANSLATE_ENABLED"),
        timeout_seconds=_env_int("BING_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS),
        endpoint=os.getenv("BING_TRANSLATE_ENDPOINT"),
    ))
    proxy_url: str | None = field(default_factory=lambda: os.getenv("TRANSLATION_POOL_PROXY"))

    def provider(self, name: str) -> ProviderSettings:
        try:
            return getattr(self, name.lower())
        except AttributeError as exc:
            raise ConfigurationError(f"Unknown translation provider: {name!r}") from exc

    def apply_mapping(self, data: Mapping[str, Any]) -> None:
        """Overlay ``<Provider><Option>`` keys, e.g. ``DeepLApiKeys`` or ``BingEnabled``."""
        if "ProviderOrder" in data:
            self.provider_order = parse_list(data["ProviderOrder"], key="ProviderOrder")
        for name in KNOWN_PROVIDERS:
            provider = self.provider(name)
            if f"{name}ApiKeys" in data:
                provider.api_keys = parse_list(data[f"{name}ApiKeys"], key=f"{name}ApiKeys")
            if f"{name}Enabled" in data:
                provider.enabled = parse_bool(data[f"{name}Enabled"], key=f"{name}Enabled")
            if f"{name}TimeoutSeconds" in data:
                provider.timeout_seconds = parse_int(data[f"{name}TimeoutSeconds"], key=f"{name}TimeoutSeconds", minimum=1)
            if f"{name}Endpoint" in data:
                provider.endpoint = data[f"{name}Endpoint"] or None
            if f"{name}Region" in data:
                provider.region = data[f"{name}Region"] or None
        if "Proxy" in data:
            self.proxy_url = data["Proxy"] or None


@dataclass(slots=True)
class AppSettings:
    translation: TranslationSettings = field(default_factory=TranslationSettings)
    translation_memory_path: Path = field(default_factory=lambda: Path(os.getenv("TRANSLATION_POOL_MEMORY", DEFAULT_MEMORY_PATH)))
    default_source_lang: str | None = field(default_factory=lambda: os.getenv("TRANSLATION_POOL_SOURCE") or None)
    default_target_lang: str = field(default_factory=lambda: os.getenv("TRANSLATION_POOL_TARGET", "en"))
    concurrency_limit: int = field(default_factory=lambda: _env_int("TRANSLATION_POOL_CONCURRENCY", 4))


def load_settings(path: Path | None = None) -> AppSettings:
    """Build settings from the environment, then overlay a JSON config file.

    The file may hold the provider keys at top level or under ``"Translation"``.
    """
    settings = AppSettings()
    if path is None:
        return settings

    try:
        with Path(path).open("r", encoding="utf-8") as handle:
            data = json.load(handle)
    except OSError as exc:
        raise ConfigurationError(f"Cannot read config file {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"Config file {path} is not valid JSON: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a JSON object")
    section = data.get("Translation", data)
    if not isinstance(section, dict):
        raise ConfigurationError("'Translation' must be a JSON object")

    settings.translation.apply_mapping(section)
    if "MemoryPath" in data:
        settings.translation_memory_path = Path(data["MemoryPath"])
    if "DefaultSourceLanguage" in data:
        settings.default_source_lang = data["DefaultSourceLanguage"] or None
    if "DefaultTargetLanguage" in data:
        settings.default_target_lang = data["DefaultTargetLanguage"]
    if "Concurrency" in data:
        settings.concurrency_limit = parse_int(data["Concurrency"], key="Concurrency", minimum=1)
    return settings


SETTINGS = AppSettings()
