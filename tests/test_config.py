"""Tests for environment and JSON configuration loading."""

import json
from pathlib import Path

import pytest

from translation_pool.config import (
    AppSettings,
    TranslationSettings,
    load_settings,
    parse_bool,
    parse_int,
    parse_list,
)
from translation_pool.exceptions import ConfigurationError


@pytest.mark.parametrize("raw,expected", [("true", True), ("YES", True), ("1", True), ("off", False), ("0", False), (False, False)])
def test_parse_bool(raw, expected):
    assert parse_bool(raw) is expected


def test_parse_bool_rejects_garbage():
    with pytest.raises(ConfigurationError):
        parse_bool("maybe", key="GoogleEnabled")


def test_parse_int_rejects_bool_and_text():
    assert parse_int("15") == 15
    with pytest.raises(ConfigurationError):
        parse_int(True)
    with pytest.raises(ConfigurationError):
        parse_int("ten")


def test_parse_list_accepts_comma_string_and_drops_blanks():
    assert parse_list(" a, b ,,c ") == ["a", "b", "c"]
    assert parse_list(["x", " ", "y"]) == ["x", "y"]
    assert parse_list(None) == []


def test_parse_list_rejects_non_strings():
    with pytest.raises(ConfigurationError):
        parse_list(["ok", 3], key="DeepLApiKeys")
    with pytest.raises(ConfigurationError):
        parse_list(42, key="ProviderOrder")


def test_defaults_without_environment():
    settings = TranslationSettings()

    assert settings.provider_order == ["DeepL", "Azure", "Google", "Bing"]
    assert settings.deepl.api_keys == []
    assert settings.google.enabled is False
    assert settings.bing.timeout_seconds == 10


def test_environment_variables(monkeypatch):
    monkeypatch.setenv("TRANSLATION_PROVIDER_ORDER", "Azure,DeepL")
    monkeypatch.setenv("DEEPL_API_KEYS", "k1, k2")
    monkeypatch.setenv("AZURE_TRANSLATOR_REGION", "westeurope")
    monkeypatch.setenv("BING_TRANSLATE_ENABLED", "yes")
    monkeypatch.setenv("GOOGLE_TIMEOUT_SECONDS", "3")

    settings = TranslationSettings()

    assert settings.provider_order == ["Azure", "DeepL"]
    assert settings.deepl.api_keys == ["k1", "k2"]
    assert settings.azure.region == "westeurope"
    assert settings.bing.enabled is True
    assert settings.google.timeout_seconds == 3


def test_load_settings_without_file_uses_environment(monkeypatch):
    monkeypatch.setenv("TRANSLATION_POOL_TARGET", "cs")
    settings = load_settings(None)
    assert isinstance(settings, AppSettings)
    assert settings.default_target_lang == "cs"


def test_load_settings_from_nested_translation_section(tmp_path: Path):
    path = tmp_path / "appsettings.json"
    path.write_text(json.dumps({
        "Translation": {
            "ProviderOrder": ["Google", "DeepL"],
            "DeepLApiKeys": ["d1", "d2:fx"],
            "DeepLTimeoutSeconds": 5,
            "AzureApiKeys": ["a1"],
            "AzureRegion": "northeurope",
            "AzureEndpoint": "https://example.cognitiveservices.azure.com",
            "GoogleEnabled": True,
            "BingEnabled": "false",
        },
        "DefaultSourceLanguage": "en",
        "DefaultTargetLanguage": "cs",
        "Concurrency": 8,
    }), encoding="utf-8")

    settings = load_settings(path)
    translation = settings.translation

    assert translation.provider_order == ["Google", "DeepL"]
    assert translation.deepl.api_keys == ["d1", "d2:fx"]
    assert translation.deepl.timeout_seconds == 5
    assert translation.azure.region == "northeurope"
    assert translation.azure.endpoint == "https://example.cognitiveservices.azure.com"
    assert translation.google.enabled is True
    assert translation.bing.enabled is False
    assert settings.default_source_lang == "en"
    assert settings.default_target_lang == "cs"
    assert settings.concurrency_limit == 8


def test_load_settings_from_top_level_keys(tmp_path: Path):
    path = tmp_path / "pool.json"
    path.write_text(json.dumps({"BingEnabled": True, "BingTimeoutSeconds": 2}), encoding="utf-8")

    translation = load_settings(path).translation

    assert translation.bing.enabled is True
    assert translation.bing.timeout_seconds == 2


def test_invalid_json_is_a_configuration_error(tmp_path: Path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_settings(path)


def test_wrong_value_type_is_a_configuration_error(tmp_path: Path):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"DeepLTimeoutSeconds": "soon"}), encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_settings(path)


@pytest.mark.parametrize("timeout", [0, -5])
def test_non_positive_timeout_is_a_configuration_error(tmp_path: Path, timeout):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"AzureTimeoutSeconds": timeout}), encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_settings(path)


def test_non_positive_timeout_from_environment(monkeypatch):
    monkeypatch.setenv("GOOGLE_TIMEOUT_SECONDS", "0")
    with pytest.raises(ConfigurationError):
        TranslationSettings()


def test_parse_int_minimum():
    assert parse_int("1", minimum=1) == 1
    with pytest.raises(ConfigurationError):
        parse_int("0", key="Concurrency", minimum=1)


def test_missing_file_is_a_configuration_error(tmp_path: Path):
    with pytest.raises(ConfigurationError):
        load_settings(tmp_path / "missing.json")


def test_unknown_provider_lookup():
    with pytest.raises(ConfigurationError):
        TranslationSettings().provider("Yandex")
