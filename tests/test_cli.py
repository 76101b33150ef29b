"""Tests for the typer command line interface."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

import cli
from translation_pool.builder import TranslatorPoolBuilder
from translation_pool.router import RoundRobinTranslator

from conftest import make_group


runner = CliRunner()


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "appsettings.json"
    path.write_text(json.dumps({
        "Translation": {
            "ProviderOrder": ["Google", "DeepL"],
            "DeepLApiKeys": ["key-one", "key-two"],
            "DeepLTimeoutSeconds": 12,
            "GoogleEnabled": True,
        },
        "DefaultTargetLanguage": "cs",
    }), encoding="utf-8")
    return path


@pytest.fixture
def fake_router(monkeypatch):
    log = []
    router = RoundRobinTranslator([make_group("DeepL", ["Ahoj světe"], log)])
    monkeypatch.setattr(TranslatorPoolBuilder, "build", lambda self: router)
    return log


def test_providers_lists_resolved_order(config_file: Path):
    result = runner.invoke(cli.app, ["providers", "--config", str(config_file)])

    assert result.exit_code == 0, result.output
    assert "Google" in result.output
    assert "DeepL" in result.output
    assert "12" in result.output
    assert "key-one" not in result.output


def test_providers_reports_configuration_errors(tmp_path: Path):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"ProviderOrder": ["Yandex"], "GoogleEnabled": True}), encoding="utf-8")

    result = runner.invoke(cli.app, ["providers", "--config", str(path)])

    assert result.exit_code == 2
    assert "Configuration error" in result.output


def test_providers_without_any_provider_fails(tmp_path: Path):
    path = tmp_path / "empty.json"
    path.write_text("{}", encoding="utf-8")

    result = runner.invoke(cli.app, ["providers", "--config", str(path)])

    assert result.exit_code == 2


def test_translate_prints_translations(config_file: Path, fake_router):
    result = runner.invoke(cli.app, ["translate", "Hello world", "--config", str(config_file)])

    assert result.exit_code == 0, result.output
    assert "Ahoj světe" in result.output
    assert fake_router == [("DeepL", 0)]


def test_translate_file_writes_output(tmp_path: Path, config_file: Path, fake_router):
    source = tmp_path / "issue.txt"
    source.write_text("Hello world\n\nHello world\n", encoding="utf-8")
    target = tmp_path / "out" / "issue.cs.txt"

    result = runner.invoke(cli.app, [
        "translate-file", str(source), str(target), "--config", str(config_file), "--no-memory",
    ])

    assert result.exit_code == 0, result.output
    assert target.read_text(encoding="utf-8") == "Ahoj světe\n\nAhoj světe\n"
    assert fake_router == [("DeepL", 0)]
