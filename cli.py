from __future__ import annotations

import asyncio
from pathlib import Path
from typing import List

import typer
from rich.console import Console
from rich.progress import Progress
from rich.table import Table

from translation_pool.builder import TranslatorPoolBuilder
from translation_pool.config import AppSettings, load_settings
from translation_pool.exceptions import ConfigurationError
from translation_pool.router import RoundRobinTranslator
from translation_pool.service import TranslationService
from utils.cache import SessionCache, TranslationMemory
from utils.logging_config import configure_logging

app = typer.Typer(add_completion=False, help="Translate text through a rotating pool of providers")
console = Console()


def _run_async(coro):
    return asyncio.run(coro)


def _load(config: Path | None) -> tuple[AppSettings, RoundRobinTranslator]:
    try:
        settings = load_settings(config)
        router = TranslatorPoolBuilder(settings.translation).build()
    except ConfigurationError as exc:
        console.print(f"[red]Configuration error:[/red] {exc}")
        raise typer.Exit(code=2) from exc
    return settings, router


def _build_service(settings: AppSettings, router: RoundRobinTranslator, use_memory: bool) -> TranslationService:
    memory = TranslationMemory(settings.translation_memory_path) if use_memory else None
    return TranslationService(
        router,
        memory=memory,
        session_cache=SessionCache(),
        concurrency_limit=settings.concurrency_limit,
    )


ConfigOption = typer.Option(None, "--config", "-c", exists=True, readable=True, help="JSON provider configuration")


@app.command(help="Translate one or more texts")
def translate(
    texts: List[str] = typer.Argument(..., help="Texts to translate"),
    target: str | None = typer.Option(None, "--target", "-t", help="Target language code"),
    source: str | None = typer.Option(None, "--source", "-s", help="Source language code (auto-detect if omitted)"),
    config: Path | None = ConfigOption,
    memory: bool = typer.Option(False, "--memory/--no-memory", help="Use the persistent translation memory"),
    log_file: Path | None = typer.Option(None, help="Write a debug log to this file"),
) -> None:
    configure_logging(log_file, level="WARNING")
    settings, router = _load(config)
    service = _build_service(settings, router, memory)
    target_lang = target or settings.default_target_lang
    source_lang = source or settings.default_source_lang

    async def runner() -> List[str]:
        async with router:
            return await service.translate_many(texts=texts, target_lang=target_lang, source_lang=source_lang)

    translations = _run_async(runner())

    table = Table(title=f"Translations ({source_lang or 'auto'} → {target_lang})")
    table.add_column("Source")
    table.add_column("Translation")
    for original, translated in zip(texts, translations):
        table.add_row(original, translated)
    console.print(table)


@app.command("translate-file", help="Translate a UTF-8 text file line by line")
def translate_file(
    input: Path = typer.Argument(..., exists=True, readable=True, dir_okay=False),
    output: Path = typer.Argument(...),
    target: str | None = typer.Option(None, "--target", "-t"),
    source: str | None = typer.Option(None, "--source", "-s"),
    config: Path | None = ConfigOption,
    memory: bool = typer.Option(True, "--memory/--no-memory"),
    log_file: Path | None = typer.Option(None, help="Write a debug log to this file"),
) -> None:
    configure_logging(log_file, level="WARNING")
    settings, router = _load(config)
    service = _build_service(settings, router, memory)
    target_lang = target or settings.default_target_lang
    source_lang = source or settings.default_source_lang
    lines = input.read_text(encoding="utf-8").splitlines()

    def log_callback(message: str) -> None:
        console.log(message)

    async def runner() -> List[str]:
        async with router:
            with Progress(console=console) as progress:
                task_id = progress.add_task("Translating", total=len(lines))

                def progress_callback(done: int, total: int) -> None:
                    progress.update(task_id, completed=done, total=total)

                return await service.translate_many(
                    texts=lines,
                    target_lang=target_lang,
                    source_lang=source_lang,
                    progress_cb=progress_callback,
                    log_cb=log_callback,
                )

    translations = _run_async(runner())
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text("\n".join(translations) + "\n", encoding="utf-8")
    if service.memory is not None:
        service.memory.flush()
    console.print(f"Saved translated file to {output}")


@app.command(help="Show the resolved provider order")
def providers(config: Path | None = ConfigOption) -> None:
    configure_logging(level="ERROR")
    settings, router = _load(config)

    table = Table(title="Translation providers")
    table.add_column("#", justify="right")
    table.add_column("Provider")
    table.add_column("Translators", justify="right")
    table.add_column("Timeout (s)", justify="right")
    for position, group in enumerate(router.groups, start=1):
        provider = settings.translation.provider(group.name)
        table.add_row(str(position), group.name, str(len(group)), str(provider.timeout_seconds))
    console.print(table)


if __name__ == "__main__":
    app()
