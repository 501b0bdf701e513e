"""Cache inspection and refresh interval commands."""

import asyncio
from typing import Any, Dict, List

import pendulum
import typer
from pydantic import ValidationError
from rich.console import Console

from ..config import MAX_REFRESH_INTERVAL_MIN, MIN_REFRESH_INTERVAL_MIN, save_config
from ..models import Article, EngineStatus
from ..store import keys
from .common import create_store, get_config
from .run import print_articles

console = Console()


async def _read_cache(config) -> Dict[str, Any]:
    store = create_store(config)
    try:
        return {
            "articles": await store.get(keys.CACHED_ARTICLES, []),
            "status": EngineStatus(
                last_updated_at=await store.get(keys.LAST_UPDATED_AT),
                is_offline=bool(await store.get(keys.IS_OFFLINE, False)),
            ),
        }
    finally:
        await store.close()


async def _write_interval(config, minutes: int) -> None:
    store = create_store(config)
    try:
        await store.set(keys.REFRESH_INTERVAL_MIN, minutes)
    finally:
        await store.close()


def articles_command(
    limit: int = typer.Option(20, "--limit", "-l", help="Number of articles to show"),
) -> None:
    """Show the cached articles and engine status."""
    config = get_config()
    if config.config.store.backend != "postgres":
        console.print("[yellow]The memory backend keeps no cache between runs. Use 'newswire poll'.[/yellow]")
        raise typer.Exit(1)

    cache = asyncio.run(_read_cache(config.config))
    articles: List[Article] = []
    for raw in cache["articles"] or []:
        try:
            articles.append(Article.model_validate(raw))
        except ValidationError as e:
            console.print(f"[yellow]Skipping invalid cached article: {e}[/yellow]")

    print_articles(articles, limit)

    status: EngineStatus = cache["status"]
    if status.last_updated_at is None:
        console.print("Last updated: [dim]never[/dim]")
    else:
        updated = pendulum.from_timestamp(status.last_updated_at / 1000)
        console.print(f"Last updated: {updated.to_datetime_string()} UTC ({updated.diff_for_humans()})")
    console.print("Status: " + ("[red]offline[/red]" if status.is_offline else "[green]online[/green]"))


def interval_command(
    minutes: int = typer.Argument(
        ...,
        help="Refresh interval in minutes",
        min=MIN_REFRESH_INTERVAL_MIN,
        max=MAX_REFRESH_INTERVAL_MIN,
    ),
) -> None:
    """Set the feed refresh interval."""
    config = get_config()
    settings = config.config

    settings.polling.refresh_interval_min = minutes
    save_config(settings, config.config_path)

    if settings.store.backend == "postgres":
        asyncio.run(_write_interval(settings, minutes))
        console.print(f"[green]✅ Refresh interval set to {minutes} minutes (running pollers updated)[/green]")
    else:
        console.print(f"[green]✅ Refresh interval set to {minutes} minutes (applies on next start)[/green]")
