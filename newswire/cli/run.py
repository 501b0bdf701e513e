"""Run and poll command implementations."""

import asyncio
from typing import List, Optional

import pendulum
import typer
from rich.console import Console
from rich.table import Table

from ..config import Config
from ..models import Article
from ..pipeline import AggregateResult, FeedPoller, FeedScheduler
from ..store import PostgresStore
from .common import create_fetcher, create_store, get_config, read_feeds, seed_store, setup_logging

console = Console()


async def _run(config: Config) -> None:
    settings = config.config
    store = create_store(settings)
    if isinstance(store, PostgresStore):
        store.start_listening()

    await seed_store(store, read_feeds(config))
    poller = FeedPoller(store, fetcher=create_fetcher(settings))
    scheduler = FeedScheduler(
        store,
        poller,
        default_interval_min=settings.polling.refresh_interval_min,
    )
    try:
        await scheduler.start()
        await asyncio.Event().wait()
    finally:
        await scheduler.stop()
        await store.close()


async def _poll_once(config: Config) -> Optional[AggregateResult]:
    settings = config.config
    store = create_store(settings)
    try:
        await seed_store(store, read_feeds(config))
        poller = FeedPoller(store, fetcher=create_fetcher(settings))
        return await poller.trigger()
    finally:
        await store.close()


def print_articles(articles: List[Article], limit: int) -> None:
    """Print a table of articles, newest first."""
    table = Table(title=f"Articles ({min(limit, len(articles))} of {len(articles)})")
    table.add_column("Published", style="yellow", no_wrap=True)
    table.add_column("Source", style="magenta")
    table.add_column("Title", style="cyan")
    table.add_column("Image", style="green")

    for article in articles[:limit]:
        published = pendulum.from_timestamp(article.published_at / 1000)
        table.add_row(
            published.format("YYYY-MM-DD HH:mm"),
            article.source_id,
            article.title,
            "✓" if article.image_url else "",
        )

    console.print(table)


def run_command() -> None:
    """Poll the selected feeds continuously until interrupted."""
    try:
        config = get_config()
        setup_logging(config)
        asyncio.run(_run(config))
    except KeyboardInterrupt:
        console.print("\n[yellow]Polling stopped by user[/yellow]")
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Configuration error: {e}[/red]")
        raise typer.Exit(1)


def poll_command(
    limit: int = typer.Option(20, "--limit", "-l", help="Number of articles to show"),
) -> None:
    """Run a single poll cycle and show the resulting articles."""
    try:
        config = get_config()
        setup_logging(config)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Configuration error: {e}[/red]")
        raise typer.Exit(1)

    result = asyncio.run(_poll_once(config))
    if result is None:
        console.print("[yellow]Nothing was polled. Check the feed selection and logs.[/yellow]")
        raise typer.Exit(1)

    print_articles(result.articles, limit)
    status = "[red]offline[/red]" if result.is_offline else "[green]online[/green]"
    console.print(
        f"Feeds polled: {result.attempted} • succeeded: {result.succeeded} • "
        f"failed: {result.failed} • status: {status}"
    )
    if result.is_offline:
        raise typer.Exit(1)
