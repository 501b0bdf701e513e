"""Feed management commands."""

import asyncio
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from ..config import Config, FeedConfig, save_feeds
from ..ingestion import FeedFetcher
from ..mappers import FeedDocument, default_registry
from ..store import keys
from .common import create_fetcher, create_store, get_config, read_feeds

console = Console()
feeds_app = typer.Typer(help="Manage RSS/Atom feeds")


def _load_or_exit(config: Config) -> List[FeedConfig]:
    feeds = read_feeds(config)
    if not feeds:
        console.print("[yellow]No feeds configured. Run 'newswire init' first.[/yellow]")
        raise typer.Exit(1)
    return feeds


async def _publish_selection(config: Config, selected: List[str]) -> None:
    store = create_store(config.config)
    try:
        await store.set(keys.SELECTED_FEEDS, selected)
    finally:
        await store.close()


def _update_selection(feed_ids: List[str], selected: bool) -> None:
    config = get_config()
    feeds = _load_or_exit(config)

    known = {feed.id for feed in feeds}
    unknown = [feed_id for feed_id in feed_ids if feed_id not in known]
    if unknown:
        console.print(f"[red]Unknown feed id(s): {', '.join(unknown)}[/red]")
        raise typer.Exit(1)

    for feed in feeds:
        if feed.id in feed_ids:
            feed.selected = selected
    save_feeds(feeds, config.feeds_path)

    selection = [feed.id for feed in feeds if feed.selected]
    if config.config.store.backend == "postgres":
        asyncio.run(_publish_selection(config, selection))
    console.print(f"[green]✅ Selected feeds: {', '.join(selection) or '(none)'}[/green]")


@feeds_app.command("list")
def feeds_list() -> None:
    """List all configured feeds."""
    feeds = _load_or_exit(get_config())

    table = Table(title="Configured Feeds")
    table.add_column("Id", style="cyan")
    table.add_column("Name")
    table.add_column("Category", style="magenta")
    table.add_column("Selected", style="yellow")
    table.add_column("URL", style="blue")

    for feed in sorted(feeds, key=lambda f: (f.category, f.name)):
        table.add_row(
            feed.id,
            feed.name,
            feed.category,
            "✓" if feed.selected else "✗",
            feed.url,
        )

    console.print(table)


@feeds_app.command("select")
def feeds_select(
    feed_ids: List[str] = typer.Argument(..., help="Feed ids to select"),
) -> None:
    """Select feeds for polling."""
    _update_selection(feed_ids, True)


@feeds_app.command("deselect")
def feeds_deselect(
    feed_ids: List[str] = typer.Argument(..., help="Feed ids to deselect"),
) -> None:
    """Stop polling feeds."""
    _update_selection(feed_ids, False)


async def _test_feeds(fetcher: FeedFetcher, feeds: List[FeedConfig]) -> None:
    registry = default_registry()
    results = await fetcher.fetch_all([feed.to_feed() for feed in feeds])
    for feed, fetched in zip(feeds, results):
        if not fetched.success:
            console.print(f"[red]❌ {feed.id}: Failed - {fetched.error}[/red]")
            continue
        try:
            document = FeedDocument(fetched.body or b"")
            mapper = registry.resolve(feed.id, document)
            articles = mapper.parse(document, feed.id, feed.logo_url)
        except Exception as e:
            console.print(f"[red]❌ {feed.id}: Parse error - {e}[/red]")
            continue
        with_images = sum(1 for article in articles if article.image_url)
        console.print(
            f"[green]✅ {feed.id}: {len(articles)} articles, {with_images} with images "
            f"({mapper.name} mapper)[/green]"
        )


@feeds_app.command("test")
def feeds_test(
    feed_id: Optional[str] = typer.Argument(None, help="Feed id to test (or test all)"),
) -> None:
    """Fetch and parse feeds, reporting article counts."""
    config = get_config()
    feeds = _load_or_exit(config)

    if feed_id:
        feeds = [feed for feed in feeds if feed.id == feed_id]
        if not feeds:
            console.print(f"[red]Feed '{feed_id}' not found.[/red]")
            raise typer.Exit(1)

    asyncio.run(_test_feeds(create_fetcher(config.config), feeds))
