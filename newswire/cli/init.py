"""Init command implementation."""

from pathlib import Path
from typing import List

import typer
from rich.console import Console
from rich.panel import Panel

from ..config import ConfigModel, FeedConfig, save_config, save_feeds
from ..config.loader import DEFAULT_CONFIG_DIR
from ..db import init_database, validate_connection

console = Console()


def create_default_feeds() -> List[FeedConfig]:
    """Create default news feeds."""
    return [
        FeedConfig(
            id="bbc-news",
            name="BBC News",
            url="https://feeds.bbci.co.uk/news/rss.xml",
            category="News",
        ),
        FeedConfig(
            id="cnn",
            name="CNN",
            url="http://rss.cnn.com/rss/edition.rss",
            category="News",
        ),
        FeedConfig(
            id="bloomberg",
            name="Bloomberg Markets",
            url="https://feeds.bloomberg.com/markets/news.rss",
            category="Finance",
        ),
        FeedConfig(
            id="nasa",
            name="NASA",
            url="https://www.nasa.gov/news-release/feed/",
            category="Science",
        ),
        FeedConfig(
            id="variety",
            name="Variety",
            url="https://variety.com/feed/",
            category="Entertainment",
        ),
        FeedConfig(
            id="the-verge",
            name="The Verge",
            url="https://www.theverge.com/rss/index.xml",
            category="Tech",
            selected=False,
        ),
    ]


def init_command(
    config_dir: Path = typer.Option(
        DEFAULT_CONFIG_DIR,
        "--config-dir",
        "-c",
        help="Configuration directory",
    ),
    backend: str = typer.Option("memory", "--backend", "-b", help="Store backend (memory, postgres)"),
    db_host: str = typer.Option("localhost", "--db-host", help="Postgres host"),
    db_port: int = typer.Option(5432, "--db-port", help="Postgres port"),
    db_name: str = typer.Option("newswire", "--db-name", help="Database name"),
    db_user: str = typer.Option("newswire", "--db-user", help="Database user"),
    seed_feeds: bool = typer.Option(
        True,
        "--seed-feeds/--no-seed-feeds",
        help="Seed default news feeds",
    ),
) -> None:
    """Initialize Newswire configuration (and database for the postgres backend)."""
    console.print(Panel.fit("📰 Newswire - Initialization", style="bold blue"))

    if backend not in ("memory", "postgres"):
        console.print(f"[red]Unknown backend '{backend}'. Use 'memory' or 'postgres'.[/red]")
        raise typer.Exit(1)

    config_dir.mkdir(parents=True, exist_ok=True)
    config_path = config_dir / "config.yaml"
    feeds_path = config_dir / "feeds.yaml"

    config = ConfigModel(
        store={"backend": backend},
        postgres={
            "host": db_host,
            "port": db_port,
            "database": db_name,
            "user": db_user,
            "password_env": "NEWSWIRE_DB_PASSWORD",
        },
    )

    save_config(config, config_path)
    console.print(f"✅ Created config: {config_path}")

    if seed_feeds:
        feeds = create_default_feeds()
        save_feeds(feeds, feeds_path)
        console.print(f"✅ Created feeds: {feeds_path} (seeded with {len(feeds)} feeds)")
    else:
        save_feeds([], feeds_path)
        console.print(f"✅ Created feeds: {feeds_path} (empty)")

    if backend == "postgres":
        console.print("\n[bold]Testing database connection...[/bold]")
        if not validate_connection(config.postgres):
            console.print(
                "[red]❌ Database connection failed![/red]\n"
                "Please ensure Postgres is running and credentials are correct.\n"
                "Set the password via environment variable: "
                "[bold]export NEWSWIRE_DB_PASSWORD=your_password[/bold]"
            )
            raise typer.Exit(1)
        console.print("✅ Database connection successful")

        console.print("\n[bold]Initializing database schema...[/bold]")
        try:
            init_database(config.postgres)
            console.print("✅ Database schema initialized")
        except Exception as e:
            console.print(f"[red]❌ Failed to initialize database: {e}[/red]")
            raise typer.Exit(1)

    console.print(
        Panel(
            f"[green]✅ Newswire initialized successfully![/green]\n\n"
            f"Configuration: {config_path}\n"
            f"Feeds: {feeds_path}\n\n"
            f"Next steps:\n"
            f"1. Review feeds: [bold]newswire feeds list[/bold]\n"
            f"2. Poll once: [bold]newswire poll[/bold]\n"
            f"3. Start polling: [bold]newswire run[/bold]",
            style="green",
        )
    )
