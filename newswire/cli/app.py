"""Main CLI application."""

import typer
from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()

from .articles import articles_command, interval_command
from .feeds import feeds_app
from .init import init_command
from .run import poll_command, run_command

app = typer.Typer(
    name="newswire",
    help="Newswire - RSS/Atom feed poller and article cache",
    no_args_is_help=True,
)

# Register commands
app.command("init")(init_command)
app.command("run")(run_command)
app.command("poll")(poll_command)
app.command("articles")(articles_command)
app.command("interval")(interval_command)
app.add_typer(feeds_app, name="feeds", help="Manage RSS/Atom feeds")


if __name__ == "__main__":
    app()
