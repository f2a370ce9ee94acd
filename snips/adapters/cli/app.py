"""
Main CLI application
"""
import typer
from pathlib import Path
from typing import Optional

from ...core.logging import setup_logging
from .commands import register_commands

app = typer.Typer(
    name="snips",
    add_completion=False,
    help="Upload snips to snips.sh over SSH",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

register_commands(app)


@app.callback()
def main(
    log_level: str = typer.Option(
        "WARNING",
        "--log-level",
        "-l",
        help="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        help="Log file path",
    ),
):
    """
    snips - pipe text to snips.sh

    - upload: upload a file or stdin
    - sign: get a 5 minute signed link to a private snip
    - keygen: create a key to own your snips
    """
    setup_logging(level=log_level, log_file=log_file)


def run():
    """CLI entry point"""
    app()


if __name__ == "__main__":
    run()
