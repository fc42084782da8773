"""Main CLI entry point for configflow."""

import typer
from rich.console import Console

from configflow.cli import discover

app = typer.Typer(
    name="configflow",
    help="Discover the environment variables a codebase reads.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()

app.command(name="discover")(discover.discover_cmd)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-essential output"),
) -> None:
    """
    configflow: find every environment variable your code depends on.

    - [bold]discover[/bold]: Scan a source tree and report variables, types and locations
    """
    from configflow.utils.logging import configure_logging

    if verbose:
        configure_logging(level="DEBUG")
    elif quiet:
        configure_logging(level="ERROR")
    else:
        configure_logging(level="WARNING")


@app.command()
def version() -> None:
    """Show the configflow version."""
    from configflow import __version__

    console.print(f"configflow version {__version__}")


if __name__ == "__main__":
    app()
