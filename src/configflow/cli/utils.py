"""Shared utilities for CLI commands."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from configflow.utils.config import ConfigFlowConfig, load_config
from configflow.utils.errors import ConfigFlowError

# Shared console instance
console = Console()


def load_cli_config(config_path: Path | None) -> ConfigFlowConfig:
    """Load configuration, exiting with a message if it is invalid."""
    try:
        return load_config(config_path)
    except ConfigFlowError as e:
        print_error(e)
        raise typer.Exit(2)


def print_error(error: ConfigFlowError) -> None:
    """Print an error with its code."""
    console.print(f"[red]Error:[/red] {escape(str(error.to_error_record()))}")
