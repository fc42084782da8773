"""CLI command for environment variable discovery."""

from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape

from configflow.cli.utils import console, load_cli_config, print_error
from configflow.renderers import OutputFormat, RenderContext, get_renderer
from configflow.renderers.terminal import TerminalRenderer
from configflow.utils.errors import ConfigFlowError


def discover_cmd(
    root: Path = typer.Argument(
        Path("."),
        help="Project root to scan",
        exists=True,
        file_okay=False,
        dir_okay=True,
    ),
    format: Optional[str] = typer.Option(
        None,
        "--format",
        "-f",
        help="Output format (terminal, json)",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file path",
    ),
    no_frameworks: bool = typer.Option(
        False,
        "--no-frameworks",
        help="Skip framework detection and framework queries",
    ),
    max_depth: Optional[int] = typer.Option(
        None,
        "--max-depth",
        help="Maximum directory depth below the root",
        min=0,
    ),
    follow_symlinks: bool = typer.Option(
        False,
        "--follow-symlinks",
        help="Follow symbolic links while scanning",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to a configflow config file",
    ),
    show_all: bool = typer.Option(
        False,
        "--all-locations",
        help="List every location in terminal output",
    ),
) -> None:
    """
    Discover environment variables used in a source tree.

    Parses JavaScript/TypeScript, Python, Ruby, Java and Go files, infers a
    type for every variable and reports where each one is read.

    Example:
        configflow discover ./services/api --format json -o env.json
    """
    from configflow.core.coordinator import DiscoveryCoordinator

    settings = load_cli_config(config)
    scan = settings.scan
    if max_depth is not None:
        scan = scan.model_copy(update={"max_depth": max_depth})
    if follow_symlinks:
        scan = scan.model_copy(update={"follow_symlinks": True})

    try:
        output_format = OutputFormat(format or settings.output.default_format)
    except ValueError:
        console.print(f"[red]Error:[/red] Unsupported format: {escape(format or '')}")
        raise typer.Exit(2)

    coordinator = DiscoveryCoordinator(
        root,
        scan_options=scan.to_scan_options(),
        max_file_size=scan.max_file_size,
        enable_frameworks=not no_frameworks,
        disabled_frameworks=settings.disabled_frameworks,
    )

    try:
        with console.status("Discovering environment variables..."):
            result = coordinator.discover()
    except ConfigFlowError as e:
        print_error(e)
        raise typer.Exit(1)

    context = RenderContext(
        format=output_format,
        output_path=output,
        all_locations=show_all,
        color=settings.output.color,
    )
    renderer = get_renderer(output_format)
    if isinstance(renderer, TerminalRenderer):
        renderer = TerminalRenderer(console)

    if output:
        renderer.render_to_file(result, context)
        console.print(f"Report written to {escape(str(output))}")
    elif output_format == OutputFormat.JSON:
        # Plain print keeps the JSON free of console markup and wrapping
        typer.echo(renderer.render(result, context))
    else:
        renderer.render(result, context)
