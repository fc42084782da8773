"""Terminal renderer for discovery reports."""

from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from configflow.models.discovery import AggregatedEnvVar, DiscoveryResult
from configflow.renderers.base import (
    BaseRenderer,
    OutputFormat,
    RenderContext,
    require_output_path,
)

CONFIDENCE_STYLES = {
    "high": "green",
    "medium": "yellow",
    "low": "red",
}


class TerminalRenderer(BaseRenderer):
    """Renderer for rich terminal output.

    Prints to its console and returns an empty string; use
    :meth:`render_to_file` or a recording console to capture output.
    """

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console()

    @property
    def format(self) -> OutputFormat:
        return OutputFormat.TERMINAL

    def render(self, data: Any, context: RenderContext) -> str:
        if isinstance(data, DiscoveryResult):
            self._render_discovery(data, context)
        else:
            self._console.print(data)
        return ""

    def render_to_file(self, data: Any, context: RenderContext) -> None:
        """Capture terminal output and write it to ``context.output_path``."""
        path = require_output_path(context)
        recorder = Console(record=True, width=context.width, force_terminal=context.color)
        original_console, self._console = self._console, recorder
        try:
            self.render(data, context)
        finally:
            self._console = original_console

        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(recorder.export_text(styles=context.color), encoding="utf-8")

    def _render_discovery(self, result: DiscoveryResult, context: RenderContext) -> None:
        frameworks = ", ".join(
            f"{fw.name} ({fw.confidence.value})" for fw in result.frameworks
        ) or "none"

        self._console.print()
        self._console.print(
            Panel(
                f"[bold]Files scanned:[/bold] {result.files_scanned}\n"
                f"[bold]Variables:[/bold] {len(result.env_vars)}\n"
                f"[bold]Warnings:[/bold] {len(result.warnings)}\n"
                f"[bold]Frameworks:[/bold] {frameworks}",
                title="Environment Variable Discovery",
            )
        )

        if result.env_vars:
            self._console.print()
            self._console.print(self._variables_table(result.env_vars, context))
        else:
            self._console.print("\n[dim]No environment variables found.[/dim]")

        if result.warnings:
            table = Table(title="Warnings")
            table.add_column("Location", style="cyan")
            table.add_column("Kind")
            table.add_column("Message")
            for warning in result.warnings:
                table.add_row(
                    f"{warning.file_path}:{warning.line_number}",
                    warning.warning_type.value,
                    escape(warning.message),
                )
            self._console.print()
            self._console.print(table)

    def _variables_table(self, env_vars: list[AggregatedEnvVar], context: RenderContext) -> Table:
        table = Table(title="Environment Variables")
        table.add_column("Name", style="bold")
        table.add_column("Type")
        table.add_column("Confidence")
        table.add_column("Locations")
        table.add_column("Default")

        for var in env_vars:
            style = CONFIDENCE_STYLES.get(var.confidence.value, "white")
            if context.all_locations:
                locations = "\n".join(f"{loc.file_path}:{loc.line_number}" for loc in var.locations)
            else:
                first = var.locations[0] if var.locations else None
                locations = f"{first.file_path}:{first.line_number}" if first else ""
                if len(var.locations) > 1:
                    locations += f" (+{len(var.locations) - 1})"
            table.add_row(
                escape(var.name),
                var.inferred_type.value,
                f"[{style}]{var.confidence.value}[/{style}]",
                escape(locations),
                escape(", ".join(var.default_values)) or "-",
            )
        return table
