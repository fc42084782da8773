"""Renderer protocol and shared rendering options."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel, Field


class OutputFormat(str, Enum):
    """Report formats the CLI can produce."""

    JSON = "json"
    TERMINAL = "terminal"


class RenderContext(BaseModel):
    """Options shared by every renderer."""

    model_config = {"frozen": True}

    format: OutputFormat = Field(default=OutputFormat.TERMINAL, description="Output format")
    output_path: Path | None = Field(default=None, description="Write here instead of stdout")
    all_locations: bool = Field(
        default=False, description="List every location instead of the first"
    )
    color: bool = Field(default=True, description="Keep ANSI styles (terminal only)")
    width: int = Field(default=120, description="Line width for captured terminal output")
    indent: int = Field(default=2, description="JSON indentation, 0 for one line")


@runtime_checkable
class Renderer(Protocol):
    """Turns a discovery report into output.

    ``render`` returns text for formats that have a string form. The
    terminal renderer prints directly and returns an empty string.
    """

    @property
    def format(self) -> OutputFormat: ...

    def render(self, data: Any, context: RenderContext) -> str: ...

    def render_to_file(self, data: Any, context: RenderContext) -> None: ...


class BaseRenderer:
    """Default ``render_to_file`` on top of ``render``."""

    def render_to_file(self, data: Any, context: RenderContext) -> None:
        """Write the rendered report to ``context.output_path``.

        Raises:
            ValueError: If no output path is set
        """
        path = require_output_path(context)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.render(data, context), encoding="utf-8")

    def render(self, data: Any, context: RenderContext) -> str:
        raise NotImplementedError


def require_output_path(context: RenderContext) -> Path:
    if context.output_path is None:
        raise ValueError("output_path must be set in context for file rendering")
    return context.output_path
