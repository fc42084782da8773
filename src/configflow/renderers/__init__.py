"""Report renderers, looked up by output format."""

from configflow.renderers.base import BaseRenderer, OutputFormat, RenderContext, Renderer
from configflow.renderers.json import JSONRenderer, summarize
from configflow.renderers.terminal import TerminalRenderer

RENDERERS: dict[OutputFormat, type[BaseRenderer]] = {
    OutputFormat.JSON: JSONRenderer,
    OutputFormat.TERMINAL: TerminalRenderer,
}


def get_renderer(format: OutputFormat | str) -> BaseRenderer:
    """Instantiate the renderer registered for ``format``.

    Raises:
        ValueError: If the format name is unknown
    """
    return RENDERERS[OutputFormat(format)]()


__all__ = [
    "RENDERERS",
    "BaseRenderer",
    "JSONRenderer",
    "OutputFormat",
    "RenderContext",
    "Renderer",
    "TerminalRenderer",
    "get_renderer",
    "summarize",
]
