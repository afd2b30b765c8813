"""Output format renderers."""

from ubuntu_diag.renderers.base import (
    BaseRenderer,
    OutputFormat,
    RenderContext,
    Renderer,
    status_style,
    status_symbol,
)
from ubuntu_diag.renderers.json import JSONRenderer, render_json
from ubuntu_diag.renderers.markdown import MarkdownRenderer
from ubuntu_diag.renderers.terminal import TerminalRenderer
from ubuntu_diag.renderers.text import TextRenderer, render_text

__all__ = [
    "BaseRenderer",
    "OutputFormat",
    "RenderContext",
    "Renderer",
    "status_style",
    "status_symbol",
    "JSONRenderer",
    "MarkdownRenderer",
    "TerminalRenderer",
    "TextRenderer",
    "render_json",
    "render_text",
    "get_renderer",
]


def get_renderer(format: OutputFormat | str) -> BaseRenderer:
    """Get a renderer for the specified format.

    Args:
        format: Output format (OutputFormat enum or string)

    Returns:
        Appropriate renderer instance

    Raises:
        ValueError: If format is not supported
    """
    if isinstance(format, str):
        format = OutputFormat(format)

    renderers = {
        OutputFormat.TEXT: TextRenderer,
        OutputFormat.JSON: JSONRenderer,
        OutputFormat.MARKDOWN: MarkdownRenderer,
        OutputFormat.TERMINAL: TerminalRenderer,
    }

    renderer_class = renderers.get(format)
    if renderer_class is None:
        raise ValueError(f"Unsupported format: {format}")

    return renderer_class()
