"""Base renderer protocol and types."""

from enum import Enum
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel, Field

from ubuntu_diag.models.common import DiagnosticStatus


class OutputFormat(str, Enum):
    """Supported output formats."""

    TEXT = "text"
    JSON = "json"
    MARKDOWN = "markdown"
    TERMINAL = "terminal"


class RenderContext(BaseModel):
    """Context for rendering operations."""

    model_config = {"frozen": True}

    format: OutputFormat = Field(default=OutputFormat.TEXT, description="Output format")
    output_path: Path | None = Field(default=None, description="Output file path")
    color: bool = Field(default=True, description="Enable color output (terminal only)")
    indent: int = Field(default=2, description="JSON indentation")


def status_symbol(status: DiagnosticStatus) -> str:
    """Get the display symbol for a status.

    This mapping is for presentation only.
    """
    if status is DiagnosticStatus.PASS:
        return "✓"
    if status is DiagnosticStatus.WARN:
        return "⚠"
    if status is DiagnosticStatus.FAIL:
        return "✗"
    if status is DiagnosticStatus.UNKNOWN:
        return "?"
    raise ValueError(f"Unhandled status: {status!r}")


def status_style(status: DiagnosticStatus) -> str:
    """Get the Rich style for a status."""
    styles = {
        DiagnosticStatus.PASS: "green",
        DiagnosticStatus.WARN: "yellow",
        DiagnosticStatus.FAIL: "red",
        DiagnosticStatus.UNKNOWN: "dim",
    }
    return styles[status]


@runtime_checkable
class Renderer(Protocol):
    """Protocol for output renderers.

    Renderers convert a DiagnosticReport, or one of its sections, into
    human-readable or machine-readable output. They must be pure: the
    same input always renders to the same output.
    """

    @property
    def format(self) -> OutputFormat:
        """The output format this renderer produces."""
        ...

    def render(self, data: Any, context: RenderContext | None = None) -> str:
        """Render data to a string.

        Args:
            data: A DiagnosticReport or a single section of one
            context: Rendering context with options

        Returns:
            Rendered string output
        """
        ...

    def render_to_file(self, data: Any, context: RenderContext) -> None:
        """Render data directly to a file.

        Raises:
            ValueError: If context.output_path is not set
        """
        ...


class BaseRenderer:
    """Base implementation with common functionality.

    Provides default implementation of render_to_file.
    Subclasses should implement format property and render method.
    """

    def render_to_file(self, data: Any, context: RenderContext) -> None:
        """Render data directly to a file.

        Args:
            data: The data to render
            context: Rendering context (must have output_path set)

        Raises:
            ValueError: If context.output_path is not set
        """
        if context.output_path is None:
            raise ValueError("output_path must be set in context for file rendering")

        content = self.render(data, context)
        context.output_path.write_text(content, encoding="utf-8")

    def render(self, data: Any, context: RenderContext | None = None) -> str:
        """Render data to a string. Must be implemented by subclasses."""
        raise NotImplementedError
