"""Shared utilities for CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import typer
from pydantic import BaseModel, Field
from rich.console import Console

from ubuntu_diag.core.report import ReportGenerator
from ubuntu_diag.core.runner import CommandRunner
from ubuntu_diag.renderers import OutputFormat, RenderContext, TerminalRenderer, get_renderer

# Diagnostics and status messages go to stderr, reports to stdout
console = Console()
err_console = Console(stderr=True)


class CliSettings(BaseModel):
    """Options resolved from the command line and configuration file."""

    model_config = {"frozen": True}

    format: OutputFormat = Field(default=OutputFormat.TEXT)
    output: Path | None = Field(default=None)
    services: list[str] = Field(default_factory=list)
    user_services: bool = Field(default=False)
    timeout: float = Field(default=5.0, gt=0)
    locale: str = Field(default="C")
    parallel: bool = Field(default=True)
    color: bool = Field(default=True)


def get_settings(ctx: typer.Context) -> CliSettings:
    """Get the settings stored by the root callback."""
    settings = ctx.find_object(CliSettings)
    if settings is None:
        settings = CliSettings()
    return settings


def build_generator(settings: CliSettings) -> ReportGenerator:
    """Create a ReportGenerator configured from CLI settings."""
    runner = CommandRunner(locale=settings.locale)
    return ReportGenerator(runner=runner, timeout=settings.timeout, parallel=settings.parallel)


def fail(message: str, code: int = 1) -> None:
    """Print an error to stderr and exit."""
    err_console.print(f"[red]Error:[/red] {message}")
    raise typer.Exit(code)


def emit(data: Any, settings: CliSettings) -> None:
    """Render data in the selected format to stdout or the output file.

    Args:
        data: A DiagnosticReport or a single section of one
        settings: Resolved CLI settings
    """
    context = RenderContext(
        format=settings.format,
        output_path=settings.output,
        color=settings.color,
    )

    if settings.output:
        get_renderer(settings.format).render_to_file(data, context)
        err_console.print(f"Report written to {settings.output}")
        return

    if settings.format is OutputFormat.TERMINAL:
        TerminalRenderer(console).render(data, context)
        return

    # Plain echo, so brackets in device names are not read as Rich markup
    typer.echo(get_renderer(settings.format).render(data, context).rstrip("\n"))
