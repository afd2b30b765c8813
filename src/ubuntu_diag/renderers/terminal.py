"""Terminal renderer for ubuntu-diag output."""

from __future__ import annotations

import io
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ubuntu_diag.models.common import DiagnosticStatus
from ubuntu_diag.models.report import (
    AudioDiagnostic,
    DiagnosticReport,
    RemediationHint,
    ServiceDiagnostic,
    SystemInfo,
    VideoDiagnostic,
)
from ubuntu_diag.renderers.base import (
    BaseRenderer,
    OutputFormat,
    RenderContext,
    status_style,
    status_symbol,
)


def _status_cell(status: DiagnosticStatus) -> str:
    style = status_style(status)
    return f"[{style}]{status_symbol(status)} {status.value}[/{style}]"


class TerminalRenderer(BaseRenderer):
    """Renderer for rich terminal output.

    Uses the Rich library to print panels and tables to the terminal.

    Example:
        renderer = TerminalRenderer()
        renderer.render(report)
    """

    def __init__(self, console: Console | None = None) -> None:
        """Initialize the terminal renderer.

        Args:
            console: Rich console to use. Creates a new one if None.
        """
        self._console = console or Console()

    @property
    def format(self) -> OutputFormat:
        """The output format this renderer produces."""
        return OutputFormat.TERMINAL

    def render(self, data: Any, context: RenderContext | None = None) -> str:
        """Render data to the terminal.

        Note: This method prints to the console and returns an empty string.
        For capturing output, use Console.capture().

        Args:
            data: A DiagnosticReport or a single section of one
            context: Rendering context

        Returns:
            Empty string (output is printed to console)
        """
        if context is not None and not context.color and not self._console.no_color:
            return TerminalRenderer(self._colorless_console()).render(data, context)

        if isinstance(data, DiagnosticReport):
            self._render_report(data)
        elif isinstance(data, AudioDiagnostic):
            self._render_audio(data)
            self._render_hints(data.hints)
        elif isinstance(data, VideoDiagnostic):
            self._render_video(data)
            self._render_hints(data.hints)
        elif isinstance(data, SystemInfo):
            self._render_system(data)
        elif isinstance(data, list):
            self._render_services(data)
            self._render_hints([service.hint for service in data if service.hint is not None])
        else:
            raise TypeError(f"Cannot render {type(data).__name__} to the terminal")
        return ""

    def render_to_file(self, data: Any, context: RenderContext) -> None:
        """Render the terminal layout to a file without colour codes.

        Raises:
            ValueError: If context.output_path is not set
        """
        if context.output_path is None:
            raise ValueError("output_path must be set in context for file rendering")

        console = Console(file=io.StringIO(), record=True, color_system=None, no_color=True, width=100)
        TerminalRenderer(console).render(data, context)
        context.output_path.write_text(console.export_text(), encoding="utf-8")

    def _colorless_console(self) -> Console:
        """Same destination and width as the current console, without colour."""
        return Console(
            file=self._console.file,
            width=self._console.width,
            force_terminal=self._console.is_terminal,
            no_color=True,
        )

    def _render_report(self, report: DiagnosticReport) -> None:
        summary = report.summary()
        self._console.print()
        self._console.print(
            Panel(
                f"[bold]Generated:[/bold] {report.generated_at.isoformat()}\n"
                f"[bold]Kernel:[/bold] {escape(report.system.kernel)}\n"
                f"[bold]Distribution:[/bold] {escape(report.system.distro)}\n"
                f"[bold]Desktop:[/bold] {escape(report.system.desktop)}\n"
                + "  ".join(_status_cell(status) + f" x{count}" for status, count in summary.items()),
                title="Ubuntu System Diagnostics",
            )
        )
        self._render_audio(report.audio)
        self._render_video(report.video)
        self._render_services(report.services)
        self._render_hints(report.hints())

    def _render_audio(self, audio: AudioDiagnostic) -> None:
        self._console.print()
        table = Table(title="Audio", show_header=False)
        table.add_column("Check", style="bold")
        table.add_column("Value")
        table.add_row("PipeWire Running", _status_cell(audio.pipewire_running))
        table.add_row("Audio Server", escape(audio.audio_server))
        table.add_row("Sinks Found", str(audio.sinks_found))
        table.add_row("Sources Found", str(audio.sources_found))
        table.add_row("Suspended Sinks", str(audio.suspended_sinks))
        table.add_row("Default Sink", escape(audio.default_sink or "-"))
        self._console.print(table)

    def _render_video(self, video: VideoDiagnostic) -> None:
        self._console.print()
        table = Table(title="Video", show_header=False)
        table.add_column("Check", style="bold")
        table.add_column("Value")
        table.add_row("GPUs Found", str(len(video.gpus_found)))
        for gpu in video.gpus_found:
            table.add_row("", escape(gpu))
        table.add_row("NVIDIA Driver", _status_cell(video.nvidia_driver_status))
        table.add_row("Driver Version", escape(video.nvidia_driver_version or "-"))
        table.add_row("VA-API", _status_cell(video.vaapi_status))
        table.add_row("VA-API Profiles", str(video.vaapi_profiles))
        table.add_row("Display Server", escape(video.display_server))
        self._console.print(table)

    def _render_services(self, services: list[ServiceDiagnostic]) -> None:
        self._console.print()
        if not services:
            self._console.print("[dim]No services checked[/dim]")
            return

        table = Table(title="Services")
        table.add_column("Service", style="bold")
        table.add_column("Status")
        table.add_column("State", style="dim")
        for service in services:
            table.add_row(escape(service.service_name), _status_cell(service.status), escape(service.raw_state or "-"))
        self._console.print(table)

    def _render_system(self, system: SystemInfo) -> None:
        self._console.print()
        table = Table(title="System", show_header=False)
        table.add_column("Field", style="bold")
        table.add_column("Value")
        table.add_row("Kernel", escape(system.kernel))
        table.add_row("Distribution", escape(system.distro))
        table.add_row("Desktop", escape(system.desktop))
        self._console.print(table)

    def _render_hints(self, hints: list[RemediationHint]) -> None:
        if not hints:
            return

        self._console.print()
        table = Table(title="Suggested Fixes")
        table.add_column("Status")
        table.add_column("Problem", style="bold")
        table.add_column("Fix")
        table.add_column("Command", style="cyan")
        for hint in hints:
            table.add_row(
                _status_cell(hint.status),
                escape(hint.message),
                escape(hint.fix),
                escape(hint.command or "-"),
            )
        self._console.print(table)
