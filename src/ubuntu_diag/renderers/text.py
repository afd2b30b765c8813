"""Plain text renderer for ubuntu-diag output."""

from __future__ import annotations

from typing import Any

from ubuntu_diag.models.common import DiagnosticStatus
from ubuntu_diag.models.report import (
    AudioDiagnostic,
    DiagnosticReport,
    RemediationHint,
    ServiceDiagnostic,
    SystemInfo,
    VideoDiagnostic,
)
from ubuntu_diag.renderers.base import BaseRenderer, OutputFormat, RenderContext, status_symbol

TITLE = "Ubuntu System Diagnostics"
INDENT = "  "


def _status_line(label: str, status: DiagnosticStatus) -> str:
    return f"{INDENT}{status_symbol(status)} {label}: {status.value}"


def _field(label: str, value: Any) -> str:
    return f"{INDENT}{label}: {value if value not in (None, '') else '-'}"


def _service_hints(services: list[ServiceDiagnostic]) -> list[RemediationHint]:
    return [service.hint for service in services if service.hint is not None]


class TextRenderer(BaseRenderer):
    """Renderer for plain text with status symbols.

    Output contains no colour codes and no timestamps other than the
    report's own, so it is stable for snapshot tests.

    Example:
        renderer = TextRenderer()
        print(renderer.render(report))
    """

    @property
    def format(self) -> OutputFormat:
        """The output format this renderer produces."""
        return OutputFormat.TEXT

    def render(self, data: Any, context: RenderContext | None = None) -> str:
        """Render a report or a single section to text.

        Args:
            data: DiagnosticReport, AudioDiagnostic, VideoDiagnostic,
                SystemInfo or a list of ServiceDiagnostic
            context: Rendering context (unused for text)

        Returns:
            Text ending in a newline
        """
        if isinstance(data, DiagnosticReport):
            lines = self._report_lines(data)
        elif isinstance(data, AudioDiagnostic):
            lines = self._audio_lines(data) + self._trailing_hints(data.hints)
        elif isinstance(data, VideoDiagnostic):
            lines = self._video_lines(data) + self._trailing_hints(data.hints)
        elif isinstance(data, SystemInfo):
            lines = self._system_lines(data)
        elif isinstance(data, list):
            lines = self._services_lines(data) + self._trailing_hints(_service_hints(data))
        else:
            raise TypeError(f"Cannot render {type(data).__name__} as text")
        return "\n".join(lines) + "\n"

    def _report_lines(self, report: DiagnosticReport) -> list[str]:
        lines = [TITLE, f"Generated: {report.generated_at.isoformat()}", ""]
        lines += self._audio_lines(report.audio) + [""]
        lines += self._video_lines(report.video) + [""]
        lines += self._services_lines(report.services) + [""]
        lines += self._system_lines(report.system) + [""]

        hints = report.hints()
        if hints:
            lines += self._hint_lines(hints) + [""]

        summary = report.summary()
        lines.append(
            "Summary: "
            + ", ".join(f"{count} {status.value}" for status, count in summary.items())
        )
        return lines

    def _audio_lines(self, audio: AudioDiagnostic) -> list[str]:
        return [
            "Audio",
            _status_line("PipeWire Running", audio.pipewire_running),
            _field("Audio Server", audio.audio_server),
            _field("Sinks Found", audio.sinks_found),
            _field("Sources Found", audio.sources_found),
            _field("Suspended Sinks", audio.suspended_sinks),
            _field("Default Sink", audio.default_sink),
        ]

    def _video_lines(self, video: VideoDiagnostic) -> list[str]:
        lines = ["Video", f"{INDENT}GPUs Found: {len(video.gpus_found)}"]
        lines += [f"{INDENT}{INDENT}- {gpu}" for gpu in video.gpus_found]
        lines.append(_status_line("NVIDIA Driver", video.nvidia_driver_status))
        lines.append(_field("Driver Version", video.nvidia_driver_version))
        lines.append(_status_line("VA-API", video.vaapi_status))
        lines.append(_field("VA-API Profiles", video.vaapi_profiles))
        lines.append(_field("Display Server", video.display_server))
        return lines

    def _services_lines(self, services: list[ServiceDiagnostic]) -> list[str]:
        lines = ["Services"]
        if not services:
            lines.append(f"{INDENT}(no services checked)")
        for service in services:
            state = service.raw_state or service.status.value
            lines.append(f"{INDENT}{status_symbol(service.status)} {service.service_name}: {state}")
        return lines

    def _system_lines(self, system: SystemInfo) -> list[str]:
        return [
            "System",
            _field("Kernel", system.kernel),
            _field("Distribution", system.distro),
            _field("Desktop", system.desktop),
        ]

    def _hint_lines(self, hints: list[RemediationHint]) -> list[str]:
        lines = ["Suggested Fixes"]
        for hint in hints:
            lines.append(f"{INDENT}{status_symbol(hint.status)} {hint.message}")
            lines.append(f"{INDENT}{INDENT}{hint.fix}")
            if hint.command:
                lines.append(f"{INDENT}{INDENT}$ {hint.command}")
        return lines

    def _trailing_hints(self, hints: list[RemediationHint]) -> list[str]:
        return [""] + self._hint_lines(hints) if hints else []


def render_text(data: Any) -> str:
    """Render a report, or one section of it, as plain text."""
    return TextRenderer().render(data)
