"""Markdown renderer for ubuntu-diag output."""

from __future__ import annotations

from typing import Any

from ubuntu_diag.models.report import (
    AudioDiagnostic,
    DiagnosticReport,
    RemediationHint,
    ServiceDiagnostic,
    SystemInfo,
    VideoDiagnostic,
)
from ubuntu_diag.renderers.base import BaseRenderer, OutputFormat, RenderContext, status_symbol


class MarkdownRenderer(BaseRenderer):
    """Renderer for Markdown output format.

    Example:
        renderer = MarkdownRenderer()
        md_str = renderer.render(report)
    """

    @property
    def format(self) -> OutputFormat:
        """The output format this renderer produces."""
        return OutputFormat.MARKDOWN

    def render(self, data: Any, context: RenderContext | None = None) -> str:
        """Render data to a Markdown string.

        Args:
            data: A DiagnosticReport or a single section of one
            context: Rendering context

        Returns:
            Markdown string
        """
        if isinstance(data, DiagnosticReport):
            lines = self._render_report(data)
        elif isinstance(data, AudioDiagnostic):
            lines = self._render_audio(data) + self._render_hints(data.hints)
        elif isinstance(data, VideoDiagnostic):
            lines = self._render_video(data) + self._render_hints(data.hints)
        elif isinstance(data, SystemInfo):
            lines = self._render_system(data)
        elif isinstance(data, list):
            hints = [service.hint for service in data if service.hint is not None]
            lines = self._render_services(data) + self._render_hints(hints)
        else:
            raise TypeError(f"Cannot render {type(data).__name__} as markdown")
        return "\n".join(lines) + "\n"

    def _render_report(self, report: DiagnosticReport) -> list[str]:
        lines = [
            "# Ubuntu System Diagnostics",
            "",
            f"**Generated:** {report.generated_at.isoformat()}",
            "",
            "## Summary",
            "",
        ]
        for status, count in report.summary().items():
            lines.append(f"- {status_symbol(status)} {status.value}: **{count}**")
        lines.append("")

        lines += self._render_audio(report.audio) + [""]
        lines += self._render_video(report.video) + [""]
        lines += self._render_services(report.services) + [""]
        lines += self._render_system(report.system)
        lines += self._render_hints(report.hints())
        return lines

    def _render_audio(self, audio: AudioDiagnostic) -> list[str]:
        return [
            "## Audio",
            "",
            "| Check | Value |",
            "|-------|-------|",
            f"| PipeWire Running | {status_symbol(audio.pipewire_running)} {audio.pipewire_running.value} |",
            f"| Audio Server | {self._escape_md(audio.audio_server)} |",
            f"| Sinks Found | {audio.sinks_found} |",
            f"| Sources Found | {audio.sources_found} |",
            f"| Suspended Sinks | {audio.suspended_sinks} |",
            f"| Default Sink | {self._code(audio.default_sink)} |",
        ]

    def _render_video(self, video: VideoDiagnostic) -> list[str]:
        lines = [
            "## Video",
            "",
            f"GPUs Found: {len(video.gpus_found)}",
            "",
        ]
        for gpu in video.gpus_found:
            lines.append(f"- {self._escape_md(gpu)}")
        if video.gpus_found:
            lines.append("")
        lines += [
            "| Check | Value |",
            "|-------|-------|",
            f"| NVIDIA Driver | {status_symbol(video.nvidia_driver_status)} "
            f"{video.nvidia_driver_status.value} |",
            f"| Driver Version | {self._code(video.nvidia_driver_version)} |",
            f"| VA-API | {status_symbol(video.vaapi_status)} {video.vaapi_status.value} |",
            f"| VA-API Profiles | {video.vaapi_profiles} |",
            f"| Display Server | {self._escape_md(video.display_server)} |",
        ]
        return lines

    def _render_services(self, services: list[ServiceDiagnostic]) -> list[str]:
        lines = ["## Services", ""]
        if not services:
            lines.append("_No services checked._")
            return lines

        lines += [
            "| Service | Status | State |",
            "|---------|--------|-------|",
        ]
        for service in services:
            lines.append(
                f"| `{service.service_name}` | {status_symbol(service.status)} "
                f"{service.status.value} | {service.raw_state or '-'} |"
            )
        return lines

    def _render_system(self, system: SystemInfo) -> list[str]:
        return [
            "## System",
            "",
            f"- **Kernel:** {self._escape_md(system.kernel)}",
            f"- **Distribution:** {self._escape_md(system.distro)}",
            f"- **Desktop:** {self._escape_md(system.desktop)}",
        ]

    def _render_hints(self, hints: list[RemediationHint]) -> list[str]:
        if not hints:
            return []

        lines = ["", "## Suggested Fixes", ""]
        for hint in hints:
            line = f"- {status_symbol(hint.status)} **{self._escape_md(hint.message)}**: {self._escape_md(hint.fix)}"
            if hint.command:
                line += f" (`{hint.command}`)"
            lines.append(line)
        return lines

    @classmethod
    def _code(cls, value: str | None) -> str:
        return f"`{value}`" if value else "-"

    @staticmethod
    def _escape_md(text: str) -> str:
        """Escape special Markdown characters."""
        for char in ["|", "*", "_", "`"]:
            text = text.replace(char, f"\\{char}")
        return text
