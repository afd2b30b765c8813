"""Diagnostic record and report models."""

from collections import Counter
from datetime import datetime

from pydantic import BaseModel, Field, model_validator

from ubuntu_diag.models.common import DiagnosticStatus

UNKNOWN_VALUE = "Unknown"


class RemediationHint(BaseModel):
    """A suggested fix for a check that did not pass."""

    model_config = {"frozen": True}

    category: str = Field(description="Report section the hint belongs to (audio, video, services)")
    status: DiagnosticStatus = Field(description="Status of the check that produced the hint")
    message: str = Field(description="What is wrong")
    fix: str = Field(description="What to do about it")
    command: str | None = Field(default=None, description="Shell command that applies the fix")


class AudioDiagnostic(BaseModel):
    """Audio subsystem facts gathered from ``pactl``."""

    model_config = {"frozen": True}

    pipewire_running: DiagnosticStatus = Field(
        default=DiagnosticStatus.UNKNOWN,
        description="Whether the PipeWire sound server is answering",
    )
    sinks_found: int = Field(default=0, ge=0, description="Number of output sinks")
    sources_found: int = Field(default=0, ge=0, description="Number of input sources")
    default_sink: str | None = Field(default=None, description="Name of the default sink")
    audio_server: str = Field(
        default=UNKNOWN_VALUE,
        description="Sound server implementation (PipeWire, PulseAudio, Unknown)",
    )
    suspended_sinks: int = Field(default=0, ge=0, description="Sinks in SUSPENDED state")
    hints: list[RemediationHint] = Field(default_factory=list, description="Suggested fixes")

    @model_validator(mode="after")
    def _no_counts_without_daemon(self) -> "AudioDiagnostic":
        if self.pipewire_running is DiagnosticStatus.UNKNOWN and (
            self.sinks_found or self.sources_found or self.suspended_sinks
        ):
            raise ValueError("device counts must be 0 when the daemon status is unknown")
        return self


class VideoDiagnostic(BaseModel):
    """Graphics facts gathered from ``lspci``, ``nvidia-smi``, ``vainfo`` and the session."""

    model_config = {"frozen": True}

    gpus_found: list[str] = Field(default_factory=list, description="GPU names")
    nvidia_driver_status: DiagnosticStatus = Field(
        default=DiagnosticStatus.UNKNOWN,
        description="Health of the NVIDIA driver",
    )
    nvidia_driver_version: str | None = Field(
        default=None,
        description="NVIDIA driver version, when the driver answered",
    )
    vaapi_status: DiagnosticStatus = Field(
        default=DiagnosticStatus.UNKNOWN,
        description="Whether VA-API hardware video acceleration works",
    )
    vaapi_profiles: int = Field(default=0, ge=0, description="Distinct VA-API profiles reported")
    display_server: str = Field(
        default=UNKNOWN_VALUE,
        description="Display server of the current session (Wayland, X11, TTY, Unknown)",
    )
    hints: list[RemediationHint] = Field(default_factory=list, description="Suggested fixes")


class ServiceDiagnostic(BaseModel):
    """State of one systemd unit."""

    model_config = {"frozen": True}

    service_name: str = Field(description="systemd unit name")
    status: DiagnosticStatus = Field(description="Mapped health status")
    raw_state: str | None = Field(
        default=None,
        description="Word printed by systemctl is-active, if any",
    )
    hint: RemediationHint | None = Field(default=None, description="Suggested fix")


class SystemInfo(BaseModel):
    """Host identification shown alongside the diagnostics."""

    model_config = {"frozen": True}

    kernel: str = Field(default=UNKNOWN_VALUE, description="Kernel release")
    distro: str = Field(default=UNKNOWN_VALUE, description="Distribution description")
    desktop: str = Field(default=UNKNOWN_VALUE, description="Current desktop environment")


class DiagnosticReport(BaseModel):
    """Point-in-time snapshot of all collected diagnostics."""

    model_config = {"frozen": True}

    audio: AudioDiagnostic = Field(default_factory=AudioDiagnostic)
    video: VideoDiagnostic = Field(default_factory=VideoDiagnostic)
    services: list[ServiceDiagnostic] = Field(default_factory=list)
    system: SystemInfo = Field(default_factory=SystemInfo)
    generated_at: datetime = Field(description="When report generation started")

    @model_validator(mode="after")
    def _unique_services(self) -> "DiagnosticReport":
        seen: set[str] = set()
        for service in self.services:
            if service.service_name in seen:
                raise ValueError(f"Duplicate service entry: {service.service_name}")
            seen.add(service.service_name)
        return self

    def all_statuses(self) -> list[DiagnosticStatus]:
        """Get every status value in the report, in display order."""
        statuses = [
            self.audio.pipewire_running,
            self.video.nvidia_driver_status,
            self.video.vaapi_status,
        ]
        statuses.extend(service.status for service in self.services)
        return statuses

    def hints(self) -> list[RemediationHint]:
        """Get every suggested fix, in display order."""
        hints = list(self.audio.hints) + list(self.video.hints)
        hints.extend(service.hint for service in self.services if service.hint is not None)
        return hints

    def summary(self) -> dict[DiagnosticStatus, int]:
        """Count statuses by value. Every status is present, possibly as 0."""
        counts = Counter(self.all_statuses())
        return {status: counts.get(status, 0) for status in DiagnosticStatus}
