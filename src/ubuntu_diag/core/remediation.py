"""Suggested fixes for checks that did not pass.

Each builder looks at what a collector found and returns the hints a
user can act on. Hints never change a status; they are advice printed
next to the report.
"""

from __future__ import annotations

from ubuntu_diag.models.common import DiagnosticStatus
from ubuntu_diag.models.report import RemediationHint

AUDIO = "audio"
VIDEO = "video"
SERVICES = "services"

PIPEWIRE_UNITS = "pipewire pipewire-pulse wireplumber"


def audio_hints(
    status: DiagnosticStatus,
    pactl_missing: bool,
    sinks_listed: bool,
    sinks_found: int,
    suspended: list[str],
    default_sink: str | None,
) -> list[RemediationHint]:
    """Build hints for the audio section.

    Args:
        status: Decided ``pipewire_running`` status
        pactl_missing: pactl could not be spawned at all
        sinks_listed: ``pactl list sinks short`` completed
        sinks_found: Number of sinks listed
        suspended: Names of suspended sinks
        default_sink: Default sink from ``pactl info``, if known
    """
    hints: list[RemediationHint] = []

    if pactl_missing:
        hints.append(
            RemediationHint(
                category=AUDIO,
                status=DiagnosticStatus.UNKNOWN,
                message="pactl is not installed",
                fix="Install the PulseAudio client tools",
                command="sudo apt install pulseaudio-utils",
            )
        )
        return hints

    if status is DiagnosticStatus.FAIL:
        hints.append(
            RemediationHint(
                category=AUDIO,
                status=status,
                message="No sound server is answering",
                fix="Start the PipeWire services",
                command=f"systemctl --user start {PIPEWIRE_UNITS}",
            )
        )
        return hints

    if sinks_listed and sinks_found == 0:
        hints.append(
            RemediationHint(
                category=AUDIO,
                status=DiagnosticStatus.FAIL,
                message="No audio output devices found",
                fix="Check hardware connections and drivers",
            )
        )

    for name in suspended:
        hints.append(
            RemediationHint(
                category=AUDIO,
                status=DiagnosticStatus.WARN,
                message=f"Audio sink {name} is suspended",
                fix="Resume audio sink",
                command=f"pactl suspend-sink {name} 0",
            )
        )

    if status is DiagnosticStatus.PASS and sinks_found and default_sink is None:
        hints.append(
            RemediationHint(
                category=AUDIO,
                status=DiagnosticStatus.WARN,
                message="No default audio output device set",
                fix="Set a default audio output device",
                command="pactl set-default-sink <sink-name>",
            )
        )

    return hints


def video_hints(
    nvidia_status: DiagnosticStatus,
    vaapi_status: DiagnosticStatus,
    vainfo_missing: bool,
) -> list[RemediationHint]:
    """Build hints for the video section."""
    hints: list[RemediationHint] = []

    if nvidia_status is DiagnosticStatus.FAIL:
        hints.append(
            RemediationHint(
                category=VIDEO,
                status=nvidia_status,
                message="NVIDIA driver not working properly",
                fix="Reinstall or update NVIDIA drivers",
                command="sudo ubuntu-drivers install",
            )
        )
    elif nvidia_status is DiagnosticStatus.WARN:
        hints.append(
            RemediationHint(
                category=VIDEO,
                status=nvidia_status,
                message="nvidia-smi did not report a driver version",
                fix="Check that the NVIDIA kernel module matches the installed driver",
                command="nvidia-smi",
            )
        )

    if vainfo_missing:
        hints.append(
            RemediationHint(
                category=VIDEO,
                status=DiagnosticStatus.UNKNOWN,
                message="vainfo is not installed",
                fix="Install vainfo to check hardware video acceleration",
                command="sudo apt install vainfo",
            )
        )
    elif vaapi_status is DiagnosticStatus.WARN:
        hints.append(
            RemediationHint(
                category=VIDEO,
                status=vaapi_status,
                message="VA-API not available or not working",
                fix="Install VA-API drivers for your GPU",
                command="sudo apt install va-driver-all",
            )
        )

    return hints


def service_hint(
    name: str,
    status: DiagnosticStatus,
    raw_state: str | None,
    user: bool,
) -> RemediationHint | None:
    """Build the hint for one systemd unit, if it is stopped or failed."""
    if status is not DiagnosticStatus.FAIL:
        return None

    verb = "restart" if raw_state == "failed" else "start"
    command = f"systemctl --user {verb} {name}" if user else f"sudo systemctl {verb} {name}"
    return RemediationHint(
        category=SERVICES,
        status=status,
        message=f"{name} is {raw_state or 'not running'}",
        fix=f"{verb.capitalize()} {name}",
        command=command,
    )
