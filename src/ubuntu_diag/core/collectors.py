"""Diagnostic collectors.

Each collector runs one or more commands through a Runner, feeds the
output to the matching parsers and returns one typed record. Collectors
recover from every tool-level failure locally: a missing or hung tool
only turns the fields it feeds into UNKNOWN or empty values.
"""

from __future__ import annotations

import os
from typing import Iterable, Mapping

from ubuntu_diag.core import parsers, remediation
from ubuntu_diag.core.runner import Runner
from ubuntu_diag.models.common import CommandResult, DiagnosticStatus
from ubuntu_diag.models.report import (
    UNKNOWN_VALUE,
    AudioDiagnostic,
    ServiceDiagnostic,
    SystemInfo,
    VideoDiagnostic,
)
from ubuntu_diag.utils.errors import ValidationError, validate_service_name
from ubuntu_diag.utils.logging import get_logger_with_context

PACTL_INFO = ("pactl", ["info"])
PACTL_SINKS = ("pactl", ["list", "sinks", "short"])
PACTL_SOURCES = ("pactl", ["list", "sources", "short"])
LSPCI = ("lspci", ["-nn"])
NVIDIA_SMI = ("nvidia-smi", ["--query-gpu=driver_version", "--format=csv,noheader"])
UNAME = ("uname", ["-r"])
LSB_RELEASE = ("lsb_release", ["-d", "-s"])
VAINFO = ("vainfo", [])


def _run(runner: Runner, command: tuple[str, list[str]], timeout: float) -> CommandResult:
    program, args = command
    return runner.run(program, list(args), timeout)


def _daemon_status(info: CommandResult, server: str, lists_answered: bool) -> DiagnosticStatus:
    """Decide ``pipewire_running`` from ``pactl info`` and the list commands."""
    if info.ok:
        return DiagnosticStatus.PASS if server == "PipeWire" else DiagnosticStatus.WARN
    if info.available:
        # pactl ran but could not reach a server
        return DiagnosticStatus.FAIL
    if lists_answered:
        # A server answered the list commands but its identity is unconfirmed
        return DiagnosticStatus.WARN
    return DiagnosticStatus.UNKNOWN


def collect_audio(runner: Runner, timeout: float) -> AudioDiagnostic:
    """Collect audio diagnostics from ``pactl``.

    The three pactl commands are independent: a failing ``pactl info`` does
    not stop the sink and source counts from being reported.

    Args:
        runner: Runner used to execute pactl
        timeout: Per-command timeout in seconds

    Returns:
        AudioDiagnostic for this host
    """
    log = get_logger_with_context(__name__, collector="audio")

    info = _run(runner, PACTL_INFO, timeout)
    sinks = _run(runner, PACTL_SINKS, timeout)
    sources = _run(runner, PACTL_SOURCES, timeout)

    server = parsers.classify_audio_server(parsers.parse_server_name(info.stdout)) if info.ok else UNKNOWN_VALUE
    default_sink = parsers.parse_default_sink(info.stdout) if info.ok else None
    status = _daemon_status(info, server, sinks.ok or sources.ok)

    if status is DiagnosticStatus.UNKNOWN:
        log.debug("pactl unavailable, audio status unknown")
        hints = remediation.audio_hints(status, info.spawn_failed, False, 0, [], None)
        return AudioDiagnostic(pipewire_running=status, hints=hints)

    sinks_found = parsers.count_entries(sinks.stdout) if sinks.ok else 0
    sources_found = parsers.count_entries(sources.stdout) if sources.ok else 0
    suspended = parsers.parse_suspended_sinks(sinks.stdout) if sinks.ok else []
    log.debug("audio: server=%s sinks=%d sources=%d", server, sinks_found, sources_found)

    return AudioDiagnostic(
        pipewire_running=status,
        sinks_found=sinks_found,
        sources_found=sources_found,
        default_sink=default_sink,
        audio_server=server,
        suspended_sinks=len(suspended),
        hints=remediation.audio_hints(
            status,
            pactl_missing=False,
            sinks_listed=sinks.ok,
            sinks_found=sinks_found,
            suspended=suspended,
            default_sink=default_sink,
        ),
    )


def _vaapi_status(vainfo: CommandResult) -> tuple[DiagnosticStatus, int]:
    if not vainfo.available:
        return DiagnosticStatus.UNKNOWN, 0
    profiles = parsers.count_vaapi_profiles(vainfo.stdout) if vainfo.ok else 0
    return (DiagnosticStatus.PASS if profiles else DiagnosticStatus.WARN), profiles


def collect_video(
    runner: Runner,
    timeout: float,
    environ: Mapping[str, str] | None = None,
) -> VideoDiagnostic:
    """Collect GPU names, NVIDIA driver health, VA-API and the display server.

    An absent ``nvidia-smi`` is normal on non-NVIDIA hosts and yields
    UNKNOWN. When it runs but exits nonzero the driver is installed but
    not working, which is a FAIL. ``vainfo`` follows the same split,
    except that a run that lists no profiles is only a WARN.
    """
    log = get_logger_with_context(__name__, collector="video")
    env = os.environ if environ is None else environ

    lspci = _run(runner, LSPCI, timeout)
    gpus = parsers.parse_gpu_names(lspci.stdout) if lspci.ok else []

    smi = _run(runner, NVIDIA_SMI, timeout)
    version = None
    if smi.ok:
        version = parsers.parse_nvidia_driver_version(smi.stdout)
        driver_status = DiagnosticStatus.PASS if version else DiagnosticStatus.WARN
    elif smi.available:
        driver_status = DiagnosticStatus.FAIL
    else:
        driver_status = DiagnosticStatus.UNKNOWN

    vainfo = _run(runner, VAINFO, timeout)
    vaapi_status, profiles = _vaapi_status(vainfo)

    display_server = parsers.classify_display_server(
        env.get("XDG_SESSION_TYPE"),
        wayland_display=env.get("WAYLAND_DISPLAY"),
        display=env.get("DISPLAY"),
    )

    log.debug(
        "video: gpus=%d nvidia=%s vaapi=%s display=%s",
        len(gpus),
        driver_status.value,
        vaapi_status.value,
        display_server,
    )
    return VideoDiagnostic(
        gpus_found=gpus,
        nvidia_driver_status=driver_status,
        nvidia_driver_version=version,
        vaapi_status=vaapi_status,
        vaapi_profiles=profiles,
        display_server=display_server,
        hints=remediation.video_hints(driver_status, vaapi_status, vainfo.spawn_failed),
    )


def collect_services(
    runner: Runner,
    service_names: Iterable[str],
    timeout: float,
    user: bool = False,
) -> list[ServiceDiagnostic]:
    """Check systemd units with ``systemctl is-active``.

    Args:
        runner: Runner used to execute systemctl
        service_names: Units to check, in display order
        timeout: Per-command timeout in seconds
        user: Query the user service manager instead of the system one

    Returns:
        One ServiceDiagnostic per distinct unit, in the order requested
    """
    log = get_logger_with_context(__name__, collector="services")
    results: list[ServiceDiagnostic] = []
    seen: set[str] = set()

    for name in service_names:
        if name in seen:
            log.debug("Skipping duplicate service %s", name)
            continue
        seen.add(name)

        try:
            validate_service_name(name)
        except ValidationError as e:
            # never hand an option-like or malformed name to systemctl
            log.debug("Not querying %r: %s", name, e.message)
            results.append(ServiceDiagnostic(service_name=name, status=DiagnosticStatus.UNKNOWN))
            continue

        args = ["--user"] if user else []
        args += ["is-active", name]
        result = runner.run("systemctl", args, timeout)

        # systemctl exits nonzero for inactive units, so any completed run is parsed
        if result.available:
            raw_state = parsers.parse_first_line(result.stdout)
            status = parsers.parse_service_status(result.stdout)
        else:
            raw_state = None
            status = DiagnosticStatus.UNKNOWN

        results.append(
            ServiceDiagnostic(
                service_name=name,
                status=status,
                raw_state=raw_state,
                hint=remediation.service_hint(name, status, raw_state, user),
            )
        )

    return results


def collect_system(
    runner: Runner,
    timeout: float,
    environ: Mapping[str, str] | None = None,
) -> SystemInfo:
    """Collect kernel, distribution and desktop identification."""
    env = os.environ if environ is None else environ

    uname = _run(runner, UNAME, timeout)
    lsb = _run(runner, LSB_RELEASE, timeout)

    kernel = parsers.parse_first_line(uname.stdout) if uname.ok else None
    distro = parsers.parse_distro(lsb.stdout) if lsb.ok else None

    return SystemInfo(
        kernel=kernel or UNKNOWN_VALUE,
        distro=distro or UNKNOWN_VALUE,
        desktop=env.get("XDG_CURRENT_DESKTOP") or UNKNOWN_VALUE,
    )
