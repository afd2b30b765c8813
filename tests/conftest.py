"""Shared test fixtures for ubuntu-diag tests."""

import logging
import threading
from datetime import datetime, timezone
from typing import Sequence

import pytest

from ubuntu_diag.models.common import CommandResult, DiagnosticStatus
from ubuntu_diag.models.report import (
    AudioDiagnostic,
    DiagnosticReport,
    RemediationHint,
    ServiceDiagnostic,
    SystemInfo,
    VideoDiagnostic,
)
from ubuntu_diag.utils.logging import ROOT_LOGGER

FIXED_TIME = datetime(2024, 3, 1, 12, 0, 0, tzinfo=timezone.utc)

PACTL_INFO_PIPEWIRE = """Server String: /run/user/1000/pulse/native
Library Protocol Version: 35
Server Protocol Version: 35
Is Local: yes
Client Index: 42
Tile Size: 65472
User Name: alice
Host Name: workstation
Server Name: PulseAudio (on PipeWire 1.0.5)
Server Version: 15.0.0
Default Sample Specification: float32le 2ch 48000Hz
Default Channel Map: front-left,front-right
Default Sink: alsa_output.pci-0000_00_1f.3.analog-stereo
Default Source: alsa_input.pci-0000_00_1f.3.analog-stereo
Cookie: 6f2c:18a1
"""

PACTL_SINKS = (
    "47\talsa_output.pci-0000_00_1f.3.analog-stereo\tPipeWire\ts32le 2ch 48000Hz\tRUNNING\n"
    "52\talsa_output.pci-0000_01_00.1.hdmi-stereo\tPipeWire\ts32le 2ch 48000Hz\tSUSPENDED\n"
)

PACTL_SOURCES = (
    "47\talsa_output.pci-0000_00_1f.3.analog-stereo.monitor\tPipeWire\ts32le 2ch 48000Hz\tRUNNING\n"
    "48\talsa_input.pci-0000_00_1f.3.analog-stereo\tPipeWire\ts32le 2ch 48000Hz\tSUSPENDED\n"
    "52\talsa_output.pci-0000_01_00.1.hdmi-stereo.monitor\tPipeWire\ts32le 2ch 48000Hz\tSUSPENDED\n"
)

LSPCI_NN = """00:00.0 Host bridge [0600]: Intel Corporation 8th Gen Core Processor Host Bridge/DRAM Registers [8086:3ec2] (rev 07)
00:02.0 VGA compatible controller [0300]: Intel Corporation CoffeeLake-H GT2 [UHD Graphics 630] [8086:3e9b]
01:00.0 3D controller [0302]: NVIDIA Corporation TU117M [GeForce GTX 1650 Mobile / Max-Q] [10de:1f91] (rev a1)
00:1f.3 Audio device [0403]: Intel Corporation Cannon Lake PCH cAVS [8086:a348] (rev 10)
"""

VAINFO_INTEL = """Trying display: wayland
libva info: VA-API version 1.20.0
libva info: Trying to open /usr/lib/x86_64-linux-gnu/dri/iHD_drv_video.so
libva info: Found init function __vaDriverInit_1_20
libva info: va_openDriver() returns 0
vainfo: VA-API version: 1.20 (libva 2.12.0)
vainfo: Driver version: Intel iHD driver for Intel(R) Gen Graphics - 24.1.0 ()
vainfo: Supported profile and entrypoints
      VAProfileNone                   :	VAEntrypointVideoProc
      VAProfileNone                   :	VAEntrypointStats
      VAProfileMPEG2Simple            :	VAEntrypointVLD
      VAProfileMPEG2Main              :	VAEntrypointVLD
      VAProfileH264Main               :	VAEntrypointVLD
      VAProfileH264Main               :	VAEntrypointEncSliceLP
      VAProfileH264High               :	VAEntrypointVLD
      VAProfileHEVCMain               :	VAEntrypointVLD
"""

SUSPENDED_SINK = "alsa_output.pci-0000_01_00.1.hdmi-stereo"


class StubRunner:
    """Runner that answers from a table of canned results.

    Keys are ``(program, *args)`` tuples. Values are CommandResult
    instances or plain strings (treated as successful stdout). Anything
    not in the table behaves like a missing executable.
    """

    def __init__(self, responses=None):
        self.responses = dict(responses or {})
        self.calls: list[tuple[str, ...]] = []
        self._lock = threading.Lock()

    def run(self, program: str, args: Sequence[str], timeout: float) -> CommandResult:
        key = (program, *args)
        with self._lock:
            self.calls.append(key)
        response = self.responses.get(key)
        if response is None:
            return CommandResult.not_found(program, list(args), f"[Errno 2] No such file or directory: '{program}'")
        if isinstance(response, str):
            return CommandResult(program=program, args=list(args), stdout=response)
        return response


def completed(program: str, args: list[str], stdout: str = "", exit_code: int = 0, stderr: str = "") -> CommandResult:
    """Build a CommandResult for a program that ran to completion."""
    return CommandResult(program=program, args=args, stdout=stdout, stderr=stderr, exit_code=exit_code)


@pytest.fixture
def stub_runner_factory():
    """Factory for StubRunner instances."""
    return StubRunner


@pytest.fixture
def missing_tools_runner() -> StubRunner:
    """Runner for a host where no tool is installed."""
    return StubRunner()


@pytest.fixture
def healthy_runner() -> StubRunner:
    """Runner for a healthy PipeWire desktop with an NVIDIA GPU."""
    return StubRunner(
        {
            ("pactl", "info"): PACTL_INFO_PIPEWIRE,
            ("pactl", "list", "sinks", "short"): PACTL_SINKS,
            ("pactl", "list", "sources", "short"): PACTL_SOURCES,
            ("lspci", "-nn"): LSPCI_NN,
            ("nvidia-smi", "--query-gpu=driver_version", "--format=csv,noheader"): "550.120\n",
            ("vainfo",): VAINFO_INTEL,
            ("systemctl", "is-active", "pipewire"): "active\n",
            ("systemctl", "is-active", "pipewire-pulse"): "active\n",
            ("systemctl", "is-active", "wireplumber"): completed(
                "systemctl", ["is-active", "wireplumber"], stdout="inactive\n", exit_code=3
            ),
            ("uname", "-r"): "6.8.0-45-generic\n",
            ("lsb_release", "-d", "-s"): '"Ubuntu 24.04.1 LTS"\n',
        }
    )


@pytest.fixture
def sample_report() -> DiagnosticReport:
    """A fully populated report with a fixed timestamp."""
    return DiagnosticReport(
        audio=AudioDiagnostic(
            pipewire_running=DiagnosticStatus.PASS,
            sinks_found=2,
            sources_found=3,
            default_sink="alsa_output.pci-0000_00_1f.3.analog-stereo",
            audio_server="PipeWire",
            suspended_sinks=1,
            hints=[
                RemediationHint(
                    category="audio",
                    status=DiagnosticStatus.WARN,
                    message=f"Audio sink {SUSPENDED_SINK} is suspended",
                    fix="Resume audio sink",
                    command=f"pactl suspend-sink {SUSPENDED_SINK} 0",
                ),
            ],
        ),
        video=VideoDiagnostic(
            gpus_found=[
                "Intel Corporation CoffeeLake-H GT2 [UHD Graphics 630]",
                "NVIDIA Corporation TU117M [GeForce GTX 1650 Mobile / Max-Q]",
            ],
            nvidia_driver_status=DiagnosticStatus.PASS,
            nvidia_driver_version="550.120",
            vaapi_status=DiagnosticStatus.PASS,
            vaapi_profiles=5,
            display_server="Wayland",
        ),
        services=[
            ServiceDiagnostic(service_name="pipewire", status=DiagnosticStatus.PASS, raw_state="active"),
            ServiceDiagnostic(
                service_name="wireplumber",
                status=DiagnosticStatus.FAIL,
                raw_state="inactive",
                hint=RemediationHint(
                    category="services",
                    status=DiagnosticStatus.FAIL,
                    message="wireplumber is inactive",
                    fix="Start wireplumber",
                    command="sudo systemctl start wireplumber",
                ),
            ),
        ],
        system=SystemInfo(kernel="6.8.0-45-generic", distro="Ubuntu 24.04.1 LTS", desktop="ubuntu:GNOME"),
        generated_at=FIXED_TIME,
    )


@pytest.fixture
def empty_report() -> DiagnosticReport:
    """A report from a host where nothing could be queried."""
    return DiagnosticReport(generated_at=FIXED_TIME)


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo handlers installed by configure_logging."""
    yield
    logger = logging.getLogger(ROOT_LOGGER)
    logger.handlers = []
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Run with no configuration file on any search path."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path
