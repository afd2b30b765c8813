"""Parsers for the text output of system tools.

Every parser is a pure function over the raw text of one tool. None of
them raise: output that does not match the expected shape produces the
empty value for the return type (0, None, an empty list or UNKNOWN).
Tool output changes between releases and locales, so matching is kept
deliberately narrow and anchored.
"""

from __future__ import annotations

import re

from ubuntu_diag.models.common import DiagnosticStatus

GPU_CLASS_MARKERS = ("VGA compatible controller", "3D controller")

DEFAULT_SINK_PREFIX = "Default Sink:"
SERVER_NAME_PREFIX = "Server Name:"

_PCI_ID_SUFFIX = re.compile(r"\s*\[[0-9a-fA-F]{4}:[0-9a-fA-F]{4}\]\s*$")
_REVISION_SUFFIX = re.compile(r"\s*\(rev [0-9a-fA-F]+\)\s*$")
_DRIVER_VERSION = re.compile(r"^\d+(?:\.\d+)+$")
_DRIVER_VERSION_BANNER = re.compile(r"Driver Version:\s*(\d+(?:\.\d+)+)")
_VAAPI_PROFILE = re.compile(r"\bVAProfile\w+")

_SESSION_TYPES = {"wayland": "Wayland", "x11": "X11", "tty": "TTY"}

_SERVICE_STATES = {
    "active": DiagnosticStatus.PASS,
    "inactive": DiagnosticStatus.FAIL,
    "failed": DiagnosticStatus.FAIL,
}


def _lines(raw: str | None) -> list[str]:
    if not raw:
        return []
    return [line.strip() for line in raw.splitlines() if line.strip()]


def count_entries(raw: str | None) -> int:
    """Count entries in ``pactl list sinks short`` style output.

    Args:
        raw: Tool output, one entry per line

    Returns:
        Number of non-empty lines after trimming whitespace
    """
    return len(_lines(raw))


def count_suspended(raw: str | None) -> int:
    """Count short-list entries whose state column is ``SUSPENDED``."""
    return len(parse_suspended_sinks(raw))


def parse_suspended_sinks(raw: str | None) -> list[str]:
    """Get the names of short-list entries in ``SUSPENDED`` state.

    ``pactl list sinks short`` prints ``index<TAB>name<TAB>driver<TAB>spec<TAB>state``.
    """
    names = []
    for line in _lines(raw):
        columns = [column.strip() for column in line.split("\t")]
        if len(columns) > 1 and columns[-1] == "SUSPENDED":
            names.append(columns[1] if len(columns) > 2 else columns[0])
    return names


def _prefixed_value(raw: str | None, prefix: str) -> str | None:
    for line in _lines(raw):
        if line.startswith(prefix):
            value = line[len(prefix):].strip()
            return value or None
    return None


def parse_default_sink(raw: str | None) -> str | None:
    """Extract the default sink name from ``pactl info`` output.

    The ``Default Sink:`` prefix is matched exactly and case-sensitively.
    """
    return _prefixed_value(raw, DEFAULT_SINK_PREFIX)


def parse_server_name(raw: str | None) -> str | None:
    """Extract the ``Server Name:`` value from ``pactl info`` output."""
    return _prefixed_value(raw, SERVER_NAME_PREFIX)


def classify_audio_server(server_name: str | None) -> str:
    """Map a pactl server name to PipeWire, PulseAudio or Unknown.

    PipeWire's pulse shim reports e.g. ``PulseAudio (on PipeWire 1.0.5)``,
    so PipeWire is checked first.
    """
    if not server_name:
        return "Unknown"
    if "PipeWire" in server_name:
        return "PipeWire"
    if "PulseAudio" in server_name or "pulseaudio" in server_name:
        return "PulseAudio"
    return "Unknown"


def _gpu_name(line: str, marker: str) -> str | None:
    rest = line[line.index(marker) + len(marker):]
    rest = _REVISION_SUFFIX.sub("", rest)
    rest = _PCI_ID_SUFFIX.sub("", rest)
    if ":" not in rest:
        return None
    name = rest.rsplit(":", 1)[1].strip()
    return name or None


def parse_gpu_names(raw: str | None) -> list[str]:
    """Extract display adapter names from ``lspci`` or ``lspci -nn`` output.

    Example:
        >>> parse_gpu_names(
        ...     "01:00.0 VGA compatible controller [0300]: "
        ...     "NVIDIA Corporation GA104 [GeForce RTX 3070] [10de:2484] (rev a1)"
        ... )
        ['NVIDIA Corporation GA104 [GeForce RTX 3070]']

    Args:
        raw: lspci output

    Returns:
        GPU names in the order lspci listed them
    """
    names = []
    for line in _lines(raw):
        for marker in GPU_CLASS_MARKERS:
            if marker in line:
                name = _gpu_name(line, marker)
                if name:
                    names.append(name)
                break
    return names


def parse_service_status(raw: str | None) -> DiagnosticStatus:
    """Map ``systemctl is-active`` output to a status.

    Only the exact words are recognised, so transitional states such as
    ``activating`` or ``deactivating`` are UNKNOWN rather than PASS.
    """
    if raw is None:
        return DiagnosticStatus.UNKNOWN
    return _SERVICE_STATES.get(raw.strip(), DiagnosticStatus.UNKNOWN)


def parse_nvidia_driver_version(raw: str | None) -> str | None:
    """Extract the driver version from ``nvidia-smi`` output.

    Accepts the CSV form of ``--query-gpu=driver_version`` (one line per
    GPU, the first wins) and the banner of plain ``nvidia-smi``.
    """
    lines = _lines(raw)
    if lines and _DRIVER_VERSION.match(lines[0]):
        return lines[0]
    match = _DRIVER_VERSION_BANNER.search(raw or "")
    return match.group(1) if match else None


def parse_first_line(raw: str | None) -> str | None:
    """Get the first non-empty line, e.g. from ``uname -r``."""
    lines = _lines(raw)
    return lines[0] if lines else None


def parse_distro(raw: str | None) -> str | None:
    """Parse ``lsb_release -d -s`` output, which may be quoted."""
    line = parse_first_line(raw)
    if line is None:
        return None
    return line.strip("\"'").strip() or None


def count_vaapi_profiles(raw: str | None) -> int:
    """Count distinct decode/encode profiles listed by ``vainfo``.

    ``VAProfileNone`` only carries video post-processing and is not counted.
    """
    profiles = set(_VAAPI_PROFILE.findall(raw or ""))
    profiles.discard("VAProfileNone")
    return len(profiles)


def classify_display_server(
    session_type: str | None,
    wayland_display: str | None = None,
    display: str | None = None,
) -> str:
    """Name the display server from the session environment.

    ``XDG_SESSION_TYPE`` wins; ``WAYLAND_DISPLAY`` and ``DISPLAY`` are
    consulted when it is unset or unhelpful.
    """
    known = _SESSION_TYPES.get((session_type or "").strip().lower())
    if known:
        return known
    if wayland_display:
        return "Wayland"
    if display:
        return "X11"
    return "Unknown"
