"""ubuntu-diag: read-only system diagnostics for Ubuntu desktops.

This package collects audio, video and service health by running standard
system tools and merges the results into one report:

- **Command Runner**: runs a tool with a timeout, never raises for tool failures
- **Parsers**: turn raw ``pactl``, ``lspci``, ``systemctl``, ``nvidia-smi`` and
  ``vainfo`` output into typed facts
- **Collectors**: one per category, degrading to UNKNOWN when tools are missing
- **Remediation**: suggested fixes for checks that did not pass
- **Report Generator**: runs the collectors and stamps the report
- **Renderers**: text, JSON, Markdown and rich terminal output

Usage:
    # Library API
    from ubuntu_diag import ReportGenerator, render_text

    generator = ReportGenerator(timeout=3.0)
    report = generator.generate(["pipewire", "pipewire-pulse"])
    print(render_text(report))

CLI:
    ubuntu-diag
    ubuntu-diag audio
    ubuntu-diag video
    ubuntu-diag --service pipewire --service wireplumber services
    ubuntu-diag --format json
"""

__version__ = "0.1.0"

# Core
from ubuntu_diag.core.runner import CommandRunner, Runner
from ubuntu_diag.core.collectors import (
    collect_audio,
    collect_services,
    collect_system,
    collect_video,
)
from ubuntu_diag.core.report import ReportGenerator, generate_report

# Models
from ubuntu_diag.models.common import CommandResult, DiagnosticStatus
from ubuntu_diag.models.report import (
    AudioDiagnostic,
    DiagnosticReport,
    RemediationHint,
    ServiceDiagnostic,
    SystemInfo,
    VideoDiagnostic,
)

# Renderers
from ubuntu_diag.renderers import OutputFormat, RenderContext, Renderer, get_renderer
from ubuntu_diag.renderers.json import render_json
from ubuntu_diag.renderers.text import render_text

__all__ = [
    # Version
    "__version__",
    # Core
    "CommandRunner",
    "Runner",
    "collect_audio",
    "collect_video",
    "collect_services",
    "collect_system",
    "ReportGenerator",
    "generate_report",
    # Models
    "CommandResult",
    "DiagnosticStatus",
    "AudioDiagnostic",
    "VideoDiagnostic",
    "ServiceDiagnostic",
    "SystemInfo",
    "DiagnosticReport",
    "RemediationHint",
    # Renderers
    "OutputFormat",
    "RenderContext",
    "Renderer",
    "get_renderer",
    "render_json",
    "render_text",
]
