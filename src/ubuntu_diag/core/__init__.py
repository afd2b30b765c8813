"""Core diagnostic pipeline: runner, parsers, collectors, remediation hints and report generator."""

from ubuntu_diag.core.collectors import (
    collect_audio,
    collect_services,
    collect_system,
    collect_video,
)
from ubuntu_diag.core.report import ReportGenerator, generate_report
from ubuntu_diag.core.runner import CommandRunner, Runner, run

__all__ = [
    "CommandRunner",
    "Runner",
    "run",
    "collect_audio",
    "collect_video",
    "collect_services",
    "collect_system",
    "ReportGenerator",
    "generate_report",
]
