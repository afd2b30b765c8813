"""Data models for ubuntu-diag.

All models are Pydantic BaseModel with frozen=True for immutability.
"""

from ubuntu_diag.models.common import (
    SENTINEL_EXIT_CODE,
    CommandResult,
    DiagnosticError,
    DiagnosticStatus,
)
from ubuntu_diag.models.report import (
    UNKNOWN_VALUE,
    AudioDiagnostic,
    DiagnosticReport,
    RemediationHint,
    ServiceDiagnostic,
    SystemInfo,
    VideoDiagnostic,
)

__all__ = [
    # Common
    "SENTINEL_EXIT_CODE",
    "CommandResult",
    "DiagnosticError",
    "DiagnosticStatus",
    # Report
    "UNKNOWN_VALUE",
    "AudioDiagnostic",
    "DiagnosticReport",
    "RemediationHint",
    "ServiceDiagnostic",
    "SystemInfo",
    "VideoDiagnostic",
]
