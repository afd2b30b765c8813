"""Error handling utilities for ubuntu-diag."""

from __future__ import annotations

from typing import Any

from ubuntu_diag.models.common import DiagnosticError

# Characters that never appear in a systemd unit name
_FORBIDDEN_UNIT_CHARS = set("<>|;&$`\"'\\(){}*?!")


class UbuntuDiagError(Exception):
    """Base exception for ubuntu-diag."""

    def __init__(self, message: str, code: str = "UNKNOWN_ERROR", details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_diagnostic_error(self) -> DiagnosticError:
        """Convert to DiagnosticError model."""
        return DiagnosticError(code=self.code, message=self.message, details=self.details)


class ValidationError(UbuntuDiagError):
    """Validation failed."""

    def __init__(self, message: str, field: str | None = None):
        details = {"field": field} if field else {}
        super().__init__(message, code="VALIDATION_ERROR", details=details)


class ConfigurationError(UbuntuDiagError):
    """Configuration error."""

    def __init__(self, message: str, config_key: str | None = None):
        details = {"config_key": config_key} if config_key else {}
        super().__init__(message, code="CONFIG_ERROR", details=details)


class ToolMissingError(UbuntuDiagError):
    """An external program could not be spawned."""

    def __init__(self, program: str, reason: str | None = None):
        message = f"Tool not available: {program}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message, code="TOOL_MISSING", details={"program": program})


class ToolTimeoutError(UbuntuDiagError):
    """An external program did not finish in time."""

    def __init__(self, program: str, timeout: float | None = None):
        details: dict[str, Any] = {"program": program}
        if timeout:
            details["timeout"] = timeout
        super().__init__(f"Tool timed out: {program}", code="TOOL_TIMEOUT", details=details)


def validate_service_name(name: str) -> None:
    """Validate a systemd unit name before it is passed to systemctl.

    Args:
        name: Unit name to validate

    Raises:
        ValidationError: If name is invalid
    """
    if not name or not name.strip():
        raise ValidationError("Service name cannot be empty", field="service")

    if name.startswith("-"):
        raise ValidationError("Service name cannot start with '-'", field="service")

    for char in name:
        if char.isspace():
            raise ValidationError("Service name cannot contain whitespace", field="service")
        if char in _FORBIDDEN_UNIT_CHARS:
            raise ValidationError(
                f"Service name contains invalid character: {char}",
                field="service",
            )


def validate_timeout(timeout: float) -> None:
    """Validate a command timeout.

    Raises:
        ValidationError: If timeout is not a positive number
    """
    if timeout <= 0:
        raise ValidationError(f"Timeout must be positive, got {timeout}", field="timeout")
