"""Common model types shared across modules."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, model_validator

# Exit code reported when a command could not be spawned or was killed.
SENTINEL_EXIT_CODE = -1


class DiagnosticStatus(str, Enum):
    """Health indicator used uniformly across all diagnostic categories."""

    PASS = "pass"
    WARN = "warn"
    FAIL = "fail"
    UNKNOWN = "unknown"


class DiagnosticError(BaseModel):
    """Represents an error that occurred while collecting diagnostics."""

    model_config = {"frozen": True}

    code: str = Field(description="Error code for programmatic handling")
    message: str = Field(description="Human-readable error message")
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional error context",
    )

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class CommandResult(BaseModel):
    """Outcome of running one external program.

    A nonzero exit is data, not an error. ``exit_code`` is
    ``SENTINEL_EXIT_CODE`` when the program could not be started or
    was killed after a timeout.
    """

    model_config = {"frozen": True}

    program: str = Field(description="Program that was executed")
    args: list[str] = Field(default_factory=list, description="Arguments passed to the program")
    stdout: str = Field(default="", description="Captured standard output")
    stderr: str = Field(default="", description="Captured standard error")
    exit_code: int = Field(default=0, description="Process exit code")
    timed_out: bool = Field(default=False, description="Whether the timeout fired")
    duration: float = Field(default=0.0, ge=0.0, description="Wall time in seconds")

    @model_validator(mode="after")
    def _check_timeout_sentinel(self) -> "CommandResult":
        if self.timed_out and self.exit_code != SENTINEL_EXIT_CODE:
            raise ValueError("timed out results must carry the sentinel exit code")
        return self

    @property
    def ok(self) -> bool:
        """Whether the program ran to completion with exit code 0."""
        return self.exit_code == 0 and not self.timed_out

    @property
    def spawn_failed(self) -> bool:
        """Whether the program could not be started at all."""
        return self.exit_code == SENTINEL_EXIT_CODE and not self.timed_out

    @property
    def available(self) -> bool:
        """Whether the program ran and exited on its own, whatever the code."""
        return not self.spawn_failed and not self.timed_out

    @property
    def command_line(self) -> str:
        return " ".join([self.program, *self.args])

    @classmethod
    def not_found(cls, program: str, args: list[str], message: str) -> "CommandResult":
        """Create a result for a program that could not be spawned."""
        return cls(
            program=program,
            args=list(args),
            stderr=message,
            exit_code=SENTINEL_EXIT_CODE,
        )

    @classmethod
    def timeout(
        cls,
        program: str,
        args: list[str],
        stdout: str = "",
        stderr: str = "",
        duration: float = 0.0,
    ) -> "CommandResult":
        """Create a result for a program that was killed after a timeout."""
        return cls(
            program=program,
            args=list(args),
            stdout=stdout,
            stderr=stderr,
            exit_code=SENTINEL_EXIT_CODE,
            timed_out=True,
            duration=duration,
        )

    def raise_for_status(self) -> None:
        """Raise if the program was missing or timed out.

        Raises:
            ToolMissingError: If the program could not be spawned
            ToolTimeoutError: If the program was killed after a timeout
        """
        from ubuntu_diag.utils.errors import ToolMissingError, ToolTimeoutError

        if self.timed_out:
            raise ToolTimeoutError(self.program, timeout=self.duration or None)
        if self.spawn_failed:
            raise ToolMissingError(self.program, reason=self.stderr)
