"""Command runner for external diagnostic tools."""

from __future__ import annotations

import os
import signal
import subprocess
import time
from typing import Mapping, Protocol, Sequence, runtime_checkable

from ubuntu_diag.models.common import CommandResult
from ubuntu_diag.utils.errors import validate_timeout
from ubuntu_diag.utils.logging import get_logger

logger = get_logger(__name__)

# Seconds to wait for a killed child to release its pipes
_REAP_TIMEOUT = 2.0


def _as_text(data: str | bytes | None) -> str:
    if data is None:
        return ""
    if isinstance(data, bytes):
        return data.decode("utf-8", errors="replace")
    return data


@runtime_checkable
class Runner(Protocol):
    """Protocol for anything that can execute an external program.

    Collectors only depend on this protocol, so tests can pass a stub
    that returns canned results instead of touching the real system.

    Example:
        class StubRunner:
            def run(self, program, args, timeout):
                return CommandResult(program=program, args=list(args), stdout="active\\n")
    """

    def run(self, program: str, args: Sequence[str], timeout: float) -> CommandResult:
        """Run a program and return its captured result."""
        ...


class CommandRunner:
    """Runs external programs with a timeout.

    Each call spawns exactly one child process. A nonzero exit is
    reported in the result, a missing program yields a result with the
    sentinel exit code, and a child that outlives its timeout is killed
    and reaped before returning.

    Example:
        runner = CommandRunner()
        result = runner.run("systemctl", ["is-active", "pipewire"], timeout=5.0)
        print(result.exit_code, result.stdout)
    """

    def __init__(self, env: Mapping[str, str] | None = None, locale: str | None = "C") -> None:
        """Initialize the runner.

        Args:
            env: Base environment for children. Defaults to os.environ.
            locale: Value forced into LC_ALL and LANG, or None to inherit
        """
        self._env = dict(os.environ if env is None else env)
        if locale:
            self._env["LC_ALL"] = locale
            self._env["LANG"] = locale

    @property
    def env(self) -> dict[str, str]:
        """Environment handed to child processes."""
        return dict(self._env)

    def run(self, program: str, args: Sequence[str], timeout: float) -> CommandResult:
        """Run a program and capture its output.

        Args:
            program: Executable name or path
            args: Arguments, may be empty
            timeout: Seconds to wait before killing the child

        Returns:
            CommandResult describing the outcome

        Raises:
            ValidationError: If timeout is not positive
        """
        validate_timeout(timeout)
        args = list(args)
        logger.debug("Running command: %s", " ".join([program, *args]))

        start = time.monotonic()
        try:
            process = subprocess.Popen(
                [program, *args],
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                errors="replace",
                env=self._env,
                start_new_session=True,
            )
        except OSError as e:
            logger.debug("Failed to spawn %s: %s", program, e)
            return CommandResult.not_found(program, args, str(e))

        try:
            stdout, stderr = process.communicate(timeout=timeout)
        except subprocess.TimeoutExpired as e:
            stdout, stderr = self._terminate(process, e)
            duration = time.monotonic() - start
            logger.warning("Command timed out after %.1fs: %s", timeout, program)
            return CommandResult.timeout(
                program,
                args,
                stdout=stdout or "",
                stderr=stderr or "",
                duration=duration,
            )

        duration = time.monotonic() - start
        exit_code = process.returncode
        if exit_code < 0:
            # Killed by a signal: use the shell convention so -1 stays reserved
            exit_code = 128 - exit_code
        if exit_code != 0:
            logger.debug("Command %s exited with code %d: %s", program, exit_code, stderr.strip())

        return CommandResult(
            program=program,
            args=args,
            stdout=stdout,
            stderr=stderr,
            exit_code=exit_code,
            duration=duration,
        )

    @staticmethod
    def _terminate(
        process: subprocess.Popen, expired: subprocess.TimeoutExpired
    ) -> tuple[str, str]:
        """Kill a timed out child and its process group, then reap it.

        Returns:
            Output captured before the kill
        """
        try:
            os.killpg(process.pid, signal.SIGKILL)
        except (ProcessLookupError, PermissionError):
            process.kill()

        try:
            stdout, stderr = process.communicate(timeout=_REAP_TIMEOUT)
        except subprocess.TimeoutExpired:
            # A descendant escaped the group and still holds the pipes
            for stream in (process.stdout, process.stderr):
                if stream is not None:
                    stream.close()
            process.wait()
            stdout, stderr = expired.stdout, expired.stderr

        return _as_text(stdout), _as_text(stderr)


def run(program: str, args: Sequence[str], timeout: float) -> CommandResult:
    """Run a program with a default CommandRunner.

    Args:
        program: Executable name or path
        args: Arguments, may be empty
        timeout: Seconds to wait before killing the child

    Returns:
        CommandResult describing the outcome
    """
    return CommandRunner().run(program, args, timeout)
