"""ReportGenerator for assembling a full diagnostic report."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from typing import Callable, Iterable, TypeVar

from ubuntu_diag.core.collectors import (
    collect_audio,
    collect_services,
    collect_system,
    collect_video,
)
from ubuntu_diag.core.runner import CommandRunner, Runner
from ubuntu_diag.models.common import DiagnosticStatus
from ubuntu_diag.models.report import (
    AudioDiagnostic,
    DiagnosticReport,
    ServiceDiagnostic,
    SystemInfo,
    VideoDiagnostic,
)
from ubuntu_diag.utils.errors import validate_timeout
from ubuntu_diag.utils.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ReportGenerator:
    """Runs every collector and assembles a DiagnosticReport.

    The generator never raises for tool problems: collectors already turn
    those into UNKNOWN fields, and anything unexpected that escapes a
    collector is logged and replaced with that collector's empty record.

    Example:
        generator = ReportGenerator(timeout=3.0)
        report = generator.generate(["pipewire", "pipewire-pulse"])
        print(report.audio.sinks_found)
    """

    def __init__(
        self,
        runner: Runner | None = None,
        timeout: float = 5.0,
        parallel: bool = True,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize the report generator.

        Args:
            runner: Runner for external commands. Defaults to CommandRunner().
            timeout: Per-command timeout in seconds
            parallel: Run the collectors in worker threads
            clock: Source of the report timestamp
        """
        validate_timeout(timeout)
        self._runner = runner or CommandRunner()
        self._timeout = timeout
        self._parallel = parallel
        self._clock = clock or _utcnow

    @property
    def timeout(self) -> float:
        return self._timeout

    def audio(self) -> AudioDiagnostic:
        """Collect audio diagnostics only."""
        return self._safe("audio", lambda: collect_audio(self._runner, self._timeout), AudioDiagnostic)

    def video(self) -> VideoDiagnostic:
        """Collect video diagnostics only."""
        return self._safe("video", lambda: collect_video(self._runner, self._timeout), VideoDiagnostic)

    def services(self, service_names: Iterable[str], user: bool = False) -> list[ServiceDiagnostic]:
        """Check the given systemd units only."""
        names = list(service_names)
        return self._safe(
            "services",
            lambda: collect_services(self._runner, names, self._timeout, user=user),
            lambda: _unknown_services(names),
        )

    def system(self) -> SystemInfo:
        """Collect host identification only."""
        return self._safe("system", lambda: collect_system(self._runner, self._timeout), SystemInfo)

    def generate(self, service_names: Iterable[str], user_services: bool = False) -> DiagnosticReport:
        """Generate a complete report.

        Args:
            service_names: systemd units to check, in display order
            user_services: Query the user service manager

        Returns:
            A DiagnosticReport stamped with the time the call started
        """
        generated_at = self._clock()
        names = list(service_names)
        logger.debug("Generating diagnostic report (%d services)", len(names))

        if self._parallel:
            with ThreadPoolExecutor(max_workers=4, thread_name_prefix="collector") as pool:
                audio = pool.submit(self.audio)
                video = pool.submit(self.video)
                services = pool.submit(self.services, names, user_services)
                system = pool.submit(self.system)
                return DiagnosticReport(
                    audio=audio.result(),
                    video=video.result(),
                    services=services.result(),
                    system=system.result(),
                    generated_at=generated_at,
                )

        return DiagnosticReport(
            audio=self.audio(),
            video=self.video(),
            services=self.services(names, user_services),
            system=self.system(),
            generated_at=generated_at,
        )

    @staticmethod
    def _safe(name: str, collect: Callable[[], T], fallback: Callable[[], T]) -> T:
        try:
            return collect()
        except Exception:
            logger.exception("Collector %s failed, reporting unknown values", name)
            return fallback()


def _unknown_services(names: list[str]) -> list[ServiceDiagnostic]:
    unique = list(dict.fromkeys(names))
    return [ServiceDiagnostic(service_name=name, status=DiagnosticStatus.UNKNOWN) for name in unique]


def generate_report(
    service_names: Iterable[str],
    runner: Runner | None = None,
    timeout: float = 5.0,
    parallel: bool = True,
    user_services: bool = False,
) -> DiagnosticReport:
    """Generate a complete report with a one-off ReportGenerator.

    Args:
        service_names: systemd units to check
        runner: Runner for external commands. Defaults to CommandRunner().
        timeout: Per-command timeout in seconds
        parallel: Run the collectors concurrently
        user_services: Query the user service manager

    Returns:
        The assembled DiagnosticReport
    """
    generator = ReportGenerator(runner=runner, timeout=timeout, parallel=parallel)
    return generator.generate(service_names, user_services=user_services)
