"""Unit tests for data models."""

import pytest
from pydantic import ValidationError

from ubuntu_diag.models.common import SENTINEL_EXIT_CODE, CommandResult, DiagnosticStatus
from ubuntu_diag.models.report import (
    AudioDiagnostic,
    DiagnosticReport,
    ServiceDiagnostic,
    VideoDiagnostic,
)
from ubuntu_diag.utils.errors import ToolMissingError, ToolTimeoutError

from conftest import FIXED_TIME


class TestCommandResult:
    """Tests for CommandResult."""

    def test_ok(self):
        """Test a successful result."""
        result = CommandResult(program="true")
        assert result.ok
        assert result.available
        assert not result.spawn_failed

    def test_not_found(self):
        """Test the spawn failure constructor."""
        result = CommandResult.not_found("pactl", ["info"], "No such file or directory")
        assert result.exit_code == SENTINEL_EXIT_CODE
        assert result.spawn_failed
        assert not result.timed_out
        assert result.stderr == "No such file or directory"

    def test_timeout(self):
        """Test the timeout constructor."""
        result = CommandResult.timeout("sleep", ["30"], stdout="partial", duration=1.5)
        assert result.timed_out
        assert result.exit_code == SENTINEL_EXIT_CODE
        assert not result.spawn_failed
        assert not result.available
        assert result.stdout == "partial"

    def test_timeout_requires_sentinel(self):
        """Test timed out results cannot carry a real exit code."""
        with pytest.raises(ValidationError):
            CommandResult(program="sleep", timed_out=True, exit_code=0)

    def test_frozen(self):
        """Test results are immutable."""
        result = CommandResult(program="true")
        with pytest.raises(ValidationError):
            result.stdout = "changed"

    def test_command_line(self):
        """Test the printable command line."""
        assert CommandResult(program="pactl", args=["list", "sinks"]).command_line == "pactl list sinks"

    def test_raise_for_status(self):
        """Test opt-in exceptions for callers that want them."""
        CommandResult(program="false", exit_code=1).raise_for_status()

        with pytest.raises(ToolMissingError):
            CommandResult.not_found("pactl", [], "missing").raise_for_status()
        with pytest.raises(ToolTimeoutError):
            CommandResult.timeout("pactl", [], duration=2.0).raise_for_status()


class TestAudioDiagnostic:
    """Tests for AudioDiagnostic."""

    def test_defaults(self):
        """Test the empty record."""
        audio = AudioDiagnostic()
        assert audio.pipewire_running == DiagnosticStatus.UNKNOWN
        assert audio.sinks_found == 0
        assert audio.default_sink is None

    def test_negative_counts_rejected(self):
        """Test counts cannot be negative."""
        with pytest.raises(ValidationError):
            AudioDiagnostic(pipewire_running=DiagnosticStatus.PASS, sinks_found=-1)

    def test_no_counts_when_unknown(self):
        """Test counts must be zero when the daemon status is unknown."""
        with pytest.raises(ValidationError):
            AudioDiagnostic(pipewire_running=DiagnosticStatus.UNKNOWN, sinks_found=2)


class TestDiagnosticReport:
    """Tests for DiagnosticReport."""

    def test_duplicate_services_rejected(self):
        """Test service names are unique."""
        with pytest.raises(ValidationError):
            DiagnosticReport(
                services=[
                    ServiceDiagnostic(service_name="pipewire", status=DiagnosticStatus.PASS),
                    ServiceDiagnostic(service_name="pipewire", status=DiagnosticStatus.FAIL),
                ],
                generated_at=FIXED_TIME,
            )

    def test_gpus_may_be_empty(self):
        """Test headless hosts."""
        report = DiagnosticReport(video=VideoDiagnostic(gpus_found=[]), generated_at=FIXED_TIME)
        assert report.video.gpus_found == []

    def test_summary(self, sample_report):
        """Test status counts."""
        summary = sample_report.summary()
        assert summary[DiagnosticStatus.PASS] == 4
        assert summary[DiagnosticStatus.FAIL] == 1
        assert summary[DiagnosticStatus.WARN] == 0
        assert summary[DiagnosticStatus.UNKNOWN] == 0
        assert list(summary) == list(DiagnosticStatus)

    def test_all_statuses(self, empty_report):
        """Test the empty report is all unknown."""
        assert empty_report.all_statuses() == [DiagnosticStatus.UNKNOWN] * 3

    def test_hints_in_display_order(self, sample_report):
        """Test audio, video and service hints are gathered in section order."""
        hints = sample_report.hints()
        assert [hint.category for hint in hints] == ["audio", "services"]
        assert hints[1].command == "sudo systemctl start wireplumber"

    def test_empty_report_has_no_hints(self, empty_report):
        """Test a report without findings suggests nothing."""
        assert empty_report.hints() == []

    def test_json_round_trip(self, sample_report):
        """Test the report survives serialization."""
        restored = DiagnosticReport.model_validate_json(sample_report.model_dump_json())
        assert restored == sample_report
