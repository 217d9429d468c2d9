"""Tests for diagnostic sinks, settings and the result pattern."""
from __future__ import annotations

import pytest

from thermal_envelope.domain import IDiagnosticSink, MissingReferenceError
from thermal_envelope.infrastructure import (
    CollectingDiagnosticSink,
    NullDiagnosticSink,
    StructlogDiagnosticSink,
)
from thermal_envelope.shared.config import Settings
from thermal_envelope.shared.result import err, ok


class TestSinks:
    """Tests for IDiagnosticSink implementations."""

    @pytest.mark.parametrize(
        "sink",
        [CollectingDiagnosticSink(), NullDiagnosticSink(), StructlogDiagnosticSink("tests")],
    )
    def test_implements_protocol(self, sink: object) -> None:
        """Test every sink satisfies the protocol."""
        assert isinstance(sink, IDiagnosticSink)

    def test_collecting_records_events(self, sink: CollectingDiagnosticSink) -> None:
        """Test events are recorded with their level and fields."""
        sink.debug("Step", value=1.0)
        sink.warning("Excluded", element_id="W1")

        assert [e.level for e in sink.events] == ["debug", "warning"]
        assert sink.warnings[0].event == "Excluded"
        assert sink.warnings[0].fields == {"element_id": "W1"}

    def test_collecting_forwards(self) -> None:
        """Test events are forwarded to another sink."""
        target = CollectingDiagnosticSink()
        sink = CollectingDiagnosticSink(forward_to=target)
        sink.info("Total", k=0.5)
        assert target.events == sink.events

    def test_clear(self, sink: CollectingDiagnosticSink) -> None:
        """Test recorded events can be forgotten."""
        sink.info("Total")
        sink.clear()
        assert sink.events == []

    def test_structlog_sink_logs(self) -> None:
        """Test the structlog sink accepts events at every level."""
        sink = StructlogDiagnosticSink("tests")
        sink.debug("Debug event", value=1)
        sink.info("Info event", value=2)
        sink.warning("Warning event", value=3)


class TestSettings:
    """Tests for application settings."""

    def test_defaults(self) -> None:
        """Test default thresholds."""
        settings = Settings()
        assert settings.min_envelope_area_m2 == 0.01
        assert settings.min_volume_m3 == 0.01

    def test_environment_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test thresholds can be overridden from the environment."""
        monkeypatch.setenv("MIN_ENVELOPE_AREA_M2", "1.5")
        monkeypatch.setenv("LOG_FORMAT", "json")
        settings = Settings()
        assert settings.min_envelope_area_m2 == 1.5
        assert settings.log_format == "json"

    def test_rejects_negative_threshold(self) -> None:
        """Test thresholds must be non-negative."""
        with pytest.raises(ValueError):
            Settings(min_volume_m3=-1.0)

    def test_only_used_fields(self) -> None:
        """Test settings carry only logging and numeric thresholds."""
        assert set(Settings.model_fields) == {
            "min_envelope_area_m2",
            "min_volume_m3",
            "log_level",
            "log_format",
            "log_file",
        }


class TestResult:
    """Tests for the result pattern."""

    def test_success(self) -> None:
        """Test a success unwraps to its value."""
        result = ok(2.0)
        assert not result.is_failure()
        assert result.unwrap() == 2.0

    def test_failure(self) -> None:
        """Test a failure keeps its error and refuses to unwrap."""
        error = MissingReferenceError("Space", "S9", "W1", "space")
        result = err(error)
        assert result.is_failure()
        assert result.error is error
        with pytest.raises(ValueError, match="Cannot unwrap Failure"):
            result.unwrap()
