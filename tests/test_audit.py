"""
Tests for the audit logger and the audit-backed error reporter.
"""

import pytest
from structlog.testing import capture_logs

from kharch_baant.audit import AuditLogger, create_correlation_id
from kharch_baant.bootstrap import AuditErrorReporter
from kharch_baant.models.audit import AuditEvent, AuditEventType, AuditSeverity
from kharch_baant.models.config import GateDecision


class TestAuditLogger:
    """Tests for AuditLogger."""

    @pytest.mark.parametrize("severity, level", [
        (AuditSeverity.DEBUG, "debug"),
        (AuditSeverity.INFO, "info"),
        (AuditSeverity.WARNING, "warning"),
        (AuditSeverity.ERROR, "error"),
        (AuditSeverity.CRITICAL, "error"),
    ])
    def test_severity_maps_to_level(self, severity, level):
        with capture_logs() as logs:
            AuditLogger().log(AuditEvent(
                event_type=AuditEventType.GATE_PASSED,
                severity=severity,
                description="test",
            ))

        assert logs[0]["log_level"] == level
        assert logs[0]["event"] == "audit_event"

    def test_log_gate_decision(self):
        with capture_logs() as logs:
            AuditLogger().log_gate_decision(GateDecision.PASSED, "CLERK_PUBLISHABLE_KEY")

        assert logs[0]["event_type"] == "gate_passed"
        assert logs[0]["entity_type"] == "gate"

    def test_correlation_ids_are_unique(self):
        assert create_correlation_id() != create_correlation_id()


class TestAuditErrorReporter:
    """Tests for AuditErrorReporter."""

    def test_report_logs_critical_event(self):
        with capture_logs() as logs:
            reporter = AuditErrorReporter(AuditLogger())
            reporter.report(
                ValueError("bad split"),
                {"boundary": "app", "stack_trace": "Traceback ..."},
            )

        assert len(logs) == 1
        assert logs[0]["event_type"] == "error_reported"
        assert logs[0]["severity"] == "critical"
        assert logs[0]["error_type"] == "ValueError"
        assert logs[0]["entity_name"] == "app"

    def test_report_without_context(self):
        with capture_logs() as logs:
            AuditErrorReporter(AuditLogger()).report(RuntimeError("boom"))

        assert logs[0]["entity_name"] is None


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
