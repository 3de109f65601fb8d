"""
Audit Models for the bootstrap layer

Every decision the bootstrap layer takes is logged for audit purposes:
configuration validation outcomes, the gate decision, and every render
failure and recovery action. When the app misbehaves in front of a user,
these events are how an operator reconstructs what happened.

DESIGN DECISION: Audit events are append-only. We never modify them.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from kharch_baant.models.config import GateDecision, ValidationReport


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Configuration
    CONFIG_VALIDATED = "config_validated"
    CONFIG_INVALID = "config_invalid"

    # Bootstrap gate
    GATE_PASSED = "gate_passed"
    GATE_BLOCKED = "gate_blocked"

    # Failure containment
    RENDER_FAILED = "render_failed"
    RETRY_REQUESTED = "retry_requested"
    RELOAD_REQUESTED = "reload_requested"
    ERROR_REPORTED = "error_reported"
    ERROR_REPORT_FAILED = "error_report_failed"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utc_now,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - what is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'configuration', 'gate', 'boundary')"
    )
    entity_name: Optional[str] = Field(
        default=None,
        description="Name of the entity (e.g., a key or a containment boundary)"
    )

    # Correlation - ties events of one browser session together
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="Session correlation ID"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    # Error information (if applicable)
    error_type: Optional[str] = None
    error_message: Optional[str] = None
    stack_trace: Optional[str] = None

    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_name": self.entity_name,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_type": self.error_type,
            "error_message": self.error_message,
            "stack_trace": self.stack_trace,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.config_checked(report)
        event = AuditEventBuilder.retry_requested("app", correlation_id)
    """

    @staticmethod
    def config_checked(report: ValidationReport) -> AuditEvent:
        if report.is_valid:
            return AuditEvent(
                event_type=AuditEventType.CONFIG_VALIDATED,
                severity=(
                    AuditSeverity.WARNING if report.warnings else AuditSeverity.INFO
                ),
                entity_type="configuration",
                description="Environment validation passed",
                details={"warnings": list(report.warnings)},
            )
        return AuditEvent(
            event_type=AuditEventType.CONFIG_INVALID,
            severity=AuditSeverity.ERROR,
            entity_type="configuration",
            description=f"Environment validation failed: {len(report.missing)} missing",
            details={
                "missing": [str(entry) for entry in report.missing],
                "warnings": list(report.warnings),
            },
        )

    @staticmethod
    def gate_decided(decision: GateDecision, critical_key: str) -> AuditEvent:
        if decision is GateDecision.BLOCKED:
            return AuditEvent(
                event_type=AuditEventType.GATE_BLOCKED,
                severity=AuditSeverity.ERROR,
                entity_type="gate",
                entity_name=critical_key,
                description=f"Application blocked: {critical_key} is not set",
            )
        return AuditEvent(
            event_type=AuditEventType.GATE_PASSED,
            entity_type="gate",
            entity_name=critical_key,
            description="Application gate passed",
        )

    @staticmethod
    def render_failed(
        boundary: str,
        error: Exception,
        stack_trace: Optional[str] = None,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.RENDER_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="boundary",
            entity_name=boundary,
            correlation_id=correlation_id,
            description=f"Render failure contained by '{boundary}'",
            error_type=type(error).__name__,
            error_message=str(error),
            stack_trace=stack_trace,
        )

    @staticmethod
    def retry_requested(
        boundary: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.RETRY_REQUESTED,
            entity_type="boundary",
            entity_name=boundary,
            correlation_id=correlation_id,
            description=f"User retried rendering '{boundary}'",
            is_user_action=True,
        )

    @staticmethod
    def reload_requested(
        boundary: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.RELOAD_REQUESTED,
            severity=AuditSeverity.WARNING,
            entity_type="boundary",
            entity_name=boundary,
            correlation_id=correlation_id,
            description=f"User requested a full reload from '{boundary}'",
            is_user_action=True,
        )

    @staticmethod
    def error_reported(
        error: Exception,
        context: dict[str, Any],
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ERROR_REPORTED,
            severity=AuditSeverity.CRITICAL,
            entity_type="boundary",
            entity_name=context.get("boundary"),
            description="Render failure reported from production",
            error_type=type(error).__name__,
            error_message=str(error),
            stack_trace=context.get("stack_trace"),
            details={
                key: value for key, value in context.items()
                if key not in ("boundary", "stack_trace")
            },
        )

    @staticmethod
    def error_report_failed(
        boundary: str,
        error: Exception,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ERROR_REPORT_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="boundary",
            entity_name=boundary,
            correlation_id=correlation_id,
            description="Error reporting sink failed",
            error_type=type(error).__name__,
            error_message=str(error),
        )
