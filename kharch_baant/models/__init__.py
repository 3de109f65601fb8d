"""
Data Models Package

Pydantic models shared by the configuration validator, the bootstrap
gate, the failure containment boundary and the audit logger.
"""

from kharch_baant.models.config import (
    GateDecision,
    MissingKey,
    ValidationReport,
)
from kharch_baant.models.health import HealthState, HealthStatus
from kharch_baant.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Configuration models
    "GateDecision",
    "MissingKey",
    "ValidationReport",
    # Health models
    "HealthState",
    "HealthStatus",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
