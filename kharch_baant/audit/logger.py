"""
Audit Logger

DESIGN DECISION: Every bootstrap decision is logged.
This provides:
1. A record of why a user saw the configuration-error screen
2. A record of every render failure and what the user did about it
3. Correlation of events within one browser session

The audit logger is synchronous - the bootstrap layer runs on the
script thread and has nothing to await.
"""

import logging
import sys
from typing import Optional
from uuid import UUID, uuid4

import structlog

from kharch_baant.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity
from kharch_baant.models.config import GateDecision, ValidationReport


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(level: str = "INFO") -> None:
    """Route structlog output to stderr at the given level."""
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level.upper(), logging.INFO),
        force=True,
    )


class AuditLogger:
    """
    Central audit logging service.

    Writes every event to the structured local log.
    """

    def __init__(self, logger_name: str = "kharch_baant.audit"):
        self._logger = structlog.get_logger(logger_name)

    def log(self, event: AuditEvent) -> None:
        """Log an audit event at a level matching its severity."""
        log_dict = event.to_log_dict()

        if event.severity in (AuditSeverity.ERROR, AuditSeverity.CRITICAL):
            self._logger.error("audit_event", **log_dict)
        elif event.severity is AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity is AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

    def log_config_checked(self, report: ValidationReport) -> None:
        """Log the outcome of an environment validation."""
        self.log(AuditEventBuilder.config_checked(report))

    def log_gate_decision(self, decision: GateDecision, critical_key: str) -> None:
        """Log the bootstrap gate decision."""
        self.log(AuditEventBuilder.gate_decided(decision, critical_key))

    def log_render_failure(
        self,
        boundary: str,
        error: Exception,
        stack_trace: Optional[str] = None,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a render failure caught by a containment boundary."""
        self.log(AuditEventBuilder.render_failed(
            boundary=boundary,
            error=error,
            stack_trace=stack_trace,
            correlation_id=correlation_id,
        ))

    def log_retry(self, boundary: str, correlation_id: Optional[UUID] = None) -> None:
        """Log a user retry."""
        self.log(AuditEventBuilder.retry_requested(boundary, correlation_id))

    def log_reload(self, boundary: str, correlation_id: Optional[UUID] = None) -> None:
        """Log a user reload."""
        self.log(AuditEventBuilder.reload_requested(boundary, correlation_id))

    def log_error_report_failed(
        self,
        boundary: str,
        error: Exception,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a failure of the error reporting sink."""
        self.log(AuditEventBuilder.error_report_failed(boundary, error, correlation_id))


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this once per browser session and pass it to every boundary.
    """
    return uuid4()
