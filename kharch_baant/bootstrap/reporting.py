"""
Error Reporting

Render failures in production are forwarded to an error reporting sink.
Reporting is fire-and-forget: the containment boundary never reads a
result, and a failing sink must not take the recovery screen down with it.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from kharch_baant.audit import AuditLogger
from kharch_baant.models.audit import AuditEventBuilder


class ErrorReporter(ABC):
    """Abstract error reporting sink."""

    @abstractmethod
    def report(self, error: Exception, context: Optional[dict[str, Any]] = None) -> None:
        """
        Report a captured error.

        Args:
            error: The captured error
            context: Structural context (boundary name, stack trace, ...)
        """
        pass


class AuditErrorReporter(ErrorReporter):
    """Reports errors as critical audit events in the structured log."""

    def __init__(self, audit_logger: Optional[AuditLogger] = None):
        self._audit_logger = audit_logger or AuditLogger("kharch_baant.errors")

    def report(self, error: Exception, context: Optional[dict[str, Any]] = None) -> None:
        self._audit_logger.log(AuditEventBuilder.error_reported(error, context or {}))
