"""Bootstrap gate and failure containment."""

from kharch_baant.bootstrap.containment import FailureContainment, RecoveryContext
from kharch_baant.bootstrap.gate import BootstrapGate
from kharch_baant.bootstrap.reporting import AuditErrorReporter, ErrorReporter

__all__ = [
    "AuditErrorReporter",
    "BootstrapGate",
    "ErrorReporter",
    "FailureContainment",
    "RecoveryContext",
]
