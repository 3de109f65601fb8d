"""
Bootstrap Orchestrator

This module ties together the bootstrap components:
1. Capture the environment snapshot (once per process)
2. Validate it (report for operators)
3. Gate the app on the identity provider key
4. Wrap the mounted app in a failure containment boundary

DESIGN DECISION: Components are created here and handed to the UI.
The UI never reads the environment or settings itself.
"""

from collections.abc import Callable, Mapping, MutableMapping
from typing import Any, NamedTuple, Optional
from uuid import UUID

from kharch_baant.audit import AuditLogger
from kharch_baant.bootstrap import (
    AuditErrorReporter,
    BootstrapGate,
    ErrorReporter,
    FailureContainment,
    RecoveryContext,
)
from kharch_baant.config import (
    ConfigResolver,
    EnvironmentSnapshot,
    RuntimeSettings,
    get_settings,
)
from kharch_baant.validation import ConfigValidator


class BootstrapComponents(NamedTuple):
    settings: RuntimeSettings
    resolver: ConfigResolver
    validator: ConfigValidator
    gate: BootstrapGate
    reporter: ErrorReporter
    audit_logger: AuditLogger


def create_bootstrap_components(
    settings: Optional[RuntimeSettings] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> BootstrapComponents:
    """
    Factory function to create the per-process bootstrap components.

    Args:
        settings: Runtime settings. Loaded from the environment if None.
        environ: Environment to capture. Defaults to os.environ.

    Raises:
        SettingsLoadError: If runtime settings are invalid.
    """
    settings = settings or get_settings()
    audit_logger = AuditLogger()

    snapshot = EnvironmentSnapshot.capture(environ=environ, env_file=settings.env_file)
    resolver = ConfigResolver(snapshot)

    validator = ConfigValidator(
        resolver,
        execution_mode=settings.execution_mode,
        audit_logger=audit_logger,
    )
    gate = BootstrapGate(
        resolver,
        sign_in_url=settings.sign_in_url,
        sign_up_url=settings.sign_up_url,
        audit_logger=audit_logger,
    )

    return BootstrapComponents(
        settings=settings,
        resolver=resolver,
        validator=validator,
        gate=gate,
        reporter=AuditErrorReporter(audit_logger),
        audit_logger=audit_logger,
    )


def create_containment(
    components: BootstrapComponents,
    state: MutableMapping,
    recovery_view: Callable[[RecoveryContext], Any],
    name: str = "app",
    fallback: Optional[Callable[[Exception, Callable[[], None]], Any]] = None,
    on_reload: Optional[Callable[[], None]] = None,
    correlation_id: Optional[UUID] = None,
    placeholder: Optional[Callable[[], Any]] = None,
) -> FailureContainment:
    """Create a per-session containment boundary wired to the components."""
    return FailureContainment(
        name=name,
        state=state,
        recovery_view=recovery_view,
        fallback=fallback,
        execution_mode=components.settings.execution_mode,
        reporter=components.reporter,
        audit_logger=components.audit_logger,
        on_reload=on_reload,
        correlation_id=correlation_id,
        placeholder=placeholder,
    )
