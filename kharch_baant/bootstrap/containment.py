"""
Failure Containment

DESIGN DECISION: A render failure anywhere below the boundary is turned
into state instead of a crashed page. The boundary has exactly two states:

    HEALTHY --(error while rendering children)--> FAILED(error)
    FAILED  --(user clicks Retry)---------------> HEALTHY
    FAILED  --(user clicks Reload)--------------> all session state discarded

There is no automatic recovery. Retry may fail again straight away if the
defect is still there; that loop is driven by the user, one click at a
time. Reload is the way out when Retry cannot help.

Only errors raised synchronously while the children render are caught.
Errors in background threads or callbacks never pass through here.
Framework control flow (rerun/stop signals) is not an Exception subclass
and passes through untouched.

When given a placeholder factory, the children draw into a fresh slot that
is emptied on failure, so nothing half-rendered stays next to the recovery
view.
"""

import traceback
from collections.abc import Callable, MutableMapping
from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from kharch_baant.audit import AuditLogger
from kharch_baant.bootstrap.reporting import ErrorReporter
from kharch_baant.config.settings import ExecutionMode
from kharch_baant.models.health import HealthState


STATE_KEY_PREFIX = "failure_containment"


class RecoveryContext(BaseModel):
    """Everything the default recovery view needs."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    boundary: str
    error: Exception
    retry: Callable[[], None]
    reload: Callable[[], None]
    details: Optional[str] = Field(
        default=None,
        description="Technical details; only set outside production"
    )


class FailureContainment:
    """
    Supervisor boundary around a subtree of page functions.

    State lives in a caller-supplied mapping (the session state) so it
    survives reruns and is destroyed with the session.

    Usage:
        boundary = FailureContainment(
            "app", st.session_state, render_recovery_view, placeholder=st.empty
        )
        boundary.render(render_pages)
    """

    def __init__(
        self,
        name: str,
        state: MutableMapping,
        recovery_view: Callable[[RecoveryContext], Any],
        fallback: Optional[Callable[[Exception, Callable[[], None]], Any]] = None,
        execution_mode: ExecutionMode = ExecutionMode.DEVELOPMENT,
        reporter: Optional[ErrorReporter] = None,
        audit_logger: Optional[AuditLogger] = None,
        on_reload: Optional[Callable[[], None]] = None,
        correlation_id: Optional[UUID] = None,
        placeholder: Optional[Callable[[], Any]] = None,
    ):
        """
        Initialize the boundary.

        Args:
            name: Boundary name, used in state keys and logs.
            state: Mutable mapping holding the health state.
            recovery_view: Default view for the FAILED state.
            fallback: Custom view for the FAILED state. Receives the
                     captured error and a bound retry, and fully replaces
                     the default view.
            execution_mode: Production forwards errors to the reporter;
                     otherwise details are shown inline.
            reporter: Error reporting sink.
            audit_logger: Local structured log.
            on_reload: Full reload hook. Defaults to clearing all state.
            correlation_id: Session correlation ID for log events.
            placeholder: Factory for the slot the children render into,
                     such as st.empty. The slot must offer container()
                     and empty().
        """
        self._name = name
        self._state = state
        self._state_key = f"{STATE_KEY_PREFIX}:{name}"
        self._recovery_view = recovery_view
        self._fallback = fallback
        self._execution_mode = execution_mode
        self._reporter = reporter
        self._audit_logger = audit_logger
        self._on_reload = on_reload
        self._correlation_id = correlation_id
        self._placeholder = placeholder

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_production(self) -> bool:
        return self._execution_mode is ExecutionMode.PRODUCTION

    @property
    def health(self) -> HealthState:
        return self._state.get(self._state_key) or HealthState.healthy()

    @property
    def captured_error(self) -> Optional[Exception]:
        return self.health.error

    def render(self, children: Callable[[], Any]) -> Any:
        """
        Render the children, or the recovery view when FAILED.

        An Exception raised by the children is captured and never
        propagates past this call. Partial output is discarded when
        a placeholder factory was given.
        """
        if self.health.is_healthy:
            slot = self._placeholder() if self._placeholder else None
            try:
                if slot is None:
                    return children()
                with slot.container():
                    return children()
            except Exception as error:
                if slot is not None:
                    slot.empty()
                self._capture(error)

        return self._render_failed()

    def retry(self) -> None:
        """Clear the captured error; the next render runs the children again."""
        if self._audit_logger:
            self._audit_logger.log_retry(self._name, self._correlation_id)
        self._state[self._state_key] = HealthState.healthy()

    def reload(self) -> None:
        """Discard all session state."""
        if self._audit_logger:
            self._audit_logger.log_reload(self._name, self._correlation_id)
        if self._on_reload is not None:
            self._on_reload()
        else:
            self._state.clear()

    def _capture(self, error: Exception) -> None:
        stack_trace = "".join(
            traceback.format_exception(type(error), error, error.__traceback__)
        )
        context = {
            "boundary": self._name,
            "stack_trace": stack_trace,
        }
        if self._correlation_id:
            context["correlation_id"] = str(self._correlation_id)

        self._state[self._state_key] = HealthState.failed(error, context)

        if self._audit_logger:
            self._audit_logger.log_render_failure(
                boundary=self._name,
                error=error,
                stack_trace=stack_trace,
                correlation_id=self._correlation_id,
            )

        if self.is_production and self._reporter:
            try:
                self._reporter.report(error, context)
            except Exception as report_error:
                # Reporting is best-effort; the recovery view must still render
                if self._audit_logger:
                    self._audit_logger.log_error_report_failed(
                        self._name, report_error, self._correlation_id
                    )

    def _render_failed(self) -> Any:
        health = self.health

        if self._fallback is not None:
            return self._fallback(health.error, self.retry)

        return self._recovery_view(RecoveryContext(
            boundary=self._name,
            error=health.error,
            retry=self.retry,
            reload=self.reload,
            details=None if self.is_production else health.context.get("stack_trace"),
        ))
