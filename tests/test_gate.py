"""
Tests for the bootstrap gate.
"""

import pytest
from structlog.testing import capture_logs

from kharch_baant.audit import AuditLogger
from kharch_baant.bootstrap import BootstrapGate
from kharch_baant.config import ConfigResolver, ExecutionMode
from kharch_baant.models.config import GateDecision
from kharch_baant.services.identity import SessionIdentityProvider
from kharch_baant.validation import ConfigValidator


class RecordingViews:
    """Collects what the gate rendered."""

    def __init__(self):
        self.blocked = []
        self.protected = []

    def render_blocked(self, key):
        self.blocked.append(key)

    def render_protected(self, provider):
        self.protected.append(provider)


class TestGateDecision:
    """Tests for BootstrapGate.decide."""

    @pytest.mark.parametrize("environ", [
        {},
        {"CLERK_PUBLISHABLE_KEY": ""},
        {"CLERK_PUBLISHABLE_KEY": "   "},
    ])
    def test_blocked_without_key(self, environ):
        gate = BootstrapGate(ConfigResolver(environ))
        assert gate.decide() is GateDecision.BLOCKED

    @pytest.mark.parametrize("value", ["pk_test_abc", "  pk_test_abc  ", "x"])
    def test_passed_with_any_non_blank_key(self, value):
        gate = BootstrapGate(ConfigResolver({"CLERK_PUBLISHABLE_KEY": value}))
        assert gate.decide() is GateDecision.PASSED

    def test_gate_ignores_other_missing_keys(self):
        """The gate only looks at its critical key."""
        gate = BootstrapGate(ConfigResolver({"CLERK_PUBLISHABLE_KEY": "pk_test_abc"}))
        assert gate.decide() is GateDecision.PASSED

    def test_decision_is_made_once(self):
        """Changing the underlying mapping after the decision has no effect."""
        environ = {}
        gate = BootstrapGate(ConfigResolver(environ))
        assert gate.decide() is GateDecision.BLOCKED

        environ["CLERK_PUBLISHABLE_KEY"] = "pk_test_abc"
        assert gate.decide() is GateDecision.BLOCKED

    def test_custom_critical_key(self):
        gate = BootstrapGate(ConfigResolver({"AUTH_KEY": "k"}), critical_key="AUTH_KEY")
        assert gate.critical_key == "AUTH_KEY"
        assert gate.decide() is GateDecision.PASSED

    def test_decision_logged_once(self):
        with capture_logs() as logs:
            gate = BootstrapGate(ConfigResolver({}), audit_logger=AuditLogger())
            gate.decide()
            gate.decide()

        assert len(logs) == 1
        assert logs[0]["event_type"] == "gate_blocked"
        assert logs[0]["entity_name"] == "CLERK_PUBLISHABLE_KEY"


class TestGateMount:
    """Tests for BootstrapGate.mount."""

    def test_blocked_renders_configuration_error_only(self):
        views = RecordingViews()
        gate = BootstrapGate(ConfigResolver({}))

        decision = gate.mount(views.render_blocked, views.render_protected, session={})

        assert decision is GateDecision.BLOCKED
        assert views.blocked == ["CLERK_PUBLISHABLE_KEY"]
        assert views.protected == []

    def test_passed_mounts_identity_provider(self):
        views = RecordingViews()
        gate = BootstrapGate(
            ConfigResolver({"CLERK_PUBLISHABLE_KEY": " pk_test_abc "}),
            sign_in_url="/login",
        )

        decision = gate.mount(views.render_blocked, views.render_protected, session={})

        assert decision is GateDecision.PASSED
        assert views.blocked == []
        [provider] = views.protected
        assert isinstance(provider, SessionIdentityProvider)
        assert provider.config.publishable_key == " pk_test_abc "
        assert provider.config.sign_in_url == "/login"
        assert provider.config.sign_up_url == "/sign-up"

    def test_custom_provider_factory_receives_session(self):
        views = RecordingViews()
        session = {"identity_user": {"user_id": "user_1"}}
        received = []

        def factory(config, state):
            received.append((config, state))
            return SessionIdentityProvider(config, state)

        gate = BootstrapGate(
            ConfigResolver({"CLERK_PUBLISHABLE_KEY": "pk_test_abc"}),
            provider_factory=factory,
        )
        gate.mount(views.render_blocked, views.render_protected, session=session)

        assert received[0][1] is session
        assert views.protected[0].current_user().user_id == "user_1"


class TestEndToEnd:
    """Validator and gate over the same snapshot."""

    def test_missing_supabase_url_does_not_block_gate(self):
        resolver = ConfigResolver({
            "SUPABASE_ANON_KEY": "anon",
            "API_MODE": "supabase",
            "CLERK_PUBLISHABLE_KEY": "pk_test_abc",
        })
        report = ConfigValidator(resolver, execution_mode=ExecutionMode.PRODUCTION).validate()
        gate = BootstrapGate(resolver)

        assert report.missing_keys == ["SUPABASE_URL"]
        assert report.is_valid is False
        assert gate.decide() is GateDecision.PASSED


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
