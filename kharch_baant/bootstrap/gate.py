"""
Bootstrap Gate

DESIGN DECISION: The protected application tree is NEVER mounted without
the identity provider's publishable key. Without it no session is possible
and every deeper page would fail in unpredictable ways, so the user gets a
static configuration-error view instead.

The gate does its own minimal check on one key. It does not wait for the
full validator, and it does not retry or poll: the decision is made once
and a process restart is the only way to change it.
"""

from collections.abc import Callable, MutableMapping
from typing import Any, Optional

from kharch_baant.audit import AuditLogger
from kharch_baant.config.keys import CRITICAL_KEY
from kharch_baant.config.resolver import ConfigResolver
from kharch_baant.models.config import GateDecision
from kharch_baant.services.identity import (
    IdentityProviderConfig,
    IdentityProviderInterface,
    SessionIdentityProvider,
)


ProviderFactory = Callable[[IdentityProviderConfig, MutableMapping], IdentityProviderInterface]


class BootstrapGate:
    """
    Decides whether to mount the protected tree or the blocking view.

    Flow:
    1. decide() - resolve the critical key once; BLOCKED if absent or blank
    2. mount() - BLOCKED: render the configuration-error view
                 PASSED: build the identity provider, render the protected tree
    """

    def __init__(
        self,
        resolver: ConfigResolver,
        critical_key: str = CRITICAL_KEY,
        sign_in_url: str = "/sign-in",
        sign_up_url: str = "/sign-up",
        provider_factory: ProviderFactory = SessionIdentityProvider,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._resolver = resolver
        self._critical_key = critical_key
        self._sign_in_url = sign_in_url
        self._sign_up_url = sign_up_url
        self._provider_factory = provider_factory
        self._audit_logger = audit_logger
        self._decision: Optional[GateDecision] = None

    @property
    def critical_key(self) -> str:
        return self._critical_key

    def decide(self) -> GateDecision:
        """
        Decide once; later calls return the same decision.
        """
        if self._decision is None:
            value = self._resolver.resolve(self._critical_key)
            if value is None or not value.strip():
                self._decision = GateDecision.BLOCKED
            else:
                self._decision = GateDecision.PASSED

            if self._audit_logger:
                self._audit_logger.log_gate_decision(self._decision, self._critical_key)

        return self._decision

    def provider_config(self) -> IdentityProviderConfig:
        """Provider configuration for a PASSED gate."""
        return IdentityProviderConfig(
            publishable_key=self._resolver.resolve(self._critical_key) or "",
            sign_in_url=self._sign_in_url,
            sign_up_url=self._sign_up_url,
        )

    def mount(
        self,
        render_blocked: Callable[[str], Any],
        render_protected: Callable[[IdentityProviderInterface], Any],
        session: MutableMapping,
    ) -> GateDecision:
        """
        Render whichever side of the gate applies.

        Args:
            render_blocked: Called with the missing key name.
            render_protected: Called with the mounted identity provider.
            session: Per-session state handed to the identity provider.

        Returns:
            The gate decision.
        """
        decision = self.decide()

        if decision is GateDecision.BLOCKED:
            render_blocked(self._critical_key)
            return decision

        provider = self._provider_factory(self.provider_config(), session)
        render_protected(provider)
        return decision
