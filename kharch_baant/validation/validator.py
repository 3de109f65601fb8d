"""
Environment Validation

DESIGN DECISION: Validation happens in two passes over fixed key tables.

PASS 1 - PRESENCE:
- Every required key must be set to a non-blank value
- Unset optional keys with an advisory produce a warning

PASS 2 - PRODUCTION CHECKS (production execution mode only):
- Debug mode left enabled is a warning
- Required keys still holding .env.example template text count as
  missing, in addition to the presence check

IMPORTANT: Validation NEVER raises and NEVER fixes anything.
Absent keys and placeholders are data in the report, for a human to act on.
"""

from collections.abc import Mapping, Sequence
from typing import Optional

from kharch_baant.audit import AuditLogger
from kharch_baant.config.keys import (
    DEBUG_FLAG_KEY,
    OPTIONAL_KEY_ADVISORIES,
    OPTIONAL_KEYS,
    PLACEHOLDER_REASON,
    PLACEHOLDER_VALUES,
    REQUIRED_KEYS,
)
from kharch_baant.config.resolver import ConfigResolver
from kharch_baant.config.settings import ExecutionMode
from kharch_baant.models.config import MissingKey, ValidationReport


class ConfigurationSetError(ValueError):
    """The required and optional key sets overlap."""


def _is_blank(value: Optional[str]) -> bool:
    return value is None or value.strip() == ""


class ConfigValidator:
    """
    Validates the environment snapshot against the recognized key tables.

    The key tables are fixed at construction. They default to the
    application's tables; tests and tools may pass their own.
    """

    def __init__(
        self,
        resolver: ConfigResolver,
        execution_mode: ExecutionMode = ExecutionMode.DEVELOPMENT,
        required: Sequence[str] = REQUIRED_KEYS,
        optional: Sequence[str] = OPTIONAL_KEYS,
        advisories: Optional[Mapping[str, str]] = None,
        placeholders: Optional[Mapping[str, str]] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        """
        Initialize validator.

        Args:
            resolver: Resolver over the captured environment snapshot.
            execution_mode: Production mode enables the extra checks.
            required: Required keys, in reporting order.
            optional: Optional keys, in reporting order.
            advisories: Optional key -> warning when unset.
            placeholders: Required key -> template text that makes it invalid.
            audit_logger: Used by log_environment_status.

        Raises:
            ConfigurationSetError: If a key is both required and optional.
        """
        overlap = set(required) & set(optional)
        if overlap:
            raise ConfigurationSetError(
                f"Keys cannot be both required and optional: {sorted(overlap)}"
            )

        self._resolver = resolver
        self._execution_mode = execution_mode
        self._required = tuple(required)
        self._optional = tuple(optional)
        self._advisories = dict(
            OPTIONAL_KEY_ADVISORIES if advisories is None else advisories
        )
        self._placeholders = dict(
            PLACEHOLDER_VALUES if placeholders is None else placeholders
        )
        self._audit_logger = audit_logger

    @property
    def is_production(self) -> bool:
        return self._execution_mode is ExecutionMode.PRODUCTION

    def _check_presence(self) -> tuple[list[MissingKey], list[str]]:
        missing = []
        warnings = []

        for key in self._required:
            if _is_blank(self._resolver.resolve(key)):
                missing.append(MissingKey(key=key))

        for key in self._optional:
            advisory = self._advisories.get(key)
            if advisory and _is_blank(self._resolver.resolve(key)):
                warnings.append(advisory)

        return missing, warnings

    def _check_production(self) -> tuple[list[MissingKey], list[str]]:
        missing = []
        warnings = []

        if self._resolver.resolve_bool(DEBUG_FLAG_KEY):
            warnings.append("Debug mode is enabled in production")

        # Iterate required keys so output follows declaration order
        for key in self._required:
            placeholder = self._placeholders.get(key)
            if placeholder is None:
                continue
            value = self._resolver.resolve(key)
            if value is not None and placeholder in value:
                missing.append(MissingKey(key=key, reason=PLACEHOLDER_REASON))

        return missing, warnings

    def validate(self) -> ValidationReport:
        """
        Validate the snapshot.

        Returns:
            A fresh ValidationReport. Calling again gives an equal report.
        """
        missing, warnings = self._check_presence()

        if self.is_production:
            production_missing, production_warnings = self._check_production()
            missing.extend(production_missing)
            warnings.extend(production_warnings)

        snapshot = {
            key: self._resolver.resolve(key)
            for key in self._required + self._optional
        }

        return ValidationReport(
            is_valid=not missing,
            missing=missing,
            warnings=warnings,
            snapshot=snapshot,
        )

    def log_environment_status(self) -> ValidationReport:
        """Validate and write the outcome to the audit log."""
        report = self.validate()
        if self._audit_logger:
            self._audit_logger.log_config_checked(report)
        return report

    def get_user_friendly_summary(self, report: ValidationReport) -> str:
        """
        Generate an operator-facing summary of a report.

        This is what the diagnostics command and the settings page show.
        """
        if report.is_valid and not report.warnings:
            return "✅ Environment validation passed"

        lines = []

        if report.is_valid:
            lines.append("✅ Environment validation passed")
        else:
            lines.append("❌ Environment validation failed")
            lines.append("Missing required variables:")
            for entry in report.missing:
                lines.append(f"   • {entry}")

        if report.warnings:
            lines.append("")
            lines.append("⚠️ Environment warnings:")
            for warning in report.warnings:
                lines.append(f"   • {warning}")

        return "\n".join(lines)
