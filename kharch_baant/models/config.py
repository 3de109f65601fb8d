"""
Configuration Models

Value types produced by the configuration validator and the bootstrap
gate. All are immutable once built: a new report is created for every
validation call, and a gate decision never changes after it is made.
"""

from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator


class GateDecision(str, Enum):
    """Whether the protected application tree may be mounted."""
    BLOCKED = "blocked"
    PASSED = "passed"


class MissingKey(BaseModel):
    """A required key that is absent, empty, or still a placeholder."""

    model_config = ConfigDict(frozen=True)

    key: str = Field(
        ...,
        description="Configuration key"
    )
    reason: Optional[str] = Field(
        default=None,
        description="Why the key counts as missing when it is present in form"
    )

    def __str__(self) -> str:
        if self.reason:
            return f"{self.key} ({self.reason})"
        return self.key


class ValidationReport(BaseModel):
    """
    Result of validating the environment snapshot.

    Warnings never affect validity: is_valid is True exactly when
    nothing is missing.
    """

    model_config = ConfigDict(frozen=True)

    is_valid: bool = Field(
        ...,
        description="True when no required key is missing"
    )
    missing: tuple[MissingKey, ...] = Field(
        default=(),
        description="Missing required keys, in declaration order"
    )
    warnings: tuple[str, ...] = Field(
        default=(),
        description="Non-blocking warnings, in declaration order"
    )
    snapshot: Mapping[str, Optional[str]] = Field(
        default_factory=dict,
        validate_default=True,
        description="Resolved value of every recognized key at validation time"
    )

    @field_validator("snapshot")
    @classmethod
    def freeze_snapshot(cls, v: Mapping[str, Optional[str]]) -> Mapping[str, Optional[str]]:
        return MappingProxyType(dict(v))

    @field_serializer("snapshot")
    def dump_snapshot(self, v: Mapping[str, Optional[str]]) -> dict[str, Optional[str]]:
        return dict(v)

    @property
    def missing_keys(self) -> list[str]:
        """Keys named in missing, without reasons."""
        return [entry.key for entry in self.missing]

    @property
    def placeholder_keys(self) -> list[str]:
        return [entry.key for entry in self.missing if entry.reason]
