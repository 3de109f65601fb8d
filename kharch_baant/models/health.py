"""
Health State Models

The state of one failure containment boundary. There are exactly two
states; the captured error only exists in the failed one.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class HealthStatus(str, Enum):
    HEALTHY = "healthy"
    FAILED = "failed"


class HealthState(BaseModel):
    """Current state of a containment boundary."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    status: HealthStatus = Field(
        default=HealthStatus.HEALTHY
    )
    error: Optional[Exception] = Field(
        default=None,
        description="Error captured on the transition to FAILED"
    )
    context: dict[str, Any] = Field(
        default_factory=dict,
        description="Structural context captured with the error"
    )

    @classmethod
    def healthy(cls) -> "HealthState":
        return cls()

    @classmethod
    def failed(cls, error: Exception, context: Optional[dict[str, Any]] = None) -> "HealthState":
        return cls(
            status=HealthStatus.FAILED,
            error=error,
            context=context or {},
        )

    @property
    def is_healthy(self) -> bool:
        return self.status is HealthStatus.HEALTHY
