"""Identity provider integration."""

from kharch_baant.services.identity.provider import (
    IdentityProviderConfig,
    IdentityProviderInterface,
    SessionIdentityProvider,
    SessionUser,
)

__all__ = [
    "IdentityProviderConfig",
    "IdentityProviderInterface",
    "SessionIdentityProvider",
    "SessionUser",
]
