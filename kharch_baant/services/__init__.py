"""Services package."""

from kharch_baant.services.identity import (
    IdentityProviderConfig,
    IdentityProviderInterface,
    SessionIdentityProvider,
    SessionUser,
)

__all__ = [
    # Identity provider
    "IdentityProviderConfig",
    "IdentityProviderInterface",
    "SessionIdentityProvider",
    "SessionUser",
]
