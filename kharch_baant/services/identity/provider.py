"""
Identity Provider Integration

DESIGN DECISION: The identity provider is an external collaborator.
The bootstrap gate hands it the publishable key and the two routing hints;
everything else (hosted sign-in pages, token verification) belongs to the
provider. The application only needs to ask "who is signed in?".

The interface keeps the rest of the app decoupled from the provider SDK,
and lets tests use an in-memory session.
"""

from abc import ABC, abstractmethod
from collections.abc import MutableMapping
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


SESSION_USER_KEY = "identity_user"


class IdentityProviderConfig(BaseModel):
    """
    What the provider integration is configured with on mount.

    The publishable key is passed on exactly as configured.
    """

    model_config = ConfigDict(frozen=True)

    publishable_key: str = Field(
        ...,
        description="Identity provider publishable key"
    )
    sign_in_url: str = Field(
        default="/sign-in",
        description="Sign-in entry point"
    )
    sign_up_url: str = Field(
        default="/sign-up",
        description="Sign-up entry point"
    )

    @field_validator("publishable_key")
    @classmethod
    def validate_publishable_key(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Publishable key cannot be blank")
        return v


class SessionUser(BaseModel):
    """The user signed in to the current session."""

    model_config = ConfigDict(frozen=True)

    user_id: str
    email: Optional[str] = None
    display_name: Optional[str] = None


class IdentityProviderInterface(ABC):
    """
    Abstract interface for the identity provider integration.

    Consumers elsewhere in the app only use the session query methods.
    """

    @property
    @abstractmethod
    def config(self) -> IdentityProviderConfig:
        """Configuration the provider was mounted with."""
        pass

    @abstractmethod
    def current_user(self) -> Optional[SessionUser]:
        """
        Get the user of the current session.

        Returns:
            The signed-in user, or None
        """
        pass

    @property
    def is_signed_in(self) -> bool:
        return self.current_user() is not None


class SessionIdentityProvider(IdentityProviderInterface):
    """
    Provider integration backed by per-session state.

    The provider's hosted pages complete sign-in and store the user under
    SESSION_USER_KEY; this class only reads it back.
    """

    def __init__(
        self,
        config: IdentityProviderConfig,
        session: MutableMapping,
    ):
        self._config = config
        self._session = session

    @property
    def config(self) -> IdentityProviderConfig:
        return self._config

    def current_user(self) -> Optional[SessionUser]:
        user = self._session.get(SESSION_USER_KEY)
        if user is None:
            return None
        if isinstance(user, SessionUser):
            return user
        return SessionUser.model_validate(user)

    def sign_out(self) -> None:
        self._session.pop(SESSION_USER_KEY, None)
