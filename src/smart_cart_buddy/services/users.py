"""User identity resolution."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID


class AuthProvider(Protocol):
    """Interface for the hosted authentication provider."""

    def get_user_id(self, access_token: str) -> UUID | None:
        """Return the user id for a valid access token."""


@dataclass
class UserService:
    """Application service for authenticating API callers."""

    auth_provider: AuthProvider

    def resolve_user(self, authorization: str | None) -> UUID | None:
        """Return the user id for a `Bearer` authorization header."""
        if not authorization:
            return None
        scheme, _, token = authorization.partition(" ")
        if scheme.lower() != "bearer" or not token.strip():
            return None
        return self.auth_provider.get_user_id(token.strip())
