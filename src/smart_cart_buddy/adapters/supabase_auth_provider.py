"""Supabase Auth lookup of access tokens."""

import logging
from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from smart_cart_buddy.services.users import AuthProvider

_logger = logging.getLogger(__name__)


@dataclass
class SupabaseAuthProvider(AuthProvider):
    """Resolves access tokens through Supabase Auth."""

    client: Client

    def get_user_id(self, access_token: str) -> UUID | None:
        """Return the user id for a token, or None when it is rejected."""
        try:
            response = self.client.auth.get_user(access_token)
        except Exception as exc:  # noqa: BLE001
            _logger.info("Rejected access token: %s", exc)
            return None
        user = getattr(response, "user", None)
        if user is None:
            return None
        return UUID(str(user.id))
