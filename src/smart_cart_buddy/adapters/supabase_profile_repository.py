"""Supabase repository for user profiles."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from smart_cart_buddy.services.payments import ProfileRepository


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase-backed profile repository."""

    client: Client

    def is_premium(self, user_id: str) -> bool:
        """Return whether the user's profile has the premium flag."""
        response = (
            self.client.table("profiles")
            .select("is_premium")
            .eq("id", user_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return False
        return bool(response.data[0].get("is_premium"))

    def set_premium(self, user_id: str, is_premium: bool) -> None:
        """Update the premium flag and timestamp."""
        self.client.table("profiles").update(
            {
                "is_premium": is_premium,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            }
        ).eq("id", user_id).execute()
