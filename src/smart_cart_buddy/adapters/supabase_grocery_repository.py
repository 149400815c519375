"""Supabase implementation for grocery items."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from smart_cart_buddy.domain.grocery import GroceryItem
from smart_cart_buddy.services.grocery import GroceryRepository


@dataclass
class SupabaseGroceryRepository(GroceryRepository):
    """Supabase-backed repository for grocery items."""

    client: Client

    def list_items(self, user_id: UUID) -> list[GroceryItem]:
        """Return a user's items, newest first."""
        response = (
            self.client.table("grocery_items")
            .select("*")
            .eq("user_id", str(user_id))
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_item(row) for row in response.data or []]

    def get_item(self, user_id: UUID, item_id: UUID) -> GroceryItem | None:
        """Return an item owned by the user, if present."""
        response = (
            self.client.table("grocery_items")
            .select("*")
            .eq("id", str(item_id))
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_item(response.data[0])

    def create_item(self, user_id: UUID, payload: dict[str, object]) -> GroceryItem:
        """Create an item row and return it."""
        response = (
            self.client.table("grocery_items")
            .insert({"user_id": str(user_id), **payload})
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create grocery item")
        return _parse_item(response.data[0])

    def update_item(
        self, user_id: UUID, item_id: UUID, payload: dict[str, object]
    ) -> GroceryItem:
        """Update an item row and return it."""
        response = (
            self.client.table("grocery_items")
            .update(payload)
            .eq("id", str(item_id))
            .eq("user_id", str(user_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update grocery item")
        return _parse_item(response.data[0])

    def delete_item(self, user_id: UUID, item_id: UUID) -> None:
        """Delete an item row."""
        self.client.table("grocery_items").delete().eq("id", str(item_id)).eq(
            "user_id", str(user_id)
        ).execute()


def _parse_item(row: dict[str, object]) -> GroceryItem:
    recipe_id = row.get("recipe_id")
    return GroceryItem(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        name=str(row.get("name") or ""),
        quantity=str(row.get("quantity") or ""),
        notes=row.get("notes") or None,
        is_completed=bool(row.get("is_completed")),
        is_frequent=bool(row.get("is_frequent")),
        created_at=datetime.fromisoformat(str(row["created_at"])),
        recipe_id=UUID(str(recipe_id)) if recipe_id else None,
    )
