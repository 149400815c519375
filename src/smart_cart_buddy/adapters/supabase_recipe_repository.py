"""Supabase implementation for saved recipes."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from smart_cart_buddy.domain.grocery import Recipe
from smart_cart_buddy.domain.ingredients import Ingredient
from smart_cart_buddy.services.grocery import RecipeRepository
from smart_cart_buddy.services.parsing import normalize_ingredients


@dataclass
class SupabaseRecipeRepository(RecipeRepository):
    """Supabase-backed repository for recipes."""

    client: Client

    def list_recipes(self, user_id: UUID) -> list[Recipe]:
        """Return a user's recipes, newest first."""
        response = (
            self.client.table("recipes")
            .select("*")
            .eq("user_id", str(user_id))
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_recipe(row) for row in response.data or []]

    def get_recipe(self, user_id: UUID, recipe_id: UUID) -> Recipe | None:
        """Return a recipe owned by the user, if present."""
        response = (
            self.client.table("recipes")
            .select("*")
            .eq("id", str(recipe_id))
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_recipe(response.data[0])

    def create_recipe(
        self, user_id: UUID, title: str, ingredients: list[Ingredient]
    ) -> Recipe:
        """Create a recipe row and return it."""
        response = (
            self.client.table("recipes")
            .insert(
                {
                    "user_id": str(user_id),
                    "title": title,
                    "ingredients": [item.to_dict() for item in ingredients],
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create recipe")
        return _parse_recipe(response.data[0])

    def delete_recipe(self, user_id: UUID, recipe_id: UUID) -> None:
        """Delete a recipe row."""
        self.client.table("recipes").delete().eq("id", str(recipe_id)).eq(
            "user_id", str(user_id)
        ).execute()


def _parse_recipe(row: dict[str, object]) -> Recipe:
    raw_ingredients = row.get("ingredients")
    return Recipe(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        title=str(row.get("title") or ""),
        created_at=datetime.fromisoformat(str(row["created_at"])),
        ingredients=normalize_ingredients(
            raw_ingredients if isinstance(raw_ingredients, list) else []
        ),
    )
