"""Grocery list and saved recipe services."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from smart_cart_buddy.domain.errors import NotFoundError, RecipeLimitReachedError
from smart_cart_buddy.domain.grocery import (
    GroceryCounts,
    GroceryItem,
    Recipe,
    RecipeListUpdate,
)
from smart_cart_buddy.domain.ingredients import Ingredient
from smart_cart_buddy.services.payments import ProfileRepository

_logger = logging.getLogger(__name__)

CATEGORIES = ("all", "frequent", "completed", "suggested")
_SUGGESTION_LIMIT = 4


class GroceryRepository(Protocol):
    """Persistence interface for grocery items."""

    def list_items(self, user_id: UUID) -> list[GroceryItem]:
        """Return a user's items, newest first."""

    def get_item(self, user_id: UUID, item_id: UUID) -> GroceryItem | None:
        """Return an item owned by the user, if present."""

    def create_item(self, user_id: UUID, payload: dict[str, object]) -> GroceryItem:
        """Create an item and return it."""

    def update_item(
        self, user_id: UUID, item_id: UUID, payload: dict[str, object]
    ) -> GroceryItem:
        """Update an item and return it."""

    def delete_item(self, user_id: UUID, item_id: UUID) -> None:
        """Delete an item."""


class RecipeRepository(Protocol):
    """Persistence interface for saved recipes."""

    def list_recipes(self, user_id: UUID) -> list[Recipe]:
        """Return a user's recipes, newest first."""

    def get_recipe(self, user_id: UUID, recipe_id: UUID) -> Recipe | None:
        """Return a recipe owned by the user, if present."""

    def create_recipe(
        self, user_id: UUID, title: str, ingredients: list[Ingredient]
    ) -> Recipe:
        """Create a recipe and return it."""

    def delete_recipe(self, user_id: UUID, recipe_id: UUID) -> None:
        """Delete a recipe."""


@dataclass
class GroceryService:
    """Application service for grocery list operations."""

    repository: GroceryRepository

    def list_items(self, user_id: UUID, category: str = "all") -> list[GroceryItem]:
        """Return the items shown in a list category."""
        items = self.repository.list_items(user_id)
        if category == "frequent":
            return [item for item in items if item.is_frequent]
        if category == "completed":
            return [item for item in items if item.is_completed]
        if category == "suggested":
            return _suggestions(items)
        return [
            item
            for item in items
            if not item.is_completed and item.recipe_id is None
        ]

    def counts(self, user_id: UUID) -> GroceryCounts:
        """Return item counts per category."""
        items = self.repository.list_items(user_id)
        return GroceryCounts(
            all=sum(1 for item in items if not item.is_completed),
            frequent=sum(1 for item in items if item.is_frequent),
            completed=sum(1 for item in items if item.is_completed),
            suggested=len(_suggestions(items)),
        )

    def add_item(  # noqa: PLR0913
        self,
        user_id: UUID,
        name: str,
        quantity: str = "",
        notes: str | None = None,
        recipe_id: UUID | None = None,
        is_frequent: bool = False,
    ) -> GroceryItem:
        """Add a new uncompleted item to the list."""
        return self.repository.create_item(
            user_id,
            {
                "name": name.strip(),
                "quantity": quantity.strip(),
                "notes": notes,
                "is_completed": False,
                "is_frequent": is_frequent,
                "recipe_id": str(recipe_id) if recipe_id else None,
            },
        )

    def update_item(
        self, user_id: UUID, item_id: UUID, changes: dict[str, object]
    ) -> GroceryItem:
        """Apply field changes to an existing item."""
        self._require_item(user_id, item_id)
        return self.repository.update_item(user_id, item_id, changes)

    def delete_item(self, user_id: UUID, item_id: UUID) -> None:
        """Remove an item from the list."""
        self._require_item(user_id, item_id)
        self.repository.delete_item(user_id, item_id)

    def toggle_completion(self, user_id: UUID, item_id: UUID) -> GroceryItem:
        """Flip the completed flag of an item."""
        item = self._require_item(user_id, item_id)
        return self.repository.update_item(
            user_id, item_id, {"is_completed": not item.is_completed}
        )

    def toggle_frequent(self, user_id: UUID, item_id: UUID) -> GroceryItem:
        """Flip the frequent flag of an item."""
        item = self._require_item(user_id, item_id)
        return self.repository.update_item(
            user_id, item_id, {"is_frequent": not item.is_frequent}
        )

    def reuse_item(self, user_id: UUID, item_id: UUID) -> GroceryItem:
        """Put a previously bought item back on the list as a frequent item."""
        item = self._require_item(user_id, item_id)
        return self.add_item(
            user_id,
            name=item.name,
            quantity=item.quantity,
            notes=item.notes,
            is_frequent=True,
        )

    def _require_item(self, user_id: UUID, item_id: UUID) -> GroceryItem:
        item = self.repository.get_item(user_id, item_id)
        if item is None:
            raise NotFoundError(f"Grocery item {item_id} not found")
        return item


@dataclass
class RecipeService:
    """Saved recipes and their integration with the grocery list."""

    repository: RecipeRepository
    grocery_service: GroceryService
    profile_repository: ProfileRepository
    free_recipe_limit: int = 2

    def list_recipes(self, user_id: UUID) -> list[Recipe]:
        """Return the user's saved recipes."""
        return self.repository.list_recipes(user_id)

    def save_recipe(
        self, user_id: UUID, title: str, ingredients: list[Ingredient]
    ) -> Recipe:
        """Save a recipe, enforcing the free-tier limit."""
        if not self.profile_repository.is_premium(str(user_id)):
            saved = len(self.repository.list_recipes(user_id))
            if saved >= self.free_recipe_limit:
                raise RecipeLimitReachedError(
                    f"You've used your {self.free_recipe_limit} free recipe saves. "
                    "Upgrade to premium for unlimited recipes."
                )
        return self.repository.create_recipe(user_id, title.strip(), ingredients)

    def delete_recipe(self, user_id: UUID, recipe_id: UUID) -> None:
        """Delete a saved recipe."""
        self._require_recipe(user_id, recipe_id)
        self.repository.delete_recipe(user_id, recipe_id)

    def add_to_list(self, user_id: UUID, recipe_id: UUID) -> RecipeListUpdate:
        """Add recipe ingredients that are not already on the open list."""
        recipe = self._require_recipe(user_id, recipe_id)
        existing = {
            item.name.lower().strip()
            for item in self.grocery_service.repository.list_items(user_id)
            if not item.is_completed
        }
        added: list[GroceryItem] = []
        skipped: list[str] = []
        for ingredient in recipe.ingredients:
            name = ingredient.name.strip()
            if not name:
                continue
            key = name.lower()
            if key in existing:
                skipped.append(name)
                continue
            existing.add(key)
            added.append(
                self.grocery_service.add_item(
                    user_id,
                    name=name,
                    quantity=ingredient.quantity,
                    recipe_id=recipe.id,
                )
            )
        _logger.info(
            "Recipe %s added to list: added=%s skipped=%s",
            recipe.id,
            len(added),
            len(skipped),
        )
        return RecipeListUpdate(added=added, skipped=skipped)

    def complete_recipe(self, user_id: UUID, recipe_id: UUID) -> list[GroceryItem]:
        """Mark every open item that came from the recipe as completed."""
        recipe = self._require_recipe(user_id, recipe_id)
        open_items = [
            item
            for item in self.grocery_service.repository.list_items(user_id)
            if item.recipe_id == recipe.id and not item.is_completed
        ]
        return [
            self.grocery_service.toggle_completion(user_id, item.id)
            for item in open_items
        ]

    def _require_recipe(self, user_id: UUID, recipe_id: UUID) -> Recipe:
        recipe = self.repository.get_recipe(user_id, recipe_id)
        if recipe is None:
            raise NotFoundError(f"Recipe {recipe_id} not found")
        return recipe


def _suggestions(items: list[GroceryItem]) -> list[GroceryItem]:
    open_names = {item.name.lower() for item in items if not item.is_completed}
    return [
        item
        for item in items
        if item.is_frequent and item.name.lower() not in open_names
    ][:_SUGGESTION_LIMIT]
