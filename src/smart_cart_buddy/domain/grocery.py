"""Domain models for grocery lists and saved recipes."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from smart_cart_buddy.domain.ingredients import Ingredient


@dataclass(frozen=True)
class GroceryItem:
    """Item on a user's grocery list."""

    id: UUID
    user_id: UUID
    name: str
    quantity: str
    is_completed: bool
    is_frequent: bool
    created_at: datetime
    notes: str | None = None
    recipe_id: UUID | None = None


@dataclass(frozen=True)
class GroceryCounts:
    """Number of items in each list category."""

    all: int
    frequent: int
    completed: int
    suggested: int


@dataclass(frozen=True)
class Recipe:
    """Saved recipe with its ingredient list."""

    id: UUID
    user_id: UUID
    title: str
    created_at: datetime
    ingredients: list[Ingredient] = field(default_factory=list)


@dataclass(frozen=True)
class RecipeListUpdate:
    """Outcome of adding a recipe to the grocery list."""

    added: list[GroceryItem]
    skipped: list[str]
