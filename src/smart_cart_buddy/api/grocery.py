"""Grocery list and recipe endpoints for authenticated users."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING
from uuid import UUID

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from smart_cart_buddy.api.models import (
    GroceryItemCreate,
    GroceryItemUpdate,
    RecipeCreate,
)
from smart_cart_buddy.domain.errors import NotFoundError, RecipeLimitReachedError
from smart_cart_buddy.domain.ingredients import Ingredient
from smart_cart_buddy.services.grocery import CATEGORIES

if TYPE_CHECKING:
    from smart_cart_buddy.containers import AppContainer
    from smart_cart_buddy.domain.grocery import GroceryItem, Recipe

router = APIRouter(prefix="/grocery", tags=["grocery"])


def _container(request: Request) -> AppContainer:
    return request.app.state.container


async def require_user(
    request: Request,
    authorization: str | None = Header(default=None),
) -> UUID:
    """Resolve the calling user from the bearer token."""
    user_id = _container(request).user_service.resolve_user(authorization)
    if user_id is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    return user_id


@router.get("/items")
async def list_items(
    request: Request,
    category: str = "all",
    user_id: UUID = Depends(require_user),
) -> dict[str, object]:
    """Return the items in a list category."""
    if category not in CATEGORIES:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST)
    items = _container(request).grocery_service.list_items(user_id, category)
    return {"items": [_serialize_item(item) for item in items]}


@router.get("/counts")
async def item_counts(
    request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, int]:
    """Return item counts per category."""
    counts = _container(request).grocery_service.counts(user_id)
    return {
        "all": counts.all,
        "frequent": counts.frequent,
        "completed": counts.completed,
        "suggested": counts.suggested,
    }


@router.post("/items", status_code=status.HTTP_201_CREATED)
async def add_item(
    body: GroceryItemCreate,
    request: Request,
    user_id: UUID = Depends(require_user),
) -> dict[str, object]:
    """Add an item to the list."""
    item = _container(request).grocery_service.add_item(
        user_id,
        name=body.name,
        quantity=body.quantity,
        notes=body.notes,
        recipe_id=body.recipe_id,
    )
    return _serialize_item(item)


@router.put("/items/{item_id}")
async def update_item(
    item_id: UUID,
    body: GroceryItemUpdate,
    request: Request,
    user_id: UUID = Depends(require_user),
) -> dict[str, object]:
    """Update fields of an item."""
    changes = body.to_changes()
    if not changes:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="No fields to update"
        )
    with _not_found():
        item = _container(request).grocery_service.update_item(
            user_id, item_id, changes
        )
    return _serialize_item(item)


@router.delete("/items/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_item(
    item_id: UUID, request: Request, user_id: UUID = Depends(require_user)
) -> None:
    """Remove an item from the list."""
    with _not_found():
        _container(request).grocery_service.delete_item(user_id, item_id)


@router.post("/items/{item_id}/toggle-completion")
async def toggle_completion(
    item_id: UUID, request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, object]:
    """Flip an item's completed flag."""
    with _not_found():
        item = _container(request).grocery_service.toggle_completion(user_id, item_id)
    return _serialize_item(item)


@router.post("/items/{item_id}/toggle-frequent")
async def toggle_frequent(
    item_id: UUID, request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, object]:
    """Flip an item's frequent flag."""
    with _not_found():
        item = _container(request).grocery_service.toggle_frequent(user_id, item_id)
    return _serialize_item(item)


@router.post("/items/{item_id}/reuse", status_code=status.HTTP_201_CREATED)
async def reuse_item(
    item_id: UUID, request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, object]:
    """Put a previously bought item back on the list."""
    with _not_found():
        item = _container(request).grocery_service.reuse_item(user_id, item_id)
    return _serialize_item(item)


@router.get("/recipes")
async def list_recipes(
    request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, object]:
    """Return saved recipes."""
    recipes = _container(request).recipe_service.list_recipes(user_id)
    return {"recipes": [_serialize_recipe(recipe) for recipe in recipes]}


@router.post("/recipes", status_code=status.HTTP_201_CREATED)
async def save_recipe(
    body: RecipeCreate,
    request: Request,
    user_id: UUID = Depends(require_user),
) -> dict[str, object]:
    """Save a recipe with its ingredients."""
    ingredients = [
        Ingredient(name=item.name.strip(), quantity=item.quantity.strip())
        for item in body.ingredients
        if item.name.strip()
    ]
    try:
        recipe = _container(request).recipe_service.save_recipe(
            user_id, body.title, ingredients
        )
    except RecipeLimitReachedError as exc:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail=str(exc)
        ) from exc
    return _serialize_recipe(recipe)


@router.delete("/recipes/{recipe_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_recipe(
    recipe_id: UUID, request: Request, user_id: UUID = Depends(require_user)
) -> None:
    """Delete a saved recipe."""
    with _not_found():
        _container(request).recipe_service.delete_recipe(user_id, recipe_id)


@router.post("/recipes/{recipe_id}/add-to-list")
async def add_recipe_to_list(
    recipe_id: UUID, request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, object]:
    """Add a recipe's missing ingredients to the grocery list."""
    with _not_found():
        update = _container(request).recipe_service.add_to_list(user_id, recipe_id)
    return {
        "added": [_serialize_item(item) for item in update.added],
        "skipped": update.skipped,
    }


@router.post("/recipes/{recipe_id}/complete")
async def complete_recipe(
    recipe_id: UUID, request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, object]:
    """Mark the recipe's open items as completed."""
    with _not_found():
        items = _container(request).recipe_service.complete_recipe(user_id, recipe_id)
    return {"completed": [_serialize_item(item) for item in items]}


@contextmanager
def _not_found() -> Iterator[None]:
    try:
        yield
    except NotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)
        ) from exc


def _serialize_item(item: GroceryItem) -> dict[str, object]:
    return {
        "id": str(item.id),
        "name": item.name,
        "quantity": item.quantity,
        "notes": item.notes,
        "isCompleted": item.is_completed,
        "isFrequent": item.is_frequent,
        "createdAt": item.created_at.isoformat(),
        "recipeId": str(item.recipe_id) if item.recipe_id else None,
    }


def _serialize_recipe(recipe: Recipe) -> dict[str, object]:
    return {
        "id": str(recipe.id),
        "title": recipe.title,
        "ingredients": [item.to_dict() for item in recipe.ingredients],
        "createdAt": recipe.created_at.isoformat(),
    }
