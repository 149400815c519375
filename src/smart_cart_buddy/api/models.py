"""Pydantic models for grocery API request bodies."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class GroceryItemCreate(_CamelModel):
    """New grocery item payload."""

    name: str = Field(min_length=1)
    quantity: str = ""
    notes: str | None = None
    recipe_id: UUID | None = Field(default=None, alias="recipeId")


class GroceryItemUpdate(_CamelModel):
    """Partial grocery item update payload."""

    name: str | None = Field(default=None, min_length=1)
    quantity: str | None = None
    notes: str | None = None
    is_completed: bool | None = Field(default=None, alias="isCompleted")
    is_frequent: bool | None = Field(default=None, alias="isFrequent")

    def to_changes(self) -> dict[str, object]:
        """Return the column changes for the fields the caller sent.

        Only `notes` may be cleared with an explicit null; nulls for the
        other columns are dropped.
        """
        changes = {
            key: value
            for key, value in self.model_dump(exclude_unset=True).items()
            if value is not None or key == "notes"
        }
        for key in ("name", "quantity"):
            value = changes.get(key)
            if isinstance(value, str):
                changes[key] = value.strip()
        if changes.get("name") == "":
            del changes["name"]
        return changes


class RecipeIngredient(BaseModel):
    """Ingredient entry of a saved recipe."""

    name: str
    quantity: str = ""


class RecipeCreate(BaseModel):
    """New recipe payload."""

    title: str = Field(min_length=1)
    ingredients: list[RecipeIngredient] = Field(default_factory=list)
