"""Parse ingredient lists out of language model replies."""

import json
import logging
import re

from smart_cart_buddy.domain.errors import MalformedResponseError
from smart_cart_buddy.domain.ingredients import Ingredient
from smart_cart_buddy.services.heuristics import estimate_quantity

_logger = logging.getLogger(__name__)

_JSON_ARRAY_PATTERN = re.compile(r"\[[\s\S]*\]")


def parse_ingredient_reply(text: str | None) -> list[Ingredient]:
    """Parse a model reply into ingredients.

    The reply is parsed as JSON first. When that fails the first bracketed
    span (greedy, across newlines) is parsed instead, which tolerates
    replies that wrap the array in prose or code fences.
    """
    if not text or not text.strip():
        raise MalformedResponseError("Empty response from model")

    try:
        payload = json.loads(text)
    except json.JSONDecodeError:
        match = _JSON_ARRAY_PATTERN.search(text)
        if match is None:
            raise MalformedResponseError(
                "No JSON array found in model response"
            ) from None
        try:
            payload = json.loads(match.group(0))
        except json.JSONDecodeError as exc:
            raise MalformedResponseError(
                f"Could not parse JSON array from model response: {exc.msg}"
            ) from exc

    if not isinstance(payload, list) or not payload:
        raise MalformedResponseError("Model response was not a non-empty JSON array")

    ingredients = normalize_ingredients(payload)
    if not ingredients:
        raise MalformedResponseError("Model response contained no named ingredients")
    return ingredients


def normalize_ingredients(items: list[object]) -> list[Ingredient]:
    """Coerce raw items into ingredients, estimating missing quantities."""
    ingredients: list[Ingredient] = []
    for item in items:
        if not isinstance(item, dict):
            _logger.debug("Skipping non-object ingredient entry: %r", item)
            continue
        name = item.get("name")
        if not isinstance(name, str) or not name.strip():
            continue
        cleaned_name = name.strip()
        quantity = item.get("quantity")
        if isinstance(quantity, (int, float)) and not isinstance(quantity, bool):
            quantity = str(quantity)
        if not isinstance(quantity, str) or not quantity.strip():
            quantity = estimate_quantity(cleaned_name)
        ingredients.append(Ingredient(name=cleaned_name, quantity=quantity.strip()))
    return ingredients
