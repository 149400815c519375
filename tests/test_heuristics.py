"""Tests for extraction heuristics."""

from smart_cart_buddy.domain.ingredients import Ingredient, VisionData
from smart_cart_buddy.services.heuristics import (
    estimate_quantity,
    ingredients_from_vision,
    is_generic_list,
    is_likely_dish,
)


def test_is_likely_dish_recognizes_known_dishes() -> None:
    assert is_likely_dish("Jollof Rice")
    assert is_likely_dish("Egusi")
    assert is_likely_dish("my grandmother's famous egusi soup recipe")


def test_is_likely_dish_rejects_instructions() -> None:
    assert not is_likely_dish("mix 2 cups flour and boil")
    assert not is_likely_dish("Preheat the oven and bake the bread")


def test_is_likely_dish_uses_token_count_without_keywords() -> None:
    assert is_likely_dish("spicy chicken stew")
    assert not is_likely_dish("spicy chicken stew tonight")
    assert not is_likely_dish("chicken stew with rice please")
    assert not is_likely_dish("   ")
    assert not is_likely_dish(None)


def test_recipe_keywords_match_whole_words_only() -> None:
    assert is_likely_dish("Addis cabbage")


def test_is_generic_list() -> None:
    assert is_generic_list([Ingredient("rice", "2 cups")])
    assert is_generic_list([])
    assert not is_generic_list(
        [
            Ingredient("tomato", "2"),
            Ingredient("garlic", "2 cloves"),
            Ingredient("chicken", "1 pound"),
            Ingredient("onion", "1"),
        ]
    )


def test_generic_list_with_enough_specific_items_is_not_generic() -> None:
    ingredients = [
        Ingredient("tomato sauce", "1 can"),
        Ingredient("garlic sauce", "2 tbsp"),
        Ingredient("chicken soup", "1 cup"),
        Ingredient("vegetables", "1 cup"),
    ]

    assert not is_generic_list(ingredients)


def test_estimate_quantity_rules() -> None:
    assert estimate_quantity("ground beef") == "1 pound"
    assert estimate_quantity("beef") == "1.5 pounds"
    assert estimate_quantity("garlic") == "2-3 cloves"
    assert estimate_quantity("Salt") == "to taste"
    assert estimate_quantity("palm oil") == "1/2 cup"
    assert estimate_quantity("chicken breast") == "2 breasts"
    assert estimate_quantity("avocado") == "1 ripe"
    assert estimate_quantity("butter") == "2 tablespoons"
    assert estimate_quantity("peanut butter") == "2 tablespoons"
    assert estimate_quantity("green peas") == "1 cup, chopped"


def test_estimate_quantity_avoids_partial_word_matches() -> None:
    assert estimate_quantity("chickpeas") == "1 can (15 oz)"
    assert estimate_quantity("black-eyed peas") == "1 can (15 oz)"
    assert estimate_quantity("peach") == "2 medium"
    assert estimate_quantity("pear") == "2 medium"
    assert estimate_quantity("butternut squash") == "1 cup, chopped"
    assert estimate_quantity("xyzzy") == "to taste"
    assert estimate_quantity("") == "to taste"


def test_ingredients_from_vision_reads_text_then_labels() -> None:
    vision = VisionData(
        food_items=["Food", "Tomato", "Tableware", "Onion", "tomato"],
        detected_text="2 cups rice\n1 tbsp salt",
    )

    ingredients = ingredients_from_vision(vision)

    assert ingredients == [
        Ingredient("rice", "2 cups"),
        Ingredient("salt", "1 tbsp"),
        Ingredient("Tomato", "2 medium"),
        Ingredient("Onion", "1 medium"),
    ]


def test_ingredients_from_vision_skips_non_food_labels() -> None:
    vision = VisionData(food_items=["Table", "Dishware", "Plate"], detected_text="")

    assert ingredients_from_vision(vision) == []
