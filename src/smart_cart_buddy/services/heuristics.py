"""Keyword heuristics used to route and repair ingredient extraction."""

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from smart_cart_buddy.domain.ingredients import Ingredient

if TYPE_CHECKING:
    from collections.abc import Iterable

    from smart_cart_buddy.domain.ingredients import VisionData

DEFAULT_QUANTITY = "to taste"

_RECIPE_KEYWORDS = (
    "cup",
    "cups",
    "tbsp",
    "tsp",
    "tablespoon",
    "tablespoons",
    "teaspoon",
    "teaspoons",
    "gram",
    "grams",
    "kg",
    "oz",
    "ounce",
    "ounces",
    "lb",
    "lbs",
    "pound",
    "pounds",
    "ml",
    "liter",
    "litre",
    "minutes",
    "mix",
    "stir",
    "boil",
    "bake",
    "fry",
    "chop",
    "dice",
    "slice",
    "add",
    "preheat",
    "combine",
    "whisk",
    "simmer",
    "season",
    "until",
    "ingredients",
    "instructions",
    "directions",
)

_KNOWN_DISHES = (
    "jollof",
    "egusi",
    "ogbono",
    "efo riro",
    "moi moi",
    "moin moin",
    "pepper soup",
    "suya",
    "fufu",
    "banku",
    "waakye",
    "kelewele",
    "injera",
    "bobotie",
    "lasagna",
    "lasagne",
    "pad thai",
    "biryani",
    "paella",
    "moussaka",
    "ratatouille",
    "ramen",
    "sushi",
    "bibimbap",
    "tikka masala",
    "butter chicken",
    "curry",
    "gumbo",
    "jambalaya",
    "risotto",
    "carbonara",
    "bolognese",
    "goulash",
    "borscht",
    "shakshuka",
    "falafel",
    "hummus",
    "tagine",
    "pierogi",
    "enchiladas",
    "burrito",
    "tacos",
    "chili con carne",
    "shepherd's pie",
    "apple pie",
    "mac and cheese",
    "fried rice",
)

_GENERIC_TERMS = (
    "rice",
    "food",
    "vegetable",
    "vegetables",
    "meat",
    "fruit",
    "dish",
    "meal",
    "sauce",
    "soup",
    "bread",
    "grain",
    "protein",
    "spices",
    "seasoning",
    "produce",
    "ingredient",
    "cuisine",
)

_SPECIFIC_TERMS = (
    "tomato",
    "garlic",
    "chicken",
    "onion",
    "ginger",
    "beef",
    "pork",
    "shrimp",
    "salmon",
    "egg",
    "cheese",
    "butter",
    "carrot",
    "potato",
    "spinach",
    "basil",
    "lemon",
    "lime",
    "cumin",
    "thyme",
    "palm oil",
    "olive oil",
    "bell pepper",
    "mushroom",
    "flour",
    "coconut",
    "cilantro",
    "plantain",
)

_FOOD_KEYWORDS = (
    "tomato",
    "onion",
    "garlic",
    "pepper",
    "chili",
    "carrot",
    "potato",
    "yam",
    "plantain",
    "cassava",
    "okra",
    "spinach",
    "lettuce",
    "cabbage",
    "kale",
    "cucumber",
    "broccoli",
    "cauliflower",
    "mushroom",
    "eggplant",
    "zucchini",
    "corn",
    "pea",
    "bean",
    "lentil",
    "rice",
    "pasta",
    "noodle",
    "bread",
    "flour",
    "chicken",
    "beef",
    "pork",
    "lamb",
    "goat",
    "turkey",
    "sausage",
    "bacon",
    "fish",
    "salmon",
    "tuna",
    "shrimp",
    "prawn",
    "crab",
    "egg",
    "cheese",
    "butter",
    "milk",
    "cream",
    "yogurt",
    "tofu",
    "apple",
    "banana",
    "orange",
    "lemon",
    "lime",
    "avocado",
    "mango",
    "pineapple",
    "berry",
    "grape",
    "coconut",
    "ginger",
    "basil",
    "parsley",
    "cilantro",
    "herb",
    "oil",
    "nut",
    "almond",
    "peanut",
    "seed",
)

_NON_INGREDIENT_TERMS = frozenset(
    {
        "food",
        "dish",
        "cuisine",
        "recipe",
        "meal",
        "ingredient",
        "produce",
        "tableware",
        "dishware",
        "serveware",
        "plate",
        "bowl",
        "table",
        "kitchen",
        "cooking",
        "garnish",
        "staple food",
        "comfort food",
        "fast food",
        "finger food",
        "natural foods",
        "whole food",
        "local food",
        "vegetarian food",
        "superfood",
        "baked goods",
        "root vegetable",
        "leaf vegetable",
        "citrus",
        "vegetable",
        "fruit",
    }
)

_UNIT_WORDS = (
    "cups",
    "cup",
    "tablespoons",
    "tablespoon",
    "tbsp",
    "teaspoons",
    "teaspoon",
    "tsp",
    "grams",
    "gram",
    "g",
    "kg",
    "ounces",
    "ounce",
    "oz",
    "pounds",
    "pound",
    "lbs",
    "lb",
    "ml",
    "liters",
    "liter",
    "l",
    "cloves",
    "clove",
    "cans",
    "can",
    "pieces",
    "piece",
    "slices",
    "slice",
    "pinch",
)

# Whole words, not substrings: "add" must not match inside "Addis".
_RECIPE_KEYWORD_PATTERN = re.compile(
    r"\b(?:" + "|".join(re.escape(word) for word in _RECIPE_KEYWORDS) + r")\b"
)

_QUANTITY_LINE_PATTERN = re.compile(
    r"(?P<amount>\d+(?:[./]\d+)?(?:\s*-\s*\d+(?:[./]\d+)?)?)\s*"
    r"(?P<unit>" + "|".join(_UNIT_WORDS) + r")\.?\s+"
    r"(?:of\s+)?(?P<name>[a-z][a-z' -]{1,40})",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class _QuantityRule:
    keywords: tuple[str, ...]
    quantity: str
    variants: tuple[tuple[str, str], ...] = ()
    # Matched as whole words with an optional plural "s".
    words: tuple[str, ...] = ()

    def match(self, name: str) -> str | None:
        if not any(keyword in name for keyword in self.keywords) and not any(
            re.search(rf"\b{re.escape(word)}s?\b", name) for word in self.words
        ):
            return None
        for modifier, quantity in self.variants:
            if modifier in name:
                return quantity
        return self.quantity


_QUANTITY_RULES = (
    _QuantityRule(("broth", "stock"), "2 cups", (("cube", "2 cubes"),)),
    _QuantityRule(
        ("beef", "pork", "lamb", "goat", "turkey", "mince", "sausage", "bacon"),
        "1.5 pounds",
        (
            ("ground", "1 pound"),
            ("minced", "1 pound"),
            ("mince", "1 pound"),
            ("bacon", "6 slices"),
            ("sausage", "4 links"),
            ("steak", "2 steaks"),
        ),
    ),
    _QuantityRule(
        ("chicken", "duck"),
        "1.5 pounds",
        (
            ("ground", "1 pound"),
            ("breast", "2 breasts"),
            ("thigh", "4 thighs"),
            ("drumstick", "6 drumsticks"),
            ("wing", "1 pound"),
        ),
    ),
    _QuantityRule(
        (
            "fish",
            "salmon",
            "tuna",
            "tilapia",
            "mackerel",
            "shrimp",
            "prawn",
            "crayfish",
        ),
        "1 pound",
        (
            ("crayfish", "2 tablespoons ground"),
            ("fillet", "2 fillets"),
            ("canned", "1 can"),
        ),
    ),
    _QuantityRule(
        ("flour", "cornmeal", "semolina", "cornstarch"),
        "2 cups",
        (("cornstarch", "1 tablespoon"), ("almond", "1 cup")),
    ),
    _QuantityRule(
        ("peanut", "almond", "cashew", "walnut", "pecan", "pistachio", "hazelnut"),
        "1/2 cup",
        (("butter", "2 tablespoons"), ("milk", "1 cup")),
    ),
    _QuantityRule(
        ("milk", "cream", "cheese", "yogurt", "yoghurt"),
        "1 cup",
        (
            ("coconut milk", "1 can (13.5 oz)"),
            ("cream cheese", "8 ounces"),
            ("parmesan", "1/2 cup, grated"),
            ("cheese", "1 cup, shredded"),
            ("butter", "2 tablespoons"),
            ("sour cream", "1/2 cup"),
        ),
        words=("butter",),
    ),
    _QuantityRule(
        (
            "salt",
            "black pepper",
            "white pepper",
            "powder",
            "paprika",
            "cumin",
            "cinnamon",
            "nutmeg",
            "turmeric",
            "curry",
            "seasoning",
            "bouillon",
            "cayenne",
            "chili flakes",
        ),
        "1 teaspoon",
        (
            ("salt", "to taste"),
            ("black pepper", "to taste"),
            ("white pepper", "to taste"),
            ("bouillon", "2 cubes"),
            ("curry", "1 tablespoon"),
        ),
    ),
    _QuantityRule(
        (
            "basil",
            "parsley",
            "cilantro",
            "coriander",
            "thyme",
            "rosemary",
            "mint",
            "dill",
            "bay leaf",
            "oregano",
        ),
        "2 tablespoons, chopped",
        (("bay leaf", "2 leaves"), ("dried", "1 teaspoon"), ("fresh", "1 small bunch")),
    ),
    _QuantityRule(("garlic",), "2-3 cloves"),
    _QuantityRule(("ginger",), "1 inch piece", (("ground", "1 teaspoon"),)),
    _QuantityRule(
        ("onion", "shallot", "scallion", "leek"),
        "1 medium",
        (
            ("green onion", "3 stalks"),
            ("spring onion", "3 stalks"),
            ("scallion", "3 stalks"),
            ("shallot", "2 medium"),
            ("leek", "1 large"),
        ),
    ),
    _QuantityRule(
        ("tomato",),
        "2 medium",
        (
            ("cherry", "1 pint"),
            ("grape", "1 pint"),
            ("paste", "2 tablespoons"),
            ("sauce", "1 can (15 oz)"),
            ("canned", "1 can (14 oz)"),
        ),
    ),
    _QuantityRule(
        (
            "bell pepper",
            "chili",
            "chile",
            "jalapeno",
            "scotch bonnet",
            "habanero",
            "pepper",
        ),
        "1-2 pieces",
        (("bell", "1 large"),),
    ),
    _QuantityRule(
        ("spinach", "kale", "lettuce", "cabbage", "bitter leaf", "ugu", "greens"),
        "2 cups, chopped",
        (("cabbage", "1/2 head"), ("lettuce", "1 head")),
    ),
    _QuantityRule(
        ("potato", "yam", "cassava", "carrot", "beet", "plantain", "turnip"),
        "2 medium",
        (
            ("sweet potato", "2 medium"),
            ("plantain", "2 ripe"),
            ("yam", "1 small tuber"),
        ),
    ),
    _QuantityRule(
        ("bean", "lentil", "chickpea", "black-eyed pea", "kidney"),
        "1 can (15 oz)",
        (("dried", "1 cup"), ("lentil", "1 cup")),
    ),
    _QuantityRule(
        (
            "eggplant",
            "zucchini",
            "cucumber",
            "broccoli",
            "cauliflower",
            "mushroom",
            "okra",
            "celery",
            "corn",
            "squash",
            "pumpkin",
        ),
        "1 cup, chopped",
        (("mushroom", "8 ounces"), ("celery", "2 stalks"), ("broccoli", "1 head")),
        words=("pea",),
    ),
    _QuantityRule(
        (
            "apple",
            "banana",
            "orange",
            "lemon",
            "lime",
            "mango",
            "pineapple",
            "avocado",
            "berries",
            "berry",
            "grape",
        ),
        "2 medium",
        (
            ("lemon", "1 lemon"),
            ("lime", "1 lime"),
            ("berr", "1 cup"),
            ("avocado", "1 ripe"),
        ),
        words=("pear", "peach", "peaches"),
    ),
    _QuantityRule(
        ("rice", "quinoa", "couscous", "oats", "barley", "bulgur", "millet"),
        "2 cups",
        (("oats", "1 cup"),),
    ),
    _QuantityRule(
        (
            "pasta",
            "spaghetti",
            "penne",
            "noodle",
            "macaroni",
            "lasagna",
            "fettuccine",
            "linguine",
        ),
        "1 pound",
        (("lasagna", "12 sheets"), ("noodle", "8 ounces")),
    ),
    _QuantityRule(
        (
            "oil",
            "vinegar",
            "soy sauce",
            "ketchup",
            "mayonnaise",
            "mustard",
            "honey",
            "sugar",
            "syrup",
        ),
        "2 tablespoons",
        (("palm oil", "1/2 cup"), ("vegetable oil", "1/4 cup"), ("sugar", "1/4 cup")),
    ),
    _QuantityRule(("water", "wine", "juice"), "1 cup"),
    _QuantityRule(("egg",), "2 large"),
)


def is_likely_dish(text: str | None) -> bool:
    """Return True when text looks like a dish name rather than instructions."""
    if not text or not text.strip():
        return False
    lowered = text.lower().strip()
    if _RECIPE_KEYWORD_PATTERN.search(lowered):
        return False
    if any(dish in lowered for dish in _KNOWN_DISHES):
        return True
    return len(lowered.split()) <= 3


def is_generic_list(ingredients: "Iterable[Ingredient]") -> bool:
    """Return True when a list is dominated by broad category terms."""
    names = [ingredient.name.lower().strip() for ingredient in ingredients]
    if not names:
        return True
    generic_count = sum(
        1 for name in names if any(term in name for term in _GENERIC_TERMS)
    )
    specific_count = sum(
        1 for name in names if any(term in name for term in _SPECIFIC_TERMS)
    )
    return generic_count > len(names) * 0.5 and specific_count < 3


def estimate_quantity(ingredient_name: str) -> str:
    """Return a plausible quantity for an ingredient name."""
    name = ingredient_name.lower().strip()
    if not name:
        return DEFAULT_QUANTITY
    for rule in _QUANTITY_RULES:
        quantity = rule.match(name)
        if quantity is not None:
            return quantity
    return DEFAULT_QUANTITY


def ingredients_from_vision(vision: "VisionData") -> list[Ingredient]:
    """Build ingredients directly from vision labels and detected text."""
    ingredients: list[Ingredient] = []
    seen: set[str] = set()

    for match in _QUANTITY_LINE_PATTERN.finditer(vision.detected_text):
        name = " ".join(match.group("name").split()).strip(" -")
        key = name.lower()
        if not name or key in seen:
            continue
        seen.add(key)
        quantity = f"{match.group('amount')} {match.group('unit')}"
        ingredients.append(Ingredient(name=name, quantity=quantity))

    for label in vision.food_items:
        name = label.strip()
        key = name.lower()
        if not name or key in seen or key in _NON_INGREDIENT_TERMS:
            continue
        if not any(keyword in key for keyword in _FOOD_KEYWORDS):
            continue
        seen.add(key)
        ingredients.append(Ingredient(name=name, quantity=estimate_quantity(name)))

    return ingredients
