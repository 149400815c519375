"""System prompts and user-content builders for each extraction mode."""

from smart_cart_buddy.domain.ingredients import VisionData

_FORMAT_RULES = (
    'Respond with ONLY a JSON array of objects with "name" and "quantity" string '
    'properties, for example: [{"name": "flour", "quantity": "2 cups"}, '
    '{"name": "sugar", "quantity": "1 tbsp"}]. Do not include instructions, '
    "steps, commentary or any text outside the array."
)

TEXT_SYSTEM_PROMPT = (
    "You are a precise recipe parser. Extract ONLY the ingredients that are "
    "explicitly written in the user's text, with the quantities as written. "
    "Never add ingredients that are merely typical for the dish and are not "
    "mentioned in the text. If a quantity is missing, give a reasonable "
    "estimate for that ingredient only. " + _FORMAT_RULES
)

DISH_SYSTEM_PROMPT = (
    "You are an expert chef with deep knowledge of traditional and regional "
    "cuisines worldwide. The user names a dish. List the COMPLETE set of "
    "ingredients used to cook an authentic, traditional version of that dish, "
    "including proteins, vegetables, oils, spices, seasonings and stock, each "
    "with a realistic quantity for a family-sized pot. Use the specific "
    "ingredient names cooks would buy (for example 'ground egusi seeds', "
    "'palm oil'), never broad categories like 'vegetables' or 'meat'. "
    + _FORMAT_RULES
)

IMAGE_SYSTEM_PROMPT = (
    "You are a culinary vision assistant. Look at the food photo and list the "
    "ingredients you can actually see or that are clearly required for what "
    "is visible, with estimated quantities for the portion shown. Do not "
    "invent a generic recipe for something you cannot identify. "
    + _FORMAT_RULES
)

VISION_ANALYSIS_SYSTEM_PROMPT = (
    "You analyse the output of an image-labelling service that looked at a "
    "food photo. You receive detected labels, detected objects and any text "
    "read from the image. Identify the specific ingredients that are plausibly "
    "visible, using the detected text (for example a printed ingredient list) "
    "when present. Restrict yourself to what the data supports: if the data is "
    "ambiguous, return only the ingredients you can justify and NEVER fall back "
    "to a generic recipe for a guessed dish. Estimate quantities for the "
    "portion shown. " + _FORMAT_RULES
)


def text_user_content(recipe_text: str) -> str:
    """User message for literal extraction from recipe text."""
    return f"Extract the ingredients from this text:\n\n{recipe_text}"


def dish_user_content(dish_name: str) -> str:
    """User message for a traditional recipe lookup."""
    return (
        f"Dish: {dish_name}\n\n"
        "List every ingredient needed to cook the traditional version of this dish."
    )


def image_user_text(user_description: str | None) -> str:
    """Text that accompanies an embedded image."""
    text = "Identify the ingredients in this food photo."
    if user_description:
        text += f"\n\nThe user describes it as: {user_description}"
    return text


def vision_analysis_user_content(
    vision: VisionData, user_description: str | None
) -> str:
    """User message summarising vision annotations for the model."""
    lines = [
        "Detected labels and objects: "
        + (", ".join(vision.food_items) if vision.food_items else "none"),
        "Detected text: " + (vision.detected_text.strip() or "none"),
    ]
    if user_description:
        lines.append(f"User description: {user_description}")
    return "\n".join(lines)
