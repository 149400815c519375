"""Domain models for ingredient extraction."""

from dataclasses import dataclass, field

from smart_cart_buddy.domain.errors import BadRequestError


@dataclass(frozen=True)
class Ingredient:
    """Single ingredient with a free-form quantity."""

    name: str
    quantity: str

    def to_dict(self) -> dict[str, str]:
        """Serialize to the wire shape."""
        return {"name": self.name, "quantity": self.quantity}


@dataclass(frozen=True)
class ExtractionRequest:
    """Recipe text, or an image with an optional description."""

    recipe_text: str | None = None
    image_base64: str | None = None
    user_description: str | None = None

    @classmethod
    def from_payload(cls, payload: object) -> "ExtractionRequest":
        """Build a request from a decoded JSON body."""
        if not isinstance(payload, dict):
            raise BadRequestError("Either an image or recipe text is required")
        request = cls(
            recipe_text=_clean(payload.get("recipeText")),
            image_base64=_clean(payload.get("imageBase64")),
            user_description=_clean(payload.get("userDescription")),
        )
        if not request.recipe_text and not request.image_base64:
            raise BadRequestError("Either an image or recipe text is required")
        return request

    @property
    def context_text(self) -> str | None:
        """Text that may name a dish: the recipe text or the image description."""
        return self.recipe_text or self.user_description

    @property
    def has_image(self) -> bool:
        return bool(self.image_base64)


@dataclass(frozen=True)
class ExtractionResult:
    """Successful extraction with the tag of the path that produced it."""

    ingredients: list[Ingredient]
    analysis_method: str

    def to_dict(self) -> dict[str, object]:
        """Serialize to the response envelope."""
        return {
            "ingredients": [item.to_dict() for item in self.ingredients],
            "analysisMethod": self.analysis_method,
        }


@dataclass(frozen=True)
class ProviderAvailability:
    """Which providers have credentials configured."""

    vision: bool = False
    deepseek: bool = False
    openai: bool = False

    @property
    def any_configured(self) -> bool:
        return self.vision or self.deepseek or self.openai


@dataclass(frozen=True)
class VisionData:
    """Normalized Google Vision annotations for one image."""

    food_items: list[str]
    detected_text: str
    raw_labels: list[dict[str, object]] = field(default_factory=list)
    raw_objects: list[dict[str, object]] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.food_items and not self.detected_text.strip()


@dataclass(frozen=True)
class ApiFailure:
    """One failed provider attempt."""

    provider_label: str
    message: str
    is_quota: bool = False


@dataclass
class ApiErrorLog:
    """Failures collected while handling a single extraction request."""

    failures: list[ApiFailure] = field(default_factory=list)

    def record(self, provider_label: str, exc: Exception) -> None:
        """Append a failure for the given provider."""
        self.failures.append(
            ApiFailure(
                provider_label=provider_label,
                message=str(exc),
                is_quota=bool(getattr(exc, "is_quota", False)),
            )
        )

    @property
    def has_quota_error(self) -> bool:
        return any(failure.is_quota for failure in self.failures)

    def summary(self) -> str:
        """Return failures joined as `label: message` pairs."""
        return "; ".join(
            f"{failure.provider_label}: {failure.message}" for failure in self.failures
        )


def _clean(value: object) -> str | None:
    if not isinstance(value, str):
        return None
    cleaned = value.strip()
    return cleaned or None
