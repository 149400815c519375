"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import UTC, datetime, timedelta
from uuid import UUID, uuid4

import pytest

from smart_cart_buddy.config import Settings
from smart_cart_buddy.containers import AppContainer
from smart_cart_buddy.domain.errors import MalformedResponseError
from smart_cart_buddy.domain.grocery import GroceryItem, Recipe
from smart_cart_buddy.domain.ingredients import (
    Ingredient,
    ProviderAvailability,
    VisionData,
)
from smart_cart_buddy.services.extraction import (
    ChatClient,
    IngredientExtractionService,
    VisionClient,
)
from smart_cart_buddy.services.grocery import (
    GroceryRepository,
    GroceryService,
    RecipeRepository,
    RecipeService,
)
from smart_cart_buddy.services.payments import (
    PaymentGatewayClient,
    PaymentService,
    ProfileRepository,
)
from smart_cart_buddy.services.users import AuthProvider, UserService

TEST_TOKEN = "token-1"

_EPOCH = datetime(2024, 1, 1, tzinfo=UTC)


@dataclass
class FakeChatClient(ChatClient):
    """Chat client that plays back scripted replies and records calls."""

    label: str
    tag: str
    supports_images: bool = False
    replies: list[object] = field(default_factory=list)
    calls: list[dict[str, object]] = field(default_factory=list)

    async def complete(
        self,
        *,
        system_prompt: str,
        user_text: str,
        image_data_url: str | None = None,
    ) -> str:
        self.calls.append(
            {
                "system_prompt": system_prompt,
                "user_text": user_text,
                "image_data_url": image_data_url,
            }
        )
        if not self.replies:
            raise MalformedResponseError(f"{self.label} has no scripted reply")
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return str(reply)


@dataclass
class FakeVisionClient(VisionClient):
    """Vision client returning a fixed annotation or raising an error."""

    data: VisionData = field(
        default_factory=lambda: VisionData(
            food_items=["Tomato", "Onion", "Food"], detected_text=""
        )
    )
    error: Exception | None = None
    calls: int = 0

    async def annotate(self, image_base64: str) -> VisionData:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.data


@dataclass
class InMemoryGroceryRepository(GroceryRepository):
    """In-memory grocery item repository for tests."""

    items: dict[UUID, GroceryItem] = field(default_factory=dict)

    def list_items(self, user_id: UUID) -> list[GroceryItem]:
        owned = [item for item in self.items.values() if item.user_id == user_id]
        return sorted(owned, key=lambda item: item.created_at, reverse=True)

    def get_item(self, user_id: UUID, item_id: UUID) -> GroceryItem | None:
        item = self.items.get(item_id)
        if item is None or item.user_id != user_id:
            return None
        return item

    def create_item(self, user_id: UUID, payload: dict[str, object]) -> GroceryItem:
        recipe_id = payload.get("recipe_id")
        item = GroceryItem(
            id=uuid4(),
            user_id=user_id,
            name=str(payload["name"]),
            quantity=str(payload.get("quantity") or ""),
            notes=payload.get("notes"),  # type: ignore[arg-type]
            is_completed=bool(payload.get("is_completed")),
            is_frequent=bool(payload.get("is_frequent")),
            created_at=_EPOCH + timedelta(seconds=len(self.items)),
            recipe_id=UUID(str(recipe_id)) if recipe_id else None,
        )
        self.items[item.id] = item
        return item

    def update_item(
        self, user_id: UUID, item_id: UUID, payload: dict[str, object]
    ) -> GroceryItem:
        item = replace(self.items[item_id], **payload)
        self.items[item_id] = item
        return item

    def delete_item(self, user_id: UUID, item_id: UUID) -> None:
        self.items.pop(item_id, None)


@dataclass
class InMemoryRecipeRepository(RecipeRepository):
    """In-memory recipe repository for tests."""

    recipes: dict[UUID, Recipe] = field(default_factory=dict)

    def list_recipes(self, user_id: UUID) -> list[Recipe]:
        return [recipe for recipe in self.recipes.values() if recipe.user_id == user_id]

    def get_recipe(self, user_id: UUID, recipe_id: UUID) -> Recipe | None:
        recipe = self.recipes.get(recipe_id)
        if recipe is None or recipe.user_id != user_id:
            return None
        return recipe

    def create_recipe(
        self, user_id: UUID, title: str, ingredients: list[Ingredient]
    ) -> Recipe:
        recipe = Recipe(
            id=uuid4(),
            user_id=user_id,
            title=title,
            created_at=_EPOCH,
            ingredients=list(ingredients),
        )
        self.recipes[recipe.id] = recipe
        return recipe

    def delete_recipe(self, user_id: UUID, recipe_id: UUID) -> None:
        self.recipes.pop(recipe_id, None)


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """In-memory profile repository for tests."""

    premium: set[str] = field(default_factory=set)

    def is_premium(self, user_id: str) -> bool:
        return user_id in self.premium

    def set_premium(self, user_id: str, is_premium: bool) -> None:
        if is_premium:
            self.premium.add(user_id)
        else:
            self.premium.discard(user_id)


@dataclass
class FakeAuthProvider(AuthProvider):
    """Auth provider that accepts a fixed set of tokens."""

    tokens: dict[str, UUID] = field(default_factory=dict)

    def get_user_id(self, access_token: str) -> UUID | None:
        return self.tokens.get(access_token)


@dataclass
class FakePaymentGateway(PaymentGatewayClient):
    """Payment gateway returning a fixed verification payload."""

    payload: dict[str, object] = field(default_factory=dict)
    references: list[str] = field(default_factory=list)

    async def verify_transaction(self, reference: str) -> dict[str, object]:
        self.references.append(reference)
        return self.payload


def paystack_payload(
    status: str = "success", amount: int = 19900, user_id: str | None = "user-1"
) -> dict[str, object]:
    """Build a Paystack verification payload."""
    return {
        "status": True,
        "message": "Verification successful",
        "data": {
            "status": status,
            "amount": amount,
            "reference": "ref-123",
            "customer": {"email": "cook@example.com"},
            "metadata": {"userId": user_id} if user_id else {},
        },
    }


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="test.service.key",
        google_vision_api_key="vision-key",
        deepseek_api_key="deepseek-key",
        openai_api_key="openai-key",
        paystack_secret_key="paystack-key",
    )


@pytest.fixture
def user_id() -> UUID:
    return uuid4()


@pytest.fixture
def deepseek_client() -> FakeChatClient:
    return FakeChatClient(label="Deepseek", tag="deepseek")


@pytest.fixture
def openai_client() -> FakeChatClient:
    return FakeChatClient(label="OpenAI", tag="openai", supports_images=True)


@pytest.fixture
def vision_client() -> FakeVisionClient:
    return FakeVisionClient()


@pytest.fixture
def payment_gateway() -> FakePaymentGateway:
    return FakePaymentGateway(payload=paystack_payload())


@pytest.fixture
def profile_repository() -> InMemoryProfileRepository:
    return InMemoryProfileRepository()


@pytest.fixture
def grocery_service() -> GroceryService:
    return GroceryService(InMemoryGroceryRepository())


@pytest.fixture
def recipe_service(
    grocery_service: GroceryService, profile_repository: InMemoryProfileRepository
) -> RecipeService:
    return RecipeService(
        repository=InMemoryRecipeRepository(),
        grocery_service=grocery_service,
        profile_repository=profile_repository,
    )


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    user_id: UUID,
    deepseek_client: FakeChatClient,
    openai_client: FakeChatClient,
    vision_client: FakeVisionClient,
    payment_gateway: FakePaymentGateway,
    profile_repository: InMemoryProfileRepository,
    grocery_service: GroceryService,
    recipe_service: RecipeService,
) -> AppContainer:
    extraction_service = IngredientExtractionService(
        availability=ProviderAvailability(vision=True, deepseek=True, openai=True),
        llm_clients=[deepseek_client, openai_client],
        vision_client=vision_client,
    )
    payment_service = PaymentService(
        gateway=payment_gateway,
        profile_repository=profile_repository,
        min_amount=settings.premium_min_amount,
    )
    user_service = UserService(FakeAuthProvider(tokens={TEST_TOKEN: user_id}))

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        extraction_service=extraction_service,
        payment_service=payment_service,
        user_service=user_service,
        grocery_service=grocery_service,
        recipe_service=recipe_service,
        close_resources=close_resources,
    )
