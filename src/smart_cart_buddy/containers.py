"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from smart_cart_buddy.adapters.google_vision_client import HttpxGoogleVisionClient
from smart_cart_buddy.adapters.openai_chat_client import OpenAICompatibleChatClient
from smart_cart_buddy.adapters.paystack_client import HttpxPaystackClient
from smart_cart_buddy.adapters.supabase_auth_provider import SupabaseAuthProvider
from smart_cart_buddy.adapters.supabase_grocery_repository import (
    SupabaseGroceryRepository,
)
from smart_cart_buddy.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from smart_cart_buddy.adapters.supabase_recipe_repository import (
    SupabaseRecipeRepository,
)
from smart_cart_buddy.config import Settings
from smart_cart_buddy.services.extraction import IngredientExtractionService
from smart_cart_buddy.services.grocery import GroceryService, RecipeService
from smart_cart_buddy.services.payments import PaymentService
from smart_cart_buddy.services.users import UserService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    extraction_service: IngredientExtractionService
    payment_service: PaymentService
    user_service: UserService
    grocery_service: GroceryService
    recipe_service: RecipeService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    availability = resolved_settings.provider_availability()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    profile_repository = SupabaseProfileRepository(supabase_client)

    llm_clients: list[OpenAICompatibleChatClient] = []
    if availability.deepseek and resolved_settings.deepseek_api_key:
        llm_clients.append(
            OpenAICompatibleChatClient.create(
                api_key=resolved_settings.deepseek_api_key,
                base_url=resolved_settings.deepseek_base_url,
                model=resolved_settings.deepseek_model,
                label="Deepseek",
                tag="deepseek",
                supports_images=resolved_settings.deepseek_supports_images,
                temperature=resolved_settings.llm_temperature,
                timeout_seconds=resolved_settings.http_timeout_seconds,
            )
        )
    if availability.openai and resolved_settings.openai_api_key:
        llm_clients.append(
            OpenAICompatibleChatClient.create(
                api_key=resolved_settings.openai_api_key,
                model=resolved_settings.openai_model,
                image_model=resolved_settings.openai_image_model,
                label="OpenAI",
                tag="openai",
                supports_images=True,
                temperature=resolved_settings.llm_temperature,
                timeout_seconds=resolved_settings.http_timeout_seconds,
            )
        )

    vision_client = None
    if availability.vision and resolved_settings.google_vision_api_key:
        vision_client = HttpxGoogleVisionClient.create(
            api_key=resolved_settings.google_vision_api_key,
            base_url=resolved_settings.google_vision_base_url,
            timeout_seconds=resolved_settings.http_timeout_seconds,
        )

    paystack_client = None
    if resolved_settings.paystack_secret_key:
        paystack_client = HttpxPaystackClient.create(
            secret_key=resolved_settings.paystack_secret_key,
            base_url=resolved_settings.paystack_base_url,
        )

    extraction_service = IngredientExtractionService(
        availability=availability,
        llm_clients=llm_clients,
        vision_client=vision_client,
    )
    payment_service = PaymentService(
        gateway=paystack_client,
        profile_repository=profile_repository,
        min_amount=resolved_settings.premium_min_amount,
    )
    user_service = UserService(SupabaseAuthProvider(supabase_client))
    grocery_service = GroceryService(SupabaseGroceryRepository(supabase_client))
    recipe_service = RecipeService(
        repository=SupabaseRecipeRepository(supabase_client),
        grocery_service=grocery_service,
        profile_repository=profile_repository,
        free_recipe_limit=resolved_settings.free_recipe_limit,
    )

    async def close_resources() -> None:
        for client in llm_clients:
            await client.client.close()
        if vision_client is not None:
            await vision_client.close()
        if paystack_client is not None:
            await paystack_client.close()

    return AppContainer(
        settings=resolved_settings,
        extraction_service=extraction_service,
        payment_service=payment_service,
        user_service=user_service,
        grocery_service=grocery_service,
        recipe_service=recipe_service,
        close_resources=close_resources,
    )
