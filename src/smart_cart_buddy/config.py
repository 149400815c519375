"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from smart_cart_buddy.domain.ingredients import ProviderAvailability

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    google_vision_api_key: str | None = None
    google_vision_base_url: str = "https://vision.googleapis.com/v1"
    deepseek_api_key: str | None = None
    deepseek_base_url: str = "https://api.deepseek.com"
    deepseek_model: str = "deepseek-chat"
    deepseek_supports_images: bool = False
    openai_api_key: str | None = None
    openai_model: str = "gpt-4o-mini"
    openai_image_model: str = "gpt-4o"
    llm_temperature: float = 0.2
    http_timeout_seconds: float = 60.0
    paystack_secret_key: str | None = None
    paystack_base_url: str = "https://api.paystack.co"
    premium_min_amount: int = 19900
    free_recipe_limit: int = 2
    cors_allowed_origins: list[str] = ["*"]
    expose_error_details: bool = True
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    def provider_availability(self) -> ProviderAvailability:
        """Snapshot which extraction providers have credentials."""
        return ProviderAvailability(
            vision=_is_set(self.google_vision_api_key),
            deepseek=_is_set(self.deepseek_api_key),
            openai=_is_set(self.openai_api_key),
        )


def _is_set(value: str | None) -> bool:
    return bool(value and value.strip())
