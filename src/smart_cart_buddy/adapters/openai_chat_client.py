"""Chat Completions client for OpenAI and OpenAI-compatible providers."""

import logging
from dataclasses import dataclass

from openai import APIConnectionError, APIError, APIStatusError, AsyncOpenAI

from smart_cart_buddy.domain.errors import (
    MalformedResponseError,
    ProviderError,
    QuotaExceededError,
)
from smart_cart_buddy.services.extraction import ChatClient

_logger = logging.getLogger(__name__)


@dataclass
class OpenAICompatibleChatClient(ChatClient):
    """Chat client backed by the OpenAI SDK.

    Deepseek exposes the same API surface, so both providers share this
    adapter with a different `base_url` and model.
    """

    client: AsyncOpenAI
    model: str
    label: str
    tag: str
    supports_images: bool = False
    image_model: str | None = None
    temperature: float = 0.2

    @classmethod
    def create(  # noqa: PLR0913
        cls,
        *,
        api_key: str,
        model: str,
        label: str,
        tag: str,
        base_url: str | None = None,
        supports_images: bool = False,
        image_model: str | None = None,
        temperature: float = 0.2,
        timeout_seconds: float = 60.0,
    ) -> "OpenAICompatibleChatClient":
        """Create a client with retries disabled; fallback is the caller's job."""
        return cls(
            client=AsyncOpenAI(
                api_key=api_key,
                base_url=base_url,
                max_retries=0,
                timeout=timeout_seconds,
            ),
            model=model,
            label=label,
            tag=tag,
            supports_images=supports_images,
            image_model=image_model,
            temperature=temperature,
        )

    async def complete(
        self,
        *,
        system_prompt: str,
        user_text: str,
        image_data_url: str | None = None,
    ) -> str:
        """Call the chat completions endpoint and return the reply text."""
        if image_data_url is not None:
            user_content: object = [
                {"type": "text", "text": user_text},
                {"type": "image_url", "image_url": {"url": image_data_url}},
            ]
            model = self.image_model or self.model
        else:
            user_content = user_text
            model = self.model

        try:
            response = await self.client.chat.completions.create(
                model=model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_content},
                ],
                temperature=self.temperature,
            )
        except APIStatusError as exc:
            raise provider_error_from_status(self.label, exc) from exc
        except APIConnectionError as exc:
            raise ProviderError(f"{self.label} API unreachable: {exc}") from exc
        except APIError as exc:
            raise ProviderError(f"{self.label} API error: {exc}") from exc

        if not response.choices:
            raise MalformedResponseError(f"{self.label} returned no choices")
        content = response.choices[0].message.content
        if not content:
            raise MalformedResponseError(f"{self.label} returned an empty response")
        return content


def provider_error_from_status(label: str, exc: APIStatusError) -> ProviderError:
    """Map an HTTP error from the provider to a quota or generic provider error."""
    error_body = _error_object(exc.body)
    message = str(error_body.get("message") or exc.message or exc.status_code)
    error_type = error_body.get("type") or getattr(exc, "type", None)
    error_code = error_body.get("code") or getattr(exc, "code", None)
    _logger.warning(
        "%s API error: status=%s type=%s code=%s",
        label,
        exc.status_code,
        error_type,
        error_code,
    )
    if is_quota_error(error_type, error_code, message):
        return QuotaExceededError(f"{label} quota exceeded: {message}")
    return ProviderError(f"{label} API error ({exc.status_code}): {message}")


def is_quota_error(error_type: object, error_code: object, message: str) -> bool:
    """Return True when the error signals an exhausted quota or rate limit."""
    return (
        error_type == "insufficient_quota"
        or error_code == "rate_limit_exceeded"
        or "quota" in message.lower()
    )


def _error_object(body: object) -> dict[str, object]:
    if not isinstance(body, dict):
        return {}
    nested = body.get("error")
    if isinstance(nested, dict):
        return nested
    return body
