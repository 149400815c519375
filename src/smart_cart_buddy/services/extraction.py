"""Ingredient extraction across vision and language model providers."""

import base64
import binascii
import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from typing import Protocol

from smart_cart_buddy.domain.errors import (
    AllProvidersQuotaExceededError,
    ConfigurationError,
    ExtractionError,
    MalformedResponseError,
    NoIngredientsFoundError,
)
from smart_cart_buddy.domain.ingredients import (
    ApiErrorLog,
    ExtractionRequest,
    ExtractionResult,
    Ingredient,
    ProviderAvailability,
    VisionData,
)
from smart_cart_buddy.services import prompts
from smart_cart_buddy.services.heuristics import (
    ingredients_from_vision,
    is_generic_list,
    is_likely_dish,
)
from smart_cart_buddy.services.parsing import parse_ingredient_reply

_logger = logging.getLogger(__name__)

VISION_LABEL = "Google Vision"
VISION_DIRECT_METHOD = "google-vision-direct"


class ChatClient(Protocol):
    """Interface for a chat-completion language model provider."""

    label: str
    tag: str
    supports_images: bool

    async def complete(
        self,
        *,
        system_prompt: str,
        user_text: str,
        image_data_url: str | None = None,
    ) -> str:
        """Return the model's text reply."""


class VisionClient(Protocol):
    """Interface for an image-labelling provider."""

    async def annotate(self, image_base64: str) -> VisionData:
        """Return normalized labels, objects and text for an image."""


@dataclass(frozen=True)
class ExtractionAttempt:
    """One step of the fallback chain."""

    provider_label: str
    analysis_method: str
    run: Callable[[], Awaitable[list[Ingredient]]]


async def prompt_and_parse(
    client: ChatClient,
    *,
    system_prompt: str,
    user_text: str,
    image_data_url: str | None = None,
) -> list[Ingredient]:
    """Send a prompt to a provider and parse its reply into ingredients."""
    reply = await client.complete(
        system_prompt=system_prompt,
        user_text=user_text,
        image_data_url=image_data_url,
    )
    _logger.debug("%s reply: %s", client.label, reply[:500])
    return parse_ingredient_reply(reply)


@dataclass
class IngredientExtractionService:
    """Runs the provider fallback chain for one extraction request at a time.

    `llm_clients` is ordered by preference; the first entry is always tried
    before the second when both apply to a step.
    """

    availability: ProviderAvailability
    llm_clients: Sequence[ChatClient]
    vision_client: VisionClient | None = None

    async def extract(self, request: ExtractionRequest) -> ExtractionResult:
        """Extract ingredients or raise a terminal extraction error."""
        if not self.availability.any_configured:
            raise ConfigurationError("No AI provider API keys are configured")

        errors = ApiErrorLog()
        context_text = request.context_text

        if context_text and is_likely_dish(context_text):
            _logger.info("Treating %r as a dish name", context_text[:100])
            result = await self._first_success(
                self._dish_attempts(context_text), errors
            )
            if result is not None:
                return result

        if request.has_image:
            result = await self._extract_from_image(request, errors)
        elif request.recipe_text:
            result = await self._first_success(
                self._text_attempts(request.recipe_text), errors
            )
        else:
            result = None

        if result is not None:
            return result
        raise self._exhausted(errors)

    async def _extract_from_image(
        self, request: ExtractionRequest, errors: ApiErrorLog
    ) -> ExtractionResult | None:
        image_base64 = request.image_base64 or ""
        description = request.user_description
        vision: VisionData | None = None

        if self.vision_client is not None and self.availability.vision:
            try:
                vision = await self.vision_client.annotate(image_base64)
            except ExtractionError as exc:
                _logger.warning("%s failed: %s", VISION_LABEL, exc)
                errors.record(VISION_LABEL, exc)

        if vision is not None:
            result = await self._first_success(
                self._vision_analysis_attempts(vision, description), errors
            )
            if result is not None:
                if is_generic_list(result.ingredients) and is_likely_dish(description):
                    _logger.info("Vision result looks generic; retrying as dish lookup")
                    override = await self._first_success(
                        self._dish_attempts(description or ""), errors
                    )
                    if override is not None:
                        return override
                return result

        result = await self._first_success(
            self._image_attempts(image_base64, description), errors
        )
        if result is not None:
            return result

        if vision is not None:
            ingredients = ingredients_from_vision(vision)
            if ingredients:
                return ExtractionResult(ingredients, VISION_DIRECT_METHOD)
            errors.record(
                VISION_LABEL,
                MalformedResponseError("No recognizable ingredients in vision results"),
            )
        return None

    def _dish_attempts(self, dish_name: str) -> list[ExtractionAttempt]:
        return [
            self._attempt(
                client,
                f"{client.tag}-traditional-recipe",
                prompts.DISH_SYSTEM_PROMPT,
                prompts.dish_user_content(dish_name),
            )
            for client in self.llm_clients
        ]

    def _text_attempts(self, recipe_text: str) -> list[ExtractionAttempt]:
        return [
            self._attempt(
                client,
                f"{client.tag}-text",
                prompts.TEXT_SYSTEM_PROMPT,
                prompts.text_user_content(recipe_text),
            )
            for client in self.llm_clients
        ]

    def _image_attempts(
        self, image_base64: str, description: str | None
    ) -> list[ExtractionAttempt]:
        data_url = to_data_url(image_base64)
        return [
            self._attempt(
                client,
                f"{client.tag}-image",
                prompts.IMAGE_SYSTEM_PROMPT,
                prompts.image_user_text(description),
                image_data_url=data_url,
            )
            for client in self.llm_clients
            if client.supports_images
        ]

    def _vision_analysis_attempts(
        self, vision: VisionData, description: str | None
    ) -> list[ExtractionAttempt]:
        user_text = prompts.vision_analysis_user_content(vision, description)

        def build(client: ChatClient) -> ExtractionAttempt:
            async def run() -> list[Ingredient]:
                if vision.is_empty and not description:
                    raise MalformedResponseError("No food items or text detected")
                return await prompt_and_parse(
                    client,
                    system_prompt=prompts.VISION_ANALYSIS_SYSTEM_PROMPT,
                    user_text=user_text,
                )

            return ExtractionAttempt(
                provider_label=client.label,
                analysis_method=f"google-vision-{client.tag}",
                run=run,
            )

        return [build(client) for client in self.llm_clients]

    @staticmethod
    def _attempt(
        client: ChatClient,
        analysis_method: str,
        system_prompt: str,
        user_text: str,
        image_data_url: str | None = None,
    ) -> ExtractionAttempt:
        async def run() -> list[Ingredient]:
            return await prompt_and_parse(
                client,
                system_prompt=system_prompt,
                user_text=user_text,
                image_data_url=image_data_url,
            )

        return ExtractionAttempt(
            provider_label=client.label,
            analysis_method=analysis_method,
            run=run,
        )

    @staticmethod
    async def _first_success(
        attempts: Sequence[ExtractionAttempt], errors: ApiErrorLog
    ) -> ExtractionResult | None:
        for attempt in attempts:
            try:
                ingredients = await attempt.run()
            except ExtractionError as exc:
                _logger.warning(
                    "%s failed (%s): %s",
                    attempt.provider_label,
                    attempt.analysis_method,
                    exc,
                )
                errors.record(attempt.provider_label, exc)
                continue
            if ingredients:
                _logger.info(
                    "Extracted %s ingredients via %s",
                    len(ingredients),
                    attempt.analysis_method,
                )
                return ExtractionResult(ingredients, attempt.analysis_method)
        return None

    @staticmethod
    def _exhausted(errors: ApiErrorLog) -> NoIngredientsFoundError:
        summary = errors.summary() or "no provider could handle this request"
        if errors.has_quota_error:
            return AllProvidersQuotaExceededError(
                "API quota exceeded. Please try again later or check your API "
                f"billing. Errors: {summary}"
            )
        return NoIngredientsFoundError(
            f"Could not extract ingredients. Errors: {summary}"
        )


def to_data_url(image_base64: str) -> str:
    """Wrap raw base64 image data in a data URL, sniffing the MIME type."""
    if image_base64.startswith("data:"):
        return image_base64
    return f"data:{_detect_mime_type(image_base64)};base64,{image_base64}"


def _detect_mime_type(image_base64: str) -> str:
    """Infer a basic image MIME type from the decoded file signature."""
    try:
        header = base64.b64decode(image_base64[:24], validate=False)
    except (binascii.Error, ValueError):
        return "image/jpeg"
    if header.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if header[:4] == b"RIFF" and header[8:12] == b"WEBP":
        return "image/webp"
    if header.startswith(b"GIF8"):
        return "image/gif"
    return "image/jpeg"
