"""Tests for container wiring."""

import asyncio

from smart_cart_buddy.containers import build_container


def test_build_container_creates_services(settings) -> None:
    container = build_container(settings)

    assert container.extraction_service.availability.any_configured
    assert [client.tag for client in container.extraction_service.llm_clients] == [
        "deepseek",
        "openai",
    ]
    assert container.extraction_service.vision_client is not None
    assert container.payment_service.gateway is not None
    asyncio.run(container.close_resources())


def test_build_container_skips_unconfigured_providers(settings) -> None:
    settings.deepseek_api_key = None
    settings.google_vision_api_key = "  "
    settings.paystack_secret_key = None

    container = build_container(settings)

    assert [client.tag for client in container.extraction_service.llm_clients] == [
        "openai"
    ]
    assert container.extraction_service.vision_client is None
    assert container.payment_service.gateway is None
    asyncio.run(container.close_resources())
