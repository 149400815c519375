"""FastAPI application factory."""

import logging
import traceback
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from smart_cart_buddy.api.grocery import router as grocery_router
from smart_cart_buddy.app_logging import configure_logging
from smart_cart_buddy.containers import AppContainer
from smart_cart_buddy.domain.errors import (
    ExtractionError,
    NoIngredientsFoundError,
    PaymentVerificationError,
)
from smart_cart_buddy.domain.ingredients import ExtractionRequest

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": (
        "authorization, x-client-info, apikey, content-type"
    ),
    "Access-Control-Allow-Methods": "POST, OPTIONS",
}


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        availability = app.state.container.settings.provider_availability()
        logger.info(
            "Extraction providers: vision=%s deepseek=%s openai=%s",
            availability.vision,
            availability.deepseek,
            availability.openai,
        )
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container
    app.add_middleware(
        CORSMiddleware,
        allow_origins=container.settings.cors_allowed_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(grocery_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.options("/extract-ingredients")
    @app.options("/verify-paystack-payment")
    async def preflight() -> Response:
        """Answer CORS preflight requests."""
        return Response(status_code=204, headers=CORS_HEADERS)

    @app.post("/extract-ingredients")
    async def extract_ingredients(request: Request) -> JSONResponse:
        """Extract ingredients from recipe text or a food photo."""
        state_container: AppContainer = request.app.state.container
        try:
            payload = await request.json()
        except ValueError:
            return _json({"error": "Invalid JSON in request body"}, status_code=400)

        try:
            extraction_request = ExtractionRequest.from_payload(payload)
            if extraction_request.recipe_text:
                logger.info(
                    "Processing recipe text: %s", extraction_request.recipe_text[:100]
                )
            else:
                logger.info(
                    "Processing image (description=%r)",
                    extraction_request.user_description,
                )
            result = await state_container.extraction_service.extract(
                extraction_request
            )
        except NoIngredientsFoundError as exc:
            return _json(
                {"error": str(exc), "isQuotaError": exc.is_quota_error},
                status_code=exc.status_code,
            )
        except ExtractionError as exc:
            return _json({"error": str(exc)}, status_code=exc.status_code)
        except Exception as exc:
            logger.exception("Error extracting ingredients")
            body: dict[str, object] = {"error": str(exc) or type(exc).__name__}
            if state_container.settings.expose_error_details:
                body["details"] = traceback.format_exc()
            return _json(body, status_code=500)

        return _json(result.to_dict(), status_code=200)

    @app.post("/verify-paystack-payment")
    async def verify_paystack_payment(request: Request) -> JSONResponse:
        """Verify a Paystack transaction and upgrade the paying user."""
        state_container: AppContainer = request.app.state.container
        try:
            payload = await request.json()
        except ValueError:
            return _json(
                {"success": False, "message": "Invalid JSON in request body"},
                status_code=400,
            )

        reference = payload.get("reference") if isinstance(payload, dict) else None
        try:
            verification = await state_container.payment_service.verify(
                reference if isinstance(reference, str) else None
            )
        except PaymentVerificationError as exc:
            logger.error("Error verifying payment: %s", exc)
            return _json({"success": False, "message": str(exc)}, status_code=500)
        except Exception as exc:
            logger.exception("Error verifying payment")
            return _json(
                {"success": False, "message": str(exc) or "Failed to verify payment"},
                status_code=500,
            )

        status_code = 200 if verification.success else 400
        return _json(verification.to_dict(), status_code=status_code)

    return app


def _json(content: dict[str, object], status_code: int) -> JSONResponse:
    return JSONResponse(content=content, status_code=status_code, headers=CORS_HEADERS)
