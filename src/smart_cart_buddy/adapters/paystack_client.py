"""Paystack transaction verification client."""

from dataclasses import dataclass
from urllib.parse import quote

import httpx

from smart_cart_buddy.domain.errors import PaymentVerificationError
from smart_cart_buddy.services.payments import PaymentGatewayClient


@dataclass
class HttpxPaystackClient(PaymentGatewayClient):
    """HTTPX-backed Paystack client."""

    secret_key: str
    http_client: httpx.AsyncClient
    base_url: str = "https://api.paystack.co"

    @classmethod
    def create(cls, secret_key: str, base_url: str) -> "HttpxPaystackClient":
        """Create a Paystack client with a managed httpx session."""
        return cls(
            secret_key=secret_key, http_client=httpx.AsyncClient(), base_url=base_url
        )

    async def verify_transaction(self, reference: str) -> dict[str, object]:
        """Fetch the verification payload for a transaction reference."""
        url = f"{self.base_url}/transaction/verify/{quote(reference, safe='')}"
        try:
            response = await self.http_client.get(
                url,
                headers={
                    "Authorization": f"Bearer {self.secret_key}",
                    "Content-Type": "application/json",
                },
                timeout=15,
            )
            payload = response.json()
        except httpx.HTTPError as exc:
            raise PaymentVerificationError(f"Paystack unreachable: {exc}") from exc
        except ValueError as exc:
            raise PaymentVerificationError("Paystack returned invalid JSON") from exc
        if not isinstance(payload, dict):
            raise PaymentVerificationError("Paystack returned an unexpected payload")
        return payload

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
