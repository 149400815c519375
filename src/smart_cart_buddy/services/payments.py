"""Premium subscription payment verification."""

import logging
from dataclasses import dataclass
from typing import Protocol

from smart_cart_buddy.domain.errors import PaymentVerificationError
from smart_cart_buddy.domain.payments import PaymentVerification

_logger = logging.getLogger(__name__)


class PaymentGatewayClient(Protocol):
    """Interface for the payment gateway verification call."""

    async def verify_transaction(self, reference: str) -> dict[str, object]:
        """Return the raw verification payload for a transaction."""


class ProfileRepository(Protocol):
    """Persistence interface for user profiles."""

    def is_premium(self, user_id: str) -> bool:
        """Return whether the user has the premium tier."""

    def set_premium(self, user_id: str, is_premium: bool) -> None:
        """Update the premium flag for a user."""


@dataclass
class PaymentService:
    """Verifies gateway transactions and upgrades the paying user."""

    gateway: PaymentGatewayClient | None
    profile_repository: ProfileRepository | None = None
    min_amount: int = 19900

    async def verify(self, reference: str | None) -> PaymentVerification:
        """Verify a transaction reference.

        Returns an unsuccessful verification when the transaction did not
        succeed or was underpaid. Raises `PaymentVerificationError` when the
        gateway is not configured, the reference is missing, or the gateway
        rejects the lookup.
        """
        if self.gateway is None:
            raise PaymentVerificationError("Missing Paystack secret key")
        if not reference or not reference.strip():
            raise PaymentVerificationError("Missing payment reference")

        _logger.info("Verifying payment with reference: %s", reference)
        result = await self.gateway.verify_transaction(reference.strip())
        if not result.get("status"):
            message = result.get("message") or "Payment verification failed"
            raise PaymentVerificationError(str(message))

        data = result.get("data")
        if not isinstance(data, dict) or data.get("status") != "success":
            return PaymentVerification(success=False, message="Payment not successful")

        amount = data.get("amount")
        if not isinstance(amount, (int, float)) or amount < self.min_amount:
            return PaymentVerification(
                success=False, message="Payment amount incorrect"
            )

        customer = data.get("customer")
        metadata = data.get("metadata")
        email = customer.get("email") if isinstance(customer, dict) else None
        user_id = metadata.get("userId") if isinstance(metadata, dict) else None

        if user_id and self.profile_repository is not None:
            self.profile_repository.set_premium(str(user_id), True)
            _logger.info("Upgraded user %s to premium", user_id)

        return PaymentVerification(
            success=True,
            message="Payment verified successfully",
            reference=str(data.get("reference") or reference),
            email=email,
            user_id=str(user_id) if user_id else None,
        )
