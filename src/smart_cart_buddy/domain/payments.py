"""Payment verification models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class PaymentVerification:
    """Result of verifying a gateway transaction."""

    success: bool
    message: str
    reference: str | None = None
    email: str | None = None
    user_id: str | None = None

    def to_dict(self) -> dict[str, object]:
        """Serialize to the response envelope."""
        payload: dict[str, object] = {"success": self.success, "message": self.message}
        if self.success:
            payload["data"] = {
                "reference": self.reference,
                "email": self.email,
                "userId": self.user_id,
            }
        return payload
