"""Tests for payment verification."""

import asyncio

import pytest

from smart_cart_buddy.domain.errors import PaymentVerificationError
from smart_cart_buddy.services.payments import PaymentService
from tests.conftest import FakePaymentGateway, paystack_payload


def test_successful_payment_upgrades_user(profile_repository) -> None:
    gateway = FakePaymentGateway(payload=paystack_payload())
    service = PaymentService(gateway=gateway, profile_repository=profile_repository)

    result = asyncio.run(service.verify(" ref-123 "))

    assert result.success
    assert result.to_dict()["data"] == {
        "reference": "ref-123",
        "email": "cook@example.com",
        "userId": "user-1",
    }
    assert gateway.references == ["ref-123"]
    assert profile_repository.is_premium("user-1")


def test_failed_transaction_is_not_successful(profile_repository) -> None:
    gateway = FakePaymentGateway(payload=paystack_payload(status="abandoned"))
    service = PaymentService(gateway=gateway, profile_repository=profile_repository)

    result = asyncio.run(service.verify("ref-123"))

    assert not result.success
    assert result.message == "Payment not successful"
    assert "data" not in result.to_dict()
    assert not profile_repository.premium


def test_underpaid_transaction_is_rejected() -> None:
    gateway = FakePaymentGateway(payload=paystack_payload(amount=100))
    service = PaymentService(gateway=gateway)

    result = asyncio.run(service.verify("ref-123"))

    assert not result.success
    assert result.message == "Payment amount incorrect"


def test_missing_user_id_still_verifies(profile_repository) -> None:
    gateway = FakePaymentGateway(payload=paystack_payload(user_id=None))
    service = PaymentService(gateway=gateway, profile_repository=profile_repository)

    result = asyncio.run(service.verify("ref-123"))

    assert result.success
    assert result.user_id is None
    assert not profile_repository.premium


@pytest.mark.parametrize(
    ("gateway", "reference", "message"),
    [
        (None, "ref-123", "Missing Paystack secret key"),
        (FakePaymentGateway(), "", "Missing payment reference"),
        (
            FakePaymentGateway(payload={"status": False, "message": "Invalid key"}),
            "ref-123",
            "Invalid key",
        ),
    ],
)
def test_verification_errors(gateway, reference, message) -> None:
    service = PaymentService(gateway=gateway)

    with pytest.raises(PaymentVerificationError, match=message):
        asyncio.run(service.verify(reference))
