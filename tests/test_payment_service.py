from decimal import Decimal

import pytest

from stayvista.config import Settings
from stayvista.core.exceptions import PaymentError, ValidationError
from stayvista.gateways import ManualGateway, StripeGateway, build_gateway
from stayvista.services.payment_service import PaymentIntentIssuer, to_minor_units
from tests.conftest import FakeGateway


def test_to_minor_units_rounds_half_up():
    assert to_minor_units(100) == 10000
    assert to_minor_units(19.99) == 1999
    assert to_minor_units("0.015") == 2
    assert to_minor_units(Decimal("0.01")) == 1


@pytest.mark.parametrize("amount", [None, "", "abc", "nan", 0, -5, 0.004])
def test_to_minor_units_rejects_bad_amounts(amount):
    with pytest.raises(ValidationError):
        to_minor_units(amount)


@pytest.mark.asyncio
async def test_sub_cent_amount_never_reaches_gateway():
    gateway = FakeGateway()
    issuer = PaymentIntentIssuer(gateway)

    with pytest.raises(ValidationError):
        await issuer.create_intent(0.004)

    assert gateway.calls == []


@pytest.mark.asyncio
async def test_create_intent_returns_client_secret():
    gateway = FakeGateway()
    issuer = PaymentIntentIssuer(gateway, default_currency="USD")

    secret = await issuer.create_intent(150, metadata={"guest_email": "guest@example.com"})

    assert secret == "pi_test_1_secret_abc"
    assert gateway.calls == [(15000, "usd", {"guest_email": "guest@example.com"})]


@pytest.mark.asyncio
async def test_gateway_failure_raises_payment_error():
    issuer = PaymentIntentIssuer(FakeGateway(fail=True))

    with pytest.raises(PaymentError) as exc_info:
        await issuer.create_intent(10)

    assert exc_info.value.status_code == 500
    assert exc_info.value.detail == "card_declined"


@pytest.mark.asyncio
async def test_unconfigured_stripe_reports_failure():
    result = await StripeGateway(None).create_payment_intent(1000, "usd")

    assert result.success is False
    assert result.error_message == "Stripe not configured"


@pytest.mark.asyncio
async def test_manual_gateway_issues_synthetic_secret():
    result = await ManualGateway().create_payment_intent(1000, "usd")

    assert result.success is True
    assert result.client_secret.startswith(f"{result.transaction_id}_secret_")


def test_build_gateway_selects_by_settings():
    assert isinstance(build_gateway(Settings(_env_file=None, payment_gateway="stripe")), StripeGateway)
    assert isinstance(build_gateway(Settings(_env_file=None, payment_gateway="manual")), ManualGateway)

    with pytest.raises(RuntimeError):
        build_gateway(Settings(_env_file=None, payment_gateway="manual", environment="production"))
