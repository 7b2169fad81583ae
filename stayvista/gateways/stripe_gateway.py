"""Stripe adapter (PaymentIntents API)."""

import asyncio
import logging

import stripe

from stayvista.gateways.base import GatewayType, PaymentGateway, PaymentResult

logger = logging.getLogger(__name__)


class StripeGateway(PaymentGateway):
    gateway_type = GatewayType.STRIPE

    def __init__(self, secret_key: str | None):
        self.secret_key = secret_key

    async def create_payment_intent(
        self,
        amount: int,
        currency: str,
        metadata: dict | None = None,
    ) -> PaymentResult:
        """Create an intent with automatic payment methods and hand back its client secret."""
        if not self.secret_key:
            return PaymentResult(success=False, error_message="Stripe not configured")

        try:
            # stripe-python is synchronous
            intent = await asyncio.to_thread(
                stripe.PaymentIntent.create,
                api_key=self.secret_key,
                amount=amount,
                currency=currency.lower(),
                automatic_payment_methods={"enabled": True},
                metadata=metadata or {},
            )
        except stripe.StripeError as e:
            logger.warning(f"Stripe refused intent for {amount} {currency}: {e.user_message or e}")
            return PaymentResult(success=False, error_message=e.user_message or str(e))

        return PaymentResult(
            success=True,
            transaction_id=intent.id,
            client_secret=intent.client_secret,
        )
