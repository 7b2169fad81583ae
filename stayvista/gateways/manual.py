"""Offline gateway for local development and demos."""

import uuid

from stayvista.gateways.base import GatewayType, PaymentGateway, PaymentResult


class ManualGateway(PaymentGateway):
    """Approves every intent with a synthetic id; never touches the network.

    ``build_gateway`` refuses to select it in production.
    """

    gateway_type = GatewayType.MANUAL

    async def create_payment_intent(
        self,
        amount: int,
        currency: str,
        metadata: dict | None = None,
    ) -> PaymentResult:
        intent_id = f"pi_manual_{uuid.uuid4().hex[:24]}"
        return PaymentResult(
            success=True,
            transaction_id=intent_id,
            client_secret=f"{intent_id}_secret_{uuid.uuid4().hex[:16]}",
        )
