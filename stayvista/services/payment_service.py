"""Payment intent issuance.

Converts a major-unit price into gateway minor units, guards against
zero/negative charges and hands back only the client secret.
"""

import logging
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from stayvista.core.exceptions import PaymentError, ValidationError
from stayvista.gateways.base import PaymentGateway

logger = logging.getLogger(__name__)

MINIMUM_CHARGE_MINOR_UNITS = 1


def to_minor_units(amount: float | int | str | Decimal | None) -> int:
    """Convert a major-unit amount (e.g. dollars) to an integer count of minor units.

    Raises:
        ValidationError: Missing, non-numeric, or below one minor unit
    """
    if amount is None or amount == "":
        raise ValidationError("Price is required")
    try:
        exact = Decimal(str(amount)) * 100
    except InvalidOperation:
        raise ValidationError("Price must be a number")
    if not exact.is_finite() or exact < MINIMUM_CHARGE_MINOR_UNITS:
        raise ValidationError("Price must be at least one cent")
    return int(exact.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class PaymentIntentIssuer:
    """Requests payment intents from the configured gateway."""

    def __init__(self, gateway: PaymentGateway, default_currency: str = "usd") -> None:
        self.gateway = gateway
        self.default_currency = default_currency

    async def create_intent(
        self,
        amount_major: float | int | str | Decimal | None,
        currency: str | None = None,
        metadata: dict | None = None,
    ) -> str:
        """Create a payment intent and return its client secret.

        Raises:
            ValidationError: Amount missing or below the minimum charge; the
                gateway is not contacted
            PaymentError: The gateway rejected the request or was unreachable
        """
        try:
            amount = to_minor_units(amount_major)
        except ValidationError:
            logger.info(f"Rejected payment intent for amount {amount_major!r}")
            raise

        result = await self.gateway.create_payment_intent(
            amount=amount,
            currency=(currency or self.default_currency).lower(),
            metadata=metadata,
        )
        if not result.success or not result.client_secret:
            logger.error(
                f"Payment intent failed via {self.gateway.gateway_type.value}: {result.error_message}"
            )
            raise PaymentError(result.error_message or "Payment processing failed")

        logger.info(f"Payment intent {result.transaction_id} created for {amount} minor units")
        return result.client_secret
