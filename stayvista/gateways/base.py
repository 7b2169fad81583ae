"""Gateway adapter contract.

Adapters only talk to the provider. Amount validation and error mapping
live in ``services.payment_service``.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum


class GatewayType(str, Enum):
    STRIPE = "stripe"
    MANUAL = "manual"


@dataclass
class PaymentResult:
    """Outcome of one payment-intent request."""

    success: bool
    transaction_id: str | None = None
    client_secret: str | None = None
    error_message: str | None = None


class PaymentGateway(ABC):
    """Issues payment intents with one provider."""

    @property
    @abstractmethod
    def gateway_type(self) -> GatewayType: ...

    @abstractmethod
    async def create_payment_intent(
        self,
        amount: int,
        currency: str,
        metadata: dict | None = None,
    ) -> PaymentResult:
        """Ask the provider to authorize ``amount`` minor units of ``currency``.

        Adapters report provider errors through ``PaymentResult`` and do not
        raise.
        """

    async def close(self) -> None:
        """Release network resources, if any."""
