"""Payment gateway adapters."""

from stayvista.config import Settings
from stayvista.gateways.base import GatewayType, PaymentGateway, PaymentResult
from stayvista.gateways.manual import ManualGateway
from stayvista.gateways.stripe_gateway import StripeGateway


def build_gateway(settings: Settings) -> PaymentGateway:
    """Instantiate the gateway selected by ``settings.payment_gateway``.

    Raises:
        RuntimeError: If the offline gateway is selected in production
    """
    gateway_type = GatewayType(settings.payment_gateway)
    if gateway_type == GatewayType.STRIPE:
        return StripeGateway(settings.stripe_secret_key)
    if settings.is_production:
        raise RuntimeError(
            "The manual payment gateway issues fake client secrets and cannot run in production"
        )
    return ManualGateway()


__all__ = [
    "GatewayType",
    "ManualGateway",
    "PaymentGateway",
    "PaymentResult",
    "StripeGateway",
    "build_gateway",
]
