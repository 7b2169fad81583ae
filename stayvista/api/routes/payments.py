"""Payment endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from stayvista.api.deps import CurrentIdentity, get_payment_issuer
from stayvista.core.middleware import payment_limiter
from stayvista.schemas.payment import PaymentIntentRequest, PaymentIntentResponse
from stayvista.services.payment_service import PaymentIntentIssuer

router = APIRouter()


@router.post(
    "/create-payment-intent",
    response_model=PaymentIntentResponse,
    dependencies=[Depends(payment_limiter)],
)
async def create_payment_intent(
    request: PaymentIntentRequest,
    identity: CurrentIdentity,
    issuer: Annotated[PaymentIntentIssuer, Depends(get_payment_issuer)],
) -> PaymentIntentResponse:
    """Create a payment intent for ``price`` and return its client secret."""
    client_secret = await issuer.create_intent(
        request.price,
        currency=request.currency,
        metadata={"guest_email": identity.email},
    )
    return PaymentIntentResponse(client_secret=client_secret)
