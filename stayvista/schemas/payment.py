"""Payment-related Pydantic schemas."""

from pydantic import Field

from stayvista.schemas.base import CamelModel


class PaymentIntentRequest(CamelModel):
    """Amount in major currency units (dollars)."""

    price: float | None = None
    currency: str | None = Field(None, min_length=3, max_length=3)


class PaymentIntentResponse(CamelModel):
    client_secret: str
