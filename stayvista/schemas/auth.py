"""Session schemas."""

from pydantic import ConfigDict

from stayvista.schemas.base import CamelModel, NormalizedEmail


class SessionRequest(CamelModel):
    """Claims to sign into the session cookie; ``email`` is required."""

    model_config = ConfigDict(extra="allow")

    email: NormalizedEmail


class SessionResponse(CamelModel):
    success: bool = True
