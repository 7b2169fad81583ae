"""Session endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response

from stayvista.api.deps import get_access_gate, get_settings
from stayvista.config import Settings
from stayvista.core.access import AccessControlGate
from stayvista.core.middleware import session_limiter
from stayvista.core.security import clear_session_cookie, set_session_cookie
from stayvista.schemas.auth import SessionRequest, SessionResponse

router = APIRouter()


@router.post("/jwt", response_model=SessionResponse, dependencies=[Depends(session_limiter)])
async def create_session(
    claims: SessionRequest,
    response: Response,
    gate: Annotated[AccessControlGate, Depends(get_access_gate)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> SessionResponse:
    """Sign the posted claims into the session cookie."""
    token = gate.tokens.issue(claims.model_dump(mode="json"))
    set_session_cookie(response, token, settings)
    return SessionResponse(success=True)


@router.get("/logout", response_model=SessionResponse)
async def logout(
    response: Response,
    settings: Annotated[Settings, Depends(get_settings)],
) -> SessionResponse:
    """Clear the session cookie."""
    clear_session_cookie(response, settings)
    return SessionResponse(success=True)
