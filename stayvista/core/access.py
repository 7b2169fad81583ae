"""Two-stage access control: authenticate a session token, then check a role.

Both stages return tagged results instead of raising so that route wiring
decides how each outcome maps onto HTTP.
"""

from dataclasses import dataclass, field
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from stayvista.core.exceptions import InvalidToken
from stayvista.core.roles import RoleResolver, UserRole
from stayvista.core.security import TokenService


@dataclass(frozen=True)
class Identity:
    """The verified caller."""

    email: str
    claims: dict[str, Any] = field(default_factory=dict, compare=False)


@dataclass(frozen=True)
class Authorized:
    identity: Identity


@dataclass(frozen=True)
class Unauthorized:
    reason: str


@dataclass(frozen=True)
class Forbidden:
    identity: Identity
    reason: str


AccessDecision = Authorized | Unauthorized | Forbidden


class AccessControlGate:
    """Composes the token service and role resolver into per-route checks."""

    def __init__(self, tokens: TokenService, roles: RoleResolver | None = None) -> None:
        self.tokens = tokens
        self.roles = roles or RoleResolver()

    def authenticate(self, token: str | None) -> Authorized | Unauthorized:
        """Stage one: turn a presented session token into an identity."""
        if not token:
            return Unauthorized("No session token presented")
        try:
            claims = self.tokens.verify(token)
        except InvalidToken as e:
            return Unauthorized(e.detail)
        return Authorized(Identity(email=claims["email"].strip().lower(), claims=claims))

    async def require_role(
        self,
        db: AsyncSession,
        identity: Identity,
        role: UserRole,
    ) -> Authorized | Forbidden:
        """Stage two: the identity's stored role must equal ``role``."""
        stored = await self.roles.resolve(db, identity.email)
        if stored is None:
            return Forbidden(identity, "No user record for this identity")
        if stored != role:
            return Forbidden(identity, f"{role.value.capitalize()} access required")
        return Authorized(identity)
