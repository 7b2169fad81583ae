"""Session token issuing, verification and cookie transport."""

from datetime import UTC, datetime, timedelta
from typing import Any

from fastapi import Response
from jose import JWTError, jwt

from stayvista.config import Settings
from stayvista.core.exceptions import InvalidToken


class TokenService:
    """Issues and verifies signed session tokens (HS256 JWT)."""

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        default_ttl: timedelta = timedelta(days=365),
    ) -> None:
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.default_ttl = default_ttl

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            secret_key=settings.jwt_secret_key,
            algorithm=settings.jwt_algorithm,
            default_ttl=timedelta(days=settings.session_token_expire_days),
        )

    def issue(self, claims: dict[str, Any], ttl: timedelta | None = None) -> str:
        """Sign ``claims`` into a token valid for ``ttl`` (default: one year)."""
        to_encode = claims.copy()
        now = datetime.now(UTC)
        to_encode.update({"iat": now, "exp": now + (ttl or self.default_ttl)})
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> dict[str, Any]:
        """Decode a token, enforcing signature and expiry.

        Raises:
            InvalidToken: bad signature, expired, malformed, or no email claim.
        """
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError as e:
            raise InvalidToken(f"Token validation failed: {str(e)}")
        if not payload.get("email"):
            raise InvalidToken("Token carries no email claim")
        return payload


def set_session_cookie(response: Response, token: str, settings: Settings) -> None:
    """Attach the session token as an HTTP-only cookie."""
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.session_token_expire_days * 24 * 60 * 60,
        httponly=True,
        secure=settings.cookie_secure,
        samesite=settings.cookie_samesite,
        path="/",
    )


def clear_session_cookie(response: Response, settings: Settings) -> None:
    """Overwrite the session cookie with one that expires immediately."""
    response.set_cookie(
        key=settings.session_cookie_name,
        value="",
        max_age=0,
        expires=0,
        httponly=True,
        secure=settings.cookie_secure,
        samesite=settings.cookie_samesite,
        path="/",
    )
