"""Core utilities and security modules."""

from stayvista.core.access import (
    AccessControlGate,
    Authorized,
    Forbidden,
    Identity,
    Unauthorized,
)
from stayvista.core.exceptions import (
    AppException,
    AuthenticationError,
    AuthorizationError,
    InvalidToken,
    NotFoundError,
    PaymentError,
    PersistenceError,
    ValidationError,
)
from stayvista.core.roles import RoleResolver, UserRole, UserStatus
from stayvista.core.security import TokenService

__all__ = [
    "AccessControlGate",
    "Authorized",
    "Forbidden",
    "Identity",
    "Unauthorized",
    "AppException",
    "AuthenticationError",
    "AuthorizationError",
    "InvalidToken",
    "NotFoundError",
    "PaymentError",
    "PersistenceError",
    "ValidationError",
    "RoleResolver",
    "UserRole",
    "UserStatus",
    "TokenService",
]
