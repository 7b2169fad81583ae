"""Shared fixtures: temporary SQLite database, fake collaborators, HTTP client."""

from __future__ import annotations

from collections.abc import AsyncGenerator, Awaitable, Callable
from datetime import UTC, datetime

import httpx
import pytest

from stayvista.config import Settings
from stayvista.core.roles import UserRole
from stayvista.database import Database
from stayvista.gateways.base import GatewayType, PaymentGateway, PaymentResult
from stayvista.main import create_application
from stayvista.models.user import User
from stayvista.services.notification_service import NotificationService


class FakeGateway(PaymentGateway):
    """Records every intent request; fails on demand."""

    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.calls: list[tuple[int, str, dict | None]] = []

    @property
    def gateway_type(self) -> GatewayType:
        return GatewayType.MANUAL

    async def create_payment_intent(self, amount: int, currency: str, metadata: dict | None = None) -> PaymentResult:
        self.calls.append((amount, currency, metadata))
        if self.fail:
            return PaymentResult(success=False, error_message="card_declined")
        intent_id = f"pi_test_{len(self.calls)}"
        return PaymentResult(
            success=True,
            transaction_id=intent_id,
            client_secret=f"{intent_id}_secret_abc",
        )


class RecordingNotifier(NotificationService):
    """Captures outgoing email instead of calling SendGrid."""

    def __init__(self, settings: Settings) -> None:
        super().__init__(settings)
        self.sent: list[tuple[str, str]] = []

    async def send_email(self, to_email: str, subject: str, html_content: str) -> bool:
        self.sent.append((to_email, subject))
        return True

    def subjects_for(self, address: str) -> list[str]:
        return [subject for to, subject in self.sent if to == address]


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        _env_file=None,
        environment="development",
        database_dsn=f"sqlite+aiosqlite:///{tmp_path / 'stayvista.db'}",
        jwt_secret_key="test-secret",
        payment_gateway="manual",
        sendgrid_api_key=None,
        rate_limit_enabled=False,
        log_level="WARNING",
    )


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def notifier(settings) -> RecordingNotifier:
    return RecordingNotifier(settings)


@pytest.fixture
async def database(tmp_path) -> AsyncGenerator[Database, None]:
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'unit.db'}")
    await db.create_all()
    yield db
    await db.close()


@pytest.fixture
async def app(settings, gateway, notifier):
    application = create_application(settings, gateway=gateway, notifications=notifier)
    # ASGITransport does not run the lifespan
    await application.state.database.create_all()
    yield application
    await application.state.database.close()


@pytest.fixture
async def client(app) -> AsyncGenerator[httpx.AsyncClient, None]:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac


@pytest.fixture
def make_user(app) -> Callable[..., Awaitable[User]]:
    async def _make_user(email: str, role: UserRole = UserRole.GUEST, name: str | None = None) -> User:
        async with app.state.database.session() as session:
            user = User(
                email=email,
                name=name or email.split("@")[0].title(),
                role=role.value,
                timestamp=datetime.now(UTC),
            )
            session.add(user)
        return user

    return _make_user


@pytest.fixture
def auth_headers(app) -> Callable[[str], dict[str, str]]:
    def _auth_headers(email: str) -> dict[str, str]:
        token = app.state.access_gate.tokens.issue({"email": email})
        return {"Cookie": f"{app.state.settings.session_cookie_name}={token}"}

    return _auth_headers
