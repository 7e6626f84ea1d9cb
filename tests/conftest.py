"""Pytest configuration and fixtures for the admin console.

Env is set before importing admin_console.main so get_settings() sees it.
HTTP tests use ASGITransport (no lifespan), so each test wires a
SessionController built on the in-memory fakes below into app.state.
"""

import os

os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("SESSION_COOKIE_SECURE", "false")

from datetime import timedelta

import pytest
from httpx import ASGITransport, AsyncClient

from admin_console.application.dtos.company import CompanyResult, ProvisioningResult
from admin_console.application.dtos.identity import Identity
from admin_console.application.services.console_session import ConsoleSessionManager
from admin_console.application.services.session_controller import SessionController
from admin_console.core.limiter import limiter
from admin_console.domain.enums import CompanyStatus, SignInFailure
from admin_console.domain.exceptions import SignInError
from admin_console.main import app
from admin_console.shared.utils.datetime import utc_now


def make_identity(uid: str = "uid-admin", email: str = "admin@x.com", **kwargs) -> Identity:
    """Identity with a token valid for an hour unless overridden."""
    defaults = {
        "id_token": f"id-token-{uid}",
        "refresh_token": f"refresh-{uid}",
        "expires_at": utc_now() + timedelta(hours=1),
    }
    defaults.update(kwargs)
    return Identity(uid=uid, email=email, **defaults)


class FakeIdentityClient:
    """Accepts any account in ``accounts`` with its password."""

    def __init__(self, accounts: dict[str, tuple[str, str]] | None = None) -> None:
        # email -> (password, uid)
        self.accounts = accounts or {}
        self.error: Exception | None = None
        self.sign_in_calls: list[str] = []
        self.refresh_calls = 0
        self.refreshed_identity: Identity | None = None

    async def sign_in_with_password(self, email: str, password: str) -> Identity:
        self.sign_in_calls.append(email)
        if self.error is not None:
            raise self.error
        account = self.accounts.get(email)
        if account is None or account[0] != password:
            raise SignInError(SignInFailure.INVALID_CREDENTIALS, "INVALID_LOGIN_CREDENTIALS")
        return make_identity(uid=account[1], email=email)

    async def refresh(self, identity: Identity) -> Identity:
        self.refresh_calls += 1
        if self.refreshed_identity is not None:
            return self.refreshed_identity
        return make_identity(uid=identity.uid, email=identity.email, id_token="id-token-fresh")


class FakeAdminRegistry:
    def __init__(self, admins: set[str] | None = None) -> None:
        self.admins = admins if admins is not None else set()
        self.error: Exception | None = None
        self.calls: list[str] = []

    async def is_admin(self, uid: str) -> bool:
        self.calls.append(uid)
        if self.error is not None:
            raise self.error
        return uid in self.admins


class FakeCompanyRepository:
    def __init__(self) -> None:
        self.created: list[CompanyResult] = []
        self.error: Exception | None = None

    async def create_company(self, name, tax_id, status, classification) -> CompanyResult:
        if self.error is not None:
            raise self.error
        company = CompanyResult(
            id=f"co{len(self.created) + 1}",
            name=name,
            tax_id=tax_id,
            status=status if isinstance(status, CompanyStatus) else CompanyStatus(status),
            classification=classification,
            created_at=utc_now(),
        )
        self.created.append(company)
        return company


class FakeUserProvisioner:
    def __init__(self) -> None:
        self.calls: list[dict] = []
        self.tokens: list[str | None] = []
        self.error: Exception | None = None
        self.token_source = None

    async def create_company_users(self, company_id, admin, master) -> ProvisioningResult:
        if self.token_source is not None:
            self.tokens.append(await self.token_source())
        self.calls.append({"company_id": company_id, "admin": admin, "master": master})
        if self.error is not None:
            raise self.error
        return ProvisioningResult({"ok": True})


@pytest.fixture
def identity_factory():
    """Factory for identities: identity_factory(uid, email, **overrides)."""
    return make_identity


@pytest.fixture(autouse=True)
def _reset_rate_limits() -> None:
    limiter.reset()


@pytest.fixture
def identity_client() -> FakeIdentityClient:
    return FakeIdentityClient(
        {
            "admin@x.com": ("secret1", "uid-admin"),
            "user@x.com": ("secret1", "uid-user"),
        }
    )


@pytest.fixture
def admin_registry() -> FakeAdminRegistry:
    return FakeAdminRegistry({"uid-admin"})


@pytest.fixture
def company_repo() -> FakeCompanyRepository:
    return FakeCompanyRepository()


@pytest.fixture
def user_provisioner() -> FakeUserProvisioner:
    return FakeUserProvisioner()


@pytest.fixture
def session_controller(
    identity_client, admin_registry, company_repo, user_provisioner
) -> SessionController:
    def provisioner_factory(token_source):
        user_provisioner.token_source = token_source
        return user_provisioner

    sessions = ConsoleSessionManager(
        identity_client, admin_registry, company_repo, provisioner_factory
    )
    return SessionController(identity_client, sessions, settle_timeout=0.5)


@pytest.fixture
async def client(session_controller: SessionController) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI) with fakes wired in."""
    app.state.session_controller = session_controller
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    await session_controller.sessions.close_all()
    app.state.session_controller = None


@pytest.fixture
async def unconfigured_client() -> AsyncClient:
    """Client for an app started without Firebase configuration."""
    app.state.session_controller = None
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
