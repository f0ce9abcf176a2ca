import os

os.environ["APP_ENV"] = "test"

from datetime import datetime, timedelta, timezone  # noqa: E402
from typing import Any, AsyncGenerator, Callable, Iterator  # noqa: E402
from unittest.mock import AsyncMock  # noqa: E402
from uuid import uuid4  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from dependency_injector import providers  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from app.api import integrations, nylas, webhook  # noqa: E402
from app.api.routes import api_router  # noqa: E402
from app.clients.facebook import FacebookGraphClient  # noqa: E402
from app.clients.gmail import GmailClient  # noqa: E402
from app.clients.nylas import NylasClient, nylas_config  # noqa: E402
from app.container import ApplicationContainer  # noqa: E402
from app.create_app import _setup_error_handlers  # noqa: E402
from app.models import Account, Integration, IntegrationStatus  # noqa: E402
from app.utils.secrets import SecretUtils  # noqa: E402
from settings import settings  # noqa: E402
from tests.fakes import FakeDatabase, FakeRepo, build_fake_repos  # noqa: E402


@pytest.fixture
def database() -> FakeDatabase:
    return FakeDatabase()


@pytest.fixture
def fake_repos(database: FakeDatabase) -> dict[str, FakeRepo]:
    return build_fake_repos(database)


@pytest.fixture
def facebook_client() -> AsyncMock:
    client = AsyncMock(spec=FacebookGraphClient)
    client.get_page_access_token.side_effect = lambda page_id, user_token: f"page-token-{page_id}"
    client.unsubscribe_page.return_value = True
    return client


@pytest.fixture
def gmail_client() -> AsyncMock:
    return AsyncMock(spec=GmailClient)


@pytest.fixture
def nylas_client() -> AsyncMock:
    return AsyncMock(spec=NylasClient)


@pytest.fixture
def configured_nylas() -> Iterator[None]:
    nylas_config.configure(settings.nylas.client_id, settings.nylas.client_secret)
    yield
    nylas_config.reset()


@pytest.fixture
def container(
    fake_repos: dict[str, FakeRepo], facebook_client: AsyncMock, gmail_client: AsyncMock, nylas_client: AsyncMock
) -> Iterator[ApplicationContainer]:
    container = ApplicationContainer()
    for name, repo in fake_repos.items():
        getattr(container.repos, name).override(providers.Object(repo))
    container.controllers.facebook_client.override(providers.Object(facebook_client))
    container.controllers.gmail_client.override(providers.Object(gmail_client))
    container.controllers.nylas_client.override(providers.Object(nylas_client))
    yield container
    container.unwire()


@pytest.fixture
def app(container: ApplicationContainer) -> FastAPI:
    """API routes with the real error handlers, without the database middlewares."""
    container.wire(modules=[integrations, nylas, webhook])
    app = FastAPI()
    _setup_error_handlers(app)
    app.include_router(api_router)
    return app


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def make_account(database: FakeDatabase) -> Callable[..., Account]:
    def _make_account(kind: str = "gmail", **values: Any) -> Account:
        fields: dict[str, Any] = {
            "uuid": uuid4(),
            "kind": kind,
            "uid": "owner@example.com",
            "email": "owner@example.com",
            "name": "Owner",
            "token": SecretUtils.encrypt("access-token"),
            "token_secret": SecretUtils.encrypt("refresh-token"),
            "expire_date": datetime.now(timezone.utc) + timedelta(hours=1),
        }
        fields.update(values)
        return database.insert(Account(**fields))

    return _make_account


@pytest.fixture
def make_integration(database: FakeDatabase) -> Callable[..., Integration]:
    def _make_integration(account: Account, kind: str, erxes_api_id: str = "erxes-1", **values: Any) -> Integration:
        fields: dict[str, Any] = {
            "uuid": uuid4(),
            "erxes_api_id": erxes_api_id,
            "account_id": account.id,
            "kind": kind,
            "email": account.email,
            "facebook_page_ids": [],
            "status": IntegrationStatus.active,
        }
        fields.update(values)
        return database.insert(Integration(**fields))

    return _make_integration
