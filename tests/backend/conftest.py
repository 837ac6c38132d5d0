import os
import uuid

TEST_DB_URL = "sqlite://:memory:"
os.environ["DATABASE_URL"] = TEST_DB_URL
os.environ.pop("ADMIN_PASSWORD", None)

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from tortoise import Tortoise

from app.core import db as db_module
from app.main import app
from app.models.account import Account
from app.services.accounts import create_account

db_module.DB_URL = TEST_DB_URL
db_module.TORTOISE_ORM["connections"]["default"] = TEST_DB_URL


@pytest_asyncio.fixture
async def db():
    """
    Initialize a clean in-memory SQLite database for every test.
    Closing the connection at teardown throws the database away.
    """
    await Tortoise.init(config=db_module.TORTOISE_ORM)
    await Tortoise.generate_schemas()
    yield
    await Tortoise.close_connections()


@pytest_asyncio.fixture
async def client(db):
    """
    Provide an HTTPX AsyncClient bound to the FastAPI app with a fresh DB.
    The app lifespan is not run; the db fixture owns the connection.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as async_client:
        yield async_client


@pytest_asyncio.fixture
async def make_account(db):
    """
    Factory fixture creating accounts (and their profiles) through the service.
    """

    async def _make_account(password: str = "UserPass!23", **kwargs) -> tuple[Account, str]:
        suffix = uuid.uuid4().hex[:6]
        account = await create_account(
            username=kwargs.pop("username", f"user_{suffix}"),
            email=kwargs.pop("email", f"{suffix}@example.com"),
            password=password,
            **kwargs,
        )
        return account, password

    return _make_account


@pytest_asyncio.fixture
async def auth_header_factory(client):
    """
    Helper fixture to obtain Authorization headers via the login endpoint.
    """

    async def _get_headers(email: str, password: str) -> dict[str, str]:
        resp = await client.post(
            "/api/users/login",
            json={"user": {"email": email, "password": password}},
        )
        assert resp.status_code == 200, resp.text
        token = resp.json()["user"]["token"]
        return {"Authorization": f"Token {token}"}

    return _get_headers
