import os
import uuid

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from tortoise import Tortoise

from app.core import db as db_module
from app.core.security import create_access_token
from app.main import app
from app.models.user import User


TEST_DB_URL = "sqlite://:memory:?cache=shared"
os.environ["DATABASE_URL"] = TEST_DB_URL
db_module.DB_URL = TEST_DB_URL
db_module.TORTOISE_ORM["connections"]["default"] = TEST_DB_URL


async def _init_test_db() -> None:
    """
    Initialize a clean in-memory SQLite database for every test.
    Ensures tables are recreated from scratch.
    """
    if Tortoise._inited:
        await Tortoise.close_connections()
    await Tortoise.init(config=db_module.TORTOISE_ORM)
    await Tortoise.generate_schemas()


@pytest_asyncio.fixture
async def db():
    """
    Fresh database for service-level tests that do not need the HTTP app.
    """
    await _init_test_db()
    yield
    await Tortoise.close_connections()


@pytest_asyncio.fixture
async def client(db):
    """
    Provide an HTTPX AsyncClient bound to the FastAPI app with a fresh DB.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as async_client:
        yield async_client
    app.dependency_overrides.clear()


def _snowflake() -> str:
    # Discord ids are 17-19 digit integers
    return str(100000000000000000 + uuid.uuid4().int % 10**17)


@pytest_asyncio.fixture
async def create_user(db):
    """
    Factory fixture to create members directly via ORM.
    """

    async def _create_user(is_admin: bool = False, display_name: str | None = None) -> User:
        return await User.create(
            external_id=_snowflake(),
            display_name=display_name or f"member_{uuid.uuid4().hex[:6]}",
            avatar_ref=None,
            is_admin=is_admin,
        )

    return _create_user


@pytest_asyncio.fixture
async def create_admin(create_user):
    """
    Factory fixture to create admin members for privileged endpoints.
    """

    async def _create_admin() -> User:
        return await create_user(is_admin=True, display_name=f"admin_{uuid.uuid4().hex[:6]}")

    return _create_admin


@pytest.fixture
def auth_headers():
    """
    Build Authorization headers for a member without going through Discord.
    """

    def _headers(user: User) -> dict[str, str]:
        token = create_access_token(str(user.id), user.role)
        return {"Authorization": f"Bearer {token}"}

    return _headers
