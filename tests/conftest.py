import os
import tempfile
from typing import AsyncGenerator, Callable, Dict

# Must be set before the application modules read their settings
TEST_DATABASE_URL = os.environ.get(
    "TEST_DATABASE_URL", f"sqlite+aiosqlite:///{os.path.join(tempfile.gettempdir(), 'household_inventory_test.db')}"
)
os.environ.setdefault("DATABASE_URI", TEST_DATABASE_URL)
os.environ["ENABLE_TRACING"] = "false"
os.environ["JSON_LOGS"] = "false"

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker  # noqa: E402

from household_inventory.api.dependencies import get_db_session  # noqa: E402
from household_inventory.core.security import create_access_token  # noqa: E402
from household_inventory.db.models import Account  # noqa: E402
from household_inventory.db.session import Base, build_engine  # noqa: E402
from household_inventory.main import app  # noqa: E402


@pytest.fixture
def database_url(tmp_path) -> str:
    """A fresh SQLite file per test unless TEST_DATABASE_URL points elsewhere."""
    if "TEST_DATABASE_URL" in os.environ:
        return os.environ["TEST_DATABASE_URL"]
    return f"sqlite+aiosqlite:///{tmp_path / 'inventory.db'}"


@pytest_asyncio.fixture
async def db_engine(database_url: str) -> AsyncGenerator[AsyncEngine, None]:
    test_engine = build_engine(database_url, echo=False)
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await test_engine.dispose()


@pytest.fixture
def session_factory(db_engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest_asyncio.fixture
async def db_session(session_factory: async_sessionmaker) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


async def _create_account(session: AsyncSession, name: str, email: str) -> int:
    account = Account(name=name, email=email, hashed_password="not-a-real-hash")
    session.add(account)
    await session.commit()
    return int(account.id)


@pytest_asyncio.fixture
async def account_id(db_session: AsyncSession) -> int:
    return await _create_account(db_session, "Alice", "alice@example.com")


@pytest_asyncio.fixture
async def other_account_id(db_session: AsyncSession) -> int:
    return await _create_account(db_session, "Bob", "bob@example.com")


@pytest.fixture
def auth_headers() -> Callable[[int], Dict[str, str]]:
    def _headers(account: int) -> Dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(account)}"}

    return _headers


@pytest.fixture
def session_cookie() -> Callable[[int], Dict[str, str]]:
    def _cookie(account: int) -> Dict[str, str]:
        return {"Cookie": f"session={create_access_token(account)}"}

    return _cookie


@pytest_asyncio.fixture
async def client(session_factory: async_sessionmaker) -> AsyncGenerator[AsyncClient, None]:
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db_session] = override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides = {}
