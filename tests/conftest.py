"""
Test infrastructure for the SNS API.

Strategy
--------
- SQLite in-memory via aiosqlite; no Postgres needed in CI.
- StaticPool keeps every session on the one connection that owns the
  in-memory database.  The engine is disposed after each test so no
  connection outlives the event loop it was opened on.
- ``get_db`` is overridden with the test session factory but keeps the
  production commit-or-rollback behaviour.
- Tables are created before and dropped after every test.
- ``file_sessions`` is a separate file-backed engine with a connection
  per session, enforced foreign keys and real SAVEPOINTs, for tests that
  run service calls concurrently.
- Helpers sign users up and log them in through the API, returning ready
  ``Authorization`` headers.
"""
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import StaticPool

from sns.database import Base, get_db
from sns.main import app
from sns.middleware import install_query_counter
from sns.models import User
from sns.security import hash_password

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
TEST_PASSWORD = "secret-pass"

engine_test = create_async_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

install_query_counter(engine_test)

async_session_test = async_sessionmaker(
    engine_test,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def override_get_db():
    async with async_session_test() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


app.dependency_overrides[get_db] = override_get_db


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

async def join_and_login(client: AsyncClient, username: str) -> dict:
    """Sign *username* up, log in, and return the bearer header for it."""
    resp = await client.post(
        "/api/v1/users/join", json={"username": username, "password": TEST_PASSWORD}
    )
    assert resp.status_code == 201, resp.text
    resp = await client.post(
        "/api/v1/users/login", json={"username": username, "password": TEST_PASSWORD}
    )
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['token']}"}


async def create_post(client: AsyncClient, headers: dict, title: str = "title", body: str = "body") -> int:
    resp = await client.post("/api/v1/posts", json={"title": title, "body": body}, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()["id"]


async def make_user(db: AsyncSession, username: str) -> User:
    """Insert a user directly, bypassing the sign-up endpoint."""
    user = User(username=username, password=hash_password(TEST_PASSWORD))
    db.add(user)
    await db.flush()
    return user


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture(autouse=True)
async def setup_db():
    """Create all tables before each test, drop after to guarantee isolation."""
    async with engine_test.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine_test.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine_test.dispose()


@pytest_asyncio.fixture
async def db_session() -> AsyncSession:
    """A live session for tests that call services or repositories directly."""
    async with async_session_test() as session:
        yield session


@pytest_asyncio.fixture
async def async_client() -> AsyncClient:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def file_sessions(tmp_path) -> async_sessionmaker:
    """Session factory over a file-backed SQLite database, one connection per session."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'sns.db'}",
        connect_args={"timeout": 30},
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        # SQLAlchemy emits BEGIN itself so that SAVEPOINT works.
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def _on_begin(conn):
        # Writers queue on the database lock instead of failing mid-transaction.
        conn.exec_driver_sql("BEGIN IMMEDIATE")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    await engine.dispose()
