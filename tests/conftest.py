# Set environment variables before the application modules read them
import os

os.environ["TESTING"] = "True"
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("LOG_FILE", "logs/test.log")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from practice_tracker.auth.model import User
from practice_tracker.auth.util import generate_password_hash
from practice_tracker.config import logger
from practice_tracker.db.main import get_session
from practice_tracker.main import app
from practice_tracker.submission.model import Submission  # noqa: F401

# In-memory SQLite shared by every session of a test
SQLALCHEMY_DATABASE_URL = "sqlite+aiosqlite://"


@pytest_asyncio.fixture
async def test_engine():
    engine = create_async_engine(SQLALCHEMY_DATABASE_URL, poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return async_sessionmaker(
        bind=test_engine, class_=AsyncSession, expire_on_commit=False
    )


@pytest_asyncio.fixture
async def test_db(session_factory):
    async with session_factory() as session:
        yield session


# Create test client
@pytest_asyncio.fixture
async def client(session_factory):
    async def override_get_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as test_client:
        yield test_client

    # Remove the override after the test
    app.dependency_overrides.clear()


# Create a test user with a known password
@pytest_asyncio.fixture
async def test_user(test_db):
    user = User(
        username="testuser",
        email="testuser@example.com",
        password_hash=generate_password_hash("password123"),
    )
    test_db.add(user)
    await test_db.commit()
    await test_db.refresh(user)
    return user


@pytest.fixture
def solved_payload():
    return {
        "name": "Alice",
        "date": "2024-03-01",
        "solvedStatus": "yes",
        "problemCount": "2",
        "whyNot": "should be dropped",
        "problem_title_1": "A",
        "problem_link_1": "https://codeforces.com/problemset/problem/1/A",
        "tags_1": "math",
        "source_code_1": "print(1)",
        "how_solved_1": "formula",
        "problem_rating_1": "1000",
        "problem_title_2": "B",
        "problem_link_2": "https://codeforces.com/problemset/problem/1/B",
        "source_code_2": "print(2)",
    }


@pytest.fixture
def unsolved_payload():
    return {
        "name": "Bob",
        "date": "2024-03-02",
        "solvedStatus": "no",
        "problemCount": "3",
        "whyNot": "exam week",
        "problem_title_1": "ignored",
    }


# Disable logging during tests
@pytest.fixture(autouse=True)
def disable_logging():
    logger.disabled = True
    yield
    logger.disabled = False
