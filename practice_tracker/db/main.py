from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from practice_tracker.config import Config, logger

db_logger = logger.getChild("db")

async_engine = create_async_engine(url=Config.DATABASE_URL)

async_session = async_sessionmaker(
    bind=async_engine, class_=AsyncSession, expire_on_commit=False
)


async def init_db() -> None:
    """
    Creates the users and submissions tables if they do not exist yet.
    """
    # Register the table models on SQLModel.metadata
    from practice_tracker.auth.model import User  # noqa: F401
    from practice_tracker.submission.model import Submission  # noqa: F401

    async with async_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    db_logger.info("Database tables are ready")


async def close_db() -> None:
    await async_engine.dispose()
    db_logger.info("Database engine disposed")


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency to get an async session for the current request.
    """
    async with async_session() as session:
        yield session
