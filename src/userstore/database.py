"""Database setup for the user store."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from .config import settings

engine = create_async_engine(settings.database_url, echo=settings.database_echo)
async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)
Base = declarative_base()


@asynccontextmanager
async def get_db(
    session_factory: async_sessionmaker | None = None,
) -> AsyncGenerator[AsyncSession, None]:
    """Yield a session, rolling back if the block raises.

    Nothing is committed here; write operations commit explicitly.
    """
    factory = session_factory or async_session_maker
    async with factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


async def init_db(bind=None) -> None:
    """Create database tables if they do not exist."""
    from .models import user  # noqa: F401

    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
