from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from salon_booking.config import Settings, get_settings

# Fallback for dev/test when no DATABASE_URL is configured
DEFAULT_DB_URL = "sqlite+aiosqlite:///:memory:"


def build_engine(settings: Settings | None = None) -> AsyncEngine:
    settings = settings or get_settings()
    return create_async_engine(
        settings.database_url or DEFAULT_DB_URL,
        echo=settings.sql_echo,
        pool_pre_ping=True,
    )


engine = build_engine()
AsyncSessionLocal = async_sessionmaker(engine, expire_on_commit=False)


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    async with AsyncSessionLocal() as session:
        yield session
