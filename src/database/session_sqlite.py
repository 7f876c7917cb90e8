from typing import AsyncGenerator
from sqlalchemy.ext.asyncio import (
    create_async_engine,
    async_sessionmaker,
    AsyncSession,
)
from sqlalchemy.pool import StaticPool
from src.config.dependencies import get_settings

settings = get_settings()
DATABASE_URL = f"sqlite+aiosqlite:///{settings.PATH_TO_DB}"
# A single shared connection keeps an in-memory database alive across sessions
sqlite_engine = create_async_engine(DATABASE_URL, echo=False, poolclass=StaticPool)

AsyncSQLiteSessionLocal = async_sessionmaker(
    bind=sqlite_engine, autoflush=False, expire_on_commit=False
)


async def get_sqlite_db() -> AsyncGenerator[AsyncSession, None]:
    async with AsyncSQLiteSessionLocal() as session:
        yield session
