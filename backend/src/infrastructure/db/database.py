# src/infrastructure/db/database.py
import os
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker, declarative_base

from infrastructure.config import env_bool, env_int


def _database_url() -> str:
    url = os.getenv("DATABASE_URL")
    if url:
        # accept plain postgres URLs from hosting env and pin the async driver
        for prefix in ("postgres://", "postgresql://"):
            if url.startswith(prefix):
                return "postgresql+asyncpg://" + url[len(prefix) :]
        return url
    user = os.getenv("PGUSER", "estimator")
    password = os.getenv("PGPASSWORD", "estimator")
    host = os.getenv("PGHOST", "localhost")
    port = os.getenv("PGPORT", "5432")
    name = os.getenv("PGDATABASE", "estimator_db")
    return f"postgresql+asyncpg://{user}:{password}@{host}:{port}/{name}"


DATABASE_URL = _database_url()
SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)

# engine creation does not connect; the first session does
engine = create_async_engine(
    DATABASE_URL,
    echo=SQLALCHEMY_ECHO,
    future=True,
    pool_pre_ping=True,
    pool_size=env_int("DB_POOL_SIZE", 5),
    max_overflow=env_int("DB_MAX_OVERFLOW", 5),
)
SessionLocal = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

Base = declarative_base()


# `async for session in get_session()` in the reconciler/CLI, and a FastAPI dependency via api.deps
async def get_session() -> AsyncGenerator[AsyncSession, None]:
    async with SessionLocal() as session:
        yield session


async def dispose_engine() -> None:
    await engine.dispose()
