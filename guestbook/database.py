from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker
from guestbook.config import settings

# Shared by every request; each request gets its own session from it
async_engine = create_async_engine(settings.DATABASE_URL, echo=settings.DEBUG, pool_pre_ping=True)
AsyncSessionLocal = async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)

async def get_db():
    """FastAPI dependency: one session per request, closed afterwards."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()

@asynccontextmanager
async def db_session():
    """Standalone session for scripts; rolls back if the block raises."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise

async def create_tables(engine: AsyncEngine = async_engine):
    from guestbook.models.base import Base
    from guestbook.models import user, message

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
