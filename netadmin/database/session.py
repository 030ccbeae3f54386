from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from netadmin.database.engine import async_session


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding a request-scoped session.

    Commits when the request handler returns, rolls back and re-raises on any
    error. Store failures are never retried here.
    """
    async with async_session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
