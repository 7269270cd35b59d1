"""
Database Dependencies for FastAPI Routes

Routes declare that they need a session and FastAPI provides one per
request:

    @router.get("/channels")
    async def list_channels(db: DBSession):
        ...

Tests swap the real session for a test one through
app.dependency_overrides[get_db].
"""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from tubebrief.db.session import get_session


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session.

    Each request gets its own session. Service functions commit their own
    unit of work; anything left uncommitted is rolled back when the
    session closes.

    Yields:
        AsyncSession: Database session for the current request
    """
    async for session in get_session():
        yield session


# Reusable annotation: `db: DBSession` instead of `db: AsyncSession = Depends(get_db)`
DBSession = Annotated[AsyncSession, Depends(get_db)]


__all__ = [
    "get_db",
    "DBSession",
]
