"""
Race-safe insert helpers.

Uniqueness in TubeBrief is enforced by database constraints only (one
channel per channel_id, one subscription per user/channel pair, one
preference per user, one summary per user/video). These helpers turn
"insert unless it already exists" and "insert or replace" into single
statements so that two concurrent requests can never both insert.

Dialect Support:
----------------
- postgresql / sqlite: native INSERT ... ON CONFLICT
- anything else: INSERT inside a SAVEPOINT; an IntegrityError means the
  row already exists (and, for upserts, it is updated instead)

Neither helper commits. The calling service commits once per operation.
"""

from collections.abc import Sequence
from typing import Any

from sqlalchemy import and_, insert, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from tubebrief.core.logging import get_logger

logger = get_logger(__name__)

_DIALECT_INSERTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


def dialect_insert(db: AsyncSession, model: Any):
    """
    Return an ON CONFLICT capable insert() for the session's dialect.

    Returns None when the bound dialect has no ON CONFLICT support.
    """
    factory = _DIALECT_INSERTS.get(db.get_bind().dialect.name)
    if factory is None:
        return None
    return factory(model)


async def insert_ignore(
    db: AsyncSession,
    model: Any,
    values: dict[str, Any],
    conflict_columns: Sequence[str],
    returning: Any | None = None,
) -> Any | None:
    """
    Insert a row unless one with the same conflict key already exists.

    Args:
        db: Database session
        model: Mapped class to insert into
        values: Column values for the new row
        conflict_columns: Columns of the unique constraint that may conflict
        returning: Optional column to return from the inserted row

    Returns:
        The returned column value when a row was inserted, None when the
        row already existed. Without ``returning``, True/None.
    """
    stmt = dialect_insert(db, model)

    if stmt is not None:
        stmt = stmt.values(**values).on_conflict_do_nothing(
            index_elements=list(conflict_columns)
        )
        if returning is None:
            result = await db.execute(stmt)
            return True if result.rowcount else None
        result = await db.execute(stmt.returning(returning))
        return result.scalar_one_or_none()

    # Fallback: savepoint so a duplicate does not poison the outer transaction
    try:
        async with db.begin_nested():
            stmt = insert(model).values(**values)
            if returning is None:
                await db.execute(stmt)
                return True
            result = await db.execute(stmt.returning(returning))
            return result.scalar_one()
    except IntegrityError:
        logger.debug(
            "insert_ignored_existing_row",
            table=model.__tablename__,
            conflict_columns=list(conflict_columns),
        )
        return None


async def insert_or_update(
    db: AsyncSession,
    model: Any,
    values: dict[str, Any],
    conflict_columns: Sequence[str],
    update_values: dict[str, Any],
) -> None:
    """
    Insert a row, or update the existing row with the same conflict key.

    Args:
        db: Database session
        model: Mapped class to upsert into
        values: Column values used when inserting
        conflict_columns: Columns of the unique constraint that may conflict
        update_values: Column values written when the row already exists
    """
    stmt = dialect_insert(db, model)

    if stmt is not None:
        stmt = stmt.values(**values).on_conflict_do_update(
            index_elements=list(conflict_columns),
            set_=update_values,
        )
        await db.execute(stmt)
        return

    try:
        async with db.begin_nested():
            await db.execute(insert(model).values(**values))
    except IntegrityError:
        conditions = [
            getattr(model, column) == values[column]
            for column in conflict_columns
        ]
        await db.execute(
            update(model)
            .where(and_(*conditions))
            .values(**update_values)
        )
