"""Sibling ordering helpers shared by the repositories."""

from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

# Rows without a position sort after every positioned sibling.
NULL_POSITION_SENTINEL = 999999

# Empty-scope results per convention: lists/tasks start at 1, notes/folders at 0.
ONE_BASED = 1
ZERO_BASED = 0


async def next_position(
    session: AsyncSession, column: Any, *scope: Any, base: int = ONE_BASED
) -> int:
    """Return ``COALESCE(MAX(column), base - 1) + 1`` over the given scope."""
    stmt = select(func.coalesce(func.max(column), base - 1)).where(*scope)
    result = await session.execute(stmt)
    return int(result.scalar_one()) + 1


def display_order(position_column: Any, created_at_column: Any, id_column: Any) -> tuple:
    """ORDER BY clause used for every sibling listing."""
    return (
        func.coalesce(position_column, NULL_POSITION_SENTINEL).asc(),
        created_at_column.asc(),
        id_column.asc(),
    )
