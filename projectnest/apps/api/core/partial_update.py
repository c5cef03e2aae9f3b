"""Sparse field updates.

Update requests are pydantic models whose fields all default to ``None``.
Whether a field was sent is read from ``model_fields_set``, which gives three
states per field: absent (not in the set), explicit null (in the set with
value ``None``) and a value. Only present fields become column assignments.
"""

import enum
from datetime import datetime
from typing import Any, Iterable, Optional

from pydantic import BaseModel
from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import NoFieldsToUpdateError, ValidationError


def present_fields(request: BaseModel) -> dict[str, Any]:
    """Return the fields the caller actually sent, explicit nulls included."""
    return {name: getattr(request, name) for name in request.model_fields_set}


class UpdateBuilder:
    """Collects column assignments for a single-row UPDATE."""

    def __init__(self, resource: str, nullable: Iterable[str] = ()):
        self.resource = resource
        self._nullable = set(nullable)
        self._values: dict[str, Any] = {}

    def set(self, column: str, value: Any) -> "UpdateBuilder":
        """Stage a caller-supplied assignment."""
        if value is None and column not in self._nullable:
            raise ValidationError(column, "cannot be null")
        if isinstance(value, enum.Enum):
            value = value.value
        self._values[column] = value
        return self

    def set_side_field(self, column: str, value: Any) -> "UpdateBuilder":
        """Stage an assignment derived from another field."""
        self._values[column] = value
        return self

    def apply(self, fields: dict[str, Any], columns: Iterable[str]) -> "UpdateBuilder":
        """Stage every present field that maps 1:1 onto a column."""
        for column in columns:
            if column in fields:
                self.set(column, fields[column])
        return self

    def is_empty(self) -> bool:
        return not self._values

    def build(
        self, acting_user_id: Optional[int] = None, now: Optional[datetime] = None
    ) -> dict[str, Any]:
        """Return the final assignment map, stamped with ``updated_at``."""
        if self.is_empty():
            raise NoFieldsToUpdateError(self.resource)

        values = dict(self._values)
        values["updated_at"] = now or datetime.utcnow()
        if acting_user_id is not None:
            values["updated_by"] = acting_user_id
        return values


async def execute_update(
    session: AsyncSession, model: Any, *criteria: Any, values: dict[str, Any]
) -> int:
    """Run ``UPDATE model SET values WHERE criteria`` and return the row count."""
    stmt = update(model).where(*criteria).values(**values)
    result = await session.execute(stmt)
    return result.rowcount
