"""Base repository with common CRUD operations."""

from datetime import datetime
from typing import Any, Generic, TypeVar
from uuid import UUID

from sqlalchemy import and_, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel, select

from src.tracker.schemas.pagination import decode_cursor, encode_cursor

ModelType = TypeVar("ModelType", bound=SQLModel)


class BaseRepository(Generic[ModelType]):
    """Base repository providing common database operations.

    Repositories handle data access only. Transaction control (commit)
    is done in the service layer.
    """

    model: type[ModelType]

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, id: UUID) -> ModelType | None:
        """Get a record by its primary key."""
        result = await self.session.execute(
            select(self.model).where(self.model.id == id)  # type: ignore[attr-defined]
        )
        return result.scalar_one_or_none()

    def add(self, entity: ModelType) -> None:
        """Add entity to session (no flush/commit)."""
        self.session.add(entity)

    async def flush(self) -> None:
        """Send pending changes so later statements in the transaction see them."""
        await self.session.flush()

    async def paginate(
        self,
        query: Any,  # SelectOfScalar - SQLModel query
        cursor: str | None,
        limit: int,
        cursor_field: Any,
        tiebreak_field: Any,
    ) -> tuple[list[ModelType], str | None, bool]:
        """Execute keyset pagination on a query, newest first.

        Rows are ordered by (cursor_field, tiebreak_field) descending, so
        rows sharing a cursor_field value are split across pages without
        being skipped.

        Args:
            query: The base query to paginate
            cursor: Optional cursor from previous page (base64 of "<iso timestamp>|<id>")
            limit: Maximum number of items to return
            cursor_field: Datetime column the cursor walks (e.g., created_at)
            tiebreak_field: Unique column ordering rows with equal cursor_field (e.g., id)

        Returns:
            Tuple of (items, next_cursor, has_more)
        """
        if cursor:
            try:
                raw_value, _, raw_id = decode_cursor(cursor).partition("|")
                boundary = datetime.fromisoformat(raw_value)
                last_id = UUID(raw_id)
            except ValueError:
                # Invalid cursor - start from the beginning
                pass
            else:
                query = query.where(
                    or_(
                        cursor_field < boundary,
                        and_(cursor_field == boundary, tiebreak_field < last_id),
                    )
                )

        query = query.order_by(cursor_field.desc(), tiebreak_field.desc()).limit(limit + 1)
        result = await self.session.execute(query)
        items = list(result.scalars().all())

        has_more = len(items) > limit
        if has_more:
            items = items[:limit]

        next_cursor = None
        if has_more and items:
            last = items[-1]
            value = getattr(last, cursor_field.key)
            if isinstance(value, datetime):
                last_id = getattr(last, tiebreak_field.key)
                next_cursor = encode_cursor(f"{value.isoformat()}|{last_id}")

        return items, next_cursor, has_more
