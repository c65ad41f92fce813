"""Base repository shared by the feature repositories."""
from abc import ABC
from typing import Any, Generic, List, Optional, Type, TypeVar, Tuple

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from api.shared.entities.base import BaseEntity

T = TypeVar("T", bound=BaseEntity)


class BaseRepository(ABC, Generic[T]):
    """Base repository with the common read and insert operations."""

    model: Type[T]

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, entity: T) -> T:
        """Create new entity."""
        self.session.add(entity)
        await self.session.flush()
        await self.session.refresh(entity)
        return entity

    async def get_by_id(self, entity_id: Any) -> Optional[T]:
        """Get entity by ID."""
        stmt = select(self.model).where(self.model.id == entity_id)  # type: ignore[attr-defined]
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list(
        self,
        offset: int = 0,
        limit: int = 100,
        order_by: Optional[str] = None,
    ) -> Tuple[List[T], int]:
        """List entities with pagination."""
        count_stmt = select(func.count()).select_from(self.model)
        stmt = select(self.model)

        if order_by:
            if order_by.startswith("-"):
                field_name = order_by[1:]
                if hasattr(self.model, field_name):
                    stmt = stmt.order_by(getattr(self.model, field_name).desc())
            elif hasattr(self.model, order_by):
                stmt = stmt.order_by(getattr(self.model, order_by).asc())

        stmt = stmt.offset(offset).limit(limit)

        result = await self.session.execute(stmt)
        count_result = await self.session.execute(count_stmt)

        # count_result.scalar() may be None, default to 0
        total = count_result.scalar() or 0
        return list(result.scalars().all()), int(total)
