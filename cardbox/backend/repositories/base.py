"""
Generic repository over one mapped model with an integer `id`.

Reads return model instances; writes flush but never commit, so the
request's session decides the transaction outcome.
"""

from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from cardbox.backend.core.exceptions import NotFoundError
from cardbox.backend.models.base import Base

ModelType = TypeVar("ModelType", bound=Base)

# Largest value an INTEGER primary key can hold
MAX_ROW_ID = 2**63 - 1


class BaseRepository(Generic[ModelType]):
    """Subclasses set `model`."""

    model: type[ModelType]

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_by_id_or_none(self, id: int) -> ModelType | None:
        # Larger ids cannot be bound as INTEGER and cannot exist
        if id > MAX_ROW_ID:
            return None
        result = await self.session.execute(select(self.model).where(self.model.id == id))
        return result.scalar_one_or_none()

    async def get_by_id(self, id: int) -> ModelType:
        """Raises NotFoundError for an unknown id."""
        instance = await self.get_by_id_or_none(id)
        if instance is None:
            raise NotFoundError(f"{self.model.__name__} {id} not found", resource_id=id)
        return instance

    async def create(self, **fields: Any) -> ModelType:
        instance = self.model(**fields)
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def update(self, id: int, **fields: Any) -> ModelType:
        """Write only the given columns. Raises NotFoundError for an unknown id."""
        instance = await self.get_by_id(id)
        for column, value in fields.items():
            setattr(instance, column, value)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def delete(self, id: int) -> None:
        """Hard delete. Raises NotFoundError for an unknown id."""
        await self.session.delete(await self.get_by_id(id))
        await self.session.flush()
