"""Base repository: generic get/create/delete with per-operation commit."""

from typing import Any, Generic, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.infrastructure.persistence.database import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Base repository with get_entity, create, save and delete_entity.

    Writes commit immediately: callers invalidate caches right after a
    write returns and must only ever see committed state.
    """

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    async def get_entity(self, entity_id: Any) -> ModelType | None:
        """Return a single record by primary key, or None."""
        return await self.db.get(self.model, entity_id)

    async def create(self, obj: ModelType) -> ModelType:
        """Persist a new record and commit."""
        self.db.add(obj)
        await self.db.flush()
        await self.db.commit()
        return obj

    async def save(self, obj: ModelType) -> ModelType:
        """Flush pending changes on an attached record and commit."""
        await self.db.flush()
        await self.db.commit()
        return obj

    async def delete_entity(self, obj: ModelType) -> None:
        """Delete the record and commit."""
        await self.db.delete(obj)
        await self.db.flush()
        await self.db.commit()
