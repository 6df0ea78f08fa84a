"""Base repositories: generic CRUD plus soft-delete, recycle bin and paged listing."""

from typing import Any, Generic, TypeVar

from sqlalchemy import Select, func, inspect as sa_inspect, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import object_session

from cms_admin.application.dtos.paging import ListQuery
from cms_admin.infrastructure.persistence.database import Base
from cms_admin.infrastructure.persistence.models.mixins import AuditedModel
from cms_admin.shared.utils.datetime import utc_now


ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Generic CRUD over one mapped model.

    Writes flush but never commit; the session dependency owns the transaction.
    """

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    def query(self) -> Select[tuple[ModelType]]:
        """Return a SELECT over the model for callers to refine."""
        return select(self.model)

    async def get_entity_by_id(self, entity_id: str) -> ModelType | None:
        """Return the ORM entity by primary key, or None."""
        model: Any = self.model
        result = await self.db.execute(self.query().where(model.id == entity_id))
        return result.scalar_one_or_none()

    async def add(self, obj: ModelType) -> ModelType:
        """Persist a new entity and reload server defaults."""
        self.db.add(obj)
        await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def update(self, obj: ModelType) -> ModelType:
        """Flush changes to an entity (merging it first if detached)."""
        mapper = sa_inspect(self.model)
        for col in mapper.primary_key:
            if getattr(obj, col.key) is None:
                raise ValueError(
                    f"Cannot update: primary key '{col.key}' is missing on "
                    f"{self.model.__name__} instance."
                )
        if object_session(obj) is not self.db.sync_session:
            obj = await self.db.merge(obj)
        await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def delete(self, obj: ModelType) -> None:
        """Physically delete the entity. Join rows cascade in the database."""
        await self.db.delete(obj)
        await self.db.flush()

    async def save_changes(self) -> None:
        """Commit the session. Request handlers rely on get_db_transactional instead."""
        await self.db.commit()


AuditedModelType = TypeVar("AuditedModelType", bound=AuditedModel)


class SoftDeletableRepository(BaseRepository[AuditedModelType]):
    """Repository for entities with is_deleted plus modified_at/modified_by_user_id.

    Subclasses declare _search_columns (substring match targets) and
    _sort_columns (lower-case key -> column). The 'name' key is the default sort.
    """

    _default_sort = "name"

    def _search_columns(self) -> list[Any]:
        model: Any = self.model
        return [model.name, model.display_name]

    def _sort_columns(self) -> dict[str, Any]:
        model: Any = self.model
        return {"name": model.name}

    def _not_deleted(self) -> Select[tuple[AuditedModelType]]:
        model: Any = self.model
        return self.query().where(model.is_deleted.is_(False))

    async def list_deleted(self) -> list[AuditedModelType]:
        """Return soft-deleted entities (recycle bin), most recently deleted first."""
        model: Any = self.model
        result = await self.db.execute(
            self.query()
            .where(model.is_deleted.is_(True))
            .order_by(model.modified_at.desc(), model.name)
        )
        return list(result.scalars().all())

    async def page(self, params: ListQuery) -> tuple[int, list[AuditedModelType]]:
        """Filter non-deleted rows, sort, and slice. Returns (total_count, page).

        total_count counts all matching rows regardless of skip/take.
        """
        model: Any = self.model
        stmt = self._not_deleted()
        if params.search:
            stmt = stmt.where(
                or_(
                    *(
                        col.icontains(params.search, autoescape=True)
                        for col in self._search_columns()
                    )
                )
            )
        total = await self.db.scalar(
            select(func.count()).select_from(stmt.order_by(None).subquery())
        )
        columns = self._sort_columns()
        sort_col = columns.get(params.sort_column or "", columns[self._default_sort])
        ordered = sort_col.desc() if params.descending else sort_col.asc()
        # id keeps ties stable across pages.
        stmt = stmt.order_by(ordered, model.id).offset(params.skip).limit(params.take)
        result = await self.db.execute(stmt)
        return int(total or 0), list(result.scalars().all())

    async def mark_deleted(self, obj: AuditedModelType, user_id: str) -> AuditedModelType:
        """Set is_deleted and stamp modified_at/modified_by_user_id."""
        obj.is_deleted = True
        self._touch(obj, user_id)
        return await self.update(obj)

    async def mark_restored(self, obj: AuditedModelType, user_id: str) -> AuditedModelType:
        """Clear is_deleted and stamp modified_at/modified_by_user_id."""
        obj.is_deleted = False
        self._touch(obj, user_id)
        return await self.update(obj)

    @staticmethod
    def _touch(obj: AuditedModelType, user_id: str | None) -> None:
        obj.modified_at = utc_now()
        obj.modified_by_user_id = user_id
