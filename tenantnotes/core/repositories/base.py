from __future__ import annotations

from typing import Generic, TypeVar
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Select

from tenantnotes.models.base import TenantScopedBase

ModelT = TypeVar("ModelT", bound=TenantScopedBase)

IMMUTABLE_FIELDS = frozenset({"id", "tenant_id", "created_at"})


class TenantContextMissingError(RuntimeError):
    pass


class ScopedRepository(Generic[ModelT]):
    """CRUD over one model, with every statement filtered to a single tenant."""

    def __init__(self, session: AsyncSession, model: type[ModelT], tenant_id: UUID | None) -> None:
        if tenant_id is None:
            raise TenantContextMissingError(
                f"{type(self).__name__} requires a tenant id to scope its queries"
            )
        self.session = session
        self.model = model
        self.tenant_id = tenant_id

    def _scope(self, stmt: Select) -> Select:
        return stmt.where(self.model.tenant_id == self.tenant_id)

    def _scoped_select(self) -> Select[tuple[ModelT]]:
        return self._scope(select(self.model))

    def _scoped_delete(self):  # noqa: ANN202
        return delete(self.model).where(self.model.tenant_id == self.tenant_id)

    def _create_values(self, values: dict[str, object]) -> dict[str, object]:
        payload = dict(values)
        payload["tenant_id"] = self.tenant_id
        return payload

    async def create(self, **values: object) -> ModelT:
        instance = self.model(**self._create_values(values))
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def get(self, entity_id: UUID) -> ModelT | None:
        result = await self.session.execute(
            self._scoped_select().where(self.model.id == entity_id)
        )
        return result.scalar_one_or_none()

    async def list(self, *, limit: int = 100, offset: int = 0) -> list[ModelT]:
        result = await self.session.execute(
            self._scoped_select()
            .order_by(self.model.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        return list(result.scalars().all())

    async def count(self) -> int:
        total = await self.session.scalar(self._scope(select(func.count(self.model.id))))
        return int(total or 0)

    async def update(self, entity_id: UUID, **values: object) -> ModelT | None:
        instance = await self.get(entity_id)
        if instance is None:
            return None

        for field, value in values.items():
            if field in IMMUTABLE_FIELDS:
                continue
            setattr(instance, field, value)

        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def delete(self, entity_id: UUID) -> bool:
        result = await self.session.execute(
            self._scoped_delete().where(self.model.id == entity_id)
        )
        return (result.rowcount or 0) > 0
