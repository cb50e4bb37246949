from __future__ import annotations

from uuid import UUID

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from herdcycle.application.errors import NotFound
from herdcycle.application.interfaces.repositories.inseminations import InseminationsRepository
from herdcycle.domain.models.insemination import Insemination
from herdcycle.infrastructure.db.orm.insemination import InseminationORM


class InseminationsSQLAlchemyRepository(InseminationsRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: InseminationORM) -> Insemination:
        return Insemination(
            id=orm.id,
            tenant_id=orm.tenant_id,
            cow_id=orm.cow_id,
            service_date=orm.service_date,
            confirmed_pregnant=orm.confirmed_pregnant,
            failed=orm.failed,
            forced=orm.forced,
            notes=orm.notes,
            created_at=orm.created_at,
            updated_at=orm.updated_at,
            version=orm.version,
        )

    async def add(self, insemination: Insemination) -> Insemination:
        orm = InseminationORM(
            id=insemination.id,
            tenant_id=insemination.tenant_id,
            cow_id=insemination.cow_id,
            service_date=insemination.service_date,
            confirmed_pregnant=insemination.confirmed_pregnant,
            failed=insemination.failed,
            forced=insemination.forced,
            notes=insemination.notes,
            created_at=insemination.created_at,
            updated_at=insemination.updated_at,
            version=insemination.version,
        )
        self.session.add(orm)
        await self.session.flush()
        return self._to_domain(orm)

    async def update(self, insemination: Insemination) -> Insemination:
        orm = await self.session.get(InseminationORM, insemination.id)
        if not orm:
            raise NotFound(f"Insemination {insemination.id} not found")
        orm.service_date = insemination.service_date
        orm.confirmed_pregnant = insemination.confirmed_pregnant
        orm.failed = insemination.failed
        orm.forced = insemination.forced
        orm.notes = insemination.notes
        orm.updated_at = insemination.updated_at
        orm.version = insemination.version
        await self.session.flush()
        return self._to_domain(orm)

    async def delete(self, insemination: Insemination) -> None:
        orm = await self.session.get(InseminationORM, insemination.id)
        if orm is None or orm.tenant_id != insemination.tenant_id:
            raise NotFound(f"Insemination {insemination.id} not found")
        await self.session.delete(orm)
        await self.session.flush()

    async def get(
        self, tenant_id: UUID, cow_id: UUID, insemination_id: UUID
    ) -> Insemination | None:
        stmt = select(InseminationORM).where(
            InseminationORM.tenant_id == tenant_id,
            InseminationORM.cow_id == cow_id,
            InseminationORM.id == insemination_id,
        )
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def list(self, tenant_id: UUID, cow_id: UUID | None = None) -> list[Insemination]:
        stmt = select(InseminationORM).where(InseminationORM.tenant_id == tenant_id)
        if cow_id is not None:
            stmt = stmt.where(InseminationORM.cow_id == cow_id)
        stmt = stmt.order_by(desc(InseminationORM.service_date), desc(InseminationORM.created_at))
        result = await self.session.execute(stmt)
        return [self._to_domain(row) for row in result.scalars().all()]
