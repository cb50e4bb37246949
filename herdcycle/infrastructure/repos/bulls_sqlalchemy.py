from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from herdcycle.application.interfaces.repositories.bulls import BullsRepository
from herdcycle.domain.models.animal import Bull
from herdcycle.infrastructure.db.orm.bull import BullORM


class BullsSQLAlchemyRepository(BullsRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: BullORM) -> Bull:
        return Bull(
            id=orm.id,
            tenant_id=orm.tenant_id,
            number=orm.number,
            name=orm.name,
            breed=orm.breed,
            birth_date=orm.birth_date,
            notes=orm.notes,
            photo_url=orm.photo_url,
            is_insemination=orm.is_insemination,
            mother_number=orm.mother_number,
            mother_name=orm.mother_name,
            mother_breed=orm.mother_breed,
            sire_number=orm.sire_number,
            sire_name=orm.sire_name,
            sire_breed=orm.sire_breed,
            created_at=orm.created_at,
            updated_at=orm.updated_at,
            version=orm.version,
        )

    async def add(self, bull: Bull) -> Bull:
        orm = BullORM(
            id=bull.id,
            tenant_id=bull.tenant_id,
            number=bull.number,
            name=bull.name,
            breed=bull.breed,
            birth_date=bull.birth_date,
            notes=bull.notes,
            photo_url=bull.photo_url,
            is_insemination=bull.is_insemination,
            created_at=bull.created_at,
            updated_at=bull.updated_at,
            version=bull.version,
            **bull.lineage_fields(),
        )
        self.session.add(orm)
        await self.session.flush()
        return self._to_domain(orm)

    async def get(self, tenant_id: UUID, bull_id: UUID) -> Bull | None:
        stmt = select(BullORM).where(BullORM.tenant_id == tenant_id, BullORM.id == bull_id)
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def get_by_number(self, tenant_id: UUID, number: str) -> Bull | None:
        stmt = (
            select(BullORM)
            .where(BullORM.tenant_id == tenant_id, BullORM.number == number)
            .order_by(BullORM.created_at)
            .limit(1)
        )
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def names_by_ids(self, tenant_id: UUID, ids: set[UUID]) -> dict[UUID, str]:
        if not ids:
            return {}
        stmt = select(BullORM.id, BullORM.name, BullORM.number).where(
            BullORM.tenant_id == tenant_id, BullORM.id.in_(ids)
        )
        result = await self.session.execute(stmt)
        return {
            row.id: row.name or (f"#{row.number}" if row.number else "Bull") for row in result.all()
        }
