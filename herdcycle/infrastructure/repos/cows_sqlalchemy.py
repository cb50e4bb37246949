from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from herdcycle.application.errors import NotFound
from herdcycle.application.interfaces.repositories.cows import CowsRepository
from herdcycle.domain.models.animal import Cow
from herdcycle.infrastructure.db.orm.cow import CowORM


class CowsSQLAlchemyRepository(CowsRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: CowORM) -> Cow:
        return Cow(
            id=orm.id,
            tenant_id=orm.tenant_id,
            number=orm.number,
            name=orm.name,
            breed=orm.breed,
            birth_date=orm.birth_date,
            last_calving=orm.last_calving,
            notes=orm.notes,
            photo_url=orm.photo_url,
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

    async def add(self, cow: Cow) -> Cow:
        orm = CowORM(
            id=cow.id,
            tenant_id=cow.tenant_id,
            number=cow.number,
            name=cow.name,
            breed=cow.breed,
            birth_date=cow.birth_date,
            last_calving=cow.last_calving,
            notes=cow.notes,
            photo_url=cow.photo_url,
            created_at=cow.created_at,
            updated_at=cow.updated_at,
            version=cow.version,
            **cow.lineage_fields(),
        )
        self.session.add(orm)
        await self.session.flush()
        return self._to_domain(orm)

    async def update(self, cow: Cow) -> Cow:
        orm = await self.session.get(CowORM, cow.id)
        if orm is None or orm.tenant_id != cow.tenant_id:
            raise NotFound(f"Cow {cow.id} not found")
        orm.number = cow.number
        orm.name = cow.name
        orm.breed = cow.breed
        orm.birth_date = cow.birth_date
        orm.last_calving = cow.last_calving
        orm.notes = cow.notes
        orm.photo_url = cow.photo_url
        for key, value in cow.lineage_fields().items():
            setattr(orm, key, value)
        orm.updated_at = cow.updated_at
        orm.version = cow.version
        await self.session.flush()
        return self._to_domain(orm)

    async def get(self, tenant_id: UUID, cow_id: UUID) -> Cow | None:
        stmt = select(CowORM).where(CowORM.tenant_id == tenant_id, CowORM.id == cow_id)
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def get_by_number(self, tenant_id: UUID, number: str) -> Cow | None:
        stmt = (
            select(CowORM)
            .where(CowORM.tenant_id == tenant_id, CowORM.number == number)
            .order_by(CowORM.created_at)
            .limit(1)
        )
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def list(self, tenant_id: UUID) -> list[Cow]:
        stmt = select(CowORM).where(CowORM.tenant_id == tenant_id).order_by(CowORM.created_at)
        result = await self.session.execute(stmt)
        return [self._to_domain(row) for row in result.scalars().all()]

    async def names_by_ids(self, tenant_id: UUID, ids: set[UUID]) -> dict[UUID, str]:
        if not ids:
            return {}
        stmt = select(CowORM.id, CowORM.name, CowORM.number).where(
            CowORM.tenant_id == tenant_id, CowORM.id.in_(ids)
        )
        result = await self.session.execute(stmt)
        return {
            row.id: row.name or (f"#{row.number}" if row.number else "Cow") for row in result.all()
        }
