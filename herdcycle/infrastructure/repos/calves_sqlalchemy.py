from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from herdcycle.application.errors import NotFound
from herdcycle.application.interfaces.repositories.calves import CalvesRepository
from herdcycle.domain.models.animal import AdultType, Calf, CalfGender, CalfStatus
from herdcycle.infrastructure.db.orm.calf import CalfORM


class CalvesSQLAlchemyRepository(CalvesRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: CalfORM) -> Calf:
        return Calf(
            id=orm.id,
            tenant_id=orm.tenant_id,
            name=orm.name,
            breed=orm.breed,
            birth_date=orm.birth_date,
            gender=CalfGender(orm.gender) if orm.gender else None,
            status=CalfStatus(orm.status),
            notes=orm.notes,
            photo_url=orm.photo_url,
            mother_number=orm.mother_number,
            mother_name=orm.mother_name,
            mother_breed=orm.mother_breed,
            sire_number=orm.sire_number,
            sire_name=orm.sire_name,
            sire_breed=orm.sire_breed,
            graduated=orm.graduated,
            graduated_at=orm.graduated_at,
            adult_type=AdultType(orm.adult_type) if orm.adult_type else None,
            adult_id=orm.adult_id,
            created_at=orm.created_at,
            updated_at=orm.updated_at,
            version=orm.version,
        )

    async def add(self, calf: Calf) -> Calf:
        orm = CalfORM(
            id=calf.id,
            tenant_id=calf.tenant_id,
            name=calf.name,
            breed=calf.breed,
            birth_date=calf.birth_date,
            gender=calf.gender.value if calf.gender else None,
            status=calf.status.value,
            notes=calf.notes,
            photo_url=calf.photo_url,
            graduated=calf.graduated,
            graduated_at=calf.graduated_at,
            adult_type=calf.adult_type.value if calf.adult_type else None,
            adult_id=calf.adult_id,
            created_at=calf.created_at,
            updated_at=calf.updated_at,
            version=calf.version,
            **calf.lineage_fields(),
        )
        self.session.add(orm)
        await self.session.flush()
        return self._to_domain(orm)

    async def update(self, calf: Calf) -> Calf:
        orm = await self.session.get(CalfORM, calf.id)
        if orm is None or orm.tenant_id != calf.tenant_id:
            raise NotFound(f"Calf {calf.id} not found")
        orm.name = calf.name
        orm.breed = calf.breed
        orm.birth_date = calf.birth_date
        orm.gender = calf.gender.value if calf.gender else None
        orm.status = calf.status.value
        orm.notes = calf.notes
        orm.photo_url = calf.photo_url
        for key, value in calf.lineage_fields().items():
            setattr(orm, key, value)
        orm.graduated = calf.graduated
        orm.graduated_at = calf.graduated_at
        orm.adult_type = calf.adult_type.value if calf.adult_type else None
        orm.adult_id = calf.adult_id
        orm.updated_at = calf.updated_at
        orm.version = calf.version
        await self.session.flush()
        return self._to_domain(orm)

    async def get(self, tenant_id: UUID, calf_id: UUID) -> Calf | None:
        stmt = select(CalfORM).where(CalfORM.tenant_id == tenant_id, CalfORM.id == calf_id)
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def list(
        self,
        tenant_id: UUID,
        *,
        alive_only: bool = False,
        include_graduated: bool = True,
    ) -> list[Calf]:
        stmt = select(CalfORM).where(CalfORM.tenant_id == tenant_id)
        if alive_only:
            stmt = stmt.where(CalfORM.status == CalfStatus.ALIVE.value)
        if not include_graduated:
            stmt = stmt.where(CalfORM.graduated.is_(False))
        result = await self.session.execute(stmt.order_by(CalfORM.birth_date))
        return [self._to_domain(row) for row in result.scalars().all()]

    async def names_by_ids(self, tenant_id: UUID, ids: set[UUID]) -> dict[UUID, str]:
        if not ids:
            return {}
        stmt = select(CalfORM.id, CalfORM.name).where(
            CalfORM.tenant_id == tenant_id, CalfORM.id.in_(ids)
        )
        result = await self.session.execute(stmt)
        return {row.id: row.name or "Calf" for row in result.all()}

    async def tenants_with_pending_graduation(self) -> list[UUID]:
        stmt = (
            select(CalfORM.tenant_id)
            .where(CalfORM.graduated.is_(False), CalfORM.status == CalfStatus.ALIVE.value)
            .distinct()
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
