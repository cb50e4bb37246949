from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from herdcycle.application.errors import NotFound
from herdcycle.application.interfaces.repositories.confirmations import ConfirmationsRepository
from herdcycle.domain.models.confirmation import Confirmation
from herdcycle.infrastructure.db.orm.confirmation import ConfirmationORM


class ConfirmationsSQLAlchemyRepository(ConfirmationsRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: ConfirmationORM) -> Confirmation:
        return Confirmation(
            id=orm.id,
            tenant_id=orm.tenant_id,
            entity_type=orm.entity_type,
            entity_id=orm.entity_id,
            type=orm.type,
            when=orm.when,
            alert_on=orm.alert_on,
            note=orm.note,
            undone=orm.undone,
            created_at=orm.created_at,
            updated_at=orm.updated_at,
        )

    async def add(self, confirmation: Confirmation) -> Confirmation:
        orm = ConfirmationORM(
            id=confirmation.id,
            tenant_id=confirmation.tenant_id,
            entity_type=confirmation.entity_type,
            entity_id=confirmation.entity_id,
            type=confirmation.type,
            when=confirmation.when,
            alert_on=confirmation.alert_on,
            note=confirmation.note,
            undone=confirmation.undone,
            created_at=confirmation.created_at,
            updated_at=confirmation.updated_at,
        )
        self.session.add(orm)
        await self.session.flush()
        return self._to_domain(orm)

    async def update(self, confirmation: Confirmation) -> Confirmation:
        orm = await self.session.get(ConfirmationORM, confirmation.id)
        if orm is None or orm.tenant_id != confirmation.tenant_id:
            raise NotFound(f"Confirmation {confirmation.id} not found")
        orm.note = confirmation.note
        orm.undone = confirmation.undone
        orm.updated_at = confirmation.updated_at
        await self.session.flush()
        return self._to_domain(orm)

    async def get(self, tenant_id: UUID, confirmation_id: UUID) -> Confirmation | None:
        stmt = select(ConfirmationORM).where(
            ConfirmationORM.tenant_id == tenant_id, ConfirmationORM.id == confirmation_id
        )
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def list_active(self, tenant_id: UUID) -> list[Confirmation]:
        stmt = select(ConfirmationORM).where(
            ConfirmationORM.tenant_id == tenant_id, ConfirmationORM.undone.is_(False)
        )
        result = await self.session.execute(stmt)
        return [self._to_domain(row) for row in result.scalars().all()]

    async def list_for_entity(
        self, tenant_id: UUID, entity_type: str, entity_id: UUID
    ) -> list[Confirmation]:
        stmt = (
            select(ConfirmationORM)
            .where(
                ConfirmationORM.tenant_id == tenant_id,
                ConfirmationORM.entity_type == entity_type,
                ConfirmationORM.entity_id == entity_id,
            )
            .order_by(desc(ConfirmationORM.created_at))
        )
        result = await self.session.execute(stmt)
        return [self._to_domain(row) for row in result.scalars().all()]

    async def list_active_between(
        self, tenant_id: UUID, start: datetime, end: datetime
    ) -> list[Confirmation]:
        stmt = (
            select(ConfirmationORM)
            .where(
                ConfirmationORM.tenant_id == tenant_id,
                ConfirmationORM.undone.is_(False),
                ConfirmationORM.when >= start,
                ConfirmationORM.when <= end,
            )
            .order_by(ConfirmationORM.when)
        )
        result = await self.session.execute(stmt)
        return [self._to_domain(row) for row in result.scalars().all()]
