from __future__ import annotations

from uuid import UUID

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from herdcycle.application.interfaces.repositories.audit_log import AuditLogRepository
from herdcycle.domain.models.audit_entry import AuditEntry
from herdcycle.infrastructure.db.orm.audit_entry import AuditEntryORM


class AuditLogSQLAlchemyRepository(AuditLogRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: AuditEntryORM) -> AuditEntry:
        return AuditEntry(
            id=orm.id,
            tenant_id=orm.tenant_id,
            cow_id=orm.cow_id,
            action=orm.action,
            actor=orm.actor,
            actor_user_id=orm.actor_user_id,
            insemination_id=orm.insemination_id,
            payload=dict(orm.payload or {}),
            at=orm.at,
        )

    async def add(self, entry: AuditEntry) -> AuditEntry:
        orm = AuditEntryORM(
            id=entry.id,
            tenant_id=entry.tenant_id,
            cow_id=entry.cow_id,
            action=entry.action,
            actor=entry.actor,
            actor_user_id=entry.actor_user_id,
            insemination_id=entry.insemination_id,
            payload=entry.payload,
            at=entry.at,
        )
        self.session.add(orm)
        await self.session.flush()
        return self._to_domain(orm)

    async def get(self, tenant_id: UUID, entry_id: UUID) -> AuditEntry | None:
        stmt = select(AuditEntryORM).where(
            AuditEntryORM.tenant_id == tenant_id, AuditEntryORM.id == entry_id
        )
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def list_for_cow(
        self, tenant_id: UUID, cow_id: UUID, limit: int = 50
    ) -> list[AuditEntry]:
        stmt = (
            select(AuditEntryORM)
            .where(AuditEntryORM.tenant_id == tenant_id, AuditEntryORM.cow_id == cow_id)
            .order_by(desc(AuditEntryORM.at))
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [self._to_domain(row) for row in result.scalars().all()]
