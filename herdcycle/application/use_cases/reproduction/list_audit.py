from __future__ import annotations

from uuid import UUID

from herdcycle.application.errors import NotFound
from herdcycle.application.interfaces.unit_of_work import UnitOfWork
from herdcycle.domain.models.audit_entry import AuditEntry

AUDIT_PAGE_SIZE = 50


async def execute(
    uow: UnitOfWork, tenant_id: UUID, cow_id: UUID, limit: int = AUDIT_PAGE_SIZE
) -> list[AuditEntry]:
    if await uow.cows.get(tenant_id, cow_id) is None:
        raise NotFound(f"Cow {cow_id} not found")
    return await uow.audit_log.list_for_cow(tenant_id, cow_id, limit=limit)
