from __future__ import annotations

from typing import Protocol
from uuid import UUID

from herdcycle.domain.models.audit_entry import AuditEntry


class AuditLogRepository(Protocol):
    async def add(self, entry: AuditEntry) -> AuditEntry: ...

    async def get(self, tenant_id: UUID, entry_id: UUID) -> AuditEntry | None: ...

    async def list_for_cow(self, tenant_id: UUID, cow_id: UUID, limit: int = 50) -> list[AuditEntry]: ...
