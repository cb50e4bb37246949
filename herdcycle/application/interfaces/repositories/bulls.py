from __future__ import annotations

from typing import Protocol
from uuid import UUID

from herdcycle.domain.models.animal import Bull


class BullsRepository(Protocol):
    async def add(self, bull: Bull) -> Bull: ...

    async def get(self, tenant_id: UUID, bull_id: UUID) -> Bull | None: ...

    async def get_by_number(self, tenant_id: UUID, number: str) -> Bull | None: ...

    async def names_by_ids(self, tenant_id: UUID, ids: set[UUID]) -> dict[UUID, str]: ...
